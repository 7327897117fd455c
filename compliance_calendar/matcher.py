"""
Compliance matcher.

Decides which obligations apply to a business profile. Every obligation
has its own independent predicate; the result is simply the set of ids
whose predicate holds. All threshold comparisons are inclusive.
"""

from __future__ import annotations

import logging
from typing import Iterable

from compliance_calendar.profile import BusinessProfile, BusinessType

logger = logging.getLogger(__name__)


# States levying professional tax
PROFESSIONAL_TAX_STATES: tuple[str, ...] = (
    "Maharashtra",
    "Karnataka",
    "West Bengal",
    "Tamil Nadu",
    "Gujarat",
    "Andhra Pradesh",
    "Telangana",
    "Madhya Pradesh",
    "Kerala",
    "Assam",
    "Odisha",
    "Punjab",
    "Tripura",
    "Meghalaya",
    "Chhattisgarh",
    "Sikkim",
    "Jharkhand",
)

# GST registration: Rs 20L for services, Rs 40L otherwise
GST_THRESHOLD_SERVICE = 2_000_000
GST_THRESHOLD_DEFAULT = 4_000_000

# Tax audit: Rs 50L for professionals, Rs 1Cr otherwise
TAX_AUDIT_THRESHOLD_PROFESSIONAL = 5_000_000
TAX_AUDIT_THRESHOLD_DEFAULT = 10_000_000

EPF_EMPLOYEE_THRESHOLD = 20
ESI_EMPLOYEE_THRESHOLD = 10


def meets_threshold(value: int, threshold: int) -> bool:
    return value >= threshold


def state_in(state: str, states: Iterable[str]) -> bool:
    """Case-insensitive membership test for a region name."""
    needle = state.strip().lower()
    return any(s.lower() == needle for s in states)


def gst_threshold(business_type: BusinessType) -> int:
    if business_type == BusinessType.SERVICE:
        return GST_THRESHOLD_SERVICE
    return GST_THRESHOLD_DEFAULT


def tax_audit_threshold(business_type: BusinessType) -> int:
    if business_type == BusinessType.PROFESSIONAL:
        return TAX_AUDIT_THRESHOLD_PROFESSIONAL
    return TAX_AUDIT_THRESHOLD_DEFAULT


class ComplianceMatcher:
    """
    Maps a BusinessProfile to the ids of obligations that apply to it.

    The predicate table is fixed; ids are returned in table order.
    """

    def __init__(self) -> None:
        self._predicates = [
            ("gst", lambda p: meets_threshold(
                p.turnover_value, gst_threshold(p.business_type)
            )),
            ("epf", lambda p: meets_threshold(
                p.employee_count, EPF_EMPLOYEE_THRESHOLD
            )),
            ("esi", lambda p: meets_threshold(
                p.employee_count, ESI_EMPLOYEE_THRESHOLD
            )),
            ("professional-tax", lambda p: state_in(
                p.state, PROFESSIONAL_TAX_STATES
            )),
            ("tds", lambda p: True),
            ("msme-annual-return", lambda p: p.msme_registered),
            ("msme-form-1", lambda p: p.owes_payment_to_msme),
            ("income-tax", lambda p: True),
            ("tax-audit", lambda p: meets_threshold(
                p.turnover_value, tax_audit_threshold(p.business_type)
            )),
            ("shops-establishments", lambda p: True),
        ]

    @property
    def obligation_ids(self) -> list[str]:
        """Every id the matcher can emit."""
        return [obligation_id for obligation_id, _ in self._predicates]

    def match(self, profile: BusinessProfile) -> list[str]:
        """Return the ids of all obligations applicable to ``profile``."""
        matched = [
            obligation_id
            for obligation_id, applies in self._predicates
            if applies(profile)
        ]
        logger.debug(
            "Matched %d obligations for %s business in %s: %s",
            len(matched),
            profile.business_type.value,
            profile.state,
            ", ".join(matched),
        )
        return matched
