"""
Annual compliance cost estimation.

Base costs per obligation cover government filing fees, professional
(CA/consultant) fees, software and staff time. Professional fees and
time scale with business size; fees and software do not.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from compliance_calendar.catalog import RuleCatalog
from compliance_calendar.profile import BusinessProfile


@dataclass(frozen=True)
class BaseCost:
    filing_fee: int
    professional_fee: int
    software: int
    time_value: int


@dataclass
class CostBreakdown:
    """Estimated annual cost of one obligation (INR)."""

    obligation_id: str
    obligation_name: str
    filing_fee: Decimal
    professional_fee: Decimal
    software: Decimal
    time_value: Decimal
    total: Decimal


_BASE_COSTS: dict[str, BaseCost] = {
    "gst": BaseCost(0, 12000, 6000, 2000),
    "epf": BaseCost(0, 6000, 0, 3000),
    "esi": BaseCost(0, 4000, 0, 2000),
    "professional-tax": BaseCost(0, 2000, 0, 1000),
    "tds": BaseCost(0, 5000, 2000, 1000),
    "tax-audit": BaseCost(0, 25000, 5000, 0),
    "income-tax": BaseCost(0, 8000, 3000, 2000),
    "msme-annual-return": BaseCost(0, 1500, 0, 500),
    "msme-form-1": BaseCost(0, 1000, 0, 0),
    "shops-establishments": BaseCost(0, 2000, 0, 500),
}

_DEFAULT_BASE_COST = BaseCost(0, 2000, 0, 1000)


def size_multiplier(employee_count: int) -> Decimal:
    """
    Scaling factor for size-dependent costs.

    - < 10 employees  -> 0.8
    - 10-49           -> 1.0
    - 50-99           -> 1.3
    - 100+            -> 1.5
    """
    if employee_count < 10:
        return Decimal("0.8")
    elif employee_count < 50:
        return Decimal("1.0")
    elif employee_count < 100:
        return Decimal("1.3")
    else:
        return Decimal("1.5")


def _round_rupees(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


class CostEstimator:
    """Estimates per-obligation and total annual compliance cost."""

    def __init__(self, catalog: Optional[RuleCatalog] = None) -> None:
        self.catalog = catalog

    def _name(self, obligation_id: str) -> str:
        if self.catalog is None:
            return obligation_id
        return self.catalog.name_for(obligation_id)

    def breakdown(
        self, obligation_ids: list[str], profile: BusinessProfile
    ) -> list[CostBreakdown]:
        multiplier = size_multiplier(profile.employee_count)
        results: list[CostBreakdown] = []

        for oid in obligation_ids:
            base = _BASE_COSTS.get(oid, _DEFAULT_BASE_COST)
            professional = Decimal(base.professional_fee) * multiplier
            time_value = Decimal(base.time_value) * multiplier
            total = (
                Decimal(base.filing_fee)
                + professional
                + Decimal(base.software)
                + time_value
            )
            results.append(
                CostBreakdown(
                    obligation_id=oid,
                    obligation_name=self._name(oid),
                    filing_fee=Decimal(base.filing_fee),
                    professional_fee=_round_rupees(professional),
                    software=Decimal(base.software),
                    time_value=_round_rupees(time_value),
                    total=_round_rupees(total),
                )
            )

        return results

    def total_annual_cost(
        self, obligation_ids: list[str], profile: BusinessProfile
    ) -> Decimal:
        return sum(
            (b.total for b in self.breakdown(obligation_ids, profile)),
            Decimal("0"),
        )
