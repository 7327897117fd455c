"""
Rule-based compliance risk assessment.

Scores a business on the number of obligations it carries, how crowded
its near-term calendar is, exposure to high-penalty regimes and a few
profile traits. The score maps to an overall Low/Medium/High level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from compliance_calendar.calendar_generator import CalendarEntry
from compliance_calendar.profile import BusinessProfile, BusinessType

HIGH_PENALTY_OBLIGATIONS = frozenset({"gst", "epf", "tds"})

MAX_RISK_SCORE = 10


@dataclass
class RiskFactor:
    factor: str
    severity: str  # Low, Medium, High
    impact: int  # 1-5
    description: str
    mitigation: str


@dataclass
class RiskAssessment:
    overall_risk: str  # Low, Medium, High
    risk_score: int
    risk_factors: list[RiskFactor] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


_RECOMMENDATIONS: dict[str, list[str]] = {
    "High": [
        "Consider hiring a dedicated compliance officer or CA firm",
        "Implement compliance management software",
        "Set up automated reminders for all deadlines",
    ],
    "Medium": [
        "Use a compliance calendar to track all deadlines",
        "Consider professional help for high-penalty compliances",
        "Regular compliance reviews recommended",
    ],
    "Low": [
        "Maintain current compliance practices",
        "Set up basic reminder system",
    ],
}


def risk_level(score: int) -> str:
    if score <= 3:
        return "Low"
    elif score <= 6:
        return "Medium"
    return "High"


def near_term_entries(
    entries: list[CalendarEntry], today: Optional[date] = None
) -> int:
    """Entries falling in the current or the next calendar month."""
    ref = today or date.today()
    return sum(
        1 for e in entries if (e.due_date.month - ref.month) % 12 <= 1
    )


class RiskAssessor:
    """Scores compliance risk for a profile and its generated calendar."""

    def assess(
        self,
        profile: BusinessProfile,
        entries: list[CalendarEntry],
        obligation_ids: list[str],
        today: Optional[date] = None,
    ) -> RiskAssessment:
        score = 0
        factors: list[RiskFactor] = []
        count = len(obligation_ids)

        if count > 10:
            score += 3
            factors.append(
                RiskFactor(
                    factor="High number of compliances",
                    severity="High",
                    impact=4,
                    description=(
                        f"You have {count} different compliance "
                        f"requirements to manage"
                    ),
                    mitigation=(
                        "Consider using compliance management software or "
                        "hiring a dedicated compliance officer"
                    ),
                )
            )
        elif count > 5:
            score += 2
            factors.append(
                RiskFactor(
                    factor="Moderate number of compliances",
                    severity="Medium",
                    impact=3,
                    description=f"You have {count} compliance requirements",
                    mitigation="Set up a compliance calendar and regular reminders",
                )
            )

        near_term = near_term_entries(entries, today)
        if near_term > 5:
            score += 2
            factors.append(
                RiskFactor(
                    factor="High-frequency filings",
                    severity="High",
                    impact=4,
                    description=(
                        f"You have {near_term} compliance deadlines this "
                        f"month and next"
                    ),
                    mitigation=(
                        "Consider automation software or outsourcing to "
                        "reduce manual effort"
                    ),
                )
            )

        if HIGH_PENALTY_OBLIGATIONS.intersection(obligation_ids):
            score += 2
            factors.append(
                RiskFactor(
                    factor="High-penalty compliances",
                    severity="High",
                    impact=5,
                    description=(
                        "Your business has compliances with significant "
                        "penalty risks (GST, EPF, TDS)"
                    ),
                    mitigation=(
                        "Ensure timely filing and consider professional help "
                        "for these critical compliances"
                    ),
                )
            )

        if profile.business_type == BusinessType.MANUFACTURING:
            score += 1
            factors.append(
                RiskFactor(
                    factor="Manufacturing complexity",
                    severity="Medium",
                    impact=2,
                    description=(
                        "Manufacturing businesses have additional compliance "
                        "requirements"
                    ),
                    mitigation="Stay updated on environmental and safety regulations",
                )
            )

        if profile.msme_registered:
            score += 1
            factors.append(
                RiskFactor(
                    factor="MSME registration",
                    severity="Low",
                    impact=2,
                    description=(
                        "MSME businesses have specific compliance requirements"
                    ),
                    mitigation="Ensure MSME annual returns are filed on time",
                )
            )

        level = risk_level(score)
        return RiskAssessment(
            overall_risk=level,
            risk_score=min(score, MAX_RISK_SCORE),
            risk_factors=factors,
            recommendations=list(_RECOMMENDATIONS[level]),
        )
