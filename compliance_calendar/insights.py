"""
Industry, state and business-size insights.

Static reference tables keyed off the business profile: critical
requirements, opportunities and common mistakes per industry, state
professional-tax notes, regulatory changes on the horizon, best
practices, pitfalls, peer benchmarks and useful government portals.
Everything here is rule-based and deterministic.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from compliance_calendar.profile import BusinessProfile


class InsightCategory(str, Enum):
    CRITICAL = "critical"
    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    BEST_PRACTICE = "best-practice"


@dataclass(frozen=True)
class InsightCard:
    title: str
    description: str
    category: InsightCategory
    related_compliances: tuple[str, ...] = ()


@dataclass(frozen=True)
class RegulatoryChange:
    title: str
    date: str  # free text, e.g. "April 2026 (expected)"
    impact: str
    action: str


@dataclass(frozen=True)
class IndustryProfile:
    critical: tuple[str, ...]
    common_mistakes: tuple[str, ...]
    opportunities: tuple[str, ...]


@dataclass(frozen=True)
class StateProfile:
    professional_tax_rate: Optional[str]  # None where no PT is levied
    professional_tax_due: Optional[str]
    specific_compliances: tuple[str, ...]
    ease_of_compliance: str  # High, Medium, Low
    common_challenges: tuple[str, ...]


@dataclass(frozen=True)
class PeerBenchmark:
    average_compliance_count: int
    average_cost: int
    common_compliances: tuple[str, ...] = ()


@dataclass(frozen=True)
class RecommendedResource:
    title: str
    url: str
    description: str
    category: str  # software, consultant, training, portal


# -----------------------------------------------------------------------
# Industry table
# -----------------------------------------------------------------------

DEFAULT_INDUSTRY = "Professional Services"

_INDUSTRIES: dict[str, IndustryProfile] = {
    "Manufacturing": IndustryProfile(
        critical=(
            "Environmental clearances are mandatory for most manufacturing units",
            "Factory Act compliance critical if 10+ workers",
            "BIS certification may be required for products",
            "Pollution control board registrations are essential",
        ),
        common_mistakes=(
            "Missing pollution board renewals",
            "Incorrect ESI/EPF calculations for contract workers",
            "Not maintaining statutory registers",
            "Delayed GST filing for raw material purchases",
        ),
        opportunities=(
            "Eligible for MSME incentives and subsidies",
            "Can claim GST input credit on raw materials",
            "PLI scheme benefits available for specific sectors",
            "Export incentives under various schemes",
        ),
    ),
    "IT/Software": IndustryProfile(
        critical=(
            "TDS compliance crucial for high-value contracts",
            "Gratuity Act applies if 10+ employees",
            "Export incentives under SEIS/EPCG available",
            "Data protection compliance becoming mandatory",
        ),
        common_mistakes=(
            "Incorrect TDS deduction on software services",
            "Missing GST registration for export services",
            "Not maintaining proper employee records",
            "Ignoring professional tax obligations",
        ),
        opportunities=(
            "Export benefits under Software Technology Parks",
            "Tax holidays available in certain states",
            "R&D tax credits for innovation",
            "Simplified compliance for small IT units",
        ),
    ),
    "Retail/E-commerce": IndustryProfile(
        critical=(
            "GST registration mandatory for online sales",
            "Consumer Protection Act compliance essential",
            "Shops & Establishments Act applies to physical stores",
            "FSSAI license required for food products",
        ),
        common_mistakes=(
            "Missing GST registration for online sales",
            "Incorrect HSN code classification",
            "Not maintaining proper inventory records",
            "Delayed consumer complaint resolution",
        ),
        opportunities=(
            "GST composition scheme for small retailers",
            "E-commerce platform benefits and subsidies",
            "Digital payment incentives",
            "MSME registration benefits",
        ),
    ),
    "Food & Beverage": IndustryProfile(
        critical=(
            "FSSAI license mandatory for all food businesses",
            "Health department registrations required",
            "GST compliance for restaurant services",
            "Weights & Measures Act compliance",
        ),
        common_mistakes=(
            "Missing FSSAI license renewal",
            "Incorrect GST rates for food items",
            "Not maintaining hygiene records",
            "Delayed tax payments",
        ),
        opportunities=(
            "GST benefits for small restaurants",
            "Export incentives for processed foods",
            "Subsidies for food processing units",
            "MSME benefits for small-scale operations",
        ),
    ),
    "Healthcare": IndustryProfile(
        critical=(
            "Clinical Establishments Act registration required",
            "Drug license mandatory for pharmacies",
            "GST compliance for medical services",
            "Professional tax applicable",
        ),
        common_mistakes=(
            "Missing drug license renewals",
            "Incorrect GST classification of services",
            "Not maintaining patient records properly",
            "Delayed professional tax payments",
        ),
        opportunities=(
            "GST exemptions for certain medical services",
            "Export benefits for medical devices",
            "Subsidies for rural healthcare",
            "Tax benefits for medical equipment",
        ),
    ),
    "Professional Services": IndustryProfile(
        critical=(
            "Professional tax applicable in most states",
            "GST registration if turnover exceeds threshold",
            "Income tax compliance essential",
            "Service tax legacy compliance if applicable",
        ),
        common_mistakes=(
            "Missing professional tax payments",
            "Incorrect GST classification",
            "Not maintaining proper client records",
            "Delayed tax filings",
        ),
        opportunities=(
            "GST exemptions for certain professional services",
            "Tax benefits for consulting services",
            "Export benefits for international services",
            "Simplified compliance for small practices",
        ),
    ),
}


# -----------------------------------------------------------------------
# State table
# -----------------------------------------------------------------------

_STATES: dict[str, StateProfile] = {
    "Maharashtra": StateProfile(
        professional_tax_rate="Rs 2,500/year max",
        professional_tax_due="30th of next month",
        specific_compliances=(
            "Shops & Establishments Act registration mandatory",
            "Mumbai-specific: BMC trade license required",
            "Maharashtra State Tax on professions applicable",
        ),
        ease_of_compliance="High",
        common_challenges=(
            "Professional tax payment delays common",
            "Multiple municipal authorities can be confusing",
        ),
    ),
    "Karnataka": StateProfile(
        professional_tax_rate="Rs 200/month for salary >Rs 25,000",
        professional_tax_due="20th of next month",
        specific_compliances=(
            "Shops & Commercial Establishments Act",
            "Karnataka Labor Welfare Fund applicable",
        ),
        ease_of_compliance="High",
        common_challenges=(
            "Multiple labor welfare fund payments",
            "Complex professional tax structure",
        ),
    ),
    "Delhi": StateProfile(
        professional_tax_rate=None,
        professional_tax_due=None,
        specific_compliances=(
            "Delhi Shops & Establishments Act",
            "Delhi Labor Welfare Fund",
        ),
        ease_of_compliance="High",
        common_challenges=(
            "Multiple authority registrations",
            "Complex licensing requirements",
        ),
    ),
    "Gujarat": StateProfile(
        professional_tax_rate="Rs 2,500/year max",
        professional_tax_due="30th of next month",
        specific_compliances=(
            "Gujarat Shops & Establishments Act",
            "Gujarat Labor Welfare Fund",
        ),
        ease_of_compliance="High",
        common_challenges=(
            "Professional tax compliance",
            "Multiple fund contributions",
        ),
    ),
    "Tamil Nadu": StateProfile(
        professional_tax_rate="Rs 2,500/year max",
        professional_tax_due="30th of next month",
        specific_compliances=(
            "Tamil Nadu Shops & Establishments Act",
            "Tamil Nadu Labor Welfare Fund",
        ),
        ease_of_compliance="Medium",
        common_challenges=(
            "Complex professional tax structure",
            "Multiple compliance requirements",
        ),
    ),
}


# -----------------------------------------------------------------------
# Regulatory changes, practices, benchmarks
# -----------------------------------------------------------------------

_GENERAL_CHANGES: tuple[RegulatoryChange, ...] = (
    RegulatoryChange(
        title="New Labor Codes Implementation",
        date="April 2026 (expected)",
        impact="Consolidation of 29 labor laws into 4 codes",
        action="Review compliance requirements after implementation",
    ),
    RegulatoryChange(
        title="Enhanced Digital Compliance",
        date="Ongoing",
        impact="Mandatory digital filing for most compliances",
        action="Ensure digital infrastructure is ready",
    ),
)

_INDUSTRY_CHANGES: dict[str, tuple[RegulatoryChange, ...]] = {
    "E-commerce": (
        RegulatoryChange(
            title="Consumer Protection Rules",
            date="Ongoing updates",
            impact="Stricter seller verification requirements",
            action="Ensure compliance team is aware",
        ),
    ),
    "IT/Software": (
        RegulatoryChange(
            title="Digital Personal Data Protection Act",
            date="2025 (expected)",
            impact="Mandatory data protection compliance",
            action="Review data handling practices",
        ),
    ),
}

_BEST_PRACTICES: dict[str, tuple[str, ...]] = {
    "Manufacturing": (
        "Maintain detailed production records",
        "Automate compliance tracking for monthly filings",
        "Keep environmental clearances updated",
        "Regular safety audits",
    ),
    "IT/Software": (
        "Use automated TDS calculation tools",
        "Maintain proper project-wise records",
        "Track export benefits regularly",
        "Keep data protection measures updated",
    ),
    "Retail/E-commerce": (
        "Automate GST filing with inventory systems",
        "Maintain proper HSN code mapping",
        "Track consumer complaints systematically",
        "Regular inventory audits",
    ),
}

_GENERIC_BEST_PRACTICES: tuple[str, ...] = (
    "Maintain proper books of accounts",
    "Set up compliance calendar reminders",
    "Regular professional consultations",
    "Keep all registrations updated",
)

_COMMON_PITFALLS: tuple[str, ...] = (
    "Missing deadlines (most common issue)",
    "Incorrect tax calculations",
    "Not maintaining proper books of accounts",
    "Ignoring notices from authorities",
    "Wrong business classification affecting taxes",
)

# Head-count at which EPF/ESI contract-worker errors become a concern
PITFALL_EPF_EMPLOYEES = 20

# Keyed "{industry}-{size}"
_PEER_BENCHMARKS: dict[str, PeerBenchmark] = {
    "Manufacturing-Small": PeerBenchmark(
        8, 45000, ("gst", "epf", "esi", "professional-tax")
    ),
    "IT/Software-Small": PeerBenchmark(
        6, 35000, ("gst", "tds", "professional-tax")
    ),
    "Retail-Small": PeerBenchmark(
        7, 40000, ("gst", "shops-establishments", "professional-tax")
    ),
}

_DEFAULT_BENCHMARK = PeerBenchmark(7, 40000, ("gst", "professional-tax"))

# (upper bound exclusive, label, advice)
_SIZE_TIERS: tuple[tuple[Optional[int], str, str], ...] = (
    (10, "Micro",
     "Focus on basic compliances. DIY filing may be possible for simple cases."),
    (50, "Small",
     "Consider part-time professional help for compliance management."),
    (250, "Medium",
     "Full-time compliance team or dedicated consultant recommended."),
    (None, "Large",
     "Dedicated compliance department with automation software essential."),
)


def _lookup(table: dict[str, Any], key: str) -> Optional[Any]:
    """Case-insensitive dictionary lookup on a free-text profile field."""
    needle = key.strip().lower()
    for name, value in table.items():
        if name.lower() == needle:
            return value
    return None


# -----------------------------------------------------------------------
# Public helpers
# -----------------------------------------------------------------------


def industry_insights(
    industry: str, obligation_ids: list[str]
) -> list[InsightCard]:
    """Critical requirements, then opportunities, then common mistakes."""
    data = _lookup(_INDUSTRIES, industry) or _INDUSTRIES[DEFAULT_INDUSTRY]

    cards = [
        InsightCard(
            "Critical Requirement",
            text,
            InsightCategory.CRITICAL,
            tuple(obligation_ids),
        )
        for text in data.critical
    ]
    cards += [
        InsightCard("Opportunity", text, InsightCategory.OPPORTUNITY)
        for text in data.opportunities
    ]
    cards += [
        InsightCard("Common Mistake", text, InsightCategory.WARNING)
        for text in data.common_mistakes
    ]
    return cards


def state_insights(state: str) -> list[InsightCard]:
    data: Optional[StateProfile] = _lookup(_STATES, state)
    if data is None:
        return []

    cards: list[InsightCard] = []
    if data.professional_tax_rate:
        cards.append(
            InsightCard(
                "Professional Tax Information",
                f"Rate: {data.professional_tax_rate}, "
                f"Due: {data.professional_tax_due}",
                InsightCategory.CRITICAL,
            )
        )
    cards += [
        InsightCard("State-Specific Compliance", text, InsightCategory.CRITICAL)
        for text in data.specific_compliances
    ]
    cards += [
        InsightCard("Common Challenge", text, InsightCategory.WARNING)
        for text in data.common_challenges
    ]
    return cards


def business_size(profile: BusinessProfile) -> str:
    """Micro, Small, Medium or Large by head-count."""
    return _size_tier(profile.employee_count)[1]


def _size_tier(employees: int) -> tuple[Optional[int], str, str]:
    for tier in _SIZE_TIERS:
        upper = tier[0]
        if upper is None or employees < upper:
            return tier
    return _SIZE_TIERS[-1]


def business_size_insights(profile: BusinessProfile) -> list[InsightCard]:
    _, label, advice = _size_tier(profile.employee_count)
    return [
        InsightCard(f"{label} Business", advice, InsightCategory.BEST_PRACTICE)
    ]


def upcoming_changes(industry: str) -> list[RegulatoryChange]:
    """Industry-specific changes first, then those affecting everyone."""
    specific = _lookup(_INDUSTRY_CHANGES, industry) or ()
    return [*specific, *_GENERAL_CHANGES]


def best_practices(industry: str) -> list[str]:
    return list(_lookup(_BEST_PRACTICES, industry) or _GENERIC_BEST_PRACTICES)


def common_pitfalls(profile: BusinessProfile) -> list[str]:
    pitfalls = list(_COMMON_PITFALLS)
    if profile.msme_registered:
        pitfalls.append("Not filing MSME annual returns on time")
    if profile.employee_count >= PITFALL_EPF_EMPLOYEES:
        pitfalls.append("Incorrect EPF/ESI calculations for contract workers")
    return pitfalls


def peer_benchmark(industry: str, size: str) -> PeerBenchmark:
    return (
        _lookup(_PEER_BENCHMARKS, f"{industry}-{size}") or _DEFAULT_BENCHMARK
    )


def recommended_resources(profile: BusinessProfile) -> list[RecommendedResource]:
    resources = [
        RecommendedResource(
            "GST Portal",
            "https://www.gst.gov.in",
            "Official GST filing portal",
            "portal",
        ),
        RecommendedResource(
            "EPFO Portal",
            "https://www.epfindia.gov.in",
            "EPF filing and management",
            "portal",
        ),
    ]
    if profile.industry.strip().lower() == "it/software":
        resources.append(
            RecommendedResource(
                "Income Tax Portal",
                "https://www.incometax.gov.in",
                "TDS and income tax filing",
                "portal",
            )
        )
    return resources


def build_insights(
    profile: BusinessProfile, obligation_ids: list[str]
) -> dict[str, Any]:
    """
    Insight section of a compliance report.

    ``highlights`` holds the first three industry insights followed by
    the first two state insights.
    """
    industry_cards = industry_insights(profile.industry, obligation_ids)
    state_cards = state_insights(profile.state)
    state_data: Optional[StateProfile] = _lookup(_STATES, profile.state)
    size = business_size(profile)

    return {
        "highlights": [c.description for c in industry_cards[:3]]
        + [c.description for c in state_cards[:2]],
        "industry": [asdict(c) for c in industry_cards],
        "state": [asdict(c) for c in state_cards],
        "state_ease_of_compliance": (
            state_data.ease_of_compliance if state_data else None
        ),
        "business_size": size,
        "size_guidance": [asdict(c) for c in business_size_insights(profile)],
        "upcoming_changes": [asdict(c) for c in upcoming_changes(profile.industry)],
        "best_practices": best_practices(profile.industry),
        "common_pitfalls": common_pitfalls(profile),
        "peer_benchmark": asdict(peer_benchmark(profile.industry, size)),
        "recommended_resources": [
            asdict(r) for r in recommended_resources(profile)
        ],
    }
