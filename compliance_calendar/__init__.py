"""
SME Compliance Calendar
=======================

Determines which Indian government compliance obligations apply to a
small or medium business and lays them out as a 12-month deadline
calendar with cost and risk estimates.

Modules:
    profile            - Business profile and bracket midpoints
    catalog            - Rule Catalog of obligations, forms and deadlines
    matcher            - Profile -> applicable obligation ids
    calendar_generator - Obligation ids -> dated, prioritised entries
    calendar_utils     - Filtering, grouping and summaries of a calendar
    cost_estimator     - Annual compliance cost breakdown
    risk_assessor      - Rule-based compliance risk scoring
    insights           - Industry, state and size insights
    report_generator   - Structured reports with JSON export
    config             - Environment-driven settings
    cli                - Command-line interface
"""

__version__ = "1.0.0"

from compliance_calendar.profile import BusinessProfile
from compliance_calendar.catalog import CatalogUnavailableError, RuleCatalog
from compliance_calendar.matcher import ComplianceMatcher
from compliance_calendar.calendar_generator import CalendarEntry, CalendarGenerator
from compliance_calendar.cost_estimator import CostEstimator
from compliance_calendar.risk_assessor import RiskAssessor
from compliance_calendar.report_generator import ReportGenerator

__all__ = [
    "BusinessProfile",
    "CatalogUnavailableError",
    "RuleCatalog",
    "ComplianceMatcher",
    "CalendarEntry",
    "CalendarGenerator",
    "CostEstimator",
    "RiskAssessor",
    "ReportGenerator",
]
