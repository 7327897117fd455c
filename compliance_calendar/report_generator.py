"""
Compliance report generator.

Produces:
- Calendar reports (profile, applicable obligations, dated entries)
- Compliance reports (overview, upcoming deadlines, cost analysis,
  risk assessment, industry insights)
- JSON export and console-friendly text
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from compliance_calendar.calendar_generator import CalendarEntry
from compliance_calendar.calendar_utils import (
    calendar_summary,
    category_breakdown,
    upcoming_deadlines,
)
from compliance_calendar.cost_estimator import CostBreakdown
from compliance_calendar.insights import build_insights
from compliance_calendar.profile import BusinessProfile
from compliance_calendar.risk_assessor import RiskAssessment


def _to_serializable(obj: Any) -> Any:
    """Recursively convert Decimal, date and Enum values for JSON."""
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(i) for i in obj]
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


class ReportGenerator:
    """
    Builds structured compliance reports.

    Reports are plain dicts that can be rendered to console text or
    exported as JSON.
    """

    def __init__(self, output_dir: Optional[str] = None) -> None:
        self.output_dir = Path(output_dir) if output_dir else Path("reports")

    # ------------------------------------------------------------------
    # Calendar report
    # ------------------------------------------------------------------

    def calendar_report(
        self,
        profile: BusinessProfile,
        obligation_ids: list[str],
        entries: list[CalendarEntry],
    ) -> dict[str, Any]:
        return {
            "report_type": "compliance_calendar",
            "generated_date": date.today().isoformat(),
            "business_profile": profile.to_dict(),
            "applicable_compliances": list(obligation_ids),
            "calendar": [e.to_dict() for e in entries],
            "summary": calendar_summary(obligation_ids, entries),
        }

    # ------------------------------------------------------------------
    # Full compliance report
    # ------------------------------------------------------------------

    def compliance_report(
        self,
        profile: BusinessProfile,
        obligation_ids: list[str],
        entries: list[CalendarEntry],
        costs: list[CostBreakdown],
        risk: RiskAssessment,
        today: Optional[date] = None,
    ) -> dict[str, Any]:
        """Overview, deadlines, costs and risk for one business."""
        ref = today or date.today()
        upcoming = upcoming_deadlines(entries, ref)
        total_cost = sum((c.total for c in costs), Decimal("0"))

        return {
            "report_type": "compliance_report",
            "generated_date": ref.isoformat(),
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "business_profile": profile.to_dict(),
            "applicable_compliances": list(obligation_ids),
            "summary": {
                "total_compliances": len(obligation_ids),
                "total_calendar_entries": len(entries),
                "deadlines_next_7_days": len(upcoming["next_7_days"]),
                "deadlines_next_30_days": len(upcoming["next_30_days"]),
                "total_annual_cost": total_cost,
                "risk_score": risk.risk_score,
                "overall_risk": risk.overall_risk,
            },
            "category_breakdown": category_breakdown(entries),
            "upcoming_deadlines": {
                window: [
                    {
                        "obligation": e.obligation_name,
                        "form": e.form_name,
                        "due_date": e.due_date.isoformat(),
                        "priority": e.priority.value,
                    }
                    for e in items
                ]
                for window, items in upcoming.items()
            },
            "cost_breakdown": [asdict(c) for c in costs],
            "risk_assessment": asdict(risk),
            "industry_insights": build_insights(profile, obligation_ids),
        }

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_json(
        self,
        report: dict[str, Any],
        filename: Optional[str] = None,
    ) -> str:
        """Export a report to JSON. Returns the JSON string."""
        json_str = json.dumps(_to_serializable(report), indent=2)

        if filename:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_dir / filename
            path.write_text(json_str, encoding="utf-8")

        return json_str

    # ------------------------------------------------------------------
    # Console-formatted text output
    # ------------------------------------------------------------------

    def format_text(self, report: dict[str, Any]) -> str:
        """Format a report as human-readable text for console output."""
        lines: list[str] = []
        report_type = report.get("report_type", "report").replace("_", " ").title()
        lines.append(f"{'=' * 60}")
        lines.append(f"  {report_type}")
        lines.append(f"  Generated: {report.get('generated_date', '')}")
        profile = report.get("business_profile")
        if profile:
            lines.append(
                f"  Business: {profile['business_type']} in {profile['state']}"
            )
        lines.append(f"{'=' * 60}")
        lines.append("")

        summary = report.get("summary", {})
        if summary:
            lines.append("SUMMARY")
            lines.append("-" * 40)
            for key, value in summary.items():
                label = key.replace("_", " ").title()
                if "cost" in key:
                    lines.append(f"  {label}: Rs {float(value):,.0f}")
                else:
                    lines.append(f"  {label}: {value}")
            lines.append("")

        breakdown = report.get("category_breakdown", {})
        if breakdown:
            lines.append("BY CATEGORY")
            lines.append("-" * 40)
            for category, count in breakdown.items():
                lines.append(f"  {category}: {count}")
            lines.append("")

        costs = report.get("cost_breakdown", [])
        if costs:
            lines.append("COST BREAKDOWN")
            lines.append("-" * 40)
            for c in costs:
                lines.append(
                    f"  {c['obligation_name']}: Rs {float(c['total']):>10,.0f}"
                )
            lines.append("")

        risk = report.get("risk_assessment")
        if risk:
            lines.append("RISK FACTORS")
            lines.append("-" * 40)
            for f in risk["risk_factors"]:
                lines.append(f"  [{f['severity'].upper()}] {f['factor']}")
                lines.append(f"          Mitigation: {f['mitigation']}")
            lines.append("")
            lines.append("RECOMMENDATIONS")
            lines.append("-" * 40)
            for r in risk["recommendations"]:
                lines.append(f"  * {r}")
            lines.append("")

        insights = report.get("industry_insights")
        if insights:
            lines.append("INSIGHTS")
            lines.append("-" * 40)
            for text in insights["highlights"]:
                lines.append(f"  * {text}")
            lines.append("")
            lines.append("COMMON PITFALLS")
            lines.append("-" * 40)
            for text in insights["common_pitfalls"]:
                lines.append(f"  * {text}")
            lines.append("")

        return "\n".join(lines)
