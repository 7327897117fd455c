#!/usr/bin/env python3
"""
Quick Start Example
===================

Matches the obligations for a Pune-based IT services firm and prints
its next few compliance deadlines.

Usage:
    python examples/quick_start.py
"""

from compliance_calendar.calendar_generator import CalendarGenerator
from compliance_calendar.catalog import RuleCatalog
from compliance_calendar.matcher import ComplianceMatcher
from compliance_calendar.profile import (
    BusinessProfile,
    BusinessType,
    EmployeeBracket,
    TurnoverBracket,
)


def main() -> None:
    # Load the rule catalog once and reuse it
    catalog = RuleCatalog.load()

    profile = BusinessProfile(
        business_type=BusinessType.SERVICE,
        state="Maharashtra",
        industry="IT/Software",
        turnover=TurnoverBracket.FROM_40L_TO_1CR,
        employees=EmployeeBracket.FROM_20_TO_49,
        msme_registered=True,
    )

    matched = ComplianceMatcher().match(profile)
    print(f"Applicable compliances ({len(matched)}):")
    for oid in matched:
        print(f"  - {catalog.name_for(oid)}")

    entries = CalendarGenerator(catalog).generate(matched)
    print(f"\nNext deadlines (of {len(entries)}):")
    for e in entries[:10]:
        print(
            f"  {e.due_date:%d %b %Y}  {e.form_name:<20} "
            f"{e.obligation_name:<40} [{e.priority.value}]"
        )


if __name__ == "__main__":
    main()
