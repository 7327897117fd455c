"""
Helpers for consumers of a generated calendar: sorting, filtering,
grouping by month, upcoming-deadline windows and summary statistics.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

import pandas as pd

from compliance_calendar.calendar_generator import CalendarEntry, Priority

# Flat per-obligation estimate (INR/yr) used in the calendar summary
_SUMMARY_COST_PER_OBLIGATION: dict[str, int] = {
    "gst": 5000,
    "epf": 10000,
    "esi": 5000,
    "professional-tax": 2000,
    "tds": 3000,
    "msme-annual-return": 2000,
    "msme-form-1": 1000,
    "income-tax": 5000,
    "tax-audit": 15000,
    "shops-establishments": 2000,
}
_SUMMARY_DEFAULT_COST = 3000

UPCOMING_WINDOWS = (7, 30, 90)


def sort_by_date(entries: list[CalendarEntry]) -> list[CalendarEntry]:
    """Earliest first; a new list is returned."""
    return sorted(entries, key=lambda e: e.due_date)


def filter_by_month(
    entries: list[CalendarEntry], month: str
) -> list[CalendarEntry]:
    """Entries whose month label equals ``month`` (e.g. "January 2025")."""
    return [e for e in entries if e.month == month]


def filter_by_category(
    entries: list[CalendarEntry], category: Optional[str]
) -> list[CalendarEntry]:
    if not category or category.lower() == "all":
        return list(entries)
    return [e for e in entries if e.category.lower() == category.lower()]


def group_by_month(
    entries: list[CalendarEntry],
) -> dict[str, list[CalendarEntry]]:
    """Group entries by month label, each group sorted by due date."""
    grouped: dict[str, list[CalendarEntry]] = {}
    for e in entries:
        grouped.setdefault(e.month, []).append(e)
    return {month: sort_by_date(items) for month, items in grouped.items()}


def upcoming_deadlines(
    entries: list[CalendarEntry],
    today: Optional[date] = None,
) -> dict[str, list[CalendarEntry]]:
    """
    Entries due within the next 7, 30 and 90 days (inclusive).

    Keys are ``next_7_days``, ``next_30_days`` and ``next_90_days``.
    """
    ref = today or date.today()
    buckets: dict[str, list[CalendarEntry]] = {}
    for window in UPCOMING_WINDOWS:
        buckets[f"next_{window}_days"] = [
            e for e in entries if 0 <= (e.due_date - ref).days <= window
        ]
    return buckets


def category_breakdown(entries: list[CalendarEntry]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for e in entries:
        counts[e.category] = counts.get(e.category, 0) + 1
    return counts


def estimated_annual_cost(obligation_ids: list[str]) -> int:
    return sum(
        _SUMMARY_COST_PER_OBLIGATION.get(oid, _SUMMARY_DEFAULT_COST)
        for oid in obligation_ids
    )


def calendar_summary(
    obligation_ids: list[str], entries: list[CalendarEntry]
) -> dict[str, Any]:
    """Headline figures shown alongside a generated calendar."""
    return {
        "total_compliances": len(obligation_ids),
        "urgent_entries": sum(
            1 for e in entries if e.priority in (Priority.HIGH, Priority.MEDIUM)
        ),
        "quarter_month_entries": sum(
            1 for e in entries if (e.due_date.month - 1) % 3 == 0
        ),
        "january_entries": sum(1 for e in entries if e.due_date.month == 1),
        "total_calendar_entries": len(entries),
        "estimated_annual_cost": estimated_annual_cost(obligation_ids),
    }


def to_dataframe(entries: list[CalendarEntry]) -> pd.DataFrame:
    """Tabular view of a calendar, one row per entry."""
    columns = [
        "id",
        "obligation_id",
        "obligation_name",
        "form_name",
        "due_date",
        "month",
        "category",
        "priority",
        "penalty",
    ]
    rows = [
        {
            "id": e.id,
            "obligation_id": e.obligation_id,
            "obligation_name": e.obligation_name,
            "form_name": e.form_name,
            "due_date": e.due_date,
            "month": e.month,
            "category": e.category,
            "priority": e.priority.value,
            "penalty": e.penalty,
        }
        for e in entries
    ]
    df = pd.DataFrame(rows, columns=columns)
    df["due_date"] = pd.to_datetime(df["due_date"])
    return df


def monthly_counts(entries: list[CalendarEntry]) -> pd.DataFrame:
    """
    Entry counts per month and priority, in calendar order.

    Columns are High/Medium/Low; months with no entries are omitted.
    """
    df = to_dataframe(entries)
    if df.empty:
        return pd.DataFrame(columns=[p.value for p in Priority])
    df["period"] = df["due_date"].dt.to_period("M")
    table = (
        df.groupby(["period", "priority"])
        .size()
        .unstack(fill_value=0)
        .reindex(columns=[p.value for p in Priority], fill_value=0)
        .sort_index()
    )
    table.index = [p.strftime("%B %Y") for p in table.index]
    return table
