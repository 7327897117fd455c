"""
Compliance calendar generator.

Expands the recurring forms of each applicable obligation into concrete
due dates over a rolling window (12 months by default) and classifies
each resulting entry by urgency.

Recurrence rules:
- monthly:   the rule's day in each of the window's months; if that day
             has already passed in the first month, the next month's
             occurrence is used for that iteration instead
- quarterly: the rule's day in calendar-quarter months (Jan/Apr/Jul/Oct),
             starting from the quarter containing the reference date,
             shifted one quarter forward when already past
- annual:    the rule's day in January, this year or next
- fixed:     same as annual

Candidates outside the window are dropped at the end.
"""

from __future__ import annotations

import logging
import re
from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional

from compliance_calendar.catalog import (
    CatalogUnavailableError,
    DeadlineKind,
    DeadlineRule,
    FormSpec,
    ObligationRule,
    Resource,
    RuleCatalog,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 12

# Month label format; month filters elsewhere compare against this string
MONTH_LABEL_FORMAT = "%B %Y"


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class CalendarEntry:
    """One dated instance of a compliance form."""

    id: str
    obligation_id: str
    obligation_name: str
    form_name: str
    description: str
    due_date: date
    month: str
    category: str
    priority: Priority
    penalty: str
    resources: tuple[Resource, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "obligation_id": self.obligation_id,
            "obligation_name": self.obligation_name,
            "form_name": self.form_name,
            "description": self.description,
            "due_date": self.due_date.isoformat(),
            "month": self.month,
            "category": self.category,
            "priority": self.priority.value,
            "penalty": self.penalty,
            "resources": [
                {"title": r.title, "url": r.url} for r in self.resources
            ],
        }


# -----------------------------------------------------------------------
# Date arithmetic
# -----------------------------------------------------------------------


def _add_months(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _day_in_month(year: int, month: int, day: int) -> date:
    """The given day of a month, clamped to the month's last day."""
    return date(year, month, min(day, monthrange(year, month)[1]))


def month_offset(d: date, reference: date) -> int:
    """Whole calendar months from ``reference``'s month to ``d``'s month."""
    return (d.year - reference.year) * 12 + (d.month - reference.month)


def month_label(d: date) -> str:
    return d.strftime(MONTH_LABEL_FORMAT)


def calculate_priority(due_date: date, today: Optional[date] = None) -> Priority:
    """
    Urgency of a due date as seen from ``today``.

    Fewer than 7 days -> High, fewer than 30 -> Medium, otherwise Low.
    """
    days_until = (due_date - (today or date.today())).days
    if days_until < 7:
        return Priority.HIGH
    if days_until < 30:
        return Priority.MEDIUM
    return Priority.LOW


# -----------------------------------------------------------------------
# Recurrence expansion
# -----------------------------------------------------------------------


def _recurring_dates(
    rule_day: int,
    reference_date: date,
    first_year: int,
    first_month: int,
    months: int,
    step: int,
) -> list[date]:
    dates: list[date] = []
    for i in range(0, months, step):
        year, month = _add_months(first_year, first_month, i)
        due = _day_in_month(year, month, rule_day)
        if due < reference_date:
            year, month = _add_months(year, month, step)
            due = _day_in_month(year, month, rule_day)
        dates.append(due)
    return dates


def expand_due_dates(
    rule: DeadlineRule,
    reference_date: date,
    months: int = DEFAULT_WINDOW_MONTHS,
) -> list[date]:
    """
    All due dates of ``rule`` inside ``[reference_date, +months)``.

    Unknown kinds and rules without a valid day yield no dates.
    """
    day = rule.day
    if day is None or not 1 <= day <= 31:
        return []

    if rule.kind == DeadlineKind.MONTHLY:
        candidates = _recurring_dates(
            day,
            reference_date,
            reference_date.year,
            reference_date.month,
            months,
            step=1,
        )

    elif rule.kind == DeadlineKind.QUARTERLY:
        quarter_month = (reference_date.month - 1) // 3 * 3 + 1
        candidates = _recurring_dates(
            day,
            reference_date,
            reference_date.year,
            quarter_month,
            months,
            step=3,
        )

    elif rule.kind == DeadlineKind.ANNUAL:
        # TODO: from a January reference past `day`, next January sits at
        # month offset 12 and the window filter drops it, so no date is
        # produced. Confirm with product whether to widen the window.
        first = date(reference_date.year, 1, day)
        if first < reference_date:
            first = date(reference_date.year + 1, 1, day)
        candidates = [first]
        if months > 12:
            candidates.append(date(first.year + 1, 1, day))

    elif rule.kind == DeadlineKind.FIXED:
        # TODO: confirm with product whether "fixed" should be a one-off
        # calendar date rather than a January recurrence.
        first = date(reference_date.year, 1, day)
        if first < reference_date:
            first = date(reference_date.year + 1, 1, day)
        candidates = [first]

    else:
        return []

    return [
        d for d in candidates if 0 <= month_offset(d, reference_date) < months
    ]


# -----------------------------------------------------------------------
# Generator
# -----------------------------------------------------------------------


def _entry_id(
    obligation_id: str, form_name: str, due_date: date, index: int
) -> str:
    slug = re.sub(r"\s+", "-", form_name.lower())
    return f"{obligation_id}-{slug}-{due_date.isoformat()}-{index}"


class CalendarGenerator:
    """
    Builds a date-sorted compliance calendar from obligation ids.

    Requires a loaded RuleCatalog; a calendar built without one would be
    silently empty, so that case is refused up front.
    """

    def __init__(self, catalog: RuleCatalog) -> None:
        if catalog is None:
            raise CatalogUnavailableError(
                "A compliance rule catalog is required to generate a calendar"
            )
        self.catalog = catalog

    def _entries_for_form(
        self,
        obligation: ObligationRule,
        form: FormSpec,
        form_index: int,
        reference_date: date,
        today: date,
        months: int,
    ) -> list[CalendarEntry]:
        entries: list[CalendarEntry] = []
        due_dates = expand_due_dates(form.deadline, reference_date, months)
        for date_index, due in enumerate(due_dates):
            entries.append(
                CalendarEntry(
                    id=_entry_id(
                        obligation.id,
                        form.name,
                        due,
                        form_index * 1000 + date_index,
                    ),
                    obligation_id=obligation.id,
                    obligation_name=obligation.name,
                    form_name=form.name,
                    description=form.description,
                    due_date=due,
                    month=month_label(due),
                    category=obligation.category.value,
                    priority=calculate_priority(due, today),
                    penalty=form.penalty,
                    resources=obligation.resources,
                )
            )
        return entries

    def generate(
        self,
        obligation_ids: Iterable[str],
        reference_date: Optional[date] = None,
        today: Optional[date] = None,
        months: int = DEFAULT_WINDOW_MONTHS,
    ) -> list[CalendarEntry]:
        """
        Generate calendar entries for the given obligations.

        ``reference_date`` starts the window; ``today`` is the clock used
        for priority. Both default to the current date. Ids missing from
        the catalog are skipped with a warning.
        """
        start = reference_date or date.today()
        now = today or date.today()
        entries: list[CalendarEntry] = []

        for obligation_id in obligation_ids:
            obligation = self.catalog.get(obligation_id)
            if obligation is None:
                logger.warning(
                    "Compliance %s not found in rules, skipping",
                    obligation_id,
                )
                continue

            for form_index, form in enumerate(obligation.forms):
                entries.extend(
                    self._entries_for_form(
                        obligation, form, form_index, start, now, months
                    )
                )

        # sorted() is stable: ties keep obligation/form/occurrence order
        entries = sorted(entries, key=lambda e: e.due_date)
        logger.debug(
            "Generated %d calendar entries from %s", len(entries), start
        )
        return entries
