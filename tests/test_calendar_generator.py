"""Tests for due-date expansion, priority and calendar generation."""

import logging
from datetime import date, timedelta

import pytest

from compliance_calendar.calendar_generator import (
    CalendarGenerator,
    Priority,
    calculate_priority,
    expand_due_dates,
    month_label,
    month_offset,
)
from compliance_calendar.catalog import (
    CatalogUnavailableError,
    DeadlineKind,
    DeadlineRule,
    RuleCatalog,
)
from compliance_calendar.matcher import ComplianceMatcher
from compliance_calendar.profile import (
    BusinessProfile,
    BusinessType,
    EmployeeBracket,
    TurnoverBracket,
)

REF = date(2026, 10, 19)


@pytest.fixture(scope="module")
def catalog() -> RuleCatalog:
    return RuleCatalog.load()


@pytest.fixture
def generator(catalog: RuleCatalog) -> CalendarGenerator:
    return CalendarGenerator(catalog)


def monthly(day):
    return DeadlineRule(kind=DeadlineKind.MONTHLY, day=day)


def quarterly(day):
    return DeadlineRule(kind=DeadlineKind.QUARTERLY, day=day)


def annual(day):
    return DeadlineRule(kind=DeadlineKind.ANNUAL, day=day)


# ── Monthly ─────────────────────────────────────────────────────────


@pytest.mark.parametrize("day", [1, 7, 11, 15, 19, 20, 28])
@pytest.mark.parametrize(
    "ref", [REF, date(2026, 1, 1), date(2026, 12, 31), date(2027, 2, 28)]
)
def test_monthly_yields_twelve_dates_in_window(day, ref):
    dates = expand_due_dates(monthly(day), ref)
    assert len(dates) == 12
    assert all(d.day == day for d in dates)
    assert all(d >= ref for d in dates)
    assert all(0 <= month_offset(d, ref) < 12 for d in dates)


def test_monthly_day_not_yet_passed():
    dates = expand_due_dates(monthly(25), REF)
    assert dates[0] == date(2026, 10, 25)
    assert dates[-1] == date(2027, 9, 25)


def test_monthly_day_already_passed_shifts_first_month():
    dates = expand_due_dates(monthly(11), REF)
    # October's 11th has passed, so the first iteration uses November
    assert dates[0] == date(2026, 11, 11)
    assert dates[1] == date(2026, 11, 11)
    assert dates[-1] == date(2027, 9, 11)


def test_monthly_due_on_reference_date_is_kept():
    dates = expand_due_dates(monthly(19), REF)
    assert dates[0] == REF


def test_monthly_crosses_year_end():
    dates = expand_due_dates(monthly(20), date(2026, 11, 1))
    assert date(2026, 12, 20) in dates
    assert date(2027, 1, 20) in dates


def test_monthly_day_clamped_to_month_end():
    dates = expand_due_dates(monthly(31), date(2026, 1, 1))
    assert dates[0] == date(2026, 1, 31)
    assert dates[1] == date(2026, 2, 28)
    assert dates[3] == date(2026, 4, 30)
    assert len(dates) == 12


# ── Quarterly ───────────────────────────────────────────────────────


@pytest.mark.parametrize("day", [7, 15, 31])
@pytest.mark.parametrize(
    "ref",
    [REF, date(2026, 1, 1), date(2026, 2, 10), date(2026, 6, 30), date(2026, 12, 31)],
)
def test_quarterly_yields_four_quarter_aligned_dates(day, ref):
    dates = expand_due_dates(quarterly(day), ref)
    assert len(dates) == 4
    assert all((d.month - 1) % 3 == 0 for d in dates)
    assert all(d >= ref for d in dates)
    assert all(0 <= month_offset(d, ref) < 12 for d in dates)


def test_quarterly_aligned_to_calendar_quarters():
    dates = expand_due_dates(quarterly(15), date(2026, 2, 10))
    # Quarter containing February starts in January; 15 Jan has passed
    assert dates == [
        date(2026, 4, 15),
        date(2026, 4, 15),
        date(2026, 7, 15),
        date(2026, 10, 15),
    ]


def test_quarterly_not_yet_passed():
    dates = expand_due_dates(quarterly(31), REF)
    assert dates == [
        date(2026, 10, 31),
        date(2027, 1, 31),
        date(2027, 4, 30),
        date(2027, 7, 31),
    ]


# ── Annual and fixed ────────────────────────────────────────────────


def test_annual_uses_next_january_when_passed():
    assert expand_due_dates(annual(31), REF) == [date(2027, 1, 31)]


def test_annual_uses_current_january_when_upcoming():
    assert expand_due_dates(annual(31), date(2026, 1, 10)) == [date(2026, 1, 31)]


@pytest.mark.parametrize(
    "ref", [REF, date(2026, 1, 1), date(2026, 1, 31), date(2026, 2, 1)]
)
def test_annual_yields_exactly_one_date(ref):
    dates = expand_due_dates(annual(31), ref)
    assert len(dates) == 1
    assert 0 <= month_offset(dates[0], ref) < 12


@pytest.mark.parametrize("kind", [DeadlineKind.ANNUAL, DeadlineKind.FIXED])
@pytest.mark.parametrize(
    "ref, day", [(date(2027, 1, 31), 30), (date(2026, 1, 20), 10)]
)
def test_january_reference_past_day_yields_nothing(kind, ref, day):
    # Next January is 12 months out, one past the end of the window
    assert expand_due_dates(DeadlineRule(kind=kind, day=day), ref) == []


def test_january_reference_past_day_kept_by_longer_window():
    assert expand_due_dates(annual(30), date(2027, 1, 31), months=24) == [
        date(2028, 1, 30)
    ]


def test_annual_longer_window_adds_following_year():
    dates = expand_due_dates(annual(31), REF, months=24)
    assert dates == [date(2027, 1, 31), date(2028, 1, 31)]


def test_fixed_behaves_like_annual():
    rule = DeadlineRule(kind=DeadlineKind.FIXED, day=31)
    assert expand_due_dates(rule, REF) == expand_due_dates(annual(31), REF)
    assert expand_due_dates(rule, REF, months=24) == [date(2027, 1, 31)]


# ── Unrecognised and malformed rules ────────────────────────────────


def test_unknown_kind_yields_nothing():
    assert expand_due_dates(DeadlineRule(kind="weekly", day=3), REF) == []


@pytest.mark.parametrize("day", [None, 0, 32])
def test_invalid_day_yields_nothing(day):
    assert expand_due_dates(DeadlineRule(kind=DeadlineKind.MONTHLY, day=day), REF) == []


# ── Priority ────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "days, expected",
    [
        (-1, Priority.HIGH),
        (0, Priority.HIGH),
        (6, Priority.HIGH),
        (7, Priority.MEDIUM),
        (29, Priority.MEDIUM),
        (30, Priority.LOW),
        (200, Priority.LOW),
    ],
)
def test_priority_boundaries(days, expected):
    assert calculate_priority(REF + timedelta(days=days), REF) is expected


def test_month_label():
    assert month_label(date(2025, 1, 15)) == "January 2025"


# ── Generator ───────────────────────────────────────────────────────


def test_generator_requires_catalog():
    with pytest.raises(CatalogUnavailableError):
        CalendarGenerator(None)


def test_gst_calendar(generator: CalendarGenerator):
    entries = generator.generate(["gst"], reference_date=REF, today=REF)
    # GSTR-1 x12, GSTR-3B x12, GSTR-9 x1
    assert len(entries) == 25
    first = entries[0]
    assert first.due_date == date(2026, 10, 20)
    assert first.form_name == "GSTR-3B"
    assert first.id == "gst-gstr-3b-2026-10-20-1000"
    assert first.month == "October 2026"
    assert first.category == "Tax"
    assert first.priority is Priority.HIGH
    assert first.obligation_name == "Goods and Services Tax (GST)"
    assert first.resources[0].url == "https://www.gst.gov.in"


def test_entry_ids_unique(generator: CalendarGenerator, catalog: RuleCatalog):
    entries = generator.generate(catalog.ids(), reference_date=REF, today=REF)
    ids = [e.id for e in entries]
    assert len(ids) == len(set(ids))


def test_entries_sorted_and_within_window(
    generator: CalendarGenerator, catalog: RuleCatalog
):
    entries = generator.generate(catalog.ids(), reference_date=REF, today=REF)
    for a, b in zip(entries, entries[1:]):
        assert a.due_date <= b.due_date
    for e in entries:
        assert e.due_date >= REF
        assert 0 <= month_offset(e.due_date, REF) < 12


def test_ties_keep_input_order(generator: CalendarGenerator):
    # ESI and EPF both fall due on the 15th
    entries = generator.generate(["esi", "epf"], reference_date=REF, today=REF)
    assert len(entries) == 24
    for a, b in zip(entries, entries[1:]):
        if a.due_date == b.due_date:
            assert (a.obligation_id, b.obligation_id) != ("epf", "esi")
    assert [e.obligation_id for e in entries[:4]] == ["esi", "esi", "epf", "epf"]


def test_unknown_obligation_skipped_with_warning(generator, caplog):
    with caplog.at_level(logging.WARNING):
        entries = generator.generate(
            ["vat", "tds"], reference_date=REF, today=REF
        )
    assert "vat" in caplog.text
    # Challan 281 x12, Form 24Q x4, Form 26Q x4
    assert len(entries) == 20
    assert {e.obligation_id for e in entries} == {"tds"}


def test_unknown_deadline_kind_does_not_abort_obligation():
    catalog = RuleCatalog.from_dict(
        {
            "compliances": {
                "mixed": {
                    "name": "Mixed",
                    "category": "Statutory",
                    "frequency": "monthly",
                    "forms": [
                        {
                            "name": "Weekly Form",
                            "description": "",
                            "deadline": {"type": "weekly", "day": 2},
                        },
                        {
                            "name": "Monthly Form",
                            "description": "",
                            "deadline": {"type": "monthly", "day": 25},
                        },
                    ],
                }
            }
        }
    )
    entries = CalendarGenerator(catalog).generate(
        ["mixed"], reference_date=REF, today=REF
    )
    assert len(entries) == 12
    assert {e.form_name for e in entries} == {"Monthly Form"}
    # Second form's indices start at 1000
    assert entries[0].id == "mixed-monthly-form-2026-10-25-1000"


def test_form_3cd_absent_from_last_january_calendar(generator: CalendarGenerator):
    ref = date(2027, 1, 31)
    # Form 3CD falls on the 30th, one day before the window opens
    assert generator.generate(["tax-audit"], reference_date=ref, today=ref) == []
    # Day-31 annual forms fall on the reference date itself
    gst = generator.generate(["gst"], reference_date=ref, today=ref)
    gstr9 = [e for e in gst if e.form_name == "GSTR-9"]
    assert [e.due_date for e in gstr9] == [ref]


def test_priority_uses_today_not_reference(generator: CalendarGenerator):
    entries = generator.generate(
        ["gst"], reference_date=REF, today=date(2026, 1, 1)
    )
    assert all(e.priority is Priority.LOW for e in entries)


def test_defaults_to_current_date(generator: CalendarGenerator):
    today = date.today()
    entries = generator.generate(["epf"])
    assert len(entries) == 12
    assert all(e.due_date >= today for e in entries)


def test_to_dict(generator: CalendarGenerator):
    entry = generator.generate(["esi"], reference_date=REF, today=REF)[0]
    data = entry.to_dict()
    assert data["due_date"] == "2026-11-15"
    assert data["priority"] == "Medium"
    assert data["resources"] == [
        {"title": "ESIC Portal", "url": "https://www.esic.gov.in"}
    ]


def test_matched_profile_end_to_end(generator: CalendarGenerator):
    profile = BusinessProfile(
        business_type=BusinessType.SERVICE,
        state="Maharashtra",
        industry="IT/Software",
        turnover=TurnoverBracket.FROM_40L_TO_1CR,
        employees=EmployeeBracket.FROM_20_TO_49,
        msme_registered=True,
    )
    matched = ComplianceMatcher().match(profile)
    entries = generator.generate(matched, reference_date=REF, today=REF)
    assert {e.obligation_id for e in entries} == set(matched)
    assert [e.due_date for e in entries] == sorted(e.due_date for e in entries)
