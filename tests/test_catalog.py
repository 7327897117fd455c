"""Tests for the Rule Catalog (loading, parsing, immutability)."""

import json
import logging

import pytest

from compliance_calendar.catalog import (
    CatalogUnavailableError,
    Category,
    DeadlineKind,
    DeadlineRule,
    RuleCatalog,
)


@pytest.fixture(scope="module")
def catalog() -> RuleCatalog:
    return RuleCatalog.load()


def _minimal_rule(**overrides) -> dict:
    rule = {
        "name": "Test Obligation",
        "category": "Tax",
        "applicability": {"condition": "Always"},
        "frequency": "monthly",
        "forms": [
            {
                "name": "Form A",
                "description": "A form",
                "deadline": {"type": "monthly", "day": 10},
                "penalty": "None",
            }
        ],
        "resources": [{"title": "Portal", "url": "https://example.gov.in"}],
    }
    rule.update(overrides)
    return rule


# ── Packaged data ───────────────────────────────────────────────────


def test_packaged_catalog_has_all_obligations(catalog: RuleCatalog):
    assert set(catalog.ids()) == {
        "gst",
        "epf",
        "esi",
        "professional-tax",
        "tds",
        "msme-annual-return",
        "msme-form-1",
        "income-tax",
        "tax-audit",
        "shops-establishments",
    }
    assert len(catalog) == 10


def test_gst_forms_and_deadlines(catalog: RuleCatalog):
    gst = catalog.get("gst")
    assert gst is not None
    assert gst.category == Category.TAX
    assert [f.name for f in gst.forms] == ["GSTR-1", "GSTR-3B", "GSTR-9"]
    gstr1 = gst.forms[0]
    assert gstr1.deadline.kind == DeadlineKind.MONTHLY
    assert gstr1.deadline.day == 11
    assert gst.applicability.threshold["services"] == 2_000_000


def test_professional_tax_lists_states(catalog: RuleCatalog):
    pt = catalog.get("professional-tax")
    assert "Maharashtra" in pt.applicability.states
    assert len(pt.applicability.states) == 17


def test_contribution_rates(catalog: RuleCatalog):
    assert catalog.get("epf").contribution["employer"] == "12%"
    assert catalog.get("tds").contribution is None


def test_every_form_has_known_deadline_kind(catalog: RuleCatalog):
    for rule in catalog.obligations():
        assert rule.forms
        for form in rule.forms:
            assert isinstance(form.deadline.kind, DeadlineKind)
            assert 1 <= form.deadline.day <= 31


def test_name_for(catalog: RuleCatalog):
    assert catalog.name_for("esi") == "Employees' State Insurance (ESI)"
    assert catalog.name_for("unknown") == "unknown"


def test_contains_and_iter(catalog: RuleCatalog):
    assert "gst" in catalog
    assert "vat" not in catalog
    assert list(catalog) == catalog.ids()


# ── Immutability ────────────────────────────────────────────────────


def test_catalog_mapping_is_read_only(catalog: RuleCatalog):
    with pytest.raises(TypeError):
        catalog._rules["new"] = catalog.get("gst")


def test_rules_are_frozen(catalog: RuleCatalog):
    with pytest.raises(AttributeError):
        catalog.get("gst").name = "Changed"


# ── Loading failures ────────────────────────────────────────────────


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(CatalogUnavailableError):
        RuleCatalog.load(tmp_path / "missing.json")


def test_invalid_json_is_fatal(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogUnavailableError):
        RuleCatalog.load(path)


def test_document_without_compliances_is_fatal():
    with pytest.raises(CatalogUnavailableError):
        RuleCatalog.from_dict({"metadata": {}})
    with pytest.raises(CatalogUnavailableError):
        RuleCatalog.from_dict([])


def test_load_from_custom_path(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps({"compliances": {"custom": _minimal_rule()}}),
        encoding="utf-8",
    )
    catalog = RuleCatalog.load(path)
    assert catalog.ids() == ["custom"]
    assert catalog.get("custom").id == "custom"


def test_malformed_entry_skipped_with_warning(caplog):
    data = {
        "compliances": {
            "good": _minimal_rule(),
            "bad-category": _minimal_rule(category="Fiscal"),
            "no-name": {"category": "Tax"},
        }
    }
    with caplog.at_level(logging.WARNING):
        catalog = RuleCatalog.from_dict(data)
    assert catalog.ids() == ["good"]
    assert "bad-category" in caplog.text
    assert "no-name" in caplog.text


# ── Deadline rules ──────────────────────────────────────────────────


def test_unknown_deadline_kind_preserved():
    rule = DeadlineRule.from_dict({"type": "weekly", "day": 3})
    assert rule.kind == "weekly"
    assert not isinstance(rule.kind, DeadlineKind)


def test_deadline_without_day():
    rule = DeadlineRule.from_dict({"type": "annual"})
    assert rule.kind == DeadlineKind.ANNUAL
    assert rule.day is None
