"""
Rule Catalog: static obligation definitions.

Each obligation carries its applicability description, filing frequency,
and an ordered list of forms with their deadline recurrence rules.

The catalog is loaded once from the packaged JSON data (or an override
path) and handed out as a read-only object. Nothing here is cached at
module level; callers keep the handle and pass it to the engines.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "compliance_rules.json"


class CatalogUnavailableError(RuntimeError):
    """The Rule Catalog could not be loaded at all."""


class DeadlineKind(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    FIXED = "fixed"  # currently expanded exactly like ANNUAL


class Category(Enum):
    TAX = "Tax"
    LABOR = "Labor"
    STATUTORY = "Statutory"
    ENVIRONMENTAL = "Environmental"


@dataclass(frozen=True)
class Resource:
    title: str
    url: str


@dataclass(frozen=True)
class DeadlineRule:
    """
    Recurrence definition for a form.

    ``kind`` is normally a DeadlineKind; an unrecognised kind from the
    data is kept as the raw string so expansion can yield no dates for it.
    """

    kind: Union[DeadlineKind, str]
    day: Optional[int] = None  # day of month, 1-31
    formula: str = ""
    calculation: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeadlineRule":
        raw_kind = data["type"]
        try:
            kind: Union[DeadlineKind, str] = DeadlineKind(raw_kind)
        except ValueError:
            kind = str(raw_kind)
        day = data.get("day")
        return cls(
            kind=kind,
            day=int(day) if day is not None else None,
            formula=data.get("formula", ""),
            calculation=data.get("calculation", ""),
        )


@dataclass(frozen=True)
class FormSpec:
    """One filing requirement within an obligation."""

    name: str
    description: str
    deadline: DeadlineRule
    penalty: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormSpec":
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            deadline=DeadlineRule.from_dict(data["deadline"]),
            penalty=data.get("penalty", ""),
        )


@dataclass(frozen=True)
class Applicability:
    """Human-readable description of when an obligation applies."""

    condition: str
    threshold: Union[int, Mapping[str, int], None] = None
    states: tuple[str, ...] = ()


@dataclass(frozen=True)
class ObligationRule:
    """A single compliance obligation keyed by a stable id."""

    id: str
    name: str
    category: Category
    applicability: Applicability
    frequency: str
    forms: tuple[FormSpec, ...]
    resources: tuple[Resource, ...] = ()
    contribution: Optional[Mapping[str, str]] = None

    @classmethod
    def from_dict(cls, obligation_id: str, data: dict[str, Any]) -> "ObligationRule":
        applic = data.get("applicability", {})
        threshold = applic.get("threshold")
        if isinstance(threshold, dict):
            threshold = MappingProxyType(dict(threshold))
        contribution = data.get("contribution")
        return cls(
            id=data.get("id", obligation_id),
            name=data["name"],
            category=Category(data["category"]),
            applicability=Applicability(
                condition=applic.get("condition", ""),
                threshold=threshold,
                states=tuple(applic.get("states", ())),
            ),
            frequency=data.get("frequency", ""),
            forms=tuple(FormSpec.from_dict(f) for f in data.get("forms", [])),
            resources=tuple(
                Resource(title=r["title"], url=r["url"])
                for r in data.get("resources", [])
            ),
            contribution=(
                MappingProxyType(dict(contribution)) if contribution else None
            ),
        )


@dataclass(frozen=True)
class RuleCatalog:
    """
    Read-only collection of obligation rules.

    Safe to share between concurrent callers: neither the mapping nor the
    rules it holds can be mutated after construction.
    """

    _rules: Mapping[str, ObligationRule]
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "RuleCatalog":
        """
        Load the catalog from a JSON file (packaged data by default).

        Raises CatalogUnavailableError if the file is missing, unreadable,
        or not a valid catalog document.
        """
        catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
        try:
            raw = json.loads(catalog_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise CatalogUnavailableError(
                f"Cannot read compliance rules from {catalog_path}: {e}"
            ) from e
        except json.JSONDecodeError as e:
            raise CatalogUnavailableError(
                f"Compliance rules at {catalog_path} are not valid JSON: {e}"
            ) from e

        catalog = cls.from_dict(raw)
        logger.debug(
            "Loaded %d obligations from %s", len(catalog), catalog_path
        )
        return catalog

    @classmethod
    def from_dict(cls, data: Any) -> "RuleCatalog":
        """
        Build a catalog from already-parsed data.

        Malformed obligation entries are skipped with a warning. A document
        without a ``compliances`` table is rejected outright.
        """
        if not isinstance(data, dict) or not isinstance(
            data.get("compliances"), dict
        ):
            raise CatalogUnavailableError(
                "Compliance rules document has no 'compliances' table"
            )

        rules: dict[str, ObligationRule] = {}
        for obligation_id, entry in data["compliances"].items():
            try:
                rules[obligation_id] = ObligationRule.from_dict(
                    obligation_id, entry
                )
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(
                    "Skipping malformed compliance rule %r: %s",
                    obligation_id,
                    e,
                )

        return cls(
            _rules=MappingProxyType(rules),
            metadata=MappingProxyType(dict(data.get("metadata", {}))),
        )

    def get(self, obligation_id: str) -> Optional[ObligationRule]:
        return self._rules.get(obligation_id)

    def ids(self) -> list[str]:
        return list(self._rules)

    def obligations(self) -> list[ObligationRule]:
        return list(self._rules.values())

    def name_for(self, obligation_id: str) -> str:
        """Display name for an id, or the id itself if unknown."""
        rule = self._rules.get(obligation_id)
        return rule.name if rule else obligation_id

    def __contains__(self, obligation_id: object) -> bool:
        return obligation_id in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
