"""Heuristic index candidate selection from a sample document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from json2nosql.indexes.rules import (
    COMPOUND_INDEX_WIDTH,
    DATE_PREFIX,
    ID_MARKERS,
    ID_SUFFIXES,
    IDENTITY_MARKERS,
    REASON_ID,
    REASON_IDENTITY,
    REASON_TEMPORAL,
    TEMPORAL_MARKERS,
)
from json2nosql.serialize.literals import is_date_value


@dataclass(frozen=True)
class IndexCandidate:
    """Single field suggested for indexing, with the heuristics it matched."""

    field: str
    reasons: list[str]


@dataclass(frozen=True)
class IndexAdvice:
    """Ordered, de-duplicated index candidates for a sample document."""

    candidates: list[IndexCandidate] = field(default_factory=list)

    @property
    def fields(self) -> list[str]:
        return [item.field for item in self.candidates]

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidates)

    @property
    def compound(self) -> list[str] | None:
        if len(self.candidates) < COMPOUND_INDEX_WIDTH:
            return None
        return self.fields[:COMPOUND_INDEX_WIDTH]


def sample_document(document: Any) -> dict[str, Any] | None:
    """Pick the document the heuristics run against."""
    if isinstance(document, list):
        if not document or not isinstance(document[0], dict):
            return None
        return document[0]
    if isinstance(document, dict):
        return document
    return None


def _match_reasons(key: str, value: Any) -> list[str]:
    lowered = key.lower()
    reasons: list[str] = []
    if any(marker in lowered for marker in ID_MARKERS) or lowered.endswith(ID_SUFFIXES):
        reasons.append(REASON_ID)
    if (
        any(marker in lowered for marker in TEMPORAL_MARKERS)
        or is_date_value(value)
        or (isinstance(value, str) and DATE_PREFIX.match(value) is not None)
    ):
        reasons.append(REASON_TEMPORAL)
    if any(marker in lowered for marker in IDENTITY_MARKERS):
        reasons.append(REASON_IDENTITY)
    return reasons


def advise_indexes(document: Any) -> IndexAdvice:
    """Suggest index fields for ``document`` (its first element if a list)."""
    sample = sample_document(document)
    if sample is None:
        return IndexAdvice()

    candidates: list[IndexCandidate] = []
    for key, value in sample.items():
        reasons = _match_reasons(key, value)
        if reasons:
            candidates.append(IndexCandidate(field=key, reasons=reasons))
    return IndexAdvice(candidates=candidates)
