"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from json2nosql.config import Settings
from json2nosql.emitters import Emitter, create_emitter
from json2nosql.generator import generate_artifact
from json2nosql.models.artifact import GeneratedArtifact
from json2nosql.sources import Clock, IdSource

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

_ENV_VARS = (
    "JSON2NOSQL_DEFAULT_DB_NAME",
    "JSON2NOSQL_DEFAULT_BACKEND",
    "JSON2NOSQL_DEFAULT_STRUCTURE",
    "JSON2NOSQL_STRICT_STRUCTURE",
    "JSON2NOSQL_LOG_LEVEL",
)


class SequentialIdSource(IdSource):
    """Predictable IDs: ObjectIds 00..01, 00..02 and short ids id000001, ..."""

    def __init__(self) -> None:
        self.counter = 0

    def object_id(self) -> str:
        self.counter += 1
        return f"{self.counter:024x}"

    def short_id(self) -> str:
        self.counter += 1
        return f"id{self.counter:06d}"


class FixedClock(Clock):
    def __init__(self, instant: datetime = FIXED_NOW) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_emitter() -> Callable[..., Emitter]:
    """Build an emitter with fresh deterministic ID and clock stubs."""

    def _make(backend: str, settings: Settings | None = None) -> Emitter:
        return create_emitter(
            backend,
            id_source=SequentialIdSource(),
            clock=FixedClock(),
            settings=settings,
        )

    return _make


@pytest.fixture
def generate_fixed() -> Callable[..., GeneratedArtifact]:
    """Run the full pipeline with fresh deterministic ID and clock stubs."""

    def _generate(document, backend, structure, options=None, **kwargs) -> GeneratedArtifact:
        kwargs.setdefault("id_source", SequentialIdSource())
        kwargs.setdefault("clock", FixedClock())
        return generate_artifact(document, backend, structure, options, **kwargs)

    return _generate
