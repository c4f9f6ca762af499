"""Injectable clock and ID sources used by the emitters."""

from __future__ import annotations

import random
import string
from abc import ABC, abstractmethod
from datetime import UTC, datetime

_SHORT_ID_ALPHABET = string.digits + string.ascii_lowercase
SHORT_ID_LENGTH = 8


class Clock(ABC):
    """Source of the generation instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as an aware UTC datetime."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(tz=UTC)


class IdSource(ABC):
    """Source of synthetic primary-key values."""

    @abstractmethod
    def object_id(self) -> str:
        """Return a 24-character hexadecimal ObjectId-style identifier."""

    @abstractmethod
    def short_id(self) -> str:
        """Return a short lowercase alphanumeric identifier."""


class RandomIdSource(IdSource):
    """Random identifiers; seeding makes the sequence reproducible."""

    def __init__(self, seed: int | None = None, clock: Clock | None = None) -> None:
        self._random = random.Random(seed)
        self._clock = clock or SystemClock()

    def object_id(self) -> str:
        # timestamp(4 bytes) + machine(3) + process(2) + counter(3), hex encoded
        timestamp = int(self._clock.now().timestamp())
        return (
            f"{timestamp & 0xFFFFFFFF:08x}"
            f"{self._random.randrange(0x1000000):06x}"
            f"{self._random.randrange(0x10000):04x}"
            f"{self._random.randrange(0x1000000):06x}"
        )

    def short_id(self) -> str:
        return "".join(
            self._random.choice(_SHORT_ID_ALPHABET) for _ in range(SHORT_ID_LENGTH)
        )
