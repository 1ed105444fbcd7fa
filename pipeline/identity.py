"""
Injectable clock and record-id generation for the ingestion pipeline.

The parser never reads the wall clock or a random source directly; it is
handed a Clock and an IdGenerator so tests can pin both.
"""
import secrets
import string
from datetime import datetime, timezone
from typing import Protocol

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class Clock(Protocol):
    def now(self) -> datetime:
        """Current time, timezone aware."""
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same instant. Used by tests and replays."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


class IdGenerator(Protocol):
    def next_id(self, row_number: int, issued_at: datetime) -> str:
        """Return a fresh id for the record built from data row row_number."""
        ...


class RandomIdGenerator:
    """
    Ids shaped like PO-<epoch ms>-<row number>-<random suffix>.

    The row number keeps ids unique within one parse call; the suffix keeps
    them apart across uploads made in the same millisecond.
    """

    def __init__(self, prefix: str = "PO", suffix_length: int = 7):
        self.prefix = prefix
        self.suffix_length = suffix_length

    def next_id(self, row_number: int, issued_at: datetime) -> str:
        millis = int(issued_at.timestamp() * 1000)
        suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(self.suffix_length))
        return f"{self.prefix}-{millis}-{row_number}-{suffix}"


class SequentialIdGenerator:
    """Deterministic ids: PO-000001, PO-000002, ... in issue order."""

    def __init__(self, prefix: str = "PO", start: int = 1):
        self.prefix = prefix
        self._next = start

    def next_id(self, row_number: int, issued_at: datetime) -> str:
        value = f"{self.prefix}-{self._next:06d}"
        self._next += 1
        return value
