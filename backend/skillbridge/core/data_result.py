"""Data Result — explicit outcome of a read that may fall back to mock data.

Invariants:
    - Live carries whatever the data source returned, including None (record absent)
    - Fallback always carries the substitute value plus the reason the live read failed
    - is_fallback is the single flag callers branch on; no isinstance checks needed

Design Decisions:
    - Two frozen dataclasses over a (data, source) tuple: tests assert which path ran
      without inspecting log output
    - Generic over T: the same wrapper serves ORM rows, dicts and lists
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from skillbridge.core.domain_types import DataSource

T = TypeVar("T")


@dataclass(frozen=True)
class Live(Generic[T]):
    """Value read from the live data source."""
    data: T | None

    is_fallback = False
    source = DataSource.DATABASE

    @property
    def warning(self) -> str | None:
        return None


@dataclass(frozen=True)
class Fallback(Generic[T]):
    """Static substitute returned because the live read failed."""
    data: T
    reason: str

    is_fallback = True
    source = DataSource.MOCK

    @property
    def warning(self) -> str:
        return f"Using mock data due to database error ({self.reason})"


DataResult = Union[Live[T], Fallback[T]]
