"""Fallback Reads — run a live fetch, substitute a static mock value on any failure.

Invariants:
    - Never raises: every exception from fetch becomes Fallback(mock, reason)
    - A fetch that returns None is Live(None), not a fallback (record absent != outage)
    - Every substitution logs a warning naming the exception type

Design Decisions:
    - Returns Live/Fallback (core/data_result.py) instead of the bare value so
      routes can flag mock responses and tests can assert which path ran
    - Read paths only: write paths must surface persistence failures
"""

import logging
from typing import Any, Awaitable, Callable, TypeVar

from skillbridge.core.data_result import DataResult, Fallback, Live

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_or_fallback(
    fetch: Callable[..., Awaitable[T | None]],
    mock: T,
    **params: Any,
) -> DataResult[T]:
    """Await fetch(**params); on failure return the mock value instead."""
    try:
        return Live(await fetch(**params))
    except Exception as e:
        reason = type(e).__name__
        logger.warning(
            f"Falling back to mock data: {reason}: {e}",
            extra={"source": "mock", "error_code": getattr(e, "code", None)},
        )
        return Fallback(data=mock, reason=reason)
