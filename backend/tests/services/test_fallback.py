"""Fallback Reads — live results pass through, failures become mock results."""

from skillbridge.core.errors import DatabaseConnectionError
from skillbridge.services.fallback import fetch_or_fallback

MOCK = {"name": "Mock Student"}


async def test_live_value_passes_through():
    async def fetch(user_id):
        return {"name": f"record for {user_id}"}

    result = await fetch_or_fallback(fetch, MOCK, user_id="u1")

    assert not result.is_fallback
    assert result.data == {"name": "record for u1"}


async def test_absent_record_is_live_none():
    async def fetch(user_id):
        return None

    result = await fetch_or_fallback(fetch, MOCK, user_id="u1")

    assert not result.is_fallback
    assert result.data is None


async def test_failure_returns_mock_with_reason():
    async def fetch(user_id):
        raise DatabaseConnectionError(3)

    result = await fetch_or_fallback(fetch, MOCK, user_id="u1")

    assert result.is_fallback
    assert result.data is MOCK
    assert result.reason == "DatabaseConnectionError"
