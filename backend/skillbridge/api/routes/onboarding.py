"""Onboarding Routes — signup profile submission and lookup.

Invariants:
    - Writes never fall back: validation errors are 400, persistence errors 5xx
    - Reads go through fetch_or_fallback: outage -> mock record + warning (200),
      record absent -> 404, found -> 200 with source "database"
    - userId is required on reads (400 when absent)
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.domain_types import ExternalUserId, OnboardingRole
from skillbridge.core.errors import (
    BusinessRuleError, MissingFieldError, ResourceNotFoundError,
)
from skillbridge.core.onboarding_profile import detect_role
from skillbridge.infrastructure.database import (
    DatabaseSessionManager, get_db, get_db_manager,
)
from skillbridge.schemas.onboarding import (
    StudentOnboardingResponse, InvestorOnboardingResponse,
)
from skillbridge.services.fallback import fetch_or_fallback
from skillbridge.services.handle_onboarding import (
    OnboardingHandlers, find_student_onboarding, find_investor_onboarding,
)
from skillbridge.services.mock_data import MOCK_STUDENT, MOCK_INVESTOR

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/onboarding", tags=["onboarding"])

_RESPONSE_SCHEMAS = {
    OnboardingRole.STUDENT: StudentOnboardingResponse,
    OnboardingRole.INVESTOR: InvestorOnboardingResponse,
}


async def _submit(role: OnboardingRole, payload: dict, db: AsyncSession) -> dict:
    record = await OnboardingHandlers(db).submit(role, payload)
    return {
        "success": True,
        "message": f"{role.value.capitalize()} onboarding completed successfully",
        "data": _RESPONSE_SCHEMAS[role].from_row(record).to_json(),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_onboarding(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Role-detecting onboarding: accepts flat or nested student/investor forms."""
    role = detect_role(payload)
    if role is None:
        raise BusinessRuleError(
            "User role ('student' or 'investor') is required in data payload.",
            "ROLE_REQUIRED",
        )
    return await _submit(role, payload, db)


@router.post("/student", status_code=status.HTTP_201_CREATED)
async def submit_student_onboarding(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    return await _submit(OnboardingRole.STUDENT, payload, db)


@router.post("/investor", status_code=status.HTTP_201_CREATED)
async def submit_investor_onboarding(
    payload: dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    return await _submit(OnboardingRole.INVESTOR, payload, db)


@router.get("/student/data")
async def get_student_onboarding(
    user_id: str | None = Query(None, alias="userId"),
    manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Student profile by identity-provider user id, mock record on outage."""
    return await _read(
        find_student_onboarding, MOCK_STUDENT, manager, user_id,
        "Student onboarding data",
    )


@router.get("/investor/data")
async def get_investor_onboarding(
    user_id: str | None = Query(None, alias="userId"),
    manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Investor profile by identity-provider user id, mock record on outage."""
    return await _read(
        find_investor_onboarding, MOCK_INVESTOR, manager, user_id,
        "Investor onboarding data",
    )


async def _read(fetch, mock, manager, user_id: str | None, resource: str) -> dict:
    if not user_id:
        raise MissingFieldError("userId")
    result = await fetch_or_fallback(
        fetch, mock, manager=manager, user_id=ExternalUserId(user_id),
    )
    if result.data is None:
        raise ResourceNotFoundError(resource, user_id)
    response = {
        "success": True,
        "data": result.data.to_json(),
        "source": result.source.value,
    }
    if result.is_fallback:
        response["warning"] = result.warning
    return response
