"""Onboarding Handlers — normalize, validate and persist signup profiles; read them back.

Invariants:
    - submit() validates in two steps: first missing required field (MissingFieldError),
      then full schema (SchemaValidationError with every violation)
    - Unknown form keys land in onboarding_data, never dropped
    - Reads take the connection manager, not a session, so a failed handshake is
      catchable by the fallback wrapper
    - Lookup returns the most recent record for a user id, or None
"""

import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.domain_types import ExternalUserId, OnboardingRole
from skillbridge.core.errors import MissingFieldError, SchemaValidationError
from skillbridge.core.onboarding_profile import (
    STUDENT_REQUIRED, INVESTOR_REQUIRED,
    normalize_student, normalize_investor, first_missing,
)
from skillbridge.db.base import ShapeViolation
from skillbridge.infrastructure.database import DatabaseSessionManager
from skillbridge.models.onboarding import StudentOnboarding, InvestorOnboarding
from skillbridge.schemas.base import describe_violations
from skillbridge.schemas.onboarding import (
    StudentOnboardingCreate, InvestorOnboardingCreate,
    StudentOnboardingResponse, InvestorOnboardingResponse,
)

logger = logging.getLogger(__name__)

_VARIANTS = {
    OnboardingRole.STUDENT: (
        normalize_student, STUDENT_REQUIRED, StudentOnboardingCreate, StudentOnboarding,
    ),
    OnboardingRole.INVESTOR: (
        normalize_investor, INVESTOR_REQUIRED, InvestorOnboardingCreate, InvestorOnboarding,
    ),
}


class OnboardingHandlers:
    """Write-side handlers for onboarding records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(
        self, role: OnboardingRole, payload: dict,
    ) -> StudentOnboarding | InvestorOnboarding:
        normalize, required, schema, model = _VARIANTS[role]
        profile = normalize(payload)
        missing = first_missing(profile, required)
        if missing:
            raise MissingFieldError(missing)
        try:
            validated = schema.model_validate(profile)
            record = model(**validated.model_dump(mode="json"))
        except ValidationError as e:
            raise SchemaValidationError(describe_violations(e.errors()))
        except ShapeViolation as e:
            raise SchemaValidationError([{"field": e.field, "message": e.message}])

        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        logger.info(
            f"{role.value.capitalize()} onboarding saved",
            extra={"role": role.value, "user_id": record.user_id},
        )
        return record


async def find_student_onboarding(
    manager: DatabaseSessionManager, user_id: ExternalUserId,
) -> StudentOnboardingResponse | None:
    row = await _find_latest(manager, StudentOnboarding, user_id)
    return StudentOnboardingResponse.from_row(row) if row else None


async def find_investor_onboarding(
    manager: DatabaseSessionManager, user_id: ExternalUserId,
) -> InvestorOnboardingResponse | None:
    row = await _find_latest(manager, InvestorOnboarding, user_id)
    return InvestorOnboardingResponse.from_row(row) if row else None


async def _find_latest(manager: DatabaseSessionManager, model, user_id: ExternalUserId):
    await manager.connect()
    async with manager.session() as db:
        result = await db.execute(
            select(model)
            .where(model.user_id == user_id)
            .order_by(model.completed_at.desc())
            .limit(1),
        )
        return result.scalar_one_or_none()
