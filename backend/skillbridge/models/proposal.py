"""Proposal ORM — persists student funding requests.

Invariants:
    - id is UUID primary key (generated)
    - personal_info and funding_goals are required JSON blocks with required keys
    - funding_goals.amountRequested is a positive number
    - status is one of ProposalStatus; created as "submitted"
    - submitted_at set once on insert; updated_at refreshed on every update

Design Decisions:
    - JSON columns for the nested form blocks: the form evolves faster than the
      schema, and no query filters on nested fields
    - @validates guards mirror the request schema so direct service callers
      (scripts, seeds) cannot persist a malformed document
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from skillbridge.core.domain_types import ProposalStatus
from skillbridge.db.base import Base, ShapeViolation

_PERSONAL_REQUIRED = ("firstName", "lastName", "email")
_GOALS_REQUIRED = ("amountRequested", "purpose", "courseName", "institutionName")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Proposal(Base):
    """Funding proposal submitted by a student."""
    __tablename__ = "proposals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    personal_info: Mapped[dict] = mapped_column(JSON, nullable=False)
    funding_goals: Mapped[dict] = mapped_column(JSON, nullable=False)
    financial_info: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    essay_or_statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    supporting_documents: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProposalStatus.SUBMITTED.value,
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    @validates("personal_info")
    def _check_personal_info(self, key: str, value: dict) -> dict:
        _require_keys(key, value, _PERSONAL_REQUIRED)
        return value

    @validates("funding_goals")
    def _check_funding_goals(self, key: str, value: dict) -> dict:
        _require_keys(key, value, _GOALS_REQUIRED)
        amount = value["amountRequested"]
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
            raise ShapeViolation(
                f"{key}.amountRequested", "must be a positive number",
            )
        return value

    @validates("status")
    def _check_status(self, key: str, value: str) -> str:
        try:
            return ProposalStatus(value).value
        except ValueError:
            raise ShapeViolation(
                key, f"'{value}' is not a valid proposal status",
            )


def _require_keys(section: str, value: dict, required: tuple[str, ...]) -> None:
    if not isinstance(value, dict):
        raise ShapeViolation(section, "must be an object")
    for name in required:
        if value.get(name) in (None, ""):
            raise ShapeViolation(f"{section}.{name}", "Path is required")
