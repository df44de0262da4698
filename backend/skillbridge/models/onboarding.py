"""Onboarding ORM — one record per user, captured once during signup.

Invariants:
    - Two variants (student, investor) in separate tables
    - user_id holds the identity provider's user id (indexed, lookups by it)
    - onboarding_data is an untyped catch-all for form fields without a column
    - completed_at is the only timestamp; records are never updated or deleted

Design Decisions:
    - Separate tables over single-table inheritance: the variants share only
      identity and contact fields, and reads never mix them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy.dialects.postgresql import UUID

from skillbridge.core.domain_types import RiskAppetite
from skillbridge.db.base import Base, ShapeViolation


class StudentOnboarding(Base):
    """Student signup profile."""
    __tablename__ = "student_onboardings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    institution: Mapped[str] = mapped_column(String(300), nullable=False)
    course_of_study: Mapped[str] = mapped_column(
        String(300), nullable=False, default="",
    )
    year_of_study: Mapped[str] = mapped_column(
        String(50), nullable=False, default="",
    )
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    interests: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    onboarding_data: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class InvestorOnboarding(Base):
    """Investor signup profile."""
    __tablename__ = "investor_onboardings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    company: Mapped[str] = mapped_column(String(300), nullable=False)
    position: Mapped[str] = mapped_column(
        String(200), nullable=False, default="",
    )
    investment_focus: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    investment_stage: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    portfolio_size: Mapped[str] = mapped_column(
        String(100), nullable=False, default="",
    )
    risk_appetite: Mapped[str | None] = mapped_column(
        String(10), nullable=True,
    )
    onboarding_data: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @validates("risk_appetite")
    def _check_risk_appetite(self, key: str, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return RiskAppetite(value).value
        except ValueError:
            raise ShapeViolation(key, f"'{value}' is not one of low, medium, high")
