"""Onboarding Schemas — normalized student/investor profiles and their responses.

Invariants:
    - Create models validate the output of core/onboarding_profile normalization
    - Response models are also the shape of the mock records (id is None there)
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from skillbridge.core.domain_types import RiskAppetite
from skillbridge.schemas.base import CamelModel


class StudentOnboardingCreate(CamelModel):
    user_id: str | None = Field(None, max_length=255)
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    institution: str = Field(min_length=1, max_length=300)
    course_of_study: str = Field("", max_length=300)
    year_of_study: str = Field("", max_length=50)
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    onboarding_data: dict[str, Any] = Field(default_factory=dict)


class InvestorOnboardingCreate(CamelModel):
    user_id: str | None = Field(None, max_length=255)
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    company: str = Field(min_length=1, max_length=300)
    position: str = Field("", max_length=200)
    investment_focus: list[str] = Field(default_factory=list)
    investment_stage: str = Field("", max_length=100)
    portfolio_size: str = Field("", max_length=100)
    risk_appetite: RiskAppetite | None = None
    onboarding_data: dict[str, Any] = Field(default_factory=dict)


class StudentOnboardingResponse(CamelModel):
    id: UUID | None = None
    user_id: str | None = None
    name: str
    email: str
    institution: str
    course_of_study: str = ""
    year_of_study: str = ""
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    onboarding_data: dict[str, Any] = Field(default_factory=dict)
    completed_at: datetime | None = None


class InvestorOnboardingResponse(CamelModel):
    id: UUID | None = None
    user_id: str | None = None
    name: str
    email: str
    company: str
    position: str = ""
    investment_focus: list[str] = Field(default_factory=list)
    investment_stage: str = ""
    portfolio_size: str = ""
    risk_appetite: RiskAppetite | None = None
    onboarding_data: dict[str, Any] = Field(default_factory=dict)
    completed_at: datetime | None = None
