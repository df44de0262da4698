"""Funding Schemas — proposal submission contract.

Invariants:
    - personalInfo {firstName, lastName, email} and fundingGoals {amountRequested,
      purpose, courseName, institutionName} are required and non-blank
    - amountRequested > 0; studyDurationMonths >= 1 when given
    - financialInfo, essayOrStatement, supportingDocuments are optional
    - status is never accepted from the client (always starts as "submitted")
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from skillbridge.core.domain_types import ProposalStatus
from skillbridge.schemas.base import CamelModel


class PersonalInfo(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=320)
    phone: str | None = Field(None, max_length=40)
    address: str | None = Field(None, max_length=500)

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class FundingGoals(CamelModel):
    amount_requested: float = Field(gt=0)
    purpose: str = Field(min_length=1, max_length=200)
    course_name: str = Field(min_length=1, max_length=300)
    institution_name: str = Field(min_length=1, max_length=300)
    study_duration_months: int | None = Field(None, ge=1)


class FinancialInfo(CamelModel):
    annual_income: float | None = Field(None, ge=0)
    has_collateral: bool | None = None
    credit_score: int | None = Field(None, ge=0)


class SupportingDocument(CamelModel):
    document_type: str = Field(min_length=1, max_length=100)
    url: str = Field(min_length=1, max_length=2000)


class ProposalCreate(CamelModel):
    """Proposal submission — nested blocks validated individually."""
    user_id: str | None = None
    personal_info: PersonalInfo
    funding_goals: FundingGoals
    financial_info: FinancialInfo | None = None
    essay_or_statement: str | None = Field(None, max_length=20_000)
    supporting_documents: list[SupportingDocument] = Field(default_factory=list)


class ProposalResponse(CamelModel):
    id: UUID
    user_id: str | None = None
    personal_info: dict
    funding_goals: dict
    financial_info: dict | None = None
    essay_or_statement: str | None = None
    supporting_documents: list[dict] = Field(default_factory=list)
    status: ProposalStatus
    submitted_at: datetime
    updated_at: datetime
