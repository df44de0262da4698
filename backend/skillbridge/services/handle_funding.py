"""Funding Handlers — proposal submission and lookup.

Invariants:
    - New proposals always start in status "submitted"
    - Model-level shape violations surface as SchemaValidationError (400, per-field details)
    - Persistence failures propagate (write path never falls back to mock data)
"""

import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.domain_types import ProposalId, ProposalStatus
from skillbridge.core.errors import ResourceNotFoundError, SchemaValidationError
from skillbridge.db.base import ShapeViolation
from skillbridge.models.proposal import Proposal
from skillbridge.schemas.funding import ProposalCreate

logger = logging.getLogger(__name__)


class FundingHandlers:
    """Persistence handlers for funding proposals."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit_proposal(self, body: ProposalCreate) -> Proposal:
        """Persist a validated proposal with the initial status."""
        data = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        proposal = build_proposal(
            user_id=body.user_id,
            personal_info=data["personalInfo"],
            funding_goals=data["fundingGoals"],
            financial_info=data.get("financialInfo"),
            essay_or_statement=body.essay_or_statement,
            supporting_documents=data.get("supportingDocuments", []),
        )
        self.db.add(proposal)
        await self.db.commit()
        await self.db.refresh(proposal)
        logger.info(
            "Proposal submitted", extra={"proposal_id": str(proposal.id)},
        )
        return proposal

    async def get_proposal(self, proposal_id: ProposalId) -> Proposal:
        result = await self.db.execute(
            select(Proposal).where(Proposal.id == proposal_id),
        )
        proposal = result.scalar_one_or_none()
        if not proposal:
            raise ResourceNotFoundError("Proposal", str(proposal_id))
        return proposal


def build_proposal(
    *,
    personal_info: dict,
    funding_goals: dict,
    user_id: str | None = None,
    financial_info: dict | None = None,
    essay_or_statement: str | None = None,
    supporting_documents: list | None = None,
    status: str = ProposalStatus.SUBMITTED.value,
) -> Proposal:
    """Construct a Proposal row, mapping model validator failures to SchemaValidationError."""
    try:
        return Proposal(
            user_id=user_id,
            personal_info=personal_info,
            funding_goals=funding_goals,
            financial_info=financial_info,
            essay_or_statement=essay_or_statement,
            supporting_documents=supporting_documents or [],
            status=status,
        )
    except ShapeViolation as e:
        logger.warning(f"Proposal rejected by schema: {e}")
        raise SchemaValidationError([{"field": e.field, "message": e.message}])
