"""Funding Routes — proposal submission and lookup.

Invariants:
    - Submission body validated by ProposalCreate before the handler runs
    - Success is 201 with the stored document (including its generated id)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.domain_types import ProposalId
from skillbridge.infrastructure.database import get_db
from skillbridge.schemas.funding import ProposalCreate, ProposalResponse
from skillbridge.services.handle_funding import FundingHandlers

router = APIRouter(prefix="/api/v1/funding", tags=["funding"])


@router.post("/apply", status_code=status.HTTP_201_CREATED)
async def submit_proposal(
    body: ProposalCreate, db: AsyncSession = Depends(get_db),
):
    """Submit a funding proposal."""
    proposal = await FundingHandlers(db).submit_proposal(body)
    return {
        "success": True,
        "message": "Proposal submitted successfully!",
        "data": ProposalResponse.from_row(proposal).to_json(),
    }


@router.get("/proposals/{proposal_id}")
async def get_proposal(
    proposal_id: UUID, db: AsyncSession = Depends(get_db),
):
    proposal = await FundingHandlers(db).get_proposal(ProposalId(proposal_id))
    return {
        "success": True,
        "data": ProposalResponse.from_row(proposal).to_json(),
    }
