"""Ledger Routes — ETH price, currency conversion, governance votes, identity proofs.

Invariants:
    - eth-price and convert never fail on provider outages (fallback rates, isEstimate)
    - Governance proposals live in process memory (_proposals); votes mutate them
    - verify-zkp validates presence, then image hash format, then verifies;
      a rejected proof is 400 with the verifier's own {success, message} body

Design Decisions:
    - _proposals as module-level list: sample ledger data until a contract read
      replaces it; single-process deployment, state resets on restart
    - Settings injected via Depends(get_settings): tests override the proof delay
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from skillbridge.config import Settings, get_settings
from skillbridge.core import currency
from skillbridge.core.domain_types import Currency
from skillbridge.core.errors import (
    InvalidFieldError, MissingFieldError, ResourceNotFoundError,
)
from skillbridge.core.governance import cast_vote, find_proposal, sample_proposals
from skillbridge.core.identity_proof import is_valid_image_hash, verify_identity
from skillbridge.infrastructure.price_client import PriceClient, get_price_client
from skillbridge.schemas.base import require_fields
from skillbridge.schemas.blockchain import IdentityProofRequest, VoteCreate
from skillbridge.services.conversion import get_conversion_rates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/blockchain", tags=["blockchain"])

_proposals = sample_proposals()

_FORMATTERS = {
    Currency.ETH: currency.format_eth,
    Currency.USD: currency.format_usd,
    Currency.INR: currency.format_inr,
}


@router.get("/eth-price")
async def get_eth_price(
    response: Response, client: PriceClient = Depends(get_price_client),
):
    """Current ETH/USD quote from the first reachable provider."""
    quote = await client.fetch_eth_price()
    response.headers["Cache-Control"] = "s-maxage=60, stale-while-revalidate=300"
    return quote.to_dict()


@router.get("/convert")
async def convert(
    amount: float = Query(..., ge=0),
    source: Currency = Query(..., alias="from"),
    target: Currency = Query(..., alias="to"),
    client: PriceClient = Depends(get_price_client),
):
    rates = await get_conversion_rates(client)
    result = currency.convert_currency(amount, source, target, rates)
    return {
        "amount": amount,
        "from": source.value,
        "to": target.value,
        "result": result,
        "formatted": _FORMATTERS[target](result),
        "rates": rates.to_dict(),
    }


@router.get("/proposals")
async def get_governance_proposals(proposal_id: int | None = Query(None, alias="id")):
    if proposal_id is not None:
        proposal = find_proposal(_proposals, proposal_id)
        if not proposal:
            raise ResourceNotFoundError("Proposal", str(proposal_id))
        return {"success": True, "data": proposal.to_dict()}
    return {"success": True, "data": [p.to_dict() for p in _proposals]}


@router.post("/proposals")
async def vote_on_proposal(body: VoteCreate):
    require_fields(body, (
        ("proposal_id", "proposalId"), ("vote", "vote"), ("address", "address"),
    ))
    proposal = find_proposal(_proposals, body.proposal_id)
    if not proposal:
        raise ResourceNotFoundError("Proposal", str(body.proposal_id))
    cast_vote(proposal, body.vote)
    logger.info(f"Vote '{body.vote}' recorded on proposal {proposal.id} by {body.address}")
    return {
        "success": True,
        "message": "Vote recorded successfully",
        "data": proposal.to_dict(),
    }


@router.post("/verify-zkp")
async def verify_zkp(
    body: IdentityProofRequest, settings: Settings = Depends(get_settings),
):
    """Simulated zero-knowledge identity verification."""
    if not body.aadhar_number:
        raise MissingFieldError("aadharNumber")
    if not body.image_hash:
        raise MissingFieldError("imageHash")
    if not is_valid_image_hash(body.image_hash):
        raise InvalidFieldError("imageHash", "Invalid image hash format")

    await asyncio.sleep(settings.zkp_verification_delay_ms / 1000)

    result = verify_identity(body.aadhar_number, body.image_hash, settings.zkp_private_key)
    if not result.success:
        logger.warning("Identity verification rejected")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=result.to_dict(),
        )
    return result.to_dict()
