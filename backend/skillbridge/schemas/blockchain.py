"""Blockchain Schemas — proposal linkage, transactions, votes and identity proofs.

Invariants:
    - Request models declare every field optional so the route can report the
      first missing field as a 400 in the linkage contract's own words
    - Transaction "from" is exposed under that name on the wire, "sender" in Python
    - Transaction amount keeps its JSON type until stored: integers never pass
      through float, so wei-sized values are stored digit for digit
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, StrictFloat, StrictInt, StrictStr

from skillbridge.schemas.base import CamelModel


class ConnectionCreate(CamelModel):
    student_proposal_id: str | None = None
    blockchain_proposal_id: int | None = None
    title: str | None = None
    eth_amount: float | None = Field(None, gt=0)


class TransactionCreate(CamelModel):
    student_proposal_id: str | None = None
    tx_hash: str | None = None
    sender: str | None = Field(None, alias="from")
    amount: StrictStr | StrictInt | StrictFloat | None = None


class TransactionResponse(CamelModel):
    tx_hash: str
    sender: str = Field(serialization_alias="from")
    amount: str
    recorded_at: datetime = Field(serialization_alias="timestamp")


class ConnectionResponse(CamelModel):
    id: UUID
    student_proposal_id: str
    blockchain_proposal_id: int
    title: str
    eth_amount: float
    transactions: list[TransactionResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row):
        return cls(
            id=row.id,
            student_proposal_id=row.student_proposal_id,
            blockchain_proposal_id=row.blockchain_proposal_id,
            title=row.title,
            eth_amount=row.eth_amount,
            transactions=[TransactionResponse.from_row(t) for t in row.transactions],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class VoteCreate(CamelModel):
    proposal_id: int | None = None
    vote: str | None = None
    address: str | None = None


class IdentityProofRequest(CamelModel):
    aadhar_number: str | None = None
    image_hash: str | None = None
