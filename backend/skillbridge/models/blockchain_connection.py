"""BlockchainConnection ORM — links a student proposal to a ledger proposal.

Invariants:
    - At most one connection per student_proposal_id (unique constraint)
    - transactions are append-only, ordered by position (0, 1, 2, ...)
    - No delete path for connections or transactions

Design Decisions:
    - Child table over a JSON array: append is an INSERT, never a read-modify-write
      of the whole list
    - position assigned from the loaded list length: single writer per request,
      the unique (connection_id, position) constraint rejects a racing duplicate
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Integer, Float, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from skillbridge.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlockchainConnection(Base):
    """Mapping from an internal proposal id to a ledger proposal id."""
    __tablename__ = "blockchain_connections"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    student_proposal_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    blockchain_proposal_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    eth_amount: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    transactions: Mapped[list["LedgerTransaction"]] = relationship(
        "LedgerTransaction", back_populates="connection",
        order_by="LedgerTransaction.position",
        cascade="all", lazy="selectin",
    )


class LedgerTransaction(Base):
    """One donation recorded against a connection."""
    __tablename__ = "ledger_transactions"
    __table_args__ = (
        UniqueConstraint("connection_id", "position", name="uq_ledger_tx_position"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    connection_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("blockchain_connections.id"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    tx_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    sender: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[str] = mapped_column(String(100), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    connection: Mapped[BlockchainConnection] = relationship(
        BlockchainConnection, back_populates="transactions",
    )
