"""Connection Handlers — link student proposals to ledger proposals, record donations.

Invariants:
    - unlinked -> linked via create; create on a linked proposal raises
      ConnectionExistsError carrying the original connection unchanged
    - Transactions appended only to an existing connection, positions 0, 1, 2, ...
    - Nothing here deletes a connection or a transaction
    - Required fields checked in declaration order; the first missing one is reported

Design Decisions:
    - Uniqueness checked with a read before insert; a concurrent duplicate that slips
      past the read hits the unique constraint and is reported as the same conflict
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.errors import (
    ConnectionExistsError, ResourceNotFoundError,
)
from skillbridge.models.blockchain_connection import (
    BlockchainConnection, LedgerTransaction,
)
from skillbridge.schemas.base import require_fields
from skillbridge.schemas.blockchain import (
    ConnectionCreate, ConnectionResponse, TransactionCreate,
)

logger = logging.getLogger(__name__)


class ConnectionHandlers:
    """Persistence handlers for blockchain connections."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_connections(self) -> list[BlockchainConnection]:
        result = await self.db.execute(
            select(BlockchainConnection).order_by(BlockchainConnection.created_at),
        )
        return list(result.scalars().all())

    async def get_connection(self, student_proposal_id: str) -> BlockchainConnection:
        connection = await self._find(student_proposal_id)
        if not connection:
            raise ResourceNotFoundError("Connection", student_proposal_id)
        return connection

    async def create_connection(self, body: ConnectionCreate) -> BlockchainConnection:
        require_fields(body, (
            ("student_proposal_id", "studentProposalId"),
            ("blockchain_proposal_id", "blockchainProposalId"),
            ("title", "title"),
            ("eth_amount", "ethAmount"),
        ))
        existing = await self._find(body.student_proposal_id)
        if existing:
            raise _conflict(existing)

        connection = BlockchainConnection(
            student_proposal_id=body.student_proposal_id,
            blockchain_proposal_id=body.blockchain_proposal_id,
            title=body.title,
            eth_amount=body.eth_amount,
            transactions=[],
        )
        self.db.add(connection)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._find(body.student_proposal_id)
            if not existing:
                raise
            raise _conflict(existing)
        logger.info(
            "Blockchain connection created",
            extra={"student_proposal_id": connection.student_proposal_id},
        )
        return connection

    async def record_transaction(self, body: TransactionCreate) -> BlockchainConnection:
        require_fields(body, (
            ("student_proposal_id", "studentProposalId"),
            ("tx_hash", "txHash"),
            ("sender", "from"),
            ("amount", "amount"),
        ))
        connection = await self._find(body.student_proposal_id)
        if not connection:
            raise ResourceNotFoundError("Connection", body.student_proposal_id)

        connection.transactions.append(LedgerTransaction(
            position=len(connection.transactions),
            tx_hash=body.tx_hash,
            sender=body.sender,
            amount=str(body.amount),
        ))
        connection.updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        logger.info(
            "Transaction recorded",
            extra={"student_proposal_id": connection.student_proposal_id},
        )
        return connection

    async def _find(self, student_proposal_id: str) -> BlockchainConnection | None:
        result = await self.db.execute(
            select(BlockchainConnection).where(
                BlockchainConnection.student_proposal_id == student_proposal_id,
            ),
        )
        return result.scalar_one_or_none()


def _conflict(existing: BlockchainConnection) -> ConnectionExistsError:
    return ConnectionExistsError(
        existing.student_proposal_id,
        ConnectionResponse.from_row(existing).to_json(),
    )
