"""Blockchain Connection Routes — proposal linkage and donation recording.

Invariants:
    - GET lists all connections, or one by ?studentId= (404 when unlinked)
    - POST links (201), duplicate link is 409 with the original connection in data
    - PUT appends a transaction (200), unlinked proposal is 404
    - Other methods are 405 (router only registers GET/POST/PUT)
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.infrastructure.database import get_db
from skillbridge.schemas.blockchain import (
    ConnectionCreate, ConnectionResponse, TransactionCreate,
)
from skillbridge.services.handle_connections import ConnectionHandlers

router = APIRouter(prefix="/api/v1/blockchain/connections", tags=["blockchain"])


@router.get("")
async def get_connections(
    student_id: str | None = Query(None, alias="studentId"),
    db: AsyncSession = Depends(get_db),
):
    handlers = ConnectionHandlers(db)
    if student_id:
        connection = await handlers.get_connection(student_id)
        return {"success": True, "data": ConnectionResponse.from_row(connection).to_json()}
    connections = await handlers.list_connections()
    return {
        "success": True,
        "data": [ConnectionResponse.from_row(c).to_json() for c in connections],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_connection(
    body: ConnectionCreate, db: AsyncSession = Depends(get_db),
):
    connection = await ConnectionHandlers(db).create_connection(body)
    return {
        "success": True,
        "message": "Connection created successfully",
        "data": ConnectionResponse.from_row(connection).to_json(),
    }


@router.put("")
async def record_transaction(
    body: TransactionCreate, db: AsyncSession = Depends(get_db),
):
    connection = await ConnectionHandlers(db).record_transaction(body)
    return {
        "success": True,
        "message": "Transaction recorded successfully",
        "data": ConnectionResponse.from_row(connection).to_json(),
    }
