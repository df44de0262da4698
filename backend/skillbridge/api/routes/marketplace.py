"""Marketplace Routes — catalog listing.

Invariants:
    - Empty catalog is a 200 with an explicit "no items" message, not an error
    - No mock fallback: database failures are server errors
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.infrastructure.database import get_db
from skillbridge.schemas.marketplace import MarketplaceItemResponse
from skillbridge.services.handle_marketplace import MarketplaceHandlers

router = APIRouter(prefix="/api/v1/marketplace", tags=["marketplace"])

NO_ITEMS_MESSAGE = "No marketplace items found in database"


@router.get("")
async def list_marketplace_items(db: AsyncSession = Depends(get_db)):
    items = await MarketplaceHandlers(db).list_items()
    if not items:
        return {"success": True, "message": NO_ITEMS_MESSAGE, "data": []}
    return {
        "success": True,
        "data": [MarketplaceItemResponse.from_row(i).to_json() for i in items],
    }


@router.get("/{item_id}")
async def get_marketplace_item(item_id: str, db: AsyncSession = Depends(get_db)):
    item = await MarketplaceHandlers(db).get_item(item_id)
    return {"success": True, "data": MarketplaceItemResponse.from_row(item).to_json()}
