"""Marketplace Handlers — read-only catalog queries.

Invariants:
    - No fallback: connection or query failures propagate as server errors
    - Listing order is featured first, then title
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.errors import ResourceNotFoundError
from skillbridge.models.marketplace_item import MarketplaceItem


class MarketplaceHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_items(self) -> list[MarketplaceItem]:
        result = await self.db.execute(
            select(MarketplaceItem).order_by(
                MarketplaceItem.featured.desc(), MarketplaceItem.title,
            ),
        )
        return list(result.scalars().all())

    async def get_item(self, item_id: str) -> MarketplaceItem:
        result = await self.db.execute(
            select(MarketplaceItem).where(MarketplaceItem.item_id == item_id),
        )
        item = result.scalar_one_or_none()
        if not item:
            raise ResourceNotFoundError("Marketplace item", item_id)
        return item
