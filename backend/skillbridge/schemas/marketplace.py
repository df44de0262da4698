"""Marketplace Schemas — read-only catalog entries."""

from pydantic import Field

from skillbridge.schemas.base import CamelModel


class MarketplaceItemResponse(CamelModel):
    item_id: str
    type: str
    title: str
    provider: str
    course_id: str
    image: str
    description: str
    price: float
    rating: float
    review_count: int
    featured: bool
    skills: list[str] = Field(default_factory=list)
