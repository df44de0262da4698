"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - No cross-entity foreign keys except connection -> transactions

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from skillbridge.models.proposal import Proposal  # noqa: F401
from skillbridge.models.onboarding import StudentOnboarding, InvestorOnboarding  # noqa: F401
from skillbridge.models.marketplace_item import MarketplaceItem  # noqa: F401
from skillbridge.models.blockchain_connection import (  # noqa: F401
    BlockchainConnection, LedgerTransaction,
)
