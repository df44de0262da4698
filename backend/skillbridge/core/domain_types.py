"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProposalId wraps the proposal UUID; ExternalUserId wraps the identity-provider id
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProposalId = NewType("ProposalId", UUID)
ExternalUserId = NewType("ExternalUserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ProposalStatus(str, Enum):
    """Funding proposal lifecycle — maps to DB `status` column."""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class OnboardingRole(str, Enum):
    """The two onboarding record variants."""
    STUDENT = "student"
    INVESTOR = "investor"


class RiskAppetite(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Currency(str, Enum):
    """Currencies supported by the converter. USD is the pivot."""
    ETH = "ETH"
    USD = "USD"
    INR = "INR"


class GovernanceStatus(str, Enum):
    """Ledger-side proposal states. Only ACTIVE accepts votes."""
    ACTIVE = "active"
    COMPLETED = "completed"
    REJECTED = "rejected"


class VoteChoice(str, Enum):
    YES = "yes"
    NO = "no"


class DataSource(str, Enum):
    """Where a read result came from."""
    DATABASE = "database"
    MOCK = "mock"
