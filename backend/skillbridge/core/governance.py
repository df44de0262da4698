"""Governance Proposals — ledger-side sample proposals and vote tallying.

Invariants:
    - Only ACTIVE proposals accept votes
    - A vote increments exactly one counter (yes or no)
    - sample_proposals() returns fresh objects on every call

Design Decisions:
    - Sample data instead of a contract read: the ledger contract is not deployed
      for this service, votes are tallied in-process
    - cast_vote raises domain errors; the route decides status codes via the global handler
"""

from dataclasses import dataclass, field, asdict

from skillbridge.core.domain_types import GovernanceStatus, VoteChoice
from skillbridge.core.errors import BusinessRuleError


@dataclass
class VoteTally:
    yes: int = 0
    no: int = 0


@dataclass
class GovernanceProposal:
    id: int
    title: str
    description: str
    amount: float
    status: GovernanceStatus
    deadline: str
    votes: VoteTally = field(default_factory=VoteTally)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


def sample_proposals() -> list[GovernanceProposal]:
    return [
        GovernanceProposal(
            id=1, title="Community Education Fund",
            description="Allocate 5 ETH for developing educational content for blockchain skills",
            amount=5, status=GovernanceStatus.ACTIVE, deadline="2025-05-15",
            votes=VoteTally(yes=24, no=7),
        ),
        GovernanceProposal(
            id=2, title="Developer Grants Program",
            description="Fund promising developers to build tools for the SkillBridge ecosystem",
            amount=10, status=GovernanceStatus.ACTIVE, deadline="2025-05-20",
            votes=VoteTally(yes=31, no=12),
        ),
        GovernanceProposal(
            id=3, title="UX Improvements",
            description="Hire a UX consultant to improve the platform user experience",
            amount=3, status=GovernanceStatus.COMPLETED, deadline="2025-04-01",
            votes=VoteTally(yes=42, no=5),
        ),
        GovernanceProposal(
            id=4, title="Marketing Campaign",
            description="Launch a targeted marketing campaign to attract more users to the platform",
            amount=7, status=GovernanceStatus.REJECTED, deadline="2025-03-20",
            votes=VoteTally(yes=15, no=28),
        ),
    ]


def find_proposal(
    proposals: list[GovernanceProposal], proposal_id: int,
) -> GovernanceProposal | None:
    return next((p for p in proposals if p.id == proposal_id), None)


def cast_vote(proposal: GovernanceProposal, vote: str) -> GovernanceProposal:
    """Record one vote on an active proposal."""
    if proposal.status != GovernanceStatus.ACTIVE:
        raise BusinessRuleError(
            "Cannot vote on inactive proposals", "PROPOSAL_INACTIVE",
        )
    try:
        choice = VoteChoice(vote)
    except ValueError:
        raise BusinessRuleError("Invalid vote type", "INVALID_VOTE")
    if choice == VoteChoice.YES:
        proposal.votes.yes += 1
    else:
        proposal.votes.no += 1
    return proposal
