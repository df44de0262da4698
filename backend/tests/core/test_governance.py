"""Governance — sample proposals and vote rules."""

import pytest

from skillbridge.core.domain_types import GovernanceStatus
from skillbridge.core.errors import BusinessRuleError
from skillbridge.core.governance import cast_vote, find_proposal, sample_proposals


def test_sample_proposals_are_fresh_each_call():
    first = sample_proposals()
    cast_vote(first[0], "yes")
    assert sample_proposals()[0].votes.yes == 24


def test_only_first_two_are_active():
    statuses = [p.status for p in sample_proposals()]
    assert statuses == [
        GovernanceStatus.ACTIVE, GovernanceStatus.ACTIVE,
        GovernanceStatus.COMPLETED, GovernanceStatus.REJECTED,
    ]


def test_vote_increments_one_counter():
    proposal = find_proposal(sample_proposals(), 2)
    cast_vote(proposal, "no")
    assert (proposal.votes.yes, proposal.votes.no) == (31, 13)


def test_inactive_proposal_rejects_votes():
    proposal = find_proposal(sample_proposals(), 3)
    with pytest.raises(BusinessRuleError) as exc:
        cast_vote(proposal, "yes")
    assert exc.value.code == "PROPOSAL_INACTIVE"
    assert proposal.votes.yes == 42


def test_invalid_vote_type():
    with pytest.raises(BusinessRuleError) as exc:
        cast_vote(find_proposal(sample_proposals(), 1), "abstain")
    assert exc.value.code == "INVALID_VOTE"


def test_find_unknown_proposal():
    assert find_proposal(sample_proposals(), 99) is None


def test_to_dict_serializes_status():
    data = find_proposal(sample_proposals(), 4).to_dict()
    assert data["status"] == "rejected"
    assert data["votes"] == {"yes": 15, "no": 28}
