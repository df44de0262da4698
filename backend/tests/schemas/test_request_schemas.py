"""Request Schemas — camelCase aliases and structured violation lists."""

import pytest
from pydantic import ValidationError

from skillbridge.schemas.base import describe_violations
from skillbridge.schemas.blockchain import TransactionCreate
from skillbridge.schemas.funding import ProposalCreate


def test_proposal_accepts_camel_case():
    body = ProposalCreate.model_validate({
        "personalInfo": {"firstName": "A", "lastName": "B", "email": "a@b.co"},
        "fundingGoals": {
            "amountRequested": 100, "purpose": "x",
            "courseName": "y", "institutionName": "z",
        },
    })
    assert body.funding_goals.course_name == "y"
    assert body.supporting_documents == []


def test_blank_name_is_rejected():
    with pytest.raises(ValidationError):
        ProposalCreate.model_validate({
            "personalInfo": {"firstName": "  ", "lastName": "B", "email": "a@b.co"},
            "fundingGoals": {
                "amountRequested": 100, "purpose": "x",
                "courseName": "y", "institutionName": "z",
            },
        })


def test_describe_violations_drops_location_prefix():
    details = describe_violations([
        {"loc": ("body", "personalInfo", "email"), "msg": "Field required", "type": "missing"},
        {"loc": ("query", "from"), "msg": "Input should be 'ETH'", "type": "enum"},
        {"loc": ("body",), "msg": "Field required", "type": "missing"},
    ])
    assert [d["field"] for d in details] == ["personalInfo.email", "from", "body"]
    assert details[0]["type"] == "missing"


def test_transaction_sender_uses_from_on_the_wire():
    tx = TransactionCreate.model_validate({"from": "0xabc", "amount": 1.5})
    assert tx.sender == "0xabc"
    assert tx.amount == 1.5
