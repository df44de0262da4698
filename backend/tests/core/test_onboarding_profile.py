"""Onboarding Profile — role detection and form normalization.

Tests cover:
    - Explicit, nested and inferred roles; undetectable payloads
    - Flat and nested student/investor shapes map onto the same columns
    - Unconsumed keys preserved in onboarding_data
    - first_missing reports in declaration order, treating blanks as missing
"""

from skillbridge.core.domain_types import OnboardingRole
from skillbridge.core.onboarding_profile import (
    STUDENT_REQUIRED, INVESTOR_REQUIRED,
    detect_role, normalize_student, normalize_investor, first_missing,
)


def test_explicit_role_wins():
    assert detect_role({"role": "investor", "institution": "MIT"}) == OnboardingRole.INVESTOR


def test_role_from_personal_details():
    assert detect_role({"personalDetails": {"role": "student"}}) == OnboardingRole.STUDENT


def test_role_inferred_from_education_block():
    assert detect_role({"education": {"institution": "MIT"}}) == OnboardingRole.STUDENT


def test_role_inferred_from_investment_focus():
    assert detect_role({"investment": {"focusAreas": ["AI"]}}) == OnboardingRole.INVESTOR
    assert detect_role({"company": "Acme"}) == OnboardingRole.INVESTOR


def test_unknown_or_missing_role_is_none():
    assert detect_role({"name": "x"}) is None
    assert detect_role({"role": "admin"}) is None


def test_normalize_flat_student():
    profile = normalize_student({
        "clerkId": "user_1", "name": "A", "email": "a@x.io",
        "institution": "MIT", "skills": "python", "hobby": "chess",
    })
    assert profile["user_id"] == "user_1"
    assert profile["institution"] == "MIT"
    assert profile["skills"] == []
    assert profile["onboarding_data"] == {"hobby": "chess"}


def test_normalize_nested_student():
    profile = normalize_student({
        "role": "student",
        "personalDetails": {"name": "A", "email": "a@x.io", "userId": "user_2"},
        "education": {"institution": "MIT", "major": "EECS", "gradYear": 2027},
        "skills": {"selectedSkills": ["Go"], "interests": ["Compilers"]},
        "goals": {"shortTerm": "internship"},
    })
    assert profile["user_id"] == "user_2"
    assert profile["course_of_study"] == "EECS"
    assert profile["year_of_study"] == "2027"
    assert profile["skills"] == ["Go"]
    assert profile["interests"] == ["Compilers"]
    assert profile["onboarding_data"] == {"goals": {"shortTerm": "internship"}}


def test_normalize_nested_investor_prefers_top_level_fields():
    profile = normalize_investor({
        "personalDetails": {"name": "B", "email": "b@x.io"},
        "professional": {"company": "Nested Co", "position": "Analyst"},
        "company": "Top Co",
        "investment": {"focusAreas": ["Health"], "checkSize": "$1M"},
    })
    assert profile["company"] == "Top Co"
    assert profile["position"] == "Analyst"
    assert profile["investment_focus"] == ["Health"]
    assert profile["portfolio_size"] == "$1M"
    assert profile["risk_appetite"] is None


def test_normalize_does_not_mutate_payload():
    payload = {"name": "A", "email": "a@x.io", "company": "Acme", "extra": 1}
    normalize_investor(payload)
    assert payload == {"name": "A", "email": "a@x.io", "company": "Acme", "extra": 1}


def test_first_missing_in_declaration_order():
    assert first_missing({"name": "", "email": ""}, STUDENT_REQUIRED) == "name"
    assert first_missing({"name": "A", "email": "  "}, STUDENT_REQUIRED) == "email"
    assert first_missing({"name": "A", "email": "a@x.io"}, INVESTOR_REQUIRED) == "company"
    assert first_missing(
        {"name": "A", "email": "a@x.io", "institution": "MIT"}, STUDENT_REQUIRED,
    ) is None


def test_flat_fields_win_over_personal_details_role():
    profile = normalize_student({
        "personalDetails": {"role": "student"},
        "name": "Ravi", "email": "ravi@example.com", "institution": "Anna University",
    })
    assert profile["name"] == "Ravi"
    assert profile["institution"] == "Anna University"
    assert first_missing(profile, STUDENT_REQUIRED) is None
    assert profile["onboarding_data"] == {"personalDetails": {"role": "student"}}


def test_incomplete_flat_fields_fall_back_to_nested_investor():
    profile = normalize_investor({
        "name": "Flat Name",
        "personalDetails": {"name": "Meera", "email": "meera@fund.example"},
        "professional": {"company": "Shah Ventures"},
    })
    assert profile["name"] == "Meera"
    assert profile["company"] == "Shah Ventures"
