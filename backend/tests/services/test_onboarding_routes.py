"""Onboarding Routes — submission (three endpoints) and fallback-aware reads.

Invariants:
    - Flat and nested forms both persist; role detected when not explicit
    - First missing required field named in the 400
    - Reads: found → source "database"; absent → 404; outage → mock + warning
    - Writes with the database down → 500, never a mock
"""

from sqlalchemy import select

from skillbridge.models.onboarding import InvestorOnboarding, StudentOnboarding


STUDENT_FLAT = {
    "userId": "user_student_1",
    "name": "Ravi Kumar",
    "email": "ravi@example.com",
    "institution": "Anna University",
    "courseOfStudy": "Mechanical Engineering",
    "yearOfStudy": 2,
    "skills": ["CAD"],
    "interests": ["Robotics"],
    "referral": "campus-fair",
}

INVESTOR_NESTED = {
    "role": "investor",
    "personalDetails": {"name": "Meera Shah", "email": "meera@fund.example", "userId": "user_inv_1"},
    "professional": {"company": "Shah Ventures", "position": "Partner"},
    "investment": {
        "focusAreas": ["EdTech"],
        "investmentStage": "Seed",
        "checkSize": "$50k",
        "riskAppetite": "medium",
    },
}


async def test_student_endpoint_persists_flat_form(client, test_db):
    res = await client.post("/api/v1/onboarding/student", json=STUDENT_FLAT)

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Student onboarding completed successfully"
    assert body["data"]["id"]
    assert body["data"]["yearOfStudy"] == "2"
    assert body["data"]["onboardingData"] == {"referral": "campus-fair"}

    row = (await test_db.execute(select(StudentOnboarding))).scalar_one()
    assert row.user_id == "user_student_1"
    assert row.skills == ["CAD"]


async def test_role_detecting_endpoint_accepts_nested_investor(client, test_db):
    res = await client.post("/api/v1/onboarding", json=INVESTOR_NESTED)

    assert res.status_code == 201
    data = res.json()["data"]
    assert data["company"] == "Shah Ventures"
    assert data["investmentFocus"] == ["EdTech"]
    assert data["riskAppetite"] == "medium"

    row = (await test_db.execute(select(InvestorOnboarding))).scalar_one()
    assert row.user_id == "user_inv_1"
    assert row.portfolio_size == "$50k"


async def test_role_inferred_from_institution(client):
    res = await client.post("/api/v1/onboarding", json=STUDENT_FLAT)

    assert res.status_code == 201
    assert res.json()["message"].startswith("Student")


async def test_undetectable_role_returns_400(client):
    res = await client.post("/api/v1/onboarding", json={"name": "Nobody"})

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ROLE_REQUIRED"


async def test_missing_required_field_is_named(client):
    payload = {k: v for k, v in STUDENT_FLAT.items() if k != "email"}

    res = await client.post("/api/v1/onboarding/student", json=payload)

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Missing required field: email"


async def test_invalid_risk_appetite_is_schema_error(client):
    payload = {
        "name": "Meera", "email": "meera@fund.example",
        "company": "Shah Ventures", "riskAppetite": "reckless",
    }

    res = await client.post("/api/v1/onboarding/investor", json=payload)

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "SCHEMA_VALIDATION_ERROR"
    assert error["details"][0]["field"] in ("riskAppetite", "risk_appetite")


async def test_write_with_database_down_returns_500(client, unreachable_db, test_db):
    res = await client.post("/api/v1/onboarding/student", json=STUDENT_FLAT)

    assert res.status_code == 500
    assert res.json()["success"] is False
    rows = (await test_db.execute(select(StudentOnboarding))).scalars().all()
    assert rows == []


# ─── Reads ────────────────────────────────────────────────────────

async def test_read_returns_database_record(client):
    await client.post("/api/v1/onboarding/student", json=STUDENT_FLAT)

    res = await client.get(
        "/api/v1/onboarding/student/data", params={"userId": "user_student_1"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["source"] == "database"
    assert body["data"]["institution"] == "Anna University"
    assert "warning" not in body


async def test_read_absent_record_returns_404(client):
    res = await client.get(
        "/api/v1/onboarding/investor/data", params={"userId": "user_missing"},
    )

    assert res.status_code == 404


async def test_read_requires_user_id(client):
    res = await client.get("/api/v1/onboarding/student/data")

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Missing required field: userId"


async def test_read_with_database_down_serves_mock(client, unreachable_db):
    res = await client.get(
        "/api/v1/onboarding/student/data", params={"userId": "user_student_1"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["source"] == "mock"
    assert body["data"]["name"] == "Mock Student"
    assert "DatabaseConnectionError" in body["warning"]


async def test_investor_read_with_database_down_serves_mock(client, unreachable_db):
    res = await client.get(
        "/api/v1/onboarding/investor/data", params={"userId": "user_inv_1"},
    )

    assert res.json()["data"]["company"] == "Mock Capital"
    assert res.json()["source"] == "mock"


async def test_flat_form_with_role_in_personal_details(client):
    payload = {
        "personalDetails": {"role": "student"},
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "institution": "Anna University",
    }

    res = await client.post("/api/v1/onboarding", json=payload)

    assert res.status_code == 201
    assert res.json()["data"]["name"] == "Ravi Kumar"
