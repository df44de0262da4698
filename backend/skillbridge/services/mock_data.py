"""Mock Records — static substitutes served when onboarding reads cannot reach the database."""

from skillbridge.schemas.onboarding import (
    StudentOnboardingResponse, InvestorOnboardingResponse,
)

MOCK_STUDENT = StudentOnboardingResponse(
    name="Mock Student",
    email="mock.student@example.com",
    institution="Mock University",
    course_of_study="Computer Science",
    year_of_study="3rd Year",
    skills=["JavaScript", "React", "Node.js"],
    interests=["AI", "Web Development", "Cloud Computing"],
)

MOCK_INVESTOR = InvestorOnboardingResponse(
    name="Mock Investor",
    email="mock.investor@example.com",
    company="Mock Capital",
    position="Investment Director",
    investment_focus=["EdTech", "AI", "Sustainability"],
    investment_stage="Seed to Series A",
    portfolio_size="$5M-$10M",
)
