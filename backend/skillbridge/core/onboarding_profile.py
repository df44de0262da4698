"""Onboarding Profile — role detection and normalization of onboarding form payloads.

Invariants:
    - Pure functions: input dict in, new dict out, payload never mutated
    - Both form shapes accepted: flat ({name, email, institution, ...}) and nested
      ({personalDetails, education, skills, ...}); flat wins whenever its required
      fields are all present, otherwise personalDetails selects the nested shape
    - Keys not consumed by normalization are preserved under onboarding_data
    - List fields are always lists (non-list input becomes [])

Design Decisions:
    - Role inference order matches the signup forms: explicit role, then
      personalDetails.role, then student markers, then investor markers
    - first_missing returns the first absent field in declaration order so the
      400 response names a single, stable field
"""

from typing import Any

from skillbridge.core.domain_types import OnboardingRole

STUDENT_REQUIRED = ("name", "email", "institution")
INVESTOR_REQUIRED = ("name", "email", "company")

_IDENTITY_KEYS = ("role", "userId", "clerkId")
_STUDENT_FLAT_KEYS = (
    "name", "email", "institution", "courseOfStudy", "yearOfStudy",
    "skills", "interests",
)
_STUDENT_NESTED_KEYS = ("personalDetails", "education", "skills")
_INVESTOR_FLAT_KEYS = (
    "name", "email", "company", "position", "investmentFocus",
    "investmentStage", "portfolioSize", "riskAppetite",
)
_INVESTOR_NESTED_KEYS = (
    "personalDetails", "professional", "investment",
    "company", "position", "investmentFocus", "investmentStage",
    "portfolioSize", "riskAppetite",
)


def detect_role(payload: dict[str, Any]) -> OnboardingRole | None:
    """Determine the onboarding variant, or None when it cannot be inferred."""
    role = payload.get("role") or _nested(payload, "personalDetails", "role")
    if role is None:
        if _nested(payload, "education", "institution") or payload.get("institution"):
            role = OnboardingRole.STUDENT.value
        elif (
            _nested(payload, "investment", "focusAreas")
            or payload.get("company")
            or payload.get("investmentFocus")
        ):
            role = OnboardingRole.INVESTOR.value
    try:
        return OnboardingRole(role) if role else None
    except ValueError:
        return None


def normalize_student(payload: dict[str, Any]) -> dict[str, Any]:
    """Map either student form shape onto StudentOnboarding columns."""
    if _uses_nested_shape(payload, STUDENT_REQUIRED):
        skills = payload.get("skills") or {}
        profile = {
            "name": _nested(payload, "personalDetails", "name") or "",
            "email": _nested(payload, "personalDetails", "email") or "",
            "institution": _nested(payload, "education", "institution") or "",
            "course_of_study": _nested(payload, "education", "major") or "",
            "year_of_study": str(_nested(payload, "education", "gradYear") or ""),
            "skills": _as_list(skills.get("selectedSkills") if isinstance(skills, dict) else None),
            "interests": _as_list(skills.get("interests") if isinstance(skills, dict) else None),
        }
        consumed = _STUDENT_NESTED_KEYS
    else:
        profile = {
            "name": payload.get("name") or "",
            "email": payload.get("email") or "",
            "institution": payload.get("institution") or "",
            "course_of_study": payload.get("courseOfStudy") or "",
            "year_of_study": str(payload.get("yearOfStudy") or ""),
            "skills": _as_list(payload.get("skills")),
            "interests": _as_list(payload.get("interests")),
        }
        consumed = _STUDENT_FLAT_KEYS
    profile["user_id"] = _user_id(payload)
    profile["onboarding_data"] = _extras(payload, consumed)
    return profile


def normalize_investor(payload: dict[str, Any]) -> dict[str, Any]:
    """Map either investor form shape onto InvestorOnboarding columns."""
    if _uses_nested_shape(payload, INVESTOR_REQUIRED):
        profile = {
            "name": _nested(payload, "personalDetails", "name") or "",
            "email": _nested(payload, "personalDetails", "email") or "",
            "company": (
                payload.get("company")
                or _nested(payload, "professional", "company") or ""
            ),
            "position": (
                payload.get("position")
                or _nested(payload, "professional", "position") or ""
            ),
            "investment_focus": _as_list(
                payload.get("investmentFocus")
                or _nested(payload, "investment", "focusAreas")
            ),
            "investment_stage": (
                payload.get("investmentStage")
                or _nested(payload, "investment", "investmentStage") or ""
            ),
            "portfolio_size": (
                payload.get("portfolioSize")
                or _nested(payload, "investment", "checkSize") or ""
            ),
            "risk_appetite": (
                payload.get("riskAppetite")
                or _nested(payload, "investment", "riskAppetite")
            ),
        }
        consumed = _INVESTOR_NESTED_KEYS
    else:
        profile = {
            "name": payload.get("name") or "",
            "email": payload.get("email") or "",
            "company": payload.get("company") or "",
            "position": payload.get("position") or "",
            "investment_focus": _as_list(payload.get("investmentFocus")),
            "investment_stage": payload.get("investmentStage") or "",
            "portfolio_size": payload.get("portfolioSize") or "",
            "risk_appetite": payload.get("riskAppetite"),
        }
        consumed = _INVESTOR_FLAT_KEYS
    profile["user_id"] = _user_id(payload)
    profile["onboarding_data"] = _extras(payload, consumed)
    return profile


def first_missing(profile: dict[str, Any], required: tuple[str, ...]) -> str | None:
    """Return the first required field that is absent or blank."""
    for name in required:
        value = profile.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            return name
    return None


# ─── Helpers ─────────────────────────────────────────────────────

def _uses_nested_shape(payload: dict[str, Any], required: tuple[str, ...]) -> bool:
    if all(payload.get(name) for name in required):
        return False
    return "personalDetails" in payload


def _nested(payload: dict[str, Any], section: str, key: str) -> Any:
    block = payload.get(section)
    return block.get(key) if isinstance(block, dict) else None


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _user_id(payload: dict[str, Any]) -> str | None:
    uid = (
        payload.get("userId")
        or payload.get("clerkId")
        or _nested(payload, "personalDetails", "userId")
    )
    return str(uid) if uid else None


def _extras(payload: dict[str, Any], consumed: tuple[str, ...]) -> dict[str, Any]:
    skip = set(consumed) | set(_IDENTITY_KEYS)
    return {k: v for k, v in payload.items() if k not in skip}
