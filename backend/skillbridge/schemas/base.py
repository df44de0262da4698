"""Schema Base — camelCase wire format shared by every request/response model.

Invariants:
    - Fields accept either the camelCase alias or the snake_case name
    - to_json() always emits camelCase, JSON-safe primitives
    - require_fields treats None, zero, False and blank strings as missing
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from skillbridge.core.errors import MissingFieldError


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_row(cls, row: Any):
        """Build from an ORM row by copying attributes named like the fields."""
        return cls(**{
            name: getattr(row, name)
            for name in cls.model_fields
            if hasattr(row, name)
        })

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def describe_violations(errors: list[dict]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into [{field, message, type}] with body/query prefixes dropped."""
    details = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        details.append({
            "field": ".".join(loc) or "body",
            "message": e.get("msg", ""),
            "type": e.get("type", ""),
        })
    return details


def is_blank(value: Any) -> bool:
    """Absent for a required request field: None, zero, False, or a blank string."""
    if isinstance(value, str):
        return not value.strip()
    return not value


def require_fields(body: BaseModel, fields: tuple[tuple[str, str], ...]) -> None:
    """Raise MissingFieldError for the first blank field, named by its wire name."""
    for attr, wire_name in fields:
        if is_blank(getattr(body, attr)):
            raise MissingFieldError(wire_name)
