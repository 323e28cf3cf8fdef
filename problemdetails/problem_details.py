"""RFC 7807 Problem Details value object and constructors."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .encoding import to_json, to_xml
from .status_text import reason_phrase

DEFAULT_PROBLEM_TYPE = "about:blank"


class ProblemDetails(BaseModel):
    """Machine-readable description of a failed HTTP request.

    Empty strings and an empty ``errors`` mapping mean "absent"; the encoders
    leave those members out of the rendered document.
    """

    type: str
    title: str
    status: int
    detail: str = ""
    instance: str = ""
    errors: Mapping[str, str] = Field(default_factory=lambda: MappingProxyType({}))
    model_config = ConfigDict(frozen=True)

    @field_validator("errors", mode="after")
    @classmethod
    def _freeze_errors(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        # Read-only view over a private copy; insertion order is kept.
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        return hash((self.type, self.title, self.status, self.detail, self.instance, tuple(self.errors.items())))

    def to_dict(self) -> dict[str, Any]:
        """Ordered mapping of the members that are present."""
        payload: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.instance:
            payload["instance"] = self.instance
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload

    def to_json(self) -> str:
        return to_json(self)

    def to_xml(self) -> str:
        return to_xml(self)


def new(
    problem_type: str,
    title: str,
    status_code: int,
    detail: str = "",
    instance: str = "",
    errors: Optional[Mapping[str, str]] = None,
) -> ProblemDetails:
    """Build a problem, defaulting a blank type and a blank title.

    The status code is not validated; an unknown code simply yields an empty
    title when none is given.
    """
    if not problem_type:
        problem_type = DEFAULT_PROBLEM_TYPE
    if not title:
        title = reason_phrase(status_code)

    return ProblemDetails(
        type=problem_type,
        title=title,
        status=status_code,
        detail=detail,
        instance=instance,
        errors=dict(errors or {}),
    )


def from_http_status(status_code: int) -> ProblemDetails:
    """Problem carrying nothing but the status and its reason phrase."""
    return new("", "", status_code)
