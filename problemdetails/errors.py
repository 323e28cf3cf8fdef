"""Exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class ProblemDetailsError(Exception):
    """Base error raised by the problem details helpers."""

    code: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class ProblemEncodingError(ProblemDetailsError):
    """A problem document could not be rendered in the requested format."""

    format: str = ""

    @classmethod
    def for_format(cls, fmt: str, message: str) -> "ProblemEncodingError":
        return cls(code="ENCODING_FAILED", message=message, format=fmt)
