"""HTTP reason phrase lookup."""
from __future__ import annotations

from http import HTTPStatus


def reason_phrase(status_code: int) -> str:
    """Return the canonical reason phrase for ``status_code`` or "" if unknown."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""
