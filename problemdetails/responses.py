"""FastAPI responses carrying RFC 7807 problem documents."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from fastapi.responses import Response

from .config import Settings, get_settings
from .encoding import to_json, to_xml
from .errors import ProblemDetailsError, ProblemEncodingError
from .problem_details import ProblemDetails

logger = logging.getLogger(__name__)


def _http_status(problem: ProblemDetails, settings: Settings) -> int:
    if 100 <= problem.status <= 599:
        return problem.status
    return settings.FALLBACK_HTTP_STATUS


def _encode_body(body: str, fmt: str, charset: str) -> bytes:
    try:
        return body.encode(charset)
    except UnicodeEncodeError as exc:
        raise ProblemEncodingError.for_format(fmt, f"Cannot encode problem body as {charset}: {exc}") from exc


class ProblemJSONResponse(Response):
    """``application/problem+json`` response; status line follows ``problem.status``."""

    def __init__(
        self,
        problem: ProblemDetails,
        headers: Optional[Mapping[str, str]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.problem = problem
        super().__init__(
            content=problem,
            status_code=_http_status(problem, settings),
            headers=headers,
            media_type=settings.JSON_MEDIA_TYPE,
        )

    def render(self, content: Any) -> bytes:
        return _encode_body(to_json(content), "json", self.charset)


class ProblemXMLResponse(Response):
    """``application/problem+xml`` response; status line follows ``problem.status``."""

    def __init__(
        self,
        problem: ProblemDetails,
        headers: Optional[Mapping[str, str]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.problem = problem
        self.xml_declaration = settings.XML_DECLARATION
        super().__init__(
            content=problem,
            status_code=_http_status(problem, settings),
            headers=headers,
            media_type=settings.XML_MEDIA_TYPE,
        )

    def render(self, content: Any) -> bytes:
        body = to_xml(content)
        if self.xml_declaration:
            body = f'<?xml version="1.0" encoding="{self.charset.upper()}"?>' + body
        return _encode_body(body, "xml", self.charset)


def build_problem_details_response(
    problem: ProblemDetails,
    media_type: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """Render ``problem`` in the format named by ``media_type`` (JSON when omitted).

    Picking the media type from the request is left to the caller.
    """
    settings = get_settings()
    media_type = media_type or settings.JSON_MEDIA_TYPE
    if media_type == settings.JSON_MEDIA_TYPE:
        response_class = ProblemJSONResponse
    elif media_type == settings.XML_MEDIA_TYPE:
        response_class = ProblemXMLResponse
    else:
        raise ProblemDetailsError(
            code="UNSUPPORTED_MEDIA_TYPE",
            message=f"Unsupported problem media type: {media_type}",
        )

    try:
        response = response_class(problem, headers=headers, settings=settings)
    except ProblemEncodingError:
        logger.exception("Failed to encode problem details type=%s status=%s", problem.type, problem.status)
        raise

    logger.debug("problem.response status=%s type=%s media_type=%s", problem.status, problem.type, media_type)
    return response
