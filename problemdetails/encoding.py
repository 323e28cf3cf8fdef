"""JSON and XML encodings of a problem document.

Both encoders emit ``type``, ``title`` and ``status`` unconditionally and the
remaining members only when they are non-empty, in the order
``detail``, ``instance``, ``errors``. Validation error entries keep the
insertion order of the mapping they were built from.
"""
from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from .errors import ProblemEncodingError

if TYPE_CHECKING:
    from .problem_details import ProblemDetails

XML_NAMESPACE = "urn:ietf:rfc:7807"

_XML_TEXT_ENTITIES = {
    "'": "&#39;",
    '"': "&#34;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}
# Characters that XML 1.0 cannot carry, escaped or not.
_XML_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
# XML 1.0 NameStartChar / NameChar, colon excluded.
_NAME_START_CHARS = (
    r"A-Z_a-z\xC0-\xD6\xD8-\xF6\xF8-\u02FF\u0370-\u037D\u037F-\u1FFF\u200C-\u200D"
    r"\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_NAME_CHARS = _NAME_START_CHARS + r"\-.0-9\xB7\u0300-\u036F\u203F-\u2040"
_XML_TAG_NAME = re.compile(f"[{_NAME_START_CHARS}][{_NAME_CHARS}]*")
_SURROGATES = re.compile("[\ud800-\udfff]")


def to_json(problem: ProblemDetails) -> str:
    """Render ``problem`` as a compact ``application/problem+json`` body."""
    try:
        body = json.dumps(problem.to_dict(), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ProblemEncodingError.for_format("json", f"Cannot encode problem as JSON: {exc}") from exc
    # Lone surrogates survive json.dumps but cannot be written as UTF-8.
    if _SURROGATES.search(body):
        raise ProblemEncodingError.for_format("json", "Cannot encode problem as JSON: lone surrogate in text")
    return body


def to_xml(problem: ProblemDetails) -> str:
    """Render ``problem`` as an ``application/problem+xml`` body (no declaration)."""
    parts = [f'<problem xmlns="{XML_NAMESPACE}">']
    if problem.type:
        parts.append(_element("type", problem.type))
    if problem.title:
        parts.append(_element("title", problem.title))
    parts.append(_element("status", str(problem.status)))
    if problem.detail:
        parts.append(_element("detail", problem.detail))
    if problem.instance:
        parts.append(_element("instance", problem.instance))
    if problem.errors:
        parts.append("<errors>")
        for field, message in problem.errors.items():
            if not isinstance(field, str) or not _XML_TAG_NAME.fullmatch(field):
                raise ProblemEncodingError.for_format(
                    "xml", f"Cannot use {field!r} as an XML element name"
                )
            parts.append(_element(field, message))
        parts.append("</errors>")
    parts.append("</problem>")
    return "".join(parts)


def _element(tag: str, text: str) -> str:
    if not isinstance(text, str):
        raise ProblemEncodingError.for_format("xml", f"Cannot encode {type(text).__name__} in <{tag}>")
    if _XML_INVALID_CHARS.search(text):
        raise ProblemEncodingError.for_format("xml", f"<{tag}> contains characters not allowed in XML")
    return f"<{tag}>{escape(text, _XML_TEXT_ENTITIES)}</{tag}>"
