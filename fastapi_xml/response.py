"""
XML response: the encode path.

``XmlResponse`` serializes a pydantic model and sets
``Content-Type: application/xml``. It never raises: if serialization
fails the response turns into a 500 with a plain-text body, so a bad
model returned by a handler degrades into a diagnosable error instead
of crashing the request task.
"""

import logging
from typing import Any

from pydantic import BaseModel
from starlette.background import BackgroundTask
from starlette.responses import Response

from fastapi_xml.codec import to_xml
from fastapi_xml.core.config import settings

logger = logging.getLogger(__name__)

HTTP_500 = 500

XML_MEDIA_TYPE = "application/xml"
TEXT_PLAIN = "text/plain"  # Starlette appends "; charset=utf-8"
REDACTED_ENCODE_MESSAGE = "Failed to serialize the response body"


def to_xml_bytes(model: BaseModel) -> bytes:
    """Serialize a model with the configured encoder options."""
    return to_xml(
        model,
        xml_declaration=settings.xml_declaration,
        pretty_print=settings.pretty_print,
    )


class XmlResponse(Response):
    """Response rendering a pydantic model as ``application/xml``."""

    media_type = XML_MEDIA_TYPE

    def __init__(
        self,
        content: Any,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        super().__init__(
            content=content,
            status_code=status_code,
            headers=headers,
            background=background,
        )

    def render(self, content: Any) -> bytes:
        # Called before headers are built, so the fallback can still
        # switch status and media type.
        try:
            return to_xml_bytes(content)
        except Exception as exc:
            logger.error(
                "XML serialization of %s failed: %s",
                type(content).__name__,
                type(exc).__name__,
            )
            self.status_code = HTTP_500
            self.media_type = TEXT_PLAIN
            return _encode_error_text(exc).encode("utf-8")


def _encode_error_text(exc: Exception) -> str:
    if not settings.expose_encode_errors:
        return REDACTED_ENCODE_MESSAGE
    # An exception with an empty message would leave the body blank
    return str(exc) or type(exc).__name__
