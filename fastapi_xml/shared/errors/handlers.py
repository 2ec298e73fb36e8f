"""
Centralized rejection handler for FastAPI.

Maps extractor rejections to plain-text HTTP responses.
Rejections are client or transport errors, logged at WARNING.
Request bodies are never logged.
"""

import logging
from typing import get_args

from fastapi import FastAPI, Request
from starlette.responses import PlainTextResponse

from fastapi_xml.rejection import Rejection, rejection_response

logger = logging.getLogger(__name__)


async def handle_xml_rejection(request: Request, exc: Rejection) -> PlainTextResponse:
    """Convert an XML rejection into its response."""
    response = rejection_response(exc)
    logger.warning(
        "XML request rejected: %s (%d) on %s %s",
        type(exc).__name__,
        response.status_code,
        request.method,
        request.url.path,
    )
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register the XML rejection handler for every rejection variant.

    Args:
        app: The FastAPI application instance.
    """
    for rejection_type in get_args(Rejection):
        app.add_exception_handler(rejection_type, handle_xml_rejection)
