"""
Bounded request body collection.

Buffers a Starlette request body into a single ``bytes`` object while
enforcing a size limit. This is the only suspension point of the XML
extractor: each chunk is awaited from the transport. If the awaiting
task is cancelled the partial buffer is simply dropped.
"""

import logging

from starlette.requests import ClientDisconnect, Request

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_413 = 413


class BodyCollectionError(Exception):
    """Raised when the request body cannot be buffered.

    Attributes:
        message: Human-readable reason.
        status_code: HTTP status the failure should be reported with.
    """

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class LengthLimitError(BodyCollectionError):
    """Raised when the body is larger than the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"length limit exceeded: body larger than {limit} bytes", HTTP_413)
        self.limit = limit


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        length = int(raw)
    except ValueError:
        raise BodyCollectionError("invalid Content-Length header", HTTP_400) from None
    if length < 0:
        raise BodyCollectionError("invalid Content-Length header", HTTP_400)
    return length


async def collect_body(request: Request, limit: int | None) -> bytes:
    """Buffer the whole request body.

    Args:
        request: The incoming request.
        limit: Maximum number of bytes to accept, or None for no bound.

    Returns:
        The complete body.

    Raises:
        LengthLimitError: The declared or actual size exceeds ``limit``.
        BodyCollectionError: Bad Content-Length or the client went away.
    """
    declared = _declared_length(request)
    if limit is not None and declared is not None and declared > limit:
        raise LengthLimitError(limit)

    buffer = bytearray()
    try:
        async for chunk in request.stream():
            buffer.extend(chunk)
            if limit is not None and len(buffer) > limit:
                raise LengthLimitError(limit)
    except ClientDisconnect as exc:
        logger.info("Client disconnected after %d body bytes", len(buffer))
        raise BodyCollectionError("client disconnected while sending the body", HTTP_400) from exc

    return bytes(buffer)
