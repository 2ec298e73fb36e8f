"""
XML extractor: the ``Xml`` envelope and the request decode path.

Usage with FastAPI::

    from fastapi import Depends
    from fastapi_xml import Xml, xml_body

    class CreateUser(BaseModel):
        email: str
        password: str

    @router.post("/users")
    async def create_user(payload: Xml[CreateUser] = Depends(xml_body(CreateUser))):
        ...

The request is rejected with an ``XmlRejection`` when the Content-Type
is not XML, when buffering the body fails, or when the body cannot be
decoded into the target model. Since the body is consumed, this must be
the only body dependency of the route.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from lxml import etree
from pydantic import BaseModel, ValidationError
from starlette.requests import Request

from fastapi_xml.body import BodyCollectionError, collect_body
from fastapi_xml.codec import XmlCodecError, from_xml
from fastapi_xml.content_type import is_xml_content_type
from fastapi_xml.core.config import settings
from fastapi_xml.rejection import BytesRejection, MissingXmlContentType, XmlDeError
from fastapi_xml.response import XmlResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# app.state attribute that overrides the configured body limit
APP_STATE_LIMIT = "xml_max_body_bytes"

_DEFAULT_LIMIT: Any = object()


class Xml(Generic[T]):
    """Transparent wrapper around a single value.

    Attribute reads and writes other than ``value`` go to the wrapped
    value, so ``payload.email`` works on an ``Xml[CreateUser]``.

    Endpoints on an ``XmlRoute`` can return an ``Xml`` directly; elsewhere
    use ``into_response``.
    """

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "value", value)

    @classmethod
    def from_value(cls, value: T) -> "Xml[T]":
        return cls(value)

    def __getattr__(self, name: str) -> Any:
        if name == "value" or name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.value, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "value" or name.startswith("__"):
            object.__setattr__(self, name, value)
        else:
            setattr(self.value, name, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Xml):
            return self.value == other.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Xml({self.value!r})"

    def into_response(
        self, status_code: int = 200, headers: dict[str, str] | None = None
    ) -> XmlResponse:
        """Serialize the wrapped model into an XML response."""
        return XmlResponse(self.value, status_code=status_code, headers=headers)


def _resolve_limit(request: Request, limit: Any) -> int | None:
    if limit is not _DEFAULT_LIMIT:
        return limit
    if "app" in request.scope:
        override = getattr(request.app.state, APP_STATE_LIMIT, None)
        if override is not None:
            return override
    return settings.max_body_bytes


def decode_xml(body: bytes, model: type[M]) -> M:
    """Decode a buffered body into ``model``.

    Raises:
        XmlDeError: The body is empty, malformed, or does not match the model.
    """
    if not body:
        raise XmlDeError(ValueError("empty request body"))
    try:
        return from_xml(body, model)
    except (etree.XMLSyntaxError, XmlCodecError, ValidationError) as exc:
        raise XmlDeError(exc) from exc


async def from_request(
    request: Request, model: type[M], *, limit: Any = _DEFAULT_LIMIT
) -> Xml[M]:
    """Run the decode path for one request.

    The Content-Type check happens before the body is touched.

    Args:
        request: The incoming request.
        model: pydantic model to decode into.
        limit: Body size limit in bytes, None for unbounded. Defaults to
            ``app.state.xml_max_body_bytes`` or the configured limit.

    Returns:
        The decoded model wrapped in ``Xml``.

    Raises:
        MissingXmlContentType: The request does not declare an XML body.
        BytesRejection: The body could not be buffered.
        XmlDeError: The body could not be decoded into ``model``.
    """
    if not is_xml_content_type(request.headers):
        raise MissingXmlContentType()

    try:
        body = await collect_body(request, _resolve_limit(request, limit))
    except BodyCollectionError as exc:
        raise BytesRejection(exc) from exc

    value = decode_xml(body, model)
    logger.debug("Decoded %s from %d bytes", model.__name__, len(body))
    return Xml(value)


def xml_body(
    model: type[M], *, limit: Any = _DEFAULT_LIMIT
) -> Callable[[Request], Awaitable[Xml[M]]]:
    """Build a FastAPI dependency that extracts ``Xml[model]``.

    Args:
        model: pydantic model to decode into.
        limit: Optional body size limit overriding the configured one.
    """

    async def dependency(request: Request) -> Xml[M]:
        return await from_request(request, model, limit=limit)

    dependency.__name__ = f"xml_body_{model.__name__}"
    return dependency
