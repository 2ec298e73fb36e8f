"""
Route class for endpoints that answer in XML.

FastAPI serializes return values through ``jsonable_encoder`` before a
response class ever sees them, so an endpoint returning a model or an
``Xml`` envelope cannot produce XML through ``response_class`` alone.
``XmlRoute`` renders those return values itself::

    router = APIRouter(route_class=XmlRoute)

    @router.post("/users", status_code=201)
    async def create_user(...) -> Xml[User]:
        return Xml(user)

Returned ``Response`` objects pass through untouched; any other value
goes through the route's response class as usual.
"""

import functools
import inspect
from collections.abc import Callable
from typing import Any

from fastapi.datastructures import Default, DefaultPlaceholder
from fastapi.routing import APIRoute
from pydantic import BaseModel

from fastapi_xml.extract import Xml
from fastapi_xml.response import XmlResponse

HTTP_200 = 200

RENDERED_MARKER = "__xml_rendered__"


def render_result(result: Any, status_code: int) -> Any:
    """Turn an ``Xml`` envelope or a model into an ``XmlResponse``."""
    if isinstance(result, Xml):
        return result.into_response(status_code=status_code)
    if isinstance(result, BaseModel):
        return XmlResponse(result, status_code=status_code)
    return result


class XmlRoute(APIRoute):
    """APIRoute whose endpoint results are rendered as XML."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        # The return annotation is Xml[...], which is not a pydantic type
        if isinstance(kwargs.get("response_model", Default(None)), DefaultPlaceholder):
            kwargs["response_model"] = None
        if isinstance(kwargs.get("response_class", Default(None)), DefaultPlaceholder):
            kwargs["response_class"] = Default(XmlResponse)
        super().__init__(path, self._wrap(endpoint), **kwargs)

    def _wrap(self, endpoint: Callable[..., Any]) -> Callable[..., Any]:
        # include_router rebuilds routes from already wrapped endpoints
        if getattr(endpoint, RENDERED_MARKER, False):
            return endpoint

        if inspect.iscoroutinefunction(endpoint):

            @functools.wraps(endpoint)
            async def async_endpoint(*args: Any, **kwargs: Any) -> Any:
                result = await endpoint(*args, **kwargs)
                return render_result(result, self.status_code or HTTP_200)

            wrapped: Callable[..., Any] = async_endpoint
        else:

            @functools.wraps(endpoint)
            def sync_endpoint(*args: Any, **kwargs: Any) -> Any:
                return render_result(endpoint(*args, **kwargs), self.status_code or HTTP_200)

            wrapped = sync_endpoint

        setattr(wrapped, RENDERED_MARKER, True)
        return wrapped
