"""
XML extractor and response for FastAPI.

Lets a route declare that it consumes or produces XML:

- ``xml_body(Model)`` decodes an XML request body into ``Xml[Model]``.
- ``XmlResponse(model)`` / ``Xml(model).into_response()`` encodes a model.
- ``APIRouter(route_class=XmlRoute)`` lets endpoints return ``Xml(model)``.
- ``register_error_handlers(app)`` turns rejections into responses.
"""

from fastapi_xml.body import BodyCollectionError, LengthLimitError, collect_body
from fastapi_xml.codec import XmlCodecError, attr, from_xml, to_xml, xml_tag
from fastapi_xml.content_type import is_xml_content_type
from fastapi_xml.extract import Xml, decode_xml, from_request, xml_body
from fastapi_xml.rejection import (
    BytesRejection,
    MissingXmlContentType,
    Rejection,
    XmlDeError,
    XmlRejection,
    rejection_response,
)
from fastapi_xml.response import XmlResponse, to_xml_bytes
from fastapi_xml.routing import XmlRoute
from fastapi_xml.shared.errors.handlers import register_error_handlers

__version__ = "0.3.0"

__all__ = [
    "BodyCollectionError",
    "BytesRejection",
    "LengthLimitError",
    "MissingXmlContentType",
    "Rejection",
    "Xml",
    "XmlCodecError",
    "XmlDeError",
    "XmlRejection",
    "XmlResponse",
    "XmlRoute",
    "attr",
    "collect_body",
    "decode_xml",
    "from_request",
    "from_xml",
    "is_xml_content_type",
    "register_error_handlers",
    "rejection_response",
    "to_xml",
    "to_xml_bytes",
    "xml_body",
    "xml_tag",
]
