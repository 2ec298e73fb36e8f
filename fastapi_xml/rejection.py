"""
Rejections raised by the XML extractor.

Every way the extractor can fail to produce an ``Xml`` value is one of
the classes below. Each carries its message and status code. They are
terminal: the host converts them to a response and never retries.
"""

from typing import assert_never

from starlette.responses import PlainTextResponse

from fastapi_xml.body import BodyCollectionError

HTTP_400 = 400
HTTP_415 = 415

MISSING_CONTENT_TYPE_MESSAGE = "Expected request with `Content-Type: application/xml`"
DESERIALIZE_MESSAGE = "Failed to deserialize the XML body into the target type"


class XmlRejection(Exception):
    """Base class for all extractor rejections."""

    status_code: int = HTTP_400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def into_response(self) -> PlainTextResponse:
        return rejection_response(self)  # type: ignore[arg-type]


class MissingXmlContentType(XmlRejection):
    """Raised when the request does not declare an XML Content-Type."""

    status_code = HTTP_415

    def __init__(self) -> None:
        super().__init__(MISSING_CONTENT_TYPE_MESSAGE)


class BytesRejection(XmlRejection):
    """Raised when buffering the request body fails.

    The status code is the one reported by the body collector.
    """

    def __init__(self, error: BodyCollectionError) -> None:
        super().__init__(error.message)
        self.error = error
        self.status_code = error.status_code


class XmlDeError(XmlRejection):
    """Raised when the body is not valid XML for the target type."""

    status_code = HTTP_400

    def __init__(self, error: Exception) -> None:
        super().__init__(DESERIALIZE_MESSAGE)
        self.error = error


Rejection = MissingXmlContentType | BytesRejection | XmlDeError


def rejection_response(rejection: Rejection) -> PlainTextResponse:
    """Convert a rejection into its plain-text response.

    Raises:
        AssertionError: For an object that is none of the ``Rejection``
            variants.
    """
    match rejection:
        case MissingXmlContentType():
            return PlainTextResponse(rejection.message, status_code=rejection.status_code)
        case BytesRejection(error=error):
            return PlainTextResponse(error.message, status_code=rejection.status_code)
        case XmlDeError(error=error):
            return PlainTextResponse(
                f"{rejection.message}: {error}", status_code=rejection.status_code
            )
    assert_never(rejection)
