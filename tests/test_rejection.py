"""
Tests for the rejection classes and their responses.

No external dependencies or IO required.
"""

from typing import get_args

import pytest
from fastapi import FastAPI

from fastapi_xml.body import BodyCollectionError, LengthLimitError
from fastapi_xml.rejection import (
    BytesRejection,
    MissingXmlContentType,
    Rejection,
    XmlDeError,
    XmlRejection,
    rejection_response,
)
from fastapi_xml.shared.errors.handlers import handle_xml_rejection, register_error_handlers


class TestMissingXmlContentType:
    """Tests for the missing Content-Type rejection."""

    def test_status_and_message(self) -> None:
        """Rejection is a 415 with the fixed message."""
        rejection = MissingXmlContentType()
        assert rejection.status_code == 415
        assert rejection.message == "Expected request with `Content-Type: application/xml`"

    def test_response(self) -> None:
        """Response is plain text carrying the message."""
        response = rejection_response(MissingXmlContentType())
        assert response.status_code == 415
        assert response.body == b"Expected request with `Content-Type: application/xml`"
        assert response.headers["content-type"].startswith("text/plain")


class TestBytesRejection:
    """Tests for the body buffering rejection."""

    def test_propagates_collector_status(self) -> None:
        """The collector's status code is kept, not replaced."""
        rejection = BytesRejection(LengthLimitError(10))
        assert rejection.status_code == 413
        assert rejection_response(rejection).status_code == 413

    def test_wraps_error(self) -> None:
        """The underlying error and its message are carried."""
        error = BodyCollectionError("client disconnected while sending the body", 400)
        rejection = BytesRejection(error)
        assert rejection.error is error
        assert rejection_response(rejection).body == error.message.encode()


class TestXmlDeError:
    """Tests for the deserialization rejection."""

    def test_status_and_body(self) -> None:
        """Body names the deserialize failure and the decoder message."""
        rejection = XmlDeError(ValueError("missing field `password`"))
        response = rejection_response(rejection)
        assert response.status_code == 400
        assert response.body.decode() == (
            "Failed to deserialize the XML body into the target type: "
            "missing field `password`"
        )

    def test_into_response_matches_mapping(self) -> None:
        """into_response is the same conversion as rejection_response."""
        rejection = XmlDeError(ValueError("bad"))
        assert rejection.into_response().body == rejection_response(rejection).body


class TestRejectionResponseMapping:
    """Tests for the exhaustive rejection mapping."""

    def test_unknown_rejection_type(self) -> None:
        """A subclass outside the closed set is unreachable."""

        class UnknownRejection(XmlRejection):
            pass

        with pytest.raises(AssertionError, match="UnknownRejection"):
            rejection_response(UnknownRejection("boom"))  # type: ignore[arg-type]

    def test_variants_match_the_closed_set(self) -> None:
        """The Rejection union names exactly the three variants."""
        assert get_args(Rejection) == (MissingXmlContentType, BytesRejection, XmlDeError)

    def test_handler_registered_per_variant(self) -> None:
        app = FastAPI()
        register_error_handlers(app)
        for rejection_type in get_args(Rejection):
            assert app.exception_handlers[rejection_type] is handle_xml_rejection

    def test_all_variants_are_exceptions(self) -> None:
        """Every variant can be raised and caught as XmlRejection."""
        for rejection in (
            MissingXmlContentType(),
            BytesRejection(LengthLimitError(1)),
            XmlDeError(ValueError("x")),
        ):
            with pytest.raises(XmlRejection):
                raise rejection
