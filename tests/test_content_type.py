"""
Tests for the Content-Type gate.

Pure function of the header map. No IO required.
"""

import pytest
from starlette.datastructures import Headers

from fastapi_xml.content_type import is_xml_content_type, mime_suffix


class TestAcceptedContentTypes:
    """XML media types that must pass the gate."""

    @pytest.mark.parametrize(
        "value",
        [
            "application/xml",
            "text/xml",
            "application/vnd.custom+xml",
            "application/atom+xml",
            "application/xml; charset=utf-8",
            "Application/XML",
        ],
    )
    def test_xml_types_accepted(self, value: str) -> None:
        """Canonical and suffixed XML types are accepted."""
        assert is_xml_content_type({"content-type": value}) is True

    def test_starlette_headers_accepted(self) -> None:
        """Starlette Headers are looked up case-insensitively."""
        headers = Headers(raw=[(b"content-type", b"text/xml")])
        assert is_xml_content_type(headers) is True

    def test_plain_dict_lookup_is_case_insensitive(self) -> None:
        """A plain dict with a capitalized key still matches."""
        assert is_xml_content_type({"Content-Type": "application/xml"}) is True


class TestRejectedContentTypes:
    """Headers that must fail the gate."""

    def test_missing_header(self) -> None:
        """No Content-Type at all is rejected."""
        assert is_xml_content_type({}) is False
        assert is_xml_content_type({"accept": "application/xml"}) is False

    @pytest.mark.parametrize(
        "value",
        [
            "application/json",
            "not a mime",
            "",
            "application/",
            "/xml",
            "image/svg+xml",
            "application/xml+json",
            "multipart/form-data; boundary=x",
        ],
    )
    def test_non_xml_types_rejected(self, value: str) -> None:
        """JSON, malformed and non-XML types are rejected."""
        assert is_xml_content_type({"content-type": value}) is False

    def test_non_ascii_value_rejected(self) -> None:
        """A header value outside visible ASCII is rejected."""
        assert is_xml_content_type({"content-type": "application/xmlé"}) is False


class TestMimeSuffix:
    """Tests for structured-syntax suffix extraction."""

    def test_suffix_present(self) -> None:
        assert mime_suffix("vnd.custom+xml") == "xml"

    def test_no_suffix(self) -> None:
        assert mime_suffix("xml") is None
        assert mime_suffix("vnd.custom+") is None
