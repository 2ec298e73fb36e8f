"""
Content-Type gate for XML request bodies.

Decides from request headers alone whether a body should be treated as
XML. Accepts ``application/xml``, ``text/xml`` and structured-syntax
suffix forms such as ``application/vnd.custom+xml``. The body itself is
never sniffed.
"""

import re
from collections.abc import Mapping

from werkzeug.http import parse_options_header

CONTENT_TYPE = "content-type"
XML_SUBTYPE = "xml"
XML_TOP_LEVEL_TYPES = frozenset({"application", "text"})

# RFC 7230 token characters
_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup that also works on plain dicts."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def _is_visible_ascii(text: str) -> bool:
    return all(ch == "\t" or " " <= ch <= "~" for ch in text)


def mime_suffix(subtype: str) -> str | None:
    """Return the structured-syntax suffix of a subtype, if any.

    ``vnd.custom+xml`` has the suffix ``xml``; ``xml`` has none.
    """
    _, plus, suffix = subtype.rpartition("+")
    return suffix if plus and suffix else None


def is_xml_content_type(headers: Mapping[str, str]) -> bool:
    """Return True when the Content-Type header declares an XML body.

    Args:
        headers: Request headers. Starlette ``Headers`` or any mapping.

    Returns:
        False when the header is absent, not visible ASCII, not a valid
        MIME type, or not an XML type. True otherwise.
    """
    raw = _header_value(headers, CONTENT_TYPE)
    if raw is None or not _is_visible_ascii(raw):
        return False

    mime, _params = parse_options_header(raw)
    main_type, slash, subtype = mime.lower().partition("/")
    if not slash:
        return False
    if not (_TOKEN.match(main_type) and _TOKEN.match(subtype)):
        return False

    return main_type in XML_TOP_LEVEL_TYPES and (
        subtype == XML_SUBTYPE or mime_suffix(subtype) == XML_SUBTYPE
    )
