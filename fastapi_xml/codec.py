"""
XML codec for pydantic models.

Maps a pydantic model onto an XML document and back:

- The root element is named by ``__xml_tag__`` on the model class, or
  by the class name.
- Each field is a child element named by its alias or field name.
- Fields declared with ``attr()`` are attributes of their element.
- List, tuple and set fields are repeated child elements. A sequence
  with no elements writes nothing and reads back as empty.
- Nested models are nested elements.
- A ``None`` element is written as an empty element marked
  ``xsi:nil="true"``. A ``None`` attribute is omitted, which is only
  allowed when the field defaults to ``None``.
- Only ``attr()`` fields are read from attributes. Other attributes
  are left to the model's ``extra`` policy.

Parsing uses lxml with entity resolution and network access disabled.
Validation is left to pydantic, so a decoded value always satisfies the
model or a ``ValidationError`` is raised.
"""

import types
from collections.abc import Sequence
from typing import Any, TypeVar, Union, get_args, get_origin

from lxml import etree
from pydantic import BaseModel, Field
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

M = TypeVar("M", bound=BaseModel)

XML_KEY = "xml"
XML_ATTRIBUTE = "attribute"

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSI_NIL = f"{{{XSI_NAMESPACE}}}nil"

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence)


class XmlCodecError(ValueError):
    """Raised when a document or a value does not fit the XML mapping."""


def attr(default: Any = PydanticUndefined, **kwargs: Any) -> Any:
    """Declare a model field serialized as an XML attribute.

    Accepts the same keyword arguments as ``pydantic.Field``.
    """
    extra = kwargs.pop("json_schema_extra", None) or {}
    return Field(default, json_schema_extra={**extra, XML_KEY: XML_ATTRIBUTE}, **kwargs)


def xml_tag(model: type[BaseModel]) -> str:
    """Return the root element name for a model class."""
    return getattr(model, "__xml_tag__", None) or model.__name__


def _is_attribute(field: FieldInfo) -> bool:
    extra = field.json_schema_extra
    return isinstance(extra, dict) and extra.get(XML_KEY) == XML_ATTRIBUTE


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _unwrap(annotation: Any) -> tuple[Any, bool]:
    """Return the item type of a field and whether it repeats.

    ``Optional[X]`` unwraps to ``X``; ``list[X]`` to ``(X, True)``.
    """
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
        return annotation, False
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        return (args[0] if args else Any), True
    return annotation, False


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


def _field_key(name: str, field: FieldInfo) -> str:
    return field.alias or name


# ---------------------------------------------------------------------------
# XML bytes -> model
# ---------------------------------------------------------------------------


def _is_nil(element: etree._Element) -> bool:
    return element.get(XSI_NIL) in ("true", "1")


def _element_value(element: etree._Element, annotation: Any) -> Any:
    if _is_nil(element):
        return None
    if _is_model(annotation):
        return _element_to_data(element, annotation)
    return element.text or ""


def _element_to_data(element: etree._Element, model: type[BaseModel]) -> dict[str, Any]:
    tag = _local_name(element.tag)
    fields = {_field_key(name, field): field for name, field in model.model_fields.items()}
    data: dict[str, Any] = {}
    unknown: dict[str, Any] = {}

    for name, value in element.attrib.items():
        if etree.QName(name).namespace == XSI_NAMESPACE:
            continue
        key = _local_name(name)
        field = fields.get(key)
        if field is None:
            unknown[key] = value
        elif not _is_attribute(field):
            raise XmlCodecError(f"<{tag}>: {key!r} must be an element, not an attribute")
        else:
            data[key] = value

    children: dict[str, list[etree._Element]] = {}
    for child in element:
        # Comments and processing instructions have non-string tags
        if isinstance(child.tag, str):
            children.setdefault(_local_name(child.tag), []).append(child)

    for key, field in fields.items():
        if _is_attribute(field):
            if key in children:
                raise XmlCodecError(f"<{tag}>: {key!r} must be an attribute, not an element")
            continue
        elements = children.pop(key, None)
        item_type, many = _unwrap(field.annotation)
        if many:
            if elements is not None and len(elements) == 1 and _is_nil(elements[0]):
                data[key] = None
            else:
                # No occurrences is an empty sequence
                data[key] = [_element_value(e, item_type) for e in elements or ()]
        elif elements is None:
            continue
        elif len(elements) > 1:
            raise XmlCodecError(f"duplicate element <{key}> in <{tag}>")
        else:
            data[key] = _element_value(elements[0], item_type)

    # Unknown attributes and elements are handed to pydantic so the model's
    # extra policy applies
    for key, elements in children.items():
        values = [e.text or "" for e in elements]
        unknown.setdefault(key, values if len(values) > 1 else values[0])
    for key, value in unknown.items():
        data.setdefault(key, value)

    return data


def from_xml(body: bytes, model: type[M]) -> M:
    """Decode an XML document into ``model``.

    Raises:
        lxml.etree.XMLSyntaxError: The document is not well-formed.
        XmlCodecError: The root element or structure does not fit the model.
        pydantic.ValidationError: The content does not satisfy the model.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    root = etree.fromstring(body, parser=parser)

    expected = xml_tag(model)
    found = _local_name(root.tag)
    if found != expected:
        raise XmlCodecError(f"expected root element <{expected}>, found <{found}>")

    return model.model_validate(_element_to_data(root, model))


# ---------------------------------------------------------------------------
# model -> XML bytes
# ---------------------------------------------------------------------------


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: etree._Element, model: type[BaseModel], data: dict[str, Any]) -> None:
    for name, field in model.model_fields.items():
        value = data.get(name)
        key = _field_key(name, field)

        if _is_attribute(field):
            if value is None:
                # An absent attribute reads back as the field default
                if field.default is not None:
                    raise XmlCodecError(f"field {name!r}: None cannot be written as an attribute")
                continue
            if isinstance(value, (dict, list)):
                raise XmlCodecError(f"field {name!r} cannot be written as an attribute")
            element.set(key, _text(value))
            continue

        if value is None:
            etree.SubElement(element, key).set(XSI_NIL, "true")
            continue

        item_type, many = _unwrap(field.annotation)
        items = value if many and isinstance(value, list) else [value]
        for item in items:
            if item is None:
                raise XmlCodecError(f"field {name!r}: None items in a sequence cannot be written as XML")
            child = etree.SubElement(element, key)
            if isinstance(item, dict):
                if not _is_model(item_type):
                    raise XmlCodecError(f"field {name!r}: mappings cannot be written as XML")
                _fill(child, item_type, item)
            elif isinstance(item, list):
                raise XmlCodecError(f"field {name!r}: nested sequences cannot be written as XML")
            else:
                child.text = _text(item)


def to_xml(
    model: BaseModel, *, xml_declaration: bool = False, pretty_print: bool = False
) -> bytes:
    """Encode a model instance as UTF-8 XML.

    Raises:
        TypeError: ``model`` is not a pydantic model.
        XmlCodecError: A field value cannot be represented in XML.
        ValueError: A field name is not a valid XML name.
    """
    if not isinstance(model, BaseModel):
        raise TypeError(f"cannot serialize {type(model).__name__} as XML: not a pydantic model")

    model_cls = type(model)
    root = etree.Element(xml_tag(model_cls))
    _fill(root, model_cls, model.model_dump(mode="json"))
    return etree.tostring(
        root,
        encoding="utf-8",
        xml_declaration=xml_declaration,
        pretty_print=pretty_print,
    )
