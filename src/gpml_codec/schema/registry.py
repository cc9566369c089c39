"""
Schema registry: per-dialect attribute types, defaults and requiredness.

Each dialect describes its attributes in a table keyed by
``AttributeKey(tag, attribute)``, where both parts are enum members of that
dialect. The registry answers two questions for the adapters:

- on read, what value does a missing attribute take?
- on write, may an attribute be left out because it equals the default?
"""

import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from lxml import etree as ET
from pydantic import BaseModel

from gpml_codec.codec import colors
from gpml_codec.exceptions.codec import (
    MissingRequiredAttributeError,
    UnknownAttributeError,
)

NUMERIC_TOLERANCE = 1e-6

ROTATION_TOKENS = MappingProxyType({
    "Top": 0.0,
    "Right": 0.5 * math.pi,
    "Bottom": math.pi,
    "Left": 1.5 * math.pi,
})


def parse_rotation(text: str) -> float:
    """Rotation in radians from a named token or a number.

    Raises:
        ValueError: If the text is neither a token nor a number
    """
    if text in ROTATION_TOKENS:
        return ROTATION_TOKENS[text]
    return float(text)


class SchemaType(str, Enum):
    """XSD types used by GPML attributes"""

    STRING = "xsd:string"
    ID = "xsd:ID"
    IDREF = "xsd:IDREF"
    FLOAT = "xsd:float"
    INTEGER = "xsd:integer"
    NON_NEGATIVE_INTEGER = "xsd:nonNegativeInteger"
    DIMENSION = "gpml:Dimension"
    COLOR = "gpml:ColorType"
    STYLE = "gpml:StyleType"
    ROTATION = "gpml:RotationType"

    @property
    def is_numeric(self) -> bool:
        return self in (
            SchemaType.FLOAT,
            SchemaType.INTEGER,
            SchemaType.NON_NEGATIVE_INTEGER,
            SchemaType.DIMENSION,
        )


class Use(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class AttributeInfo(BaseModel):
    """Type, default and requiredness of one attribute"""

    schema_type: SchemaType
    default: Optional[str] = None
    use: Use = Use.OPTIONAL

    class Config:
        frozen = True

    @property
    def required(self) -> bool:
        return self.use == Use.REQUIRED


class AttributeKey(NamedTuple):
    """Composite registry key: an element tag and one of its attributes"""

    tag: Enum
    attribute: Enum


def required(schema_type: SchemaType, default: Optional[str] = None) -> AttributeInfo:
    return AttributeInfo(schema_type=schema_type, default=default, use=Use.REQUIRED)


def optional(schema_type: SchemaType, default: Optional[str] = None) -> AttributeInfo:
    return AttributeInfo(schema_type=schema_type, default=default, use=Use.OPTIONAL)


def is_default(info: AttributeInfo, value: Optional[str]) -> bool:
    """Check whether a serialized value equals the registered default.

    Args:
        info: The attribute's registry entry
        value: The attribute text about to be written

    Returns:
        True if the attribute can be omitted from the output
    """
    if info.required:
        return False

    if info.schema_type.is_numeric:
        if info.default is None or value is None or value == "":
            return info.default is None and (value is None or value == "")
        try:
            return abs(float(info.default) - float(value)) < NUMERIC_TOLERANCE
        except ValueError:
            return False

    if info.schema_type == SchemaType.ROTATION:
        if info.default is None or value is None:
            return info.default is None and value is None
        try:
            return abs(parse_rotation(info.default) - parse_rotation(value)) < NUMERIC_TOLERANCE
        except ValueError:
            return False

    if info.schema_type == SchemaType.COLOR:
        if info.default is None or value is None:
            return info.default is None and value is None
        # quiet decode: both sides come from the registry or the color codec
        default_color = colors.decode(info.default)
        value_color = colors.decode(value)
        return (
            default_color.same_rgb(value_color)
            and (info.default == colors.TRANSPARENT_NAME) == (value == colors.TRANSPARENT_NAME)
        )

    # string-like types: a missing default equals an empty value
    if info.default is None:
        return value is None or value == ""
    return info.default == value


class SchemaRegistry:
    """Immutable table of attribute definitions for one dialect."""

    def __init__(self, name: str, entries: Mapping[AttributeKey, AttributeInfo]):
        """Initialize the registry.

        Args:
            name: Dialect name, used in messages
            entries: Attribute definitions keyed by (tag, attribute)
        """
        self.name = name
        self._entries = MappingProxyType(dict(entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def lookup(self, tag: Enum, attribute: Enum) -> AttributeInfo:
        """Find the definition of an attribute.

        Raises:
            UnknownAttributeError: If the key is not defined for this dialect
        """
        try:
            return self._entries[AttributeKey(tag, attribute)]
        except KeyError:
            raise UnknownAttributeError(tag.value, attribute.value) from None

    def read_attribute(self, element: ET._Element, tag: Enum, attribute: Enum) -> Optional[str]:
        """Read an attribute, falling back to the registered default.

        Raises:
            UnknownAttributeError: If the key is not defined for this dialect
            MissingRequiredAttributeError: If a required attribute is absent
        """
        info = self.lookup(tag, attribute)
        value = element.get(attribute.value)
        if value is None:
            if info.required and info.default is None:
                raise MissingRequiredAttributeError(tag.value, attribute.value)
            return info.default
        return value

    def write_attribute(self, element: ET._Element, tag: Enum, attribute: Enum,
                        value: Optional[str]) -> None:
        """Set an attribute unless it is optional and equal to its default.

        Raises:
            UnknownAttributeError: If the key is not defined for this dialect
        """
        info = self.lookup(tag, attribute)
        if value is None:
            if info.required:
                raise MissingRequiredAttributeError(tag.value, attribute.value)
            return
        if is_default(info, value):
            return
        element.set(attribute.value, value)
