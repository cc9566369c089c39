"""Helpers shared by the dialect adapters."""
from enum import Enum
from typing import Iterator, Optional, Type, TypeVar

from lxml import etree as ET
from pydantic import BaseModel, ValidationError

from gpml_codec.exceptions.codec import GpmlCodecError
from gpml_codec.schema.registry import parse_rotation
from gpml_codec.utils.formatting import format_double
from gpml_codec.utils.validation_messages import CodecMessage

E = TypeVar("E", bound=Enum)
M = TypeVar("M", bound=BaseModel)

# Font flags and the attribute value that switches them on
FONT_FLAGS = {
    "font_weight": "Bold",
    "font_style": "Italic",
    "font_decoration": "Underline",
    "font_strikethru": "Strikethru",
}
FONT_NORMAL = "Normal"


class NamespacedXml:
    """Element lookup and creation within one XML namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace

    def qname(self, tag: str) -> str:
        return f"{{{self.namespace}}}{tag}"

    def find(self, parent: ET._Element, tag: str) -> Optional[ET._Element]:
        return parent.find(self.qname(tag))

    def findall(self, parent: ET._Element, tag: str) -> Iterator[ET._Element]:
        return iter(parent.findall(self.qname(tag)))

    def findall_in(self, parent: ET._Element, container: str, tag: str) -> Iterator[ET._Element]:
        """Children ``tag`` of every ``container`` child of ``parent``."""
        for box in parent.findall(self.qname(container)):
            yield from box.findall(self.qname(tag))

    def sub(self, parent: ET._Element, tag: str) -> ET._Element:
        return ET.SubElement(parent, self.qname(tag))

    def root(self, tag: str = "Pathway") -> ET._Element:
        return ET.Element(self.qname(tag), nsmap={None: self.namespace})


def parse_enum(enum_type: Type[E], text: Optional[str], default: E) -> E:
    """Enum member by value, case-insensitively; ``default`` if unknown."""
    if text is None:
        return default
    for member in enum_type:
        if member.value.lower() == text.lower():
            return member
    return default


def font_flag(text: Optional[str], flag: str) -> bool:
    return text is not None and text.lower() == FONT_FLAGS[flag].lower()


def font_flag_text(value: bool, flag: str) -> str:
    return FONT_FLAGS[flag] if value else FONT_NORMAL


def number(value: float) -> str:
    return format_double(value)


def integer(value: float) -> str:
    return str(int(round(value)))


def optional_integer(text: Optional[str]) -> Optional[int]:
    if text is None or text == "":
        return None
    return int(float(text))


def build(model_type: Type[M], tag: str, error_id: Optional[str] = None, **fields) -> M:
    """Construct a model object, reporting invalid content as a codec error.

    Raises:
        GpmlCodecError: If pydantic rejects the field values
    """
    try:
        return model_type(**fields)
    except ValidationError as e:
        raise GpmlCodecError(
            f"Invalid {tag} element: {e.error_count()} validation error(s)",
            error_id,
            details={"errors": e.errors(include_url=False)},
        ) from e


def add_element(model, element):
    """Add a top-level element, reporting duplicate IDs as a codec error.

    Raises:
        GpmlCodecError: If the element's ID is already taken
    """
    try:
        return model.add(element)
    except ValueError as e:
        raise GpmlCodecError(str(e), element.element_id) from e


def to_float(text: Optional[str], tag: Enum, attribute: Enum,
             element_id: Optional[str] = None, default: Optional[float] = None) -> float:
    """Parse a numeric attribute value read through a registry.

    Raises:
        GpmlCodecError: If the value is not a number
    """
    if (text is None or text == "") and default is not None:
        return default
    try:
        return float(text)
    except (TypeError, ValueError) as e:
        raise GpmlCodecError(
            f"Invalid number {text!r} for {tag.value}@{attribute.value}", element_id
        ) from e


def to_rotation(text: Optional[str], tag: Enum, attribute: Enum,
                element_id: Optional[str] = None) -> float:
    if text is None:
        return 0.0
    try:
        return parse_rotation(text)
    except ValueError as e:
        raise GpmlCodecError(
            f"Invalid rotation {text!r} for {tag.value}@{attribute.value}", element_id
        ) from e


def report_lost(context, dialect: str, what: str, element_id: Optional[str],
                element_type: Optional[str] = None):
    """Record information that cannot be written in ``dialect``."""
    return context.validator.lost(
        CodecMessage.LOST_IN_DIALECT.format(what=what, element_id=element_id or "pathway", dialect=dialect),
        element_id=element_id,
        element_type=element_type,
    )
