"""
Color codec: GPML color literals to :class:`Color` values and back.

Reading accepts one of the named palette colors or a hex triplet. Writing
always produces ``#rrggbb``; names are never written, so a named input
survives a round trip by value but not as the same literal.
"""
import logging
import re
from types import MappingProxyType
from typing import Optional

from gpml_codec.models.graphics import Color
from gpml_codec.utils.validation import IssueCategory, ValidationCollector
from gpml_codec.utils.validation_messages import CodecMessage

logger = logging.getLogger(__name__)

TRANSPARENT_NAME = "Transparent"

PALETTE = MappingProxyType({
    "Aqua": Color.rgb(0x00, 0xff, 0xff),
    "Black": Color.rgb(0x00, 0x00, 0x00),
    "Blue": Color.rgb(0x00, 0x00, 0xff),
    "Fuchsia": Color.rgb(0xff, 0x00, 0xff),
    "Gray": Color.rgb(0x80, 0x80, 0x80),
    "Green": Color.rgb(0x00, 0x80, 0x00),
    "Lime": Color.rgb(0x00, 0xff, 0x00),
    "Maroon": Color.rgb(0x80, 0x00, 0x00),
    "Navy": Color.rgb(0x00, 0x00, 0x80),
    "Olive": Color.rgb(0x80, 0x80, 0x00),
    "Purple": Color.rgb(0x80, 0x00, 0x80),
    "Red": Color.rgb(0xff, 0x00, 0x00),
    "Silver": Color.rgb(0xc0, 0xc0, 0xc0),
    "Teal": Color.rgb(0x00, 0x80, 0x80),
    "White": Color.rgb(0xff, 0xff, 0xff),
    "Yellow": Color.rgb(0xff, 0xff, 0x00),
    TRANSPARENT_NAME: Color(transparent=True),
})

_HEX_PREFIX = re.compile(r"^(#|0x|0X)")
_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")

OPAQUE_BLACK = Color.rgb(0, 0, 0)


def decode(text: Optional[str], collector: Optional[ValidationCollector] = None) -> Color:
    """Decode a color literal.

    Never raises: malformed literals are logged (and recorded when a
    collector is given) and decode to opaque black.

    Args:
        text: A palette name such as ``"Red"`` or a hex triplet such as ``"#ff0000"``
        collector: Optional collector receiving recovered issues

    Returns:
        The decoded color
    """
    if text in PALETTE:
        return PALETTE[text]

    digits = _HEX_PREFIX.sub("", (text or "").strip())
    if len(digits) == 6 and _HEX_DIGITS.match(digits):
        value = int(digits, 16)
        return Color.rgb((value >> 16) & 0xff, (value >> 8) & 0xff, value & 0xff)

    if len(digits) == 8 and _HEX_DIGITS.match(digits):
        _report(CodecMessage.EIGHT_DIGIT_COLOR.format(literal=text),
                IssueCategory.COLOR_ANOMALY, collector)
    else:
        _report(CodecMessage.INVALID_COLOR.format(literal=text),
                IssueCategory.INVALID_COLOR_LITERAL, collector)
    return OPAQUE_BLACK


def _report(message: str, category: IssueCategory,
            collector: Optional[ValidationCollector]) -> None:
    if collector is not None:
        collector.warn(message, category, field_name="color")
    else:
        logger.warning(message)


def encode(color: Color) -> str:
    """Encode the RGB part of a color as ``#rrggbb``."""
    return "#%02x%02x%02x" % (color.red, color.green, color.blue)


def to_attribute(color: Color, prefix: str = "#") -> str:
    """Attribute text for a color, keeping the transparency flag.

    Transparent colors are written as the ``Transparent`` marker, everything
    else as :func:`encode` output. The current dialect writes its hex
    colors without the ``#`` prefix.
    """
    if color.transparent:
        return TRANSPARENT_NAME
    return prefix + encode(color)[1:]
