"""Number formatting shared by the dialect writers and the identifier allocator.

GPML files written by PathVisio carry doubles in Java's ``Double.toString``
form ("125.0", "1.0E-4"). Reproducing that form keeps re-saved files stable
and makes synthesized identifiers match the ones PathVisio produced.
"""
import math
from decimal import Decimal


def format_double(value: float) -> str:
    """Format a float the way Java's ``Double.toString`` does.

    Args:
        value: the number to format

    Returns:
        The decimal string, e.g. ``"125.0"`` or ``"1.0E7"``
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"

    text = repr(value)
    if 1e-3 <= abs(value) < 1e7:
        return text

    # Computerized scientific notation with the shortest round-trip digits
    sign, digits, exponent = Decimal(text).normalize().as_tuple()
    significand = "".join(str(d) for d in digits)
    scientific_exponent = len(significand) - 1 + exponent
    mantissa = significand[0] + "." + (significand[1:] or "0")
    return f"{'-' if sign else ''}{mantissa}E{scientific_exponent}"


def parse_float(text, default: float = 0.0) -> float:
    """Parse a float attribute, falling back to ``default`` for empty values."""
    if text is None or text == "":
        return default
    return float(text)
