"""
Identifier allocation for elements that arrive without an ID.

Legacy documents often omit ``GraphId`` on lines and on elements nothing
points to. IDs are synthesized from the element's own geometry so that
loading and saving an unchanged document reproduces the same IDs every time.
The hashing follows ``java.lang.String.hashCode`` and the ``"id" + hex``
pattern of PathVisio's legacy reader, so the IDs look like the ones
PathVisio writes.
"""
import logging
from typing import Optional, Set

from gpml_codec.models.pathway import (
    Anchor,
    LineElement,
    LinePoint,
    PathwayElement,
    PathwayModel,
    ShapedElement,
    State,
)
from gpml_codec.utils.formatting import format_double

logger = logging.getLogger(__name__)


def java_string_hash(text: str) -> int:
    """``String.hashCode`` of Java: 32-bit signed, over UTF-16 code units."""
    h = 0
    encoded = text.encode("utf-16-be")
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        h = (31 * h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def to_hex_string(value: int) -> str:
    """``Integer.toHexString``: unsigned two's complement, no padding."""
    return format(value & 0xFFFFFFFF, "x")


def line_signature(line: LineElement) -> str:
    start, end = line.start_point, line.end_point
    return "".join([
        format_double(start.x), format_double(start.y),
        format_double(end.x), format_double(end.y),
        line.start_arrow_head, line.end_arrow_head,
    ])


def element_signature(element: PathwayElement, owner: Optional[PathwayElement] = None) -> str:
    """Canonical text describing an element's identity-relevant content."""
    if isinstance(element, LineElement):
        return line_signature(element)
    if isinstance(element, ShapedElement):
        rect = element.rect
        return "".join([
            element.kind.value,
            format_double(rect.center_x), format_double(rect.center_y),
            format_double(rect.width), format_double(rect.height),
            element.text_label,
        ])
    if isinstance(element, State):
        return "".join([
            element.kind.value, owner.element_id if owner is not None else "",
            format_double(element.rel_x), format_double(element.rel_y),
            element.text_label,
        ])
    if isinstance(element, LinePoint):
        return "".join([
            element.kind.value, owner.element_id if owner is not None else "",
            format_double(element.x), format_double(element.y),
        ])
    if isinstance(element, Anchor):
        return "".join([
            element.kind.value, owner.element_id if owner is not None else "",
            format_double(element.position),
        ])
    return element.kind.value + "".join(sorted(element.dynamic_properties))


class IdentifierAllocator:
    """Fills in missing element IDs, deterministically."""

    def __init__(self, taken: Optional[Set[str]] = None):
        """Initialize the allocator.

        Args:
            taken: IDs already in use; allocated IDs are added to it
        """
        self.taken: Set[str] = set(taken) if taken else set()

    def candidate(self, signature: str, start: int = 1) -> str:
        """First ``id<hex>`` derived from the signature that is still free."""
        i = start
        while True:
            candidate = "id" + to_hex_string(java_string_hash(f"{signature}_{i}"))
            if candidate not in self.taken:
                return candidate
            i += 1

    def ensure_id(self, element: PathwayElement, owner: Optional[PathwayElement] = None) -> str:
        """Return the element's ID, synthesizing one if it has none.

        Args:
            element: The element to check
            owner: Line or data node owning a point, anchor or state

        Returns:
            The existing or newly assigned ID
        """
        if element.element_id:
            self.taken.add(element.element_id)
            return element.element_id

        element.element_id = self.candidate(element_signature(element, owner))
        self.taken.add(element.element_id)
        logger.debug("Assigned ID %s to %s", element.element_id, element.kind.value)
        return element.element_id

    def allocate(self, model: PathwayModel) -> int:
        """Assign IDs to every element of a fully loaded model.

        Existing IDs are reserved first, so synthesized IDs never collide
        with IDs appearing later in the document.

        Returns:
            Number of IDs that were synthesized
        """
        self.taken |= model.element_ids()
        before = len(self.taken)

        for data_node in model.data_nodes:
            self.ensure_id(data_node)
        for line in model.iter_line_elements():
            self.ensure_id(line)
        for element in (*model.labels, *model.shapes, *model.groups, *model.citations):
            self.ensure_id(element)

        # owned objects are keyed by their owner's ID
        for data_node, state in model.iter_states():
            self.ensure_id(state, data_node)
        for line in model.iter_line_elements():
            for point in line.points:
                self.ensure_id(point, line)
            for anchor in line.anchors:
                self.ensure_id(anchor, line)

        return len(self.taken) - before
