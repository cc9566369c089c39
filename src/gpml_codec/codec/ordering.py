"""
Canonical ordering of generated elements.

GPML's XSD fixes the order of the children of ``Pathway``. Writers emit
elements in whatever order is convenient and this module sorts them
afterwards. Reading never depends on order.
"""
from typing import Dict, List, Sequence

from lxml import etree as ET

from gpml_codec.exceptions.codec import UnorderedTagError

LEGACY_ORDER = (
    "Comment", "BiopaxRef", "Attribute", "Graphics", "DataNode", "State",
    "Interaction", "Line", "GraphicalLine", "Label", "Shape", "Group",
    "InfoBox", "Legend", "Biopax",
)

CURRENT_ORDER = (
    "Xref", "Description", "Authors", "Comment", "Property", "AnnotationRef",
    "CitationRef", "EvidenceRef", "Graphics", "DataNodes", "Interactions",
    "GraphicalLines", "Labels", "Shapes", "Groups", "Annotations",
    "Citations", "Evidences",
)


def local_name(element: ET._Element) -> str:
    return ET.QName(element).localname


class OrderingPolicy:
    """Sorts siblings by a fixed tag order."""

    def __init__(self, order: Sequence[str]):
        self._positions: Dict[str, int] = {tag: i for i, tag in enumerate(order)}

    def position(self, tag: str) -> int:
        """Rank of a tag in the canonical order.

        Raises:
            UnorderedTagError: If the tag is not part of the order
        """
        try:
            return self._positions[tag]
        except KeyError:
            raise UnorderedTagError(tag) from None

    def sort(self, elements: Sequence[ET._Element]) -> List[ET._Element]:
        """Stable sort of elements by canonical tag order."""
        return sorted(elements, key=lambda e: self.position(local_name(e)))

    def sort_children(self, parent: ET._Element) -> ET._Element:
        """Reorder the element children of ``parent`` in place."""
        children = [child for child in parent if isinstance(child.tag, str)]
        ordered = self.sort(children)
        for child in children:
            parent.remove(child)
        parent.extend(ordered)
        return parent


def first_attribute_value(element: ET._Element) -> str:
    for _, value in element.attrib.items():
        return value
    return ""


def sort_biopax(block: ET._Element) -> ET._Element:
    """Order the children of a BioPAX block by their first attribute value."""
    children = [child for child in block if isinstance(child.tag, str)]
    for child in children:
        block.remove(child)
    block.extend(sorted(children, key=first_attribute_value))
    return block


LEGACY_ORDERING = OrderingPolicy(LEGACY_ORDER)
CURRENT_ORDERING = OrderingPolicy(CURRENT_ORDER)
