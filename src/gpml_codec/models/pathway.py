"""
Data model for a pathway diagram, independent of any GPML dialect.

Elements are stored in ordered lists on :class:`PathwayModel`. References
between elements (group membership, line endpoints, states) are plain ID
strings looked up through the model, never object links.
"""

from enum import Enum
from typing import ClassVar, Dict, Iterator, List, Optional, Tuple, Union
from pydantic import BaseModel, Field, model_validator

from gpml_codec.models.graphics import (
    Color,
    FontProperty,
    LineStyleProperty,
    RectProperty,
    ShapeStyleProperty,
    ArrowHeadType,
    ShapeTypeName,
    TRANSPARENT,
    WHITE,
)

# Padding around the members of a group without its own graphics
GROUP_PADDING = 8.0


class ElementKind(str, Enum):
    """Kinds of objects that can carry an element ID"""

    DATA_NODE = "DataNode"
    STATE = "State"
    INTERACTION = "Interaction"
    GRAPHICAL_LINE = "GraphicalLine"
    LABEL = "Label"
    SHAPE = "Shape"
    GROUP = "Group"
    ANCHOR = "Anchor"
    POINT = "Point"
    CITATION = "Citation"


class Comment(BaseModel):
    text: str
    source: Optional[str] = None


class Xref(BaseModel):
    """Reference into an external database"""

    identifier: str = ""
    data_source: str = ""


class Author(BaseModel):
    name: str
    username: Optional[str] = None
    order: Optional[int] = None
    xref: Optional[Xref] = None


class PathwayElement(BaseModel):
    """Base class for everything that can be addressed by an element ID."""

    kind: ClassVar[ElementKind]

    element_id: Optional[str] = None
    comments: List[Comment] = Field(default_factory=list)
    dynamic_properties: Dict[str, str] = Field(default_factory=dict)
    citation_refs: List[str] = Field(default_factory=list)

    @property
    def has_id(self) -> bool:
        return bool(self.element_id)


class Citation(PathwayElement):
    """A literature reference, cited by elements through ``citation_refs``"""

    kind: ClassVar[ElementKind] = ElementKind.CITATION

    xref: Optional[Xref] = None
    url: Optional[str] = None
    title: Optional[str] = None
    source: Optional[str] = None
    year: Optional[str] = None
    authors: List[str] = Field(default_factory=list)


class ShapedElement(PathwayElement):
    """An element drawn as a box: data nodes, labels, shapes and groups."""

    text_label: str = ""
    rect: RectProperty = Field(default_factory=RectProperty)
    font: FontProperty = Field(default_factory=FontProperty)
    shape_style: ShapeStyleProperty = Field(default_factory=ShapeStyleProperty)
    group_ref: Optional[str] = None


class State(PathwayElement):
    """A state glyph attached to a data node.

    ``rel_x``/``rel_y`` place the state's center relative to the parent
    data node, in units of half the parent's width/height.
    """

    kind: ClassVar[ElementKind] = ElementKind.STATE

    text_label: str = ""
    type: str = "Undefined"
    rel_x: float = 0.0
    rel_y: float = 0.0
    width: float = Field(default=0.0, ge=0.0)
    height: float = Field(default=0.0, ge=0.0)
    font: FontProperty = Field(default_factory=FontProperty)
    shape_style: ShapeStyleProperty = Field(default_factory=ShapeStyleProperty)
    xref: Optional[Xref] = None


class DataNode(ShapedElement):
    kind: ClassVar[ElementKind] = ElementKind.DATA_NODE

    type: str = "Undefined"
    xref: Optional[Xref] = None
    states: List[State] = Field(default_factory=list)
    alias_ref: Optional[str] = None  # group this node is an alias for


class Label(ShapedElement):
    kind: ClassVar[ElementKind] = ElementKind.LABEL

    href: Optional[str] = None
    shape_style: ShapeStyleProperty = Field(
        default_factory=lambda: ShapeStyleProperty(
            fill_color=TRANSPARENT, shape_type=ShapeTypeName.NONE
        )
    )


class Shape(ShapedElement):
    kind: ClassVar[ElementKind] = ElementKind.SHAPE

    shape_style: ShapeStyleProperty = Field(
        default_factory=lambda: ShapeStyleProperty(fill_color=TRANSPARENT)
    )


class Group(ShapedElement):
    """A group of elements. Members point at the group through ``group_ref``."""

    kind: ClassVar[ElementKind] = ElementKind.GROUP

    type: str = "Group"
    xref: Optional[Xref] = None
    shape_style: ShapeStyleProperty = Field(
        default_factory=lambda: ShapeStyleProperty(fill_color=TRANSPARENT)
    )


class LinePoint(PathwayElement):
    """A point of a line, optionally attached to another element.

    When attached, ``rel_x``/``rel_y`` give the position inside the
    referenced element; see :mod:`gpml_codec.codec.coordinates`.
    """

    kind: ClassVar[ElementKind] = ElementKind.POINT

    x: float = 0.0
    y: float = 0.0
    element_ref: Optional[str] = None
    rel_x: Optional[float] = None
    rel_y: Optional[float] = None

    @model_validator(mode="after")
    def validate_relative_position(self):
        """A relative position is only meaningful for an attached point"""
        if self.relative_set and not self.element_ref:
            raise ValueError("Relative position set on a point without element reference")
        return self

    @property
    def relative_set(self) -> bool:
        return self.rel_x is not None and self.rel_y is not None

    def set_relative(self, rel_x: float, rel_y: float) -> None:
        self.rel_x = rel_x
        self.rel_y = rel_y

    def unlink(self) -> None:
        """Detach the point, keeping its absolute coordinates"""
        self.element_ref = None
        self.rel_x = None
        self.rel_y = None


class Anchor(PathwayElement):
    """Attachment point at a fraction ``position`` along a line"""

    kind: ClassVar[ElementKind] = ElementKind.ANCHOR

    position: float = Field(default=0.5, ge=0.0, le=1.0)
    shape_type: str = ShapeTypeName.SQUARE


class LineElement(PathwayElement):
    """An interaction or graphical line.

    ``route`` is derived geometry, recomputed after coordinates are resolved,
    and is never serialized.
    """

    points: List[LinePoint] = Field(min_length=2)
    anchors: List[Anchor] = Field(default_factory=list)
    line_style: LineStyleProperty = Field(default_factory=LineStyleProperty)
    group_ref: Optional[str] = None
    start_arrow_head: str = ArrowHeadType.UNDIRECTED
    end_arrow_head: str = ArrowHeadType.UNDIRECTED
    route: List[Tuple[float, float]] = Field(default_factory=list, exclude=True)

    @property
    def start_point(self) -> LinePoint:
        return self.points[0]

    @property
    def end_point(self) -> LinePoint:
        return self.points[-1]


class Interaction(LineElement):
    kind: ClassVar[ElementKind] = ElementKind.INTERACTION

    xref: Optional[Xref] = None


class GraphicalLine(LineElement):
    kind: ClassVar[ElementKind] = ElementKind.GRAPHICAL_LINE


class Pathway(BaseModel):
    """Pathway-level metadata"""

    title: str = ""
    organism: Optional[str] = None
    source: Optional[str] = None
    version: Optional[str] = None
    license: Optional[str] = None
    description: Optional[str] = None
    board_width: float = 0.0
    board_height: float = 0.0
    background_color: Color = WHITE
    xref: Optional[Xref] = None
    authors: List[Author] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    dynamic_properties: Dict[str, str] = Field(default_factory=dict)
    citation_refs: List[str] = Field(default_factory=list)


TopLevelElement = Union[DataNode, Interaction, GraphicalLine, Label, Shape, Group, Citation]


class PathwayModel(BaseModel):
    """Top-level container owning every element of one pathway.

    ``biopax`` holds the serialized children of a legacy ``Biopax`` block,
    copied through without interpretation.
    """

    pathway: Pathway = Field(default_factory=Pathway)
    data_nodes: List[DataNode] = Field(default_factory=list)
    interactions: List[Interaction] = Field(default_factory=list)
    graphical_lines: List[GraphicalLine] = Field(default_factory=list)
    labels: List[Label] = Field(default_factory=list)
    shapes: List[Shape] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)
    citations: List[Citation] = Field(default_factory=list)
    biopax: List[str] = Field(default_factory=list)

    def _collection_for(self, element: TopLevelElement) -> list:
        if isinstance(element, DataNode):
            return self.data_nodes
        if isinstance(element, Interaction):
            return self.interactions
        if isinstance(element, GraphicalLine):
            return self.graphical_lines
        if isinstance(element, Label):
            return self.labels
        if isinstance(element, Shape):
            return self.shapes
        if isinstance(element, Group):
            return self.groups
        if isinstance(element, Citation):
            return self.citations
        raise TypeError(f"Cannot store {type(element).__name__} at pathway level")

    def add(self, element: TopLevelElement) -> TopLevelElement:
        """Append an element to its collection.

        Raises:
            ValueError: If the element's ID is already used in this model
        """
        if element.element_id and element.element_id in self.element_ids():
            raise ValueError(f"Duplicate element ID '{element.element_id}'")
        self._collection_for(element).append(element)
        return element

    def remove(self, element: TopLevelElement) -> None:
        """Remove an element from its collection (identity based)."""
        collection = self._collection_for(element)
        for index, candidate in enumerate(collection):
            if candidate is element:
                del collection[index]
                return
        raise ValueError(f"Element {element.element_id!r} is not part of this model")

    def iter_shaped_elements(self) -> Iterator[ShapedElement]:
        yield from self.data_nodes
        yield from self.labels
        yield from self.shapes
        yield from self.groups

    def iter_line_elements(self) -> Iterator[LineElement]:
        yield from self.interactions
        yield from self.graphical_lines

    def iter_states(self) -> Iterator[Tuple[DataNode, State]]:
        for data_node in self.data_nodes:
            for state in data_node.states:
                yield data_node, state

    def iter_elements(self) -> Iterator[PathwayElement]:
        """Every element that can carry an ID, in document order."""
        for data_node in self.data_nodes:
            yield data_node
            yield from data_node.states
        for line in self.iter_line_elements():
            yield line
            yield from line.points
            yield from line.anchors
        yield from self.labels
        yield from self.shapes
        yield from self.groups
        yield from self.citations

    def element_ids(self) -> set:
        return {e.element_id for e in self.iter_elements() if e.element_id}

    def element_index(self) -> Dict[str, PathwayElement]:
        """Map of element ID to element, first occurrence wins."""
        index: Dict[str, PathwayElement] = {}
        for element in self.iter_elements():
            if element.element_id and element.element_id not in index:
                index[element.element_id] = element
        return index

    def get_element(self, element_id: Optional[str]) -> Optional[PathwayElement]:
        if not element_id:
            return None
        return self.element_index().get(element_id)

    def get_group(self, element_id: Optional[str]) -> Optional[Group]:
        for group in self.groups:
            if element_id and group.element_id == element_id:
                return group
        return None

    def members_of(self, group: Group) -> List[Union[ShapedElement, LineElement]]:
        """Elements whose ``group_ref`` names the given group"""
        if not group.element_id:
            return []
        members: List[Union[ShapedElement, LineElement]] = []
        for element in self.iter_shaped_elements():
            if element.group_ref == group.element_id:
                members.append(element)
        for line in self.iter_line_elements():
            if line.group_ref == group.element_id:
                members.append(line)
        return members

    def parent_of(self, state: State) -> Optional[DataNode]:
        for data_node, candidate in self.iter_states():
            if candidate is state:
                return data_node
        return None

    def bounds_of(self, element: PathwayElement, _seen: Optional[set] = None) -> Optional[RectProperty]:
        """Bounding box of an element, or None if it has no area.

        Groups without their own size are measured from their members plus
        :data:`GROUP_PADDING`. States are placed relative to their data node.
        """
        if isinstance(element, Group) and (element.rect.width == 0 or element.rect.height == 0):
            return self.member_bounds(element, _seen)
        if isinstance(element, ShapedElement):
            return element.rect
        if isinstance(element, State):
            parent = self.parent_of(element)
            if parent is None:
                return None
            return RectProperty(
                center_x=parent.rect.center_x + element.rel_x * parent.rect.width / 2,
                center_y=parent.rect.center_y + element.rel_y * parent.rect.height / 2,
                width=element.width,
                height=element.height,
            )
        if isinstance(element, LineElement):
            xs = [p.x for p in element.points]
            ys = [p.y for p in element.points]
            return RectProperty(
                center_x=(min(xs) + max(xs)) / 2,
                center_y=(min(ys) + max(ys)) / 2,
                width=max(xs) - min(xs),
                height=max(ys) - min(ys),
            )
        return None

    def member_bounds(self, group: Group, _seen: Optional[set] = None) -> Optional[RectProperty]:
        """Union of the member bounding boxes of a group, padded."""
        seen = _seen if _seen is not None else set()
        if id(group) in seen:
            return None
        seen.add(id(group))

        boxes = [self.bounds_of(member, seen) for member in self.members_of(group)]
        boxes = [box for box in boxes if box is not None]
        if not boxes:
            return None
        left = min(box.left for box in boxes) - GROUP_PADDING
        top = min(box.top for box in boxes) - GROUP_PADDING
        right = max(box.right for box in boxes) + GROUP_PADDING
        bottom = max(box.bottom for box in boxes) + GROUP_PADDING
        return RectProperty(
            center_x=(left + right) / 2,
            center_y=(top + bottom) / 2,
            width=right - left,
            height=bottom - top,
        )
