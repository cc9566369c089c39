"""
Adapter for the current GPML 2021 dialect.

The 2021 dialect maps almost one to one onto the model: elements live in
container elements (``DataNodes``, ``Interactions``, ...), states are nested
in their data node, line points and anchors sit in ``Waypoints``, and every
element carries an explicit ``elementId``. Nothing has to be deferred to the
second reading pass.
"""
import logging
from typing import Dict, List, Optional

from lxml import etree as ET

from gpml_codec.codec import colors
from gpml_codec.codec.ordering import CURRENT_ORDERING
from gpml_codec.core.dialects.base import ConversionContext, Dialect
from gpml_codec.core.dialects.common import (
    NamespacedXml,
    add_element,
    build,
    font_flag,
    font_flag_text,
    integer,
    number,
    optional_integer,
    parse_enum,
    report_lost,
    to_float,
    to_rotation,
)
from gpml_codec.core.dialects.legacy import LEGACY_ONLY_KEYS, RDF_ID
from gpml_codec.exceptions.codec import MissingRequiredAttributeError
from gpml_codec.models.graphics import (
    ConnectorType,
    FontProperty,
    HAlignType,
    LineStyleProperty,
    LineStyleType,
    RectProperty,
    ShapeStyleProperty,
    VAlignType,
)
from gpml_codec.models.pathway import (
    Anchor,
    Author,
    Citation,
    Comment,
    DataNode,
    GraphicalLine,
    Group,
    Interaction,
    Label,
    LineElement,
    LinePoint,
    PathwayElement,
    PathwayModel,
    Shape,
    ShapedElement,
    State,
    Xref,
)
from gpml_codec.schema.gpml2021 import (
    CURRENT_REGISTRY,
    NAMESPACE,
    CurrentAttr as A,
    CurrentTag as T,
)
from gpml_codec.utils.validation_messages import CodecMessage

logger = logging.getLogger(__name__)

# Hex colors of this dialect carry no "#"
COLOR_PREFIX = ""

# Element tag and its container tag, in document order
CONTAINERS = (
    ("DataNode", "DataNodes"),
    ("Interaction", "Interactions"),
    ("GraphicalLine", "GraphicalLines"),
    ("Label", "Labels"),
    ("Shape", "Shapes"),
    ("Group", "Groups"),
    ("Citation", "Citations"),
)

# Tags of the 2021 dialect the model does not hold
UNSUPPORTED_TAGS = ("Annotation", "AnnotationRef", "Evidence", "EvidenceRef")


class Gpml2021Adapter:
    """Reads and writes GPML 2021 documents."""

    dialect = Dialect.GPML2021
    namespace = NAMESPACE
    registry = CURRENT_REGISTRY
    ordering = CURRENT_ORDERING

    def __init__(self):
        self.xml = NamespacedXml(NAMESPACE)

    def _attr(self, element: ET._Element, tag: T, attribute: A) -> Optional[str]:
        return self.registry.read_attribute(element, tag, attribute)

    def _set(self, element: ET._Element, tag: T, attribute: A, value: Optional[str]) -> None:
        self.registry.write_attribute(element, tag, attribute, value)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read(self, root: ET._Element, context: ConversionContext) -> PathwayModel:
        """First pass: map every element of a 2021 document."""
        model = PathwayModel()
        self._read_pathway(root, model, context)

        readers = {
            "DataNode": self._read_data_node,
            "Interaction": lambda e, c: self._read_line(e, Interaction, T.INTERACTION, c),
            "GraphicalLine": lambda e, c: self._read_line(e, GraphicalLine, T.GRAPHICAL_LINE, c),
            "Label": self._read_label,
            "Shape": self._read_shape,
            "Group": self._read_group,
            "Citation": self._read_citation,
        }
        for tag, container in CONTAINERS:
            for element in self.xml.findall_in(root, container, tag):
                add_element(model, readers[tag](element, context))
        self._report_unsupported(root, context)

        logger.debug("Mapped %d elements from GPML 2021", len(model.element_ids()))
        return model

    def link(self, model: PathwayModel, context: ConversionContext) -> None:
        """Second pass. References are explicit in 2021, nothing is deferred."""

    def _report_unsupported(self, root: ET._Element, context: ConversionContext) -> None:
        for tag in UNSUPPORTED_TAGS:
            skipped = sum(1 for _ in root.iter(f"{{{self.namespace}}}{tag}"))
            if skipped:
                context.validator.lost(
                    CodecMessage.SKIPPED_ON_READ.format(count=skipped, what=tag),
                    element_type=tag,
                )

    def _read_pathway(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        pathway = model.pathway
        pathway.title = self._attr(root, T.PATHWAY, A.TITLE)
        pathway.organism = self._attr(root, T.PATHWAY, A.ORGANISM)
        pathway.source = self._attr(root, T.PATHWAY, A.SOURCE)
        pathway.version = self._attr(root, T.PATHWAY, A.VERSION)
        pathway.license = self._attr(root, T.PATHWAY, A.LICENSE)
        pathway.xref = self._read_xref(root, context)

        description = self.xml.find(root, "Description")
        if description is not None:
            pathway.description = description.text or ""

        for author in self.xml.findall_in(root, "Authors", "Author"):
            pathway.authors.append(Author(
                name=self._attr(author, T.AUTHOR, A.NAME),
                username=self._attr(author, T.AUTHOR, A.USERNAME),
                order=optional_integer(self._attr(author, T.AUTHOR, A.ORDER)),
                xref=self._read_xref(author, context),
            ))

        gfx = self.xml.find(root, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(T.PATHWAY_GRAPHICS.value, A.BOARD_WIDTH.value)
        pathway.board_width = to_float(self._attr(gfx, T.PATHWAY_GRAPHICS, A.BOARD_WIDTH),
                                       T.PATHWAY_GRAPHICS, A.BOARD_WIDTH)
        pathway.board_height = to_float(self._attr(gfx, T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT),
                                        T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT)
        pathway.background_color = colors.decode(
            self._attr(gfx, T.PATHWAY_GRAPHICS, A.BACKGROUND_COLOR), context.validator)

        pathway.comments = self._read_comments(root)
        pathway.dynamic_properties = self._read_properties(root)
        pathway.citation_refs = self._read_citation_refs(root)

    def _read_xref(self, element: ET._Element, context: ConversionContext) -> Optional[Xref]:
        xref = self.xml.find(element, "Xref")
        if xref is None:
            return None
        return Xref(
            identifier=self._attr(xref, T.XREF, A.IDENTIFIER),
            data_source=context.data_source(self._attr(xref, T.XREF, A.DATA_SOURCE)),
        )

    def _read_comments(self, element: ET._Element) -> List[Comment]:
        return [
            Comment(text=comment.text or "", source=self._attr(comment, T.COMMENT, A.SOURCE))
            for comment in self.xml.findall(element, "Comment")
        ]

    def _read_properties(self, element: ET._Element) -> Dict[str, str]:
        return {
            self._attr(prop, T.PROPERTY, A.KEY): self._attr(prop, T.PROPERTY, A.VALUE)
            for prop in self.xml.findall(element, "Property")
        }

    def _read_citation_refs(self, element: ET._Element) -> List[str]:
        return [
            self._attr(ref, T.CITATION_REF, A.ELEMENT_REF)
            for ref in self.xml.findall(element, "CitationRef")
        ]

    def _read_element_info(self, element: ET._Element, target: PathwayElement) -> None:
        target.comments = self._read_comments(element)
        target.dynamic_properties = self._read_properties(element)
        target.citation_refs = self._read_citation_refs(element)

    def _graphics(self, element: ET._Element, tag: T, element_id: Optional[str]) -> ET._Element:
        gfx = self.xml.find(element, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(tag.value, A.WIDTH.value, element_id)
        return gfx

    def _read_font(self, gfx: ET._Element, tag: T, context: ConversionContext,
                   element_id: Optional[str]) -> FontProperty:
        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, tag, name)

        return FontProperty(
            text_color=colors.decode(attr(A.TEXT_COLOR), context.validator),
            font_name=attr(A.FONT_NAME),
            font_weight=font_flag(attr(A.FONT_WEIGHT), "font_weight"),
            font_style=font_flag(attr(A.FONT_STYLE), "font_style"),
            font_decoration=font_flag(attr(A.FONT_DECORATION), "font_decoration"),
            font_strikethru=font_flag(attr(A.FONT_STRIKETHRU), "font_strikethru"),
            font_size=to_float(attr(A.FONT_SIZE), tag, A.FONT_SIZE, element_id),
            h_align=parse_enum(HAlignType, attr(A.H_ALIGN), HAlignType.CENTER),
            v_align=parse_enum(VAlignType, attr(A.V_ALIGN), VAlignType.MIDDLE),
        )

    def _read_shape_style(self, gfx: ET._Element, tag: T, context: ConversionContext,
                          element_id: Optional[str]) -> ShapeStyleProperty:
        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, tag, name)

        return ShapeStyleProperty(
            border_color=colors.decode(attr(A.BORDER_COLOR), context.validator),
            border_style=parse_enum(LineStyleType, attr(A.BORDER_STYLE), LineStyleType.SOLID),
            border_width=to_float(attr(A.BORDER_WIDTH), tag, A.BORDER_WIDTH, element_id),
            fill_color=colors.decode(attr(A.FILL_COLOR), context.validator),
            shape_type=attr(A.SHAPE_TYPE),
            z_order=optional_integer(attr(A.Z_ORDER)),
            rotation=to_rotation(attr(A.ROTATION), tag, A.ROTATION, element_id),
        )

    def _read_shaped(self, element: ET._Element, tag: T, target: ShapedElement,
                     context: ConversionContext) -> None:
        """Graphics and element info shared by all shaped elements."""
        gfx = self._graphics(element, tag, target.element_id)

        def num(name: A) -> float:
            return to_float(self._attr(gfx, tag, name), tag, name, target.element_id)

        target.rect = build(
            RectProperty, tag.value, target.element_id,
            center_x=num(A.CENTER_X), center_y=num(A.CENTER_Y),
            width=num(A.WIDTH), height=num(A.HEIGHT),
        )
        target.font = self._read_font(gfx, tag, context, target.element_id)
        target.shape_style = self._read_shape_style(gfx, tag, context, target.element_id)
        self._read_element_info(element, target)

    def _read_data_node(self, element: ET._Element, context: ConversionContext) -> DataNode:
        data_node = DataNode(
            element_id=self._attr(element, T.DATA_NODE, A.ELEMENT_ID),
            text_label=self._attr(element, T.DATA_NODE, A.TEXT_LABEL),
            type=self._attr(element, T.DATA_NODE, A.TYPE),
            group_ref=self._attr(element, T.DATA_NODE, A.GROUP_REF),
            alias_ref=self._attr(element, T.DATA_NODE, A.ALIAS_REF),
            xref=self._read_xref(element, context),
        )
        self._read_shaped(element, T.DATA_NODE_GRAPHICS, data_node, context)
        data_node.states = [
            self._read_state(state, context) for state in self.xml.findall_in(element, "States", "State")
        ]
        return data_node

    def _read_state(self, element: ET._Element, context: ConversionContext) -> State:
        element_id = self._attr(element, T.STATE, A.ELEMENT_ID)
        gfx = self._graphics(element, T.STATE_GRAPHICS, element_id)

        def num(name: A) -> float:
            return to_float(self._attr(gfx, T.STATE_GRAPHICS, name), T.STATE_GRAPHICS, name, element_id)

        state = build(
            State, T.STATE.value, element_id,
            element_id=element_id,
            text_label=self._attr(element, T.STATE, A.TEXT_LABEL),
            type=self._attr(element, T.STATE, A.TYPE),
            rel_x=num(A.REL_X),
            rel_y=num(A.REL_Y),
            width=num(A.WIDTH),
            height=num(A.HEIGHT),
            font=self._read_font(gfx, T.STATE_GRAPHICS, context, element_id),
            shape_style=self._read_shape_style(gfx, T.STATE_GRAPHICS, context, element_id),
            xref=self._read_xref(element, context),
        )
        self._read_element_info(element, state)
        return state

    def _read_label(self, element: ET._Element, context: ConversionContext) -> Label:
        label = Label(
            element_id=self._attr(element, T.LABEL, A.ELEMENT_ID),
            text_label=self._attr(element, T.LABEL, A.TEXT_LABEL),
            href=self._attr(element, T.LABEL, A.HREF),
            group_ref=self._attr(element, T.LABEL, A.GROUP_REF),
        )
        self._read_shaped(element, T.LABEL_GRAPHICS, label, context)
        return label

    def _read_shape(self, element: ET._Element, context: ConversionContext) -> Shape:
        shape = Shape(
            element_id=self._attr(element, T.SHAPE, A.ELEMENT_ID),
            text_label=self._attr(element, T.SHAPE, A.TEXT_LABEL) or "",
            group_ref=self._attr(element, T.SHAPE, A.GROUP_REF),
        )
        self._read_shaped(element, T.SHAPE_GRAPHICS, shape, context)
        return shape

    def _read_group(self, element: ET._Element, context: ConversionContext) -> Group:
        group = Group(
            element_id=self._attr(element, T.GROUP, A.ELEMENT_ID),
            text_label=self._attr(element, T.GROUP, A.TEXT_LABEL) or "",
            type=self._attr(element, T.GROUP, A.TYPE),
            group_ref=self._attr(element, T.GROUP, A.GROUP_REF),
            xref=self._read_xref(element, context),
        )
        self._read_shaped(element, T.GROUP_GRAPHICS, group, context)
        return group

    def _read_line(self, element: ET._Element, line_type, tag: T, context: ConversionContext) -> LineElement:
        element_id = self._attr(element, tag, A.ELEMENT_ID)
        point_elements = list(self.xml.findall_in(element, "Waypoints", "Point"))
        if len(point_elements) < 2:
            raise MissingRequiredAttributeError(tag.value, "Point", element_id)

        gfx = self._graphics(element, T.LINE_GRAPHICS, element_id)

        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, T.LINE_GRAPHICS, name)

        line = build(
            line_type, tag.value, element_id,
            element_id=element_id,
            group_ref=self._attr(element, tag, A.GROUP_REF),
            points=[self._read_point(point) for point in point_elements],
            anchors=[
                build(
                    Anchor, T.ANCHOR.value, element_id,
                    element_id=self._attr(anchor, T.ANCHOR, A.ELEMENT_ID),
                    position=to_float(self._attr(anchor, T.ANCHOR, A.POSITION), T.ANCHOR, A.POSITION,
                                      element_id),
                    shape_type=self._attr(anchor, T.ANCHOR, A.SHAPE_TYPE),
                )
                for anchor in self.xml.findall_in(element, "Waypoints", "Anchor")
            ],
            line_style=LineStyleProperty(
                line_color=colors.decode(attr(A.LINE_COLOR), context.validator),
                line_style=parse_enum(LineStyleType, attr(A.LINE_STYLE), LineStyleType.SOLID),
                line_width=to_float(attr(A.LINE_WIDTH), T.LINE_GRAPHICS, A.LINE_WIDTH, element_id),
                connector_type=parse_enum(ConnectorType, attr(A.CONNECTOR_TYPE), ConnectorType.STRAIGHT),
                z_order=optional_integer(attr(A.Z_ORDER)),
            ),
            start_arrow_head=self._attr(point_elements[0], T.POINT, A.ARROW_HEAD),
            end_arrow_head=self._attr(point_elements[-1], T.POINT, A.ARROW_HEAD),
        )
        if isinstance(line, Interaction):
            line.xref = self._read_xref(element, context)
        self._read_element_info(element, line)
        return line

    def _read_point(self, element: ET._Element) -> LinePoint:
        element_id = self._attr(element, T.POINT, A.ELEMENT_ID)
        element_ref = self._attr(element, T.POINT, A.ELEMENT_REF) or None
        rel_x = rel_y = None
        if element_ref is not None:
            rel_x = self._attr(element, T.POINT, A.REL_X)
            rel_y = self._attr(element, T.POINT, A.REL_Y)
        return LinePoint(
            element_id=element_id,
            x=to_float(self._attr(element, T.POINT, A.X), T.POINT, A.X, element_id),
            y=to_float(self._attr(element, T.POINT, A.Y), T.POINT, A.Y, element_id),
            element_ref=element_ref,
            rel_x=None if rel_x is None else to_float(rel_x, T.POINT, A.REL_X, element_id),
            rel_y=None if rel_y is None else to_float(rel_y, T.POINT, A.REL_Y, element_id),
        )

    def _read_citation(self, element: ET._Element, context: ConversionContext) -> Citation:
        citation = Citation(
            element_id=self._attr(element, T.CITATION, A.ELEMENT_ID),
            xref=self._read_xref(element, context),
        )
        url = self.xml.find(element, "Url")
        if url is not None:
            citation.url = self._attr(url, T.URL, A.LINK)
        return citation

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, model: PathwayModel, context: ConversionContext) -> ET._Element:
        """Emit a 2021 ``Pathway`` element. Every element must have an ID."""
        root = self.xml.root()
        self._write_pathway(root, model)

        writers = (
            ("DataNodes", model.data_nodes, self._write_data_node),
            ("Interactions", model.interactions, lambda p, e, m: self._write_line(p, e, T.INTERACTION)),
            ("GraphicalLines", model.graphical_lines, lambda p, e, m: self._write_line(p, e, T.GRAPHICAL_LINE)),
            ("Labels", model.labels, self._write_label),
            ("Shapes", model.shapes, self._write_shape),
            ("Groups", model.groups, self._write_group),
            ("Citations", model.citations, self._write_citation),
        )
        for container_tag, elements, writer in writers:
            if not elements:
                continue
            container = self.xml.sub(root, container_tag)
            for element in elements:
                writer(container, element, model)

        for citation in model.citations:
            if citation.title or citation.source or citation.year or citation.authors:
                report_lost(context, self.dialect.value, "Bibliographic details",
                            citation.element_id, citation.kind.value)
        citation_ids = {c.element_id for c in model.citations}
        # PublicationXrefs already live on as citations
        other_entries = [text for text in model.biopax if ET.fromstring(text).get(RDF_ID) not in citation_ids]
        if other_entries:
            report_lost(context, self.dialect.value, f"{len(other_entries)} BioPAX entries", None)
        return root

    def _write_pathway(self, root: ET._Element, model: PathwayModel) -> None:
        pathway = model.pathway
        self._set(root, T.PATHWAY, A.TITLE, pathway.title)
        self._set(root, T.PATHWAY, A.ORGANISM, pathway.organism)
        self._set(root, T.PATHWAY, A.SOURCE, pathway.source)
        self._set(root, T.PATHWAY, A.VERSION, pathway.version)
        self._set(root, T.PATHWAY, A.LICENSE, pathway.license)

        self._write_xref(root, pathway.xref)
        if pathway.description is not None:
            self.xml.sub(root, "Description").text = pathway.description
        if pathway.authors:
            authors = self.xml.sub(root, "Authors")
            for author in pathway.authors:
                author_element = self.xml.sub(authors, "Author")
                self._set(author_element, T.AUTHOR, A.NAME, author.name)
                self._set(author_element, T.AUTHOR, A.USERNAME, author.username)
                self._set(author_element, T.AUTHOR, A.ORDER,
                          None if author.order is None else str(author.order))
                self._write_xref(author_element, author.xref)
        self._write_element_info(root, pathway.comments, pathway.dynamic_properties, pathway.citation_refs)

        gfx = self.xml.sub(root, "Graphics")
        self._set(gfx, T.PATHWAY_GRAPHICS, A.BOARD_WIDTH, number(pathway.board_width))
        self._set(gfx, T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT, number(pathway.board_height))
        self._set(gfx, T.PATHWAY_GRAPHICS, A.BACKGROUND_COLOR,
                  colors.to_attribute(pathway.background_color, COLOR_PREFIX))

    def _write_xref(self, element: ET._Element, xref: Optional[Xref]) -> None:
        if xref is None:
            return
        xref_element = self.xml.sub(element, "Xref")
        self._set(xref_element, T.XREF, A.IDENTIFIER, xref.identifier)
        self._set(xref_element, T.XREF, A.DATA_SOURCE, xref.data_source)

    def _write_element_info(self, element: ET._Element, comments: List[Comment],
                            properties: Dict[str, str], citation_refs: List[str]) -> None:
        """Comments, properties and citation refs. 2013a-only properties are skipped."""
        for comment in comments:
            comment_element = self.xml.sub(element, "Comment")
            comment_element.text = comment.text
            self._set(comment_element, T.COMMENT, A.SOURCE, comment.source)
        for key, value in properties.items():
            if key in LEGACY_ONLY_KEYS:
                continue
            prop = self.xml.sub(element, "Property")
            self._set(prop, T.PROPERTY, A.KEY, key)
            self._set(prop, T.PROPERTY, A.VALUE, value)
        for ref in citation_refs:
            self._set(self.xml.sub(element, "CitationRef"), T.CITATION_REF, A.ELEMENT_REF, ref)

    def _write_font(self, gfx: ET._Element, tag: T, font: FontProperty) -> None:
        self._set(gfx, tag, A.TEXT_COLOR, colors.to_attribute(font.text_color, COLOR_PREFIX))
        self._set(gfx, tag, A.FONT_NAME, font.font_name)
        self._set(gfx, tag, A.FONT_WEIGHT, font_flag_text(font.font_weight, "font_weight"))
        self._set(gfx, tag, A.FONT_STYLE, font_flag_text(font.font_style, "font_style"))
        self._set(gfx, tag, A.FONT_DECORATION, font_flag_text(font.font_decoration, "font_decoration"))
        self._set(gfx, tag, A.FONT_STRIKETHRU, font_flag_text(font.font_strikethru, "font_strikethru"))
        self._set(gfx, tag, A.FONT_SIZE, integer(font.font_size))
        self._set(gfx, tag, A.H_ALIGN, font.h_align.value)
        self._set(gfx, tag, A.V_ALIGN, font.v_align.value)

    def _write_shape_style(self, gfx: ET._Element, tag: T, style: ShapeStyleProperty) -> None:
        self._set(gfx, tag, A.BORDER_COLOR, colors.to_attribute(style.border_color, COLOR_PREFIX))
        self._set(gfx, tag, A.BORDER_STYLE, style.border_style.value)
        self._set(gfx, tag, A.BORDER_WIDTH, number(style.border_width))
        self._set(gfx, tag, A.FILL_COLOR, colors.to_attribute(style.fill_color, COLOR_PREFIX))
        self._set(gfx, tag, A.SHAPE_TYPE, style.shape_type)
        self._set(gfx, tag, A.Z_ORDER, None if style.z_order is None else str(style.z_order))
        self._set(gfx, tag, A.ROTATION, number(style.rotation))

    def _write_shaped_graphics(self, element: ET._Element, tag: T, shaped: ShapedElement,
                               rect: RectProperty) -> None:
        gfx = self.xml.sub(element, "Graphics")
        self._set(gfx, tag, A.CENTER_X, number(rect.center_x))
        self._set(gfx, tag, A.CENTER_Y, number(rect.center_y))
        self._set(gfx, tag, A.WIDTH, number(rect.width))
        self._set(gfx, tag, A.HEIGHT, number(rect.height))
        self._write_font(gfx, tag, shaped.font)
        self._write_shape_style(gfx, tag, shaped.shape_style)

    def _write_data_node(self, container: ET._Element, data_node: DataNode, model: PathwayModel) -> None:
        element = self.xml.sub(container, "DataNode")
        self._set(element, T.DATA_NODE, A.ELEMENT_ID, data_node.element_id)
        self._set(element, T.DATA_NODE, A.TEXT_LABEL, data_node.text_label)
        self._set(element, T.DATA_NODE, A.TYPE, data_node.type)
        self._set(element, T.DATA_NODE, A.GROUP_REF, data_node.group_ref)
        self._set(element, T.DATA_NODE, A.ALIAS_REF, data_node.alias_ref)
        self._write_xref(element, data_node.xref)
        if data_node.states:
            states = self.xml.sub(element, "States")
            for state in data_node.states:
                self._write_state(states, state)
        self._write_shaped_graphics(element, T.DATA_NODE_GRAPHICS, data_node, data_node.rect)
        self._write_element_info(element, data_node.comments, data_node.dynamic_properties,
                                 data_node.citation_refs)

    def _write_state(self, container: ET._Element, state: State) -> None:
        element = self.xml.sub(container, "State")
        self._set(element, T.STATE, A.ELEMENT_ID, state.element_id)
        self._set(element, T.STATE, A.TEXT_LABEL, state.text_label)
        self._set(element, T.STATE, A.TYPE, state.type)
        self._write_xref(element, state.xref)
        gfx = self.xml.sub(element, "Graphics")
        self._set(gfx, T.STATE_GRAPHICS, A.REL_X, number(state.rel_x))
        self._set(gfx, T.STATE_GRAPHICS, A.REL_Y, number(state.rel_y))
        self._set(gfx, T.STATE_GRAPHICS, A.WIDTH, number(state.width))
        self._set(gfx, T.STATE_GRAPHICS, A.HEIGHT, number(state.height))
        self._write_font(gfx, T.STATE_GRAPHICS, state.font)
        self._write_shape_style(gfx, T.STATE_GRAPHICS, state.shape_style)
        self._write_element_info(element, state.comments, state.dynamic_properties, state.citation_refs)

    def _write_line(self, container: ET._Element, line: LineElement, tag: T) -> None:
        element = self.xml.sub(container, tag.value)
        self._set(element, tag, A.ELEMENT_ID, line.element_id)
        self._set(element, tag, A.GROUP_REF, line.group_ref)
        if isinstance(line, Interaction):
            self._write_xref(element, line.xref)

        waypoints = self.xml.sub(element, "Waypoints")
        last = len(line.points) - 1
        for i, point in enumerate(line.points):
            point_element = self.xml.sub(waypoints, "Point")
            self._set(point_element, T.POINT, A.ELEMENT_ID, point.element_id)
            if i == 0:
                self._set(point_element, T.POINT, A.ARROW_HEAD, line.start_arrow_head)
            elif i == last:
                self._set(point_element, T.POINT, A.ARROW_HEAD, line.end_arrow_head)
            self._set(point_element, T.POINT, A.X, number(point.x))
            self._set(point_element, T.POINT, A.Y, number(point.y))
            self._set(point_element, T.POINT, A.ELEMENT_REF, point.element_ref)
            if point.relative_set:
                self._set(point_element, T.POINT, A.REL_X, number(point.rel_x))
                self._set(point_element, T.POINT, A.REL_Y, number(point.rel_y))
        for anchor in line.anchors:
            anchor_element = self.xml.sub(waypoints, "Anchor")
            self._set(anchor_element, T.ANCHOR, A.ELEMENT_ID, anchor.element_id)
            self._set(anchor_element, T.ANCHOR, A.POSITION, number(anchor.position))
            self._set(anchor_element, T.ANCHOR, A.SHAPE_TYPE, anchor.shape_type)

        gfx = self.xml.sub(element, "Graphics")
        style = line.line_style
        self._set(gfx, T.LINE_GRAPHICS, A.LINE_COLOR, colors.to_attribute(style.line_color, COLOR_PREFIX))
        self._set(gfx, T.LINE_GRAPHICS, A.LINE_STYLE, style.line_style.value)
        self._set(gfx, T.LINE_GRAPHICS, A.LINE_WIDTH, number(style.line_width))
        self._set(gfx, T.LINE_GRAPHICS, A.CONNECTOR_TYPE, style.connector_type.value)
        self._set(gfx, T.LINE_GRAPHICS, A.Z_ORDER, None if style.z_order is None else str(style.z_order))
        self._write_element_info(element, line.comments, line.dynamic_properties, line.citation_refs)

    def _write_label(self, container: ET._Element, label: Label, model: PathwayModel) -> None:
        element = self.xml.sub(container, "Label")
        self._set(element, T.LABEL, A.ELEMENT_ID, label.element_id)
        self._set(element, T.LABEL, A.TEXT_LABEL, label.text_label)
        self._set(element, T.LABEL, A.HREF, label.href)
        self._set(element, T.LABEL, A.GROUP_REF, label.group_ref)
        self._write_shaped_graphics(element, T.LABEL_GRAPHICS, label, label.rect)
        self._write_element_info(element, label.comments, label.dynamic_properties, label.citation_refs)

    def _write_shape(self, container: ET._Element, shape: Shape, model: PathwayModel) -> None:
        element = self.xml.sub(container, "Shape")
        self._set(element, T.SHAPE, A.ELEMENT_ID, shape.element_id)
        self._set(element, T.SHAPE, A.TEXT_LABEL, shape.text_label)
        self._set(element, T.SHAPE, A.GROUP_REF, shape.group_ref)
        self._write_shaped_graphics(element, T.SHAPE_GRAPHICS, shape, shape.rect)
        self._write_element_info(element, shape.comments, shape.dynamic_properties, shape.citation_refs)

    def _write_group(self, container: ET._Element, group: Group, model: PathwayModel) -> None:
        element = self.xml.sub(container, "Group")
        self._set(element, T.GROUP, A.ELEMENT_ID, group.element_id)
        self._set(element, T.GROUP, A.TEXT_LABEL, group.text_label)
        self._set(element, T.GROUP, A.TYPE, group.type)
        self._set(element, T.GROUP, A.GROUP_REF, group.group_ref)
        self._write_xref(element, group.xref)
        # groups without a size of their own are drawn around their members
        rect = model.bounds_of(group) or group.rect
        self._write_shaped_graphics(element, T.GROUP_GRAPHICS, group, rect)
        self._write_element_info(element, group.comments, group.dynamic_properties, group.citation_refs)

    def _write_citation(self, container: ET._Element, citation: Citation, model: PathwayModel) -> None:
        element = self.xml.sub(container, "Citation")
        self._set(element, T.CITATION, A.ELEMENT_ID, citation.element_id)
        self._write_xref(element, citation.xref)
        if citation.url:
            self._set(self.xml.sub(element, "Url"), T.URL, A.LINK, citation.url)
