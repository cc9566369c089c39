"""
Adapter for the legacy GPML 2013a dialect.

GPML 2013a predates several concepts of the current model. Reading maps
them forward:

- pathway Author, Maintainer, Email and Last-Modified, and the InfoBox and
  Legend positions, become dynamic properties with ``_gpml2013a`` keys
- a ``WikiPathways-description`` comment becomes the pathway description
- retired shape names are migrated, spaced shape names become CamelCase
- Double line styles and cellular component shapes, stored as
  ``Attribute`` key/value pairs, become regular style properties
- ``State`` elements are top-level and point at their data node by GraphRef
- groups are addressed by GroupId, but lines may point at their GraphId
- the ``Biopax`` block is kept verbatim; its PublicationXrefs also become
  citations

Writing maps everything back. Information 2013a cannot hold is reported as
a lossy conversion.
"""
import copy
import logging
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from lxml import etree as ET

from gpml_codec.codec import colors
from gpml_codec.codec.ordering import LEGACY_ORDERING, sort_biopax
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
from gpml_codec.exceptions.codec import MissingRequiredAttributeError
from gpml_codec.models.graphics import (
    ArrowHeadType,
    Color,
    ConnectorType,
    FontProperty,
    HAlignType,
    LIGHT_GRAY,
    LineStyleProperty,
    LineStyleType,
    RectProperty,
    ShapeStyleProperty,
    ShapeTypeName,
    TRANSPARENT,
    VAlignType,
    WHITE,
)
from gpml_codec.models.pathway import (
    Anchor,
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
from gpml_codec.schema.gpml2013a import (
    LEGACY_REGISTRY,
    NAMESPACE,
    LegacyAttr as A,
    LegacyTag as T,
)
from gpml_codec.utils.validation import IssueCategory
from gpml_codec.utils.validation_messages import CodecMessage

logger = logging.getLogger(__name__)

BIOPAX_NAMESPACE = "http://www.biopax.org/release/biopax-level3.owl#"
RDF_NAMESPACE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XSD_STRING = "http://www.w3.org/2001/XMLSchema#string"
RDF_ID = f"{{{RDF_NAMESPACE}}}id"
RDF_DATATYPE = f"{{{RDF_NAMESPACE}}}datatype"
PUBLICATION_XREF = f"{{{BIOPAX_NAMESPACE}}}PublicationXref"

# Dynamic property keys holding 2013a-only pathway information
PATHWAY_AUTHOR = "pathway_author_gpml2013a"
PATHWAY_MAINTAINER = "pathway_maintainer_gpml2013a"
PATHWAY_EMAIL = "pathway_email_gpml2013a"
PATHWAY_LAST_MODIFIED = "pathway_lastModified_gpml2013a"
INFOBOX_CENTER_X = "pathway_infobox_centerX_gpml2013a"
INFOBOX_CENTER_Y = "pathway_infobox_centerY_gpml2013a"
LEGEND_CENTER_X = "pathway_legend_centerX_gpml2013a"
LEGEND_CENTER_Y = "pathway_legend_centerY_gpml2013a"

LEGACY_ONLY_KEYS = frozenset({
    PATHWAY_AUTHOR, PATHWAY_MAINTAINER, PATHWAY_EMAIL, PATHWAY_LAST_MODIFIED,
    INFOBOX_CENTER_X, INFOBOX_CENTER_Y, LEGEND_CENTER_X, LEGEND_CENTER_Y,
})

PATHWAY_PROPERTY_ATTRIBUTES = (
    (A.AUTHOR, PATHWAY_AUTHOR),
    (A.MAINTAINER, PATHWAY_MAINTAINER),
    (A.EMAIL, PATHWAY_EMAIL),
    (A.LAST_MODIFIED, PATHWAY_LAST_MODIFIED),
)

WP_DESCRIPTION = "WikiPathways-description"

DOUBLE_LINE_KEY = "org.pathvisio.DoubleLineProperty"
CELL_CMPNT_KEY = "org.pathvisio.CellularComponentProperty"
STATE_ROTATION_KEY = "org.pathvisio.core.StateRotation"
DOUBLE = "Double"
BROKEN = "Broken"
UNKNOWN_TYPE = "Unknown"
UNDEFINED_TYPE = "Undefined"

SHAPE_TO_CAMELCASE = MappingProxyType({
    "Sarcoplasmic Reticulum": "SarcoplasmicReticulum",
    "Endoplasmic Reticulum": "EndoplasmicReticulum",
    "Golgi Apparatus": "GolgiApparatus",
    "Cytosol region": "CytosolRegion",
    "Extracellular region": "ExtracellularRegion",
})
CAMELCASE_TO_SHAPE = MappingProxyType({v: k for k, v in SHAPE_TO_CAMELCASE.items()})

# Retired shape types and their replacements
DEPRECATED_SHAPES = MappingProxyType({
    "Cell": ShapeTypeName.ROUNDED_RECTANGLE,
    "Organelle": ShapeTypeName.ROUNDED_RECTANGLE,
    "Membrane": ShapeTypeName.ROUNDED_RECTANGLE,
    "CellA": ShapeTypeName.OVAL,
    "Nucleus": ShapeTypeName.OVAL,
    "OrganA": ShapeTypeName.OVAL,
    "OrganB": ShapeTypeName.OVAL,
    "OrganC": ShapeTypeName.OVAL,
    "Vesicle": ShapeTypeName.OVAL,
    "ProteinB": ShapeTypeName.HEXAGON,
    "Ribosome": ShapeTypeName.HEXAGON,
})

# Cellular component shapes are written as a basic shape plus an Attribute
CELL_COMPONENT_SHAPES = MappingProxyType({
    "Cell": ShapeTypeName.ROUNDED_RECTANGLE,
    "Nucleus": ShapeTypeName.OVAL,
    "EndoplasmicReticulum": "EndoplasmicReticulum",
    "GolgiApparatus": "GolgiApparatus",
    "Mitochondria": ShapeTypeName.MITOCHONDRIA,
    "SarcoplasmicReticulum": "SarcoplasmicReticulum",
    "Organelle": ShapeTypeName.ROUNDED_RECTANGLE,
    "Lysosome": ShapeTypeName.OVAL,
    "Nucleolus": ShapeTypeName.OVAL,
    "Vacuole": ShapeTypeName.OVAL,
    "Vesicle": ShapeTypeName.OVAL,
    "Cytosol": ShapeTypeName.ROUNDED_RECTANGLE,
    "Extracellular": ShapeTypeName.ROUNDED_RECTANGLE,
    "Membrane": ShapeTypeName.ROUNDED_RECTANGLE,
})

# Interaction panel: each current arrowhead and the legacy names mapping to
# it. The first legacy name is the one written.
ARROWHEAD_PANEL = MappingProxyType({
    ArrowHeadType.UNDIRECTED: ("Line",),
    ArrowHeadType.DIRECTED: ("Arrow",),
    ArrowHeadType.CONVERSION: ("mim-conversion", "mim-modification", "mim-cleavage",
                               "mim-gap", "mim-branching-left", "mim-branching-right"),
    ArrowHeadType.INHIBITION: ("mim-inhibition", "TBar"),
    ArrowHeadType.CATALYSIS: ("mim-catalysis",),
    ArrowHeadType.STIMULATION: ("mim-stimulation", "mim-necessary-stimulation"),
    ArrowHeadType.BINDING: ("mim-binding", "mim-covalent-bond"),
    ArrowHeadType.TRANSLOCATION: ("mim-translocation",),
    ArrowHeadType.TRANSCRIPTION_TRANSLATION: ("mim-transcription-translation",),
})
_LEGACY_ARROWHEADS = MappingProxyType({
    legacy.lower(): panel for panel, names in ARROWHEAD_PANEL.items() for legacy in names
})

# Group Style in 2013a and group type in the model
GROUP_STYLE_TO_TYPE = MappingProxyType({"None": "Group", "Group": "Transparent"})
GROUP_TYPE_TO_STYLE = MappingProxyType({v: k for k, v in GROUP_STYLE_TO_TYPE.items()})
GROUP_GRAY = Color.rgb(0x80, 0x80, 0x80)
OCTAGON = "Octagon"

# Deprecated shapes migrated to these get a double light gray border
DOUBLE_BORDER_TARGETS = (ShapeTypeName.ROUNDED_RECTANGLE, ShapeTypeName.OVAL)
DOUBLE_BORDER_WIDTH = 3.0

# (element, Graphics, Point, Anchor) tags of the two line element kinds
INTERACTION_TAGS = (T.INTERACTION, T.INTERACTION_GRAPHICS, T.INTERACTION_POINT, T.INTERACTION_ANCHOR)
GRAPHICAL_LINE_TAGS = (T.GRAPHICAL_LINE, T.GRAPHICAL_LINE_GRAPHICS,
                       T.GRAPHICAL_LINE_POINT, T.GRAPHICAL_LINE_ANCHOR)


def to_camel_case(shape_type: str) -> str:
    return SHAPE_TO_CAMELCASE.get(shape_type, shape_type)


def from_camel_case(shape_type: str) -> str:
    return CAMELCASE_TO_SHAPE.get(shape_type, shape_type)


def group_graphics(group_type: str) -> Tuple[FontProperty, ShapeStyleProperty]:
    """Fixed appearance of a 2013a group, which carries no Graphics."""
    font = FontProperty(text_color=GROUP_GRAY)
    if group_type == "Transparent":
        style = ShapeStyleProperty(border_color=TRANSPARENT, fill_color=TRANSPARENT)
    elif group_type == "Complex":
        style = ShapeStyleProperty(border_color=GROUP_GRAY, fill_color=TRANSPARENT,
                                   shape_type=OCTAGON)
    else:
        style = ShapeStyleProperty(border_color=GROUP_GRAY, border_style=LineStyleType.DASHED,
                                   fill_color=TRANSPARENT)
    return font, style


class Gpml2013aAdapter:
    """Reads and writes GPML 2013a documents."""

    dialect = Dialect.GPML2013A
    namespace = NAMESPACE
    registry = LEGACY_REGISTRY
    ordering = LEGACY_ORDERING

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
        """First pass: map every element of a 2013a document.

        Groups are read first so that their GroupIds are known when other
        elements are added. States are collected but not attached.
        """
        model = PathwayModel()
        self._read_pathway(root, model, context)
        self._read_biopax(root, model, context)
        self._read_groups(root, model, context)
        for element in self.xml.findall(root, "DataNode"):
            add_element(model, self._read_data_node(element, context))
        for element in self.xml.findall(root, "State"):
            context.pending_states.append(self._read_state(element, context))
        for element in self.xml.findall(root, "Interaction"):
            add_element(model, self._read_line(element, Interaction, INTERACTION_TAGS, context))
        for element in self.xml.findall(root, "GraphicalLine"):
            add_element(model, self._read_line(element, GraphicalLine, GRAPHICAL_LINE_TAGS, context))
        for element in self.xml.findall(root, "Label"):
            add_element(model, self._read_label(element, context))
        for element in self.xml.findall(root, "Shape"):
            add_element(model, self._read_shape(element, context))

        logger.debug("Mapped %d elements from GPML 2013a", len(model.element_ids()))
        return model

    def link(self, model: PathwayModel, context: ConversionContext) -> None:
        """Second pass: renamed groups, GraphId aliases, states and group bounds."""
        renamed = {key: group.element_id for key, group in context.renamed_groups.items()}
        for element in (*model.iter_shaped_elements(), *model.iter_line_elements()):
            if element.group_ref in renamed:
                element.group_ref = renamed[element.group_ref]

        aliases = {graph_id: group.element_id for graph_id, group in context.graph_id_groups.items()}
        for line in model.iter_line_elements():
            for point in line.points:
                if point.element_ref in aliases:
                    point.element_ref = aliases[point.element_ref]

        index = model.element_index()
        for state, graph_ref in context.pending_states:
            parent = index.get(graph_ref) if graph_ref else None
            if isinstance(parent, DataNode):
                parent.states.append(state)
                continue
            context.validator.warn(
                CodecMessage.DANGLING_STATE_REF.format(element_id=state.element_id, ref=graph_ref),
                IssueCategory.DANGLING_REFERENCE,
                element_id=state.element_id,
                element_type=state.kind.value,
                field_name="GraphRef",
            )
        context.pending_states.clear()

        for group in model.groups:
            if group.rect.width == 0 or group.rect.height == 0:
                bounds = model.member_bounds(group)
                if bounds is not None:
                    group.rect = bounds

    def _read_pathway(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        pathway = model.pathway
        pathway.title = self._attr(root, T.PATHWAY, A.NAME)
        pathway.organism = self._attr(root, T.PATHWAY, A.ORGANISM)
        pathway.source = self._attr(root, T.PATHWAY, A.DATA_SOURCE)
        pathway.version = self._attr(root, T.PATHWAY, A.VERSION)
        pathway.license = self._attr(root, T.PATHWAY, A.LICENSE)
        for attribute, key in PATHWAY_PROPERTY_ATTRIBUTES:
            value = self._attr(root, T.PATHWAY, attribute)
            if value is not None:
                pathway.dynamic_properties[key] = value

        gfx = self.xml.find(root, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(T.PATHWAY_GRAPHICS.value, A.BOARD_WIDTH.value)
        pathway.board_width = to_float(self._attr(gfx, T.PATHWAY_GRAPHICS, A.BOARD_WIDTH),
                                       T.PATHWAY_GRAPHICS, A.BOARD_WIDTH)
        pathway.board_height = to_float(self._attr(gfx, T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT),
                                        T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT)

        for comment in self._read_comments(root):
            if comment.source == WP_DESCRIPTION:
                pathway.description = comment.text
            else:
                pathway.comments.append(comment)
        pathway.citation_refs = self._read_biopax_refs(root)
        pathway.dynamic_properties.update(self._read_attribute_elements(root))

        for tag, key_x, key_y in ((T.INFO_BOX, INFOBOX_CENTER_X, INFOBOX_CENTER_Y),
                                  (T.LEGEND, LEGEND_CENTER_X, LEGEND_CENTER_Y)):
            element = self.xml.find(root, tag.value)
            if element is not None:
                pathway.dynamic_properties[key_x] = self._attr(element, tag, A.CENTER_X)
                pathway.dynamic_properties[key_y] = self._attr(element, tag, A.CENTER_Y)

    def _read_comments(self, element: ET._Element) -> List[Comment]:
        return [
            Comment(text=comment.text or "", source=self._attr(comment, T.COMMENT, A.SOURCE))
            for comment in self.xml.findall(element, "Comment")
        ]

    def _read_biopax_refs(self, element: ET._Element) -> List[str]:
        return [ref.text.strip() for ref in self.xml.findall(element, "BiopaxRef") if ref.text]

    def _read_attribute_elements(self, element: ET._Element) -> Dict[str, str]:
        return {
            self._attr(attribute, T.ATTRIBUTE, A.KEY): self._attr(attribute, T.ATTRIBUTE, A.VALUE)
            for attribute in self.xml.findall(element, "Attribute")
        }

    def _read_element_info(self, element: ET._Element, target: PathwayElement) -> Dict[str, str]:
        """Comments and citation refs of an element.

        Returns:
            The element's Attribute pairs, for the caller to interpret
        """
        target.comments = self._read_comments(element)
        target.citation_refs = self._read_biopax_refs(element)
        return self._read_attribute_elements(element)

    def _read_xref(self, element: ET._Element, tag: T, context: ConversionContext) -> Optional[Xref]:
        xref = self.xml.find(element, "Xref")
        if xref is None:
            return None
        identifier = self._attr(xref, tag, A.ID)
        database = self._attr(xref, tag, A.DATABASE)
        if not identifier and not database:
            return None
        return Xref(identifier=identifier, data_source=context.data_source(database))

    def _read_biopax(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        """Keep the BioPAX block verbatim and turn PublicationXrefs into citations."""
        block = self.xml.find(root, "Biopax")
        if block is None:
            return
        for child in block:
            if not isinstance(child.tag, str):
                continue
            detached = copy.deepcopy(child)
            detached.tail = None
            model.biopax.append(ET.tostring(detached, method="c14n", exclusive=True).decode("utf-8"))
            if child.tag == PUBLICATION_XREF:
                add_element(model, self._read_publication_xref(child, context))

    def _read_publication_xref(self, element: ET._Element, context: ConversionContext) -> Citation:
        fields: Dict[str, List[str]] = {}
        for child in element:
            if isinstance(child.tag, str) and child.text:
                fields.setdefault(ET.QName(child).localname, []).append(child.text.strip())

        def first(name: str) -> Optional[str]:
            values = fields.get(name)
            return values[0] if values else None

        identifier, database = first("ID"), first("DB")
        xref = None
        if identifier or database:
            xref = Xref(identifier=identifier or "", data_source=context.data_source(database))
        return Citation(
            element_id=element.get(RDF_ID),
            xref=xref,
            title=first("TITLE"),
            source=first("SOURCE"),
            year=first("YEAR"),
            authors=fields.get("AUTHORS", []),
        )

    def _read_groups(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        """Read groups, using GroupId as the element ID.

        A GroupId that clashes with another element's GraphId is dropped and
        the group gets a synthesized ID in pass 2.
        """
        graph_ids = {
            element.get(A.GRAPH_ID.value)
            for element in root.iter()
            if isinstance(element.tag, str) and element.get(A.GRAPH_ID.value)
        }
        for element in self.xml.findall(root, "Group"):
            group_id = self._attr(element, T.GROUP, A.GROUP_ID)
            graph_id = self._attr(element, T.GROUP, A.GRAPH_ID)
            style = self._attr(element, T.GROUP, A.STYLE)
            group_type = GROUP_STYLE_TO_TYPE.get(style, style)
            font, shape_style = group_graphics(group_type)

            group = Group(
                type=group_type,
                text_label=self._attr(element, T.GROUP, A.TEXT_LABEL) or "",
                group_ref=self._attr(element, T.GROUP, A.GROUP_REF),
                font=font,
                shape_style=shape_style,
            )
            if group_id in graph_ids and group_id != graph_id:
                logger.debug("GroupId %s is not unique, it will be replaced", group_id)
                context.renamed_groups[group_id] = group
            else:
                group.element_id = group_id
            if graph_id and graph_id != group_id:
                context.graph_id_groups[graph_id] = group
            group.dynamic_properties = self._read_element_info(element, group)
            add_element(model, group)

    def _read_shaped_graphics(self, element: ET._Element, tag: T, target: ShapedElement,
                              context: ConversionContext) -> None:
        gfx = self.xml.find(element, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(tag.value, A.CENTER_X.value, target.element_id)

        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, tag, name)

        def num(name: A) -> float:
            return to_float(attr(name), tag, name, target.element_id)

        target.rect = build(
            RectProperty, tag.value, target.element_id,
            center_x=num(A.CENTER_X), center_y=num(A.CENTER_Y),
            width=num(A.WIDTH), height=num(A.HEIGHT),
        )
        color = colors.decode(attr(A.COLOR), context.validator)
        target.font = FontProperty(
            text_color=color,
            font_name=attr(A.FONT_NAME),
            font_weight=font_flag(attr(A.FONT_WEIGHT), "font_weight"),
            font_style=font_flag(attr(A.FONT_STYLE), "font_style"),
            font_decoration=font_flag(attr(A.FONT_DECORATION), "font_decoration"),
            font_strikethru=font_flag(attr(A.FONT_STRIKETHRU), "font_strikethru"),
            font_size=num(A.FONT_SIZE),
            h_align=parse_enum(HAlignType, attr(A.ALIGN), HAlignType.CENTER),
            v_align=parse_enum(VAlignType, attr(A.VALIGN), VAlignType.MIDDLE),
        )
        target.shape_style = ShapeStyleProperty(
            border_color=color,
            border_style=self._line_style(attr(A.LINE_STYLE)),
            border_width=num(A.LINE_THICKNESS),
            fill_color=colors.decode(attr(A.FILL_COLOR), context.validator),
            shape_type=to_camel_case(attr(A.SHAPE_TYPE)),
            z_order=optional_integer(attr(A.Z_ORDER)),
        )
        if tag == T.SHAPE_GRAPHICS:
            target.shape_style.rotation = to_rotation(attr(A.ROTATION), tag, A.ROTATION, target.element_id)
        self._migrate_deprecated_shape(target.shape_style)

    @staticmethod
    def _migrate_deprecated_shape(style: ShapeStyleProperty) -> None:
        replacement = DEPRECATED_SHAPES.get(style.shape_type)
        if replacement is None:
            return
        logger.debug("Migrating retired shape type %s to %s", style.shape_type, replacement)
        style.shape_type = replacement
        if replacement in DOUBLE_BORDER_TARGETS:
            style.border_style = LineStyleType.DOUBLE
            style.border_width = DOUBLE_BORDER_WIDTH
            style.border_color = LIGHT_GRAY

    @staticmethod
    def _line_style(text: Optional[str]) -> LineStyleType:
        if text is not None and text.lower() == BROKEN.lower():
            return LineStyleType.DASHED
        return parse_enum(LineStyleType, text, LineStyleType.SOLID)

    @staticmethod
    def _apply_style_properties(properties: Dict[str, str], style: ShapeStyleProperty) -> Dict[str, str]:
        """Move style information stored as Attributes into the style.

        Returns:
            The remaining dynamic properties
        """
        remaining = {}
        for key, value in properties.items():
            if key == DOUBLE_LINE_KEY and value == DOUBLE:
                style.border_style = LineStyleType.DOUBLE
            elif key == CELL_CMPNT_KEY:
                style.shape_type = to_camel_case(value)
            else:
                remaining[key] = value
        return remaining

    def _read_data_node(self, element: ET._Element, context: ConversionContext) -> DataNode:
        data_node_type = self._attr(element, T.DATA_NODE, A.TYPE)
        data_node = DataNode(
            element_id=self._attr(element, T.DATA_NODE, A.GRAPH_ID),
            text_label=self._attr(element, T.DATA_NODE, A.TEXT_LABEL),
            type=UNDEFINED_TYPE if data_node_type == UNKNOWN_TYPE else data_node_type,
            group_ref=self._attr(element, T.DATA_NODE, A.GROUP_REF),
        )
        properties = self._read_element_info(element, data_node)
        self._read_shaped_graphics(element, T.DATA_NODE_GRAPHICS, data_node, context)
        data_node.dynamic_properties = self._apply_style_properties(properties, data_node.shape_style)
        data_node.xref = self._read_xref(element, T.DATA_NODE_XREF, context)
        return data_node

    def _read_state(self, element: ET._Element, context: ConversionContext) -> Tuple[State, Optional[str]]:
        element_id = self._attr(element, T.STATE, A.GRAPH_ID)
        state_type = self._attr(element, T.STATE, A.STATE_TYPE)
        gfx = self.xml.find(element, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(T.STATE_GRAPHICS.value, A.REL_X.value, element_id)

        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, T.STATE_GRAPHICS, name)

        def num(name: A) -> float:
            return to_float(attr(name), T.STATE_GRAPHICS, name, element_id)

        color = colors.decode(attr(A.COLOR), context.validator)
        state = build(
            State, T.STATE.value, element_id,
            element_id=element_id,
            text_label=self._attr(element, T.STATE, A.TEXT_LABEL),
            type=UNDEFINED_TYPE if state_type == UNKNOWN_TYPE else state_type,
            rel_x=num(A.REL_X),
            rel_y=num(A.REL_Y),
            width=num(A.WIDTH),
            height=num(A.HEIGHT),
            font=FontProperty(text_color=color),
            shape_style=ShapeStyleProperty(
                border_color=color,
                border_style=self._line_style(attr(A.LINE_STYLE)),
                border_width=num(A.LINE_THICKNESS),
                fill_color=colors.decode(attr(A.FILL_COLOR), context.validator),
                shape_type=to_camel_case(attr(A.SHAPE_TYPE)),
                z_order=optional_integer(attr(A.Z_ORDER)),
            ),
        )
        properties = self._read_element_info(element, state)
        rotation = properties.pop(STATE_ROTATION_KEY, None)
        if rotation is not None:
            state.shape_style.rotation = to_rotation(rotation, T.STATE, A.ROTATION, element_id)
        state.dynamic_properties = self._apply_style_properties(properties, state.shape_style)
        state.xref = self._read_xref(element, T.STATE_XREF, context)
        return state, self._attr(element, T.STATE, A.GRAPH_REF)

    def _read_arrow_head(self, text: Optional[str], element_id: Optional[str],
                         context: ConversionContext) -> str:
        if text is None:
            return ArrowHeadType.UNDIRECTED
        panel = _LEGACY_ARROWHEADS.get(text.lower())
        if panel is None:
            context.validator.warn(
                CodecMessage.UNSUPPORTED_ARROWHEAD.format(value=text, element_id=element_id),
                IssueCategory.GENERAL,
                element_id=element_id,
                field_name="ArrowHead",
            )
            return text
        return panel

    def _read_line(self, element: ET._Element, line_type, tags, context: ConversionContext) -> LineElement:
        base, gfx_tag, point_tag, anchor_tag = tags
        element_id = self._attr(element, base, A.GRAPH_ID)
        gfx = self.xml.find(element, "Graphics")
        if gfx is None:
            raise MissingRequiredAttributeError(gfx_tag.value, "Point", element_id)

        point_elements = list(self.xml.findall(gfx, "Point"))
        if len(point_elements) < 2:
            raise MissingRequiredAttributeError(gfx_tag.value, "Point", element_id)
        points = [self._read_point(point, point_tag) for point in point_elements]
        anchors = [
            build(
                Anchor, anchor_tag.value, element_id,
                element_id=self._attr(anchor, anchor_tag, A.GRAPH_ID),
                position=to_float(self._attr(anchor, anchor_tag, A.POSITION), anchor_tag, A.POSITION, element_id),
                shape_type=self._attr(anchor, anchor_tag, A.SHAPE),
            )
            for anchor in self.xml.findall(gfx, "Anchor")
        ]

        def attr(name: A) -> Optional[str]:
            return self._attr(gfx, gfx_tag, name)

        line_style = LineStyleProperty(
            line_color=colors.decode(attr(A.COLOR), context.validator),
            line_style=self._line_style(attr(A.LINE_STYLE)),
            line_width=to_float(attr(A.LINE_THICKNESS), gfx_tag, A.LINE_THICKNESS, element_id, default=1.0),
            connector_type=parse_enum(ConnectorType, attr(A.CONNECTOR_TYPE), ConnectorType.STRAIGHT),
            z_order=optional_integer(attr(A.Z_ORDER)),
        )
        line = build(
            line_type, base.value, element_id,
            element_id=element_id,
            points=points,
            anchors=anchors,
            line_style=line_style,
            group_ref=self._attr(element, base, A.GROUP_REF),
            start_arrow_head=self._read_arrow_head(
                self._attr(point_elements[0], point_tag, A.ARROW_HEAD), element_id, context),
            end_arrow_head=self._read_arrow_head(
                self._attr(point_elements[-1], point_tag, A.ARROW_HEAD), element_id, context),
        )

        properties = self._read_element_info(element, line)
        if properties.get(DOUBLE_LINE_KEY) == DOUBLE:
            del properties[DOUBLE_LINE_KEY]
            line.line_style.line_style = LineStyleType.DOUBLE
        line.dynamic_properties = properties
        if isinstance(line, Interaction):
            line.xref = self._read_xref(element, T.INTERACTION_XREF, context)
        return line

    def _read_point(self, element: ET._Element, tag: T) -> LinePoint:
        element_id = self._attr(element, tag, A.GRAPH_ID)
        element_ref = self._attr(element, tag, A.GRAPH_REF) or None
        rel_x = rel_y = None
        if element_ref is not None:
            rel_x = self._attr(element, tag, A.REL_X)
            rel_y = self._attr(element, tag, A.REL_Y)
        return LinePoint(
            element_id=element_id,
            x=to_float(self._attr(element, tag, A.X), tag, A.X, element_id),
            y=to_float(self._attr(element, tag, A.Y), tag, A.Y, element_id),
            element_ref=element_ref,
            rel_x=None if rel_x is None else to_float(rel_x, tag, A.REL_X, element_id),
            rel_y=None if rel_y is None else to_float(rel_y, tag, A.REL_Y, element_id),
        )

    def _read_label(self, element: ET._Element, context: ConversionContext) -> Label:
        label = Label(
            element_id=self._attr(element, T.LABEL, A.GRAPH_ID),
            text_label=self._attr(element, T.LABEL, A.TEXT_LABEL),
            href=self._attr(element, T.LABEL, A.HREF),
            group_ref=self._attr(element, T.LABEL, A.GROUP_REF),
        )
        properties = self._read_element_info(element, label)
        self._read_shaped_graphics(element, T.LABEL_GRAPHICS, label, context)
        label.dynamic_properties = self._apply_style_properties(properties, label.shape_style)
        return label

    def _read_shape(self, element: ET._Element, context: ConversionContext) -> Shape:
        shape = Shape(
            element_id=self._attr(element, T.SHAPE, A.GRAPH_ID),
            text_label=self._attr(element, T.SHAPE, A.TEXT_LABEL) or "",
            group_ref=self._attr(element, T.SHAPE, A.GROUP_REF),
        )
        properties = self._read_element_info(element, shape)
        self._read_shaped_graphics(element, T.SHAPE_GRAPHICS, shape, context)
        shape.dynamic_properties = self._apply_style_properties(properties, shape.shape_style)
        return shape

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write(self, model: PathwayModel, context: ConversionContext) -> ET._Element:
        """Emit a 2013a ``Pathway`` element. Children are not yet ordered."""
        root = self.xml.root()
        self._write_pathway(root, model, context)
        for data_node in model.data_nodes:
            self._write_data_node(root, data_node, context)
        for data_node, state in model.iter_states():
            self._write_state(root, data_node, state)
        for line in model.interactions:
            self._write_line(root, line, INTERACTION_TAGS, context)
        for line in model.graphical_lines:
            self._write_line(root, line, GRAPHICAL_LINE_TAGS, context)
        for label in model.labels:
            self._write_label(root, label, context)
        for shape in model.shapes:
            self._write_shape(root, shape, context)
        for group in model.groups:
            self._write_group(root, group)
        self._write_info_box_and_legend(root, model)
        self._write_biopax(root, model, context)
        return root

    def _lost(self, context: ConversionContext, what: str, element_id: Optional[str],
              element_type: Optional[str] = None) -> None:
        report_lost(context, self.dialect.value, what, element_id, element_type)

    def _write_pathway(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        pathway = model.pathway
        self._set(root, T.PATHWAY, A.NAME, pathway.title)
        self._set(root, T.PATHWAY, A.ORGANISM, pathway.organism)
        self._set(root, T.PATHWAY, A.DATA_SOURCE, pathway.source)
        self._set(root, T.PATHWAY, A.VERSION, pathway.version)
        self._set(root, T.PATHWAY, A.LICENSE, pathway.license)
        for attribute, key in PATHWAY_PROPERTY_ATTRIBUTES:
            self._set(root, T.PATHWAY, attribute, pathway.dynamic_properties.get(key))
        if pathway.authors and PATHWAY_AUTHOR not in pathway.dynamic_properties:
            self._set(root, T.PATHWAY, A.AUTHOR, ", ".join(author.name for author in pathway.authors))

        if pathway.xref is not None:
            self._lost(context, "Xref", None)
        if pathway.background_color != WHITE:
            self._lost(context, "Background color", None)

        if pathway.description is not None:
            comment = self.xml.sub(root, "Comment")
            comment.text = pathway.description
            self._set(comment, T.COMMENT, A.SOURCE, WP_DESCRIPTION)
        properties = {
            key: value for key, value in pathway.dynamic_properties.items() if key not in LEGACY_ONLY_KEYS
        }
        self._write_element_info(root, pathway.comments, pathway.citation_refs, properties)

        gfx = self.xml.sub(root, "Graphics")
        self._set(gfx, T.PATHWAY_GRAPHICS, A.BOARD_WIDTH, number(pathway.board_width))
        self._set(gfx, T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT, number(pathway.board_height))

    def _write_element_info(self, element: ET._Element, comments: List[Comment],
                            citation_refs: List[str], properties: Dict[str, str]) -> None:
        for comment in comments:
            comment_element = self.xml.sub(element, "Comment")
            comment_element.text = comment.text
            self._set(comment_element, T.COMMENT, A.SOURCE, comment.source)
        for ref in citation_refs:
            self.xml.sub(element, "BiopaxRef").text = ref
        for key, value in properties.items():
            attribute = self.xml.sub(element, "Attribute")
            self._set(attribute, T.ATTRIBUTE, A.KEY, key)
            self._set(attribute, T.ATTRIBUTE, A.VALUE, value)

    def _style_properties(self, element: PathwayElement, style: ShapeStyleProperty) -> Dict[str, str]:
        """Dynamic properties to write, plus style information 2013a stores as Attributes."""
        properties = dict(element.dynamic_properties)
        if style.border_style == LineStyleType.DOUBLE:
            properties[DOUBLE_LINE_KEY] = DOUBLE
        if style.shape_type in CELL_COMPONENT_SHAPES:
            properties[CELL_CMPNT_KEY] = from_camel_case(style.shape_type)
        return properties

    @staticmethod
    def _legacy_shape_type(shape_type: str) -> str:
        return from_camel_case(CELL_COMPONENT_SHAPES.get(shape_type, shape_type))

    @staticmethod
    def _legacy_line_style(style: LineStyleType) -> str:
        # Double is written as an Attribute, the stroke itself as Solid
        if style == LineStyleType.DASHED:
            return BROKEN
        return LineStyleType.SOLID.value

    def _write_xref(self, element: ET._Element, tag: T, xref: Optional[Xref], always: bool = False) -> None:
        if xref is None and not always:
            return
        xref_element = self.xml.sub(element, "Xref")
        self._set(xref_element, tag, A.DATABASE, xref.data_source if xref else "")
        self._set(xref_element, tag, A.ID, xref.identifier if xref else "")

    def _write_shaped_graphics(self, element: ET._Element, tag: T, shaped: ShapedElement,
                               context: ConversionContext) -> None:
        gfx = self.xml.sub(element, "Graphics")
        rect, font, style = shaped.rect, shaped.font, shaped.shape_style

        def put(name: A, value: Optional[str]) -> None:
            self._set(gfx, tag, name, value)

        put(A.CENTER_X, number(rect.center_x))
        put(A.CENTER_Y, number(rect.center_y))
        put(A.WIDTH, number(rect.width))
        put(A.HEIGHT, number(rect.height))
        put(A.FONT_NAME, font.font_name)
        put(A.FONT_WEIGHT, font_flag_text(font.font_weight, "font_weight"))
        put(A.FONT_STYLE, font_flag_text(font.font_style, "font_style"))
        put(A.FONT_DECORATION, font_flag_text(font.font_decoration, "font_decoration"))
        put(A.FONT_STRIKETHRU, font_flag_text(font.font_strikethru, "font_strikethru"))
        put(A.FONT_SIZE, integer(font.font_size))
        put(A.ALIGN, font.h_align.value)
        put(A.VALIGN, font.v_align.value)
        put(A.COLOR, colors.to_attribute(font.text_color))
        put(A.LINE_STYLE, self._legacy_line_style(style.border_style))
        put(A.LINE_THICKNESS, number(style.border_width))
        put(A.FILL_COLOR, colors.to_attribute(style.fill_color))
        put(A.SHAPE_TYPE, self._legacy_shape_type(style.shape_type))
        put(A.Z_ORDER, None if style.z_order is None else str(style.z_order))
        if tag == T.SHAPE_GRAPHICS:
            put(A.ROTATION, number(style.rotation))

        # Color is shared by text and border
        if style.border_color != font.text_color:
            self._lost(context, "Border color", shaped.element_id, shaped.kind.value)

    def _write_data_node(self, root: ET._Element, data_node: DataNode, context: ConversionContext) -> None:
        element = self.xml.sub(root, "DataNode")
        self._set(element, T.DATA_NODE, A.GRAPH_ID, data_node.element_id)
        self._set(element, T.DATA_NODE, A.TEXT_LABEL, data_node.text_label)
        self._set(element, T.DATA_NODE, A.TYPE,
                  UNKNOWN_TYPE if data_node.type == UNDEFINED_TYPE else data_node.type)
        self._set(element, T.DATA_NODE, A.GROUP_REF, data_node.group_ref)
        self._write_element_info(element, data_node.comments, data_node.citation_refs,
                                 self._style_properties(data_node, data_node.shape_style))
        self._write_shaped_graphics(element, T.DATA_NODE_GRAPHICS, data_node, context)
        self._write_xref(element, T.DATA_NODE_XREF, data_node.xref, always=True)
        if data_node.alias_ref:
            self._lost(context, "Alias reference", data_node.element_id, data_node.kind.value)

    def _write_state(self, root: ET._Element, data_node: DataNode, state: State) -> None:
        element = self.xml.sub(root, "State")
        self._set(element, T.STATE, A.GRAPH_ID, state.element_id)
        self._set(element, T.STATE, A.GRAPH_REF, data_node.element_id)
        self._set(element, T.STATE, A.TEXT_LABEL, state.text_label)
        self._set(element, T.STATE, A.STATE_TYPE,
                  UNKNOWN_TYPE if state.type == UNDEFINED_TYPE else state.type)

        style = state.shape_style
        properties = self._style_properties(state, style)
        if style.rotation:
            properties[STATE_ROTATION_KEY] = number(style.rotation)
        self._write_element_info(element, state.comments, state.citation_refs, properties)

        gfx = self.xml.sub(element, "Graphics")

        def put(name: A, value: Optional[str]) -> None:
            self._set(gfx, T.STATE_GRAPHICS, name, value)

        put(A.REL_X, number(state.rel_x))
        put(A.REL_Y, number(state.rel_y))
        put(A.WIDTH, number(state.width))
        put(A.HEIGHT, number(state.height))
        put(A.COLOR, colors.to_attribute(state.font.text_color))
        put(A.LINE_STYLE, self._legacy_line_style(style.border_style))
        put(A.LINE_THICKNESS, number(style.border_width))
        put(A.FILL_COLOR, colors.to_attribute(style.fill_color))
        put(A.SHAPE_TYPE, self._legacy_shape_type(style.shape_type))
        put(A.Z_ORDER, None if style.z_order is None else str(style.z_order))
        self._write_xref(element, T.STATE_XREF, state.xref)

    def _write_line(self, root: ET._Element, line: LineElement, tags, context: ConversionContext) -> None:
        base, gfx_tag, point_tag, anchor_tag = tags
        element = self.xml.sub(root, base.value)
        self._set(element, base, A.GRAPH_ID, line.element_id)
        self._set(element, base, A.GROUP_REF, line.group_ref)

        properties = dict(line.dynamic_properties)
        if line.line_style.line_style == LineStyleType.DOUBLE:
            properties[DOUBLE_LINE_KEY] = DOUBLE
        self._write_element_info(element, line.comments, line.citation_refs, properties)

        gfx = self.xml.sub(element, "Graphics")
        style = line.line_style
        self._set(gfx, gfx_tag, A.Z_ORDER, None if style.z_order is None else str(style.z_order))
        self._set(gfx, gfx_tag, A.COLOR, colors.to_attribute(style.line_color))
        self._set(gfx, gfx_tag, A.LINE_THICKNESS, number(style.line_width))
        self._set(gfx, gfx_tag, A.LINE_STYLE, self._legacy_line_style(style.line_style))
        self._set(gfx, gfx_tag, A.CONNECTOR_TYPE, style.connector_type.value)

        last = len(line.points) - 1
        for i, point in enumerate(line.points):
            point_element = self.xml.sub(gfx, "Point")
            arrow_head = None
            if i == 0:
                arrow_head = line.start_arrow_head
            elif i == last:
                arrow_head = line.end_arrow_head
            if arrow_head is not None:
                arrow_head = ARROWHEAD_PANEL.get(arrow_head, (arrow_head,))[0]
            self._set(point_element, point_tag, A.ARROW_HEAD, arrow_head)
            self._set(point_element, point_tag, A.X, number(point.x))
            self._set(point_element, point_tag, A.Y, number(point.y))
            self._set(point_element, point_tag, A.GRAPH_REF, point.element_ref)
            if point.relative_set:
                self._set(point_element, point_tag, A.REL_X, number(point.rel_x))
                self._set(point_element, point_tag, A.REL_Y, number(point.rel_y))
            self._set(point_element, point_tag, A.GRAPH_ID, point.element_id)
        for anchor in line.anchors:
            anchor_element = self.xml.sub(gfx, "Anchor")
            self._set(anchor_element, anchor_tag, A.POSITION, number(anchor.position))
            self._set(anchor_element, anchor_tag, A.SHAPE, anchor.shape_type)
            self._set(anchor_element, anchor_tag, A.GRAPH_ID, anchor.element_id)

        if isinstance(line, Interaction):
            self._write_xref(element, T.INTERACTION_XREF, line.xref)

    def _write_label(self, root: ET._Element, label: Label, context: ConversionContext) -> None:
        element = self.xml.sub(root, "Label")
        self._set(element, T.LABEL, A.GRAPH_ID, label.element_id)
        self._set(element, T.LABEL, A.TEXT_LABEL, label.text_label)
        self._set(element, T.LABEL, A.HREF, label.href)
        self._set(element, T.LABEL, A.GROUP_REF, label.group_ref)
        self._write_element_info(element, label.comments, label.citation_refs,
                                 self._style_properties(label, label.shape_style))
        self._write_shaped_graphics(element, T.LABEL_GRAPHICS, label, context)

    def _write_shape(self, root: ET._Element, shape: Shape, context: ConversionContext) -> None:
        element = self.xml.sub(root, "Shape")
        self._set(element, T.SHAPE, A.GRAPH_ID, shape.element_id)
        self._set(element, T.SHAPE, A.TEXT_LABEL, shape.text_label)
        self._set(element, T.SHAPE, A.GROUP_REF, shape.group_ref)
        self._write_element_info(element, shape.comments, shape.citation_refs,
                                 self._style_properties(shape, shape.shape_style))
        self._write_shaped_graphics(element, T.SHAPE_GRAPHICS, shape, context)

    def _write_group(self, root: ET._Element, group: Group) -> None:
        """Write a group. Its graphics follow from Style and are not written."""
        element = self.xml.sub(root, "Group")
        self._set(element, T.GROUP, A.GROUP_ID, group.element_id)
        self._set(element, T.GROUP, A.GRAPH_ID, group.element_id)
        self._set(element, T.GROUP, A.GROUP_REF, group.group_ref)
        self._set(element, T.GROUP, A.STYLE, GROUP_TYPE_TO_STYLE.get(group.type, group.type))
        self._set(element, T.GROUP, A.TEXT_LABEL, group.text_label)
        self._write_element_info(element, group.comments, group.citation_refs, group.dynamic_properties)

    def _write_info_box_and_legend(self, root: ET._Element, model: PathwayModel) -> None:
        properties = model.pathway.dynamic_properties
        info_box = self.xml.sub(root, "InfoBox")
        self._set(info_box, T.INFO_BOX, A.CENTER_X, properties.get(INFOBOX_CENTER_X, "0.0"))
        self._set(info_box, T.INFO_BOX, A.CENTER_Y, properties.get(INFOBOX_CENTER_Y, "0.0"))
        if LEGEND_CENTER_X in properties and LEGEND_CENTER_Y in properties:
            legend = self.xml.sub(root, "Legend")
            self._set(legend, T.LEGEND, A.CENTER_X, properties[LEGEND_CENTER_X])
            self._set(legend, T.LEGEND, A.CENTER_Y, properties[LEGEND_CENTER_Y])

    def _write_biopax(self, root: ET._Element, model: PathwayModel, context: ConversionContext) -> None:
        """Write the kept BioPAX block plus citations it does not already hold."""
        items = [ET.fromstring(text) for text in model.biopax]
        present = {item.get(RDF_ID) for item in items}
        for citation in model.citations:
            if citation.element_id not in present:
                items.append(self._publication_xref(citation))
            if citation.url:
                self._lost(context, "Citation URL", citation.element_id, citation.kind.value)
        if not items:
            return
        block = self.xml.sub(root, "Biopax")
        block.extend(items)
        sort_biopax(block)

    @staticmethod
    def _publication_xref(citation: Citation) -> ET._Element:
        element = ET.Element(PUBLICATION_XREF, nsmap={"bp": BIOPAX_NAMESPACE, "rdf": RDF_NAMESPACE})
        element.set(RDF_ID, citation.element_id)

        def field(name: str, text: Optional[str]) -> None:
            if text is None:
                return
            child = ET.SubElement(element, f"{{{BIOPAX_NAMESPACE}}}{name}")
            child.set(RDF_DATATYPE, XSD_STRING)
            child.text = text

        field("ID", citation.xref.identifier if citation.xref else "")
        field("DB", citation.xref.data_source if citation.xref else "")
        field("TITLE", citation.title)
        field("SOURCE", citation.source)
        field("YEAR", citation.year)
        for author in citation.authors:
            field("AUTHORS", author)
        return element
