"""Attribute table of the current GPML 2021 dialect."""

from enum import Enum

from gpml_codec.schema.registry import (
    AttributeKey,
    SchemaRegistry,
    SchemaType,
    optional,
    required,
)

NAMESPACE = "http://pathvisio.org/GPML/2021"


class CurrentTag(str, Enum):
    PATHWAY = "Pathway"
    PATHWAY_GRAPHICS = "Pathway.Graphics"
    XREF = "Xref"
    AUTHOR = "Author"
    COMMENT = "Comment"
    PROPERTY = "Property"
    CITATION_REF = "CitationRef"
    DATA_NODE = "DataNode"
    DATA_NODE_GRAPHICS = "DataNode.Graphics"
    STATE = "State"
    STATE_GRAPHICS = "State.Graphics"
    LABEL = "Label"
    LABEL_GRAPHICS = "Label.Graphics"
    SHAPE = "Shape"
    SHAPE_GRAPHICS = "Shape.Graphics"
    GROUP = "Group"
    GROUP_GRAPHICS = "Group.Graphics"
    INTERACTION = "Interaction"
    GRAPHICAL_LINE = "GraphicalLine"
    LINE_GRAPHICS = "Line.Graphics"
    POINT = "Point"
    ANCHOR = "Anchor"
    CITATION = "Citation"
    URL = "Url"


class CurrentAttr(str, Enum):
    TITLE = "title"
    ORGANISM = "organism"
    SOURCE = "source"
    VERSION = "version"
    LICENSE = "license"
    BOARD_WIDTH = "boardWidth"
    BOARD_HEIGHT = "boardHeight"
    BACKGROUND_COLOR = "backgroundColor"
    IDENTIFIER = "identifier"
    DATA_SOURCE = "dataSource"
    NAME = "name"
    USERNAME = "username"
    ORDER = "order"
    KEY = "key"
    VALUE = "value"
    ELEMENT_ID = "elementId"
    ELEMENT_REF = "elementRef"
    TEXT_LABEL = "textLabel"
    TYPE = "type"
    GROUP_REF = "groupRef"
    ALIAS_REF = "aliasRef"
    HREF = "href"
    LINK = "link"
    CENTER_X = "centerX"
    CENTER_Y = "centerY"
    WIDTH = "width"
    HEIGHT = "height"
    REL_X = "relX"
    REL_Y = "relY"
    TEXT_COLOR = "textColor"
    FONT_NAME = "fontName"
    FONT_WEIGHT = "fontWeight"
    FONT_STYLE = "fontStyle"
    FONT_DECORATION = "fontDecoration"
    FONT_STRIKETHRU = "fontStrikethru"
    FONT_SIZE = "fontSize"
    H_ALIGN = "hAlign"
    V_ALIGN = "vAlign"
    BORDER_COLOR = "borderColor"
    BORDER_STYLE = "borderStyle"
    BORDER_WIDTH = "borderWidth"
    FILL_COLOR = "fillColor"
    SHAPE_TYPE = "shapeType"
    Z_ORDER = "zOrder"
    ROTATION = "rotation"
    LINE_COLOR = "lineColor"
    LINE_STYLE = "lineStyle"
    LINE_WIDTH = "lineWidth"
    CONNECTOR_TYPE = "connectorType"
    ARROW_HEAD = "arrowHead"
    X = "x"
    Y = "y"
    POSITION = "position"


T = CurrentTag
A = CurrentAttr


def _shaped_graphics(tag: CurrentTag, fill_default: str, relative: bool = False) -> dict:
    if relative:
        placement = {A.REL_X: required(SchemaType.FLOAT), A.REL_Y: required(SchemaType.FLOAT)}
    else:
        placement = {A.CENTER_X: required(SchemaType.FLOAT), A.CENTER_Y: required(SchemaType.FLOAT)}
    entries = {
        **placement,
        A.WIDTH: required(SchemaType.DIMENSION),
        A.HEIGHT: required(SchemaType.DIMENSION),
        A.TEXT_COLOR: optional(SchemaType.COLOR, "000000"),
        A.FONT_NAME: optional(SchemaType.STRING, "Arial"),
        A.FONT_WEIGHT: optional(SchemaType.STRING, "Normal"),
        A.FONT_STYLE: optional(SchemaType.STRING, "Normal"),
        A.FONT_DECORATION: optional(SchemaType.STRING, "Normal"),
        A.FONT_STRIKETHRU: optional(SchemaType.STRING, "Normal"),
        A.FONT_SIZE: optional(SchemaType.NON_NEGATIVE_INTEGER, "12"),
        A.H_ALIGN: optional(SchemaType.STRING, "Center"),
        A.V_ALIGN: optional(SchemaType.STRING, "Middle"),
        A.BORDER_COLOR: optional(SchemaType.COLOR, "000000"),
        A.BORDER_STYLE: optional(SchemaType.STYLE, "Solid"),
        A.BORDER_WIDTH: optional(SchemaType.FLOAT, "1.0"),
        A.FILL_COLOR: optional(SchemaType.COLOR, fill_default),
        A.SHAPE_TYPE: optional(SchemaType.STRING, "Rectangle"),
        A.Z_ORDER: optional(SchemaType.INTEGER),
        A.ROTATION: optional(SchemaType.ROTATION, "0.0"),
    }
    return {AttributeKey(tag, attr): info for attr, info in entries.items()}


def _build_entries() -> dict:
    entries = {
        (T.PATHWAY, A.TITLE): required(SchemaType.STRING),
        (T.PATHWAY, A.ORGANISM): optional(SchemaType.STRING),
        (T.PATHWAY, A.SOURCE): optional(SchemaType.STRING),
        (T.PATHWAY, A.VERSION): optional(SchemaType.STRING),
        (T.PATHWAY, A.LICENSE): optional(SchemaType.STRING),
        (T.PATHWAY_GRAPHICS, A.BOARD_WIDTH): required(SchemaType.DIMENSION),
        (T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT): required(SchemaType.DIMENSION),
        (T.PATHWAY_GRAPHICS, A.BACKGROUND_COLOR): optional(SchemaType.COLOR, "ffffff"),
        (T.XREF, A.IDENTIFIER): required(SchemaType.STRING),
        (T.XREF, A.DATA_SOURCE): required(SchemaType.STRING),
        (T.AUTHOR, A.NAME): required(SchemaType.STRING),
        (T.AUTHOR, A.USERNAME): optional(SchemaType.STRING),
        (T.AUTHOR, A.ORDER): optional(SchemaType.NON_NEGATIVE_INTEGER),
        (T.COMMENT, A.SOURCE): optional(SchemaType.STRING),
        (T.PROPERTY, A.KEY): required(SchemaType.STRING),
        (T.PROPERTY, A.VALUE): required(SchemaType.STRING),
        (T.CITATION_REF, A.ELEMENT_REF): required(SchemaType.IDREF),
        (T.DATA_NODE, A.ELEMENT_ID): required(SchemaType.ID),
        (T.DATA_NODE, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.DATA_NODE, A.TYPE): optional(SchemaType.STRING, "Undefined"),
        (T.DATA_NODE, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.DATA_NODE, A.ALIAS_REF): optional(SchemaType.IDREF),
        (T.STATE, A.ELEMENT_ID): required(SchemaType.ID),
        (T.STATE, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.STATE, A.TYPE): optional(SchemaType.STRING, "Undefined"),
        (T.LABEL, A.ELEMENT_ID): required(SchemaType.ID),
        (T.LABEL, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.LABEL, A.HREF): optional(SchemaType.STRING),
        (T.LABEL, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.SHAPE, A.ELEMENT_ID): required(SchemaType.ID),
        (T.SHAPE, A.TEXT_LABEL): optional(SchemaType.STRING),
        (T.SHAPE, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.GROUP, A.ELEMENT_ID): required(SchemaType.ID),
        (T.GROUP, A.TEXT_LABEL): optional(SchemaType.STRING),
        (T.GROUP, A.TYPE): optional(SchemaType.STRING, "Group"),
        (T.GROUP, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.INTERACTION, A.ELEMENT_ID): required(SchemaType.ID),
        (T.INTERACTION, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.GRAPHICAL_LINE, A.ELEMENT_ID): required(SchemaType.ID),
        (T.GRAPHICAL_LINE, A.GROUP_REF): optional(SchemaType.IDREF),
        (T.LINE_GRAPHICS, A.LINE_COLOR): optional(SchemaType.COLOR, "000000"),
        (T.LINE_GRAPHICS, A.LINE_STYLE): optional(SchemaType.STYLE, "Solid"),
        (T.LINE_GRAPHICS, A.LINE_WIDTH): optional(SchemaType.FLOAT, "1.0"),
        (T.LINE_GRAPHICS, A.CONNECTOR_TYPE): optional(SchemaType.STRING, "Straight"),
        (T.LINE_GRAPHICS, A.Z_ORDER): optional(SchemaType.INTEGER),
        (T.POINT, A.ELEMENT_ID): required(SchemaType.ID),
        (T.POINT, A.ARROW_HEAD): optional(SchemaType.STRING, "Undirected"),
        (T.POINT, A.X): required(SchemaType.FLOAT),
        (T.POINT, A.Y): required(SchemaType.FLOAT),
        (T.POINT, A.ELEMENT_REF): optional(SchemaType.IDREF),
        (T.POINT, A.REL_X): optional(SchemaType.FLOAT),
        (T.POINT, A.REL_Y): optional(SchemaType.FLOAT),
        (T.ANCHOR, A.ELEMENT_ID): required(SchemaType.ID),
        (T.ANCHOR, A.POSITION): required(SchemaType.FLOAT),
        (T.ANCHOR, A.SHAPE_TYPE): optional(SchemaType.STRING, "Square"),
        (T.CITATION, A.ELEMENT_ID): required(SchemaType.ID),
        (T.URL, A.LINK): required(SchemaType.STRING),
    }
    result = {AttributeKey(*key): info for key, info in entries.items()}
    result.update(_shaped_graphics(T.DATA_NODE_GRAPHICS, "ffffff"))
    result.update(_shaped_graphics(T.STATE_GRAPHICS, "ffffff", relative=True))
    result.update(_shaped_graphics(T.LABEL_GRAPHICS, "Transparent"))
    result.update(_shaped_graphics(T.SHAPE_GRAPHICS, "Transparent"))
    result.update(_shaped_graphics(T.GROUP_GRAPHICS, "Transparent"))
    return result


CURRENT_REGISTRY = SchemaRegistry("2021", _build_entries())
