"""Attribute table of the legacy GPML 2013a dialect."""

from enum import Enum

from gpml_codec.schema.registry import (
    AttributeKey,
    SchemaRegistry,
    SchemaType,
    optional,
    required,
)

NAMESPACE = "http://pathvisio.org/GPML/2013a"


class LegacyTag(str, Enum):
    """Element paths of the 2013a dialect, nested elements joined by dots"""

    PATHWAY = "Pathway"
    PATHWAY_GRAPHICS = "Pathway.Graphics"
    DATA_NODE = "DataNode"
    DATA_NODE_GRAPHICS = "DataNode.Graphics"
    DATA_NODE_XREF = "DataNode.Xref"
    STATE = "State"
    STATE_GRAPHICS = "State.Graphics"
    STATE_XREF = "State.Xref"
    INTERACTION = "Interaction"
    INTERACTION_GRAPHICS = "Interaction.Graphics"
    INTERACTION_POINT = "Interaction.Graphics.Point"
    INTERACTION_ANCHOR = "Interaction.Graphics.Anchor"
    INTERACTION_XREF = "Interaction.Xref"
    GRAPHICAL_LINE = "GraphicalLine"
    GRAPHICAL_LINE_GRAPHICS = "GraphicalLine.Graphics"
    GRAPHICAL_LINE_POINT = "GraphicalLine.Graphics.Point"
    GRAPHICAL_LINE_ANCHOR = "GraphicalLine.Graphics.Anchor"
    LABEL = "Label"
    LABEL_GRAPHICS = "Label.Graphics"
    SHAPE = "Shape"
    SHAPE_GRAPHICS = "Shape.Graphics"
    GROUP = "Group"
    INFO_BOX = "InfoBox"
    LEGEND = "Legend"
    COMMENT = "Comment"
    PUBLICATION_XREF = "PublicationXref"
    ATTRIBUTE = "Attribute"


class LegacyAttr(str, Enum):
    NAME = "Name"
    ORGANISM = "Organism"
    DATA_SOURCE = "Data-Source"
    VERSION = "Version"
    AUTHOR = "Author"
    MAINTAINER = "Maintainer"
    EMAIL = "Email"
    LICENSE = "License"
    LAST_MODIFIED = "Last-Modified"
    BIOPAX_REF = "BiopaxRef"
    BOARD_WIDTH = "BoardWidth"
    BOARD_HEIGHT = "BoardHeight"
    CENTER_X = "CenterX"
    CENTER_Y = "CenterY"
    WIDTH = "Width"
    HEIGHT = "Height"
    REL_X = "RelX"
    REL_Y = "RelY"
    FONT_NAME = "FontName"
    FONT_STYLE = "FontStyle"
    FONT_DECORATION = "FontDecoration"
    FONT_STRIKETHRU = "FontStrikethru"
    FONT_WEIGHT = "FontWeight"
    FONT_SIZE = "FontSize"
    ALIGN = "Align"
    VALIGN = "Valign"
    COLOR = "Color"
    LINE_STYLE = "LineStyle"
    LINE_THICKNESS = "LineThickness"
    FILL_COLOR = "FillColor"
    SHAPE_TYPE = "ShapeType"
    Z_ORDER = "ZOrder"
    ROTATION = "Rotation"
    DATABASE = "Database"
    ID = "ID"
    GRAPH_ID = "GraphId"
    GRAPH_REF = "GraphRef"
    GROUP_REF = "GroupRef"
    GROUP_ID = "GroupId"
    TEXT_LABEL = "TextLabel"
    TYPE = "Type"
    STATE_TYPE = "StateType"
    X = "X"
    Y = "Y"
    ARROW_HEAD = "ArrowHead"
    POSITION = "Position"
    SHAPE = "Shape"
    CONNECTOR_TYPE = "ConnectorType"
    HREF = "Href"
    STYLE = "Style"
    SOURCE = "Source"
    KEY = "Key"
    VALUE = "Value"


T = LegacyTag
A = LegacyAttr


def _shaped_graphics(tag: LegacyTag, fill_default: str, shape_default) -> dict:
    entries = {
        A.CENTER_X: required(SchemaType.FLOAT),
        A.CENTER_Y: required(SchemaType.FLOAT),
        A.WIDTH: required(SchemaType.DIMENSION),
        A.HEIGHT: required(SchemaType.DIMENSION),
        A.FONT_NAME: optional(SchemaType.STRING, "Arial"),
        A.FONT_STYLE: optional(SchemaType.STRING, "Normal"),
        A.FONT_DECORATION: optional(SchemaType.STRING, "Normal"),
        A.FONT_STRIKETHRU: optional(SchemaType.STRING, "Normal"),
        A.FONT_WEIGHT: optional(SchemaType.STRING, "Normal"),
        A.FONT_SIZE: optional(SchemaType.NON_NEGATIVE_INTEGER, "12"),
        A.ALIGN: optional(SchemaType.STRING, "Center"),
        A.VALIGN: optional(SchemaType.STRING, "Top"),
        A.COLOR: optional(SchemaType.COLOR, "Black"),
        A.LINE_STYLE: optional(SchemaType.STYLE, "Solid"),
        A.LINE_THICKNESS: optional(SchemaType.FLOAT, "1.0"),
        A.FILL_COLOR: optional(SchemaType.COLOR, fill_default),
        A.Z_ORDER: optional(SchemaType.INTEGER),
    }
    if shape_default is None:
        entries[A.SHAPE_TYPE] = required(SchemaType.STRING)
    else:
        entries[A.SHAPE_TYPE] = optional(SchemaType.STRING, shape_default)
    return {AttributeKey(tag, attr): info for attr, info in entries.items()}


def _line(base: LegacyTag, graphics: LegacyTag, point: LegacyTag, anchor: LegacyTag) -> dict:
    entries = {
        (point, A.X): required(SchemaType.FLOAT),
        (point, A.Y): required(SchemaType.FLOAT),
        (point, A.REL_X): optional(SchemaType.FLOAT),
        (point, A.REL_Y): optional(SchemaType.FLOAT),
        (point, A.GRAPH_REF): optional(SchemaType.IDREF),
        (point, A.GRAPH_ID): optional(SchemaType.ID),
        (point, A.ARROW_HEAD): optional(SchemaType.STRING, "Line"),
        (anchor, A.POSITION): required(SchemaType.FLOAT),
        (anchor, A.GRAPH_ID): optional(SchemaType.ID),
        (anchor, A.SHAPE): optional(SchemaType.STRING, "ReceptorRound"),
        (graphics, A.COLOR): optional(SchemaType.COLOR, "Black"),
        (graphics, A.LINE_THICKNESS): optional(SchemaType.FLOAT),
        (graphics, A.LINE_STYLE): optional(SchemaType.STYLE, "Solid"),
        (graphics, A.CONNECTOR_TYPE): optional(SchemaType.STRING, "Straight"),
        (graphics, A.Z_ORDER): optional(SchemaType.INTEGER),
        (base, A.GROUP_REF): optional(SchemaType.STRING),
        (base, A.BIOPAX_REF): optional(SchemaType.STRING),
        (base, A.GRAPH_ID): optional(SchemaType.ID),
        (base, A.TYPE): optional(SchemaType.STRING),
    }
    return {AttributeKey(*key): info for key, info in entries.items()}


def _build_entries() -> dict:
    entries = {
        (T.COMMENT, A.SOURCE): optional(SchemaType.STRING),
        (T.PUBLICATION_XREF, A.ID): required(SchemaType.STRING),
        (T.PUBLICATION_XREF, A.DATABASE): required(SchemaType.STRING),
        (T.ATTRIBUTE, A.KEY): required(SchemaType.STRING),
        (T.ATTRIBUTE, A.VALUE): required(SchemaType.STRING),
        (T.PATHWAY_GRAPHICS, A.BOARD_WIDTH): required(SchemaType.DIMENSION),
        (T.PATHWAY_GRAPHICS, A.BOARD_HEIGHT): required(SchemaType.DIMENSION),
        (T.PATHWAY, A.NAME): required(SchemaType.STRING),
        (T.PATHWAY, A.ORGANISM): optional(SchemaType.STRING),
        (T.PATHWAY, A.DATA_SOURCE): optional(SchemaType.STRING),
        (T.PATHWAY, A.VERSION): optional(SchemaType.STRING),
        (T.PATHWAY, A.AUTHOR): optional(SchemaType.STRING),
        (T.PATHWAY, A.MAINTAINER): optional(SchemaType.STRING),
        (T.PATHWAY, A.EMAIL): optional(SchemaType.STRING),
        (T.PATHWAY, A.LICENSE): optional(SchemaType.STRING),
        (T.PATHWAY, A.LAST_MODIFIED): optional(SchemaType.STRING),
        (T.PATHWAY, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.DATA_NODE_XREF, A.DATABASE): required(SchemaType.STRING),
        (T.DATA_NODE_XREF, A.ID): required(SchemaType.STRING),
        (T.DATA_NODE, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.DATA_NODE, A.GRAPH_ID): optional(SchemaType.ID),
        (T.DATA_NODE, A.GROUP_REF): optional(SchemaType.STRING),
        (T.DATA_NODE, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.DATA_NODE, A.TYPE): optional(SchemaType.STRING, "Unknown"),
        (T.STATE_GRAPHICS, A.REL_X): required(SchemaType.FLOAT),
        (T.STATE_GRAPHICS, A.REL_Y): required(SchemaType.FLOAT),
        (T.STATE_GRAPHICS, A.WIDTH): required(SchemaType.DIMENSION),
        (T.STATE_GRAPHICS, A.HEIGHT): required(SchemaType.DIMENSION),
        (T.STATE_GRAPHICS, A.COLOR): optional(SchemaType.COLOR, "Black"),
        (T.STATE_GRAPHICS, A.LINE_STYLE): optional(SchemaType.STYLE, "Solid"),
        (T.STATE_GRAPHICS, A.LINE_THICKNESS): optional(SchemaType.FLOAT, "1.0"),
        (T.STATE_GRAPHICS, A.FILL_COLOR): optional(SchemaType.COLOR, "White"),
        (T.STATE_GRAPHICS, A.SHAPE_TYPE): optional(SchemaType.STRING, "Rectangle"),
        (T.STATE_GRAPHICS, A.Z_ORDER): optional(SchemaType.INTEGER),
        (T.STATE_XREF, A.DATABASE): required(SchemaType.STRING),
        (T.STATE_XREF, A.ID): required(SchemaType.STRING),
        (T.STATE, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.STATE, A.GRAPH_ID): optional(SchemaType.ID),
        (T.STATE, A.GRAPH_REF): optional(SchemaType.IDREF),
        (T.STATE, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.STATE, A.STATE_TYPE): optional(SchemaType.STRING, "Unknown"),
        (T.INTERACTION_XREF, A.DATABASE): required(SchemaType.STRING),
        (T.INTERACTION_XREF, A.ID): required(SchemaType.STRING),
        (T.LABEL, A.HREF): optional(SchemaType.STRING),
        (T.LABEL, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.LABEL, A.GRAPH_ID): optional(SchemaType.ID),
        (T.LABEL, A.GROUP_REF): optional(SchemaType.STRING),
        (T.LABEL, A.TEXT_LABEL): required(SchemaType.STRING),
        (T.SHAPE_GRAPHICS, A.ROTATION): optional(SchemaType.ROTATION, "Top"),
        (T.SHAPE, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.SHAPE, A.GRAPH_ID): optional(SchemaType.ID),
        (T.SHAPE, A.GROUP_REF): optional(SchemaType.STRING),
        (T.SHAPE, A.TEXT_LABEL): optional(SchemaType.STRING),
        (T.GROUP, A.BIOPAX_REF): optional(SchemaType.STRING),
        (T.GROUP, A.GROUP_ID): required(SchemaType.STRING),
        (T.GROUP, A.GROUP_REF): optional(SchemaType.STRING),
        (T.GROUP, A.STYLE): optional(SchemaType.STRING, "None"),
        (T.GROUP, A.TEXT_LABEL): optional(SchemaType.STRING),
        (T.GROUP, A.GRAPH_ID): optional(SchemaType.ID),
        (T.INFO_BOX, A.CENTER_X): required(SchemaType.FLOAT),
        (T.INFO_BOX, A.CENTER_Y): required(SchemaType.FLOAT),
        (T.LEGEND, A.CENTER_X): required(SchemaType.FLOAT),
        (T.LEGEND, A.CENTER_Y): required(SchemaType.FLOAT),
    }
    result = {AttributeKey(*key): info for key, info in entries.items()}
    result.update(_shaped_graphics(T.DATA_NODE_GRAPHICS, "White", "Rectangle"))
    result.update(_shaped_graphics(T.LABEL_GRAPHICS, "Transparent", "None"))
    result.update(_shaped_graphics(T.SHAPE_GRAPHICS, "Transparent", None))
    result.update(_line(T.INTERACTION, T.INTERACTION_GRAPHICS,
                        T.INTERACTION_POINT, T.INTERACTION_ANCHOR))
    result.update(_line(T.GRAPHICAL_LINE, T.GRAPHICAL_LINE_GRAPHICS,
                        T.GRAPHICAL_LINE_POINT, T.GRAPHICAL_LINE_ANCHOR))
    return result


LEGACY_REGISTRY = SchemaRegistry("2013a", _build_entries())
