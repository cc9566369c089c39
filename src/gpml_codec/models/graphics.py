"""
Graphical property groups shared by pathway elements.

Colors, font and border settings are bundled the way GPML bundles them in a
``Graphics`` child element, so the dialect adapters can map a whole group at
once.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Color(BaseModel):
    """An RGB color with a separate transparency flag.

    ``Color(red=0, green=0, blue=0, transparent=True)`` is "Transparent" and
    is not equal to opaque black.
    """

    red: int = Field(default=0, ge=0, le=255)
    green: int = Field(default=0, ge=0, le=255)
    blue: int = Field(default=0, ge=0, le=255)
    transparent: bool = False

    class Config:
        frozen = True

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> "Color":
        return cls(red=red, green=green, blue=blue)

    def same_rgb(self, other: "Color") -> bool:
        return (self.red, self.green, self.blue) == (other.red, other.green, other.blue)


BLACK = Color.rgb(0, 0, 0)
WHITE = Color.rgb(255, 255, 255)
LIGHT_GRAY = Color.rgb(192, 192, 192)
TRANSPARENT = Color(transparent=True)


class LineStyleType(str, Enum):
    """Stroke style of borders and lines"""

    SOLID = "Solid"
    DASHED = "Dashed"
    DOUBLE = "Double"


class ConnectorType(str, Enum):
    """How a line is routed between its points"""

    STRAIGHT = "Straight"
    ELBOW = "Elbow"
    CURVED = "Curved"
    SEGMENTED = "Segmented"


class HAlignType(str, Enum):
    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"


class VAlignType(str, Enum):
    TOP = "Top"
    MIDDLE = "Middle"
    BOTTOM = "Bottom"


class ArrowHeadType:
    """Arrowhead names of the current dialect.

    Arrowheads form an open vocabulary, unknown names are carried as plain
    strings.
    """

    UNDIRECTED = "Undirected"
    DIRECTED = "Directed"
    CONVERSION = "Conversion"
    INHIBITION = "Inhibition"
    CATALYSIS = "Catalysis"
    STIMULATION = "Stimulation"
    BINDING = "Binding"
    TRANSLOCATION = "Translocation"
    TRANSCRIPTION_TRANSLATION = "TranscriptionTranslation"


class ShapeTypeName:
    """Commonly used shape type names (open vocabulary)"""

    NONE = "None"
    RECTANGLE = "Rectangle"
    ROUNDED_RECTANGLE = "RoundedRectangle"
    OVAL = "Oval"
    HEXAGON = "Hexagon"
    SQUARE = "Square"
    MITOCHONDRIA = "Mitochondria"


class RectProperty(BaseModel):
    """Center, width and height of a shaped element's bounding box"""

    center_x: float = 0.0
    center_y: float = 0.0
    width: float = Field(default=0.0, ge=0.0)
    height: float = Field(default=0.0, ge=0.0)

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2

    @property
    def top(self) -> float:
        return self.center_y - self.height / 2

    @property
    def right(self) -> float:
        return self.center_x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.center_y + self.height / 2


class FontProperty(BaseModel):
    """Text appearance of a shaped element"""

    text_color: Color = BLACK
    font_name: str = "Arial"
    font_weight: bool = False  # bold
    font_style: bool = False  # italic
    font_decoration: bool = False  # underline
    font_strikethru: bool = False
    font_size: float = 12
    h_align: HAlignType = HAlignType.CENTER
    v_align: VAlignType = VAlignType.MIDDLE


class ShapeStyleProperty(BaseModel):
    """Border, fill and shape of a shaped element"""

    border_color: Color = BLACK
    border_style: LineStyleType = LineStyleType.SOLID
    border_width: float = 1.0
    fill_color: Color = WHITE
    shape_type: str = ShapeTypeName.RECTANGLE
    z_order: Optional[int] = None
    rotation: float = 0.0  # radians


class LineStyleProperty(BaseModel):
    """Stroke and routing of a line element"""

    line_color: Color = BLACK
    line_style: LineStyleType = LineStyleType.SOLID
    line_width: float = 1.0
    connector_type: ConnectorType = ConnectorType.STRAIGHT
    z_order: Optional[int] = None
