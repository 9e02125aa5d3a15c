from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, NamedTuple, Union


LineCap = Literal["butt", "round", "square"]
LineJoin = Literal["bevel", "miter", "round"]
TextAnchor = Literal["start", "middle", "end"]
TextAlign = Literal["start", "middle", "end"]
ImageMode = Literal["letterbox", "stretch"]
PathCommandName = Literal["M", "L", "C", "Q", "A", "Z"]

PATH_COMMAND_ARITY: dict[str, int] = {"M": 2, "L": 2, "C": 6, "Q": 4, "A": 7, "Z": 0}


class Color(NamedTuple):
    """Device RGB color, channels nominally in [0, 255]."""

    r: float
    g: float
    b: float


@dataclass(frozen=True)
class NumberModifier:
    """Either an absolute `set` or a multiply -> add -> pow chain."""

    set: float | None = None
    multiply: float | None = None
    add: float | None = None
    pow: float | None = None


@dataclass(frozen=True)
class ColorFilter:
    saturation: NumberModifier | None = None
    lightness: NumberModifier | None = None


@dataclass(frozen=True)
class Style:
    stroke_color: Color | None = None
    stroke_opacity: float | None = None
    stroke_width: float | None = None
    stroke_linecap: LineCap | None = None
    stroke_linejoin: LineJoin | None = None
    fill_color: Color | None = None
    fill_opacity: float | None = None
    text_anchor: TextAnchor | None = None
    opacity: float | None = None
    color_filter: ColorFilter | None = None

    def __post_init__(self) -> None:
        for name in ("stroke_opacity", "fill_opacity", "opacity"):
            value = getattr(self, name)
            if value is not None and (value < 0.0 or value > 1.0):
                raise ValueError(f"style {name} must be in [0, 1]")
        if self.stroke_width is not None and self.stroke_width < 0:
            raise ValueError("style stroke_width must be >= 0")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class RigidTransform:
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0


@dataclass(frozen=True)
class PathCommand:
    cmd: PathCommandName
    args: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        arity = PATH_COMMAND_ARITY.get(self.cmd)
        if arity is None:
            raise ValueError(f"unknown path command: {self.cmd}")
        if len(self.args) != arity:
            raise ValueError(f"path command `{self.cmd}` takes {arity} args, got {len(self.args)}")


@dataclass(frozen=True)
class PlotSegmentRef:
    """The plot segment a glyph belongs to; `table` names its data table."""

    table: str
    plot_segment_id: str | None = None


@dataclass(frozen=True)
class Selectable:
    """Selection identity of an interactive node."""

    plot_segment: PlotSegmentRef
    glyph_index: int
    row_indices: tuple[int, ...] = ()


# Every variant below ends with the same three optional fields:
# `style`, `data_datum` (opaque payload string) and `selectable`.


@dataclass(frozen=True)
class Rect:
    type: ClassVar[str] = "rect"

    x1: float
    y1: float
    x2: float
    y2: float
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Circle:
    type: ClassVar[str] = "circle"

    cx: float
    cy: float
    r: float
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None

    def __post_init__(self) -> None:
        if self.r < 0:
            raise ValueError("circle radius must be >= 0")


@dataclass(frozen=True)
class Ellipse:
    type: ClassVar[str] = "ellipse"

    x1: float
    y1: float
    x2: float
    y2: float
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Line:
    type: ClassVar[str] = "line"

    x1: float
    y1: float
    x2: float
    y2: float
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Polygon:
    type: ClassVar[str] = "polygon"

    points: tuple[Point, ...] = ()
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Path:
    type: ClassVar[str] = "path"

    cmds: tuple[PathCommand, ...] = ()
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Text:
    type: ClassVar[str] = "text"

    cx: float
    cy: float
    text: str
    font_family: str = "Arial"
    font_size: float = 14.0
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class TextOnPath:
    type: ClassVar[str] = "text-on-path"

    path_cmds: tuple[PathCommand, ...]
    text: str
    font_family: str = "Arial"
    font_size: float = 14.0
    align: TextAlign = "start"
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


@dataclass(frozen=True)
class Image:
    type: ClassVar[str] = "image"

    x: float
    y: float
    width: float
    height: float
    src: str
    mode: str | None = None
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image width/height must be >= 0")


@dataclass(frozen=True)
class ChartContainer:
    """A nested sub-chart embedded as a single leaf.

    `chart` and `dataset` are opaque to the renderer and only forwarded to a
    chart component renderer. `graphics` optionally carries the sub-chart's
    already-solved scene graph.
    """

    type: ClassVar[str] = "chart-container"

    chart: Any
    dataset: Any
    width: float
    height: float
    graphics: "Element | None" = None
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None

    def __post_init__(self) -> None:
        if self.selectable is None:
            raise ValueError("chart-container requires a selectable")


@dataclass(frozen=True)
class Group:
    type: ClassVar[str] = "group"

    elements: tuple["Element", ...] = ()
    transform: RigidTransform | None = None
    key: str | None = None
    style: Style | None = None
    data_datum: str | None = None
    selectable: Selectable | None = None


Element = Union[Rect, Circle, Ellipse, Line, Polygon, Path, Text, TextOnPath, Image, ChartContainer, Group]
ShapeElement = Union[Rect, Circle, Ellipse, Line, Polygon, Path]

ELEMENT_TYPES: dict[str, type] = {
    cls.type: cls
    for cls in (Rect, Circle, Ellipse, Line, Polygon, Path, Text, TextOnPath, Image, ChartContainer, Group)
}
