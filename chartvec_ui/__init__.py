"""Scene-graph, options and interaction contracts for chartvec."""

from .controls.interaction import (
    GraphicalElementEventHandler,
    ModifierKeys,
    PointerEvent,
    dispatch_event,
    parse_pointer_event,
    route_events,
)
from .options import (
    ChartComponentRenderer,
    DataSelection,
    DEFAULT_OPTIONS,
    RenderOptions,
    validate_render_options,
)
from .scene import (
    ChartContainer,
    Circle,
    Color,
    ColorFilter,
    Element,
    Ellipse,
    Group,
    Image,
    Line,
    NumberModifier,
    Path,
    PathCommand,
    PlotSegmentRef,
    Point,
    Polygon,
    Rect,
    RigidTransform,
    Selectable,
    Style,
    Text,
    TextOnPath,
)
from .scene_ir import (
    default_scene_element_schema,
    element_from_dict,
    element_to_dict,
    parse_color,
    validate_scene_payload,
)

__all__ = [
    "ChartComponentRenderer",
    "ChartContainer",
    "Circle",
    "Color",
    "ColorFilter",
    "DEFAULT_OPTIONS",
    "DataSelection",
    "Element",
    "Ellipse",
    "GraphicalElementEventHandler",
    "Group",
    "Image",
    "Line",
    "ModifierKeys",
    "NumberModifier",
    "Path",
    "PathCommand",
    "PlotSegmentRef",
    "Point",
    "PointerEvent",
    "Polygon",
    "Rect",
    "RenderOptions",
    "RigidTransform",
    "Selectable",
    "Style",
    "Text",
    "TextOnPath",
    "default_scene_element_schema",
    "dispatch_event",
    "element_from_dict",
    "element_to_dict",
    "parse_color",
    "parse_pointer_event",
    "route_events",
    "validate_render_options",
    "validate_scene_payload",
]
