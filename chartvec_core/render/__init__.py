"""Scene-graph to SVG output tree rendering."""

from .nested import NestedSelection, convert_event_handler, remap_row_indices, render_chart_container
from .path import (
    PathMaker,
    circle_commands,
    element_path_commands,
    ellipse_commands,
    line_commands,
    polygon_commands,
    rect_commands,
    render_svg_path,
)
from .renderer import GraphicalElementDisplay, SceneRenderer, TextOnPathInstance, render_graphical_element_svg
from .style import render_style
from .svg import SVG_NUMBER_DIGITS, SvgNode, render_transform, style_to_text, to_svg_number

__all__ = [
    "GraphicalElementDisplay",
    "NestedSelection",
    "PathMaker",
    "SVG_NUMBER_DIGITS",
    "SceneRenderer",
    "SvgNode",
    "TextOnPathInstance",
    "circle_commands",
    "convert_event_handler",
    "element_path_commands",
    "ellipse_commands",
    "line_commands",
    "polygon_commands",
    "rect_commands",
    "remap_row_indices",
    "render_chart_container",
    "render_graphical_element_svg",
    "render_style",
    "render_svg_path",
    "render_transform",
    "style_to_text",
    "to_svg_number",
]
