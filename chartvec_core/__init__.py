"""Rendering core: scene graph in, SVG output tree out."""

from .color import apply_color_filter, desaturate, lab_to_srgb, modify_number, render_color, srgb_to_lab
from .errors import ChartvecError, PathCommandError, RowRemapError, UnsupportedElementError
from .identity import (
    DatumDescriptor,
    IdentityService,
    default_identity,
    get_element_class_type,
    mark_id,
    object_hash,
    parse_datum,
    reset_mark_id,
    unique_id,
    uuid,
)
from .render import (
    GraphicalElementDisplay,
    PathMaker,
    SceneRenderer,
    SvgNode,
    render_graphical_element_svg,
    render_style,
    render_svg_path,
    render_transform,
    to_svg_number,
)

__all__ = [
    "ChartvecError",
    "DatumDescriptor",
    "GraphicalElementDisplay",
    "IdentityService",
    "PathCommandError",
    "PathMaker",
    "RowRemapError",
    "SceneRenderer",
    "SvgNode",
    "UnsupportedElementError",
    "apply_color_filter",
    "default_identity",
    "desaturate",
    "get_element_class_type",
    "lab_to_srgb",
    "mark_id",
    "modify_number",
    "object_hash",
    "parse_datum",
    "render_color",
    "render_graphical_element_svg",
    "render_style",
    "render_svg_path",
    "render_transform",
    "reset_mark_id",
    "srgb_to_lab",
    "to_svg_number",
    "unique_id",
    "uuid",
]
