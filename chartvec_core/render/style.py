from __future__ import annotations

from chartvec_ui.scene import Style

from ..color.filter import render_color


def render_style(style: Style | None) -> dict[str, object]:
    """Resolve a style record into SVG presentation properties."""

    if style is None:
        return {}
    return {
        "stroke": render_color(style.stroke_color, style.color_filter) if style.stroke_color is not None else "none",
        "stroke-opacity": _or_default(style.stroke_opacity, 1),
        "stroke-width": _or_default(style.stroke_width, 1),
        "stroke-linecap": _or_default(style.stroke_linecap, "round"),
        "stroke-linejoin": _or_default(style.stroke_linejoin, "round"),
        "fill": render_color(style.fill_color, style.color_filter) if style.fill_color is not None else "none",
        "fill-opacity": _or_default(style.fill_opacity, 1),
        "text-anchor": _or_default(style.text_anchor, "start"),
        "opacity": _or_default(style.opacity, 1),
    }


def _or_default(value: object, default: object) -> object:
    return default if value is None else value
