from __future__ import annotations

import logging
from typing import Any, Mapping

from PIL import ImageColor

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


LOGGER = logging.getLogger(__name__)

_KNOWN_IMAGE_MODES = ("letterbox", "stretch")


def element_from_dict(payload: Mapping[str, object]) -> Element:
    """Build a scene-graph node from the solver's JSON form."""

    raw = _expect_mapping(payload, field_name="element")
    kind = raw.get("type")
    common = {
        "style": _parse_style(raw.get("style")),
        "data_datum": _optional_str(raw.get("data-datum")),
        "selectable": _parse_selectable(raw.get("selectable")),
    }
    if kind == "rect":
        return Rect(**_floats(raw, "x1", "y1", "x2", "y2"), **common)
    if kind == "circle":
        return Circle(**_floats(raw, "cx", "cy", "r"), **common)
    if kind == "ellipse":
        return Ellipse(**_floats(raw, "x1", "y1", "x2", "y2"), **common)
    if kind == "line":
        return Line(**_floats(raw, "x1", "y1", "x2", "y2"), **common)
    if kind == "polygon":
        points = _expect_list(raw.get("points", []), field_name="polygon.points")
        return Polygon(points=tuple(_parse_point(p) for p in points), **common)
    if kind == "path":
        return Path(cmds=_parse_commands(raw.get("cmds", []), field_name="path.cmds"), **common)
    if kind == "text":
        return Text(
            cx=float(raw["cx"]),
            cy=float(raw["cy"]),
            text=str(raw.get("text", "")),
            font_family=str(raw.get("fontFamily", "Arial")),
            font_size=float(raw.get("fontSize", 14.0)),
            **common,
        )
    if kind == "text-on-path":
        return TextOnPath(
            path_cmds=_parse_commands(raw.get("pathCmds", []), field_name="text-on-path.pathCmds"),
            text=str(raw.get("text", "")),
            font_family=str(raw.get("fontFamily", "Arial")),
            font_size=float(raw.get("fontSize", 14.0)),
            align=str(raw.get("align", "start")),
            **common,
        )
    if kind == "image":
        mode = _optional_str(raw.get("mode"))
        if mode is not None and mode not in _KNOWN_IMAGE_MODES:
            LOGGER.warning("image mode `%s` has no aspect-ratio mapping; rendering without one", mode)
        return Image(
            **_floats(raw, "x", "y", "width", "height"),
            src=str(raw["src"]),
            mode=mode,
            **common,
        )
    if kind == "chart-container":
        graphics_raw = raw.get("graphics")
        return ChartContainer(
            chart=raw.get("chart"),
            dataset=raw.get("dataset"),
            width=float(raw["width"]),
            height=float(raw["height"]),
            graphics=None if graphics_raw is None else element_from_dict(_expect_mapping(graphics_raw, field_name="graphics")),
            **common,
        )
    if kind == "group":
        children = _expect_list(raw.get("elements", []), field_name="group.elements")
        return Group(
            elements=tuple(element_from_dict(_expect_mapping(child, field_name="group.elements[]")) for child in children),
            transform=_parse_transform(raw.get("transform")),
            key=_optional_str(raw.get("key")),
            **common,
        )
    raise ValueError(f"unknown element type: {kind}")


def element_to_dict(element: Element) -> dict[str, object]:
    out: dict[str, object] = {"type": element.type}
    if isinstance(element, (Rect, Ellipse, Line)):
        out.update({"x1": element.x1, "y1": element.y1, "x2": element.x2, "y2": element.y2})
    elif isinstance(element, Circle):
        out.update({"cx": element.cx, "cy": element.cy, "r": element.r})
    elif isinstance(element, Polygon):
        out["points"] = [{"x": p.x, "y": p.y} for p in element.points]
    elif isinstance(element, Path):
        out["cmds"] = _commands_to_list(element.cmds)
    elif isinstance(element, Text):
        out.update(
            {
                "cx": element.cx,
                "cy": element.cy,
                "text": element.text,
                "fontFamily": element.font_family,
                "fontSize": element.font_size,
            }
        )
    elif isinstance(element, TextOnPath):
        out.update(
            {
                "pathCmds": _commands_to_list(element.path_cmds),
                "text": element.text,
                "fontFamily": element.font_family,
                "fontSize": element.font_size,
                "align": element.align,
            }
        )
    elif isinstance(element, Image):
        out.update(
            {
                "x": element.x,
                "y": element.y,
                "width": element.width,
                "height": element.height,
                "src": element.src,
                "mode": element.mode,
            }
        )
    elif isinstance(element, ChartContainer):
        out.update(
            {
                "chart": element.chart,
                "dataset": element.dataset,
                "width": element.width,
                "height": element.height,
                "graphics": None if element.graphics is None else element_to_dict(element.graphics),
            }
        )
    elif isinstance(element, Group):
        out.update(
            {
                "elements": [element_to_dict(child) for child in element.elements],
                "transform": (
                    None
                    if element.transform is None
                    else {"x": element.transform.x, "y": element.transform.y, "angle": element.transform.angle}
                ),
                "key": element.key,
            }
        )
    else:
        raise TypeError(f"not a scene-graph element: {type(element).__name__}")
    out["style"] = _style_to_dict(element.style)
    out["data-datum"] = element.data_datum
    out["selectable"] = _selectable_to_dict(element.selectable)
    return out


def validate_scene_payload(payload: Mapping[str, object]) -> Element:
    return element_from_dict(payload)


def default_scene_element_schema() -> dict[str, object]:
    return SCENE_ELEMENT_JSON_SCHEMA


def parse_color(raw: object) -> Color | None:
    """Accept `{"r", "g", "b"}` mappings or CSS color strings."""

    if raw is None:
        return None
    if isinstance(raw, Color):
        return raw
    if isinstance(raw, Mapping):
        return Color(float(raw["r"]), float(raw["g"]), float(raw["b"]))
    if isinstance(raw, str):
        rgb = ImageColor.getrgb(raw)
        return Color(float(rgb[0]), float(rgb[1]), float(rgb[2]))
    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        return Color(float(raw[0]), float(raw[1]), float(raw[2]))
    raise TypeError("color must be an {r, g, b} object, a CSS color string or an [r, g, b] triple")


def _expect_mapping(raw: object, *, field_name: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise TypeError(f"{field_name} must be an object")
    return raw


def _expect_list(raw: object, *, field_name: str) -> list[Any]:
    if not isinstance(raw, list):
        raise TypeError(f"{field_name} must be a list")
    return raw


def _optional_str(raw: object) -> str | None:
    return None if raw is None else str(raw)


def _optional_float(raw: object) -> float | None:
    return None if raw is None else float(raw)


def _floats(raw: Mapping[str, Any], *names: str) -> dict[str, float]:
    return {name: float(raw[name]) for name in names}


def _parse_point(raw: object) -> Point:
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Point(float(raw[0]), float(raw[1]))
    data = _expect_mapping(raw, field_name="polygon.points[]")
    return Point(float(data["x"]), float(data["y"]))


def _parse_commands(raw: object, *, field_name: str) -> tuple[PathCommand, ...]:
    items = _expect_list(raw, field_name=field_name)
    commands: list[PathCommand] = []
    for item in items:
        data = _expect_mapping(item, field_name=f"{field_name}[]")
        args = _expect_list(data.get("args", []), field_name=f"{field_name}[].args")
        commands.append(PathCommand(cmd=str(data["cmd"]), args=tuple(float(a) for a in args)))
    return tuple(commands)


def _commands_to_list(commands: tuple[PathCommand, ...]) -> list[dict[str, object]]:
    return [{"cmd": c.cmd, "args": list(c.args)} for c in commands]


def _parse_modifier(raw: object) -> NumberModifier | None:
    if raw is None:
        return None
    data = _expect_mapping(raw, field_name="style.colorFilter modifier")
    return NumberModifier(
        set=_optional_float(data.get("set")),
        multiply=_optional_float(data.get("multiply")),
        add=_optional_float(data.get("add")),
        pow=_optional_float(data.get("pow")),
    )


def _parse_style(raw: object) -> Style | None:
    if raw is None:
        return None
    data = _expect_mapping(raw, field_name="style")
    filter_raw = data.get("colorFilter")
    color_filter = None
    if filter_raw is not None:
        filter_data = _expect_mapping(filter_raw, field_name="style.colorFilter")
        color_filter = ColorFilter(
            saturation=_parse_modifier(filter_data.get("saturation")),
            lightness=_parse_modifier(filter_data.get("lightness")),
        )
    return Style(
        stroke_color=parse_color(data.get("strokeColor")),
        stroke_opacity=_optional_float(data.get("strokeOpacity")),
        stroke_width=_optional_float(data.get("strokeWidth")),
        stroke_linecap=_optional_str(data.get("strokeLinecap")),
        stroke_linejoin=_optional_str(data.get("strokeLinejoin")),
        fill_color=parse_color(data.get("fillColor")),
        fill_opacity=_optional_float(data.get("fillOpacity")),
        text_anchor=_optional_str(data.get("textAnchor")),
        opacity=_optional_float(data.get("opacity")),
        color_filter=color_filter,
    )


def _parse_selectable(raw: object) -> Selectable | None:
    if raw is None:
        return None
    data = _expect_mapping(raw, field_name="selectable")
    segment = _expect_mapping(data.get("plotSegment"), field_name="selectable.plotSegment")
    rows = _expect_list(data.get("rowIndices", []), field_name="selectable.rowIndices")
    return Selectable(
        plot_segment=PlotSegmentRef(
            table=str(segment["table"]),
            plot_segment_id=_optional_str(segment.get("_id")),
        ),
        glyph_index=int(data.get("glyphIndex", 0)),
        row_indices=tuple(int(i) for i in rows),
    )


def _parse_transform(raw: object) -> RigidTransform | None:
    if raw is None:
        return None
    data = _expect_mapping(raw, field_name="group.transform")
    return RigidTransform(
        x=float(data.get("x", 0.0)),
        y=float(data.get("y", 0.0)),
        angle=float(data.get("angle", 0.0)),
    )


def _color_to_dict(color: Color | None) -> dict[str, float] | None:
    if color is None:
        return None
    return {"r": color.r, "g": color.g, "b": color.b}


def _modifier_to_dict(modifier: NumberModifier | None) -> dict[str, float] | None:
    if modifier is None:
        return None
    out = {"set": modifier.set, "multiply": modifier.multiply, "add": modifier.add, "pow": modifier.pow}
    return {k: v for k, v in out.items() if v is not None}


def _style_to_dict(style: Style | None) -> dict[str, object] | None:
    if style is None:
        return None
    color_filter = None
    if style.color_filter is not None:
        color_filter = {
            "saturation": _modifier_to_dict(style.color_filter.saturation),
            "lightness": _modifier_to_dict(style.color_filter.lightness),
        }
    out = {
        "strokeColor": _color_to_dict(style.stroke_color),
        "strokeOpacity": style.stroke_opacity,
        "strokeWidth": style.stroke_width,
        "strokeLinecap": style.stroke_linecap,
        "strokeLinejoin": style.stroke_linejoin,
        "fillColor": _color_to_dict(style.fill_color),
        "fillOpacity": style.fill_opacity,
        "textAnchor": style.text_anchor,
        "opacity": style.opacity,
        "colorFilter": color_filter,
    }
    return {k: v for k, v in out.items() if v is not None}


def _selectable_to_dict(selectable: Selectable | None) -> dict[str, object] | None:
    if selectable is None:
        return None
    return {
        "plotSegment": {
            "table": selectable.plot_segment.table,
            "_id": selectable.plot_segment.plot_segment_id,
        },
        "glyphIndex": selectable.glyph_index,
        "rowIndices": list(selectable.row_indices),
    }


_NUMBER = {"type": "number"}
_COMMANDS = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["cmd", "args"],
        "properties": {
            "cmd": {"type": "string", "enum": ["M", "L", "C", "Q", "A", "Z"]},
            "args": {"type": "array", "items": _NUMBER},
        },
        "additionalProperties": False,
    },
}

SCENE_ELEMENT_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://chartvec.dev/schemas/scene.element.schema.json",
    "title": "chartvec scene-graph element",
    "$ref": "#/$defs/element",
    "$defs": {
        "color": {
            "oneOf": [
                {
                    "type": "object",
                    "required": ["r", "g", "b"],
                    "properties": {"r": _NUMBER, "g": _NUMBER, "b": _NUMBER},
                },
                {"type": "string", "minLength": 1},
            ]
        },
        "modifier": {
            "type": ["object", "null"],
            "properties": {"set": _NUMBER, "multiply": _NUMBER, "add": _NUMBER, "pow": _NUMBER},
            "additionalProperties": False,
        },
        "style": {
            "type": ["object", "null"],
            "properties": {
                "strokeColor": {"$ref": "#/$defs/color"},
                "strokeOpacity": {"type": "number", "minimum": 0, "maximum": 1},
                "strokeWidth": {"type": "number", "minimum": 0},
                "strokeLinecap": {"type": "string", "enum": ["butt", "round", "square"]},
                "strokeLinejoin": {"type": "string", "enum": ["bevel", "miter", "round"]},
                "fillColor": {"$ref": "#/$defs/color"},
                "fillOpacity": {"type": "number", "minimum": 0, "maximum": 1},
                "textAnchor": {"type": "string", "enum": ["start", "middle", "end"]},
                "opacity": {"type": "number", "minimum": 0, "maximum": 1},
                "colorFilter": {
                    "type": ["object", "null"],
                    "properties": {
                        "saturation": {"$ref": "#/$defs/modifier"},
                        "lightness": {"$ref": "#/$defs/modifier"},
                    },
                    "additionalProperties": False,
                },
            },
        },
        "selectable": {
            "type": ["object", "null"],
            "required": ["plotSegment"],
            "properties": {
                "plotSegment": {
                    "type": "object",
                    "required": ["table"],
                    "properties": {"table": {"type": "string"}, "_id": {"type": ["string", "null"]}},
                },
                "glyphIndex": {"type": "integer", "minimum": 0},
                "rowIndices": {"type": "array", "items": {"type": "integer", "minimum": 0}},
            },
        },
        "element": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {
                    "type": "string",
                    "enum": [
                        "rect",
                        "circle",
                        "ellipse",
                        "line",
                        "polygon",
                        "path",
                        "text",
                        "text-on-path",
                        "image",
                        "chart-container",
                        "group",
                    ],
                },
                "style": {"$ref": "#/$defs/style"},
                "data-datum": {"type": ["string", "null"]},
                "selectable": {"$ref": "#/$defs/selectable"},
                "x1": _NUMBER,
                "y1": _NUMBER,
                "x2": _NUMBER,
                "y2": _NUMBER,
                "cx": _NUMBER,
                "cy": _NUMBER,
                "r": {"type": "number", "minimum": 0},
                "x": _NUMBER,
                "y": _NUMBER,
                "width": {"type": "number", "minimum": 0},
                "height": {"type": "number", "minimum": 0},
                "points": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["x", "y"],
                        "properties": {"x": _NUMBER, "y": _NUMBER},
                    },
                },
                "cmds": _COMMANDS,
                "pathCmds": _COMMANDS,
                "text": {"type": "string"},
                "fontFamily": {"type": "string"},
                "fontSize": {"type": "number", "exclusiveMinimum": 0},
                "align": {"type": "string", "enum": ["start", "middle", "end"]},
                "src": {"type": "string"},
                "mode": {"type": ["string", "null"]},
                "chart": {},
                "dataset": {},
                "graphics": {"oneOf": [{"$ref": "#/$defs/element"}, {"type": "null"}]},
                "elements": {"type": "array", "items": {"$ref": "#/$defs/element"}},
                "transform": {
                    "type": ["object", "null"],
                    "properties": {"x": _NUMBER, "y": _NUMBER, "angle": _NUMBER},
                    "additionalProperties": False,
                },
                "key": {"type": ["string", "null"]},
            },
        },
    },
}
