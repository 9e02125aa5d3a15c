from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional
import xml.etree.ElementTree as ET

from chartvec_ui.controls.interaction import Listener
from chartvec_ui.scene import RigidTransform


SVG_NUMBER_DIGITS = 8
ANGLE_EPSILON = 1e-7
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("xlink", XLINK_NS)

AttrValue = Optional[object]


def to_svg_number(value: float) -> str:
    """Fixed-precision number text with trailing zeros trimmed."""

    text = f"{float(value):.{SVG_NUMBER_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def render_transform(transform: RigidTransform | None) -> str | None:
    if transform is None:
        return None
    translate = f"translate({to_svg_number(transform.x)},{to_svg_number(-transform.y)})"
    if abs(transform.angle) < ANGLE_EPSILON:
        return translate
    return f"{translate} rotate({to_svg_number(-transform.angle)})"


@dataclass
class SvgNode:
    """One node of the rendered vector markup tree.

    `attrs` with a None value are not emitted. `listeners` are kept on the
    node for the host to dispatch and never serialized.
    """

    tag: str
    attrs: dict[str, AttrValue] = field(default_factory=dict)
    style: dict[str, object] = field(default_factory=dict)
    children: list["SvgNode"] = field(default_factory=list)
    text: str | None = None
    key: str | None = None
    listeners: dict[str, Listener] = field(default_factory=dict)

    def get(self, name: str) -> AttrValue:
        return self.attrs.get(name)

    @property
    def class_list(self) -> list[str]:
        value = self.attrs.get("class")
        return str(value).split() if value else []

    def iter(self, tag: str | None = None) -> Iterator["SvgNode"]:
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            yield from child.iter(tag)

    def find_path(self, target: "SvgNode") -> list["SvgNode"] | None:
        """Ancestor chain from this node down to `target`, both included."""

        if self is target:
            return [self]
        for child in self.children:
            found = child.find_path(target)
            if found is not None:
                return [self, *found]
        return None

    def to_element(self) -> ET.Element:
        elem = ET.Element(self.tag, _serialize_attrs(self.attrs, self.style))
        if self.text is not None:
            elem.text = self.text
        for child in self.children:
            elem.append(child.to_element())
        return elem

    def to_markup(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")


def style_to_text(style: Mapping[str, object]) -> str:
    return ";".join(f"{name}:{_format_value(value)}" for name, value in style.items() if value is not None)


def _serialize_attrs(attrs: Mapping[str, AttrValue], style: Mapping[str, object]) -> dict[str, str]:
    out: dict[str, str] = {}
    for name, value in attrs.items():
        if value is None:
            continue
        if name.startswith("xlink:"):
            name = f"{{{XLINK_NS}}}{name[len('xlink:'):]}"
        out[name] = _format_value(value)
    if style:
        out["style"] = style_to_text(style)
    return out


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return to_svg_number(value)
    return str(value)
