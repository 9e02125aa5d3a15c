from __future__ import annotations

from dataclasses import dataclass
import logging

from chartvec_ui.controls.interaction import Listener, route_events
from chartvec_ui.options import DEFAULT_OPTIONS, RenderOptions
from chartvec_ui.scene import (
    ChartContainer,
    Circle,
    Element,
    Ellipse,
    Group,
    Image,
    Line,
    Path,
    Polygon,
    Rect,
    Text,
    TextOnPath,
)

from ..errors import UnsupportedElementError
from ..identity import DatumDescriptor, IdentityService, default_identity, get_element_class_type, parse_datum
from .nested import render_chart_container
from .path import element_path_commands, render_svg_path
from .style import render_style
from .svg import SvgNode, render_transform, to_svg_number


LOGGER = logging.getLogger(__name__)

_SHAPES = (Rect, Circle, Ellipse, Line, Polygon, Path)
_ELEMENTS = (*_SHAPES, Text, TextOnPath, Image, ChartContainer, Group)
_ASPECT_MODES = {"letterbox": "meet", "stretch": "none"}
_START_OFFSETS = {"start": "0%", "middle": "50%", "end": "100%"}


@dataclass
class TextOnPathInstance:
    """A mounted text-on-path output; owns the id of its reference path."""

    path_id: str

    def render(self, element: TextOnPath, style: dict[str, object], key: str | None) -> SvgNode:
        reference = SvgNode(
            "path",
            attrs={"id": self.path_id, "fill": "none", "stroke": "red", "d": render_svg_path(element.path_cmds)},
        )
        text_path = SvgNode(
            "textPath",
            attrs={"href": f"#{self.path_id}", "startOffset": _START_OFFSETS.get(element.align, "100%")},
            text=element.text,
        )
        return SvgNode(
            "g",
            key=key,
            children=[
                SvgNode("defs", children=[reference]),
                SvgNode("text", style={**style, "text-anchor": element.align}, children=[text_path]),
            ],
        )


class SceneRenderer:
    """Renders scene-graph trees into `SvgNode` trees.

    Mark ids come from `identity`; text-on-path instances are keyed by their
    position in the tree and live as long as a render pass reaches them.
    """

    def __init__(self, identity: IdentityService | None = None) -> None:
        self.identity = identity if identity is not None else IdentityService()
        self._mounted: dict[str, TextOnPathInstance] = {}
        self._visited: set[str] = set()

    @property
    def mounted_count(self) -> int:
        return len(self._mounted)

    def render(self, element: Element | None, options: RenderOptions | None = None) -> SvgNode | None:
        options = options or DEFAULT_OPTIONS
        self._visited = set()
        try:
            return self._render(element, options, options.key or "")
        finally:
            self._unmount_unvisited()

    def render_markup(self, element: Element | None, options: RenderOptions | None = None) -> str:
        node = self.render(element, options)
        return "" if node is None else node.to_markup()

    def unmount_all(self) -> None:
        self._visited = set()
        self._unmount_unvisited()

    def _render(self, element: Element | None, options: RenderOptions, position: str) -> SvgNode | None:
        if element is None:
            return None
        if not isinstance(element, _ELEMENTS):
            raise UnsupportedElementError(f"unsupported scene-graph element: {type(element).__name__}")

        if options.no_style:
            style: dict[str, object] = {}
        else:
            base = options.style_override if options.style_override is not None else element.style
            style = render_style(base)

        listeners: dict[str, Listener] = {}
        if element.selectable is not None:
            style["cursor"] = "pointer"
            style["pointer-events"] = "all"
            listeners = route_events(
                element.selectable,
                on_click=options.on_click,
                on_mouse_enter=options.on_mouse_enter,
                on_mouse_leave=options.on_mouse_leave,
            )

        descriptor = parse_datum(element.data_datum)

        if isinstance(element, _SHAPES):
            return SvgNode(
                "path",
                attrs={
                    "id": self.identity.mark_id(descriptor),
                    "class": self._class_name(options, element, descriptor),
                    "d": render_svg_path(element_path_commands(element)),
                    "data-datum": element.data_datum or None,
                },
                style=style,
                key=options.key,
                listeners=listeners,
            )
        if isinstance(element, Text):
            return self._render_text(element, options, style, listeners, descriptor)
        if isinstance(element, TextOnPath):
            style["font-family"] = element.font_family
            style["font-size"] = f"{to_svg_number(element.font_size)}px"
            return self._mount_text_on_path(position).render(element, style, options.key)
        if isinstance(element, Image):
            return SvgNode(
                "image",
                attrs={
                    "id": self.identity.mark_id(descriptor),
                    "class": self._class_name(options, element, descriptor),
                    "preserveAspectRatio": _ASPECT_MODES.get(element.mode or ""),
                    "xlink:href": options.resolve_resource(element.src),
                    "x": element.x,
                    # Images anchor at their top-left corner in output space.
                    "y": -element.y - element.height,
                    "width": element.width,
                    "height": element.height,
                    "data-datum": element.data_datum or None,
                },
                style=style,
                key=options.key,
                listeners=listeners,
            )
        if isinstance(element, ChartContainer):
            return render_chart_container(
                element,
                options,
                lambda child, child_options: self._render(child, child_options, f"{position}/nested"),
            )
        if isinstance(element, Group):
            return self._render_group(element, options, listeners, descriptor, position)
        raise UnsupportedElementError(f"unsupported scene-graph element: {type(element).__name__}")

    def _render_text(
        self,
        element: Text,
        options: RenderOptions,
        style: dict[str, object],
        listeners: dict[str, Listener],
        descriptor: DatumDescriptor,
    ) -> SvgNode:
        style["font-family"] = element.font_family
        style["font-size"] = f"{to_svg_number(element.font_size)}px"

        def text_node(text_style: dict[str, object], key: str | None) -> SvgNode:
            return SvgNode(
                "text",
                attrs={
                    "id": self.identity.mark_id(descriptor),
                    "class": self._class_name(options, element, descriptor),
                    "x": element.cx,
                    "y": -element.cy,
                    "data-datum": element.data_datum or None,
                },
                style=text_style,
                text=element.text,
                key=key,
                listeners=listeners,
            )

        stroke = style.get("stroke", "none")
        if stroke == "none":
            return text_node(style, options.key)
        # SVG text has no stroke-only pass: paint an outline copy in the
        # stroke color underneath the filled text.
        outline = {**style, "fill": stroke, "stroke": "none"}
        filled = {**style, "stroke": "none"}
        return SvgNode("g", key=options.key, children=[text_node(outline, None), text_node(filled, None)])

    def _render_group(
        self,
        group: Group,
        options: RenderOptions,
        listeners: dict[str, Listener],
        descriptor: DatumDescriptor,
        position: str,
    ) -> SvgNode:
        opacity = group.style.opacity if group.style is not None and group.style.opacity is not None else 1
        datum = group.data_datum
        attrs = {
            "transform": render_transform(group.transform),
            "id": self.identity.mark_id(descriptor),
            "class": " ".join(get_element_class_type(descriptor)) or None,
            "data-datum": datum if datum and datum.startswith(("{", "[")) else None,
        }
        children: list[SvgNode] = []
        for index, child in enumerate(group.elements):
            key = f"m{index}"
            node = self._render(child, options.child_options(key), f"{position}/{key}")
            if node is not None:
                children.append(node)
        return SvgNode(
            "g",
            attrs=attrs,
            style={"opacity": opacity},
            children=children,
            key=group.key or options.key,
            listeners=listeners,
        )

    def _class_name(self, options: RenderOptions, element: Element, descriptor: DatumDescriptor) -> str | None:
        parts = [options.class_name] if options.class_name else []
        if element.data_datum:
            parts.extend(get_element_class_type(descriptor))
        return " ".join(parts) or None

    def _mount_text_on_path(self, position: str) -> TextOnPathInstance:
        self._visited.add(position)
        instance = self._mounted.get(position)
        if instance is None:
            instance = TextOnPathInstance(path_id=self.identity.unique_id())
            self._mounted[position] = instance
            LOGGER.debug("mounted text-on-path at `%s` (%s)", position, instance.path_id)
        return instance

    def _unmount_unvisited(self) -> None:
        for position in [p for p in self._mounted if p not in self._visited]:
            instance = self._mounted.pop(position)
            self.identity.release_id(instance.path_id)
            LOGGER.debug("unmounted text-on-path at `%s` (%s)", position, instance.path_id)


def render_graphical_element_svg(
    element: Element | None,
    options: RenderOptions | None = None,
    identity: IdentityService | None = None,
) -> SvgNode | None:
    """Render one element tree in a single pass.

    Uses the process-wide identity service unless `identity` is given.
    """

    renderer = SceneRenderer(identity if identity is not None else default_identity())
    return renderer.render(element, options)


class GraphicalElementDisplay:
    """Displays a single element with default options."""

    def __init__(self, element: Element, renderer: SceneRenderer | None = None) -> None:
        self.element = element
        self.renderer = renderer if renderer is not None else SceneRenderer(default_identity())

    def render(self) -> SvgNode | None:
        return self.renderer.render(self.element)

    def to_markup(self) -> str:
        return self.renderer.render_markup(self.element)
