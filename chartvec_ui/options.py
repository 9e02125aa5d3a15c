from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol, Sequence

from chartvec_ui.controls.interaction import GraphicalElementEventHandler
from chartvec_ui.scene import Style

if TYPE_CHECKING:
    from chartvec_core.render.svg import SvgNode


class DataSelection(Protocol):
    """Selection query supplied by the host application."""

    def is_selected(self, table: str, row_indices: Sequence[int]) -> bool:
        ...


GlyphEventHandler = GraphicalElementEventHandler


class ChartComponentRenderer(Protocol):
    """Renders a complete nested sub-chart into an output node."""

    def render_chart(
        self,
        chart: Any,
        dataset: Any,
        *,
        width: float,
        height: float,
        sync: bool,
        selection: DataSelection | None,
        on_glyph_click: GlyphEventHandler | None,
        on_glyph_mouse_enter: GlyphEventHandler | None,
        on_glyph_mouse_leave: GlyphEventHandler | None,
        renderer_options: "RenderOptions",
    ) -> "SvgNode":
        ...


@dataclass(frozen=True)
class RenderOptions:
    """Per-call render configuration. Every field is optional."""

    no_style: bool = False
    style_override: Style | None = None
    class_name: str | None = None
    key: str | None = None
    chart_component_sync: bool = False
    external_resource_resolver: Callable[[str], str] | None = None
    on_click: GraphicalElementEventHandler | None = None
    on_mouse_enter: GraphicalElementEventHandler | None = None
    on_mouse_leave: GraphicalElementEventHandler | None = None
    selection: DataSelection | None = None
    chart_component_renderer: ChartComponentRenderer | None = None

    def child_options(self, key: str) -> "RenderOptions":
        """Options a group hands to its children: shared settings only."""

        return RenderOptions(
            key=key,
            chart_component_sync=self.chart_component_sync,
            external_resource_resolver=self.external_resource_resolver,
            on_click=self.on_click,
            on_mouse_enter=self.on_mouse_enter,
            on_mouse_leave=self.on_mouse_leave,
            selection=self.selection,
            chart_component_renderer=self.chart_component_renderer,
        )

    def resolve_resource(self, url: str) -> str:
        if self.external_resource_resolver is None:
            return url
        return self.external_resource_resolver(url)


DEFAULT_OPTIONS = RenderOptions()

_BOOL_OPTIONS = ("no_style", "chart_component_sync")
_STR_OPTIONS = ("class_name", "key")
_CALLABLE_OPTIONS = ("external_resource_resolver", "on_click", "on_mouse_enter", "on_mouse_leave")


def validate_render_options(overrides: Mapping[str, Any] | None = None) -> RenderOptions:
    """Validate and merge option overrides against the defaults."""

    known = {f.name for f in fields(RenderOptions)}
    raw: dict[str, Any] = {}
    if overrides:
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown render option: {key}")
            raw[key] = value

    for key in _BOOL_OPTIONS:
        if key in raw and not isinstance(raw[key], bool):
            raise ValueError(f"Option `{key}` must be a bool")
    for key in _STR_OPTIONS:
        if raw.get(key) is not None and not isinstance(raw[key], str):
            raise ValueError(f"Option `{key}` must be a string")
    for key in _CALLABLE_OPTIONS:
        if raw.get(key) is not None and not callable(raw[key]):
            raise ValueError(f"Option `{key}` must be callable")
    if raw.get("style_override") is not None and not isinstance(raw["style_override"], Style):
        raise ValueError("Option `style_override` must be a Style")
    selection = raw.get("selection")
    if selection is not None and not callable(getattr(selection, "is_selected", None)):
        raise ValueError("Option `selection` must provide is_selected(table, row_indices)")
    renderer = raw.get("chart_component_renderer")
    if renderer is not None and not callable(getattr(renderer, "render_chart", None)):
        raise ValueError("Option `chart_component_renderer` must provide render_chart(...)")

    return replace(DEFAULT_OPTIONS, **raw)
