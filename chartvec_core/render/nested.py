from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Sequence

from chartvec_ui.controls.interaction import GraphicalElementEventHandler, ModifierKeys, route_events
from chartvec_ui.options import DataSelection, RenderOptions
from chartvec_ui.scene import ChartContainer, Element, Selectable

from ..errors import RowRemapError
from .svg import SvgNode


LOGGER = logging.getLogger(__name__)

SubtreeRenderer = Callable[[Element, RenderOptions], "SvgNode | None"]


def remap_row_indices(container: ChartContainer, row_indices: Sequence[int]) -> tuple[int, ...]:
    """Translate sub-chart row indices into the parent table's row indices."""

    table = container.selectable.row_indices
    remapped: list[int] = []
    for index in row_indices:
        if not 0 <= index < len(table):
            raise RowRemapError(
                f"row {index} is outside nested chart (table `{container.selectable.plot_segment.table}`, "
                f"glyph {container.selectable.glyph_index}) with {len(table)} rows"
            )
        remapped.append(table[index])
    return tuple(remapped)


@dataclass(frozen=True)
class NestedSelection:
    """Selection query seen from inside a nested chart.

    The sub-chart's table name is ignored: rows always resolve against the
    container's plot-segment table.
    """

    parent: DataSelection
    container: ChartContainer

    def is_selected(self, table: str, row_indices: Sequence[int]) -> bool:
        parent_rows = remap_row_indices(self.container, row_indices)
        return self.parent.is_selected(self.container.selectable.plot_segment.table, list(parent_rows))


def convert_event_handler(
    handler: GraphicalElementEventHandler | None,
    container: ChartContainer,
) -> GraphicalElementEventHandler | None:
    if handler is None:
        return None

    def _converted(selectable: Selectable | None, modifiers: ModifierKeys) -> object:
        if selectable is None:
            # Nothing inside the sub-chart was hit: the container itself is the target.
            return handler(container.selectable, modifiers)
        return handler(
            Selectable(
                plot_segment=container.selectable.plot_segment,
                glyph_index=container.selectable.glyph_index,
                row_indices=remap_row_indices(container, selectable.row_indices),
            ),
            modifiers,
        )

    return _converted


def render_chart_container(
    element: ChartContainer,
    options: RenderOptions,
    render_subtree: SubtreeRenderer,
) -> SvgNode:
    selection = NestedSelection(options.selection, element) if options.selection is not None else None
    on_click = convert_event_handler(options.on_click, element)
    on_mouse_enter = convert_event_handler(options.on_mouse_enter, element)
    on_mouse_leave = convert_event_handler(options.on_mouse_leave, element)
    sub_options = RenderOptions(
        chart_component_sync=options.chart_component_sync,
        external_resource_resolver=options.external_resource_resolver,
        on_click=on_click,
        on_mouse_enter=on_mouse_enter,
        on_mouse_leave=on_mouse_leave,
        selection=selection,
        chart_component_renderer=options.chart_component_renderer,
    )

    if options.chart_component_renderer is not None:
        LOGGER.debug("delegating nested chart (%sx%s) to chart component renderer", element.width, element.height)
        node = options.chart_component_renderer.render_chart(
            element.chart,
            element.dataset,
            width=element.width,
            height=element.height,
            sync=options.chart_component_sync,
            selection=selection,
            on_glyph_click=on_click,
            on_glyph_mouse_enter=on_mouse_enter,
            on_glyph_mouse_leave=on_mouse_leave,
            renderer_options=sub_options,
        )
        node.key = options.key
        return node

    children: list[SvgNode] = []
    if element.graphics is not None:
        child = render_subtree(element.graphics, sub_options)
        if child is not None:
            children.append(child)
    # Root listeners fire only when no glyph inside stopped the event first.
    return SvgNode(
        "g",
        attrs={"class": "nested-chart"},
        children=children,
        key=options.key,
        listeners=route_events(
            None,
            on_click=on_click,
            on_mouse_enter=on_mouse_enter,
            on_mouse_leave=on_mouse_leave,
        ),
    )
