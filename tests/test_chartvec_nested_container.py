from __future__ import annotations

import unittest

from chartvec_core.errors import RowRemapError
from chartvec_core.identity import IdentityService
from chartvec_core.render.nested import NestedSelection, convert_event_handler, remap_row_indices
from chartvec_core.render.renderer import SceneRenderer
from chartvec_core.render.svg import SvgNode
from chartvec_ui.controls.interaction import ModifierKeys, PointerEvent, dispatch_event
from chartvec_ui.options import RenderOptions
from chartvec_ui.scene import ChartContainer, PlotSegmentRef, Rect, Selectable


_PARENT_SEGMENT = PlotSegmentRef(table="parent_table", plot_segment_id="outer")
_INNER_SEGMENT = PlotSegmentRef(table="inner_table", plot_segment_id="inner")


def _container(graphics: object = None) -> ChartContainer:
    return ChartContainer(
        chart={"name": "sub"},
        dataset={"tables": []},
        width=120,
        height=80,
        graphics=graphics,
        selectable=Selectable(plot_segment=_PARENT_SEGMENT, glyph_index=7, row_indices=(10, 20, 30)),
    )


class RecordingSelection:
    def __init__(self) -> None:
        self.calls: list[tuple[str, list[int]]] = []

    def is_selected(self, table: str, row_indices: list[int]) -> bool:
        self.calls.append((table, list(row_indices)))
        return True


class RecordingChartRenderer:
    def __init__(self) -> None:
        self.kwargs: dict[str, object] = {}

    def render_chart(self, chart, dataset, **kwargs) -> SvgNode:
        self.kwargs = {"chart": chart, "dataset": dataset, **kwargs}
        return SvgNode("svg", key="ignored")


class RowRemapTests(unittest.TestCase):
    def test_rows_index_into_container_table(self) -> None:
        self.assertEqual(remap_row_indices(_container(), (2, 0)), (30, 10))

    def test_out_of_range_row_names_container(self) -> None:
        with self.assertRaisesRegex(RowRemapError, r"row 3 .*parent_table.*glyph 7"):
            remap_row_indices(_container(), (0, 3))
        with self.assertRaises(ValueError):
            NestedSelection(RecordingSelection(), _container()).is_selected("inner_table", [-1])

    def test_selection_is_asked_about_parent_rows(self) -> None:
        parent = RecordingSelection()
        self.assertTrue(NestedSelection(parent, _container()).is_selected("inner_table", [2, 0]))
        self.assertEqual(parent.calls, [("parent_table", [30, 10])])

    def test_converted_handler_rewrites_selectable(self) -> None:
        received: list[Selectable | None] = []
        handler = convert_event_handler(lambda s, m: received.append(s), _container())
        handler(Selectable(plot_segment=_INNER_SEGMENT, glyph_index=3, row_indices=(1,)), ModifierKeys())
        self.assertEqual(received, [Selectable(plot_segment=_PARENT_SEGMENT, glyph_index=7, row_indices=(20,))])

    def test_converted_handler_maps_empty_hit_to_container(self) -> None:
        received: list[Selectable | None] = []
        container = _container()
        convert_event_handler(lambda s, m: received.append(s), container)(None, ModifierKeys())
        self.assertEqual(received, [container.selectable])

    def test_missing_handler_stays_missing(self) -> None:
        self.assertIsNone(convert_event_handler(None, _container()))


class DefaultContainerRenderingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.received: list[Selectable | None] = []
        inner = Rect(0, 0, 5, 5, selectable=Selectable(plot_segment=_INNER_SEGMENT, glyph_index=0, row_indices=(1,)))
        self.root = SceneRenderer(IdentityService()).render(
            _container(inner),
            RenderOptions(key="c0", on_click=lambda s, m: self.received.append(s)),
        )

    def test_renders_solved_graphics_inside_nested_group(self) -> None:
        self.assertEqual(self.root.tag, "g")
        self.assertEqual(self.root.class_list, ["nested-chart"])
        self.assertEqual(self.root.key, "c0")
        self.assertEqual(self.root.children[0].get("d"), "M 0,0 L 0,-5 L 5,-5 L 5,0 Z")

    def test_glyph_click_reports_parent_rows_once(self) -> None:
        leaf = self.root.children[0]
        dispatch_event(self.root.find_path(leaf), PointerEvent("click"))
        self.assertEqual(self.received, [Selectable(plot_segment=_PARENT_SEGMENT, glyph_index=7, row_indices=(20,))])

    def test_click_on_empty_area_reports_container(self) -> None:
        dispatch_event([self.root], PointerEvent("click"))
        self.assertEqual(self.received, [_container().selectable])

    def test_container_without_graphics_is_empty_group(self) -> None:
        node = SceneRenderer(IdentityService()).render(_container())
        self.assertEqual(node.children, [])


class DelegatedContainerRenderingTests(unittest.TestCase):
    def test_chart_component_renderer_receives_converted_context(self) -> None:
        chart_renderer = RecordingChartRenderer()
        parent = RecordingSelection()
        resolver = lambda url: url.upper()
        node = SceneRenderer(IdentityService()).render(
            _container(),
            RenderOptions(
                key="c1",
                chart_component_sync=True,
                external_resource_resolver=resolver,
                selection=parent,
                on_mouse_enter=lambda s, m: None,
                chart_component_renderer=chart_renderer,
            ),
        )
        self.assertEqual(node.tag, "svg")
        self.assertEqual(node.key, "c1")
        kwargs = chart_renderer.kwargs
        self.assertEqual(kwargs["chart"], {"name": "sub"})
        self.assertEqual((kwargs["width"], kwargs["height"]), (120, 80))
        self.assertTrue(kwargs["sync"])
        self.assertIsNone(kwargs["on_glyph_click"])
        self.assertIsNotNone(kwargs["on_glyph_mouse_enter"])
        kwargs["selection"].is_selected("inner_table", [0])
        self.assertEqual(parent.calls, [("parent_table", [10])])
        sub_options = kwargs["renderer_options"]
        self.assertIs(sub_options.external_resource_resolver, resolver)
        self.assertIs(sub_options.chart_component_renderer, chart_renderer)


if __name__ == "__main__":
    unittest.main()
