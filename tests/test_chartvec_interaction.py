from __future__ import annotations

import unittest

from chartvec_core.identity import IdentityService
from chartvec_core.render.renderer import SceneRenderer
from chartvec_ui.controls.interaction import (
    ModifierKeys,
    PointerEvent,
    dispatch_event,
    parse_pointer_event,
    route_events,
)
from chartvec_ui.options import RenderOptions
from chartvec_ui.scene import Group, PlotSegmentRef, Rect, Selectable


def _selectable(glyph: int) -> Selectable:
    return Selectable(plot_segment=PlotSegmentRef(table="main", plot_segment_id="seg"), glyph_index=glyph, row_indices=(glyph,))


class ParsePointerEventTests(unittest.TestCase):
    def test_dom_style_modifiers(self) -> None:
        event = parse_pointer_event("click", {"shiftKey": True, "ctrlKey": False, "metaKey": True})
        self.assertEqual(event.event_type, "click")
        self.assertEqual(event.modifiers, ModifierKeys(shift_key=True, ctrl_key=False, meta_key=True))

    def test_snake_case_modifiers(self) -> None:
        event = parse_pointer_event("mouseenter", {"ctrl_key": 1})
        self.assertEqual(event.modifiers, ModifierKeys(ctrl_key=True))

    def test_rejects_unknown_type_or_payload(self) -> None:
        self.assertIsNone(parse_pointer_event("dblclick", {}))
        self.assertIsNone(parse_pointer_event("click", "shift"))


class RouteEventsTests(unittest.TestCase):
    def test_only_registered_handlers_get_listeners(self) -> None:
        listeners = route_events(_selectable(0), on_mouse_leave=lambda s, m: None)
        self.assertEqual(set(listeners), {"mouseleave"})
        self.assertEqual(route_events(_selectable(0)), {})

    def test_click_stops_propagation_and_forwards_selectable(self) -> None:
        calls: list[tuple[Selectable | None, ModifierKeys]] = []
        selectable = _selectable(4)
        listeners = route_events(selectable, on_click=lambda s, m: calls.append((s, m)))
        event = PointerEvent("click", ModifierKeys(shift_key=True))
        listeners["click"](event)
        self.assertTrue(event.propagation_stopped)
        self.assertEqual(calls, [(selectable, ModifierKeys(shift_key=True))])

    def test_hover_does_not_stop_propagation(self) -> None:
        listeners = route_events(_selectable(0), on_mouse_enter=lambda s, m: None)
        event = PointerEvent("mouseenter")
        listeners["mouseenter"](event)
        self.assertFalse(event.propagation_stopped)


class BubblingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[tuple[str, int | None]] = []
        options = RenderOptions(
            on_click=lambda s, m: self.calls.append(("click", None if s is None else s.glyph_index)),
            on_mouse_enter=lambda s, m: self.calls.append(("enter", None if s is None else s.glyph_index)),
        )
        tree = Group(elements=(Rect(0, 0, 1, 1, selectable=_selectable(2)),), selectable=_selectable(1))
        self.root = SceneRenderer(IdentityService()).render(tree, options)
        self.leaf = self.root.children[0]

    def test_click_reaches_innermost_only(self) -> None:
        invoked = dispatch_event(self.root.find_path(self.leaf), PointerEvent("click"))
        self.assertEqual(invoked, 1)
        self.assertEqual(self.calls, [("click", 2)])

    def test_hover_bubbles_to_every_ancestor(self) -> None:
        invoked = dispatch_event(self.root.find_path(self.leaf), PointerEvent("mouseenter"))
        self.assertEqual(invoked, 2)
        self.assertEqual(self.calls, [("enter", 2), ("enter", 1)])

    def test_event_without_listener_is_ignored(self) -> None:
        self.assertEqual(dispatch_event(self.root.find_path(self.leaf), PointerEvent("mouseleave")), 0)
        self.assertEqual(self.calls, [])


if __name__ == "__main__":
    unittest.main()
