from __future__ import annotations

import unittest

from chartvec_ui.scene import (
    ChartContainer,
    Color,
    Group,
    Image,
    Polygon,
    Rect,
    Text,
    TextOnPath,
)
from chartvec_ui.scene_ir import (
    default_scene_element_schema,
    element_from_dict,
    element_to_dict,
    parse_color,
    validate_scene_payload,
)


class SceneLoaderTests(unittest.TestCase):
    def test_group_tree_loads_with_styles_and_selectables(self) -> None:
        element = element_from_dict(
            {
                "type": "group",
                "key": "root",
                "transform": {"x": 5, "y": 6, "angle": 0.5},
                "elements": [
                    {
                        "type": "rect",
                        "x1": 0,
                        "y1": 0,
                        "x2": 10,
                        "y2": 4,
                        "data-datum": '{"_TYPE": "bar"}',
                        "style": {
                            "fillColor": {"r": 10, "g": 20, "b": 30},
                            "strokeColor": "#ff0000",
                            "colorFilter": {"saturation": {"multiply": 0.5}},
                        },
                        "selectable": {
                            "plotSegment": {"table": "main", "_id": "seg1"},
                            "glyphIndex": 2,
                            "rowIndices": [4, 5],
                        },
                    },
                    {"type": "text", "cx": 1, "cy": 2, "text": "hi", "fontSize": 9},
                ],
            }
        )
        self.assertIsInstance(element, Group)
        self.assertEqual(element.key, "root")
        self.assertEqual(element.transform.angle, 0.5)
        rect, text = element.elements
        self.assertIsInstance(rect, Rect)
        self.assertEqual(rect.style.fill_color, Color(10, 20, 30))
        self.assertEqual(rect.style.stroke_color, Color(255, 0, 0))
        self.assertEqual(rect.style.color_filter.saturation.multiply, 0.5)
        self.assertEqual(rect.selectable.plot_segment.plot_segment_id, "seg1")
        self.assertEqual(rect.selectable.row_indices, (4, 5))
        self.assertIsInstance(text, Text)
        self.assertEqual(text.font_size, 9.0)
        self.assertEqual(text.font_family, "Arial")

    def test_round_trip_preserves_nested_structure(self) -> None:
        payload = {
            "type": "chart-container",
            "chart": {"id": "c"},
            "dataset": None,
            "width": 50,
            "height": 40,
            "graphics": {
                "type": "group",
                "elements": [
                    {"type": "polygon", "points": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]},
                    {
                        "type": "text-on-path",
                        "pathCmds": [{"cmd": "M", "args": [0, 0]}, {"cmd": "L", "args": [5, 0]}],
                        "text": "curve",
                        "align": "end",
                    },
                ],
            },
            "selectable": {"plotSegment": {"table": "t"}, "glyphIndex": 0, "rowIndices": [3]},
        }
        element = validate_scene_payload(payload)
        self.assertIsInstance(element, ChartContainer)
        polygon, label = element.graphics.elements
        self.assertIsInstance(polygon, Polygon)
        self.assertIsInstance(label, TextOnPath)
        self.assertEqual(label.path_cmds[1].args, (5.0, 0.0))
        self.assertEqual(element_from_dict(element_to_dict(element)), element)

    def test_unknown_image_mode_is_logged(self) -> None:
        with self.assertLogs("chartvec_ui.scene_ir", level="WARNING"):
            image = element_from_dict({"type": "image", "x": 0, "y": 0, "width": 1, "height": 1, "src": "a", "mode": "tile"})
        self.assertIsInstance(image, Image)
        self.assertEqual(image.mode, "tile")

    def test_rejects_unknown_type(self) -> None:
        with self.assertRaisesRegex(ValueError, "unknown element type"):
            element_from_dict({"type": "hexagon"})

    def test_rejects_malformed_structures(self) -> None:
        with self.assertRaisesRegex(TypeError, "must be a list"):
            element_from_dict({"type": "group", "elements": {"a": 1}})
        with self.assertRaisesRegex(TypeError, "must be an object"):
            element_from_dict({"type": "rect", "x1": 0, "y1": 0, "x2": 1, "y2": 1, "style": "red"})
        with self.assertRaises(ValueError):
            element_from_dict({"type": "path", "cmds": [{"cmd": "L", "args": [1]}]})

    def test_chart_container_requires_selectable(self) -> None:
        with self.assertRaisesRegex(ValueError, "selectable"):
            element_from_dict({"type": "chart-container", "width": 1, "height": 1})

    def test_parse_color_forms(self) -> None:
        self.assertIsNone(parse_color(None))
        self.assertEqual(parse_color("rgb(1, 2, 3)"), Color(1, 2, 3))
        self.assertEqual(parse_color("white"), Color(255, 255, 255))
        self.assertEqual(parse_color([4, 5, 6]), Color(4, 5, 6))
        with self.assertRaises(TypeError):
            parse_color(12)

    def test_schema_lists_every_element_type(self) -> None:
        schema = default_scene_element_schema()
        kinds = schema["$defs"]["element"]["properties"]["type"]["enum"]
        self.assertIn("chart-container", kinds)
        self.assertEqual(len(kinds), 11)


if __name__ == "__main__":
    unittest.main()
