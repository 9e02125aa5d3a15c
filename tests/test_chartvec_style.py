from __future__ import annotations

import unittest

from chartvec_core.render.style import render_style
from chartvec_ui.scene import Color, ColorFilter, NumberModifier, Style


class RenderStyleTests(unittest.TestCase):
    def test_missing_style_renders_nothing(self) -> None:
        self.assertEqual(render_style(None), {})

    def test_defaults(self) -> None:
        self.assertEqual(
            render_style(Style()),
            {
                "stroke": "none",
                "stroke-opacity": 1,
                "stroke-width": 1,
                "stroke-linecap": "round",
                "stroke-linejoin": "round",
                "fill": "none",
                "fill-opacity": 1,
                "text-anchor": "start",
                "opacity": 1,
            },
        )

    def test_explicit_values_override_defaults(self) -> None:
        style = render_style(
            Style(
                stroke_color=Color(255, 0, 0),
                stroke_width=2.5,
                stroke_linecap="butt",
                fill_color=Color(0, 128, 255),
                fill_opacity=0.25,
                text_anchor="middle",
                opacity=0.5,
            )
        )
        self.assertEqual(style["stroke"], "rgb(255,0,0)")
        self.assertEqual(style["stroke-width"], 2.5)
        self.assertEqual(style["stroke-linecap"], "butt")
        self.assertEqual(style["fill"], "rgb(0,128,255)")
        self.assertEqual(style["fill-opacity"], 0.25)
        self.assertEqual(style["text-anchor"], "middle")
        self.assertEqual(style["opacity"], 0.5)

    def test_color_filter_applies_to_stroke_and_fill(self) -> None:
        style = render_style(
            Style(
                stroke_color=Color(255, 0, 0),
                fill_color=Color(255, 0, 0),
                color_filter=ColorFilter(saturation=NumberModifier(set=0.0)),
            )
        )
        self.assertEqual(style["stroke"], "rgb(127,127,127)")
        self.assertEqual(style["fill"], "rgb(127,127,127)")

    def test_out_of_range_opacity_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "opacity"):
            Style(opacity=1.5)


if __name__ == "__main__":
    unittest.main()
