"""Perceptual color adjustment for rendered styles."""

from .filter import apply_color_filter, desaturate, modify_number, render_color
from .lab import lab_to_srgb, srgb_to_lab

__all__ = [
    "apply_color_filter",
    "desaturate",
    "lab_to_srgb",
    "modify_number",
    "render_color",
    "srgb_to_lab",
]
