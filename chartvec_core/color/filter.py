from __future__ import annotations

import math

import numpy as np

from chartvec_ui.scene import Color, ColorFilter, NumberModifier

from .lab import lab_to_srgb, srgb_to_lab


# Chroma below this is conversion noise on a gray input.
ACHROMATIC_EPSILON = 1e-9


def modify_number(value: float, modifier: NumberModifier) -> float:
    """Apply `set`, or else multiply -> add -> pow, skipping absent steps.

    The power step never raises: `0 ** -n` is inf and a negative base with a
    fractional exponent is nan.
    """

    if modifier.set is not None:
        return modifier.set
    if modifier.multiply is not None:
        value *= modifier.multiply
    if modifier.add is not None:
        value += modifier.add
    if modifier.pow is not None:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            value = float(np.power(np.float64(value), np.float64(modifier.pow)))
    return value


def apply_color_filter(color: Color, color_filter: ColorFilter | None) -> Color:
    """Adjust saturation and lightness of `color` in L*a*b* space.

    Saturation modifies chroma `sqrt(a^2 + b^2)` and rescales a, b; a
    zero-chroma input has no hue, so a and b stay 0. Lightness is modified on
    the [0, 1] scale. Output channels are clamped above at 255; channels the
    modifiers drove to nan come out as 0.
    """

    if color_filter is None:
        return color
    lightness, a, b = (float(v) for v in srgb_to_lab((color.r, color.g, color.b)))
    if color_filter.saturation is not None:
        chroma = math.sqrt(a * a + b * b)
        if chroma < ACHROMATIC_EPSILON:
            a = 0.0
            b = 0.0
        else:
            scaled = modify_number(chroma, color_filter.saturation)
            a *= scaled / chroma
            b *= scaled / chroma
    if color_filter.lightness is not None:
        lightness = modify_number(lightness / 100.0, color_filter.lightness) * 100.0
    with np.errstate(invalid="ignore", over="ignore"):
        rgb = lab_to_srgb((lightness, a, b))
    rgb = np.nan_to_num(rgb, nan=0.0, posinf=255.0, neginf=0.0)
    r, g, b_out = (float(v) for v in np.minimum(rgb, 255.0))
    return Color(r, g, b_out)


def desaturate(color: Color, amount: float) -> Color:
    """Blend `color` toward its luminance by `amount` (0 keeps it, 1 is gray).

    Standalone tone adjustment; `apply_color_filter` does not use it.
    """

    luminance = 0.3 * color.r + 0.6 * color.g + 0.1 * color.b
    return Color(
        min(color.r + amount * (luminance - color.r), 255.0),
        min(color.g + amount * (luminance - color.g), 255.0),
        min(color.b + amount * (luminance - color.b), 255.0),
    )


def render_color(color: Color | None, color_filter: ColorFilter | None = None) -> str:
    if color is None:
        return "rgb(0,0,0)"
    if color_filter is not None:
        color = apply_color_filter(color, color_filter)
    return f"rgb({_format_channel(color.r)},{_format_channel(color.g)},{_format_channel(color.b)})"


def _format_channel(value: float) -> str:
    # Half away from zero; never prints "-0".
    rounded = int(math.floor(abs(value) + 0.5))
    if value < 0 and rounded != 0:
        return f"-{rounded}"
    return str(rounded)
