from __future__ import annotations

import numpy as np


# sRGB primaries, D65 white point.
_SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ],
    dtype=np.float64,
)
_XYZ_TO_SRGB = np.linalg.inv(_SRGB_TO_XYZ)
_D65_WHITE = _SRGB_TO_XYZ.sum(axis=1)

_EPSILON = 216.0 / 24389.0
_KAPPA = 24389.0 / 27.0


def srgb_to_lab(rgb: object) -> np.ndarray:
    """Convert device sRGB (channels in [0, 255]) to CIE L*a*b*.

    Accepts any array-like whose last axis has length 3. Out-of-gamut input
    (negative or > 255 channels) is converted without clamping.
    """

    values = np.asarray(rgb, dtype=np.float64)
    if values.shape[-1:] != (3,):
        raise ValueError("rgb input must have a trailing axis of length 3")
    linear = _linearize(values / 255.0)
    xyz = linear @ _SRGB_TO_XYZ.T
    ratio = xyz / _D65_WHITE
    f = np.where(ratio > _EPSILON, np.cbrt(ratio), (_KAPPA * ratio + 16.0) / 116.0)
    lightness = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])
    return np.stack([lightness, a, b], axis=-1)


def lab_to_srgb(lab: object) -> np.ndarray:
    """Inverse of `srgb_to_lab`; returns unclamped device channels."""

    values = np.asarray(lab, dtype=np.float64)
    if values.shape[-1:] != (3,):
        raise ValueError("lab input must have a trailing axis of length 3")
    lightness = values[..., 0]
    fy = (lightness + 16.0) / 116.0
    fx = values[..., 1] / 500.0 + fy
    fz = fy - values[..., 2] / 200.0
    xr = _f_inverse(fx)
    yr = np.where(lightness > _KAPPA * _EPSILON, fy**3, lightness / _KAPPA)
    zr = _f_inverse(fz)
    xyz = np.stack([xr, yr, zr], axis=-1) * _D65_WHITE
    linear = xyz @ _XYZ_TO_SRGB.T
    return _delinearize(linear) * 255.0


def _f_inverse(t: np.ndarray) -> np.ndarray:
    cubed = t**3
    return np.where(cubed > _EPSILON, cubed, (116.0 * t - 16.0) / _KAPPA)


def _linearize(channel: np.ndarray) -> np.ndarray:
    magnitude = np.abs(channel)
    linear = np.where(magnitude <= 0.04045, magnitude / 12.92, ((magnitude + 0.055) / 1.055) ** 2.4)
    return np.sign(channel) * linear


def _delinearize(channel: np.ndarray) -> np.ndarray:
    magnitude = np.abs(channel)
    encoded = np.where(magnitude <= 0.0031308, magnitude * 12.92, 1.055 * magnitude ** (1.0 / 2.4) - 0.055)
    return np.sign(channel) * encoded
