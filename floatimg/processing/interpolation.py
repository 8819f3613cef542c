"""
Interpolation primitives for resampling.

Pure numeric functions with no image dependency. Arithmetic is carried out in
float32, matching the precision of image planes. Every function accepts
scalars or numpy arrays (broadcast elementwise), so a resampler can evaluate
a whole plane in one call.

Naming: f0 is short for f(x0), f02 for f(x0, y2) and so on.
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from floatimg.constants import SPACING_REL_TOLERANCE
from floatimg.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def _f32(value):
    return np.asarray(value, dtype=np.float32)


def _finish(result):
    return result[()] if np.ndim(result) == 0 else result


def _check_finite(name: str, *positions) -> None:
    # NaN compares False against everything and would slip through the ordering checks
    if not all(np.all(np.isfinite(p)) for p in positions):
        raise InvalidArgumentError(f"{name} positions must be finite, got {positions}")


def _check_ordered(x0, x1, x2, name: str) -> None:
    _check_finite(name, x0, x1, x2)
    if np.any(x0 > x1) or np.any(x1 > x2) or np.any(x0 >= x2):
        raise InvalidArgumentError(
            f"{name} requires {name}0 <= {name}1 <= {name}2 and {name}0 < {name}2, "
            f"got {x0}, {x1}, {x2}"
        )


def _check_equally_spaced(x0, x1, x2, x3, x4) -> None:
    _check_finite("Cubic interpolation", x0, x1, x2, x3, x4)
    h01, h13, h34 = x1 - x0, x3 - x1, x4 - x3
    if np.any(h01 <= 0) or np.any(h13 <= 0) or np.any(h34 <= 0):
        raise InvalidArgumentError(
            f"Cubic interpolation requires x0 < x1 < x3 < x4, got {x0}, {x1}, {x3}, {x4}"
        )
    same = (np.isclose(h01, h13, rtol=SPACING_REL_TOLERANCE, atol=0)
            & np.isclose(h34, h13, rtol=SPACING_REL_TOLERANCE, atol=0))
    if not np.all(same):
        raise InvalidArgumentError(
            f"Cubic interpolation requires equally spaced x0, x1, x3, x4, got {x0}, {x1}, {x3}, {x4}"
        )
    if np.any(x2 < x1) or np.any(x2 > x3):
        raise InvalidArgumentError(f"Cubic interpolation requires x1 <= x2 <= x3, got {x1}, {x2}, {x3}")


def lerp(x0, x1, x2, f0, f2):
    """
    Linearly interpolate between (x0, f0) and (x2, f2), returning f1.

    Each endpoint is weighted by the distance to the other one:
    f1 = (f0*(x2-x1) + f2*(x1-x0)) / (x2-x0).

    Returns f0 exactly at x1 == x0 and f2 exactly at x1 == x2.

    Raises:
        InvalidArgumentError: Unless x0 <= x1 <= x2 and x0 < x2, all finite
    """
    x0, x1, x2, f0, f2 = (_f32(v) for v in (x0, x1, x2, f0, f2))
    _check_ordered(x0, x1, x2, "x")
    res = (f0 * (x2 - x1) + f2 * (x1 - x0)) / (x2 - x0)
    # f*d/d does not round-trip in float32
    res = np.where(x1 == x0, f0, np.where(x1 == x2, f2, res)).astype(np.float32)
    return _finish(res)


def bilerp(x0, x1, x2, y0, y1, y2, f00, f02, f20, f22):
    """
    Bilinearly interpolate the corners (x0,y0), (x0,y2), (x2,y0), (x2,y2),
    returning f11, the value at (x1, y1).

    Interpolates along x at y0 and at y2, then along y between the two.
    """
    _check_ordered(_f32(y0), _f32(y1), _f32(y2), "y")
    f10 = lerp(x0, x1, x2, f00, f20)
    f12 = lerp(x0, x1, x2, f02, f22)
    return lerp(y0, y1, y2, f10, f12)


def cubic_interpolation(x0, x1, x2, x3, x4, f0, f1, f3, f4):
    """
    Interpolate x2 from four equally spaced samples by cubic convolution.

    Requires x0 < x1 <= x2 <= x3 < x4 with x4-x3 = x3-x1 = x1-x0 > 0.
    Uses the a = -1/2 cubic convolution kernel of R. Keys (1981), "Cubic
    convolution interpolation for digital image processing", IEEE Trans.
    Acoustics, Speech, and Signal Processing. With t = (x2-x1)/(x3-x1):

        f2 = f1 + t/2 * ((f3-f0) + t*((2f0-5f1+4f3-f4) + t*(3(f1-f3)-f0+f4)))

    Returns f1 exactly at t=0 and f3 exactly at t=1.
    """
    x0, x1, x2, x3, x4, f0, f1, f3, f4 = (
        _f32(v) for v in (x0, x1, x2, x3, x4, f0, f1, f3, f4)
    )
    _check_equally_spaced(x0, x1, x2, x3, x4)

    t = (x2 - x1) / (x3 - x1)

    res = 3 * (f1 - f3) - f0 + f4      # t^3 coefficient
    res = res * t
    res = res + (2 * f0 - 5 * f1 + 4 * f3 - f4)  # t^2
    res = res * t
    res = res + (f3 - f0)              # t
    res = res * (np.float32(0.5) * t)
    res = res + f1                     # constant
    res = np.where(x2 == x1, f1, np.where(x2 == x3, f3, res)).astype(np.float32)
    return _finish(res)


def bicubic_interpolation(xs: Sequence, ys: Sequence, samples: Sequence[Sequence]):
    """
    Interpolate the point (x2, y2) from a 4x4 grid of samples.

    Args:
        xs: (x0, x1, x2, x3, x4), same requirements as cubic_interpolation
        ys: (y0, y1, y2, y3, y4), likewise
        samples: 4x4 grid with samples[j][i] = f(x_i, y_j) for the sample
            positions (x0, x1, x3, x4) and (y0, y1, y3, y4)

    Returns:
        f22, the interpolated value at (x2, y2)
    """
    if len(xs) != 5 or len(ys) != 5:
        raise InvalidArgumentError(
            f"Bicubic interpolation needs 5 x and 5 y positions, got {len(xs)} and {len(ys)}"
        )
    if len(samples) != 4 or any(len(row) != 4 for row in samples):
        raise InvalidArgumentError("Bicubic interpolation needs a 4x4 grid of samples")

    # interpolate each row in the x-direction, then the results in the y-direction
    rows = [cubic_interpolation(*xs, *row) for row in samples]
    return cubic_interpolation(*ys, *rows)
