"""
Convolution kernels.

A kernel is a square matrix of weights with odd side length
diameter = 2*radius + 1, stored row-major as a flat float32 array.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from floatimg.core.config import get_default_config
from floatimg.core.exceptions import InvalidArgumentError, KernelShapeError

logger = logging.getLogger(__name__)


def _empty_weights(radius: int):
    """Build up an NxN matrix of zeros; returns (area, diameter, weights)."""
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)):
        raise KernelShapeError(f"radius must be an integer, got {type(radius).__name__}")
    if radius < 0:
        raise KernelShapeError(f"radius must be non-negative, got {radius}")
    diameter = 2 * int(radius) + 1
    area = diameter * diameter
    return area, diameter, np.zeros(area, dtype=np.float32)


class Kernel:
    """
    Odd-sized square convolution kernel.

    Attributes:
        weights: Flat row-major float32 array of length diameter**2
        radius: Half-width; the kernel covers offsets [-radius, radius]
    """

    __slots__ = ("weights", "radius")

    def __init__(self, weights: Sequence[float], radius: int):
        area, diameter, _ = _empty_weights(radius)
        weights = np.array(weights, dtype=np.float32).reshape(-1)
        if weights.shape[0] != area:
            raise KernelShapeError(
                f"Kernel of radius {radius} needs {area} weights "
                f"({diameter}x{diameter}), got {weights.shape[0]}"
            )
        self.weights = weights
        self.radius = int(radius)

    @classmethod
    def kernel3(cls, a: float, b: float, c: float,
                d: float, e: float, f: float,
                g: float, h: float, i: float) -> "Kernel":
        """3x3 kernel from its nine weights, row by row."""
        return cls([a, b, c, d, e, f, g, h, i], 1)

    @property
    def diameter(self) -> int:
        return 2 * self.radius + 1

    @property
    def area(self) -> int:
        return self.diameter * self.diameter

    def as_matrix(self) -> np.ndarray:
        """(diameter, diameter) view of the weights."""
        return self.weights.reshape(self.diameter, self.diameter)

    def sum(self) -> float:
        return float(self.weights.sum(dtype=np.float64))

    def normalize(self, tolerance: Optional[float] = None) -> "Kernel":
        """
        Scale the weights so they sum to 1, in place.

        Only acts when it helps: if the sum is within `tolerance` of 0 (e.g. a
        Laplacian) or of 1 (already normalized) the kernel is left unchanged.
        Idempotent. Returns self.
        """
        if tolerance is None:
            tolerance = get_default_config().normalize_tolerance

        total = self.sum()
        if abs(total) < tolerance or abs(total - 1.0) < tolerance:
            logger.debug(f"Kernel sum {total!r} within {tolerance} of 0 or 1, not normalizing")
            return self

        self.weights[:] = self.weights.astype(np.float64) / total
        return self

    def copy(self) -> "Kernel":
        return Kernel(self.weights.copy(), self.radius)

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return self.radius == other.radius and np.array_equal(self.weights, other.weights)

    __hash__ = None

    def __repr__(self):
        return f"Kernel(radius={self.radius}, weights={self.as_matrix().tolist()})"


def mean_filter(radius: int) -> Kernel:
    """
    A mean filter: averages each pixel across its neighbourhood.

    The neighbourhood is an NxN matrix, where N is 2*radius+1; every weight
    is 1/(N*N).
    """
    area, _, weights = _empty_weights(radius)
    weights[:] = np.float32(1) / np.float32(area)
    return Kernel(weights, radius)


def gaussian_filter(radius: int, variance: float) -> Kernel:
    """
    A Gaussian filter: averages each pixel using its neighbourhood,
    weighted by the sampled Gaussian function.

    G(x, y) = beta * exp(-alpha * (x^2 + y^2)) with alpha = 1/(2*variance)
    and beta = alpha/pi. The result is normalized.

    Args:
        radius: Kernel half-width
        variance: Variance of the Gaussian (sigma squared), must be positive

    Raises:
        InvalidArgumentError: If variance is not positive
    """
    if not variance > 0:
        raise InvalidArgumentError(f"Gaussian variance must be positive, got {variance!r}")

    alpha = 0.5 / variance
    beta = alpha / math.pi

    _, diameter, weights = _empty_weights(radius)
    kernel = weights.reshape(diameter, diameter)

    # fill one quadrant and mirror it: (x,y), (-x,y), (x,-y), (-x,-y) share a weight
    for x in range(radius + 1):
        for y in range(radius + 1):
            gauss = np.float32(beta * math.exp(-alpha * float(x * x + y * y)))
            x1, x2 = radius + x, radius - x
            y1, y2 = radius + y, radius - y
            kernel[y1, x1] = gauss
            kernel[y1, x2] = gauss
            kernel[y2, x1] = gauss
            kernel[y2, x2] = gauss

    logger.debug(f"Built Gaussian kernel radius={radius} variance={variance}")
    return Kernel(weights, radius).normalize()


# Laplacian operators: corner (c), middle/edge (m) and origin (o) weights

def laplacian_without_diagonal() -> Kernel:
    """
    0  1  0
    1 -4  1
    0  1  0
    """
    c, m, o = 0.0, 1.0, -4.0
    return Kernel.kernel3(c, m, c, m, o, m, c, m, c)


def laplacian_with_diagonal() -> Kernel:
    """
    0.5  1.0  0.5
    1.0 -6.0  1.0
    0.5  1.0  0.5
    """
    c, m, o = 0.5, 1.0, -6.0
    return Kernel.kernel3(c, m, c, m, o, m, c, m, c)


def laplacian_spherical() -> Kernel:
    """Diagonals weighted equally with adjacent neighbours: 1 everywhere, -8 at the origin."""
    n, o = 1.0, -8.0
    return Kernel.kernel3(n, n, n, n, o, n, n, n, n)
