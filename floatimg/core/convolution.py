"""
Convolution engine.

Applies a kernel to each plane of a PlanarImage independently:

    out[y, x] = sum over (dx, dy) in [-r, r]^2 of
                plane[edge(y+dy, height), edge(x+dx, width)] * kernel[dy+r, dx+r]

This is a direct spatial convolution (no separable or FFT shortcut), so it is
O(width * height * diameter^2) per plane. Samples outside the plane are
resolved through the edge-extension policy.

Both call shapes share one routine that writes into an explicit target: the
input image itself (in place) or a freshly allocated one. Each plane's result
is fully built before it is stored, so the in-place form never reads a sample
it has already overwritten.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Union

import numpy as np

from floatimg.constants import EdgeMode
from floatimg.core.config import get_default_config
from floatimg.core.edges import EdgePolicy, extended_indices, resolve_policy
from floatimg.core.exceptions import InvalidArgumentError
from floatimg.core.kernel import Kernel
from floatimg.core.planar_image import PlanarImage

logger = logging.getLogger(__name__)

Edge = Union[EdgeMode, str, EdgePolicy]


def _validate_inputs(image, kernel) -> None:
    if not isinstance(image, PlanarImage):
        raise InvalidArgumentError(f"image must be a PlanarImage, got {type(image).__name__}")
    if not isinstance(kernel, Kernel):
        raise InvalidArgumentError(f"kernel must be a Kernel, got {type(kernel).__name__}")


def _convolve_plane(plane: np.ndarray, width: int, height: int, kernel: Kernel,
                    rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    """Convolve one flat plane; returns a new flat float32 array."""
    padded = plane.reshape(height, width)[rows][:, cols]
    weights = kernel.as_matrix()
    diameter = kernel.diameter

    result = np.zeros((height, width), dtype=np.float32)
    for ky in range(diameter):
        for kx in range(diameter):
            result += padded[ky:ky + height, kx:kx + width] * weights[ky, kx]
    return result.reshape(-1)


def _convolve_into(source: PlanarImage, target: PlanarImage, kernel: Kernel,
                   edge: Optional[Edge], num_workers: Optional[int]) -> None:
    """
    Convolve every plane of `source` and store the results in `target`.

    `target` may be `source` itself.
    """
    config = get_default_config()
    if edge is None:
        edge = config.edge_mode
    if num_workers is None:
        num_workers = config.num_workers
    if num_workers < 1:
        raise InvalidArgumentError(f"num_workers must be at least 1, got {num_workers}")

    policy = resolve_policy(edge)
    width, height, radius = source.width, source.height, kernel.radius

    if source.area == 0:
        logger.debug("Skipping convolution of empty image")
        if target is not source:
            for i, plane in enumerate(source.planes):
                target._replace_plane(i, plane)
        return

    rows = extended_indices(policy, radius, height)
    cols = extended_indices(policy, radius, width)

    logger.debug(
        f"Convolving {width}x{height} image with radius {radius} kernel "
        f"(edge={getattr(edge, 'value', edge)}, workers={num_workers})"
    )

    def run(plane):
        return _convolve_plane(plane, width, height, kernel, rows, cols)

    if num_workers == 1:
        results = [run(plane) for plane in source.planes]
    else:
        # planes only read their own buffer; collect all results before storing
        with ThreadPoolExecutor(max_workers=min(num_workers, len(source.planes))) as executor:
            results = list(executor.map(run, source.planes))

    for i, result in enumerate(results):
        target._replace_plane(i, result)


def convolve(image: PlanarImage, kernel: Kernel, edge: Optional[Edge] = None,
             *, num_workers: Optional[int] = None) -> PlanarImage:
    """
    Convolve the image with a kernel, returning a new image.

    Args:
        image: Source image (not modified)
        kernel: Convolution kernel
        edge: EdgeMode, its string value, or a callable (coords, limit) -> coords.
            Defaults to the configured edge mode (clamp).
        num_workers: Planes processed concurrently. Defaults to the configured value.

    Returns:
        A new PlanarImage
    """
    _validate_inputs(image, kernel)
    result = PlanarImage.new(image.width, image.height)
    _convolve_into(image, result, kernel, edge, num_workers)
    return result


def convolve_in_place(image: PlanarImage, kernel: Kernel, edge: Optional[Edge] = None,
                      *, num_workers: Optional[int] = None) -> None:
    """Convolve the image with a kernel, replacing its planes."""
    _validate_inputs(image, kernel)
    _convolve_into(image, image, kernel, edge, num_workers)


def convolve_clamp(image: PlanarImage, kernel: Kernel, **kwargs) -> PlanarImage:
    return convolve(image, kernel, EdgeMode.CLAMP, **kwargs)


def convolve_wrap(image: PlanarImage, kernel: Kernel, **kwargs) -> PlanarImage:
    return convolve(image, kernel, EdgeMode.WRAP, **kwargs)
