"""
Resampling (scale) built on the interpolation primitives.

Destination pixel centres are mapped back into the source with

    src = (dst + 0.5) * src_size / dst_size - 0.5

and clamped to [0, size-1]. Neighbouring samples that fall outside the plane
are taken from the clamp edge policy. Each plane is interpolated in one
vectorised call.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

import numpy as np

from floatimg.constants import DEFAULT_INTERPOLATION, Interpolation
from floatimg.core.edges import clamp
from floatimg.core.exceptions import InvalidArgumentError
from floatimg.core.planar_image import PlanarImage
from floatimg.processing.interpolation import (bicubic_interpolation, bilerp)

logger = logging.getLogger(__name__)


def _target_size(image: PlanarImage, factor, width, height) -> Tuple[int, int]:
    if factor is not None:
        if width is not None or height is not None:
            raise InvalidArgumentError("Pass either factor or width/height, not both")
        if not factor > 0:
            raise InvalidArgumentError(f"Scale factor must be positive, got {factor!r}")
        width = max(1, int(round(image.width * factor)))
        height = max(1, int(round(image.height * factor)))
    else:
        if width is None and height is None:
            raise InvalidArgumentError("scale needs a factor or a target width/height")
        # keep the aspect ratio when only one side is given
        if width is None:
            width = max(1, int(round(image.width * height / image.height)))
        if height is None:
            height = max(1, int(round(image.height * width / image.width)))

    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise InvalidArgumentError(f"Target {name} must be a positive integer, got {value!r}")
    return int(width), int(height)


def _source_coords(dst_size: int, src_size: int) -> np.ndarray:
    coords = (np.arange(dst_size, dtype=np.float64) + 0.5) * src_size / dst_size - 0.5
    return np.clip(coords, 0, src_size - 1).astype(np.float32)


def _scale_plane(plane: np.ndarray, src_w: int, src_h: int,
                 sx: np.ndarray, sy: np.ndarray, method: Interpolation) -> np.ndarray:
    grid = plane.reshape(src_h, src_w)
    # sx varies along columns, sy along rows
    px, py = np.meshgrid(sx, sy)
    ix = np.floor(px).astype(np.intp)
    iy = np.floor(py).astype(np.intp)

    if method is Interpolation.NEAREST:
        nx = clamp(np.floor(px + np.float32(0.5)).astype(np.intp), src_w)
        ny = clamp(np.floor(py + np.float32(0.5)).astype(np.intp), src_h)
        return grid[ny, nx]

    if method is Interpolation.BILINEAR:
        x0, x2 = ix.astype(np.float32), (ix + 1).astype(np.float32)
        y0, y2 = iy.astype(np.float32), (iy + 1).astype(np.float32)
        cx0, cx2 = clamp(ix, src_w), clamp(ix + 1, src_w)
        cy0, cy2 = clamp(iy, src_h), clamp(iy + 1, src_h)
        return bilerp(x0, px, x2, y0, py, y2,
                      grid[cy0, cx0], grid[cy2, cx0], grid[cy0, cx2], grid[cy2, cx2])

    # bicubic: sample offsets -1, 0, 1, 2 around the floor position
    offsets = (-1, 0, 1, 2)
    xs = [(ix + o).astype(np.float32) for o in offsets]
    ys = [(iy + o).astype(np.float32) for o in offsets]
    cols = [clamp(ix + o, src_w) for o in offsets]
    rows = [clamp(iy + o, src_h) for o in offsets]
    samples = [[grid[r, c] for c in cols] for r in rows]
    return bicubic_interpolation(
        (xs[0], xs[1], px, xs[2], xs[3]),
        (ys[0], ys[1], py, ys[2], ys[3]),
        samples,
    )


def scale(image: PlanarImage, factor: Optional[float] = None, *,
          width: Optional[int] = None, height: Optional[int] = None,
          method: Union[Interpolation, str] = DEFAULT_INTERPOLATION) -> PlanarImage:
    """
    Resample the image to a new size.

    Args:
        image: Source image (not modified)
        factor: Uniform scale factor; mutually exclusive with width/height
        width: Target width; height follows the aspect ratio if omitted
        height: Target height; width follows the aspect ratio if omitted
        method: Interpolation.NEAREST, BILINEAR or BICUBIC (or their string values)

    Returns:
        A new PlanarImage of the target size

    Raises:
        InvalidArgumentError: For non-positive sizes or factors, an empty source
            image, or an unknown method
    """
    if not isinstance(image, PlanarImage):
        raise InvalidArgumentError(f"scale expects a PlanarImage, got {type(image).__name__}")
    if image.area == 0:
        raise InvalidArgumentError("Cannot scale an empty image")
    if not isinstance(method, Interpolation):
        try:
            method = Interpolation(str(method).lower())
        except ValueError as e:
            valid = ", ".join(m.value for m in Interpolation)
            raise InvalidArgumentError(f"Unknown interpolation {method!r}; expected one of: {valid}") from e

    dst_w, dst_h = _target_size(image, factor, width, height)
    sx = _source_coords(dst_w, image.width)
    sy = _source_coords(dst_h, image.height)

    logger.debug(
        f"Scaling {image.width}x{image.height} -> {dst_w}x{dst_h} ({method.value})"
    )
    planes = [
        np.asarray(_scale_plane(p, image.width, image.height, sx, sy, method), dtype=np.float32)
        for p in image.planes
    ]
    return PlanarImage(dst_w, dst_h, planes)
