"""
Planar float image.

The preferred internal representation of floatimg. Each image consists of 3
independent intensity planes (RGB, or whatever decomposition the source
used), each a flat row-major float32 array with samples nominally in
[0, 65536). Planes are stored separately rather than interleaved, which
keeps operations that work one plane at a time cache friendly.

Floating point avoids loss of precision in intermediate stages when several
operations are applied to the same image. Converting back to 8-bit for
encoding is the only (unavoidable) lossy step.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np
from skimage.util import img_as_uint

from floatimg.constants import (ALPHA_OPAQUE, NUM_PLANES, RGBA_MAX,
                                SCALE_CONST)
from floatimg.core.exceptions import (InvalidArgumentError,
                                      UnsupportedImageError)

logger = logging.getLogger(__name__)


def _validate_dimension(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {value}")
    return int(value)


class PlanarImage:
    """
    An image made of three float32 intensity planes.

    Attributes:
        width: Number of columns
        height: Number of rows
        planes: Tuple of three 1-D float32 arrays of length width*height,
            indexed as y*width + x

    Plane data passed to the constructor is copied, never adopted.
    """

    __slots__ = ("width", "height", "planes")

    def __init__(self, width: int, height: int,
                 planes: Optional[Sequence[np.ndarray]] = None):
        self.width = _validate_dimension(width, "width")
        self.height = _validate_dimension(height, "height")
        area = self.width * self.height

        if planes is None:
            planes = [np.zeros(area, dtype=np.float32) for _ in range(NUM_PLANES)]

        if len(planes) != NUM_PLANES:
            raise InvalidArgumentError(f"Expected {NUM_PLANES} planes, got {len(planes)}")

        checked = []
        for i, plane in enumerate(planes):
            plane = np.array(plane, dtype=np.float32).reshape(-1)
            if plane.shape[0] != area:
                raise InvalidArgumentError(
                    f"Plane {i} has {plane.shape[0]} samples, expected {area} "
                    f"({self.width}x{self.height})"
                )
            checked.append(plane)
        self.planes: Tuple[np.ndarray, ...] = tuple(checked)

    @classmethod
    def new(cls, width: int, height: int) -> "PlanarImage":
        """Construct an image of the given dimensions with all samples zeroed."""
        return cls(width, height)

    @classmethod
    def from_decoded(cls, image: Any) -> "PlanarImage":
        """
        Sample a decoded interleaved image into three planes.

        Channel values are read directly (no gamma correction, no alpha
        compositing) after mapping them to the 16-bit range a standard decoder
        reports: 8-bit values v become v*257, 16-bit values are used as-is and
        floats in [0, 1] are scaled to [0, 65535]. Only uint8, uint16, bool and
        float samples are accepted. Any alpha channel is ignored.

        Args:
            image: Array-like of shape (H, W), (H, W, 2) (gray + alpha),
                (H, W, 3) or (H, W, 4)

        Returns:
            A new PlanarImage of width W and height H

        Raises:
            UnsupportedImageError: If the shape or dtype cannot be sampled
        """
        array = np.asarray(image)

        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3 or array.shape[2] not in (1, 2, 3, 4):
            raise UnsupportedImageError(
                f"Decoded image must have shape (H, W), (H, W, 2), (H, W, 3) or (H, W, 4), "
                f"got {array.shape}"
            )
        # other integer types carry no range convention; img_as_uint would not rescale them
        if not (array.dtype in (np.uint8, np.uint16, np.bool_)
                or np.issubdtype(array.dtype, np.floating)):
            raise UnsupportedImageError(
                f"Cannot sample decoded image of dtype {array.dtype}; "
                f"expected uint8, uint16, bool or float"
            )

        try:
            wide = img_as_uint(array)
        except ValueError as e:
            raise UnsupportedImageError(f"Cannot convert decoded image: {e}") from e

        height, width = wide.shape[:2]
        if wide.shape[2] in (1, 2):
            # gray, or gray + alpha
            channels = [wide[:, :, 0]] * NUM_PLANES
        else:
            # alpha is ignored
            channels = [wide[:, :, c] for c in range(NUM_PLANES)]

        planes = [ch.reshape(-1) for ch in channels]
        logger.debug(f"Sampled decoded {array.dtype} image {width}x{height} into planes")
        return cls(width, height, planes)

    def to_encodable(self) -> np.ndarray:
        """
        Convert to an interleaved 8-bit RGBA array for a standard encoder.

        Each sample is divided by 256, clamped to [0, 255] and truncated.
        Alpha is fully opaque.

        Returns:
            uint8 array of shape (height, width, 4)
        """
        out = np.empty((self.height, self.width, 4), dtype=np.uint8)
        for c, plane in enumerate(self.planes):
            scaled = np.clip(plane.astype(np.float64) / SCALE_CONST, 0, RGBA_MAX)
            out[:, :, c] = scaled.astype(np.uint8).reshape(self.height, self.width)
        out[:, :, 3] = ALPHA_OPAQUE
        return out

    def clone(self) -> "PlanarImage":
        """Deep copy: the clone shares no storage with this image."""
        return PlanarImage(self.width, self.height, self.planes)

    def __copy__(self):
        return self.clone()

    def __deepcopy__(self, memo):
        return self.clone()

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def x(self) -> np.ndarray:
        return self.planes[0]

    @property
    def y(self) -> np.ndarray:
        return self.planes[1]

    @property
    def z(self) -> np.ndarray:
        return self.planes[2]

    def plane_view(self, index: int) -> np.ndarray:
        """A (height, width) view of plane `index`; writes go through to the image."""
        return self.planes[index].reshape(self.height, self.width)

    def same_size(self, other: "PlanarImage") -> bool:
        return self.width == other.width and self.height == other.height

    def _replace_plane(self, index: int, data: np.ndarray) -> None:
        # keep the existing buffer so outstanding plane_view()s stay valid
        self.planes[index][:] = np.asarray(data, dtype=np.float32).reshape(-1)

    def __eq__(self, other):
        if not isinstance(other, PlanarImage):
            return NotImplemented
        return self.same_size(other) and all(
            np.array_equal(a, b) for a, b in zip(self.planes, other.planes)
        )

    __hash__ = None

    def __repr__(self):
        return f"PlanarImage(width={self.width}, height={self.height})"
