"""
Elementwise multi-image combinator.

`apply(fn, image, *others)` combines same-sized images plane by plane: for
each plane, `fn` receives the ordered tuple (image's plane, other1's plane,
...) and its result replaces image's plane. Functions operate on whole
float32 planes, so numpy expressions work directly:

    apply(lambda v: v[0] + v[1], image, laplacian)

Scalar per-pixel functions can be adapted with the `pixelwise` decorator.
"""
from __future__ import annotations

import functools
import logging
from typing import Callable, Optional, Sequence

import numpy as np

from floatimg.core.exceptions import (ArityMismatchError,
                                      InvalidArgumentError, SizeMismatchError)
from floatimg.core.planar_image import PlanarImage

logger = logging.getLogger(__name__)

PlaneFunction = Callable[[Sequence[np.ndarray]], np.ndarray]


def pixelwise(arity: int) -> Callable[[Callable], PlaneFunction]:
    """
    Decorator adapting a scalar per-pixel function to the plane form.

    The decorated function takes the ordered tuple of sample values at one
    pixel and returns the new value. The wrapper records `arity`, which
    `apply` checks once per call.

    Example:
        ```python
        @pixelwise(arity=2)
        def brighter(values):
            return max(values)
        ```
    """
    if isinstance(arity, bool) or not isinstance(arity, int) or arity < 1:
        raise InvalidArgumentError(f"arity must be a positive integer, got {arity!r}")

    def decorator(fn: Callable) -> PlaneFunction:
        vectorized = np.vectorize(lambda *values: fn(values), otypes=[np.float32])

        @functools.wraps(fn)
        def wrapper(planes: Sequence[np.ndarray]) -> np.ndarray:
            return vectorized(*planes)

        wrapper.arity = arity
        return wrapper

    return decorator


def _validate_images(image, others) -> None:
    for candidate in (image, *others):
        if not isinstance(candidate, PlanarImage):
            raise InvalidArgumentError(
                f"apply expects PlanarImage arguments, got {type(candidate).__name__}"
            )
    for index, other in enumerate(others, start=1):
        if not image.same_size(other):
            raise SizeMismatchError(
                f"Image {index} is {other.width}x{other.height}, "
                f"expected {image.width}x{image.height}"
            )


def _validate_arity(fn, arity: Optional[int], count: int) -> None:
    expected = arity if arity is not None else getattr(fn, "arity", None)
    if expected is not None and expected != count:
        raise ArityMismatchError(
            f"{getattr(fn, '__name__', fn)!s} takes {expected} values per pixel, "
            f"got {count} images"
        )


def apply(fn: PlaneFunction, image: PlanarImage, *others: PlanarImage,
          arity: Optional[int] = None) -> None:
    """
    Combine images elementwise, mutating `image`.

    Args:
        fn: Function of the ordered plane tuple (image, *others) returning the new plane
        image: Image to update
        *others: Further images, same dimensions as `image`
        arity: Expected number of values per pixel; defaults to `fn.arity` if set

    Raises:
        SizeMismatchError: If any image differs in dimensions from `image`
        ArityMismatchError: If the image count does not match the arity
        InvalidArgumentError: If `fn` returns something not shaped like a plane
    """
    if not callable(fn):
        raise InvalidArgumentError(f"fn must be callable, got {fn!r}")
    _validate_images(image, others)
    _validate_arity(fn, arity, 1 + len(others))

    for i, plane in enumerate(image.planes):
        values = (plane, *(other.planes[i] for other in others))
        result = np.asarray(fn(values), dtype=np.float32)
        try:
            result = np.broadcast_to(result, plane.shape)
        except ValueError as e:
            raise InvalidArgumentError(
                f"fn returned shape {result.shape} for plane {i}, expected {plane.shape}"
            ) from e
        image._replace_plane(i, result)


def combine(fn: PlaneFunction, image: PlanarImage, *others: PlanarImage,
            arity: Optional[int] = None) -> PlanarImage:
    """Like `apply`, but on a clone of `image`, which is returned."""
    if not isinstance(image, PlanarImage):
        raise InvalidArgumentError(f"combine expects a PlanarImage, got {type(image).__name__}")
    result = image.clone()
    apply(fn, result, *others, arity=arity)
    return result
