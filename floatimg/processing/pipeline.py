"""
Composition of image operations.

An operation is any callable that mutates a PlanarImage in place (the
`*_in_place` functions, or closures over them). Operations compose left to
right, so `compose(f, g)(img)` is `f(img)` followed by `g(img)`.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from floatimg.core.exceptions import InvalidArgumentError
from floatimg.core.planar_image import PlanarImage

logger = logging.getLogger(__name__)

ImageOp = Callable[[PlanarImage], None]


def identity(image: PlanarImage) -> None:
    """Does not modify the image."""


def compose(*ops: ImageOp) -> ImageOp:
    """Compose operations into one that applies them in the given order."""
    for op in ops:
        if not callable(op):
            raise InvalidArgumentError(f"Operations must be callable, got {op!r}")
    if not ops:
        return identity

    def composed(image: PlanarImage) -> None:
        for op in ops:
            op(image)

    composed.ops = ops
    return composed


def run(image: PlanarImage, ops: Iterable[ImageOp], *, copy: bool = True) -> PlanarImage:
    """
    Apply a sequence of operations to an image.

    Args:
        image: Input image
        ops: Operations applied in order
        copy: Work on a clone (default) instead of mutating `image`

    Returns:
        The processed image (`image` itself when copy is False)
    """
    if not isinstance(image, PlanarImage):
        raise InvalidArgumentError(f"run expects a PlanarImage, got {type(image).__name__}")
    target = image.clone() if copy else image
    ops = list(ops)
    logger.debug(f"Running {len(ops)} operation(s) on {target!r}")
    compose(*ops)(target)
    return target
