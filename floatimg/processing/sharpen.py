"""
Image sharpening: unsharp mask and Laplacian sharpening.

Both are composed from the convolution engine and the elementwise
combinator, and come in two forms: `*_in_place` mutates the image, the plain
form returns a sharpened clone.
"""
from __future__ import annotations

import logging

import numpy as np

from floatimg.constants import EdgeMode
from floatimg.core.convolution import convolve
from floatimg.core.elementwise import apply
from floatimg.core.exceptions import InvalidArgumentError
from floatimg.core.kernel import gaussian_filter, laplacian_spherical
from floatimg.core.planar_image import PlanarImage

logger = logging.getLogger(__name__)


def _unsharp_fn(threshold: float):
    def unsharp_planes(values):
        orig, blur = values
        diff = orig - blur
        return np.where(np.abs(diff) > threshold, orig + diff, orig)

    unsharp_planes.arity = 2
    return unsharp_planes


def _add_planes(values):
    orig, laplacian = values
    return orig + laplacian


_add_planes.arity = 2


def unsharp_in_place(image: PlanarImage, radius: int, amount: float, threshold: float) -> None:
    """
    Sharpen the image using the unsharp mask technique, in place.

    The image is blurred with a Gaussian of the given radius and variance
    `amount` (clamped edges). Wherever |orig - blur| exceeds `threshold`
    the pixel becomes orig + (orig - blur); elsewhere it is unchanged.

    Args:
        image: Image to sharpen
        radius: Gaussian kernel radius
        amount: Gaussian variance, must be positive
        threshold: Minimum difference that gets amplified; +inf leaves the image unchanged
    """
    if np.isnan(threshold):
        raise InvalidArgumentError("threshold must not be NaN")

    blurred = convolve(image, gaussian_filter(radius, amount), EdgeMode.CLAMP)
    apply(_unsharp_fn(threshold), image, blurred)
    logger.debug(f"Unsharp mask applied (radius={radius}, amount={amount}, threshold={threshold})")


def unsharp(image: PlanarImage, radius: int, amount: float, threshold: float) -> PlanarImage:
    """As `unsharp_in_place`, but returns a new image and leaves `image` untouched."""
    result = image.clone()
    unsharp_in_place(result, radius, amount, threshold)
    return result


def sharpen_laplace_in_place(image: PlanarImage) -> None:
    """
    Sharpen by adding the (spherical) Laplacian of the image to itself, in place.

    No brightness compensation is performed, so the result can come out
    brighter than the input.
    """
    laplacian = convolve(image, laplacian_spherical(), EdgeMode.CLAMP)
    # TODO: histogram equalisation to compensate for the increased brightness
    apply(_add_planes, image, laplacian)


def sharpen_laplace(image: PlanarImage) -> PlanarImage:
    result = image.clone()
    sharpen_laplace_in_place(result)
    return result
