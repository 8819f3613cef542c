"""
Image processing module for floatimg.

This module provides the operations built on the core engine: interpolation
primitives, sharpening filters, resampling and operation composition.
"""

from floatimg.processing.interpolation import (bicubic_interpolation, bilerp,
                                               cubic_interpolation, lerp)
from floatimg.processing.pipeline import ImageOp, compose, identity, run
from floatimg.processing.resample import scale
from floatimg.processing.sharpen import (sharpen_laplace,
                                         sharpen_laplace_in_place, unsharp,
                                         unsharp_in_place)

__all__ = [
    "lerp",
    "bilerp",
    "cubic_interpolation",
    "bicubic_interpolation",
    "unsharp",
    "unsharp_in_place",
    "sharpen_laplace",
    "sharpen_laplace_in_place",
    "scale",
    "ImageOp",
    "identity",
    "compose",
    "run",
]
