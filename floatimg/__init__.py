"""
floatimg: float-precision planar image processing.

This module provides the public API for floatimg. Images are held as three
float32 intensity planes so that chained operations do not accumulate
quantization error; only the final conversion back to 8-bit clamps.
"""

import logging

__version__ = "0.1.0"


# Set up basic logging configuration if none exists
# This ensures INFO level logging works when used outside a host application
def _ensure_basic_logging():
    """Ensure basic logging is configured if no configuration exists."""
    root_logger = logging.getLogger()

    # Only configure if no handlers exist and level is too high
    if not root_logger.handlers and root_logger.level > logging.INFO:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


# Configure basic logging on import
_ensure_basic_logging()

# Re-export public API
from floatimg.constants import EdgeMode, Interpolation
from floatimg.core import (ArityMismatchError, FloatImgError,
                           InvalidArgumentError, Kernel, KernelShapeError,
                           PlanarImage, ProcessingConfig, SizeMismatchError,
                           UnsupportedImageError, apply, combine, convolve,
                           convolve_clamp, convolve_in_place, convolve_wrap,
                           gaussian_filter, laplacian_spherical,
                           laplacian_with_diagonal, laplacian_without_diagonal,
                           load_config, mean_filter, pixelwise)
from floatimg.processing import (bicubic_interpolation, bilerp, compose,
                                 cubic_interpolation, identity, lerp, run,
                                 scale, sharpen_laplace,
                                 sharpen_laplace_in_place, unsharp,
                                 unsharp_in_place)

__all__ = [
    # Key types
    "PlanarImage",
    "Kernel",
    "EdgeMode",
    "Interpolation",
    "ProcessingConfig",
    "load_config",

    # Kernels
    "mean_filter",
    "gaussian_filter",
    "laplacian_without_diagonal",
    "laplacian_with_diagonal",
    "laplacian_spherical",

    # Engine
    "convolve",
    "convolve_in_place",
    "convolve_clamp",
    "convolve_wrap",
    "apply",
    "combine",
    "pixelwise",

    # Processing
    "lerp",
    "bilerp",
    "cubic_interpolation",
    "bicubic_interpolation",
    "unsharp",
    "unsharp_in_place",
    "sharpen_laplace",
    "sharpen_laplace_in_place",
    "scale",
    "identity",
    "compose",
    "run",

    # Errors
    "FloatImgError",
    "InvalidArgumentError",
    "KernelShapeError",
    "SizeMismatchError",
    "ArityMismatchError",
    "UnsupportedImageError",
]
