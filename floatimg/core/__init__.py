"""Core module for floatimg."""

from floatimg.core.config import (ProcessingConfig, get_default_config,
                                  load_config, set_default_config)
from floatimg.core.convolution import (convolve, convolve_clamp,
                                       convolve_in_place, convolve_wrap)
from floatimg.core.edges import clamp, resolve_policy, wrap
from floatimg.core.elementwise import apply, combine, pixelwise
from floatimg.core.exceptions import (ArityMismatchError, FloatImgError,
                                      InvalidArgumentError, KernelShapeError,
                                      SizeMismatchError, UnsupportedImageError)
from floatimg.core.kernel import (Kernel, gaussian_filter,
                                  laplacian_spherical, laplacian_with_diagonal,
                                  laplacian_without_diagonal, mean_filter)
from floatimg.core.planar_image import PlanarImage

__all__ = [
    'PlanarImage',
    'Kernel',
    'ProcessingConfig',
    'load_config',
    'get_default_config',
    'set_default_config',
    'mean_filter',
    'gaussian_filter',
    'laplacian_without_diagonal',
    'laplacian_with_diagonal',
    'laplacian_spherical',
    'clamp',
    'wrap',
    'resolve_policy',
    'convolve',
    'convolve_in_place',
    'convolve_clamp',
    'convolve_wrap',
    'apply',
    'combine',
    'pixelwise',
    'FloatImgError',
    'InvalidArgumentError',
    'KernelShapeError',
    'SizeMismatchError',
    'ArityMismatchError',
    'UnsupportedImageError',
]
