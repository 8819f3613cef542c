"""
Consolidated constants for floatimg.

This module defines the numeric constants of the planar representation and
the enums used to select edge handling and interpolation.
"""

from enum import Enum

# Planar representation
NUM_PLANES = 3
NOMINAL_MAX = 65536.0  # samples nominally lie in [0, NOMINAL_MAX)
SCALE_CONST = 256.0    # converting from [0,65536) to [0,256)
RGBA_MAX = 255
ALPHA_OPAQUE = 255

# Kernels
NORMALIZE_TOLERANCE = 1e-7

# Interpolation
SPACING_REL_TOLERANCE = 1e-6

# Concurrency
DEFAULT_NUM_WORKERS = 1


class EdgeMode(Enum):
    CLAMP = "clamp"
    WRAP = "wrap"

    @property
    def policy(self):
        """The edge-extension function implementing this mode."""
        from floatimg.core.edges import clamp, wrap

        match self:
            case EdgeMode.CLAMP:
                return clamp
            case EdgeMode.WRAP:
                return wrap


class Interpolation(Enum):
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"


DEFAULT_EDGE_MODE: EdgeMode = EdgeMode.CLAMP
DEFAULT_INTERPOLATION: Interpolation = Interpolation.BILINEAR
