from floatimg.constants.constants import (ALPHA_OPAQUE, DEFAULT_EDGE_MODE,
                                          DEFAULT_INTERPOLATION,
                                          DEFAULT_NUM_WORKERS, NOMINAL_MAX,
                                          NORMALIZE_TOLERANCE, NUM_PLANES,
                                          RGBA_MAX, SCALE_CONST,
                                          SPACING_REL_TOLERANCE, EdgeMode,
                                          Interpolation)

__all__ = [
    "EdgeMode",
    "Interpolation",
    "NUM_PLANES",
    "NOMINAL_MAX",
    "SCALE_CONST",
    "RGBA_MAX",
    "ALPHA_OPAQUE",
    "NORMALIZE_TOLERANCE",
    "SPACING_REL_TOLERANCE",
    "DEFAULT_NUM_WORKERS",
    "DEFAULT_EDGE_MODE",
    "DEFAULT_INTERPOLATION",
]
