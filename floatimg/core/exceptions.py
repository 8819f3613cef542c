"""
Custom exceptions for the floatimg core.
Ensures that errors are specific and fail loudly instead of reading out of bounds.
"""


class FloatImgError(Exception):
    """Base class for all floatimg custom exceptions."""
    pass


class InvalidArgumentError(FloatImgError, ValueError):
    """Raised when an argument violates an operation's precondition."""
    pass


class KernelShapeError(InvalidArgumentError):
    """Raised when a kernel's weight count does not match (2*radius+1)**2."""
    pass


class ArityMismatchError(InvalidArgumentError):
    """Raised when the number of images does not match a per-pixel function's arity."""
    pass


class SizeMismatchError(FloatImgError, ValueError):
    """Raised when images combined elementwise have different dimensions."""
    pass


class UnsupportedImageError(FloatImgError, TypeError):
    """Raised when a decoded image has a shape or dtype that cannot be sampled."""
    pass
