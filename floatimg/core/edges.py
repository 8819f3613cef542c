"""
Edge-extension policies.

A policy maps a coordinate (or an array of coordinates) along one axis to a
valid index in [0, limit). Convolution calls it for every row and column it
samples, so sampling outside the plane never reads out of bounds.
"""

import logging
from typing import Callable, Union

import numpy as np

from floatimg.constants import EdgeMode
from floatimg.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

EdgePolicy = Callable[[np.ndarray, int], np.ndarray]


def clamp(coords, limit: int):
    """Coordinates below 0 map to 0, coordinates at or above limit map to limit-1."""
    return np.clip(coords, 0, limit - 1)


def wrap(coords, limit: int):
    """
    Coordinates wrap around the axis (coords mod limit).

    Uses floor modulo, so negative coordinates also land in [0, limit):
    -1 maps to limit-1.
    """
    return np.mod(coords, limit)


def resolve_policy(edge: Union[EdgeMode, str, EdgePolicy]) -> EdgePolicy:
    """
    Turn an EdgeMode, its string value or a custom callable into a policy.

    Raises:
        InvalidArgumentError: If `edge` is none of the accepted forms
    """
    if isinstance(edge, EdgeMode):
        return edge.policy
    if isinstance(edge, str):
        try:
            return EdgeMode(edge.lower()).policy
        except ValueError as e:
            valid = ", ".join(m.value for m in EdgeMode)
            raise InvalidArgumentError(
                f"Unknown edge mode {edge!r}; expected one of: {valid}"
            ) from e
    if callable(edge):
        return edge
    raise InvalidArgumentError(f"Edge policy must be an EdgeMode, str or callable, got {edge!r}")


def extended_indices(policy: EdgePolicy, radius: int, limit: int) -> np.ndarray:
    """
    Indices for the axis range [-radius, limit+radius) resolved through `policy`.

    The policy is first called once with the whole coordinate array. A policy
    written for a single coordinate (one that fails on the array or does not
    return an array) is then called once per coordinate.

    Raises:
        InvalidArgumentError: If the policy fails, or returns an index outside [0, limit)
    """
    coords = np.arange(-radius, limit + radius, dtype=np.intp)
    try:
        resolved = policy(coords, limit)
    except (ValueError, TypeError) as e:
        logger.debug(f"Edge policy {policy!r} rejected a coordinate array ({e}); calling per coordinate")
        resolved = None

    if not isinstance(resolved, np.ndarray):
        try:
            resolved = np.array([policy(int(c), limit) for c in coords])
        except (ValueError, TypeError, ArithmeticError, IndexError) as e:
            raise InvalidArgumentError(f"Edge policy {policy!r} failed: {e}") from e

    if resolved.shape != coords.shape:
        raise InvalidArgumentError(
            f"Edge policy returned shape {resolved.shape}, expected {coords.shape}"
        )
    if not np.issubdtype(resolved.dtype, np.integer):
        raise InvalidArgumentError(f"Edge policy must return integers, got {resolved.dtype}")
    if resolved.size and (resolved.min() < 0 or resolved.max() >= limit):
        raise InvalidArgumentError(
            f"Edge policy returned indices in [{resolved.min()}, {resolved.max()}], "
            f"outside [0, {limit})"
        )
    return resolved.astype(np.intp, copy=False)
