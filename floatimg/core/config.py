"""
Configuration dataclasses for floatimg.

This module defines the processing configuration shared by the convolution
engine and the kernel helpers. Configuration is intended to be immutable and
provided as Python objects; YAML files can be loaded into the same dataclass.
"""

import dataclasses
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from floatimg.constants import (DEFAULT_EDGE_MODE, DEFAULT_NUM_WORKERS,
                                NORMALIZE_TOLERANCE, EdgeMode)
from floatimg.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingConfig:
    """Configuration for planar image operations."""
    num_workers: int = DEFAULT_NUM_WORKERS
    """Number of planes convolved concurrently (1 = sequential)."""

    edge_mode: EdgeMode = DEFAULT_EDGE_MODE
    """Edge-extension policy used when a caller does not pass one."""

    normalize_tolerance: float = NORMALIZE_TOLERANCE
    """Kernel sums within this distance of 0 or 1 are left unnormalized."""

    def __post_init__(self):
        if not isinstance(self.num_workers, int) or self.num_workers < 1:
            raise InvalidArgumentError(
                f"num_workers must be a positive integer, got {self.num_workers!r}"
            )
        if not isinstance(self.edge_mode, EdgeMode):
            raise InvalidArgumentError(
                f"edge_mode must be an EdgeMode, got {self.edge_mode!r}"
            )
        if self.normalize_tolerance < 0:
            raise InvalidArgumentError(
                f"normalize_tolerance must be non-negative, got {self.normalize_tolerance!r}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProcessingConfig":
        """Build a config from a plain mapping, e.g. a parsed YAML document."""
        data = dict(data or {})
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown configuration keys: {', '.join(unknown)}")

        if "edge_mode" in data and not isinstance(data["edge_mode"], EdgeMode):
            try:
                data["edge_mode"] = EdgeMode(data["edge_mode"])
            except ValueError as e:
                valid = ", ".join(m.value for m in EdgeMode)
                raise InvalidArgumentError(
                    f"Unknown edge_mode {data['edge_mode']!r}; expected one of: {valid}"
                ) from e
        return cls(**data)


def load_config(path: Union[str, Path]) -> ProcessingConfig:
    """
    Load a YAML config file into a ProcessingConfig.

    Args:
        path: Path to a YAML file holding a mapping of ProcessingConfig fields

    Returns:
        The parsed configuration

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidArgumentError: If the document is not a mapping or has unknown keys
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if raw is not None and not isinstance(raw, dict):
        raise InvalidArgumentError(
            f"{config_path} must contain a mapping, got {type(raw).__name__}"
        )
    config = ProcessingConfig.from_dict(raw)
    logger.debug(f"Loaded processing config from {config_path}: {config}")
    return config


# Process-wide default, replaced atomically
_config_lock = threading.Lock()
_default_config = ProcessingConfig()


def get_default_config() -> ProcessingConfig:
    with _config_lock:
        return _default_config


def set_default_config(config: ProcessingConfig) -> ProcessingConfig:
    """Install a new default config and return the previous one."""
    global _default_config

    if not isinstance(config, ProcessingConfig):
        raise InvalidArgumentError(f"Expected ProcessingConfig, got {type(config).__name__}")
    with _config_lock:
        previous = _default_config
        _default_config = config
    logger.debug(f"Default processing config set to {config}")
    return previous
