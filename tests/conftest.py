"""Shared fixtures for the floatimg test suite."""
import logging
import os

import numpy as np
import pytest

from floatimg.core.config import ProcessingConfig, set_default_config
from floatimg.core.planar_image import PlanarImage

# Disable lengthy logging from components during tests
logging.disable(logging.CRITICAL)


def pytest_addoption(parser):
    """Add command-line options for the parallel convolution tests."""
    parser.addoption(
        "--fi-workers",
        action="store",
        default=os.getenv("FI_WORKERS", "3"),
        help="Number of worker threads used by the parallel convolution tests (default: 3)."
    )


def pytest_configure(config):
    """Validate configuration options."""
    value = config.getoption("--fi-workers")
    if not value.isdigit() or int(value) < 1:
        raise pytest.UsageError(f"Invalid value '{value}' for --fi-workers. Expected a positive integer")


def make_image(width, height, seed=0, high=65536.0):
    """Image with uniformly random samples in [0, high)."""
    rng = np.random.default_rng(seed)
    planes = [rng.uniform(0, high, width * height).astype(np.float32) for _ in range(3)]
    return PlanarImage(width, height, planes)


def reference_convolve(plane2d, weights, radius, edge):
    """Direct float64 evaluation of the convolution sum, one pixel at a time."""
    height, width = plane2d.shape
    diameter = 2 * radius + 1
    out = np.zeros((height, width), dtype=np.float64)
    for y in range(height):
        for x in range(width):
            total = 0.0
            for dy in range(-radius, radius + 1):
                for dx in range(-radius, radius + 1):
                    sy, sx = edge(y + dy, height), edge(x + dx, width)
                    total += float(plane2d[sy, sx]) * float(weights[(dy + radius) * diameter + dx + radius])
            out[y, x] = total
    return out


@pytest.fixture
def image_factory():
    return make_image


@pytest.fixture
def convolve_reference():
    return reference_convolve


@pytest.fixture
def parallel_workers(request):
    return int(request.config.getoption("--fi-workers"))


@pytest.fixture
def random_image():
    return make_image(9, 7)


@pytest.fixture
def restore_default_config():
    """Reset the process-wide default config after the test."""
    yield
    set_default_config(ProcessingConfig())
