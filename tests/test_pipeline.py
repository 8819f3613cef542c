"""Tests for operation composition."""
import numpy as np
import pytest

from floatimg.core.elementwise import apply
from floatimg.core.exceptions import InvalidArgumentError
from floatimg.core.planar_image import PlanarImage
from floatimg.processing.pipeline import compose, identity, run
from floatimg.processing.sharpen import sharpen_laplace, sharpen_laplace_in_place


def double(image):
    apply(lambda v: v[0] * 2, image)


def increment(image):
    apply(lambda v: v[0] + 1, image)


def single_pixel(value):
    return PlanarImage(1, 1, [[value], [value], [value]])


class TestCompose:

    def test_applies_left_to_right(self):
        img = single_pixel(3.0)
        compose(double, increment)(img)
        assert img.x[0] == 7.0

    def test_order_matters(self):
        img = single_pixel(3.0)
        compose(increment, double)(img)
        assert img.x[0] == 8.0

    def test_nested(self):
        img = single_pixel(1.0)
        compose(compose(double, double), increment)(img)
        assert img.x[0] == 5.0

    def test_records_operations(self):
        op = compose(double, increment)
        assert op.ops == (double, increment)

    def test_empty_is_identity(self, random_image):
        before = random_image.clone()
        op = compose()
        assert op is identity
        op(random_image)
        assert random_image == before

    def test_rejects_non_callable(self):
        with pytest.raises(InvalidArgumentError):
            compose(double, 5)


class TestIdentity:

    def test_leaves_image_unchanged(self, random_image):
        before = random_image.clone()
        assert identity(random_image) is None
        assert random_image == before


class TestRun:

    def test_copy_by_default(self):
        img = single_pixel(2.0)
        result = run(img, [double, increment])
        assert result is not img
        assert img.x[0] == 2.0
        assert result.x[0] == 5.0

    def test_in_place(self):
        img = single_pixel(2.0)
        result = run(img, [increment], copy=False)
        assert result is img
        assert img.x[0] == 3.0

    def test_accepts_generator(self):
        img = single_pixel(0.0)
        result = run(img, (increment for _ in range(4)))
        assert result.x[0] == 4.0

    def test_no_operations(self, random_image):
        assert run(random_image, []) == random_image

    def test_with_library_operation(self, random_image):
        result = run(random_image, [sharpen_laplace_in_place])
        assert result == sharpen_laplace(random_image)

    def test_rejects_non_image(self):
        with pytest.raises(InvalidArgumentError):
            run(np.zeros((2, 2)), [double])
