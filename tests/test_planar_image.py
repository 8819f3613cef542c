"""Tests for the PlanarImage container and its conversions."""
import copy

import numpy as np
import pytest

from floatimg.core.exceptions import (InvalidArgumentError,
                                      UnsupportedImageError)
from floatimg.core.planar_image import PlanarImage


class TestConstruction:

    def test_new_is_zero_filled(self):
        img = PlanarImage.new(4, 3)
        assert (img.width, img.height) == (4, 3)
        assert img.shape == (3, 4)
        assert len(img.planes) == 3
        for plane in img.planes:
            assert plane.dtype == np.float32
            assert plane.shape == (12,)
            assert not plane.any()

    def test_zero_dimensions_allowed(self):
        img = PlanarImage.new(0, 5)
        assert img.area == 0
        assert all(p.size == 0 for p in img.planes)

    @pytest.mark.parametrize("width,height", [(-1, 2), (2, -3)])
    def test_negative_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidArgumentError):
            PlanarImage.new(width, height)

    @pytest.mark.parametrize("width", [2.5, "3", True])
    def test_non_integer_dimensions_rejected(self, width):
        with pytest.raises(InvalidArgumentError):
            PlanarImage.new(width, 2)

    def test_plane_length_must_match_area(self):
        planes = [np.zeros(6), np.zeros(6), np.zeros(5)]
        with pytest.raises(InvalidArgumentError):
            PlanarImage(3, 2, planes)

    def test_exactly_three_planes(self):
        with pytest.raises(InvalidArgumentError):
            PlanarImage(2, 2, [np.zeros(4), np.zeros(4)])

    def test_planes_coerced_to_float32(self):
        img = PlanarImage(2, 1, [[1, 2], [3, 4], [5, 6]])
        assert all(p.dtype == np.float32 for p in img.planes)
        np.testing.assert_array_equal(img.y, [3, 4])

    def test_row_major_indexing(self):
        img = PlanarImage.new(3, 2)
        img.plane_view(0)[1, 2] = 7.0
        assert img.x[1 * 3 + 2] == 7.0


class TestFromDecoded:

    def test_rgb_uint8_scaled_to_16_bit(self):
        rgb = np.array([[[0, 128, 255], [1, 2, 3]]], dtype=np.uint8)
        img = PlanarImage.from_decoded(rgb)
        assert (img.width, img.height) == (2, 1)
        np.testing.assert_array_equal(img.x, [0, 257])
        np.testing.assert_array_equal(img.y, [128 * 257, 2 * 257])
        np.testing.assert_array_equal(img.z, [255 * 257, 3 * 257])

    def test_alpha_is_ignored(self):
        rgba = np.array([[[10, 20, 30, 0]]], dtype=np.uint8)
        img = PlanarImage.from_decoded(rgba)
        np.testing.assert_array_equal([img.x[0], img.y[0], img.z[0]],
                                      [10 * 257, 20 * 257, 30 * 257])

    def test_grayscale_replicated(self):
        gray = np.array([[0, 100], [200, 255]], dtype=np.uint8)
        img = PlanarImage.from_decoded(gray)
        assert (img.width, img.height) == (2, 2)
        for plane in img.planes:
            np.testing.assert_array_equal(plane, gray.reshape(-1).astype(np.float32) * 257)
        # planes do not alias each other
        img.x[0] = 1.0
        assert img.y[0] == 0.0

    def test_uint16_used_directly(self):
        data = np.array([[[1000, 40000, 65535]]], dtype=np.uint16)
        img = PlanarImage.from_decoded(data)
        np.testing.assert_array_equal([img.x[0], img.y[0], img.z[0]], [1000, 40000, 65535])

    def test_float_unit_range(self):
        data = np.array([[[0.0, 1.0, 0.0]]], dtype=np.float64)
        img = PlanarImage.from_decoded(data)
        np.testing.assert_array_equal([img.x[0], img.y[0]], [0, 65535])

    @pytest.mark.parametrize("shape", [(4,), (2, 2, 5), (1, 2, 3, 3)])
    def test_bad_shapes_rejected(self, shape):
        with pytest.raises(UnsupportedImageError):
            PlanarImage.from_decoded(np.zeros(shape, dtype=np.uint8))

    def test_bad_dtype_rejected(self):
        with pytest.raises(UnsupportedImageError):
            PlanarImage.from_decoded(np.array([[["a", "b", "c"]]]))

    @pytest.mark.parametrize("dtype", [np.int64, np.int32, np.int16, np.int8, np.uint32])
    def test_integer_types_without_range_rejected(self, dtype):
        # a default-int array holding 8-bit values must not be silently read as 16-bit
        with pytest.raises(UnsupportedImageError):
            PlanarImage.from_decoded(np.array([[[255, 128, 0]]], dtype=dtype))

    def test_default_int_array_rejected(self):
        with pytest.raises(UnsupportedImageError):
            PlanarImage.from_decoded(np.array([[[255, 128, 0]]]))

    def test_bool_mask(self):
        img = PlanarImage.from_decoded(np.array([[True, False]]))
        np.testing.assert_array_equal(img.x, [65535, 0])

    def test_gray_alpha(self):
        la = np.array([[[10, 0], [200, 255]]], dtype=np.uint8)
        img = PlanarImage.from_decoded(la)
        assert (img.width, img.height) == (2, 1)
        for plane in img.planes:
            np.testing.assert_array_equal(plane, [10 * 257, 200 * 257])
        np.testing.assert_array_equal(img.to_encodable()[0, :, :3], [[10] * 3, [200] * 3])

    def test_out_of_range_float_rejected(self):
        with pytest.raises(UnsupportedImageError):
            PlanarImage.from_decoded(np.full((1, 1, 3), 3.0))


class TestToEncodable:

    def test_shape_dtype_and_opaque_alpha(self, random_image):
        out = random_image.to_encodable()
        assert out.shape == (7, 9, 4)
        assert out.dtype == np.uint8
        assert (out[:, :, 3] == 255).all()

    def test_divides_clamps_and_truncates(self):
        img = PlanarImage(4, 1, [
            [-50.0, 0.0, 511.9, 70000.0],
            [256.0 * 10 + 255, 65535.0, 65536.0, 1e9],
            [255.0, 256.0, 257.0, -1e9],
        ])
        out = img.to_encodable()
        np.testing.assert_array_equal(out[0, :, 0], [0, 0, 1, 255])
        np.testing.assert_array_equal(out[0, :, 1], [10, 255, 255, 255])
        np.testing.assert_array_equal(out[0, :, 2], [0, 1, 1, 0])

    def test_round_trip_of_8_bit_image(self):
        rng = np.random.default_rng(3)
        rgb = rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8)
        out = PlanarImage.from_decoded(rgb).to_encodable()
        np.testing.assert_array_equal(out[:, :, :3], rgb)
        assert (out[:, :, 3] == 255).all()

    def test_round_trip_of_opaque_rgba(self):
        rgba = np.array([[[255, 0, 17, 255], [1, 254, 128, 255]]], dtype=np.uint8)
        out = PlanarImage.from_decoded(rgba).to_encodable()
        np.testing.assert_array_equal(out, rgba)


class TestClone:

    def test_clone_is_equal(self, random_image):
        assert random_image.clone() == random_image

    def test_mutating_clone_leaves_original(self, random_image):
        before = [p.copy() for p in random_image.planes]
        clone = random_image.clone()
        for plane in clone.planes:
            plane += 1.0
        clone.plane_view(2)[0, 0] = -5.0
        for original, saved in zip(random_image.planes, before):
            np.testing.assert_array_equal(original, saved)
        assert clone != random_image

    def test_copy_module_hooks(self, random_image):
        for dup in (copy.copy(random_image), copy.deepcopy(random_image)):
            assert dup == random_image
            assert all(a is not b for a, b in zip(dup.planes, random_image.planes))

    def test_equality_considers_dimensions(self):
        assert PlanarImage.new(2, 3) != PlanarImage.new(3, 2)
        assert PlanarImage.new(2, 3) == PlanarImage.new(2, 3)
