# -*- coding: utf-8 -*-
"""
Pixel Buffer Tests - RGBA views, rounding, and regions.

Tests buffer validation and zero-copy views, half-up rounding to 8-bit
levels, and Region coercion and clipping.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

import numpy as np
import pytest

from rasterfx.exceptions import ValidationError
from rasterfx.image_processing.buffer import (
    Region,
    pixel_view,
    rgba_dimensions,
    round_half_up,
    to_u8,
)


# ---------------------------------------------------------------------------
# pixel_view
# ---------------------------------------------------------------------------

class TestPixelView:
    """Test buffer validation and view construction."""

    def test_flat_array_shares_memory(self):
        buf = np.zeros(2 * 3 * 4, dtype=np.uint8)
        view = pixel_view(buf, 3, 2)
        assert view.shape == (2, 3, 4)
        view[1, 2, 0] = 9
        assert buf[(1 * 3 + 2) * 4] == 9

    def test_shaped_array_accepted(self):
        image = np.zeros((2, 3, 4), dtype=np.uint8)
        assert np.shares_memory(pixel_view(image, 3, 2), image)

    def test_bytearray_shares_memory(self):
        buf = bytearray(8)
        pixel_view(buf, 2, 1)[0, 1, 3] = 200
        assert buf[7] == 200

    def test_numpy_integer_dimensions(self):
        buf = np.zeros(16, dtype=np.uint8)
        assert pixel_view(buf, np.int64(2), np.int32(2)).shape == (2, 2, 4)

    @pytest.mark.parametrize('width, height', [(0, 1), (1, 0), (-1, 2)])
    def test_non_positive_dimensions_raise(self, width, height):
        with pytest.raises(ValidationError, match="> 0"):
            pixel_view(np.zeros(4, dtype=np.uint8), width, height)

    def test_bool_dimension_raises(self):
        with pytest.raises(ValidationError, match="integer"):
            pixel_view(np.zeros(4, dtype=np.uint8), True, 1)

    def test_float_dimension_raises(self):
        with pytest.raises(ValidationError, match="integer"):
            pixel_view(np.zeros(4, dtype=np.uint8), 1.0, 1)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValidationError, match="holds 12 samples, expected 16"):
            pixel_view(np.zeros(12, dtype=np.uint8), 2, 2)

    def test_wrong_dtype_raises(self):
        with pytest.raises(ValidationError, match="uint8"):
            pixel_view(np.zeros(4, dtype=np.float32), 1, 1)

    def test_non_contiguous_raises(self):
        image = np.zeros((2, 4, 4), dtype=np.uint8)[:, ::2]
        with pytest.raises(ValidationError, match="contiguous"):
            pixel_view(image, 2, 2)

    def test_read_only_raises(self):
        with pytest.raises(ValidationError, match="read-only"):
            pixel_view(bytes(4), 1, 1)

    def test_transposed_shape_raises(self):
        with pytest.raises(ValidationError, match="shaped"):
            pixel_view(np.zeros((3, 2, 4), dtype=np.uint8), 3, 2)

    def test_unsupported_type_raises(self):
        with pytest.raises(ValidationError, match="Unsupported"):
            pixel_view([0, 0, 0, 0], 1, 1)


class TestRgbaDimensions:
    """Test (width, height) extraction from image arrays."""

    def test_dimensions(self):
        assert rgba_dimensions(np.zeros((5, 7, 4), dtype=np.uint8)) == (7, 5)

    def test_rgb_rejected(self):
        with pytest.raises(ValidationError, match="RGBA"):
            rgba_dimensions(np.zeros((5, 7, 3), dtype=np.uint8))

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="uint8"):
            rgba_dimensions(np.zeros((5, 7, 4)))


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

class TestRounding:
    """Ties round upward, unlike numpy's round-half-even."""

    def test_ties_go_up(self):
        np.testing.assert_array_equal(
            round_half_up(np.array([0.5, 1.5, 2.5, 126.5, 127.5])),
            [1, 2, 3, 127, 128],
        )

    def test_non_ties(self):
        np.testing.assert_array_equal(
            round_half_up(np.array([0.49, 2.51, 254.4])), [0, 3, 254])

    def test_to_u8_clamps(self):
        result = to_u8(np.array([-3.0, 0.4, 254.5, 300.0]))
        assert result.dtype == np.uint8
        assert list(result) == [0, 0, 255, 255]


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------

class TestRegion:
    """Test region coercion, clipping, and slicing."""

    def test_full(self):
        assert Region.full(4, 3) == Region(0, 0, 4, 3)

    def test_coerce_none_is_full(self):
        assert Region.coerce(None, 4, 3) == Region(0, 0, 4, 3)

    def test_coerce_sequence(self):
        assert Region.coerce([1, 2, 3, 4], 10, 10) == Region(1, 2, 3, 4)

    def test_coerce_bad_value_raises(self):
        with pytest.raises(ValidationError, match="x1, y1, x2, y2"):
            Region.coerce((1, 2, 3), 10, 10)

    def test_clip(self):
        assert Region(-2, -2, 50, 50).clip(4, 3) == Region(0, 0, 4, 3)

    def test_clip_outside_is_empty(self):
        assert Region(10, 10, 20, 20).clip(4, 3).is_empty

    def test_inverted_is_empty(self):
        assert Region(3, 0, 1, 2).clip(4, 3).is_empty

    def test_slices(self):
        image = np.arange(12).reshape(3, 4)
        rows, cols = Region(1, 0, 3, 2).slices
        np.testing.assert_array_equal(image[rows, cols], [[1, 2], [5, 6]])
