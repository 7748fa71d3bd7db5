# -*- coding: utf-8 -*-
"""
Histogram Equalization Tests - Histogram helpers, equalize(), and AutoHistogramFilter.

Tests the histogram, cumulative and normalized distributions, the per-pixel
ratio remap with its black-pixel and empty-region rules, region handling,
tone curve chaining, and the AutoHistogramFilter wrapper.

Dependencies
------------
pytest

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
from rasterfx.image_processing.buffer import Region
from rasterfx.tone.curve import ToneCurve
from rasterfx.tone.equalize import (
    AutoHistogramFilter,
    cumulative_histogram,
    equalize,
    histogram,
    normalize_cdf,
)


# ---------------------------------------------------------------------------
# Histogram helpers
# ---------------------------------------------------------------------------

class TestHistogram:
    """Test histogram, cumulative histogram, and normalization."""

    def test_counts_levels(self):
        channel = np.array([[0, 0, 7], [255, 7, 7]], dtype=np.uint8)
        hist = histogram(channel)
        assert hist.shape == (256,)
        assert hist[0] == 2
        assert hist[7] == 3
        assert hist[255] == 1
        assert hist.sum() == 6

    def test_region_limits_counted_pixels(self):
        channel = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8)
        hist = histogram(channel, Region(1, 0, 3, 1))
        assert hist.sum() == 2
        assert hist[2] == 1 and hist[3] == 1

    def test_region_accepts_plain_tuple(self):
        channel = np.arange(12, dtype=np.uint8).reshape(3, 4)
        hist = histogram(channel, (0, 1, 2, 3))
        assert hist.sum() == 4

    def test_region_is_clipped(self):
        channel = np.full((3, 3), 9, dtype=np.uint8)
        hist = histogram(channel, (-5, -5, 50, 50))
        assert hist[9] == 9

    def test_fewer_bins(self):
        channel = np.array([[0, 255]], dtype=np.uint8)
        hist = histogram(channel, num_bins=2)
        assert list(hist) == [1, 1]

    def test_invalid_bins_raise(self):
        channel = np.zeros((2, 2), dtype=np.uint8)
        with pytest.raises(ValidationError, match="num_bins"):
            histogram(channel, num_bins=1)

    def test_non_2d_channel_raises(self):
        with pytest.raises(ValidationError, match="2D"):
            histogram(np.zeros((2, 2, 4), dtype=np.uint8))

    def test_cumulative_is_running_sum(self):
        cdf = cumulative_histogram(np.array([1, 0, 2, 3]))
        assert list(cdf) == [1, 1, 3, 6]

    def test_normalize_scales_last_entry(self):
        ncdf = normalize_cdf(np.array([1, 1, 3, 6]), scale=255.0)
        assert ncdf[-1] == pytest.approx(255.0)
        assert ncdf[0] == pytest.approx(42.5)

    def test_normalize_empty_returns_none(self):
        assert normalize_cdf(np.zeros(256, dtype=np.int64), scale=255.0) is None


# ---------------------------------------------------------------------------
# equalize()
# ---------------------------------------------------------------------------

class TestEqualize:
    """Test in-place equalization on RGBA buffers."""

    def test_two_pixel_example(self):
        """cdf(0)=1, cdf(100)=2: black passes through, 100 scales by 2.55."""
        buf = np.array([0, 0, 0, 255, 100, 40, 20, 255], dtype=np.uint8)
        equalize(buf, 2, 1, tone_curve=ToneCurve([(0, 0), (255, 255)]))
        assert list(buf[:4]) == [0, 0, 0, 255]
        assert list(buf[4:]) == [255, 102, 51, 255]

    def test_black_pixels_keep_other_channels(self):
        """Red 0 means ratio 1, so G and B are left as they were."""
        buf = np.array([0, 90, 180, 255, 200, 200, 200, 255], dtype=np.uint8)
        equalize(buf, 2, 1)
        assert list(buf[:4]) == [0, 90, 180, 255]

    def test_all_zero_image_is_identity(self, rgba_factory):
        image = rgba_factory(np.zeros((4, 5)))
        before = image.copy()
        equalize(image, 5, 4)
        np.testing.assert_array_equal(image, before)

    def test_flat_white_image_is_identity(self, rgba_factory):
        image = rgba_factory(np.full((3, 3), 255))
        before = image.copy()
        equalize(image, 3, 3)
        np.testing.assert_array_equal(image, before)

    def test_flat_image_maps_to_top_of_range(self, rgba_factory):
        """A single-level histogram puts that level at the last cdf entry."""
        image = rgba_factory(np.full((2, 2), 100), green=40, blue=20)
        equalize(image, 2, 2)
        assert np.all(image[..., 0] == 255)
        assert np.all(image[..., 1] == 102)
        assert np.all(image[..., 2] == 51)

    def test_alpha_untouched(self, random_rgba):
        alpha = random_rgba[..., 3].copy()
        equalize(random_rgba, 17, 12)
        np.testing.assert_array_equal(random_rgba[..., 3], alpha)

    def test_matches_reference_formula(self, random_rgba):
        before = random_rgba.copy()
        equalize(random_rgba, 17, 12)

        red = before[..., 0].astype(np.int64)
        cdf = np.cumsum(np.bincount(red.ravel(), minlength=256))
        ncdf = cdf / cdf[-1] * 255.0
        ratio = np.where(red == 0, 1.0, ncdf[red] / np.maximum(red, 1))
        expected = np.floor(
            np.clip(before[..., :3] * ratio[..., None], 0, 255) + 0.5
        )
        np.testing.assert_array_equal(random_rgba[..., :3], expected)

    def test_bright_levels_increase(self, gradient_rgba):
        before = gradient_rgba.copy()
        equalize(gradient_rgba, 16, 16)
        assert np.all(gradient_rgba[..., 0] >= before[..., 0])

    def test_accepts_bytearray(self):
        buf = bytearray([0, 0, 0, 255, 100, 40, 20, 255])
        equalize(buf, 2, 1)
        assert list(buf) == [0, 0, 0, 255, 255, 102, 51, 255]

    def test_accepts_shaped_array(self, rgba_factory):
        image = rgba_factory([[0, 100]], green=[[0, 40]], blue=[[0, 20]])
        equalize(image, 2, 1)
        assert list(image[0, 1]) == [255, 102, 51, 255]

    def test_empty_region_is_noop(self, random_rgba):
        before = random_rgba.copy()
        equalize(random_rgba, 17, 12, region=(5, 5, 5, 10))
        np.testing.assert_array_equal(random_rgba, before)

    def test_region_outside_buffer_is_noop(self, random_rgba):
        before = random_rgba.copy()
        equalize(random_rgba, 17, 12, region=(100, 100, 200, 200))
        np.testing.assert_array_equal(random_rgba, before)

    def test_region_histogram_remaps_whole_buffer(self, rgba_factory):
        """Only the region is histogrammed, every pixel is remapped."""
        red = np.array([[100, 100, 50, 50]], dtype=np.uint8)
        image = rgba_factory(red)
        equalize(image, 4, 1, region=(0, 0, 2, 1))
        # Region holds only level 100, so ncdf[50] == 0 and ncdf[100] == 255
        assert list(image[0, :, 0]) == [255, 255, 0, 0]

    def test_region_only_leaves_outside_pixels(self, rgba_factory):
        red = np.array([[100, 100, 50, 50]], dtype=np.uint8)
        image = rgba_factory(red)
        equalize(image, 4, 1, region=(0, 0, 2, 1), region_only=True)
        assert list(image[0, :, 0]) == [255, 255, 50, 50]

    def test_tone_curve_applied_after_equalization(self, random_rgba):
        curve = ToneCurve([(0, 0), (64, 40), (192, 220), (255, 255)])
        plain = random_rgba.copy()
        equalize(plain, 17, 12)
        chained = random_rgba.copy()
        equalize(chained, 17, 12, tone_curve=curve)
        np.testing.assert_array_equal(
            chained[..., :3], curve.lookup_table()[plain[..., :3]]
        )
        np.testing.assert_array_equal(chained[..., 3], random_rgba[..., 3])

    def test_tone_curve_type_checked(self, random_rgba):
        with pytest.raises(ValidationError, match="ToneCurve"):
            equalize(random_rgba, 17, 12, tone_curve=[(0, 0), (255, 255)])

    def test_wrong_dimensions_raise(self, random_rgba):
        with pytest.raises(ValidationError, match="expected"):
            equalize(random_rgba, 10, 10)


# ---------------------------------------------------------------------------
# AutoHistogramFilter
# ---------------------------------------------------------------------------

class TestAutoHistogramFilter:
    """Test the configurable equalization filter."""

    def test_default_points_identity(self):
        f = AutoHistogramFilter()
        assert f.to_record() == {
            'type': 'AutoHistogramFilter',
            'points': [[0, 0], [255, 255]],
        }

    def test_matches_equalize_with_curve(self, random_rgba):
        points = [[0, 0], [128, 160], [255, 255]]
        expected = random_rgba.copy()
        equalize(expected, 17, 12, tone_curve=ToneCurve(points))

        result = AutoHistogramFilter(points=points).apply(random_rgba)
        np.testing.assert_array_equal(result, expected)

    def test_apply_returns_copy(self, random_rgba):
        before = random_rgba.copy()
        AutoHistogramFilter().apply(random_rgba)
        np.testing.assert_array_equal(random_rgba, before)

    def test_apply_to_2d_mutates_in_place(self):
        buf = np.array([0, 0, 0, 255, 100, 40, 20, 255], dtype=np.uint8)
        AutoHistogramFilter().apply_to_2d(buf, 2, 1)
        assert list(buf) == [0, 0, 0, 255, 255, 102, 51, 255]

    def test_never_neutral(self):
        assert AutoHistogramFilter().is_neutral_state() is False

    def test_invalid_points_raise(self):
        with pytest.raises(ValidationError):
            AutoHistogramFilter(points=[[0, 0]])

    def test_runtime_points_override(self, random_rgba):
        points = [[0, 255], [255, 0]]
        f = AutoHistogramFilter()
        overridden = f.apply(random_rgba, points=points)
        configured = AutoHistogramFilter(points=points).apply(random_rgba)
        np.testing.assert_array_equal(overridden, configured)

    def test_progress_reported(self, random_rgba):
        seen = []
        AutoHistogramFilter().apply(random_rgba, progress_callback=seen.append)
        assert seen[-1] == 1.0

    def test_version_and_tags(self):
        assert AutoHistogramFilter.__processor_version__ == '1.0.0'
        assert AutoHistogramFilter.__processor_tags__['category'].value == 'enhance'
