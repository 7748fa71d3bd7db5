# -*- coding: utf-8 -*-
"""
Histogram Equalization - Global red-keyed equalization with an optional tone curve.

Builds a 256-bin histogram of the red channel over a region, accumulates
it into a cumulative distribution, normalizes that to the 8-bit output
range, and rescales every pixel's R, G and B by the ratio between its
equalized and original red level. The result can then be passed through
a ``ToneCurve``.

Steps
    1. ``histogram``: ``bin = floor((R / 255) * (num_bins - 1))`` over the
       region's pixels.
    2. ``cumulative_histogram``: running sum of the bins.
    3. ``normalize_cdf``: scale so the last entry equals 255. An empty
       region (total of zero) makes the whole call a no-op.
    4. Per pixel: ``ratio = ncdf[R] / R`` (``1`` for ``R == 0``);
       ``R, G, B = round(clamp(channel * ratio, 0, 255))``.
    5. Optional tone curve remap of R, G, B.

Alpha is never modified. The histogram covers the region, the remap covers
the whole buffer unless ``region_only`` is set.

- ``AutoHistogramFilter``: equalization over the full buffer chained with
  a tone curve built from the filter's ``points``.

Dependencies
------------
numpy

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

# Standard library
import logging
from typing import Annotated, Any, Dict, Optional

# Third-party
import numpy as np

# rasterfx internal
from rasterfx.exceptions import ValidationError
from rasterfx.image_processing.base import PixelFilter
from rasterfx.image_processing.buffer import Region, pixel_view, to_u8
from rasterfx.image_processing.params import Check, Desc
from rasterfx.image_processing.registry import register_filter
from rasterfx.image_processing.versioning import processor_tags, processor_version
from rasterfx.tone.curve import IDENTITY_POINTS, ToneCurve, validate_control_points
from rasterfx.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

NUM_BINS = 256
OUTPUT_SCALE = 255.0


def histogram(
    channel: np.ndarray,
    region: Optional[Any] = None,
    num_bins: int = NUM_BINS,
) -> np.ndarray:
    """Count 8-bit samples of one channel into ``num_bins`` bins.

    Parameters
    ----------
    channel : np.ndarray
        2D ``(rows, cols)`` array of 8-bit samples.
    region : Region or (x1, y1, x2, y2), optional
        Half-open rectangle to count. Clipped to the channel bounds.
        Default is the whole channel.
    num_bins : int
        Number of bins, >= 2. Default 256.

    Returns
    -------
    np.ndarray
        ``int64`` counts, length ``num_bins``.
    """
    if isinstance(num_bins, bool) or not isinstance(num_bins, int) or num_bins < 2:
        raise ValidationError(f"num_bins must be an integer >= 2, got {num_bins!r}")
    if channel.ndim != 2:
        raise ValidationError(f"Expected a 2D channel, got shape {channel.shape}")

    rows, cols = channel.shape
    area = Region.coerce(region, cols, rows).clip(cols, rows)
    samples = channel[area.slices].astype(np.float64)
    bins = np.floor((samples / 255.0) * (num_bins - 1)).astype(np.intp)
    return np.bincount(bins.ravel(), minlength=num_bins).astype(np.int64)


def cumulative_histogram(hist: np.ndarray) -> np.ndarray:
    """Running sum of *hist*: ``cdf[0] = hist[0]``, ``cdf[i] = cdf[i-1] + hist[i]``."""
    return np.cumsum(hist)


def normalize_cdf(cdf: np.ndarray, scale: float = 1.0) -> Optional[np.ndarray]:
    """Scale *cdf* so that its last entry equals *scale*.

    Returns
    -------
    np.ndarray or None
        ``float64`` normalized distribution, or ``None`` when the total
        count is zero (nothing was histogrammed).
    """
    total = cdf[-1]
    if total == 0:
        return None
    return cdf.astype(np.float64) / float(total) * scale


def _equalize_pixels(
    pixels: np.ndarray,
    region: Region,
    tone_curve: Optional[ToneCurve],
    region_only: bool,
) -> bool:
    """Equalize an ``(H, W, 4)`` view in place. Returns False on a no-op."""
    height, width = pixels.shape[:2]
    region = region.clip(width, height)

    hist = histogram(pixels[..., 0], region)
    ncdf = normalize_cdf(cumulative_histogram(hist), OUTPUT_SCALE)
    if ncdf is None:
        logger.debug("Empty histogram region %s, leaving buffer unchanged", region)
        return False

    target = pixels[region.slices] if region_only else pixels
    lev = target[..., 0].astype(np.intp)

    ratio = np.ones(lev.shape, dtype=np.float64)
    lit = lev != 0
    ratio[lit] = ncdf[lev[lit]] / lev[lit]

    rgb = to_u8(target[..., :3].astype(np.float64) * ratio[..., np.newaxis])
    if tone_curve is not None:
        rgb = tone_curve.lookup_table()[rgb]
    target[..., :3] = rgb
    return True


def equalize(
    buffer: Any,
    width: int,
    height: int,
    region: Optional[Any] = None,
    tone_curve: Optional[ToneCurve] = None,
    region_only: bool = False,
) -> None:
    """Histogram-equalize an RGBA buffer in place.

    Parameters
    ----------
    buffer : np.ndarray or writable buffer
        Caller-owned RGBA samples, ``width * height * 4`` bytes.
    width, height : int
        Buffer dimensions in pixels.
    region : Region or (x1, y1, x2, y2), optional
        Rectangle whose red channel is histogrammed. Default is the whole
        buffer. A region with no pixels inside the buffer is a no-op.
    tone_curve : ToneCurve, optional
        Curve applied to the equalized R, G and B.
    region_only : bool
        Remap only the pixels inside *region* instead of the whole buffer.

    Raises
    ------
    ValidationError
        If the buffer, region, or tone curve is invalid.
    """
    if tone_curve is not None and not isinstance(tone_curve, ToneCurve):
        raise ValidationError(
            f"tone_curve must be a ToneCurve, got {type(tone_curve).__name__}"
        )
    pixels = pixel_view(buffer, width, height)
    _equalize_pixels(
        pixels, Region.coerce(region, width, height), tone_curve, region_only,
    )


@register_filter
@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Histogram equalization followed by a tone curve')
class AutoHistogramFilter(PixelFilter):
    """Global histogram equalization chained with a tone curve.

    Equalizes the whole buffer keyed on the red channel, then maps R, G
    and B through a ``ToneCurve`` built from ``points``. With the default
    identity points the curve leaves the equalized levels unchanged.

    Parameters
    ----------
    points : Sequence
        Tone curve control points, at least two with strictly increasing
        ``x``. Default ``((0, 0), (255, 255))``.

    Examples
    --------
    >>> f = AutoHistogramFilter(points=[[0, 0], [128, 160], [255, 255]])
    >>> f.apply_to_2d(image_data, width, height)
    >>> f.to_record()
    {'type': 'AutoHistogramFilter', 'points': [[0, 0], [128, 160], [255, 255]]}
    """

    filter_type = 'AutoHistogramFilter'

    points: Annotated[tuple, Check(validate_control_points),
                      Desc('Tone curve control points (x, y)')] = IDENTITY_POINTS

    def _apply_rgba(
        self, pixels: np.ndarray, params: Dict[str, Any], **kwargs: Any
    ) -> None:
        curve = ToneCurve(params['points'])
        height, width = pixels.shape[:2]
        self._report_progress(kwargs, 0.0)
        _equalize_pixels(pixels, Region.full(width, height), curve, False)
        self._report_progress(kwargs, 1.0)
