# -*- coding: utf-8 -*-
"""
Rank Filters - Windowed local minimum / maximum over RGBA buffers.

For every pixel, takes the minimum or maximum red level of a square
neighborhood read from a snapshot of the input, and writes it into R, G
and B. Alpha is untouched.

Window geometry
    A window of radius ``r`` spans row offsets ``-r .. r-1`` and column
    offsets ``-r .. r-1`` (side ``2r``). Coordinates falling outside the
    buffer are clamped to the nearest edge row/column, so border pixels
    reuse boundary values.

The window scan is backed by ``scipy.ndimage.minimum_filter`` /
``maximum_filter`` with ``mode='nearest'``. For an even ``size=2r`` scipy
centers the footprint at index ``r``, covering exactly the offsets above,
so results match a brute-force clamped scan pixel for pixel.

- ``window_minmax``: function form operating on a caller-owned buffer
- ``MinMaxFilter``: configurable filter (``blocksize``, ``mode``)

Dependencies
------------
scipy

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
from typing import Annotated, Any, Dict

# Third-party
import numpy as np
from scipy.ndimage import maximum_filter, minimum_filter

# rasterfx internal
from rasterfx.image_processing.base import PixelFilter
from rasterfx.image_processing.buffer import pixel_view
from rasterfx.image_processing.filters._validation import (
    validate_radius,
    validate_window_mode,
)
from rasterfx.image_processing.params import Desc, Options, Range
from rasterfx.image_processing.registry import register_filter
from rasterfx.image_processing.versioning import processor_tags, processor_version
from rasterfx.vocabulary import ProcessorCategory, WindowMode

logger = logging.getLogger(__name__)

_RANK_FUNCS = {
    WindowMode.MIN.value: minimum_filter,
    WindowMode.MAX.value: maximum_filter,
}


def _window_rank(pixels: np.ndarray, radius: int, mode: str) -> None:
    """Rank-filter an ``(H, W, 4)`` view in place."""
    if radius == 0:
        return
    snapshot = pixels[..., 0].copy()
    ranked = _RANK_FUNCS[mode](snapshot, size=2 * radius, mode='nearest')
    pixels[..., 0] = ranked
    pixels[..., 1] = ranked
    pixels[..., 2] = ranked


def window_minmax(
    buffer: Any,
    width: int,
    height: int,
    radius: int,
    mode: str = 'min',
) -> None:
    """Apply a windowed min or max filter to an RGBA buffer in place.

    Parameters
    ----------
    buffer : np.ndarray or writable buffer
        Caller-owned RGBA samples, ``width * height * 4`` bytes.
    width, height : int
        Buffer dimensions in pixels.
    radius : int
        Window radius, >= 0. The window side is ``2 * radius``; ``0``
        leaves the buffer unchanged.
    mode : str
        ``'min'`` or ``'max'``.

    Raises
    ------
    ValidationError
        If the buffer, radius, or mode is invalid.
    """
    validate_radius(radius)
    mode = validate_window_mode(mode)
    _window_rank(pixel_view(buffer, width, height), radius, mode)


@register_filter
@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS,
                description='Local minimum or maximum of the red channel')
class MinMaxFilter(PixelFilter):
    """Windowed local minimum / maximum filter.

    Replaces R, G and B of each pixel with the minimum (``mode='min'``,
    erosion-like) or maximum (``mode='max'``, dilation-like) red level in
    its neighborhood. The window radius is ``blocksize // 2``; a
    ``blocksize`` of 0 or 1 is the neutral state.

    Parameters
    ----------
    blocksize : int
        Nominal window size, >= 0. Default 3.
    mode : str
        ``'min'`` or ``'max'``. Default ``'min'``.

    Examples
    --------
    >>> f = MinMaxFilter(blocksize=5, mode='max')
    >>> f.apply_to_2d(image_data, width, height)
    >>> MinMaxFilter(blocksize=1).is_neutral_state()
    True
    """

    filter_type = 'MinMaxValue'

    blocksize: Annotated[int, Range(min=0),
                         Desc('Window size; radius is blocksize // 2')] = 3
    mode: Annotated[str, Options(*(m.value for m in WindowMode)),
                    Desc('Order statistic written to R, G and B')] = 'min'

    @property
    def radius(self) -> int:
        return self.blocksize // 2

    def _is_neutral(self, params: Dict[str, Any]) -> bool:
        return params['blocksize'] <= 1

    def _apply_rgba(
        self, pixels: np.ndarray, params: Dict[str, Any], **kwargs: Any
    ) -> None:
        radius = params['blocksize'] // 2
        logger.debug("MinMaxFilter mode=%s radius=%d on %dx%d",
                     params['mode'], radius, pixels.shape[1], pixels.shape[0])
        _window_rank(pixels, radius, params['mode'])
        self._report_progress(kwargs, 1.0)
