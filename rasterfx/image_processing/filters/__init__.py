# -*- coding: utf-8 -*-
"""
Spatial Filters - Windowed rank filters over RGBA pixel buffers.

Rank Filters
    ``MinMaxFilter``: local minimum (erosion) or maximum (dilation) of the
    red channel, written to R, G and B
    ``window_minmax``: function form operating on a caller-owned buffer

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

from rasterfx.image_processing.filters.rank import MinMaxFilter, window_minmax

__all__ = [
    'MinMaxFilter',
    'window_minmax',
]
