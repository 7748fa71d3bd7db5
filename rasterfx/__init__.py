# -*- coding: utf-8 -*-
"""
rasterfx - Tone and rank filters for 8-bit RGBA pixel buffers.

Filters that a host rendering layer applies to a caller-owned RGBA buffer
in place: histogram equalization chained with a Catmull-Rom tone curve,
and a windowed local minimum / maximum filter. Every filter reports a
neutral state and round-trips through a flat configuration record.

Dependencies
------------
numpy
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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from rasterfx.exceptions import (
    RasterFxError,
    ValidationError,
    ProcessorError,
)
from rasterfx.vocabulary import ProcessorCategory, WindowMode
from rasterfx.image_processing import (
    MinMaxFilter,
    Pipeline,
    PixelFilter,
    Region,
    filter_from_json,
    filter_from_record,
    to_json,
    window_minmax,
)
from rasterfx.tone import (
    AutoHistogramFilter,
    ControlPoint,
    ToneCurve,
    equalize,
)

__all__ = [
    'RasterFxError',
    'ValidationError',
    'ProcessorError',
    'ProcessorCategory',
    'WindowMode',
    'MinMaxFilter',
    'Pipeline',
    'PixelFilter',
    'Region',
    'filter_from_json',
    'filter_from_record',
    'to_json',
    'window_minmax',
    'AutoHistogramFilter',
    'ControlPoint',
    'ToneCurve',
    'equalize',
]
