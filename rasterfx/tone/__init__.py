# -*- coding: utf-8 -*-
"""
Tone - Tone curves and histogram equalization for RGBA pixel buffers.

- ``ToneCurve``: Catmull-Rom tangent Hermite curve through control points
- ``equalize``: red-keyed global histogram equalization, in place
- ``AutoHistogramFilter``: equalization chained with a tone curve

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

from rasterfx.tone.curve import (
    IDENTITY_POINTS,
    ControlPoint,
    ToneCurve,
    sort_control_points,
    validate_control_points,
)
from rasterfx.tone.equalize import (
    AutoHistogramFilter,
    cumulative_histogram,
    equalize,
    histogram,
    normalize_cdf,
)

__all__ = [
    'IDENTITY_POINTS',
    'ControlPoint',
    'ToneCurve',
    'sort_control_points',
    'validate_control_points',
    'AutoHistogramFilter',
    'cumulative_histogram',
    'equalize',
    'histogram',
    'normalize_cdf',
]
