# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared window size and mode validation.

Provides reusable validation functions for the windowed rank filters.
``blocksize`` values of 0 and 1 are legal and mean "no window", which the
filters report through ``is_neutral_state()``.

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

# rasterfx internal
from rasterfx.exceptions import ValidationError
from rasterfx.vocabulary import WindowMode


WINDOW_MODES = tuple(m.value for m in WindowMode)


def validate_radius(radius: int, name: str = 'radius') -> None:
    """Validate that a window radius is a non-negative integer.

    Raises
    ------
    ValidationError
        If ``radius`` is not an integer or is negative.
    """
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(radius).__name__}"
        )
    if radius < 0:
        raise ValidationError(f"{name} must be >= 0, got {radius}")


def validate_window_mode(mode) -> str:
    """Validate a rank mode and return it as a plain string.

    Accepts ``'min'``, ``'max'`` or a ``WindowMode`` member.

    Raises
    ------
    ValidationError
        If ``mode`` is not a supported order statistic.
    """
    if isinstance(mode, WindowMode):
        return mode.value
    if mode not in WINDOW_MODES:
        raise ValidationError(
            f"mode must be one of {WINDOW_MODES}, got {mode!r}"
        )
    return mode
