# -*- coding: utf-8 -*-
"""
rasterfx Exception Hierarchy - Domain-specific exceptions for pixel filters.

Provides a small exception hierarchy that lets host rendering layers catch
rasterfx-specific errors distinctly from Python built-in exceptions. All
rasterfx exceptions subclass both ``RasterFxError`` and the appropriate
built-in exception for backward compatibility.

Only structurally invalid configuration is a hard failure. Data-dependent
edge cases (empty histogram region, black pixels, out-of-range curve
queries, window borders) are resolved by the filters themselves and never
raise.

Author
------
Steven Siebert

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


class RasterFxError(Exception):
    """Base exception for all rasterfx errors."""


class ValidationError(RasterFxError, ValueError):
    """Invalid pixel buffer, parameters, or configuration.

    Raised for malformed control point sets, buffer length mismatches,
    out-of-range parameters, and unknown configuration record types.
    """


class ProcessorError(RasterFxError, RuntimeError):
    """Algorithm or processing failure during apply().

    Raised when a filter encounters a non-recoverable error during
    execution (not an input validation issue).
    """
