# -*- coding: utf-8 -*-
"""
Pixel Buffers - RGBA buffer views, regions, and 8-bit rounding helpers.

Host rendering layers hand filters a flat, row-major sequence of unsigned
8-bit samples, four per pixel (R, G, B, A). Filters mutate that sequence
in place and never resize it. ``pixel_view`` wraps the caller's storage in
a ``(height, width, 4)`` ``uint8`` array that shares memory with it, so
writes through the view land in the caller's buffer.

Accepted buffers
    * ``np.ndarray`` of dtype ``uint8``, flat ``(W*H*4,)`` or ``(H, W, 4)``,
      C-contiguous and writable.
    * Any writable object exposing the buffer protocol (``bytearray``,
      writable ``memoryview``).

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
from typing import Any, NamedTuple

# Third-party
import numpy as np

# rasterfx internal
from rasterfx.exceptions import ValidationError

CHANNELS = 4


def pixel_view(buffer: Any, width: int, height: int) -> np.ndarray:
    """Return a writable ``(height, width, 4)`` view of an RGBA buffer.

    Parameters
    ----------
    buffer : np.ndarray or writable buffer
        Caller-owned RGBA samples, ``width * height * 4`` bytes.
    width : int
        Pixels per row. Must be positive.
    height : int
        Number of rows. Must be positive.

    Returns
    -------
    np.ndarray
        ``uint8`` view sharing memory with *buffer*.

    Raises
    ------
    ValidationError
        If the dimensions are not positive integers, the buffer has the
        wrong length, dtype, or layout, or the memory is read-only.
    """
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValidationError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
        if value <= 0:
            raise ValidationError(f"{name} must be > 0, got {value}")

    if isinstance(buffer, np.ndarray):
        arr = buffer
        if arr.dtype != np.uint8:
            raise ValidationError(
                f"Expected uint8 pixel buffer, got dtype {arr.dtype}"
            )
        if not arr.flags.c_contiguous:
            raise ValidationError("Pixel buffer must be C-contiguous")
    else:
        try:
            arr = np.frombuffer(buffer, dtype=np.uint8)
        except TypeError as exc:
            raise ValidationError(
                f"Unsupported pixel buffer type {type(buffer).__name__}"
            ) from exc

    if not arr.flags.writeable:
        raise ValidationError("Pixel buffer is read-only")

    expected = width * height * CHANNELS
    if arr.size != expected:
        raise ValidationError(
            f"Pixel buffer holds {arr.size} samples, expected "
            f"{expected} for {width}x{height} RGBA"
        )
    if arr.ndim not in (1, 3) or (arr.ndim == 3 and arr.shape != (height, width, CHANNELS)):
        raise ValidationError(
            f"Pixel buffer must be flat or shaped ({height}, {width}, 4), "
            f"got {arr.shape}"
        )
    return arr.reshape(height, width, CHANNELS)


def rgba_dimensions(source: np.ndarray) -> tuple:
    """Return ``(width, height)`` of an ``(H, W, 4)`` ``uint8`` array.

    Raises
    ------
    ValidationError
        If *source* is not an RGBA ``uint8`` image array.
    """
    if not isinstance(source, np.ndarray) or source.ndim != 3 or source.shape[2] != CHANNELS:
        shape = getattr(source, 'shape', None)
        raise ValidationError(f"Expected RGBA image (H, W, 4), got shape {shape}")
    if source.dtype != np.uint8:
        raise ValidationError(f"Expected uint8 dtype, got {source.dtype}")
    return source.shape[1], source.shape[0]


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to nearest integer with ties going up (``floor(v + 0.5)``).

    ``np.round`` rounds ties to even, which would send 127.5 to 128 but
    126.5 to 126; 8-bit level rounding here always sends ``.5`` upward.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def to_u8(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255], round half-up, and cast to ``uint8``."""
    return round_half_up(np.clip(values, 0.0, 255.0)).astype(np.uint8)


class Region(NamedTuple):
    """Half-open pixel rectangle ``x1 <= x < x2``, ``y1 <= y < y2``."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def full(cls, width: int, height: int) -> 'Region':
        """Region covering a whole ``width`` x ``height`` buffer."""
        return cls(0, 0, width, height)

    @classmethod
    def coerce(cls, value: Any, width: int, height: int) -> 'Region':
        """Build a region from ``None`` (full buffer) or a 4-sequence."""
        if value is None:
            return cls.full(width, height)
        if isinstance(value, cls):
            return value
        try:
            x1, y1, x2, y2 = (int(v) for v in value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Region must be (x1, y1, x2, y2), got {value!r}"
            ) from exc
        return cls(x1, y1, x2, y2)

    def clip(self, width: int, height: int) -> 'Region':
        """Intersect with the buffer bounds. The result may be empty."""
        x1 = min(max(self.x1, 0), width)
        y1 = min(max(self.y1, 0), height)
        x2 = min(max(self.x2, x1), width)
        y2 = min(max(self.y2, y1), height)
        return Region(x1, y1, x2, y2)

    @property
    def is_empty(self) -> bool:
        return self.x2 <= self.x1 or self.y2 <= self.y1

    @property
    def slices(self) -> tuple:
        """``(rows, cols)`` slices for indexing an ``(H, W, ...)`` array."""
        return slice(self.y1, self.y2), slice(self.x1, self.x2)
