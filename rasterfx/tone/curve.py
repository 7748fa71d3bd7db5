# -*- coding: utf-8 -*-
"""
Tone Curve - Catmull-Rom tangent cubic Hermite curve through control points.

A tone curve maps input levels to output levels through a sparse, ordered
set of ``(x, y)`` control points. Each segment between neighboring points
is a parametric cubic Hermite spline in ``t`` in [0, 1]:

    p(t) = h00(t) * p[i] + h10(t) * m[i] + h01(t) * p[i+1] + h11(t) * m[i+1]

    h00(t) = (1 + 2t)(1 - t)^2        h10(t) = t(1 - t)^2
    h01(t) = t^2(3 - 2t)              h11(t) = t^2(t - 1)

with tangents estimated from neighboring points under uniform knots
(one-sided at the ends, centered in the interior, scaled by one half).

Because the curve is parametric in ``t`` rather than a function of ``x``,
``evaluate(x)`` finds the ``t`` whose ``px`` matches ``x`` by bisection,
then returns ``py`` clamped to [0, 255] and rounded.

Boundary policy
    Queries below the first or above the last control point's ``x`` are
    clamped to that endpoint's ``y``.

Termination
    Bisection accepts ``|px - x| < 0.01`` and is capped at 32 halvings.
    When the cap is hit (only possible for curves whose ``px`` is not
    monotonic in ``t``) the candidate with the smallest ``|px - x|`` wins.

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
import math
from numbers import Real
from typing import Any, Iterable, Mapping, NamedTuple, Sequence, Tuple

# Third-party
import numpy as np

# rasterfx internal
from rasterfx.exceptions import ValidationError

logger = logging.getLogger(__name__)

#: Acceptance tolerance on ``|px - x|`` during bisection.
BISECTION_TOLERANCE = 0.01

#: Maximum number of bisection steps per evaluation.
MAX_BISECTION_ITERATIONS = 32


class ControlPoint(NamedTuple):
    """An ``(input level, output level)`` pair, conventionally in [0, 255]."""

    x: float
    y: float


#: The identity mapping.
IDENTITY_POINTS: Tuple[ControlPoint, ...] = (
    ControlPoint(0, 0),
    ControlPoint(255, 255),
)


def _as_control_point(value: Any) -> ControlPoint:
    if isinstance(value, Mapping):
        try:
            x, y = value['x'], value['y']
        except KeyError as exc:
            raise ValidationError(
                f"Control point mapping needs 'x' and 'y' keys, got {value!r}"
            ) from exc
    else:
        try:
            x, y = value
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Control point must be an (x, y) pair, got {value!r}"
            ) from exc
    for coord in (x, y):
        if isinstance(coord, bool) or not isinstance(coord, Real):
            raise ValidationError(
                f"Control point coordinates must be real numbers, got {value!r}"
            )
        if not math.isfinite(coord):
            raise ValidationError(
                f"Control point coordinates must be finite, got {value!r}"
            )
    return ControlPoint(x, y)


def sort_control_points(points: Iterable[Any]) -> Tuple[ControlPoint, ...]:
    """Return *points* as ``ControlPoint`` tuples ordered by ``x``.

    Points sharing an ``x`` are ordered by descending ``y``; such a set is
    still rejected by ``validate_control_points``.
    """
    converted = [_as_control_point(p) for p in points]
    return tuple(sorted(converted, key=lambda p: (p.x, -p.y)))


def validate_control_points(points: Any) -> Tuple[ControlPoint, ...]:
    """Validate a control point set and normalize it to ``ControlPoint`` tuples.

    Parameters
    ----------
    points : Sequence
        ``ControlPoint`` instances, ``(x, y)`` pairs, or ``{'x', 'y'}``
        mappings.

    Returns
    -------
    Tuple[ControlPoint, ...]

    Raises
    ------
    ValidationError
        If fewer than two points are given, a point is malformed, or ``x``
        is not strictly increasing.
    """
    if isinstance(points, (str, bytes)) or not isinstance(points, Iterable):
        raise ValidationError(
            f"Control points must be a sequence of (x, y) pairs, got {points!r}"
        )
    converted = tuple(_as_control_point(p) for p in points)
    if len(converted) < 2:
        raise ValidationError(
            f"A tone curve needs at least 2 control points, got {len(converted)}"
        )
    for left, right in zip(converted, converted[1:]):
        if not right.x > left.x:
            raise ValidationError(
                f"Control point x must be strictly increasing, "
                f"got {left.x!r} then {right.x!r}"
            )
    return converted


def _h00(t: float) -> float:
    return (1 + 2 * t) * (1 - t) * (1 - t)


def _h10(t: float) -> float:
    return t * (1 - t) * (1 - t)


def _h01(t: float) -> float:
    return t * t * (3 - 2 * t)


def _h11(t: float) -> float:
    return t * t * (t - 1)


def _to_level(y: float) -> int:
    return int(min(max(math.floor(y + 0.5), 0), 255))


class ToneCurve:
    """Monotone tone curve evaluated by bisection on a Hermite spline.

    Parameters
    ----------
    points : Sequence
        Control point set, at least two points with strictly increasing
        ``x``. See ``validate_control_points`` for accepted forms.

    Raises
    ------
    ValidationError
        If the control point set is malformed.

    Examples
    --------
    >>> curve = ToneCurve([(0, 0), (255, 255)])
    >>> curve.evaluate(128)
    128
    >>> lut = ToneCurve([(0, 0), (64, 40), (192, 220), (255, 255)]).lookup_table()
    """

    __slots__ = ('_points', '_tangents')

    def __init__(self, points: Sequence[Any] = IDENTITY_POINTS) -> None:
        self._points = validate_control_points(points)
        self._tangents = self._estimate_tangents(self._points)

    @classmethod
    def build(cls, points: Sequence[Any]) -> 'ToneCurve':
        """Build a curve from an ordered control point set."""
        return cls(points)

    @classmethod
    def from_unordered(cls, points: Iterable[Any]) -> 'ToneCurve':
        """Build a curve after ordering *points* by ``x``."""
        return cls(sort_control_points(points))

    @staticmethod
    def _estimate_tangents(
        pts: Tuple[ControlPoint, ...]
    ) -> Tuple[ControlPoint, ...]:
        n = len(pts)
        tangents = []
        for i in range(n):
            if i == 0:
                a, b = pts[0], pts[1]
            elif i == n - 1:
                a, b = pts[n - 2], pts[n - 1]
            else:
                a, b = pts[i - 1], pts[i + 1]
            tangents.append(ControlPoint(0.5 * (b.x - a.x), 0.5 * (b.y - a.y)))
        return tuple(tangents)

    @property
    def points(self) -> Tuple[ControlPoint, ...]:
        return self._points

    @property
    def tangents(self) -> Tuple[ControlPoint, ...]:
        return self._tangents

    def _segment(self, x: float) -> int:
        for i in range(len(self._points) - 1):
            if self._points[i].x <= x <= self._points[i + 1].x:
                return i
        return -1

    def evaluate(self, x: float) -> int:
        """Map input level *x* to an output level in [0, 255].

        Parameters
        ----------
        x : float
            Input level. Values outside the control points' ``x`` range
            are clamped to the nearest endpoint.

        Returns
        -------
        int
            Output level, clamped to [0, 255] and rounded half-up.
        """
        first, last = self._points[0], self._points[-1]
        if x <= first.x:
            return _to_level(first.y)
        if x >= last.x:
            return _to_level(last.y)

        i = self._segment(x)
        left, right = self._points[i], self._points[i + 1]
        m_left, m_right = self._tangents[i], self._tangents[i + 1]

        t, lo, hi = 0.5, 0.0, 1.0
        best_err, best_y = math.inf, left.y
        for _ in range(MAX_BISECTION_ITERATIONS):
            h00, h10, h01, h11 = _h00(t), _h10(t), _h01(t), _h11(t)
            px = h00 * left.x + h10 * m_left.x + h01 * right.x + h11 * m_right.x
            py = h00 * left.y + h10 * m_left.y + h01 * right.y + h11 * m_right.y

            err = abs(px - x)
            if err < BISECTION_TOLERANCE:
                return _to_level(py)
            if err < best_err:
                best_err, best_y = err, py

            if x > px:
                lo = t
            else:
                hi = t
            t = 0.5 * (lo + hi)

        logger.debug(
            "Bisection did not converge for x=%r in segment %d "
            "(residual %.4g); using closest candidate", x, i, best_err,
        )
        return _to_level(best_y)

    def __call__(self, x: float) -> int:
        return self.evaluate(x)

    def lookup_table(self) -> np.ndarray:
        """Evaluate the curve at every 8-bit level.

        Returns
        -------
        np.ndarray
            ``uint8`` array of length 256; ``lut[v] == evaluate(v)``.
        """
        return np.array([self.evaluate(v) for v in range(256)], dtype=np.uint8)

    @property
    def is_identity(self) -> bool:
        """Whether every 8-bit level maps to itself."""
        return bool(np.array_equal(self.lookup_table(), np.arange(256)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToneCurve):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        pts = ', '.join(f"({p.x!r}, {p.y!r})" for p in self._points)
        return f"ToneCurve([{pts}])"


def build(points: Sequence[Any]) -> ToneCurve:
    """Build a ``ToneCurve`` from an ordered control point set."""
    return ToneCurve.build(points)


def evaluate(curve: ToneCurve, x: float) -> int:
    """Evaluate *curve* at input level *x*. See ``ToneCurve.evaluate``."""
    return curve.evaluate(x)
