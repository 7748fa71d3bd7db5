# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for RGBA pixel filters.

Defines the ``ImageProcessor`` common base class and the ``PixelFilter``
ABC implemented by every filter in the package. ``ImageProcessor``
provides version checking at first instantiation and
``typing.Annotated``-based tunable parameter declarations with automatic
``__init__`` generation and runtime resolution through ``**kwargs``.

``PixelFilter`` is the integration surface a host rendering layer sees:

- ``apply_to_2d(buffer, width, height)`` mutates a caller-owned RGBA
  buffer in place.
- ``apply(source)`` filters a copy of an ``(H, W, 4)`` array.
- ``is_neutral_state()`` reports whether applying would change nothing,
  so the host can skip the call.
- ``to_record()`` returns the flat ``{type, <params>}`` configuration
  record that ``rasterfx.image_processing.registry`` turns back into an
  equivalent filter.

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
import warnings
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

# Third-party
import numpy as np

# rasterfx internal
from rasterfx.image_processing.buffer import pixel_view, rgba_dimensions
from rasterfx.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all pixel processors.

    Provides two cross-cutting capabilities:

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning``
    at first instantiation.  The check uses ``__new__`` rather than
    ``__init_subclass__`` so that decorators have been applied by the time
    the check runs.

    **Tunable parameter flow**: Subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using constraint markers from
    :mod:`rasterfx.image_processing.params` (``Range``, ``Options``,
    ``Check``, ``Desc``).  ``__init_subclass__`` collects these into
    ``__param_specs__`` and auto-generates an ``__init__`` (unless the
    subclass defines its own).  At runtime, ``_resolve_params(kwargs)``
    merges instance values with keyword-argument overrides and validates
    constraints.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    #: Tuple of :class:`~rasterfx.image_processing.params.ParamSpec` built
    #: automatically by ``__init_subclass__`` from ``Annotated`` fields.
    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        For each declared parameter in ``__param_specs__``:

        1. If present in *kwargs*, use the *kwargs* value.
        2. Otherwise use the instance attribute (``self.<name>``).

        Every resolved value is validated (and normalized) by its spec.

        Parameters
        ----------
        kwargs : Dict[str, Any]
            Runtime keyword arguments.  May contain non-param keys
            (e.g. ``progress_callback``); those are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        TypeError
            If a value has the wrong type.
        ValidationError
            If a value violates its constraints.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            else:
                value = getattr(self, spec.name)
            resolved[spec.name] = spec.validate(value)
        return resolved

    def _report_progress(
        self, kwargs: Dict[str, Any], fraction: float
    ) -> None:
        """Report progress to an optional ``progress_callback`` kwarg.

        No-op when the caller did not provide a callback.
        """
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


def _record_value(value: Any) -> Any:
    """Convert a parameter value to its plain (JSON-compatible) form."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [_record_value(v) for v in value]
    return value


class PixelFilter(ImageProcessor):
    """
    Abstract base class for in-place RGBA pixel filters.

    Subclasses set ``filter_type`` (the ``type`` key of their
    configuration record) and implement ``_apply_rgba``, which receives an
    ``(H, W, 4)`` ``uint8`` view of the caller's buffer plus the resolved
    parameters and mutates the view in place. Subclasses whose
    configuration can make them a no-op override ``_is_neutral``.
    """

    #: Value of the ``type`` key in configuration records.
    filter_type: ClassVar[str] = ''

    def apply_to_2d(
        self, buffer: Any, width: int, height: int, **kwargs: Any
    ) -> None:
        """Filter a caller-owned RGBA buffer in place.

        Parameters
        ----------
        buffer : np.ndarray or writable buffer
            ``width * height * 4`` unsigned 8-bit samples, row-major.
        width : int
            Pixels per row.
        height : int
            Number of rows.
        **kwargs
            Runtime parameter overrides and ``progress_callback``.

        Raises
        ------
        ValidationError
            If the buffer or a parameter override is invalid.
        """
        pixels = pixel_view(buffer, width, height)
        params = self._resolve_params(kwargs)
        if self._is_neutral(params):
            logger.debug("%s is in neutral state, skipping", type(self).__qualname__)
            return
        self._apply_rgba(pixels, params, **kwargs)

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Return a filtered copy of an ``(H, W, 4)`` ``uint8`` image.

        Parameters
        ----------
        source : np.ndarray
            RGBA image, shape ``(rows, cols, 4)``, dtype ``uint8``.

        Returns
        -------
        np.ndarray
            Filtered image, same shape and dtype. *source* is untouched.
        """
        width, height = rgba_dimensions(source)
        result = np.ascontiguousarray(source).copy()
        self.apply_to_2d(result, width, height, **kwargs)
        return result

    def is_neutral_state(self, **kwargs: Any) -> bool:
        """Whether applying this filter would leave every pixel unchanged."""
        return self._is_neutral(self._resolve_params(kwargs))

    def to_record(self) -> Dict[str, Any]:
        """Flat configuration record ``{'type': ..., <param>: <value>}``."""
        record: Dict[str, Any] = {'type': self.filter_type}
        for spec in type(self).__param_specs__:
            record[spec.name] = _record_value(getattr(self, spec.name))
        return record

    def _is_neutral(self, params: Dict[str, Any]) -> bool:
        return False

    @abstractmethod
    def _apply_rgba(
        self, pixels: np.ndarray, params: Dict[str, Any], **kwargs: Any
    ) -> None:
        """Mutate an ``(H, W, 4)`` ``uint8`` view in place.

        Parameters
        ----------
        pixels : np.ndarray
            View sharing memory with the caller's buffer.
        params : Dict[str, Any]
            Resolved, validated parameters.
        """
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelFilter):
            return NotImplemented
        return self.to_record() == other.to_record()

    __hash__ = None

    def __repr__(self) -> str:
        params = ', '.join(
            f"{s.name}={getattr(self, s.name)!r}"
            for s in type(self).__param_specs__
        )
        return f"{type(self).__name__}({params})"
