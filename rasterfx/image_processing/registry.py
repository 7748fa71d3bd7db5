# -*- coding: utf-8 -*-
"""
Filter Registry - Configuration record (de)serialization for pixel filters.

Filters are persisted and transferred as flat key-value records such as
``{'type': 'MinMaxValue', 'blocksize': 3, 'mode': 'min'}``. The ``type``
key selects a class registered with ``@register_filter``; the remaining
keys are that class's tunable parameters. Round-tripping a record through
``filter_from_record`` and ``to_record`` reproduces identical parameters.

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

# Standard library
import json
import logging
from typing import Any, Callable, Dict, Mapping, Type, TypeVar, TYPE_CHECKING

# rasterfx internal
from rasterfx.exceptions import ValidationError

if TYPE_CHECKING:
    from rasterfx.image_processing.base import PixelFilter

logger = logging.getLogger(__name__)

T = TypeVar('T')

#: ``filter_type`` -> filter class.
FILTER_REGISTRY: Dict[str, type] = {}

#: ``filter_type`` -> factory overriding the keyword-argument constructor.
_RECORD_FACTORIES: Dict[str, Callable[[Dict[str, Any]], 'PixelFilter']] = {}


def register_filter(cls: Type[T]) -> Type[T]:
    """Class decorator registering a filter under its ``filter_type``.

    Raises
    ------
    TypeError
        If the class has no ``filter_type`` or the type is already taken
        by a different class.
    """
    filter_type = getattr(cls, 'filter_type', '')
    if not filter_type:
        raise TypeError(f"{cls.__qualname__} must define a filter_type")
    existing = FILTER_REGISTRY.get(filter_type)
    if existing is not None and existing is not cls:
        raise TypeError(
            f"filter_type {filter_type!r} already registered by "
            f"{existing.__qualname__}"
        )
    FILTER_REGISTRY[filter_type] = cls
    return cls


def register_record_factory(
    filter_type: str,
) -> Callable[[Callable[[Dict[str, Any]], 'PixelFilter']],
              Callable[[Dict[str, Any]], 'PixelFilter']]:
    """Register a custom record -> filter factory for *filter_type*.

    Used by filters whose records nest other records (``Pipeline``).
    """
    def decorator(func):
        _RECORD_FACTORIES[filter_type] = func
        return func
    return decorator


def filter_from_record(record: Mapping[str, Any]) -> 'PixelFilter':
    """Reconstruct a filter from its configuration record.

    Parameters
    ----------
    record : Mapping[str, Any]
        Flat record with a ``type`` key plus parameter keys. Missing
        parameters take their defaults.

    Returns
    -------
    PixelFilter

    Raises
    ------
    ValidationError
        If the record has no known ``type`` or its parameters are invalid.
    """
    if not isinstance(record, Mapping):
        raise ValidationError(
            f"Filter record must be a mapping, got {type(record).__name__}"
        )
    params = dict(record)
    filter_type = params.pop('type', None)
    if filter_type is None:
        raise ValidationError("Filter record has no 'type' key")

    factory = _RECORD_FACTORIES.get(filter_type)
    cls = FILTER_REGISTRY.get(filter_type)
    if factory is None and cls is None:
        raise ValidationError(
            f"Unknown filter type {filter_type!r}; registered types: "
            f"{sorted(FILTER_REGISTRY)}"
        )

    logger.debug("Building %s from record", filter_type)
    try:
        if factory is not None:
            return factory(params)
        return cls(**params)
    except TypeError as exc:
        raise ValidationError(f"Invalid {filter_type} record: {exc}") from exc


def to_json(pixel_filter: 'PixelFilter', **kwargs: Any) -> str:
    """Serialize a filter's configuration record to JSON."""
    return json.dumps(pixel_filter.to_record(), **kwargs)


def filter_from_json(text: str) -> 'PixelFilter':
    """Reconstruct a filter from a JSON configuration record."""
    try:
        record = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Filter record is not valid JSON: {exc}") from exc
    return filter_from_record(record)
