# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability tag decorators for filters.

Provides the ``@processor_version`` class decorator for stamping semantic
version strings on pixel filter classes, and ``@processor_tags`` for
category and description metadata that host toolkits use to list and group
the available filters.

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
from typing import Optional, Type, TypeVar
import importlib.metadata

# rasterfx vocabulary
from rasterfx.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a processor version on a filter class.

    Sets ``__processor_version__`` as a class attribute. The version covers
    both the algorithm and the layout of the filter's configuration record.

    If a version is not provided, it is inferred from the installed
    ``rasterfx`` package metadata, falling back to ``'unknown'``.

    Parameters
    ----------
    version : str, optional
        Semantic version string (e.g., ``'1.0.0'``).

    Returns
    -------
    Callable
        Class decorator that sets ``__processor_version__`` on the class.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class MyFilter(PixelFilter):
    ...     def _apply_rgba(self, pixels, params):
    ...         pass
    >>>
    >>> MyFilter.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('rasterfx')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
):
    """Class decorator for processor capability metadata.

    Stamps ``__processor_tags__`` on the class with category and
    description metadata.

    Parameters
    ----------
    category : ProcessorCategory, optional
        Processing category.
    description : str, optional
        Short human-readable description of the filter's purpose.

    Raises
    ------
    TypeError
        If *category* is not a ``ProcessorCategory``. Raised at decoration
        time so typos fail at import.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
