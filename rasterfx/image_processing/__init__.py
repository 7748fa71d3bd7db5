# -*- coding: utf-8 -*-
"""
Image Processing - Filter interface, parameters, registry, and pipelines.

Provides the ``PixelFilter`` interface implemented by every rasterfx
filter, the ``Annotated`` parameter markers used to declare filter
configuration, the record registry that turns ``{type, ...}`` records back
into filters, and ``Pipeline`` for chaining filters over one buffer.

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

from rasterfx.image_processing.base import ImageProcessor, PixelFilter
from rasterfx.image_processing.buffer import Region, pixel_view
from rasterfx.image_processing.params import Check, Desc, Options, ParamSpec, Range
from rasterfx.image_processing.registry import (
    FILTER_REGISTRY,
    filter_from_json,
    filter_from_record,
    register_filter,
    to_json,
)
from rasterfx.image_processing.versioning import processor_tags, processor_version
from rasterfx.image_processing.pipeline import Pipeline
from rasterfx.image_processing.filters import MinMaxFilter, window_minmax

__all__ = [
    'ImageProcessor',
    'PixelFilter',
    'Region',
    'pixel_view',
    'Check',
    'Desc',
    'Options',
    'ParamSpec',
    'Range',
    'FILTER_REGISTRY',
    'filter_from_json',
    'filter_from_record',
    'register_filter',
    'to_json',
    'processor_tags',
    'processor_version',
    'Pipeline',
    'MinMaxFilter',
    'window_minmax',
]
