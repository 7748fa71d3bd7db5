# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the rasterfx filter set.

Defines the controlled vocabularies used when tagging processors and
configuring rank filters, so tag values stay consistent and typo-free.

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

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging.

    Each value corresponds to a functional grouping of pixel filter
    operations.
    """

    FILTERS = "filters"
    ENHANCE = "enhance"
    PIPELINE = "pipeline"


class WindowMode(Enum):
    """Order statistic selected by the windowed rank filter."""

    MIN = "min"
    MAX = "max"
