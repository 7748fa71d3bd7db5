# -*- coding: utf-8 -*-
"""
Shared fixtures for rasterfx tests - synthetic RGBA pixel buffers.

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

import numpy as np
import pytest


def make_rgba(red, green=None, blue=None, alpha=255):
    """Build an ``(H, W, 4)`` uint8 image from a 2D red channel."""
    red = np.asarray(red, dtype=np.uint8)
    image = np.empty(red.shape + (4,), dtype=np.uint8)
    image[..., 0] = red
    image[..., 1] = red if green is None else green
    image[..., 2] = red if blue is None else blue
    image[..., 3] = alpha
    return image


@pytest.fixture
def rgba_factory():
    """Factory building RGBA images from channel arrays."""
    return make_rgba


@pytest.fixture
def random_rgba():
    """Reproducible 12x17 RGBA image with independent random channels."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(12, 17, 4), dtype=np.uint8)


@pytest.fixture
def gradient_rgba():
    """16x16 image whose red level increases along each row."""
    red = np.tile(np.arange(0, 256, 16, dtype=np.uint8), (16, 1))
    return make_rgba(red, green=red // 2, blue=255 - red, alpha=200)
