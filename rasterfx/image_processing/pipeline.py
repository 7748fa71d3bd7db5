# -*- coding: utf-8 -*-
"""
Pipeline - Composable sequence of pixel filters.

Chains multiple ``PixelFilter`` instances into a single filter that
mutates the caller's buffer step by step. Steps in their neutral state are
skipped. The pipeline's configuration record nests the records of its
steps, so a whole chain round-trips through
``rasterfx.image_processing.registry``.

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
import logging
from typing import Any, Dict, List, Sequence

# Third-party
import numpy as np

# rasterfx internal
from rasterfx.exceptions import ProcessorError, RasterFxError, ValidationError
from rasterfx.image_processing.base import PixelFilter
from rasterfx.image_processing.registry import (
    filter_from_record,
    register_record_factory,
)
from rasterfx.image_processing.versioning import processor_tags
from rasterfx.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


@processor_tags(category=ProcessorCategory.PIPELINE,
                description="Sequential chain of pixel filters")
class Pipeline(PixelFilter):
    """Sequential chain of pixel filters.

    Applies a sequence of ``PixelFilter`` instances in order to the same
    buffer. The pipeline itself is a ``PixelFilter``, so it can be nested
    inside other pipelines.

    Parameters
    ----------
    steps : Sequence[PixelFilter]
        Ordered filters to apply. Must contain at least one filter.

    Examples
    --------
    >>> from rasterfx import AutoHistogramFilter, MinMaxFilter, Pipeline
    >>>
    >>> pipe = Pipeline([
    ...     AutoHistogramFilter(points=[[0, 0], [128, 100], [255, 255]]),
    ...     MinMaxFilter(blocksize=3, mode='max'),
    ... ])
    >>> pipe.apply_to_2d(image_data, width, height)

    With progress reporting:

    >>> pipe.apply_to_2d(image_data, width, height,
    ...                  progress_callback=lambda f: print(f"{f:.0%}"))
    """

    __processor_version__ = '1.0.0'

    filter_type = 'Pipeline'

    def __init__(self, steps: Sequence[PixelFilter]) -> None:
        if not steps:
            raise ValidationError("Pipeline requires at least one filter")
        for i, step in enumerate(steps):
            if not isinstance(step, PixelFilter):
                raise TypeError(
                    f"Step {i} is not a PixelFilter: {type(step).__name__}"
                )
        self._steps: List[PixelFilter] = list(steps)

    @property
    def steps(self) -> List[PixelFilter]:
        """Shallow copy of the ordered step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        step_names = [type(s).__name__ for s in self._steps]
        return f"Pipeline({step_names})"

    def to_record(self) -> Dict[str, Any]:
        return {
            'type': self.filter_type,
            'steps': [step.to_record() for step in self._steps],
        }

    def _is_neutral(self, params: Dict[str, Any]) -> bool:
        return all(step.is_neutral_state() for step in self._steps)

    def _apply_rgba(
        self, pixels: np.ndarray, params: Dict[str, Any], **kwargs: Any
    ) -> None:
        """Apply every non-neutral step in sequence.

        ``progress_callback`` is intercepted and rescaled so each step
        reports its proportional share of overall progress. Other keyword
        arguments are not forwarded; each step runs with its own
        configuration. Unexpected step failures are re-raised as
        ``ProcessorError``.
        """
        n = len(self._steps)
        outer_cb = kwargs.get('progress_callback')
        height, width = pixels.shape[:2]

        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)

            step_kwargs: Dict[str, Any] = {}
            if outer_cb is not None:
                base = i / n
                scale = 1.0 / n
                step_kwargs['progress_callback'] = (
                    lambda f, _b=base, _s=scale: outer_cb(_b + f * _s)
                )

            try:
                step.apply_to_2d(pixels, width, height, **step_kwargs)
            except RasterFxError:
                raise
            except Exception as exc:
                raise ProcessorError(
                    f"Pipeline step {i} ({type(step).__name__}) failed: {exc}"
                ) from exc

            if outer_cb is not None:
                outer_cb((i + 1) / n)


@register_record_factory(Pipeline.filter_type)
def _pipeline_from_record(params: Dict[str, Any]) -> Pipeline:
    steps = params.pop('steps', None)
    if params:
        raise ValidationError(
            f"Unexpected Pipeline record keys: {', '.join(sorted(params))}"
        )
    if not isinstance(steps, list):
        raise ValidationError("Pipeline record needs a 'steps' list")
    return Pipeline([filter_from_record(step) for step in steps])
