#!/usr/bin/env python3
"""
Perceptual averaging of color buckets.

The average of a bucket is taken in LAB space: averaging sRGB or HSL
components gives muddy results and breaks on hue wrap-around. Reductions are
split into chunks so they can run on a thread pool; each chunk yields a
(partial LAB sum, count) pair, the pairs are combined, and the division by
the total count happens once at the end.
"""

from enum import Enum
from functools import reduce
from typing import Optional

import numpy as np

from color_space import as_color_array, from_lab, to_lab


DEFAULT_CHUNK_SIZE = 1 << 16


def chunked(colors: np.ndarray, chunk_size: int = DEFAULT_CHUNK_SIZE) -> list:
    """Split an (n, 3) array into consecutive views of at most chunk_size rows."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [colors[i:i + chunk_size] for i in range(0, len(colors), chunk_size)]


def lab_sum(colors: np.ndarray, encoding: str = 'srgb') -> tuple:
    """Partial result for one chunk: (sum of LAB vectors, number of colors)."""
    return to_lab(colors, encoding).sum(axis=0), len(colors)


def combine(left: tuple, right: tuple) -> tuple:
    return left[0] + right[0], left[1] + right[1]


def centroid_from_partials(partials, encoding: str = 'srgb') -> Optional[np.ndarray]:
    """Combine chunk partials and divide once. None if nothing was counted."""
    total, count = reduce(combine, partials, (np.zeros(3), 0))
    if count == 0:
        return None
    return from_lab((total / count).reshape(1, 3), encoding)[0]


def lab_centroid(colors, encoding: str = 'srgb', chunk_size: int = DEFAULT_CHUNK_SIZE,
                 executor=None) -> Optional[np.ndarray]:
    """
    Mean of colors in LAB space, converted back to `encoding`.

    Args:
        colors: Colors of shape (n, 3) in `encoding`
        encoding: 'srgb', 'hsl' or 'lab'; used for both input and output
        chunk_size: Rows per partial sum
        executor: Optional concurrent.futures executor for the partial sums

    Returns:
        Color array of shape (3,), or None if colors is empty
    """
    colors = as_color_array(colors)
    parts = chunked(colors, chunk_size)
    mapper = executor.map if executor is not None else map
    return centroid_from_partials(mapper(lab_sum, parts, [encoding] * len(parts)), encoding)


class AverageMethod(Enum):
    """Closed set of bucket averaging strategies."""
    LAB_CENTROID = 'lab-centroid'

    def partial(self, chunk: np.ndarray, encoding: str = 'srgb'):
        if self is AverageMethod.LAB_CENTROID:
            return lab_sum(chunk, encoding)
        raise NotImplementedError(self)

    def finish(self, partials, encoding: str = 'srgb') -> Optional[np.ndarray]:
        if self is AverageMethod.LAB_CENTROID:
            return centroid_from_partials(partials, encoding)
        raise NotImplementedError(self)

    def average(self, colors, encoding: str = 'srgb', chunk_size: int = DEFAULT_CHUNK_SIZE,
                executor=None) -> Optional[np.ndarray]:
        if self is AverageMethod.LAB_CENTROID:
            return lab_centroid(colors, encoding, chunk_size=chunk_size, executor=executor)
        raise NotImplementedError(self)
