#!/usr/bin/env python3
"""
Palette generation: partition samples into region buckets, average each
bucket in LAB space, rank accents and pick foreground/background.

Three steps per call:
    1. split       - one boolean filter per region over the samples
    2. reduce      - perceptual average + population for every bucket
    3. select      - extrapolate empty buckets, sort accents, choose fg/bg

Work is chunked and run on a ThreadPoolExecutor; numpy releases the GIL in
the vectorized kernels, so chunks of different buckets overlap.
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from average import DEFAULT_CHUNK_SIZE, AverageMethod, chunked
from color_space import as_color_array, check_encoding, lab_to_srgb, to_hsl, to_lab, to_srgb
from named_palette import SLOTS, Color, Colors, Palette
from region import Region, default_regions


class ModePreference(Enum):
    DARK = 'dark'
    LIGHT = 'light'

    @classmethod
    def parse(cls, value: str) -> 'ModePreference':
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid preference {value!r}, expected 'dark' or 'light'")


@dataclass(frozen=True)
class BucketResult:
    """Representative sRGB color of one bucket and how many samples it held."""
    color: np.ndarray
    count: int
    extrapolated: bool = False


# =============================================================================
# Partitioning
# =============================================================================

def _split_chunk(regions: Palette, chunk: np.ndarray, encoding: str) -> list:
    hsl = to_hsl(chunk, encoding)
    return [chunk[region.contains_hsl(hsl)] for region in regions]


def split(regions: Palette, colors, encoding: str = 'srgb',
          chunk_size: int = DEFAULT_CHUNK_SIZE, executor=None) -> Palette:
    """
    Partition colors into one bucket per region.

    Each bucket keeps the source order. A color matching several regions
    lands in each of them; one matching none is dropped.

    Args:
        regions: Palette of Region
        colors: Colors of shape (n, 3) in `encoding`
        encoding: 'srgb', 'hsl' or 'lab'
        chunk_size: Rows per filtering task
        executor: Optional concurrent.futures executor

    Returns:
        Palette of arrays with shape (k, 3)
    """
    colors = as_color_array(colors)
    check_encoding(encoding)
    parts = chunked(colors, chunk_size)
    mapper = executor.map if executor is not None else map

    per_chunk = list(mapper(_split_chunk, [regions] * len(parts), parts, [encoding] * len(parts)))
    buckets = []
    for i in range(len(SLOTS)):
        pieces = [filtered[i] for filtered in per_chunk]
        buckets.append(np.concatenate(pieces) if pieces else np.empty((0, 3), dtype=colors.dtype))
    return Palette(*buckets)


# =============================================================================
# Selection
# =============================================================================

def extrapolate(region: Region) -> np.ndarray:
    """sRGB color halfway (in LAB) between a region's start and end corners."""
    corners = to_lab(np.vstack([region.start(), region.end()]), 'hsl')
    return lab_to_srgb(corners.mean(axis=0).reshape(1, 3))[0]


def accents_sorted(palette: Palette) -> list:
    """Accent bucket results, most populous first; ties keep red..cyan order."""
    return sorted(palette.accents(), key=lambda result: result.count, reverse=True)


def select_foreground_background(palette: Palette,
                                 preference: Optional[ModePreference] = None) -> tuple:
    """
    Choose (foreground, background) from the black and white buckets.

    Without a preference the more common of black/white becomes the
    background and the rarer one the foreground. Ties go to a black
    background.
    """
    black, white = palette.black, palette.white
    if preference is ModePreference.DARK:
        return white, black
    if preference is ModePreference.LIGHT:
        return black, white
    if white.count > black.count:
        return black, white
    return white, black


# =============================================================================
# Generator
# =============================================================================

class Generator:
    """
    Turns a collection of sampled colors into a Colors set.

    Args:
        average_method: Bucket averaging strategy
        mode_preference: Force a dark or light scheme; None picks from the source
        chunk_size: Rows per parallel task
        max_workers: Thread pool size (None lets concurrent.futures decide)
        verbose: Print stage progress
    """

    def __init__(self, average_method: AverageMethod = AverageMethod.LAB_CENTROID,
                 mode_preference: Optional[ModePreference] = None,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 max_workers: Optional[int] = None,
                 verbose: bool = False):
        self.average_method = average_method
        self.mode_preference = mode_preference
        self.chunk_size = chunk_size
        self.max_workers = max_workers
        self.verbose = verbose

    def _log(self, msg: str):
        if self.verbose:
            print(msg, file=sys.stderr)

    @contextmanager
    def _executor(self, executor=None):
        if executor is not None:
            yield executor
            return
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            yield pool

    def reduce(self, buckets: Palette, encoding: str = 'srgb', executor=None) -> Palette:
        """Average every bucket. Empty buckets come back as None colors.

        All chunks of all buckets are submitted before any result is
        collected, so buckets and chunks within a bucket run concurrently.
        """
        method = self.average_method
        with self._executor(executor) as pool:
            futures = [
                [pool.submit(method.partial, chunk, encoding) for chunk in chunked(bucket, self.chunk_size)]
                for bucket in buckets
            ]
            averaged = [
                method.finish((future.result() for future in bucket_futures), encoding)
                for bucket_futures in futures
            ]
        return Palette(*averaged)

    def generate_palette(self, colors, regions: Optional[Palette] = None,
                         encoding: str = 'srgb', executor=None) -> Palette:
        """
        Per-bucket results for the given samples.

        Returns:
            Palette of BucketResult with sRGB colors. Buckets that received no
            samples are filled by extrapolate() and flagged as extrapolated.
        """
        regions = regions if regions is not None else default_regions()
        colors = as_color_array(colors)

        with self._executor(executor) as pool:
            self._log(f"Splitting {len(colors):,} colors into buckets...")
            buckets = split(regions, colors, encoding, chunk_size=self.chunk_size, executor=pool)

            self._log("Averaging buckets...")
            averaged = self.reduce(buckets, encoding, executor=pool)

        return self.bucket_results(buckets, averaged, regions, encoding)

    def bucket_results(self, buckets: Palette, averaged: Palette, regions: Palette,
                       encoding: str = 'srgb') -> Palette:
        """Pair each bucket average with its population, extrapolating empty buckets."""
        results = []
        for (name, bucket), avg, region in zip(buckets.items(), averaged, regions):
            if avg is None:
                self._log(f"  {name}: no samples, extrapolating")
                results.append(BucketResult(extrapolate(region), 0, extrapolated=True))
            else:
                rgb = to_srgb(avg.reshape(1, 3), encoding)[0]
                results.append(BucketResult(rgb, len(bucket)))
        return Palette(*results)

    def generate(self, colors, regions: Optional[Palette] = None,
                 encoding: str = 'srgb', executor=None) -> Colors:
        """
        Generate the full color set.

        Args:
            colors: Samples of shape (n, 3) in `encoding`. An empty input is
                accepted: every bucket is extrapolated and the background is black.
            regions: Palette of Region (defaults to default_regions())
            encoding: 'srgb', 'hsl' or 'lab'
            executor: Optional executor to run on instead of a private pool

        Returns:
            Colors with sRGB Color values
        """
        results = self.generate_palette(colors, regions, encoding, executor=executor)

        self._log("Ranking accents...")
        accents = accents_sorted(results)
        foreground, background = select_foreground_background(results, self.mode_preference)

        to_color = lambda result: Color.from_array(result.color)
        return Colors(
            palette=results.map(to_color),
            accents=tuple(to_color(result) for result in accents),
            foreground=to_color(foreground),
            background=to_color(background),
        )
