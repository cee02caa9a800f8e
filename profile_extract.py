#!/usr/bin/env python3
"""Profile palette generation to identify performance bottlenecks."""

import argparse
import cProfile
import io
import pstats
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from batch_extract import find_images
from extract import load_image_colors
from generator import Generator, accents_sorted, select_foreground_background, split
from region import default_regions


def profile_image(image_path: str, generator: Generator, verbose: bool = True):
    """Time each generation stage for a single image."""

    if verbose:
        print(f"\n{'='*60}")
        print(f"Profiling: {Path(image_path).name}")
        print(f"{'='*60}")

    regions = default_regions()
    timings = {}

    start = time.perf_counter()
    colors = load_image_colors(image_path)
    timings['load'] = time.perf_counter() - start

    with ThreadPoolExecutor(max_workers=generator.max_workers) as pool:
        start = time.perf_counter()
        buckets = split(regions, colors, chunk_size=generator.chunk_size, executor=pool)
        timings['split'] = time.perf_counter() - start

        start = time.perf_counter()
        averaged = generator.reduce(buckets, executor=pool)
        timings['average'] = time.perf_counter() - start

    start = time.perf_counter()
    results = generator.bucket_results(buckets, averaged, regions)
    accents_sorted(results)
    select_foreground_background(results, generator.mode_preference)
    timings['select'] = time.perf_counter() - start

    total = sum(timings.values())
    timings['total'] = total

    if verbose:
        print(f"  Samples: {len(colors):,}")
        for name, bucket in buckets.items():
            print(f"    {name:<8} {len(bucket):>10,}")
        print(f"\nStage timings:")
        for stage, t in timings.items():
            pct = (t / total * 100) if stage != 'total' else 100
            print(f"  {stage:20s}: {t:6.3f}s ({pct:5.1f}%)")

    return timings, len(colors)


def detailed_profile(image_path: str, generator: Generator):
    """Run detailed cProfile on a full generate() call."""

    print(f"\n{'='*60}")
    print(f"Detailed profile of Generator.generate()")
    print(f"{'='*60}")

    colors = load_image_colors(image_path)

    profiler = cProfile.Profile()
    profiler.enable()
    result = generator.generate(colors)
    profiler.disable()

    stream = io.StringIO()
    stats = pstats.Stats(profiler, stream=stream)
    stats.sort_stats('cumulative')
    stats.print_stats(30)  # Top 30 functions

    print(stream.getvalue())

    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description='Profile palette generation.')
    parser.add_argument('--input', '-i', default=str(Path(__file__).parent / "source_images"),
                        help='Directory containing images')
    parser.add_argument('--chunk-size', type=int, default=None, help='Samples per parallel task')
    parser.add_argument('--workers', type=int, default=None, help='Worker threads')
    args = parser.parse_args(argv)

    images_dir = Path(args.input)
    images = find_images(images_dir) if images_dir.is_dir() else []

    if not images:
        print(f"No images found in {images_dir}")
        sys.exit(1)

    print(f"Found {len(images)} test images")

    generator = Generator(max_workers=args.workers)
    if args.chunk_size:
        generator.chunk_size = args.chunk_size

    all_timings = []
    for img in images:
        timings, n_samples = profile_image(str(img), generator)
        all_timings.append((img.name, timings, n_samples))

    # Summary
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    print(f"{'Image':<35} {'Samples':>10} {'Split':>8} {'Total':>8}")
    print("-" * 65)
    for name, timings, n_samples in all_timings:
        print(f"{name:<35} {n_samples:>10,} {timings['split']:>7.3f}s {timings['total']:>7.3f}s")

    detailed_profile(str(images[0]), generator)


if __name__ == "__main__":
    main()
