#!/usr/bin/env python3
"""Batch extract themes from a directory of images."""

import argparse
import sys
import time
from pathlib import Path

from extract import extract_theme, load_regions
from generator import ModePreference


DOWNSCALE_SIZE = 256


def find_images(directory: Path) -> list[Path]:
    """Find all image files in directory."""
    extensions = {'.jpg', '.jpeg', '.png', '.webp', '.bmp'}
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in extensions
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Batch extract themes from images.'
    )
    parser.add_argument(
        '--input', '-i',
        required=True,
        help='Directory containing images'
    )
    parser.add_argument(
        '--output', '-o',
        required=True,
        help='Directory for theme JSON files'
    )
    parser.add_argument(
        '--preference', '-p',
        choices=[p.value for p in ModePreference],
        default=None,
        help='Color mode preference applied to every theme'
    )
    parser.add_argument(
        '--regions', '-r',
        default=None,
        help='JSON region configuration'
    )
    parser.add_argument(
        '--no-downscale',
        action='store_true',
        help=f'Process at full resolution instead of downscaling to {DOWNSCALE_SIZE}px'
    )

    args = parser.parse_args(argv)

    input_dir = Path(args.input)
    output_dir = Path(args.output)

    if not input_dir.is_dir():
        print(f"Error: Input directory not found: {input_dir}", file=sys.stderr)
        sys.exit(2)

    try:
        regions = load_regions(args.regions)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    output_dir.mkdir(parents=True, exist_ok=True)

    images = find_images(input_dir)
    if not images:
        print(f"No images found in {input_dir}", file=sys.stderr)
        sys.exit(2)

    total = len(images)
    succeeded = 0
    failed = []
    max_size = None if args.no_downscale else DOWNSCALE_SIZE
    preference = ModePreference.parse(args.preference) if args.preference else None

    batch_start = time.perf_counter()

    for i, image_path in enumerate(images, 1):
        try:
            img_start = time.perf_counter()
            theme = extract_theme(str(image_path), regions=regions, preference=preference, max_size=max_size)
            img_elapsed = time.perf_counter() - img_start

            output_file = output_dir / f"{image_path.stem}-theme.json"
            if output_file.exists():
                print(f"  Warning: Overwriting {output_file.name}", file=sys.stderr)
            theme.save(output_file)

            print(f"[{i}/{total}] {image_path.name} → {theme.colors.palette.format_blocks()} ({img_elapsed:.2f}s)")
            succeeded += 1

        except (OSError, ValueError) as e:
            error_msg = f"{type(e).__name__}: {e}"
            print(f"[{i}/{total}] {image_path.name} → ERROR: {error_msg}", file=sys.stderr)
            failed.append((image_path.name, error_msg))

    batch_elapsed = time.perf_counter() - batch_start

    # Summary
    print()
    print(f"Completed: {succeeded}/{total} succeeded in {batch_elapsed:.2f}s")
    if succeeded > 0:
        print(f"Average: {batch_elapsed / succeeded:.2f}s per image")
    if failed:
        print(f"Failed ({len(failed)}):")
        for name, error in failed:
            print(f"  - {name}: {error}")
        sys.exit(1)


if __name__ == '__main__':
    main()
