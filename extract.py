#!/usr/bin/env python3
"""
Extract an ANSI color theme from an image.

Commands:
    image   decode an image, generate a palette from its pixels
    hex     build a theme from a JSON document of '#rrggbb' codes
    modify  change the wallpaper of a theme or swap foreground/background

Themes are written as JSON to stdout, or to --output.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from average import DEFAULT_CHUNK_SIZE
from generator import Generator, ModePreference
from region import regions_from_config
from theme import Theme


# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side


# =============================================================================
# Loading
# =============================================================================

def load_image_colors(image_path: str, max_size: Optional[int] = None) -> np.ndarray:
    """
    Load an image as normalized sRGB samples.

    Args:
        image_path: Path to the image file
        max_size: If given, downscale so neither side exceeds this many pixels

    Returns:
        Float array of shape (n_pixels, 3) in [0, 1]

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    try:
        img = Image.open(image_path)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {image_path}")
    except Exception as e:
        raise ValueError(f"Could not open image: {e}")

    width, height = img.size
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise ValueError(
            f"Image dimensions {width}x{height} exceed maximum "
            f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ValueError(
            f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
        )

    img = img.convert('RGB')
    if max_size is not None:
        img.thumbnail((max_size, max_size))

    pixels = np.asarray(img, dtype=np.float64).reshape(-1, 3)
    return pixels / 255.0


def load_regions(path: Optional[str]):
    """Region palette from a JSON config file, or the defaults when path is None."""
    if path is None:
        return regions_from_config({})
    try:
        config = json.loads(Path(path).read_text())
    except FileNotFoundError:
        raise FileNotFoundError(f"Region config not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid region config {path}: {e}")
    return regions_from_config(config)


def extract_theme(image_path: str, regions=None, preference: Optional[ModePreference] = None,
                  max_size: Optional[int] = None, chunk_size: int = DEFAULT_CHUNK_SIZE,
                  workers: Optional[int] = None, verbose: bool = False) -> Theme:
    """Generate a theme from the pixels of an image."""
    if verbose:
        print("Reading and decoding image...", file=sys.stderr)
    colors = load_image_colors(image_path, max_size=max_size)

    generator = Generator(
        mode_preference=preference,
        chunk_size=chunk_size,
        max_workers=workers,
        verbose=verbose,
    )
    return Theme(colors=generator.generate(colors, regions), wallpaper=str(image_path))


# =============================================================================
# Commands
# =============================================================================

def run_image(args) -> Theme:
    preference = ModePreference.parse(args.preference) if args.preference else None
    return extract_theme(
        args.input,
        regions=load_regions(args.regions),
        preference=preference,
        max_size=args.max_size,
        chunk_size=args.chunk_size,
        workers=args.workers,
        verbose=args.verbose,
    )


def run_hex(args) -> Theme:
    text = Path(args.input).read_text() if args.input else sys.stdin.read()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Source was invalid: {e}")
    if not isinstance(data, dict):
        raise ValueError("Source must be a JSON object")
    try:
        return Theme.from_hex_dict(data)
    except KeyError as e:
        raise ValueError(f"Source is missing field {e}")


def run_modify(args) -> Theme:
    if args.verbose:
        print("Reading theme from filesystem...", file=sys.stderr)
    return Theme.load(args.theme).modify(wallpaper=args.wallpaper, swap=args.swap)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract an ANSI color theme from an image.'
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Write theme JSON to this path instead of stdout'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print progress messages'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    image = sub.add_parser('image', aliases=['img', 'i'], help='Extract from an image')
    image.add_argument('input', help='Path to the image file')
    image.add_argument(
        '--preference', '-p',
        choices=[p.value for p in ModePreference],
        default=None,
        help='Color mode preference; by default the dominant tone of the image is the background'
    )
    image.add_argument('--regions', '-r', default=None, help='JSON region configuration')
    image.add_argument(
        '--max-size',
        type=int,
        default=None,
        help='Downscale so neither side exceeds this many pixels'
    )
    image.add_argument('--chunk-size', type=int, default=DEFAULT_CHUNK_SIZE, help='Samples per parallel task')
    image.add_argument('--workers', type=int, default=None, help='Worker threads')
    image.set_defaults(run=run_image)

    hex_source = sub.add_parser('hex', help="Build a theme from '#rrggbb' codes")
    hex_source.add_argument('input', nargs='?', default=None, help='JSON source file (defaults to stdin)')
    hex_source.set_defaults(run=run_hex)

    modify = sub.add_parser('modify', aliases=['mod', 'm'], help='Modify an existing theme')
    modify.add_argument('theme', help='Theme file to modify')
    modify.add_argument('--wallpaper', '-w', default=None, help='New wallpaper')
    modify.add_argument('--swap', '-s', action='store_true', help='Swap foreground and background')
    modify.set_defaults(run=run_modify)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        theme = args.run(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        try:
            path = theme.save(args.output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)
        print(theme)
        print(f"\nWrote: {path}")
    else:
        print(theme.to_json())


if __name__ == '__main__':
    main()
