#!/usr/bin/env python3
"""
Color conversions between normalized sRGB, CIE LAB (D65) and HSL.

Every conversion works on float arrays of shape (n, 3). Colors handed in by
callers go through as_color_array() first, so a single triple or a plain
list of triples is accepted as well.

Encodings:
    'srgb'  red, green, blue in [0, 1]
    'hsl'   hue in degrees [0, 360), saturation and lightness in [0, 1]
    'lab'   L in [0, 100], a and b unbounded
"""

import numpy as np


ENCODINGS = ('srgb', 'hsl', 'lab')

# D65 reference white
XN, YN, ZN = 0.95047, 1.0, 1.08883

EPSILON = 0.008856
KAPPA = 903.3


def as_color_array(colors, dtype=np.float64) -> np.ndarray:
    """Coerce colors into a float array of shape (n, 3).

    Raises:
        ValueError: If the input is not a single triple or a collection of triples
    """
    if not isinstance(colors, np.ndarray):
        colors = list(colors)
    arr = np.asarray(colors, dtype=dtype)

    if arr.size == 0:
        return np.empty((0, 3), dtype=dtype)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected colors of shape (n, 3), got {arr.shape}")
    return arr


def check_encoding(encoding: str) -> str:
    if encoding not in ENCODINGS:
        raise ValueError(f"Unknown color encoding {encoding!r}, expected one of {ENCODINGS}")
    return encoding


# =============================================================================
# sRGB <-> LAB
# =============================================================================

def srgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert normalized sRGB array to LAB color space."""
    # Undo gamma
    mask = rgb > 0.04045
    rgb_linear = np.where(mask, ((np.clip(rgb, 0, None) + 0.055) / 1.055) ** 2.4, rgb / 12.92)

    # RGB to XYZ matrix
    r, g, b = rgb_linear[:, 0], rgb_linear[:, 1], rgb_linear[:, 2]
    x = r * 0.4124564 + g * 0.3575761 + b * 0.1804375
    y = r * 0.2126729 + g * 0.7151522 + b * 0.0721750
    z = r * 0.0193339 + g * 0.1191920 + b * 0.9503041

    x, y, z = x / XN, y / YN, z / ZN

    fx = np.where(x > EPSILON, np.cbrt(x), (KAPPA * x + 16) / 116)
    fy = np.where(y > EPSILON, np.cbrt(y), (KAPPA * y + 16) / 116)
    fz = np.where(z > EPSILON, np.cbrt(z), (KAPPA * z + 16) / 116)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b_val = 200 * (fy - fz)

    return np.column_stack([L, a, b_val])


def lab_to_srgb(lab: np.ndarray) -> np.ndarray:
    """Convert LAB array to normalized sRGB, clipped to [0, 1]."""
    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]

    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    x = np.where(fx**3 > EPSILON, fx**3, (116 * fx - 16) / KAPPA)
    y = np.where(L > KAPPA * EPSILON, ((L + 16) / 116) ** 3, L / KAPPA)
    z = np.where(fz**3 > EPSILON, fz**3, (116 * fz - 16) / KAPPA)

    x = x * XN
    z = z * ZN

    r = x * 3.2404542 - y * 1.5371385 - z * 0.4985314
    g = -x * 0.9692660 + y * 1.8760108 + z * 0.0415560
    b_out = x * 0.0556434 - y * 0.2040259 + z * 1.0572252

    # Apply gamma correction
    rgb_linear = np.column_stack([r, g, b_out])
    mask = rgb_linear > 0.0031308
    rgb = np.where(mask, 1.055 * np.power(np.clip(rgb_linear, 0, None), 1/2.4) - 0.055, 12.92 * rgb_linear)

    return np.clip(rgb, 0.0, 1.0)


# =============================================================================
# sRGB <-> HSL
# =============================================================================

def srgb_to_hsl(rgb: np.ndarray) -> np.ndarray:
    """Convert normalized sRGB array to HSL (hue in degrees)."""
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    maxc = rgb.max(axis=1)
    minc = rgb.min(axis=1)
    delta = maxc - minc

    lightness = (maxc + minc) / 2
    chromatic = delta > 0

    # Greys have no hue and no saturation
    denom = 1 - np.abs(2 * lightness - 1)
    saturation = np.divide(delta, denom, out=np.zeros_like(delta), where=chromatic & (denom > 0))
    # denom can round below delta for fully saturated colors
    saturation = np.clip(saturation, 0.0, 1.0)

    safe = np.where(chromatic, delta, 1.0)
    sector = np.where(
        maxc == r, np.mod((g - b) / safe, 6),
        np.where(maxc == g, (b - r) / safe + 2, (r - g) / safe + 4)
    )
    hue = np.where(chromatic, np.mod(sector * 60.0, 360.0), 0.0)

    return np.column_stack([hue, saturation, lightness])


def hsl_to_srgb(hsl: np.ndarray) -> np.ndarray:
    """Convert HSL array (hue in degrees) to normalized sRGB."""
    h = np.mod(hsl[:, 0], 360.0)
    s, l = hsl[:, 1], hsl[:, 2]

    c = (1 - np.abs(2 * l - 1)) * s
    hp = h / 60.0
    x = c * (1 - np.abs(np.mod(hp, 2) - 1))
    m = l - c / 2
    zero = np.zeros_like(c)

    sector = np.floor(hp).astype(np.int64) % 6
    cases = [sector == i for i in range(6)]
    r = np.select(cases, [c, x, zero, zero, x, c])
    g = np.select(cases, [x, c, c, x, zero, zero])
    b = np.select(cases, [zero, zero, x, c, c, x])

    return np.column_stack([r + m, g + m, b + m])


# =============================================================================
# Dispatch
# =============================================================================

def to_srgb(colors: np.ndarray, encoding: str) -> np.ndarray:
    if check_encoding(encoding) == 'srgb':
        return colors
    if encoding == 'hsl':
        return hsl_to_srgb(colors)
    return lab_to_srgb(colors)


def to_lab(colors: np.ndarray, encoding: str) -> np.ndarray:
    """Convert an (n, 3) array in the given encoding to LAB."""
    if check_encoding(encoding) == 'lab':
        return colors
    return srgb_to_lab(to_srgb(colors, encoding))


def from_lab(lab: np.ndarray, encoding: str) -> np.ndarray:
    """Convert an (n, 3) LAB array into the given encoding."""
    if check_encoding(encoding) == 'lab':
        return lab
    rgb = lab_to_srgb(lab)
    return srgb_to_hsl(rgb) if encoding == 'hsl' else rgb


def to_hsl(colors: np.ndarray, encoding: str) -> np.ndarray:
    """Convert an (n, 3) array in the given encoding to HSL."""
    if check_encoding(encoding) == 'hsl':
        return colors
    return srgb_to_hsl(to_srgb(colors, encoding))


# =============================================================================
# Hex codes
# =============================================================================

def parse_hex(code: str) -> tuple:
    """Parse '#rrggbb' (leading '#' optional) into a normalized sRGB tuple."""
    if not isinstance(code, str):
        raise ValueError(f"Invalid hex color code: {code!r}")
    digits = code.strip().lstrip('#')
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color code: {code!r}")
    try:
        return tuple(int(digits[i:i+2], 16) / 255.0 for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Invalid hex color code: {code!r}")


def to_hex(rgb) -> str:
    """Format a normalized sRGB triple as '#rrggbb'."""
    r, g, b = (int(round(float(np.clip(c, 0.0, 1.0)) * 255)) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"
