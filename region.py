#!/usr/bin/env python3
"""
Hue/saturation/lightness regions that define the eight palette buckets.
"""

from dataclasses import dataclass

import numpy as np

from color_space import as_color_array, to_hsl
from mod_arith import Range, Space
from named_palette import Palette


HUE_SPACE = Space(360.0)

PRIMARY_SATURATION = (0.5, 1.0)
PRIMARY_LIGHTNESS = (0.1, 0.9)


@dataclass(frozen=True)
class Region:
    """Acceptance test for one bucket.

    Hue is a circular range in degrees; saturation and lightness are closed
    intervals (lo, hi). Regions need not be exclusive or exhaustive.
    """
    hue: Range
    saturation: tuple
    lightness: tuple

    @classmethod
    def new(cls, hue: tuple, saturation: tuple, lightness: tuple) -> 'Region':
        start, end = hue
        return cls(
            hue=HUE_SPACE.range(start, end),
            saturation=(float(saturation[0]), float(saturation[1])),
            lightness=(float(lightness[0]), float(lightness[1])),
        )

    def contains(self, colors, encoding: str = 'srgb'):
        """Test one color (returns bool) or an (n, 3) array (returns a mask)."""
        single = np.ndim(colors) == 1
        mask = self.contains_hsl(to_hsl(as_color_array(colors), encoding))
        return bool(mask[0]) if single else mask

    def contains_hsl(self, hsl: np.ndarray) -> np.ndarray:
        h, s, l = hsl[:, 0], hsl[:, 1], hsl[:, 2]
        s_lo, s_hi = self.saturation
        l_lo, l_hi = self.lightness
        return (
            self.hue.contains(h)
            & (s_lo <= s) & (s <= s_hi)
            & (l_lo <= l) & (l <= l_hi)
        )

    def start(self) -> np.ndarray:
        """HSL corner at the hue start and the low saturation/lightness bounds."""
        return np.array([self.hue.start, self.saturation[0], self.lightness[0]])

    def end(self) -> np.ndarray:
        """HSL corner at the hue end and the high saturation/lightness bounds."""
        return np.array([self.hue.end, self.saturation[1], self.lightness[1]])


def default_regions() -> Palette:
    """The canonical eight regions."""
    return Palette(
        black=Region.new((0.0, 360.0), (0.0, 1.0), (0.0, PRIMARY_LIGHTNESS[0])),
        red=Region.new((345.0, 15.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        green=Region.new((90.0, 150.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        yellow=Region.new((45.0, 75.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        blue=Region.new((210.0, 255.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        purple=Region.new((270.0, 300.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        cyan=Region.new((165.0, 195.0), PRIMARY_SATURATION, PRIMARY_LIGHTNESS),
        white=Region.new((0.0, 360.0), (0.0, 0.5), (PRIMARY_LIGHTNESS[1], 1.0)),
    )


def region_from_config(config: dict) -> Region:
    """Build a region from {'hue': [a, b], 'saturation': [lo, hi], 'lightness': [lo, hi]}."""
    return Region.new(config['hue'], config['saturation'], config['lightness'])


def regions_from_config(config: dict) -> Palette:
    """Region palette from a slot -> region config mapping; missing slots use the defaults."""
    defaults = default_regions()
    return Palette.from_dict(
        {name: region_from_config(config[name]) if name in config else region
         for name, region in defaults.items()}
    )
