#!/usr/bin/env python3
"""
Eight-slot named palettes and the generated color set.

Palette is a container keyed by the ANSI color names. It holds region
definitions going into the generator, buckets and bucket results inside it,
and final colors coming out of it.
"""

import functools
from dataclasses import dataclass, replace
from typing import Callable, Generic, Optional, TypeVar

import numpy as np

from color_space import parse_hex, to_hex


T = TypeVar('T')
R = TypeVar('R')

SLOTS = ('black', 'red', 'green', 'yellow', 'blue', 'purple', 'cyan', 'white')
ACCENT_SLOTS = ('red', 'green', 'yellow', 'blue', 'purple', 'cyan')
ACCENT_COUNT = len(ACCENT_SLOTS)


@dataclass(frozen=True)
class Palette(Generic[T]):
    """One value per named slot."""
    black: T
    red: T
    green: T
    yellow: T
    blue: T
    purple: T
    cyan: T
    white: T

    @classmethod
    def filled(cls, value) -> 'Palette':
        return cls(*(value for _ in SLOTS))

    @classmethod
    def from_dict(cls, data: dict, f: Optional[Callable] = None) -> 'Palette':
        """Build from a mapping of slot name -> value, applying f to each value.

        Raises:
            KeyError: If a slot is missing
        """
        f = f or (lambda v: v)
        return cls(**{name: f(data[name]) for name in SLOTS})

    def __iter__(self):
        return (getattr(self, name) for name in SLOTS)

    def items(self) -> list:
        return [(name, getattr(self, name)) for name in SLOTS]

    def map(self, f: Callable[[T], R]) -> 'Palette[R]':
        return Palette(*(f(v) for v in self))

    def zip(self, other: 'Palette') -> 'Palette[tuple]':
        return Palette(*zip(self, other))

    def fold(self, f: Callable, initial):
        return functools.reduce(f, self, initial)

    def accents(self) -> tuple:
        """The six chromatic slots in fixed red..cyan order."""
        return tuple(getattr(self, name) for name in ACCENT_SLOTS)

    def replace(self, **changes) -> 'Palette':
        return replace(self, **changes)

    def as_dict(self, f: Optional[Callable] = None) -> dict:
        f = f or (lambda v: v)
        return {name: f(value) for name, value in self.items()}

    def format_blocks(self) -> str:
        """Render as a row of 24-bit terminal color blocks."""
        return ''.join(Color.coerce(c).block() for c in self)


# =============================================================================
# Colors
# =============================================================================

@dataclass(frozen=True)
class Color:
    """Normalized sRGB color."""
    red: float
    green: float
    blue: float

    @classmethod
    def from_array(cls, rgb) -> 'Color':
        r, g, b = (float(c) for c in np.asarray(rgb).reshape(3))
        return cls(r, g, b)

    @classmethod
    def from_hex(cls, code: str) -> 'Color':
        return cls(*parse_hex(code))

    @classmethod
    def from_dict(cls, data: dict) -> 'Color':
        return cls(float(data['red']), float(data['green']), float(data['blue']))

    @classmethod
    def coerce(cls, value) -> 'Color':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        return cls.from_array(value)

    def as_tuple(self) -> tuple:
        return (self.red, self.green, self.blue)

    def to_dict(self) -> dict:
        return {'red': self.red, 'green': self.green, 'blue': self.blue}

    @property
    def hex(self) -> str:
        return to_hex(self.as_tuple())

    def block(self) -> str:
        r, g, b = (int(round(c * 255)) for c in np.clip(self.as_tuple(), 0.0, 1.0))
        return f"\x1b[48;2;{r};{g};{b}m  \x1b[0m"


@dataclass(frozen=True)
class Colors(Generic[T]):
    """Generated color set: full palette, ranked accents, foreground, background."""
    palette: Palette
    accents: tuple  # ACCENT_COUNT entries, most populous bucket first
    foreground: T
    background: T

    def __post_init__(self):
        if len(self.accents) != ACCENT_COUNT:
            raise ValueError(f"Expected {ACCENT_COUNT} accents, got {len(self.accents)}")
        object.__setattr__(self, 'accents', tuple(self.accents))

    def map(self, f: Callable[[T], R]) -> 'Colors[R]':
        return Colors(
            palette=self.palette.map(f),
            accents=tuple(f(c) for c in self.accents),
            foreground=f(self.foreground),
            background=f(self.background),
        )

    def swap(self) -> 'Colors':
        """Exchange foreground and background."""
        return replace(self, foreground=self.background, background=self.foreground)

    def to_dict(self) -> dict:
        """Interchange form; every color becomes {'red', 'green', 'blue'}."""
        as_dict = lambda c: Color.coerce(c).to_dict()
        return {
            'palette': self.palette.as_dict(as_dict),
            'accents': [as_dict(c) for c in self.accents],
            'foreground': as_dict(self.foreground),
            'background': as_dict(self.background),
        }

    @classmethod
    def from_dict(cls, data: dict, parse: Callable = Color.from_dict) -> 'Colors':
        """Parse the interchange form.

        Args:
            data: Mapping with 'palette', 'accents', 'foreground', 'background'
            parse: Converts each color entry (defaults to {'red', 'green', 'blue'} objects)

        Raises:
            KeyError: If a field is missing
            ValueError: If there are not exactly six accents
        """
        return cls(
            palette=Palette.from_dict(data['palette'], parse),
            accents=tuple(parse(c) for c in data['accents']),
            foreground=parse(data['foreground']),
            background=parse(data['background']),
        )
