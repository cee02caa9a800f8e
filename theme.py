#!/usr/bin/env python3
"""
Theme documents: a generated color set plus the wallpaper it came from.

JSON layout:
    {
      "wallpaper": "path/to/image.jpg" | null,
      "colors": {
        "palette": {"black": {"red": .., "green": .., "blue": ..}, ...},
        "accents": [6 colors],
        "foreground": {...},
        "background": {...}
      }
    }
"""

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from named_palette import Color, Colors


@dataclass(frozen=True)
class Theme:
    colors: Colors
    wallpaper: Optional[str] = None

    def to_dict(self) -> dict:
        return {'wallpaper': self.wallpaper, 'colors': self.colors.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> 'Theme':
        wallpaper = data.get('wallpaper')
        return cls(
            colors=Colors.from_dict(data['colors']),
            wallpaper=str(wallpaper) if wallpaper is not None else None,
        )

    @classmethod
    def from_hex_dict(cls, data: dict) -> 'Theme':
        """Theme from a hand-written document whose colors are '#rrggbb' strings."""
        wallpaper = data.get('wallpaper')
        return cls(
            colors=Colors.from_dict(data['colors'], parse=Color.from_hex),
            wallpaper=str(wallpaper) if wallpaper is not None else None,
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> 'Theme':
        return cls.from_dict(json.loads(text))

    @classmethod
    def load(cls, path) -> 'Theme':
        """
        Read a theme file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a valid theme document
        """
        path = Path(path)
        try:
            return cls.from_json(path.read_text())
        except FileNotFoundError:
            raise FileNotFoundError(f"Theme not found: {path}")
        except (KeyError, TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid theme file {path}: {e}")

    def save(self, path) -> Path:
        path = Path(path)
        path.write_text(self.to_json() + '\n')
        return path

    def modify(self, wallpaper: Optional[str] = None, swap: bool = False) -> 'Theme':
        """Copy with a new wallpaper and/or foreground and background swapped."""
        theme = self
        if wallpaper is not None:
            theme = replace(theme, wallpaper=str(wallpaper))
        if swap:
            theme = replace(theme, colors=theme.colors.swap())
        return theme

    def __str__(self) -> str:
        lines = []
        if self.wallpaper is not None:
            lines.append(f"Wallpaper: {self.wallpaper}")
        lines.append(f"Color Palette: {self.colors.palette.format_blocks()}")
        return '\n'.join(lines)
