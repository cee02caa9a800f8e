"""Theme documents."""

import json

import pytest

from generator import Generator
from conftest import hsl_samples
from named_palette import SLOTS, Color
from theme import Theme


def _theme(wallpaper='test.jpg') -> Theme:
    colors = Generator().generate(hsl_samples(black=4, white=1, red=3, blue=2), encoding='hsl')
    return Theme(colors=colors, wallpaper=wallpaper)


def _hex_source() -> dict:
    palette = {
        'black': '#000000', 'red': '#ff0000', 'green': '#00ff00', 'yellow': '#ffff00',
        'blue': '#0000ff', 'purple': '#ff00ff', 'cyan': '#00ffff', 'white': '#ffffff',
    }
    return {
        'wallpaper': 'wall.png',
        'colors': {
            'palette': palette,
            'accents': [palette[name] for name in ('red', 'green', 'yellow', 'blue', 'purple', 'cyan')],
            'foreground': '#ffffff',
            'background': '#000000',
        },
    }


def test_json_round_trip():
    theme = _theme()
    assert Theme.from_json(theme.to_json()) == theme


def test_json_layout():
    data = json.loads(_theme().to_json())
    assert data['wallpaper'] == 'test.jpg'
    assert list(data['colors']['palette']) == list(SLOTS)
    assert len(data['colors']['accents']) == 6
    assert set(data['colors']['background']) == {'red', 'green', 'blue'}


def test_without_wallpaper():
    theme = _theme(wallpaper=None)
    data = json.loads(theme.to_json())
    assert data['wallpaper'] is None
    assert Theme.from_dict(data) == theme
    assert 'Wallpaper' not in str(theme)


def test_save_and_load(tmp_path):
    theme = _theme()
    path = theme.save(tmp_path / 'theme.json')
    assert Theme.load(path) == theme


def test_load_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Theme.load(tmp_path / 'nope.json')


def test_load_invalid(tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('{"colors": {}}')
    with pytest.raises(ValueError):
        Theme.load(bad)

    bad.write_text('not json')
    with pytest.raises(ValueError):
        Theme.load(bad)


def test_from_hex_dict():
    theme = Theme.from_hex_dict(_hex_source())
    assert theme.wallpaper == 'wall.png'
    assert theme.colors.palette.purple == Color(1.0, 0.0, 1.0)
    assert theme.colors.foreground == Color(1.0, 1.0, 1.0)
    assert theme.colors.accents[0] == Color(1.0, 0.0, 0.0)


def test_modify():
    theme = _theme()

    swapped = theme.modify(swap=True)
    assert swapped.colors.foreground == theme.colors.background
    assert swapped.colors.background == theme.colors.foreground
    assert swapped.wallpaper == theme.wallpaper

    moved = theme.modify(wallpaper='other.png')
    assert moved.wallpaper == 'other.png'
    assert moved.colors == theme.colors

    assert theme.modify() == theme


def test_str_shows_wallpaper_and_blocks():
    text = str(_theme())
    assert text.startswith('Wallpaper: test.jpg')
    assert 'Color Palette: ' in text
    assert text.count('\x1b[0m') == 8
