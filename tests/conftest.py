"""Shared fixtures: fixed seed and small HSL sample sets."""

import numpy as np
import pytest


# Fully saturated mid-lightness hues that land in exactly one default region
ACCENT_HUES = {
    'red': 0.0,
    'green': 120.0,
    'yellow': 60.0,
    'blue': 240.0,
    'purple': 285.0,
    'cyan': 180.0,
}

BLACK_HSL = (0.0, 0.0, 0.05)
WHITE_HSL = (0.0, 0.0, 0.95)


def hsl_samples(**counts) -> np.ndarray:
    """HSL samples with counts[name] copies of each named color."""
    rows = []
    for name, n in counts.items():
        if name == 'black':
            color = BLACK_HSL
        elif name == 'white':
            color = WHITE_HSL
        else:
            color = (ACCENT_HUES[name], 1.0, 0.5)
        rows.extend([color] * n)
    return np.array(rows, dtype=np.float64).reshape(-1, 3)


@pytest.fixture(autouse=True)
def np_seed() -> None:
    np.random.seed(12345)


@pytest.fixture()
def random_srgb() -> np.ndarray:
    return np.random.rand(500, 3)
