from functools import lru_cache
from itertools import product

import pytest

from theme_engine import ThemeOptions, generate_theme
from theme_tokens import AdjustmentLevels


EXTREMES = (-5, 0, 5)
LEVEL_GRID = list(product(EXTREMES, EXTREMES, EXTREMES))


@lru_cache(maxsize=None)
def cached_theme(seed_color='#3a5cb8', mode='analogous', levels=(0, 0, 0), dark_first=False):
    """Generated themes are pure, so tests can share them."""
    return generate_theme(ThemeOptions(
        harmony_mode=mode,
        seed_color=seed_color,
        levels=AdjustmentLevels(*levels),
        dark_first=dark_first,
    ))


@pytest.fixture
def default_theme():
    return cached_theme()
