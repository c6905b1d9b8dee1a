#!/usr/bin/env python3
"""
Theme token names, value types and token-level helpers.

A theme side is twenty named colors. While a theme is being built each side
is a dict of token name -> OklchColor; the finished DualTheme holds hex
strings.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from contrast import select_foreground
from oklch import OklchColor, clamp_color, to_hex


# =============================================================================
# Token Names
# =============================================================================

TOKEN_KEYS = (
    'bg', 'card', 'card2', 'text', 'textMuted', 'textOnColor',
    'primary', 'primaryFg', 'secondary', 'secondaryFg',
    'accent', 'accentFg', 'border', 'ring',
    'good', 'goodFg', 'warn', 'warnFg', 'bad', 'badFg',
)

SURFACE_KEYS = ('bg', 'card', 'card2')
NEUTRAL_KEYS = ('bg', 'card', 'card2', 'text', 'textMuted', 'border')
CHROMATIC_KEYS = ('primary', 'secondary', 'accent', 'good', 'warn', 'bad', 'ring')

# Foreground token -> the fill it sits on
FOREGROUND_PAIRS = {
    'textOnColor': 'primary',
    'primaryFg': 'primary',
    'secondaryFg': 'secondary',
    'accentFg': 'accent',
    'goodFg': 'good',
    'warnFg': 'warn',
    'badFg': 'bad',
}

# Order in which duplicates are resolved; earlier tokens keep their color
DEDUP_PRIORITY = (
    'bg', 'card', 'card2', 'text', 'textMuted', 'primary', 'secondary',
    'accent', 'good', 'warn', 'bad', 'border', 'ring',
    'primaryFg', 'textOnColor', 'secondaryFg', 'accentFg', 'goodFg', 'warnFg', 'badFg',
)

DEDUP_STEP = 0.005  # Lightness nudge between attempts
DEDUP_MAX_ATTEMPTS = 10  # Per direction

# Locking a token also keeps the tokens derived from it
RELATED_TOKENS = {
    'bg': ('card', 'card2'),
    'card': ('card2',),
    'text': ('textMuted', 'border'),
    'primary': ('primaryFg', 'ring'),
    'secondary': ('secondaryFg',),
    'accent': ('accentFg',),
    'good': ('goodFg',),
    'warn': ('warnFg',),
    'bad': ('badFg',),
}

MODES = ('light', 'dark')


# =============================================================================
# Value Types
# =============================================================================

LEVEL_MIN = -5
LEVEL_MAX = 5


def clamp_level(value) -> int:
    """Round a level and clamp it into [-5, 5]."""
    return int(max(LEVEL_MIN, min(LEVEL_MAX, round(value))))


@dataclass(frozen=True)
class AdjustmentLevels:
    """User-facing saturation/contrast/brightness levels, each in [-5, 5]."""
    saturation: int = 0
    contrast: int = 0
    brightness: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'saturation', clamp_level(self.saturation))
        object.__setattr__(self, 'contrast', clamp_level(self.contrast))
        object.__setattr__(self, 'brightness', clamp_level(self.brightness))

    def distance(self, other: 'AdjustmentLevels') -> int:
        """Summed absolute difference across the three levels."""
        return (abs(self.saturation - other.saturation)
                + abs(self.contrast - other.contrast)
                + abs(self.brightness - other.brightness))


@dataclass(frozen=True)
class DualTheme:
    """A generated light/dark theme pair."""
    light: dict  # token -> hex
    dark: dict  # token -> hex
    seed: str  # Hex seed the theme can be traced back to
    mode: str  # Resolved harmony mode
    base_hue: float = 0.0

    def side(self, mode: str) -> dict:
        return self.dark if mode == 'dark' else self.light

    def to_dict(self) -> dict:
        return {
            'light': dict(self.light),
            'dark': dict(self.dark),
            'seed': self.seed,
            'mode': self.mode,
        }


# =============================================================================
# Token Helpers
# =============================================================================

def other_mode(mode: str) -> str:
    return 'light' if mode == 'dark' else 'dark'


def assemble_tokens(neutrals: Mapping[str, OklchColor], chromatic: Mapping[str, OklchColor],
                    fg_target: float = 4.5) -> dict:
    """
    Combine neutrals and chromatic fills into a full token set.

    Foregrounds are derived from their fills with select_foreground.
    """
    tokens = dict(neutrals)
    tokens.update(chromatic)
    for fg_key, fill_key in FOREGROUND_PAIRS.items():
        tokens[fg_key] = select_foreground(tokens[fill_key], fg_target)
    return {key: tokens[key] for key in TOKEN_KEYS}


def recompute_foregrounds(tokens: dict, fg_target: float = 4.5, frozen: Iterable[str] = ()) -> dict:
    """Re-derive every foreground token from its current fill."""
    frozen = set(frozen)
    result = dict(tokens)
    for fg_key, fill_key in FOREGROUND_PAIRS.items():
        if fg_key not in frozen:
            result[fg_key] = select_foreground(result[fill_key], fg_target)
    return result


def tokens_to_hex(tokens: Mapping[str, OklchColor]) -> dict:
    return {key: to_hex(tokens[key]) for key in TOKEN_KEYS}


def separate_duplicates(tokens: dict, frozen: Iterable[str] = ()) -> dict:
    """
    Nudge tokens apart so no two share a hex value.

    Frozen tokens never move. Others are visited in DEDUP_PRIORITY order; a
    token whose hex is already taken is moved in lightness, first away from
    the color it is read against (its fill, or bg), then the other way.
    """
    frozen = set(frozen)
    result = dict(tokens)
    taken = {to_hex(result[key]) for key in frozen}

    for key in DEDUP_PRIORITY:
        if key in frozen:
            continue
        color = result[key]
        hex_value = to_hex(color)
        if hex_value in taken:
            reference = result[FOREGROUND_PAIRS.get(key, 'bg')]
            direction = 1 if color.L >= reference.L else -1
            color = _nudge_to_unique(color, direction, taken)
            result[key] = color
            hex_value = to_hex(color)
        taken.add(hex_value)
    return result


def _nudge_to_unique(color: OklchColor, direction: int, taken: set) -> OklchColor:
    for attempt in range(1, DEDUP_MAX_ATTEMPTS + 1):
        for sign in (direction, -direction):
            L = min(1.0, max(0.0, color.L + sign * attempt * DEDUP_STEP))
            candidate = clamp_color(L, color.C, color.H)
            if to_hex(candidate) not in taken:
                return candidate
    # Last resort: perturb chroma instead of lightness
    for attempt in range(1, DEDUP_MAX_ATTEMPTS + 1):
        candidate = clamp_color(color.L, color.C + attempt * DEDUP_STEP, color.H)
        if to_hex(candidate) not in taken:
            return candidate
    return color


def merge_locked_tokens(generated: DualTheme, previous: Optional[DualTheme],
                        locked: Iterable[str]) -> DualTheme:
    """
    Carry locked tokens over from a previous theme.

    Locking a token also locks the tokens derived from it (see
    RELATED_TOKENS), on both sides of the theme.
    """
    locked = set(locked)
    if previous is None or not locked:
        return generated

    keep = set(locked)
    for key in locked:
        keep.update(RELATED_TOKENS.get(key, ()))
    keep &= set(TOKEN_KEYS)

    light = dict(generated.light)
    dark = dict(generated.dark)
    for key in keep:
        light[key] = previous.light[key]
        dark[key] = previous.dark[key]

    return DualTheme(light=light, dark=dark, seed=generated.seed,
                     mode=generated.mode, base_hue=generated.base_hue)
