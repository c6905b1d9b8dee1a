#!/usr/bin/env python3
"""
Neutral foundation: background, cards, text, muted text and border.

Lightness starts from the mode's targets and is modulated by the brightness
and contrast levels, then clamped into a safe band per token so the later
passes always have room to work. Saturation adds a faint warm or cool tint.
"""

from dataclasses import dataclass

from oklch import OklchColor, clamp_color
from theme_tokens import AdjustmentLevels
from tuning import DEFAULT_TUNING, NeutralTargets, Tuning


WARM_TINT_HUE = 60
COOL_TINT_HUE = 240

BRIGHTNESS_STEP = 0.02  # Lightness shift per brightness level
CONTRAST_STEP = 0.015  # Spread per contrast level
TINT_STEP = 0.003  # Neutral chroma per positive saturation level

# Safe lightness bands, (low, high) per token
LIGHT_BANDS = {
    'bg': (0.85, 0.99),
    'card': (0.80, 0.96),
    'card2': (0.75, 0.93),
    'text': (0.05, 0.35),
    'textMuted': (0.25, 0.55),
    'border': (0.70, 0.88),
}
DARK_BANDS = {
    'bg': (0.02, 0.20),
    'card': (0.05, 0.26),
    'card2': (0.08, 0.30),
    'text': (0.75, 0.99),
    'textMuted': (0.50, 0.80),
    'border': (0.18, 0.40),
}

# Tint chroma multipliers relative to the bg tint
TINT_FACTORS = {
    'bg': 1.0,
    'card': 0.8,
    'card2': 0.6,
    'text': 0.2,
    'textMuted': 0.15,
    'border': 0.4,
}


@dataclass(frozen=True)
class NeutralFoundation:
    bg: OklchColor
    card: OklchColor
    card2: OklchColor
    text: OklchColor
    textMuted: OklchColor
    border: OklchColor

    def as_tokens(self) -> dict:
        return {
            'bg': self.bg,
            'card': self.card,
            'card2': self.card2,
            'text': self.text,
            'textMuted': self.textMuted,
            'border': self.border,
        }


def _band(value: float, bounds: tuple[float, float]) -> float:
    return max(bounds[0], min(bounds[1], value))


def neutral_lightness(mode: str, levels: AdjustmentLevels, targets: NeutralTargets) -> dict:
    """
    Banded lightness per neutral token for one mode.

    Higher contrast pushes surfaces and text apart: in light mode surfaces
    rise and text falls, in dark mode the reverse.
    """
    bri = levels.brightness * BRIGHTNESS_STEP
    con = levels.contrast * CONTRAST_STEP

    if mode == 'dark':
        raw = {
            'bg': targets.bg + bri - con,
            'card': targets.card + bri * 0.8 - con * 0.5,
            'card2': targets.card2 + bri * 0.6 - con * 0.3,
            'text': targets.text + bri * 0.3 + con,
            'textMuted': targets.text_muted + bri * 0.2 + con * 0.5,
            'border': targets.border + bri * 0.3,
        }
        bands = DARK_BANDS
    else:
        raw = {
            'bg': targets.bg + bri + con,
            'card': targets.card + bri * 0.8 + con * 0.5,
            'card2': targets.card2 + bri * 0.6 + con * 0.3,
            'text': targets.text - bri * 0.3 - con,
            'textMuted': targets.text_muted - bri * 0.2 - con * 0.5,
            'border': targets.border + bri * 0.3,
        }
        bands = LIGHT_BANDS

    return {key: _band(value, bands[key]) for key, value in raw.items()}


def build_neutral_foundation(mode: str, base_hue: float, warmth: float,
                             levels: AdjustmentLevels, tuning: Tuning = DEFAULT_TUNING) -> NeutralFoundation:
    """
    Build the neutral tokens for one mode.

    Args:
        mode: 'light' or 'dark'
        base_hue: Harmony base hue; text tints lean toward it
        warmth: PRNG draw in [-0.5, 0.5]; positive tints surfaces warm
        levels: Adjustment levels for this mode
        tuning: Supplies the neutral lightness targets

    Returns:
        Gamut-clamped NeutralFoundation.
    """
    lightness = neutral_lightness(mode, levels, tuning.targets(mode))
    tint = max(0.0, levels.saturation * TINT_STEP)
    surface_hue = WARM_TINT_HUE if warmth > 0 else COOL_TINT_HUE

    colors = {}
    for key, L in lightness.items():
        hue = base_hue if key in ('text', 'textMuted') else surface_hue
        colors[key] = clamp_color(L, tint * TINT_FACTORS[key], hue)
    return NeutralFoundation(**colors)
