#!/usr/bin/env python3
"""
Derive a companion mode from an anchor mode.

Neutrals jump to the companion's lightness targets keeping their hue; brand
and status fills keep hue and shift lightness by fixed offsets, with chroma
softened when going dark. Foregrounds are re-derived from the new fills.
"""

from brand_colors import ring_color
from oklch import OklchColor, clamp_color
from theme_tokens import TOKEN_KEYS, recompute_foregrounds
from tuning import DEFAULT_TUNING, Tuning


def _shifted(color: OklchColor, L: float, chroma_factor: float) -> OklchColor:
    return clamp_color(L, color.C * chroma_factor, color.H)


def _bounded(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def derive_dark_from_light(light: dict, tuning: Tuning = DEFAULT_TUNING) -> dict:
    """Build dark-mode tokens from light-mode tokens."""
    targets = tuning.dark_targets
    primary = _shifted(light['primary'], min(0.65, light['primary'].L + 0.1), 0.9)

    dark = {
        'bg': _shifted(light['bg'], targets.bg, 0.5),
        'card': _shifted(light['card'], targets.card, 0.5),
        'card2': _shifted(light['card2'], targets.card2, 0.5),
        'text': _shifted(light['text'], targets.text, 0.3),
        'textMuted': _shifted(light['textMuted'], targets.text_muted, 0.3),
        'border': _shifted(light['border'], targets.border, 0.5),
        'primary': primary,
        'secondary': _shifted(light['secondary'], min(0.60, light['secondary'].L + 0.05), 0.85),
        'accent': _shifted(light['accent'], min(0.70, light['accent'].L + 0.15), 0.9),
        'good': _shifted(light['good'], light['good'].L + 0.05, 0.85),
        'warn': _shifted(light['warn'], light['warn'].L, 0.85),
        'bad': _shifted(light['bad'], light['bad'].L + 0.05, 0.85),
        'ring': ring_color('dark', primary),
    }
    dark = recompute_foregrounds({**dark, **{k: light[k] for k in TOKEN_KEYS if k not in dark}})
    return {key: dark[key] for key in TOKEN_KEYS}


def derive_light_from_dark(dark: dict, tuning: Tuning = DEFAULT_TUNING) -> dict:
    """Build light-mode tokens from dark-mode tokens."""
    targets = tuning.light_targets
    primary = _shifted(dark['primary'], _bounded(dark['primary'].L - 0.14, 0.35, 0.70), 1.0)

    light = {
        'bg': _shifted(dark['bg'], targets.bg, 1.0),
        'card': _shifted(dark['card'], targets.card, 1.0),
        'card2': _shifted(dark['card2'], targets.card2, 1.0),
        'text': _shifted(dark['text'], targets.text, 1.0),
        'textMuted': _shifted(dark['textMuted'], targets.text_muted, 1.0),
        'border': _shifted(dark['border'], targets.border, 1.0),
        'primary': primary,
        'secondary': _shifted(dark['secondary'], _bounded(dark['secondary'].L - 0.02, 0.40, 0.75), 1.0),
        'accent': _shifted(dark['accent'], _bounded(dark['accent'].L - 0.15, 0.45, 0.72), 1.0),
        'good': _shifted(dark['good'], dark['good'].L - 0.16, 1.0),
        'warn': _shifted(dark['warn'], dark['warn'].L - 0.14, 1.0),
        'bad': _shifted(dark['bad'], dark['bad'].L - 0.16, 1.0),
        'ring': ring_color('light', primary),
    }
    light = recompute_foregrounds({**light, **{k: dark[k] for k in TOKEN_KEYS if k not in light}})
    return {key: light[key] for key in TOKEN_KEYS}


def derive_companion(anchor_mode: str, anchor: dict, tuning: Tuning = DEFAULT_TUNING) -> dict:
    """Derive the other mode's tokens from the anchor mode's tokens."""
    if anchor_mode == 'dark':
        return derive_light_from_dark(anchor, tuning)
    return derive_dark_from_light(anchor, tuning)
