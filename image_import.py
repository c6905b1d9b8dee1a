#!/usr/bin/env python3
"""
Image-import override.

A ten-color palette (usually pulled from an image) pins ten tokens on one
side of the theme exactly as given. The remaining tokens on that side are
re-derived around the pinned foundation, and the other side is brought
into line by the parity pass.
"""

import logging
from typing import Optional, Sequence

from brand_colors import WARN_HUE, ring_color
from contrast import contrast_ratio
from oklch import OklchColor, clamp_color, parse_hex, to_hex, to_oklch
from theme_tokens import recompute_foregrounds, separate_duplicates

logger = logging.getLogger(__name__)


# Slot order of a ten-color override
IMPORT_SLOTS = (
    'bg', 'card', 'text', 'textMuted', 'textOnColor',
    'primary', 'secondary', 'accent', 'good', 'bad',
)
OVERRIDE_LENGTHS = (5, 10)

CARD2_GAP = 0.03
BORDER_GAP = 0.12
WARN_LIGHTNESS_OFFSET = 0.1
WARN_CHROMA_FACTOR = 0.9
BORDER_CHROMA_FACTOR = 0.6


def normalize_override(override: Optional[Sequence[str]]) -> Optional[list[str]]:
    """
    Validate an override palette.

    Returns None unless it has 5 or 10 entries. Entries that are not valid
    hex colors become '' (unset); valid ones are normalized to '#rrggbb'.
    """
    if override is None:
        return None
    override = list(override)
    if len(override) not in OVERRIDE_LENGTHS:
        logger.debug("Ignoring override palette of length %d", len(override))
        return None

    normalized = []
    for entry in override:
        value = parse_hex(entry) if entry else None
        if entry and value is None:
            logger.debug("Ignoring unparseable override entry %r", entry)
        normalized.append(value or '')
    return normalized


def is_import_palette(override: Optional[Sequence[str]]) -> bool:
    return override is not None and len(override) == 10


def pinned_slots(override: Sequence[str]) -> dict:
    """Token -> hex for every set slot of a ten-color override."""
    return {key: value for key, value in zip(IMPORT_SLOTS, override) if value}


def _is_light_surface(color: OklchColor) -> bool:
    hex_value = to_hex(color)
    return contrast_ratio('#000000', hex_value) >= contrast_ratio('#ffffff', hex_value)


def apply_image_import(tokens: dict, override: Sequence[str]) -> tuple[dict, set]:
    """
    Pin imported colors onto one side's tokens.

    card2, border, ring, warn and every foreground are re-derived from the
    pinned colors. A blank textOnColor slot takes the derived primaryFg.

    Args:
        tokens: Generated tokens for the import's source side
        override: Normalized ten-color override

    Returns:
        (tokens, frozen) where frozen names the tokens later passes must
        not touch.
    """
    pinned = pinned_slots(override)
    result = dict(tokens)
    for key, value in pinned.items():
        result[key] = to_oklch(value)

    bg = result['bg']
    light_surface = _is_light_surface(bg)
    direction = -1 if light_surface else 1
    polarity = 'light' if light_surface else 'dark'

    card = result['card']
    result['card2'] = clamp_color(card.L + direction * CARD2_GAP, card.C * 0.8, card.H)
    result['border'] = clamp_color(bg.L + direction * BORDER_GAP, bg.C * BORDER_CHROMA_FACTOR, bg.H)
    result['ring'] = ring_color(polarity, result['primary'])

    good, bad = result['good'], result['bad']
    result['warn'] = clamp_color(
        (good.L + bad.L) / 2 + WARN_LIGHTNESS_OFFSET,
        (good.C + bad.C) / 2 * WARN_CHROMA_FACTOR,
        WARN_HUE,
    )

    frozen = set(pinned)
    result = recompute_foregrounds(result, frozen=frozen)
    result = separate_duplicates(result, frozen=frozen)

    if 'textOnColor' not in pinned:
        result['textOnColor'] = result['primaryFg']
        frozen.update(('textOnColor', 'primaryFg'))
    return result, frozen
