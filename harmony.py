#!/usr/bin/env python3
"""
Harmony hue selection.

Maps a base hue and a harmony style to five role hues, in the order
primary, secondary, accent, good, bad.
"""

import logging
from typing import Optional, Sequence

from oklch import parse_hex, to_oklch
from seeded_random import SeededRandom

logger = logging.getLogger(__name__)


# Offsets in degrees for (primary, secondary, accent, good, bad)
HARMONY_OFFSETS = {
    'monochrome': (0, 0, 0, 0, 0),
    'analogous': (0, 30, -30, 15, -15),
    'complementary': (0, 180, 30, 210, -30),
    'split-complementary': (0, 150, 210, 30, 180),
    'triadic': (0, 120, 240, 60, 180),
    'tetradic': (0, 90, 180, 270, 45),
    'compound': (0, 165, 180, 195, 30),
    'triadic-split': (0, 120, 150, 240, 270),
}

RANDOM_CHOICES = tuple(mode for mode in HARMONY_OFFSETS if mode != 'monochrome')
HARMONY_MODES = tuple(HARMONY_OFFSETS) + ('random', 'image')
FALLBACK_MODE = 'analogous'

ROLE_NAMES = ('primary', 'secondary', 'accent', 'good', 'bad')

# Override palette slots feeding each role hue
SHORT_OVERRIDE_SLOTS = (0, 1, 2, 3, 4)
IMPORT_OVERRIDE_SLOTS = (5, 6, 7, 8, 9)


def resolve_harmony_mode(mode: str, rng: SeededRandom) -> str:
    """
    Resolve a requested style to a concrete one.

    'random' draws from the non-monochrome styles. 'image' keeps its name
    (it uses the analogous table). Anything unknown becomes analogous.
    """
    if mode == 'random':
        return rng.pick(RANDOM_CHOICES)
    if mode in HARMONY_OFFSETS or mode == 'image':
        return mode
    logger.debug("Unknown harmony mode %r, using %s", mode, FALLBACK_MODE)
    return FALLBACK_MODE


def role_hues(base_hue: float, mode: str) -> list[float]:
    """Role hues for a resolved mode, each normalized to [0, 360)."""
    offsets = HARMONY_OFFSETS.get(mode, HARMONY_OFFSETS[FALLBACK_MODE])
    return [(base_hue + offset) % 360 for offset in offsets]


def override_slots(override: Sequence[str]) -> tuple:
    return IMPORT_OVERRIDE_SLOTS if len(override) == 10 else SHORT_OVERRIDE_SLOTS


def override_base_hue(override: Optional[Sequence[str]]) -> Optional[float]:
    """Hue of the lead override color (primary slot), if one is set."""
    if not override:
        return None
    lead = parse_hex(override[override_slots(override)[0]])
    return to_oklch(lead).H if lead else None


def apply_override_hues(hues: list[float], override: Optional[Sequence[str]]) -> list[float]:
    """Replace role hues with the hues of any supplied override colors."""
    if not override:
        return list(hues)
    result = list(hues)
    for role_index, slot in enumerate(override_slots(override)):
        color = parse_hex(override[slot])
        if color:
            result[role_index] = to_oklch(color).H
    return result
