#!/usr/bin/env python3
"""
Companion parity: keep the two modes recognizably the same theme.

After each mode is adjusted on its own, the companion's chromatic fills are
pulled toward the anchor's hue and relative chroma, and their lightness is
walked until they sit about as far from their surfaces (as a contrast
ratio) as the anchor's fills do. The pull weakens as the two modes'
adjustment levels diverge, so deliberately different settings still show
through.
"""

from adjust import CHROMATIC_BANDS
from contrast import worst_surface
from oklch import OklchColor, clamp_color, hue_difference, max_chroma, mix_hue, to_hex, to_oklch
from theme_tokens import CHROMATIC_KEYS, AdjustmentLevels, recompute_foregrounds


MIN_STRENGTH = 0.35
SPLIT_NORMALIZER = 18  # Level distance at which strength bottoms out (before the floor)
ANCHOR_CHROMA_WEIGHT = 0.7
OCCUPANCY_WEIGHT = 0.3
CHROMA_TOLERANCE = 0.14  # Companion chroma stays within +/-14% of the anchor
HUELESS_CHROMA = 0.02  # Anchors below this carry no meaningful hue

HUE_SNAP_THRESHOLD = 2.0  # Degrees of hex-rounding drift worth correcting
HUE_SNAP_CHROMA_FACTORS = (1.04, 0.96, 1.08, 0.92)

CONTRAST_SURFACES = ('bg', 'card')
CONTRAST_TOLERANCE = 1.8  # Allowed ratio gap between the modes' fills at full strength
CONTRAST_STEP = 0.01
CONTRAST_MAX_STEPS = 50


def parity_strength(anchor_levels: AdjustmentLevels, companion_levels: AdjustmentLevels) -> float:
    """
    1.0 for identical levels, falling toward MIN_STRENGTH as they split.

    At full strength the companion's hue lands within a few degrees of the
    anchor's. Below it, hue is only mixed part of the way, so low-chroma
    fills whose hue the companion's own levels bent can stay 10+ degrees
    apart; the hue bound holds for equal levels only. Anchors greyer than
    HUELESS_CHROMA never pull hue at all.
    """
    split = anchor_levels.distance(companion_levels)
    return max(MIN_STRENGTH, 1 - split / SPLIT_NORMALIZER)


def _rendered_hue(color: OklchColor) -> float:
    return to_oklch(to_hex(color)).H


def _snap_hue(color: OklchColor, hue: float, min_C: float, max_C: float) -> OklchColor:
    """
    Counter hue drift from hex rounding.

    Low-chroma colors can land several degrees off after quantization; try
    a few nearby chroma values within [min_C, max_C] and keep whichever
    renders closest to hue.
    """
    best, best_error = color, hue_difference(_rendered_hue(color), hue)
    if best_error <= HUE_SNAP_THRESHOLD:
        return color
    for factor in HUE_SNAP_CHROMA_FACTORS:
        candidate = clamp_color(color.L, max(min_C, min(max_C, color.C * factor)), color.H)
        error = hue_difference(_rendered_hue(candidate), hue)
        if error < best_error:
            best, best_error = candidate, error
    return best


def match_color(companion: OklchColor, anchor: OklchColor, strength: float) -> OklchColor:
    """Pull one companion color toward an anchor color."""
    anchor_max = max_chroma(anchor.L, anchor.H)
    occupancy = min(1.0, anchor.C / anchor_max) if anchor_max > 0 else 0.0

    target_C = (ANCHOR_CHROMA_WEIGHT * anchor.C
                + OCCUPANCY_WEIGHT * occupancy * max_chroma(companion.L, anchor.H))
    min_C = anchor.C * (1 - CHROMA_TOLERANCE)
    max_C = anchor.C * (1 + CHROMA_TOLERANCE)
    target_C = max(min_C, min(max_C, target_C))
    C = companion.C + (target_C - companion.C) * strength

    hue_strength = strength if anchor.C >= HUELESS_CHROMA else 0.0
    H = mix_hue(companion.H, anchor.H, hue_strength)

    matched = clamp_color(companion.L, C, H)
    if hue_strength > 0:
        matched = _snap_hue(matched, H, min_C, max_C)
    return matched


def match_surface_contrast(color: OklchColor, surfaces: list[OklchColor],
                           target_ratio: float, tolerance: float) -> OklchColor:
    """
    Walk a fill's lightness until its worst ratio against surfaces is
    within tolerance of target_ratio.

    The walk stays inside the mode's fill band (or the fill's own
    lightness, if that lies outside it) and stops at the first lightness
    that qualifies.
    """
    ratio = worst_surface(color, surfaces)[1]
    if abs(ratio - target_ratio) <= tolerance:
        return color

    mode = 'light' if surfaces[0].L > 0.5 else 'dark'
    low, high = CHROMATIC_BANDS[mode]
    low, high = min(low, color.L), max(high, color.L)  # A fill already outside may still move back
    away = -1 if mode == 'light' else 1  # Direction that raises contrast
    direction = away if ratio < target_ratio else -away

    candidate = color
    for step in range(1, CONTRAST_MAX_STEPS + 1):
        L = color.L + direction * step * CONTRAST_STEP
        if not low <= L <= high:
            break
        candidate = clamp_color(L, color.C, color.H)
        if abs(worst_surface(candidate, surfaces)[1] - target_ratio) <= tolerance:
            break
    return candidate


def enforce_parity(companion: dict, anchor: dict, anchor_levels: AdjustmentLevels,
                   companion_levels: AdjustmentLevels, fg_target: float = 4.5) -> dict:
    """
    Align the companion's chromatic fills with the anchor's.

    Anchor colors are read back from their hex values so the comparison is
    against what actually renders. Companion foregrounds are re-derived.

    Args:
        companion: Token dict being corrected
        anchor: Token dict held fixed
        anchor_levels: Levels the anchor was adjusted with
        companion_levels: Levels the companion was adjusted with
        fg_target: Contrast target for the recomputed foregrounds
    """
    strength = parity_strength(anchor_levels, companion_levels)
    tolerance = CONTRAST_TOLERANCE / strength
    anchor_surfaces = [anchor[key] for key in CONTRAST_SURFACES]
    companion_surfaces = [companion[key] for key in CONTRAST_SURFACES]

    result = dict(companion)
    for key in CHROMATIC_KEYS:
        anchor_color = to_oklch(to_hex(anchor[key]))
        anchor_ratio = worst_surface(anchor_color, anchor_surfaces)[1]
        aligned = match_surface_contrast(result[key], companion_surfaces, anchor_ratio, tolerance)
        result[key] = match_color(aligned, anchor_color, strength)
    return recompute_foregrounds(result, fg_target)
