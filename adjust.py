#!/usr/bin/env python3
"""
Adjustment pipeline.

Applies a mode's saturation/contrast/brightness levels to a full token set
and then repairs whatever the global transforms broke:

    1. Brightness   - gamma curve plus lift on every lightness
    2. Contrast     - spread around the mean lightness, then role bands
    3. Saturation   - chroma scaling and gamut clamp
    4. Foreground pair repair
    5. Surface/border/text separation and duplicate removal
    6. Readability guardrails for text and muted text
    7. Visibility floor for chromatic fills
    8. Foreground recompute
"""

import logging
from dataclasses import replace

import numpy as np

from contrast import adjust_against_surfaces, color_contrast, select_foreground, worst_surface
from oklch import OklchColor, clamp_color, to_hex, to_oklch
from theme_tokens import (
    CHROMATIC_KEYS, FOREGROUND_PAIRS, SURFACE_KEYS, TOKEN_KEYS, AdjustmentLevels,
    recompute_foregrounds, separate_duplicates,
)
from tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Brightness pass
BRIGHTNESS_GAMMA_STEP = 0.28  # gamma = 2^(-b * step)
BRIGHTNESS_MAX_LIFT = 0.14  # Lift at |b| = 5
BRIGHTNESS_CLIP_STEP = 0.012  # Clip bounds tighten by this per level

# Contrast pass
CONTRAST_FACTOR_STEP = 0.35  # factor = 2^(c * step)
GENERAL_BAND = (0.01, 0.995)
CHROMATIC_BANDS = {'light': (0.35, 0.80), 'dark': (0.45, 0.85)}  # Fills never reach black or white
FILL_CENTER_BANDS = {'light': (0.40, 0.70), 'dark': (0.52, 0.78)}  # Where the mean fill may sit
SURFACE_BANDS = {'light': (0.74, 0.995), 'dark': (0.02, 0.32)}
BORDER_BANDS = {'light': (0.55, 0.95), 'dark': (0.12, 0.55)}

# Saturation pass
SATURATION_STEP = 0.2
LOW_CONTRAST_DESATURATION = 0.1  # Extra chroma loss per negative contrast level
MIN_SATURATION_FACTOR = 0.01
CHROMA_FLOOR = 0.008  # Fills keep a trace of hue

# Separation, as lightness gaps
CARD_BG_GAP = 0.03
CARD2_CARD_GAP = 0.02
BORDER_GAPS = {'bg': 0.06, 'card': 0.04, 'card2': 0.03}
MUTED_TEXT_GAP = 0.08
SEPARATION_STEP = 0.004  # Extra lightness per retry when hex rounding eats a gap
SEPARATION_MAX_STEPS = 12

GUARDRAIL_ROUNDS = 4
FOREGROUND_REPAIR_FACTOR = 0.7
FOREGROUND_REPAIR_MIN = 1.1
VISIBILITY_RELAX_START = 2  # Contrast levels below -2 relax the floor
VISIBILITY_RELAX_STEP = 0.1


def _band(L: float, bounds: tuple[float, float]) -> float:
    return max(bounds[0], min(bounds[1], L))


def _with_L(color: OklchColor, L: float) -> OklchColor:
    return clamp_color(L, color.C, color.H)


def _rendered_L(color: OklchColor) -> float:
    return to_oklch(to_hex(color)).L


def foreground_target(levels: AdjustmentLevels) -> float:
    """Target ratio for *Fg tokens; relaxed a little at negative contrast."""
    if levels.contrast >= 0:
        return 4.5
    return max(3.2, 4.5 + levels.contrast * 0.26)


def visibility_floor(mode: str, levels: AdjustmentLevels, tuning: Tuning = DEFAULT_TUNING) -> float:
    relax = max(0, -levels.contrast - VISIBILITY_RELAX_START) * VISIBILITY_RELAX_STEP
    return tuning.visibility(mode) - relax


# =============================================================================
# Global Passes
# =============================================================================

# Passes 1 and 2 only move lightness and leave chroma unclamped, so a fill
# squeezed toward black keeps its color for the saturation pass to restore.

def apply_brightness(tokens: dict, brightness: int) -> dict:
    """Pass 1: L' = clamp(L^gamma + lift), with clip bounds that follow the sign of b."""
    gamma = 2 ** (-brightness * BRIGHTNESS_GAMMA_STEP)
    lift = brightness / 5 * BRIGHTNESS_MAX_LIFT
    low = 0.02 + max(0, brightness) * BRIGHTNESS_CLIP_STEP
    high = 0.995 + min(0, brightness) * BRIGHTNESS_CLIP_STEP

    result = {}
    for key, color in tokens.items():
        L = _band(max(0.0, color.L) ** gamma + lift, (low, high))
        result[key] = replace(color, L=L)
    return result


def role_band(key: str, mode: str) -> tuple[float, float]:
    if key in CHROMATIC_KEYS:
        return CHROMATIC_BANDS[mode]
    if key in SURFACE_KEYS:
        return SURFACE_BANDS[mode]
    if key == 'border':
        return BORDER_BANDS[mode]
    return GENERAL_BAND


def apply_contrast(tokens: dict, contrast: int, mode: str) -> dict:
    """
    Pass 2: scale lightness around the token mean, then apply role bands.

    Fills move as a group: their mean is spread around the token mean and
    kept inside FILL_CENTER_BANDS, and each fill keeps its (scaled) offset
    from that mean. The surface bands keep light-mode surfaces light and
    dark-mode surfaces dark, so text on them always has a readable solution.
    """
    midpoint = float(np.mean([tokens[key].L for key in TOKEN_KEYS]))
    factor = 2 ** (contrast * CONTRAST_FACTOR_STEP)

    fill_mean = float(np.mean([tokens[key].L for key in CHROMATIC_KEYS]))
    fill_center = _band(midpoint + (fill_mean - midpoint) * factor, FILL_CENTER_BANDS[mode])

    result = {}
    for key, color in tokens.items():
        if key in CHROMATIC_KEYS:
            L = fill_center + (color.L - fill_mean) * factor
        else:
            L = midpoint + (color.L - midpoint) * factor
        result[key] = replace(color, L=_band(L, role_band(key, mode)))
    return result


def apply_saturation(tokens: dict, saturation: int, contrast: int) -> dict:
    """Pass 3: scale chroma; low contrast also mutes color a little."""
    factor = max(MIN_SATURATION_FACTOR, 1 + saturation * SATURATION_STEP)
    if contrast < 0:
        factor *= 1 + contrast * LOW_CONTRAST_DESATURATION

    result = {}
    for key, color in tokens.items():
        C = color.C * factor
        if key in CHROMATIC_KEYS:
            C = max(CHROMA_FLOOR, C)
        result[key] = clamp_color(color.L, C, color.H)
    return result


# =============================================================================
# Repairs
# =============================================================================

def repair_foreground_pairs(tokens: dict, fg_target: float) -> dict:
    """Pass 4: re-derive foregrounds that fell below a loose floor."""
    floor = max(FOREGROUND_REPAIR_MIN, fg_target * FOREGROUND_REPAIR_FACTOR)
    result = dict(tokens)
    for fg_key, fill_key in FOREGROUND_PAIRS.items():
        if color_contrast(result[fg_key], result[fill_key]) < floor:
            result[fg_key] = select_foreground(result[fill_key], fg_target)
    return result


def _separate(color: OklchColor, reference: OklchColor, direction: int, gap: float) -> OklchColor:
    """
    Move color until it renders at least gap beyond reference in direction.

    Gaps are measured on the hex colors, so rounding cannot eat them; each
    retry pushes a little further, up to SEPARATION_MAX_STEPS.
    """
    ref_L = _rendered_L(reference)
    if (_rendered_L(color) - ref_L) * direction >= gap:
        return color

    target = ref_L + direction * gap
    candidate = _with_L(color, target)
    for _ in range(SEPARATION_MAX_STEPS):
        if (_rendered_L(candidate) - ref_L) * direction >= gap:
            break
        target += direction * SEPARATION_STEP
        candidate = _with_L(color, target)
    return candidate


def enforce_separation(tokens: dict, mode: str) -> dict:
    """
    Pass 5: keep layered surfaces, border and muted text distinguishable.

    Cards and border step away from bg (darker in light mode, lighter in
    dark mode); muted text sits on the bg side of text.
    """
    direction = -1 if mode == 'light' else 1
    result = dict(tokens)

    result['card'] = _separate(result['card'], result['bg'], direction, CARD_BG_GAP)
    result['card2'] = _separate(result['card2'], result['card'], direction, CARD2_CARD_GAP)
    for key, gap in BORDER_GAPS.items():
        result['border'] = _separate(result['border'], result[key], direction, gap)
    result['textMuted'] = _separate(result['textMuted'], result['text'], -direction, MUTED_TEXT_GAP)

    return separate_duplicates(result)


def enforce_readability(tokens: dict, mode: str, tuning: Tuning = DEFAULT_TUNING) -> dict:
    """
    Pass 6: text and muted text must clear every surface.

    Text is then pushed away from muted text if the two ended up closer
    than MUTED_TEXT_GAP; that only ever raises its contrast.
    """
    minimums = tuning.readability(mode)
    surfaces = [tokens[key] for key in SURFACE_KEYS]
    result = dict(tokens)
    for key, minimum in (('text', minimums.text), ('textMuted', minimums.text_muted)):
        result[key] = adjust_against_surfaces(result[key], surfaces, minimum, rounds=GUARDRAIL_ROUNDS)
        _, ratio = worst_surface(result[key], surfaces)
        if ratio < minimum:
            logger.warning("%s %s reaches only %.2f against its surfaces (wanted %.2f)",
                           mode, key, ratio, minimum)

    direction = -1 if mode == 'light' else 1
    result['text'] = _separate(result['text'], result['textMuted'], direction, MUTED_TEXT_GAP)
    return result


def enforce_visibility(tokens: dict, mode: str, levels: AdjustmentLevels,
                       tuning: Tuning = DEFAULT_TUNING) -> dict:
    """Pass 7: chromatic fills must stand out from every surface."""
    floor = visibility_floor(mode, levels, tuning)
    surfaces = [tokens[key] for key in SURFACE_KEYS]
    result = dict(tokens)
    for key in CHROMATIC_KEYS:
        result[key] = adjust_against_surfaces(result[key], surfaces, floor,
                                              rounds=GUARDRAIL_ROUNDS, achromatic_fallback=False)
    return result


# =============================================================================
# Pipeline
# =============================================================================

def adjust_theme(tokens: dict, mode: str, levels: AdjustmentLevels,
                 tuning: Tuning = DEFAULT_TUNING) -> dict:
    """
    Run the full adjustment pipeline on one mode's tokens.

    Args:
        tokens: Token name -> OklchColor for all twenty tokens
        mode: 'light' or 'dark'
        levels: This mode's adjustment levels
        tuning: Readability and visibility minimums

    Returns:
        New token dict; the input is not modified.
    """
    fg_target = foreground_target(levels)

    result = apply_brightness(tokens, levels.brightness)
    result = apply_contrast(result, levels.contrast, mode)
    result = apply_saturation(result, levels.saturation, levels.contrast)
    result = repair_foreground_pairs(result, fg_target)
    result = enforce_separation(result, mode)
    result = enforce_readability(result, mode, tuning)
    result = enforce_visibility(result, mode, levels, tuning)
    result = recompute_foregrounds(result, fg_target)
    return separate_duplicates(result)
