#!/usr/bin/env python3
"""
Brand (primary, secondary, accent) and status (good, warn, bad) colors.

Each brand role samples a handful of chroma candidates at its hue and
lightness and keeps the best scoring one. Status colors are pulled toward
conventional green/red/yellow hues.
"""

from dataclasses import dataclass
from typing import Sequence

from contrast import color_contrast
from oklch import OklchColor, clamp_color, delta_e, hue_difference, signed_hue_delta
from seeded_random import SeededRandom
from theme_tokens import AdjustmentLevels


# =============================================================================
# Constants
# =============================================================================

BRAND_BASE_LIGHTNESS = {'light': 0.52, 'dark': 0.68}
BRIGHTNESS_L_STEP = 0.025
CONTRAST_L_STEP = 0.02

CANDIDATE_COUNT = 8
CANDIDATE_SPREAD = (0.85, 1.15)  # Chroma jitter around the role chroma

# Candidate scoring
CONTRAST_WEIGHT = 2.0
SEPARATION_WEIGHT = 10.0
MODERATE_CHROMA_BONUS = 5.0
MODERATE_CHROMA_RANGE = (0.1, 0.2)

GOOD_HUE = 140  # Green
BAD_HUE = 0  # Red
WARN_HUE = 60  # Yellow
GOOD_HUE_BAND = 40  # Max degrees good may sit from green
BAD_HUE_BAND = 32

RING_LIGHTNESS = {'light': 0.6, 'dark': 0.7}
RING_CHROMA_FACTOR = {'light': 1.0, 'dark': 0.7}


@dataclass(frozen=True)
class BrandColors:
    primary: OklchColor
    secondary: OklchColor
    accent: OklchColor


@dataclass(frozen=True)
class StatusColors:
    good: OklchColor
    warn: OklchColor
    bad: OklchColor


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def saturation_norm(levels: AdjustmentLevels) -> float:
    """Saturation level mapped from [-5, 5] to [0, 1]."""
    return (levels.saturation + 5) / 10


# =============================================================================
# Candidates
# =============================================================================

def generate_chroma_samples(hue: float, lightness: float, chroma: float,
                            rng: SeededRandom, count: int = CANDIDATE_COUNT) -> list[OklchColor]:
    """Sample gamut-clamped candidates with jittered chroma."""
    return [
        clamp_color(lightness, chroma * rng.next_float(*CANDIDATE_SPREAD), hue)
        for _ in range(count)
    ]


def score_candidate(candidate: OklchColor, bg: OklchColor, existing: Sequence[OklchColor]) -> float:
    """Favor contrast with bg, distance from colors already chosen, and moderate chroma."""
    score = color_contrast(candidate, bg) * CONTRAST_WEIGHT
    for other in existing:
        score += delta_e(candidate, other) * SEPARATION_WEIGHT
    if MODERATE_CHROMA_RANGE[0] <= candidate.C <= MODERATE_CHROMA_RANGE[1]:
        score += MODERATE_CHROMA_BONUS
    return score


def select_best_candidate(candidates: Sequence[OklchColor], bg: OklchColor,
                          existing: Sequence[OklchColor]) -> OklchColor:
    best, best_score = candidates[0], float('-inf')
    for candidate in candidates:
        score = score_candidate(candidate, bg, existing)
        if score > best_score:
            best, best_score = candidate, score
    return best


# =============================================================================
# Construction
# =============================================================================

def construct_brand_colors(mode: str, hues: Sequence[float], bg: OklchColor,
                           rng: SeededRandom, levels: AdjustmentLevels) -> BrandColors:
    """
    Build primary, secondary and accent for one mode.

    Args:
        mode: 'light' or 'dark'
        hues: Role hues (primary, secondary, accent, good, bad)
        bg: Background the candidates are scored against
        rng: Generation PRNG; draws CANDIDATE_COUNT values per role
        levels: Adjustment levels for this mode
    """
    base_L = BRAND_BASE_LIGHTNESS[mode] + levels.brightness * BRIGHTNESS_L_STEP
    base_C = 0.02 + saturation_norm(levels) * 0.24
    contrast_mod = levels.contrast * CONTRAST_L_STEP

    if mode == 'dark':
        # Higher contrast lifts fills further off a dark background
        roles = [
            (_clamp(base_L + contrast_mod, 0.55, 0.82), max(0.03, base_C)),
            (_clamp(base_L - 0.06, 0.50, 0.80), max(0.02, base_C * 0.75)),
            (_clamp(base_L + 0.04, 0.55, 0.85), max(0.03, base_C * 1.1)),
        ]
    else:
        roles = [
            (_clamp(base_L - contrast_mod, 0.35, 0.70), max(0.03, base_C)),
            (_clamp(base_L + 0.08, 0.40, 0.75), max(0.02, base_C * 0.75)),
            (_clamp(base_L + 0.05, 0.45, 0.72), max(0.03, base_C * 1.1)),
        ]

    chosen = []
    for (L, C), hue in zip(roles, hues[:3]):
        candidates = generate_chroma_samples(hue, L, C, rng)
        chosen.append(select_best_candidate(candidates, bg, chosen))
    return BrandColors(*chosen)


def clamp_hue_to_band(hue: float, center: float, half_width: float) -> float:
    """Pull a hue to within half_width degrees of center."""
    delta = _clamp(signed_hue_delta(center, hue), -half_width, half_width)
    return (center + delta) % 360


def status_hues(good_hue: float, bad_hue: float) -> tuple[float, float]:
    """Swap good/bad when bad sits nearer green or good nearer red, then band them."""
    if (hue_difference(bad_hue, GOOD_HUE) < hue_difference(good_hue, GOOD_HUE)
            or hue_difference(good_hue, BAD_HUE) < hue_difference(bad_hue, BAD_HUE)):
        good_hue, bad_hue = bad_hue, good_hue
    return (clamp_hue_to_band(good_hue, GOOD_HUE, GOOD_HUE_BAND),
            clamp_hue_to_band(bad_hue, BAD_HUE, BAD_HUE_BAND))


def construct_status_colors(mode: str, hues: Sequence[float], levels: AdjustmentLevels) -> StatusColors:
    """Build good, warn and bad for one mode from role hues 3 and 4."""
    good_hue, bad_hue = status_hues(hues[3], hues[4])
    base_C = 0.08 + saturation_norm(levels) * 0.16
    base_L = BRAND_BASE_LIGHTNESS[mode] + levels.brightness * BRIGHTNESS_L_STEP

    warn_L = min(0.9, base_L + 0.1) if mode == 'dark' else base_L + 0.12
    return StatusColors(
        good=clamp_color(base_L, base_C, good_hue),
        warn=clamp_color(warn_L, base_C * 0.9, WARN_HUE),
        bad=clamp_color(base_L, base_C, bad_hue),
    )


def ring_color(mode: str, primary: OklchColor) -> OklchColor:
    return clamp_color(RING_LIGHTNESS[mode], primary.C * RING_CHROMA_FACTOR[mode], primary.H)


def chromatic_tokens(mode: str, brand: BrandColors, status: StatusColors) -> dict:
    """Brand, status and ring colors keyed by token name."""
    return {
        'primary': brand.primary,
        'secondary': brand.secondary,
        'accent': brand.accent,
        'good': status.good,
        'warn': status.warn,
        'bad': status.bad,
        'ring': ring_color(mode, brand.primary),
    }
