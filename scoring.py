#!/usr/bin/env python3
"""
Palette scoring and validation.

Hard rejects flag palettes that are unusable (critical) or clearly flawed
(major). The soft score rates the rest on contrast headroom, harmony,
chroma balance, usability and a mild aesthetic preference.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

import numpy as np

from contrast import contrast_headroom, contrast_ratio
from oklch import delta_e, hue_difference, is_in_srgb_gamut, to_oklch
from tuning import DEFAULT_TUNING, Tuning


HARMONY_ANGLES = (0, 30, 60, 90, 120, 150, 180)
GAMUT_CHECK_KEYS = ('primary', 'secondary', 'accent', 'good', 'bad')
MAX_HEADROOM_SCORE = 10.0


@dataclass(frozen=True)
class RejectReason:
    code: str
    message: str
    severity: str  # 'critical' or 'major'


@dataclass(frozen=True)
class ScoreBreakdown:
    """Component scores and the weighted total, all non-negative."""
    contrast_headroom: float
    harmony_consistency: float
    chroma_balance: float
    ui_usability: float
    aesthetic_bias: float
    total: float


@dataclass
class ScoredPalette:
    palette: Mapping[str, str]
    score: ScoreBreakdown
    rejects: list = field(default_factory=list)

    @property
    def critical_count(self) -> int:
        return sum(1 for r in self.rejects if r.severity == 'critical')

    @property
    def major_count(self) -> int:
        return sum(1 for r in self.rejects if r.severity == 'major')

    @property
    def is_valid(self) -> bool:
        return self.critical_count == 0


def check_hard_rejects(palette: Mapping[str, str], tuning: Tuning = DEFAULT_TUNING) -> list[RejectReason]:
    """
    Check a palette against the hard reject rules.

    Args:
        palette: Token name -> hex; needs bg, card, text, primary,
            secondary, accent, good and bad

    Returns:
        List of RejectReason, empty when the palette passes.
    """
    thresholds = tuning.score_thresholds
    rejects = []

    text_bg = contrast_ratio(palette['text'], palette['bg'])
    if text_bg < thresholds.min_text_contrast:
        rejects.append(RejectReason(
            'LOW_TEXT_CONTRAST',
            f"Text on background contrast {text_bg:.2f} < {thresholds.min_text_contrast}",
            'critical',
        ))

    text_card = contrast_ratio(palette['text'], palette['card'])
    if text_card < thresholds.min_text_contrast:
        rejects.append(RejectReason(
            'LOW_CARD_TEXT_CONTRAST',
            f"Text on card contrast {text_card:.2f} < {thresholds.min_text_contrast}",
            'critical',
        ))

    for key in GAMUT_CHECK_KEYS:
        if not is_in_srgb_gamut(to_oklch(palette[key])):
            rejects.append(RejectReason('OUT_OF_GAMUT', f"{key} color is out of sRGB gamut", 'major'))

    primary = to_oklch(palette['primary'])
    primary_to_bad = delta_e(primary, to_oklch(palette['bad']))
    if primary_to_bad < thresholds.min_primary_to_accent_delta:
        rejects.append(RejectReason(
            'PRIMARY_LIKE_DANGER',
            f"Primary too similar to danger color (deltaE: {primary_to_bad:.3f})",
            'major',
        ))

    bg_card = abs(to_oklch(palette['bg']).L - to_oklch(palette['card']).L)
    if bg_card < thresholds.min_bg_to_card_delta:
        rejects.append(RejectReason(
            'LOW_BG_CARD_SEPARATION',
            f"Background and card too similar (L diff: {bg_card:.3f})",
            'major',
        ))

    primary_to_accent = delta_e(primary, to_oklch(palette['accent']))
    if primary_to_accent < thresholds.min_primary_to_accent_delta:
        rejects.append(RejectReason(
            'PRIMARY_ACCENT_SIMILAR',
            f"Primary and accent too similar (deltaE: {primary_to_accent:.3f})",
            'major',
        ))

    return rejects


def score_palette(palette: Mapping[str, str], base_hue: float, tuning: Tuning = DEFAULT_TUNING) -> ScoreBreakdown:
    """Soft score of a palette relative to its base hue."""
    weights = tuning.score_weights
    primary = to_oklch(palette['primary'])
    secondary = to_oklch(palette['secondary'])
    accent = to_oklch(palette['accent'])

    # More contrast is better, up to a point
    headroom = min(MAX_HEADROOM_SCORE,
                   contrast_headroom(palette['text'], palette['bg'])
                   + contrast_headroom(palette['text'], palette['card']))

    # Primary should sit on a recognizable harmony angle from the base
    primary_offset = hue_difference(primary.H, base_hue)
    harmony = 10 - min(abs(primary_offset - angle) for angle in HARMONY_ANGLES) / 10

    chromas = np.array([primary.C, secondary.C, accent.C])
    chroma_balance = 10 - min(10.0, float(np.var(chromas)) * 1000)

    # Primary prominent, muted text readable but subdued
    prominence = 5 if primary.C > 0.1 else primary.C * 50
    muted_ratio = contrast_ratio(palette['textMuted'], palette['bg'])
    muted_balance = 5 if 3 <= muted_ratio < 7 else 2
    usability = prominence + muted_balance

    bg_L = to_oklch(palette['bg']).L
    aesthetic = (8 if bg_L > 0.9 or bg_L < 0.15 else 5) + (5 if 0.05 < primary.C < 0.25 else 2)

    total = (headroom * weights.contrast_headroom
             + harmony * weights.harmony_consistency
             + chroma_balance * weights.chroma_balance
             + usability * weights.ui_usability
             + aesthetic * weights.aesthetic_bias)

    return ScoreBreakdown(
        contrast_headroom=max(0.0, headroom),
        harmony_consistency=max(0.0, harmony),
        chroma_balance=max(0.0, chroma_balance),
        ui_usability=max(0.0, usability),
        aesthetic_bias=max(0.0, aesthetic),
        total=max(0.0, total),
    )


def evaluate_palette(palette: Mapping[str, str], base_hue: float, tuning: Tuning = DEFAULT_TUNING) -> ScoredPalette:
    return ScoredPalette(
        palette=palette,
        score=score_palette(palette, base_hue, tuning),
        rejects=check_hard_rejects(palette, tuning),
    )


def selection_key(candidate: ScoredPalette) -> tuple:
    """Sort key: fewest critical, then fewest major rejects, then best score."""
    return (candidate.critical_count, candidate.major_count, -candidate.score.total)


def select_best_palette(candidates: Sequence[ScoredPalette]) -> Optional[ScoredPalette]:
    """Best candidate by selection_key, or None for an empty list."""
    if not candidates:
        return None
    return min(candidates, key=selection_key)
