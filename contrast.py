#!/usr/bin/env python3
"""
WCAG contrast measurement and contrast-seeking color search.

All ratios are measured on the final hex values, so what is checked is what
gets rendered.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from oklch import OklchColor, clamp_color, hex_to_rgb, to_hex, to_oklch


# =============================================================================
# Constants
# =============================================================================

FOREGROUND_STEP = 0.02  # Lightness step when walking a tinted foreground
FOREGROUND_MAX_ITERATIONS = 25
FOREGROUND_LIGHT_START = 0.88  # Start for light text on dark fills
FOREGROUND_DARK_START = 0.22  # Start for dark text on light fills
FOREGROUND_MIN_TINT = 0.035
FOREGROUND_MAX_TINT = 0.09

ADJUST_STEP = 0.02  # Lightness step for adjust_for_contrast
ADJUST_MAX_STEPS = 48  # Per direction

WHITE = OklchColor(1.0, 0.0, 0.0)
BLACK = OklchColor(0.0, 0.0, 0.0)

WCAG_THRESHOLDS = {
    'AA': 4.5,
    'AAA': 7.0,
    'AA-large': 3.0,
    'AAA-large': 4.5,
}


# =============================================================================
# Measurement
# =============================================================================

@lru_cache(maxsize=16384)
def relative_luminance(hex_color: str) -> float:
    """WCAG relative luminance of a hex color."""
    channels = []
    for value in hex_to_rgb(hex_color):
        c = value / 255.0
        channels.append(c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4)
    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(hex1: str, hex2: str) -> float:
    """WCAG contrast ratio between two hex colors (1-21)."""
    l1 = relative_luminance(hex1)
    l2 = relative_luminance(hex2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def color_contrast(fg: OklchColor, bg: OklchColor) -> float:
    """Contrast ratio between two OKLCH colors, via their hex values."""
    return contrast_ratio(to_hex(fg), to_hex(bg))


def wcag_level(ratio: float) -> str:
    """Highest WCAG level a ratio satisfies."""
    if ratio >= 7:
        return "AAA"
    elif ratio >= 4.5:
        return "AA"
    elif ratio >= 3:
        return "AA-large"
    return "fail"


def meets_wcag(fg_hex: str, bg_hex: str, level: str = 'AA') -> bool:
    return contrast_ratio(fg_hex, bg_hex) >= WCAG_THRESHOLDS[level]


def contrast_headroom(fg_hex: str, bg_hex: str, minimum: float = 4.5) -> float:
    """How far a pair sits above (or below, if negative) a minimum ratio."""
    return contrast_ratio(fg_hex, bg_hex) - minimum


@dataclass(frozen=True)
class ContrastCheck:
    """Result of checking one foreground/background pair."""
    fg: str
    bg: str
    ratio: float
    level: str
    passes: bool


def validate_contrasts(pairs: Iterable[tuple[str, str]], minimum: float = 4.5) -> list[ContrastCheck]:
    """Check a list of (fg, bg) hex pairs against a minimum ratio."""
    checks = []
    for fg, bg in pairs:
        ratio = contrast_ratio(fg, bg)
        checks.append(ContrastCheck(fg, bg, ratio, wcag_level(ratio), ratio >= minimum))
    return checks


def all_contrasts_pass(pairs: Iterable[tuple[str, str]], minimum: float = 4.5) -> bool:
    return all(check.passes for check in validate_contrasts(pairs, minimum))


# =============================================================================
# Search
# =============================================================================

def select_foreground(bg: OklchColor, target_ratio: float = 4.5) -> OklchColor:
    """
    Pick a readable foreground for a filled background.

    Walks a tinted color (the background's hue, softened chroma) away from
    the background until the target ratio is met. Pure white or black is
    used only when no tinted step gets there; if neither meets the target
    either, the better of the two is returned.

    Args:
        bg: Background fill color
        target_ratio: Minimum contrast ratio to reach

    Returns:
        Gamut-clamped foreground color.
    """
    bg_hex = to_hex(bg)
    white_ratio = contrast_ratio('#ffffff', bg_hex)
    black_ratio = contrast_ratio('#000000', bg_hex)
    go_light = white_ratio >= black_ratio

    tint = min(FOREGROUND_MAX_TINT, max(FOREGROUND_MIN_TINT, bg.C))
    L = FOREGROUND_LIGHT_START if go_light else FOREGROUND_DARK_START
    step = FOREGROUND_STEP if go_light else -FOREGROUND_STEP

    for _ in range(FOREGROUND_MAX_ITERATIONS):
        if not 0.0 < L < 1.0:
            break
        candidate = clamp_color(L, tint, bg.H)
        if contrast_ratio(to_hex(candidate), bg_hex) >= target_ratio:
            return candidate
        L += step

    return WHITE if go_light else BLACK


def select_foreground_hex(bg_hex: str, target_ratio: float = 4.5) -> str:
    """Hex-in, hex-out form of select_foreground."""
    return to_hex(select_foreground(to_oklch(bg_hex), target_ratio))


def adjust_for_contrast(fg: OklchColor, bg: OklchColor, min_ratio: float = 4.5) -> OklchColor:
    """
    Move a color's lightness until it reaches min_ratio against bg.

    Searches both directions in ADJUST_STEP increments, at most
    ADJUST_MAX_STEPS each way. The smallest displacement that meets the
    target wins (higher ratio on a tie). If nothing meets it, the
    highest-ratio candidate seen is returned.
    """
    bg_hex = to_hex(bg)
    start = clamp_color(fg.L, fg.C, fg.H)
    best, best_ratio = start, contrast_ratio(to_hex(start), bg_hex)
    if best_ratio >= min_ratio:
        return start

    blocked = {1: False, -1: False}
    for step in range(1, ADJUST_MAX_STEPS + 1):
        winners = []
        for direction in (1, -1):
            if blocked[direction]:
                continue
            L = fg.L + direction * step * ADJUST_STEP
            if L >= 1.0 or L <= 0.0:
                # Past the end of the axis; evaluate the extreme once
                blocked[direction] = True
                L = 1.0 if direction > 0 else 0.0
            candidate = clamp_color(L, fg.C, fg.H)
            ratio = contrast_ratio(to_hex(candidate), bg_hex)
            if ratio > best_ratio:
                best, best_ratio = candidate, ratio
            if ratio >= min_ratio:
                winners.append((ratio, candidate))
        if winners:
            return max(winners, key=lambda w: w[0])[1]
        if blocked[1] and blocked[-1]:
            break
    return best


def worst_surface(fg: OklchColor, surfaces: Iterable[OklchColor]) -> tuple[Optional[OklchColor], float]:
    """The surface giving the lowest contrast against fg, with that ratio."""
    worst, worst_ratio = None, float('inf')
    fg_hex = to_hex(fg)
    for surface in surfaces:
        ratio = contrast_ratio(fg_hex, to_hex(surface))
        if ratio < worst_ratio:
            worst, worst_ratio = surface, ratio
    return worst, worst_ratio


def adjust_against_surfaces(fg: OklchColor, surfaces: list[OklchColor], min_ratio: float,
                            rounds: int = 4, achromatic_fallback: bool = True) -> OklchColor:
    """
    Make fg reach min_ratio against every surface in a list.

    Each round adjusts against the current worst surface. If the rounds run
    out, pure white or black is tried (whichever clears all surfaces, or
    scores the better worst case).
    """
    current = fg
    for _ in range(rounds):
        worst, ratio = worst_surface(current, surfaces)
        if worst is None or ratio >= min_ratio:
            return current
        current = adjust_for_contrast(current, worst, min_ratio)

    _, ratio = worst_surface(current, surfaces)
    if ratio >= min_ratio or not achromatic_fallback:
        return current

    options = [(worst_surface(extreme, surfaces)[1], extreme) for extreme in (WHITE, BLACK)]
    options.append((ratio, current))
    passing = [option for option in options if option[0] >= min_ratio]
    if passing:
        return passing[0][1]
    return max(options, key=lambda o: o[0])[1]
