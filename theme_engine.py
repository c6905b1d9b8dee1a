#!/usr/bin/env python3
"""
Dual-mode theme generation.

Builds a light and a dark palette of twenty tokens from a seed color, a
harmony style and per-mode adjustment levels:

    harmony hues -> anchor palette (neutrals, brand, status)
    -> derived companion -> adjustment pipeline per mode
    -> companion parity -> optional image import -> duplicate removal

The same options always produce the same theme.
"""

import json
import logging
import secrets
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from adjust import adjust_theme, foreground_target
from brand_colors import chromatic_tokens, construct_brand_colors, construct_status_colors
from harmony import (
    HARMONY_MODES, apply_override_hues, override_base_hue, resolve_harmony_mode, role_hues,
)
from image_import import apply_image_import, is_import_palette, normalize_override, pinned_slots
from mode_derive import derive_companion
from neutrals import build_neutral_foundation
from oklch import clamp_color, parse_hex, to_hex, to_oklch
from parity import enforce_parity
from scoring import ScoredPalette, evaluate_palette, select_best_palette
from seeded_random import SeededRandom
from theme_tokens import (
    MODES, AdjustmentLevels, DualTheme, assemble_tokens, other_mode,
    separate_duplicates, tokens_to_hex,
)
from tuning import DEFAULT_TUNING, Tuning

logger = logging.getLogger(__name__)


SEED_LIGHTNESS = 0.5  # Lightness/chroma of the hex reported as a theme's seed
SEED_CHROMA = 0.15
RANDOM_SEED_LIGHTNESS = 0.6


@dataclass(frozen=True)
class ThemeOptions:
    """Inputs to generate_theme."""
    harmony_mode: str = 'analogous'
    seed_color: Optional[str] = None  # Hex; its hue becomes the base hue
    levels: AdjustmentLevels = AdjustmentLevels()  # Light levels, and dark unless split
    dark_levels: Optional[AdjustmentLevels] = None
    override_palette: Optional[Sequence[str]] = None  # 5 role colors or 10 import slots
    dark_first: bool = False  # Build dark natively and derive light from it
    image_source_side: Optional[str] = None  # Side an import pins onto
    seed: Optional[str] = None  # PRNG seed when no seed color is given

    def levels_for(self, mode: str) -> AdjustmentLevels:
        if mode == 'dark' and self.dark_levels is not None:
            return self.dark_levels
        return self.levels


def random_seed_color() -> str:
    """Draw a fresh seed color from the OS entropy source."""
    hue = secrets.randbelow(360)
    return to_hex(clamp_color(RANDOM_SEED_LIGHTNESS, SEED_CHROMA, hue))


def build_palette(mode: str, hues: Sequence[float], base_hue: float, warmth: float,
                  rng: SeededRandom, levels: AdjustmentLevels, tuning: Tuning = DEFAULT_TUNING) -> dict:
    """Construct one mode's unadjusted tokens from scratch."""
    neutrals = build_neutral_foundation(mode, base_hue, warmth, levels, tuning)
    brand = construct_brand_colors(mode, hues, neutrals.bg, rng, levels)
    status = construct_status_colors(mode, hues, levels)
    return assemble_tokens(neutrals.as_tokens(), chromatic_tokens(mode, brand, status))


def generate_theme(options: ThemeOptions = ThemeOptions(), tuning: Tuning = DEFAULT_TUNING) -> DualTheme:
    """
    Generate a light/dark theme pair.

    Malformed inputs degrade rather than raise: an unparseable seed color
    is ignored, override palettes of the wrong length are ignored and
    unknown harmony modes fall back to analogous.

    Args:
        options: Seed, harmony mode, levels and overrides
        tuning: Neutral targets and readability minimums

    Returns:
        DualTheme with hex tokens for both modes.
    """
    seed_color = parse_hex(options.seed_color) if options.seed_color else None
    if options.seed_color and seed_color is None:
        logger.debug("Ignoring unparseable seed color %r", options.seed_color)
    override = normalize_override(options.override_palette)
    levels = {mode: options.levels_for(mode) for mode in MODES}

    # Seed the PRNG
    if seed_color:
        rng_seed = seed_color
    elif options.seed:
        rng_seed = options.seed
    elif override and any(override):
        rng_seed = '|'.join(override)
    else:
        seed_color = random_seed_color()
        rng_seed = seed_color
        logger.debug("No seed given, drew %s", seed_color)
    rng = SeededRandom.from_seed(rng_seed)

    # Stage 1: Hues
    if seed_color:
        base_hue = to_oklch(seed_color).H
    else:
        base_hue = override_base_hue(override)
        if base_hue is None:
            base_hue = float(rng.next_int(0, 359))
    harmony_mode = resolve_harmony_mode(options.harmony_mode, rng)
    hues = apply_override_hues(role_hues(base_hue, harmony_mode), override)
    warmth = rng.next_float(-0.5, 0.5)

    # Stage 2: Anchor palette and its companion
    anchor_mode = 'dark' if options.dark_first else 'light'
    companion_mode = other_mode(anchor_mode)
    anchor = build_palette(anchor_mode, hues, base_hue, warmth, rng, levels[anchor_mode], tuning)
    sides = {
        anchor_mode: anchor,
        companion_mode: derive_companion(anchor_mode, anchor, tuning),
    }

    # Stage 3: Per-mode adjustment, then parity
    sides = {mode: adjust_theme(tokens, mode, levels[mode], tuning) for mode, tokens in sides.items()}
    sides[companion_mode] = enforce_parity(
        sides[companion_mode], sides[anchor_mode],
        levels[anchor_mode], levels[companion_mode],
        foreground_target(levels[companion_mode]),
    )

    # Stage 4: Image import
    frozen = {mode: set() for mode in MODES}
    pinned = {}
    if is_import_palette(override):
        source = options.image_source_side if options.image_source_side in MODES else anchor_mode
        target = other_mode(source)
        sides[source], frozen[source] = apply_image_import(sides[source], override)
        sides[target] = enforce_parity(
            sides[target], sides[source], levels[source], levels[target],
            foreground_target(levels[target]),
        )
        pinned = {source: pinned_slots(override)}

    hex_sides = {}
    for mode in MODES:
        tokens = separate_duplicates(sides[mode], frozen[mode])
        hex_sides[mode] = tokens_to_hex(tokens)
        hex_sides[mode].update(pinned.get(mode, {}))

    reported_seed = seed_color or to_hex(clamp_color(SEED_LIGHTNESS, SEED_CHROMA, base_hue))
    logger.debug("Generated %s theme (base hue %.1f, seed %s)", harmony_mode, base_hue, reported_seed)
    return DualTheme(
        light=hex_sides['light'],
        dark=hex_sides['dark'],
        seed=reported_seed,
        mode=harmony_mode,
        base_hue=base_hue,
    )


def generate_best_theme(options: ThemeOptions, seeds: Iterable[str],
                        tuning: Tuning = DEFAULT_TUNING) -> tuple[Optional[DualTheme], Optional[ScoredPalette]]:
    """
    Generate one theme per PRNG seed and keep the best scoring one.

    Candidates are scored on their light side. Any seed color in options
    is dropped so the seeds actually vary the result.

    Returns:
        (theme, scored) for the winner, or (None, None) if seeds is empty.
    """
    scored = []
    themes = []
    for seed in seeds:
        theme = generate_theme(replace(options, seed_color=None, seed=seed), tuning)
        themes.append(theme)
        scored.append(evaluate_palette(theme.light, theme.base_hue, tuning))

    best = select_best_palette(scored)
    if best is None:
        return None, None
    winner = next(theme for theme, candidate in zip(themes, scored) if candidate is best)
    return winner, best


# =============================================================================
# CLI
# =============================================================================

def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description='Generate a light/dark color theme and print it as JSON.'
    )
    parser.add_argument(
        '--mode', '-m',
        default='analogous',
        choices=HARMONY_MODES,
        help='Harmony style (default: analogous)'
    )
    parser.add_argument(
        '--seed-color', '-s',
        help='Seed color as hex, e.g. #3a5cb8'
    )
    parser.add_argument(
        '--seed',
        help='Free-form PRNG seed, used when no seed color is given'
    )
    parser.add_argument('--saturation', type=int, default=0, help='Saturation level, -5 to 5')
    parser.add_argument('--contrast', type=int, default=0, help='Contrast level, -5 to 5')
    parser.add_argument('--brightness', type=int, default=0, help='Brightness level, -5 to 5')
    parser.add_argument(
        '--dark-levels',
        nargs=3,
        type=int,
        metavar=('SAT', 'CON', 'BRI'),
        help='Separate levels for the dark side'
    )
    parser.add_argument(
        '--dark-first',
        action='store_true',
        help='Build the dark side first and derive light from it'
    )
    parser.add_argument(
        '--override',
        nargs='+',
        help='5 role colors or 10 import colors (use "" to leave a slot unset)'
    )
    parser.add_argument(
        '--image-source',
        choices=MODES,
        help='Side an imported palette is pinned onto'
    )
    parser.add_argument('--config', '-c', help='YAML tuning file')
    parser.add_argument('--swatches', help='Also write a PNG swatch sheet to this path')
    parser.add_argument('--score', action='store_true', help='Include light-side score and rejects')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log debug output to stderr')
    return parser


def main(argv=None):
    import sys

    from render_swatches import render_theme_swatches
    from tuning import load_tuning

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        tuning = load_tuning(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    options = ThemeOptions(
        harmony_mode=args.mode,
        seed_color=args.seed_color,
        levels=AdjustmentLevels(args.saturation, args.contrast, args.brightness),
        dark_levels=AdjustmentLevels(*args.dark_levels) if args.dark_levels else None,
        override_palette=args.override,
        dark_first=args.dark_first,
        image_source_side=args.image_source,
        seed=args.seed,
    )
    theme = generate_theme(options, tuning)

    output = theme.to_dict()
    if args.score:
        scored = evaluate_palette(theme.light, theme.base_hue, tuning)
        output['score'] = round(scored.score.total, 2)
        output['rejects'] = [r.code for r in scored.rejects]
    print(json.dumps(output, indent=2))

    if args.swatches:
        try:
            render_theme_swatches(theme, args.swatches)
        except OSError as e:
            print(f"Error writing swatches: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    main()
