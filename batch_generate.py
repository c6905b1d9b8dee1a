#!/usr/bin/env python3
"""Batch generate themes, keeping the best of several candidates per run."""

import argparse
import json
import sys
import time
from pathlib import Path

from harmony import HARMONY_MODES
from render_swatches import render_theme_swatches
from theme_engine import ThemeOptions, generate_best_theme
from theme_tokens import AdjustmentLevels
from tuning import load_tuning


def candidate_seeds(run: int, candidates: int, prefix: str) -> list[str]:
    """PRNG seeds for one run's candidates."""
    return [f"{prefix}-{run}-{i}" for i in range(candidates)]


def main():
    parser = argparse.ArgumentParser(
        description='Batch generate themes and write the best of each run as JSON.'
    )
    parser.add_argument(
        '--output', '-o',
        required=True,
        help='Directory for JSON (and optional PNG) output files'
    )
    parser.add_argument('--count', '-n', type=int, default=10, help='Number of themes to produce')
    parser.add_argument('--candidates', type=int, default=6, help='Candidates scored per theme')
    parser.add_argument('--mode', '-m', default='random', choices=HARMONY_MODES, help='Harmony style')
    parser.add_argument('--prefix', default='batch', help='Seed prefix; same prefix, same output')
    parser.add_argument('--saturation', type=int, default=0)
    parser.add_argument('--contrast', type=int, default=0)
    parser.add_argument('--brightness', type=int, default=0)
    parser.add_argument('--dark-first', action='store_true')
    parser.add_argument('--config', '-c', help='YAML tuning file')
    parser.add_argument('--swatches', action='store_true', help='Also write a PNG per theme')

    args = parser.parse_args()

    if args.count < 1 or args.candidates < 1:
        print("Error: --count and --candidates must be positive", file=sys.stderr)
        sys.exit(2)

    try:
        tuning = load_tuning(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(2)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    options = ThemeOptions(
        harmony_mode=args.mode,
        levels=AdjustmentLevels(args.saturation, args.contrast, args.brightness),
        dark_first=args.dark_first,
    )

    total = args.count
    rejected = 0
    batch_start = time.perf_counter()

    for run in range(1, total + 1):
        run_start = time.perf_counter()
        seeds = candidate_seeds(run, args.candidates, args.prefix)
        theme, scored = generate_best_theme(options, seeds, tuning)
        run_elapsed = time.perf_counter() - run_start

        output = theme.to_dict()
        output['score'] = round(scored.score.total, 2)
        output['rejects'] = [r.code for r in scored.rejects]

        output_file = output_dir / f"theme-{run:03d}.json"
        if output_file.exists():
            print(f"  Warning: Overwriting {output_file.name}", file=sys.stderr)
        output_file.write_text(json.dumps(output, indent=2))

        if args.swatches:
            render_theme_swatches(theme, str(output_dir / f"theme-{run:03d}.png"))

        if scored.rejects:
            rejected += 1
        status = ', '.join(output['rejects']) or 'clean'
        print(f"[{run}/{total}] {theme.seed} {theme.mode} → {output['score']} ({status}, {run_elapsed:.2f}s)")

    batch_elapsed = time.perf_counter() - batch_start

    # Summary
    print()
    print(f"Completed: {total} themes in {batch_elapsed:.2f}s")
    print(f"Average: {batch_elapsed / total:.2f}s per theme")
    if rejected:
        print(f"With rejects: {rejected}/{total}")


if __name__ == '__main__':
    main()
