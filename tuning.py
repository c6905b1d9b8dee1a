#!/usr/bin/env python3
"""
Tuning constants for theme generation, grouped into named structs.

Defaults live in the dataclasses below. A YAML file can override any subset:

    neutral_targets:
      light: {bg: 0.96, text: 0.2}
    readability:
      dark: {text: 5.5}
    visibility: {light: 3.0}
    score_weights: {harmony_consistency: 2.0}
    score_thresholds: {min_text_contrast: 7.0}
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NeutralTargets:
    """Base lightness for each neutral token in one mode."""
    bg: float
    card: float
    card2: float
    text: float
    text_muted: float
    border: float


@dataclass(frozen=True)
class ReadabilityMinimums:
    """Minimum contrast of text tokens against the worst surface."""
    text: float
    text_muted: float


@dataclass(frozen=True)
class ScoreWeights:
    contrast_headroom: float = 2.0
    harmony_consistency: float = 1.5
    chroma_balance: float = 1.2
    ui_usability: float = 1.8
    aesthetic_bias: float = 1.0


@dataclass(frozen=True)
class ScoreThresholds:
    min_text_contrast: float = 4.5
    min_primary_to_accent_delta: float = 0.12  # Oklab deltaE
    min_bg_to_card_delta: float = 0.03  # Lightness


LIGHT_TARGETS = NeutralTargets(bg=0.97, card=0.93, card2=0.90, text=0.18, text_muted=0.42, border=0.82)
DARK_TARGETS = NeutralTargets(bg=0.08, card=0.12, card2=0.15, text=0.92, text_muted=0.65, border=0.25)


@dataclass(frozen=True)
class Tuning:
    """Everything a caller may want to tune, with production defaults."""
    light_targets: NeutralTargets = LIGHT_TARGETS
    dark_targets: NeutralTargets = DARK_TARGETS
    light_readability: ReadabilityMinimums = ReadabilityMinimums(text=3.8, text_muted=2.6)
    dark_readability: ReadabilityMinimums = ReadabilityMinimums(text=5.0, text_muted=3.4)
    light_visibility: float = 2.8  # Chromatic tokens vs worst surface
    dark_visibility: float = 2.9
    score_weights: ScoreWeights = field(default_factory=ScoreWeights)
    score_thresholds: ScoreThresholds = field(default_factory=ScoreThresholds)

    def targets(self, mode: str) -> NeutralTargets:
        return self.dark_targets if mode == 'dark' else self.light_targets

    def readability(self, mode: str) -> ReadabilityMinimums:
        return self.dark_readability if mode == 'dark' else self.light_readability

    def visibility(self, mode: str) -> float:
        return self.dark_visibility if mode == 'dark' else self.light_visibility


DEFAULT_TUNING = Tuning()


def _overlay(base, overrides: dict, section: str):
    """Return a copy of a frozen dataclass with keys from overrides applied."""
    if not isinstance(overrides, dict):
        raise ValueError(f"Section '{section}' must be a mapping")
    known = {f.name for f in fields(base)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {', '.join(sorted(unknown))}")
    return replace(base, **{k: float(v) for k, v in overrides.items()})


def tuning_from_dict(raw: dict, base: Tuning = DEFAULT_TUNING) -> Tuning:
    """
    Overlay a parsed config mapping onto a Tuning.

    Raises:
        ValueError: If a section or key is not recognized.
    """
    known_sections = {'neutral_targets', 'readability', 'visibility', 'score_weights', 'score_thresholds'}
    unknown = set(raw) - known_sections
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    changes = {}
    for mode in ('light', 'dark'):
        targets = raw.get('neutral_targets', {}).get(mode)
        if targets:
            changes[f'{mode}_targets'] = _overlay(base.targets(mode), targets, f'neutral_targets.{mode}')
        readability = raw.get('readability', {}).get(mode)
        if readability:
            changes[f'{mode}_readability'] = _overlay(base.readability(mode), readability, f'readability.{mode}')
        visibility = raw.get('visibility', {}).get(mode)
        if visibility is not None:
            changes[f'{mode}_visibility'] = float(visibility)

    if 'score_weights' in raw:
        changes['score_weights'] = _overlay(base.score_weights, raw['score_weights'], 'score_weights')
    if 'score_thresholds' in raw:
        changes['score_thresholds'] = _overlay(base.score_thresholds, raw['score_thresholds'], 'score_thresholds')

    return replace(base, **changes)


def load_tuning(path: Optional[Union[str, Path]] = None) -> Tuning:
    """
    Load tuning from a YAML file, falling back to defaults.

    A missing path or empty file yields DEFAULT_TUNING.

    Raises:
        ValueError: If the file contains unknown sections or keys.
    """
    if path is None:
        return DEFAULT_TUNING
    path = Path(path)
    if not path.exists():
        logger.warning("Tuning file %s not found, using defaults", path)
        return DEFAULT_TUNING

    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Tuning file {path} must contain a mapping")

    tuning = tuning_from_dict(raw)
    logger.debug("Loaded tuning from %s", path)
    return tuning
