import pytest

from oklch import to_oklch
from scoring import (
    check_hard_rejects, evaluate_palette, score_palette, select_best_palette,
)
from tuning import DEFAULT_TUNING, ScoreThresholds, Tuning

GOOD = {
    'bg': '#ffffff',
    'card': '#f0f0f0',
    'text': '#111111',
    'textMuted': '#666666',
    'primary': '#3a5cb8',
    'secondary': '#2a9d8f',
    'accent': '#e0a020',
    'good': '#2e9e4f',
    'bad': '#d03030',
}


def _codes(palette, tuning=DEFAULT_TUNING):
    return {r.code for r in check_hard_rejects(palette, tuning)}


def test_good_palette_passes():
    assert _codes(GOOD) == set()


def test_low_text_contrast_is_critical():
    palette = dict(GOOD, text='#cccccc')
    rejects = check_hard_rejects(palette)
    assert {r.code for r in rejects} == {'LOW_TEXT_CONTRAST', 'LOW_CARD_TEXT_CONTRAST'}
    assert all(r.severity == 'critical' for r in rejects)


def test_major_rejects():
    palette = dict(GOOD, card=GOOD['bg'], accent=GOOD['primary'], bad='#3a5cb9')
    assert _codes(palette) == {'LOW_BG_CARD_SEPARATION', 'PRIMARY_ACCENT_SIMILAR', 'PRIMARY_LIKE_DANGER'}


def test_thresholds_come_from_tuning():
    strict = Tuning(score_thresholds=ScoreThresholds(min_text_contrast=25))
    assert 'LOW_TEXT_CONTRAST' in _codes(GOOD, strict)


def test_score_breakdown():
    score = score_palette(GOOD, to_oklch(GOOD['primary']).H)
    assert score.harmony_consistency == pytest.approx(10)
    assert score.contrast_headroom == 10
    assert score.total > 0
    assert score.total > score_palette(GOOD, to_oklch(GOOD['primary']).H + 15).total


def test_select_best_prefers_valid_then_score():
    valid = evaluate_palette(GOOD, to_oklch(GOOD['primary']).H)
    off_harmony = evaluate_palette(GOOD, to_oklch(GOOD['primary']).H + 15)
    broken = evaluate_palette(dict(GOOD, text='#cccccc'), to_oklch(GOOD['primary']).H)

    assert not broken.is_valid
    assert select_best_palette([broken, off_harmony, valid]) is valid
    assert select_best_palette([broken]) is broken
    assert select_best_palette([]) is None
