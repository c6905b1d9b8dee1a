import pytest

from harmony import (
    HARMONY_OFFSETS, RANDOM_CHOICES, apply_override_hues, override_base_hue,
    resolve_harmony_mode, role_hues,
)
from oklch import to_oklch
from seeded_random import SeededRandom


def test_complementary_hues():
    assert role_hues(10, 'complementary') == [10, 190, 40, 220, 340]


def test_monochrome_is_single_hue():
    assert set(role_hues(200, 'monochrome')) == {200}


@pytest.mark.parametrize("mode", list(HARMONY_OFFSETS))
def test_hues_normalized(mode):
    assert all(0 <= hue < 360 for hue in role_hues(350, mode))


def test_random_never_monochrome():
    rng = SeededRandom.from_seed('random-mode')
    picks = {resolve_harmony_mode('random', rng) for _ in range(100)}
    assert picks <= set(RANDOM_CHOICES)
    assert 'monochrome' not in picks


def test_unknown_and_image_modes():
    rng = SeededRandom.from_seed('x')
    assert resolve_harmony_mode('plaid', rng) == 'analogous'
    assert resolve_harmony_mode('image', rng) == 'image'
    assert role_hues(100, 'image') == role_hues(100, 'analogous')


def test_short_override_replaces_set_slots():
    hues = role_hues(0, 'analogous')
    override = ['#3a5cb8', '', '#b04040', '', '']
    result = apply_override_hues(hues, override)
    assert result[0] == pytest.approx(to_oklch('#3a5cb8').H)
    assert result[1] == hues[1]
    assert result[2] == pytest.approx(to_oklch('#b04040').H)


def test_import_override_uses_role_slots():
    override = ['#ece8df', '#d9d0c3', '#2b231d', '#6f5f52', '#fffaf2',
                '#b04040', '#ad8f7d', '#d4c6a3', '#9aa57a', '#7a6f95']
    result = apply_override_hues(role_hues(0, 'analogous'), override)
    assert result[0] == pytest.approx(to_oklch('#b04040').H)
    assert result[4] == pytest.approx(to_oklch('#7a6f95').H)
    assert override_base_hue(override) == pytest.approx(to_oklch('#b04040').H)


def test_no_override_base_hue():
    assert override_base_hue(None) is None
    assert override_base_hue(['', '', '', '', '']) is None
