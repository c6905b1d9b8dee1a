import pytest

from adjust import (
    adjust_theme, apply_brightness, apply_contrast, apply_saturation, enforce_readability,
    enforce_separation, foreground_target, visibility_floor,
)
from brand_colors import clamp_hue_to_band, construct_brand_colors, construct_status_colors, status_hues
from contrast import color_contrast
from harmony import role_hues
from mode_derive import derive_companion
from neutrals import build_neutral_foundation
from oklch import OklchColor, clamp_color, delta_e, hue_difference, to_hex, to_oklch
from parity import match_color, match_surface_contrast, parity_strength
from seeded_random import SeededRandom
from theme_engine import build_palette
from theme_tokens import (
    CHROMATIC_KEYS, FOREGROUND_PAIRS, TOKEN_KEYS, AdjustmentLevels, DualTheme, merge_locked_tokens,
    separate_duplicates, tokens_to_hex,
)


def _palette(mode='light', levels=AdjustmentLevels(), seed='parts'):
    hues = role_hues(250, 'triadic')
    return build_palette(mode, hues, 250, 0.2, SeededRandom.from_seed(seed), levels)


# =============================================================================
# Levels
# =============================================================================

def test_levels_are_clamped_and_rounded():
    levels = AdjustmentLevels(9, -12, 2.6)
    assert (levels.saturation, levels.contrast, levels.brightness) == (5, -5, 3)


def test_level_distance():
    assert AdjustmentLevels(1, 2, 3).distance(AdjustmentLevels(-1, 2, 0)) == 5


# =============================================================================
# Neutrals, brand and status
# =============================================================================

def test_light_neutral_order():
    n = build_neutral_foundation('light', 250, 0.3, AdjustmentLevels())
    assert n.bg.L == pytest.approx(0.97)
    assert n.bg.L > n.card.L > n.card2.L > n.border.L > n.textMuted.L > n.text.L


def test_dark_neutral_order():
    n = build_neutral_foundation('dark', 250, -0.3, AdjustmentLevels())
    assert n.bg.L == pytest.approx(0.08)
    assert n.bg.L < n.card.L < n.card2.L < n.border.L < n.textMuted.L < n.text.L


def test_neutral_contrast_spreads_surfaces_and_text():
    low = build_neutral_foundation('light', 250, 0.3, AdjustmentLevels(contrast=-5))
    high = build_neutral_foundation('light', 250, 0.3, AdjustmentLevels(contrast=5))
    assert high.bg.L - high.text.L > low.bg.L - low.text.L


def test_neutral_tint_follows_saturation_and_warmth():
    grey = build_neutral_foundation('light', 250, 0.3, AdjustmentLevels(saturation=-3))
    assert grey.bg.C == 0

    warm = build_neutral_foundation('light', 250, 0.3, AdjustmentLevels(saturation=5))
    cool = build_neutral_foundation('light', 250, -0.3, AdjustmentLevels(saturation=5))
    assert warm.bg.C > 0
    assert warm.bg.H == 60
    assert cool.bg.H == 240


def test_brand_colors_deterministic():
    bg = OklchColor(0.97, 0.0, 0)
    hues = role_hues(250, 'triadic')
    a = construct_brand_colors('light', hues, bg, SeededRandom.from_seed('b'), AdjustmentLevels())
    b = construct_brand_colors('light', hues, bg, SeededRandom.from_seed('b'), AdjustmentLevels())
    assert a == b
    assert a.primary.H == pytest.approx(250)


def test_brand_saturation_raises_chroma():
    bg = OklchColor(0.97, 0.0, 0)
    hues = role_hues(150, 'analogous')
    dull = construct_brand_colors('light', hues, bg, SeededRandom.from_seed('b'), AdjustmentLevels(saturation=-5))
    vivid = construct_brand_colors('light', hues, bg, SeededRandom.from_seed('b'), AdjustmentLevels(saturation=5))
    assert vivid.primary.C > dull.primary.C


def test_status_hues_swap_and_band():
    good, bad = status_hues(0, 140)
    assert (good, bad) == (140, 0)
    assert clamp_hue_to_band(250, 140, 40) == pytest.approx(180)
    assert clamp_hue_to_band(300, 0, 32) == pytest.approx(328)


def test_status_colors():
    status = construct_status_colors('light', role_hues(140, 'monochrome'), AdjustmentLevels())
    assert status.warn.H == 60
    assert status.warn.L > status.good.L
    assert hue_difference(status.bad.H, 0) <= 32


# =============================================================================
# Mode derivation
# =============================================================================

def test_derived_dark_keeps_hues():
    light = _palette('light')
    dark = derive_companion('light', light)
    assert set(dark) == set(TOKEN_KEYS)
    assert dark['bg'].L < 0.2
    assert dark['text'].L > 0.8
    for key in ('primary', 'secondary', 'accent'):
        assert dark[key].H == pytest.approx(light[key].H)
        assert dark[key].C <= light[key].C


def test_derived_light_from_dark():
    dark = _palette('dark')
    light = derive_companion('dark', dark)
    assert light['bg'].L > 0.9
    assert light['text'].L < 0.3
    assert light['primary'].H == pytest.approx(dark['primary'].H)


# =============================================================================
# Adjustment pipeline
# =============================================================================

def test_brightness_zero_is_identity_in_band():
    tokens = _palette()
    adjusted = apply_brightness(tokens, 0)
    for key in TOKEN_KEYS:
        assert adjusted[key].L == pytest.approx(min(0.995, max(0.02, tokens[key].L)))


def test_brightness_moves_lightness():
    tokens = _palette()
    assert apply_brightness(tokens, 5)['text'].L > tokens['text'].L
    assert apply_brightness(tokens, -5)['bg'].L < tokens['bg'].L


def test_contrast_bands_keep_surfaces_light():
    tokens = _palette()
    flat = apply_contrast(tokens, -5, 'light')
    assert all(flat[key].L >= 0.74 for key in ('bg', 'card', 'card2'))
    assert all(0.35 <= flat[key].L <= 0.80 for key in CHROMATIC_KEYS)


@pytest.mark.parametrize("mode", ['light', 'dark'])
@pytest.mark.parametrize("contrast,brightness", [(5, 0), (0, -5), (5, -5), (5, 5)])
def test_fills_keep_their_color_at_extremes(mode, contrast, brightness):
    tokens = apply_brightness(_palette(mode), brightness)
    tokens = apply_saturation(apply_contrast(tokens, contrast, mode), 0, contrast)
    low, high = {'light': (0.35, 0.80), 'dark': (0.45, 0.85)}[mode]
    for key in CHROMATIC_KEYS:
        assert low <= tokens[key].L <= high
    assert delta_e(tokens['primary'], tokens['bad']) >= 0.12
    assert delta_e(tokens['primary'], tokens['secondary']) >= 0.12


def test_foreground_target_and_visibility_floor():
    assert foreground_target(AdjustmentLevels(contrast=0)) == 4.5
    assert foreground_target(AdjustmentLevels(contrast=-5)) == pytest.approx(3.2)
    assert visibility_floor('light', AdjustmentLevels(contrast=-2)) == pytest.approx(2.8)
    assert visibility_floor('dark', AdjustmentLevels(contrast=-5)) == pytest.approx(2.6)


@pytest.mark.parametrize("mode", ['light', 'dark'])
@pytest.mark.parametrize("levels", [(0, 0, 0), (5, 5, 5), (-5, -5, -5), (5, -5, 5), (-5, 5, -5)])
def test_adjust_theme_guardrails(mode, levels):
    tokens = adjust_theme(_palette(mode), mode, AdjustmentLevels(*levels))
    hexes = tokens_to_hex(tokens)
    minimum = {'light': (3.8, 2.6), 'dark': (5.0, 3.4)}[mode]
    surfaces = [tokens[key] for key in ('bg', 'card', 'card2')]

    assert min(color_contrast(tokens['text'], s) for s in surfaces) >= minimum[0]
    assert min(color_contrast(tokens['textMuted'], s) for s in surfaces) >= minimum[1]
    assert len(set(hexes.values())) == len(TOKEN_KEYS)


def _rendered_L(color):
    return to_oklch(to_hex(color)).L


@pytest.mark.parametrize("mode,surface_L", [('dark', 0.0), ('dark', 0.02), ('light', 0.995), ('light', 0.8)])
def test_separation_survives_hex_rounding(mode, surface_L):
    tokens = _palette(mode)
    for key in ('bg', 'card', 'card2', 'border'):
        tokens[key] = clamp_color(surface_L, 0.01, 60)
    tokens['textMuted'] = tokens['text']

    result = enforce_separation(tokens, mode)
    direction = -1 if mode == 'light' else 1

    def gap(key, reference):
        return (_rendered_L(result[key]) - _rendered_L(result[reference])) * direction

    assert gap('card', 'bg') >= 0.03
    assert gap('card2', 'card') >= 0.02
    assert gap('border', 'bg') >= 0.06
    assert gap('border', 'card') >= 0.04
    assert gap('border', 'card2') >= 0.03
    assert -gap('textMuted', 'text') >= 0.08


@pytest.mark.parametrize("mode,text_L,muted_L", [('light', 0.30, 0.32), ('dark', 0.80, 0.78)])
def test_readability_keeps_muted_gap(mode, text_L, muted_L):
    tokens = _palette(mode)
    tokens['text'] = clamp_color(text_L, 0.01, 250)
    tokens['textMuted'] = clamp_color(muted_L, 0.01, 250)
    result = enforce_readability(tokens, mode)
    gap = _rendered_L(result['textMuted']) - _rendered_L(result['text'])
    if mode == 'dark':
        gap = -gap
    assert gap >= 0.08


def test_separate_duplicates_respects_frozen():
    tokens = _palette()
    tokens['card'] = tokens['bg']
    tokens['secondary'] = tokens['primary']
    result = separate_duplicates(tokens, frozen={'card'})
    assert to_hex(result['card']) == to_hex(tokens['bg'])
    assert to_hex(result['bg']) != to_hex(result['card'])
    assert to_hex(result['secondary']) != to_hex(result['primary'])


# =============================================================================
# Parity
# =============================================================================

def test_parity_strength():
    same = AdjustmentLevels(1, 1, 1)
    assert parity_strength(same, same) == 1.0
    assert parity_strength(AdjustmentLevels(-5, -5, -5), AdjustmentLevels(5, 5, 5)) == pytest.approx(0.35)
    assert parity_strength(AdjustmentLevels(0, 0, 0), AdjustmentLevels(3, 3, 3)) == pytest.approx(0.5)


def test_match_color_pulls_hue_and_chroma():
    anchor = clamp_color(0.55, 0.15, 250)
    companion = clamp_color(0.6, 0.05, 210)
    matched = match_color(companion, anchor, 1.0)
    assert hue_difference(to_oklch(to_hex(matched)).H, anchor.H) <= 3
    assert matched.L == companion.L
    assert anchor.C * 0.86 - 1e-6 <= matched.C <= anchor.C * 1.14 + 1e-6


def test_match_color_ignores_hue_of_greys():
    anchor = OklchColor(0.55, 0.01, 250)
    companion = clamp_color(0.65, 0.05, 30)
    assert match_color(companion, anchor, 1.0).H == pytest.approx(30)


def test_match_surface_contrast_raises_dark_fill():
    surfaces = [OklchColor(0.08, 0.0, 0), OklchColor(0.12, 0.0, 0)]
    fill = clamp_color(0.5, 0.1, 250)
    matched = match_surface_contrast(fill, surfaces, 8.0, 1.0)
    ratio = min(color_contrast(matched, s) for s in surfaces)
    assert 7.0 <= ratio <= 9.0
    assert matched.L > fill.L
    assert matched.H == pytest.approx(fill.H)


def test_match_surface_contrast_softens_light_fill():
    surfaces = [OklchColor(0.97, 0.0, 0), OklchColor(0.93, 0.0, 0)]
    fill = clamp_color(0.4, 0.1, 250)
    matched = match_surface_contrast(fill, surfaces, 3.5, 0.5)
    ratio = min(color_contrast(matched, s) for s in surfaces)
    assert 3.0 <= ratio <= 4.0
    assert matched.L > fill.L


def test_match_surface_contrast_leaves_close_fills():
    surfaces = [OklchColor(0.97, 0.0, 0), OklchColor(0.93, 0.0, 0)]
    fill = clamp_color(0.5, 0.1, 250)
    ratio = min(color_contrast(fill, s) for s in surfaces)
    assert match_surface_contrast(fill, surfaces, ratio + 0.5, 1.0) is fill


# =============================================================================
# Locking
# =============================================================================

def test_merge_locked_tokens_keeps_related():
    previous = DualTheme({k: '#111111' for k in TOKEN_KEYS}, {k: '#222222' for k in TOKEN_KEYS}, '#000000', 'analogous')
    generated = DualTheme({k: '#aaaaaa' for k in TOKEN_KEYS}, {k: '#bbbbbb' for k in TOKEN_KEYS}, '#ffffff', 'triadic')

    merged = merge_locked_tokens(generated, previous, ['primary'])
    for key in ('primary', 'primaryFg', 'ring'):
        assert merged.light[key] == '#111111'
        assert merged.dark[key] == '#222222'
    assert merged.light['secondary'] == '#aaaaaa'
    assert merged.mode == 'triadic'

    assert merge_locked_tokens(generated, None, ['primary']) is generated
    assert merge_locked_tokens(generated, previous, []) is generated


def test_foreground_pairs_cover_every_fg_token():
    assert set(FOREGROUND_PAIRS) == {k for k in TOKEN_KEYS if k.endswith('Fg')} | {'textOnColor'}
