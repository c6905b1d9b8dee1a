import pytest

from seeded_random import SeededRandom, advance, hash_seed


def test_hash_matches_string_hash():
    assert hash_seed('') == 0
    assert hash_seed('a') == 97
    assert hash_seed('ab') == 3105


def test_hash_only_wraps_the_shift():
    assert hash_seed('#3a5cb8') == 1745764139
    # The running value leaves the int32 range here and is kept as is
    assert hash_seed('fallback') == 3533723934


def test_long_seed_hash_is_not_wrapped():
    assert hash_seed('#3a5cb8' * 20) == 14529341504


def test_advance_is_pure():
    value, state = advance(42)
    assert state == 43
    assert advance(42) == (value, state)
    assert 0.0 <= value < 1.0


def test_same_seed_same_sequence():
    a = SeededRandom.from_seed('#3a5cb8')
    b = SeededRandom.from_seed('#3a5cb8')
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_different_seeds_diverge():
    a = SeededRandom.from_seed('#3a5cb8')
    b = SeededRandom.from_seed('#3a5cb9')
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_ranges():
    rng = SeededRandom.from_seed('ranges')
    for _ in range(200):
        assert 0 <= rng.next_int(0, 359) <= 359
        assert -0.5 <= rng.next_float(-0.5, 0.5) < 0.5


def test_pick_returns_member():
    rng = SeededRandom.from_seed('pick')
    items = ('a', 'b', 'c')
    picks = {rng.pick(items) for _ in range(50)}
    assert picks <= set(items)
    assert len(picks) > 1


@pytest.mark.parametrize("seed", [0, 7, 123456])
def test_integer_seeds(seed):
    assert SeededRandom.from_seed(seed).state == seed
