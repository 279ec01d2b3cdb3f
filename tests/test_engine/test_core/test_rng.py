import pytest
from turtle_engine.core.rng import RandomSource, SeededRandom, roll_percent

def test_seeded_random_is_reproducible():
    a = SeededRandom(seed=42)
    b = SeededRandom(seed=42)

    assert [a.next_int(0, 99) for _ in range(20)] == [b.next_int(0, 99) for _ in range(20)]

def test_bounds_are_inclusive():
    rng = SeededRandom(seed=1)
    values = {rng.next_int(-2, 2) for _ in range(500)}

    assert values == {-2, -1, 0, 1, 2}

def test_seeded_random_is_a_random_source():
    assert isinstance(SeededRandom(), RandomSource)

def test_roll_percent(scripted):
    rng = scripted([9, 10, 0, 99])

    assert roll_percent(rng, 10)
    assert not roll_percent(rng, 10)
    assert not roll_percent(rng, 0)
    assert roll_percent(rng, 100)
    assert rng.calls == [(0, 99)] * 4
