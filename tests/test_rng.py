from byow.world import Lcg


def test_same_seed_same_sequence():
    a = Lcg(1234)
    b = Lcg(1234)
    assert [a.randint(0, 1000) for _ in range(50)] == [b.randint(0, 1000) for _ in range(50)]


def test_known_first_value_seed_zero():
    # state = (0 * 1103515245 + 12345) & 0x7fffffff = 12345
    rng = Lcg(0)
    assert rng.randint(0, 99) == 45
    assert rng.state == 12345


def test_reseed_resets_stream():
    rng = Lcg(7)
    first = [rng.randint(1, 6) for _ in range(10)]
    rng.seed(7)
    assert [rng.randint(1, 6) for _ in range(10)] == first


def test_degenerate_range_returns_lo_without_advancing():
    rng = Lcg(99)
    before = rng.state
    assert rng.randint(5, 5) == 5
    assert rng.randint(9, 3) == 9
    assert rng.state == before


def test_values_stay_in_inclusive_range():
    rng = Lcg(2024)
    values = [rng.randint(3, 6) for _ in range(500)]
    assert min(values) >= 3 and max(values) <= 6
    # Both endpoints show up over a long enough run
    assert {3, 6} <= set(values)


def test_negative_seed_still_produces_valid_range():
    rng = Lcg(-42)
    for _ in range(100):
        assert 0 <= rng.randint(0, 10) <= 10
