from imagegate.utils.parsing import clamp, float_or_default, int_or_default, parse_float, parse_int


def test_parse_int_is_prefix_lenient():
    assert parse_int("12") == 12
    assert parse_int("  12px") == 12
    assert parse_int("-3") == -3
    assert parse_int(3.9) == 3
    assert parse_int(7) == 7


def test_parse_int_unreadable_is_none():
    for value in (None, "abc", "", "x12", True, [1], {"n": 1}, float("nan")):
        assert parse_int(value) is None


def test_parse_float():
    assert parse_float("0.25") == 0.25
    assert parse_float("1e1") == 10.0
    assert parse_float(".5 strength") == 0.5
    assert parse_float(3) == 3.0
    assert parse_float("nope") is None
    assert parse_float(float("inf")) is None


def test_or_default_helpers():
    assert int_or_default("abc", 6) == 6
    assert int_or_default("0", 6) == 0
    assert float_or_default(None, 7.5) == 7.5
    assert float_or_default("2", 7.5) == 2.0


def test_clamp():
    assert clamp(5, 1, 4) == 4
    assert clamp(-1, 1, 4) == 1
    assert clamp(0.5, 0.0, 1.0) == 0.5
