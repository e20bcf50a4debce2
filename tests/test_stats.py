from team_sizing.stats import calculate_stats, format_summary, round_half_up


def test_empty_returns_zero_sentinel():
    assert calculate_stats([]) == {"average": 0, "median": 0, "mode": 0}


def test_even_count():
    stats = calculate_stats([1, 2, 2, 5])
    assert stats["average"] == 2.5
    assert stats["median"] == 2.0
    assert stats["mode"] == 2


def test_odd_count_median_is_central_value():
    stats = calculate_stats([8, 1, 3])
    assert stats["median"] == 3
    assert isinstance(stats["median"], int)


def test_median_of_unsorted_even_input():
    assert calculate_stats([13, 1, 5, 3])["median"] == 4.0


def test_average_rounds_to_one_decimal():
    assert calculate_stats([1, 2, 2])["average"] == 1.7
    assert calculate_stats([1, 1, 1, 2, 2, 2, 2, 8])["average"] == 2.4


def test_average_rounds_half_up():
    # mean 2.25
    assert calculate_stats([1, 2, 3, 3])["average"] == 2.3
    assert round_half_up(0.25) == 0.3


def test_mode_tie_goes_to_smallest_value():
    assert calculate_stats([8, 3, 8, 3])["mode"] == 3
    assert calculate_stats([21, 5, 13])["mode"] == 5


def test_single_value():
    assert calculate_stats([13]) == {"average": 13.0, "median": 13, "mode": 13}


def test_format_summary():
    text = format_summary({"average": 2.5, "median": 2.0, "mode": 2})
    assert text.splitlines() == ["Average: 2.5", "Median: 2.0", "Mode: 2"]
