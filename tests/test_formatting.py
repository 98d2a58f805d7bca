import math

import pytest

from burn_core.formatting import (
    describe_failure_odds,
    failure_odds,
    format_mtbf,
    format_one_in_n,
    format_percent,
    format_time,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0.0, "0s"),
        (0.05, "0s"),
        (0.4, "0s"),
        (59.0, "59s"),
        (60.0, "1m"),
        (90.0, "1m 30s"),
        (3600.0, "1h"),
        (3661.0, "1h 1m 1s"),
        (86400.0, "1d"),
        (90061.0, "1d 1h 1m 1s"),
        (299.6, "5m"),
    ],
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (30.0, "30.0s"),
        (90.0, "1.5m"),
        (7200.0, "2.0h"),
        (172800.0, "2.0d"),
        (63072000.0, "2.0y"),
        (math.inf, "∞"),
        (math.nan, "∞"),
    ],
)
def test_format_mtbf(seconds: float, expected: str) -> None:
    assert format_mtbf(seconds) == expected


def test_failure_odds() -> None:
    assert failure_odds(0.9) == pytest.approx(10.0)
    assert failure_odds(0.5) == pytest.approx(2.0)
    assert failure_odds(1.0) == 9999.0
    assert failure_odds(0.99995) == 9999.0


def test_format_one_in_n() -> None:
    assert format_one_in_n(0.9) == "1 in 10.0"
    assert format_one_in_n(1.0) == "1 in 9999.0"


def test_format_percent() -> None:
    assert format_percent(0.95) == "95.00%"
    assert format_percent(0.123456) == "12.35%"


def test_describe_failure_odds() -> None:
    assert describe_failure_odds(0.95, 300.0) == "1 in 20.0 burns will fail to reach 5m"
    assert (
        describe_failure_odds(0.5, 45.0, cluster_size=4)
        == "1 in 2.0 clusters of 4 will fail to reach 45s"
    )
