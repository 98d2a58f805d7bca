"""Display strings for burn times and failure odds."""

from __future__ import annotations

import math

MIN_FAILURE_CHANCE = 0.0001
MAX_ODDS = 9999.0

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600
_SECONDS_PER_DAY = 86400
_SECONDS_PER_YEAR = 31536000


def format_time(seconds: float) -> str:
    """Format seconds as ``"1d 2h 3m 4s"``, dropping zero parts."""

    if seconds < 0.1:
        return "0s"

    total = int(round(seconds))
    days, rem = divmod(total, _SECONDS_PER_DAY)
    hours, rem = divmod(rem, _SECONDS_PER_HOUR)
    minutes, secs = divmod(rem, _SECONDS_PER_MINUTE)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_mtbf(seconds: float) -> str:
    """Format a mean time between failures in the largest fitting unit."""

    if math.isinf(seconds) or math.isnan(seconds):
        return "∞"
    if seconds < _SECONDS_PER_MINUTE:
        return f"{seconds:.1f}s"
    if seconds < _SECONDS_PER_HOUR:
        return f"{seconds / _SECONDS_PER_MINUTE:.1f}m"
    if seconds < _SECONDS_PER_DAY:
        return f"{seconds / _SECONDS_PER_HOUR:.1f}h"
    if seconds < _SECONDS_PER_YEAR:
        return f"{seconds / _SECONDS_PER_DAY:.1f}d"
    return f"{seconds / _SECONDS_PER_YEAR:.1f}y"


def failure_odds(success_probability: float) -> float:
    """Return N such that one attempt in N fails; capped for near-certain success."""

    failure = 1.0 - success_probability
    if failure > MIN_FAILURE_CHANCE:
        return 1.0 / failure
    return MAX_ODDS


def format_one_in_n(success_probability: float) -> str:
    return f"1 in {failure_odds(success_probability):.1f}"


def format_percent(probability: float) -> str:
    return f"{probability * 100.0:.2f}%"


def describe_failure_odds(survival_probability: float, time: float, cluster_size: int = 1) -> str:
    """Sentence such as ``"1 in 20.0 burns will fail to reach 5m"``."""

    entity = f"clusters of {cluster_size}" if cluster_size > 1 else "burns"
    return f"{format_one_in_n(survival_probability)} {entity} will fail to reach {format_time(time)}"
