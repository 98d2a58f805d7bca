"""Builders for the hazard-multiplier curve and the experience-to-reliability curve."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import InvalidInputError
from .models import ModelSettings, SplineKey
from .spline import HermiteSpline

logger = logging.getLogger(__name__)

# Hazard curve shape. Fixed tuning constants shared with the engine-failure config.
STARTUP_HAZARD = 10.0
STARTUP_SETTLE_TIME = 5.0
STARTUP_DECAY_TANGENT = -0.8
RATED_CUSHION = 5.0
FAIL_TIME_FACTOR = 2.5
FAIL_HAZARD = 100.0
TESTED_TRANSITION_GAIN = 3.135
TESTED_FAIL_GAIN = 1.989
UNTESTED_FAIL_SLOPE = 292.8

# Experience curve shape.
RELIABILITY_MID_V = 0.75
RELIABILITY_MID_H = 0.4
RELIABILITY_MID_TANGENT_WEIGHT = 0.5

DATA_PER_RATED_BURN = 640.0

# Largest tangent-to-chord ratio for which a Hermite segment with one flat
# end stays monotone.
MONOTONE_TANGENT_RATIO = 3.0


def check_hazard_inputs(
    rated_burn_time: float,
    tested_burn_time: Optional[float] = None,
    overburn_penalty: float = 2.0,
) -> None:
    """Raise :class:`InvalidInputError` unless the hazard curve can be built.

    The overburn penalty is limited to ``[1, 100]``; inside that range the
    hazard multiplier stays positive, so survival never rises with time.
    """

    if rated_burn_time <= 0:
        raise InvalidInputError(f"Rated burn time must be positive, got {rated_burn_time}.")

    rated_cushioned = rated_burn_time + RATED_CUSHION
    if tested_burn_time is not None:
        if tested_burn_time <= rated_burn_time:
            raise InvalidInputError(
                f"Tested burn time ({tested_burn_time}) must exceed rated burn time ({rated_burn_time})."
            )
        if tested_burn_time <= rated_cushioned:
            raise InvalidInputError(
                f"Tested burn time ({tested_burn_time}) must exceed rated burn time plus "
                f"the {RATED_CUSHION:g}s cushion ({rated_cushioned})."
            )
        if not 1.0 <= overburn_penalty <= FAIL_HAZARD:
            raise InvalidInputError(
                f"Overburn penalty must be in [1, {FAIL_HAZARD:g}], got {overburn_penalty}."
            )
    elif rated_burn_time * FAIL_TIME_FACTOR <= rated_cushioned:
        raise InvalidInputError(
            f"Rated burn time ({rated_burn_time}) is too short to place the overburn ramp "
            f"after the {RATED_CUSHION:g}s cushion."
        )


def build_hazard_curve(
    rated_burn_time: float,
    tested_burn_time: Optional[float] = None,
    overburn_penalty: float = 2.0,
) -> HermiteSpline:
    """Return the hazard-multiplier curve for one engine configuration.

    The curve starts at a high startup transient, settles to 1.0 by 5 s,
    holds a plateau until 5 s past the rated burn time, then climbs to a
    multiplier of 100 at 2.5x the tested (or rated) burn time. It depends
    only on burn times and the overburn penalty, so one curve serves every
    reliability level of the configuration.
    """

    check_hazard_inputs(rated_burn_time, tested_burn_time, overburn_penalty)

    rated_cushioned = rated_burn_time + RATED_CUSHION
    keys: List[SplineKey] = [
        SplineKey(0.0, STARTUP_HAZARD),
        SplineKey(STARTUP_SETTLE_TIME, 1.0, STARTUP_DECAY_TANGENT, 0.0),
        SplineKey(rated_cushioned, 1.0, 0.0, 0.0),
    ]

    if tested_burn_time is not None:
        transition_slope = (
            TESTED_TRANSITION_GAIN / (tested_burn_time - rated_cushioned) * (overburn_penalty - 1.0)
        )
        keys.append(SplineKey(tested_burn_time, overburn_penalty, transition_slope, transition_slope))

        fail_time = tested_burn_time * FAIL_TIME_FACTOR
        fail_slope = TESTED_FAIL_GAIN / (fail_time - tested_burn_time) * (FAIL_HAZARD - overburn_penalty)
        keys.append(SplineKey(fail_time, FAIL_HAZARD, fail_slope, 0.0))
    else:
        fail_time = rated_burn_time * FAIL_TIME_FACTOR
        fail_slope = UNTESTED_FAIL_SLOPE / (fail_time - rated_cushioned)
        keys.append(SplineKey(fail_time, FAIL_HAZARD, fail_slope, 0.0))

    logger.debug(
        "Built hazard curve: rated=%s tested=%s penalty=%s (%d keys)",
        rated_burn_time,
        tested_burn_time,
        overburn_penalty,
        len(keys),
    )
    return HermiteSpline.build(keys)


@dataclass(frozen=True)
class ReliabilityCurve:
    """Failure-probability spline over accumulated experience (data units)."""

    spline: HermiteSpline
    reliability_start: float
    reliability_end: float
    max_experience: float

    def evaluate_failure(self, experience: float) -> float:
        clamped = min(max(experience, 0.0), self.max_experience)
        return self.spline.evaluate(clamped)

    def evaluate_reliability(self, experience: float) -> float:
        return 1.0 - self.evaluate_failure(experience)


def reliability_mid_experience() -> float:
    return RELIABILITY_MID_H * 5000.0 + 1000.0


def check_max_experience(max_experience: float) -> None:
    """Raise :class:`InvalidInputError` if the experience curve could overshoot.

    The midpoint tangent does not scale with the curve length, so its ratio to
    each segment's chord depends only on ``max_experience``. Both ratios must
    stay within the monotone limit.
    """

    mid_x = reliability_mid_experience()
    if not max_experience > mid_x:
        raise InvalidInputError(
            f"Maximum experience ({max_experience}) must exceed the curve midpoint ({mid_x})."
        )

    tail = 1.0 - RELIABILITY_MID_V
    span = max_experience - mid_x
    curvature = 0.0001 * RELIABILITY_MID_TANGENT_WEIGHT
    tangent = curvature + tail / span * (1.0 - RELIABILITY_MID_TANGENT_WEIGHT)
    rise_ratio = tangent * mid_x / RELIABILITY_MID_V
    tail_ratio = tangent * span / tail
    if rise_ratio > MONOTONE_TANGENT_RATIO or tail_ratio > MONOTONE_TANGENT_RATIO:
        raise InvalidInputError(
            f"Maximum experience ({max_experience}) would let reliability overshoot between "
            f"keys (tangent/chord ratios {rise_ratio:.3f}, {tail_ratio:.3f})."
        )


def build_reliability_curve(
    reliability_start: float,
    reliability_end: float,
    settings: Optional[ModelSettings] = None,
) -> ReliabilityCurve:
    """Return the curve moving reliability from its start value to its end value.

    Works in failure-probability space. The midpoint and its tangent are
    chosen so the failure probability never rises with experience when
    ``reliability_end >= reliability_start``.
    """

    settings = settings or ModelSettings()
    for label, value in (("start", reliability_start), ("end", reliability_end)):
        if not 0.0 < value <= 1.0:
            raise InvalidInputError(f"Reliability {label} must be in (0, 1], got {value}.")

    max_experience = settings.max_experience
    fail_start = 1.0 - reliability_start
    fail_end = 1.0 - reliability_end

    mid_x = reliability_mid_experience()
    check_max_experience(max_experience)
    mid_y = fail_start + RELIABILITY_MID_V * (fail_end - fail_start)

    curvature = (fail_end - fail_start) * 0.0001 * RELIABILITY_MID_TANGENT_WEIGHT
    chord = (fail_end - mid_y) / (max_experience - mid_x)
    mid_tangent = curvature + chord * (1.0 - RELIABILITY_MID_TANGENT_WEIGHT)

    spline = HermiteSpline.build(
        [
            SplineKey(0.0, fail_start),
            SplineKey(mid_x, mid_y, mid_tangent, mid_tangent),
            SplineKey(max_experience, fail_end, 0.0, 0.0),
        ]
    )
    return ReliabilityCurve(
        spline=spline,
        reliability_start=reliability_start,
        reliability_end=reliability_end,
        max_experience=max_experience,
    )


def evaluate_reliability_at_data(
    data_units: float,
    reliability_start: float,
    reliability_end: float,
    settings: Optional[ModelSettings] = None,
) -> float:
    """Reliability reached after ``data_units`` of experience."""

    curve = build_reliability_curve(reliability_start, reliability_end, settings)
    return curve.evaluate_reliability(data_units)


def data_gain_rate(rated_burn_time: float) -> float:
    """Experience (data units) gained per second of running."""

    if rated_burn_time <= 0:
        raise InvalidInputError(f"Rated burn time must be positive, got {rated_burn_time}.")
    return DATA_PER_RATED_BURN / rated_burn_time
