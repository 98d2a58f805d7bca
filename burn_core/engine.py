"""Pure math routines for burn survival calculations."""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .curves import build_hazard_curve, evaluate_reliability_at_data
from .errors import InvalidInputError
from .models import (
    BurnOdds,
    BurnOddsSummary,
    EngineConfig,
    ModelSettings,
    SurvivalCurveData,
    SurvivalSampleSet,
)
from .spline import HermiteSpline

AXIS_FLOOR_MARGIN = 0.02


def integrate_curve(curve: HermiteSpline, t1: float, t2: float, steps: int = 20) -> float:
    """Trapezoidal integral of ``curve`` over ``[t1, t2]``; 0 for an empty range."""

    if t2 <= t1:
        return 0.0
    if steps < 1:
        raise InvalidInputError(f"Integrator needs at least one step, got {steps}.")

    dt = (t2 - t1) / steps
    values = curve.evaluate_many(t1 + np.arange(steps + 1) * dt)
    return float(np.sum((values[:-1] + values[1:]) * 0.5 * dt))


def base_failure_rate(reliability: float, rated_burn_time: float) -> float:
    """Constant hazard rate that yields ``reliability`` at the rated burn time."""

    return -math.log(reliability) / rated_burn_time


def survival_at_time(
    time: float,
    rated_burn_time: float,
    reliability: float,
    base_rate: float,
    hazard_curve: HermiteSpline,
    steps: int = 20,
) -> float:
    """Probability a single unit survives a burn of ``time`` seconds.

    Within the rated window survival is exponential and equals
    ``reliability`` at the rated burn time. Past it, the base rate is scaled
    by the integrated hazard multiplier. ``reliability`` must be in (0, 1];
    that is checked when curves and configs are built, not here.
    """

    if time <= rated_burn_time:
        return reliability ** (time / rated_burn_time)

    integrated_hazard = integrate_curve(hazard_curve, rated_burn_time, time, steps)
    extra_fail_rate = base_rate * integrated_hazard
    return min(max(reliability * math.exp(-extra_fail_rate), 0.0), 1.0)


def cluster_probability(unit_probability, cluster_size: int):
    """Probability that all ``cluster_size`` independent units succeed.

    Works on scalars and numpy arrays alike.
    """

    if cluster_size < 1:
        raise InvalidInputError(f"Cluster size must be at least 1, got {cluster_size}.")
    return unit_probability ** cluster_size


def round_to_nice_number(value: float, round_up: bool) -> float:
    """Round to 1, 2 or 5 times a power of ten."""

    if value <= 0.0:
        return 0.0

    exponent = math.floor(math.log10(value))
    fraction = value / 10.0 ** exponent

    if round_up:
        if fraction <= 1.0:
            nice = 1.0
        elif fraction <= 2.0:
            nice = 2.0
        elif fraction <= 5.0:
            nice = 5.0
        else:
            nice = 10.0
    else:
        if fraction < 1.5:
            nice = 1.0
        elif fraction < 3.5:
            nice = 2.0
        elif fraction < 7.5:
            nice = 5.0
        else:
            nice = 10.0

    return nice * 10.0 ** exponent


def sample_times(max_time: float, points: int) -> np.ndarray:
    if points < 2:
        raise InvalidInputError(f"A sampled curve needs at least 2 points, got {points}.")
    if max_time < 0:
        raise InvalidInputError(f"Sampling horizon must not be negative, got {max_time}.")
    return np.arange(points) / float(points - 1) * max_time


def sample_curve(
    reliability: float,
    rated_burn_time: float,
    hazard_curve: HermiteSpline,
    max_time: float,
    points: int = 100,
    steps: int = 20,
) -> SurvivalSampleSet:
    """Sample single-unit survival at ``points`` evenly spaced times in ``[0, max_time]``."""

    times = sample_times(max_time, points)
    base_rate = base_failure_rate(reliability, rated_burn_time)
    probs = np.array(
        [survival_at_time(t, rated_burn_time, reliability, base_rate, hazard_curve, steps) for t in times]
    )
    return SurvivalSampleSet(times=times, survival_probs=probs, min_survival_prob=float(probs.min()))


def calculate_survival_curve(
    reliability: float,
    rated_burn_time: float,
    hazard_curve: HermiteSpline,
    max_time: float,
    cluster_size: int = 1,
    settings: Optional[ModelSettings] = None,
) -> SurvivalSampleSet:
    """Sample one reliability level and apply cluster composition."""

    settings = settings or ModelSettings()
    unit = sample_curve(
        reliability,
        rated_burn_time,
        hazard_curve,
        max_time,
        settings.curve_points,
        settings.integrator_steps,
    )
    if cluster_size == 1:
        return unit

    probs = cluster_probability(unit.survival_probs, cluster_size)
    min_prob = min(unit.min_survival_prob, float(probs.min()))
    return SurvivalSampleSet(times=unit.times, survival_probs=probs, min_survival_prob=min_prob)


def calculate_survival_curves(
    reliability_start: float,
    reliability_end: float,
    rated_burn_time: float,
    hazard_curve: HermiteSpline,
    max_time: float,
    cluster_size: int = 1,
    settings: Optional[ModelSettings] = None,
) -> SurvivalCurveData:
    """Sample the start and end reliability levels against one hazard curve.

    ``min_survival_prob`` is rounded down to a nice axis value with a small
    margin below the lowest sample.
    """

    start = calculate_survival_curve(
        reliability_start, rated_burn_time, hazard_curve, max_time, cluster_size, settings
    )
    end = calculate_survival_curve(
        reliability_end, rated_burn_time, hazard_curve, max_time, cluster_size, settings
    )
    lowest = min(start.min_survival_prob, end.min_survival_prob)
    floor = round_to_nice_number(max(0.0, lowest - AXIS_FLOOR_MARGIN), False)

    return SurvivalCurveData(
        times=start.times,
        survival_probs_start=start.survival_probs,
        survival_probs_end=end.survival_probs,
        min_survival_prob=floor,
    )


def survival_curves_for_config(
    config: EngineConfig,
    max_time: Optional[float] = None,
    cluster_size: int = 1,
    current_experience: Optional[float] = None,
    settings: Optional[ModelSettings] = None,
) -> Tuple[SurvivalCurveData, Optional[SurvivalSampleSet]]:
    """Return the start/end curves and, given experience, the current curve.

    The hazard curve is built once and shared by all three levels.
    """

    settings = settings or ModelSettings()
    hazard_curve = build_hazard_curve(
        config.rated_burn_time, config.tested_burn_time, config.overburn_penalty
    )
    horizon = config.default_max_time if max_time is None else max_time

    curves = calculate_survival_curves(
        config.cycle_reliability_start,
        config.cycle_reliability_end,
        config.rated_burn_time,
        hazard_curve,
        horizon,
        cluster_size,
        settings,
    )
    if current_experience is None:
        return curves, None

    current_reliability = evaluate_reliability_at_data(
        current_experience, config.cycle_reliability_start, config.cycle_reliability_end, settings
    )
    current = calculate_survival_curve(
        current_reliability, config.rated_burn_time, hazard_curve, horizon, cluster_size, settings
    )
    return curves, current


def _odds_for_level(
    time: float,
    config: EngineConfig,
    cycle_reliability: float,
    ignition_reliability: float,
    hazard_curve: HermiteSpline,
    cluster_size: int,
    include_ignition: bool,
    steps: int,
) -> BurnOdds:
    base_rate = base_failure_rate(cycle_reliability, config.rated_burn_time)
    survival = survival_at_time(
        time, config.rated_burn_time, cycle_reliability, base_rate, hazard_curve, steps
    )
    if include_ignition:
        survival *= ignition_reliability
    return BurnOdds(
        survival_prob=cluster_probability(survival, cluster_size),
        ignition_prob=cluster_probability(ignition_reliability, cluster_size),
    )


def burn_odds_at_time(
    config: EngineConfig,
    time: float,
    cluster_size: int = 1,
    include_ignition: bool = False,
    current_experience: Optional[float] = None,
    hazard_curve: Optional[HermiteSpline] = None,
    settings: Optional[ModelSettings] = None,
) -> BurnOddsSummary:
    """Survival and ignition odds at ``time`` for each reliability level.

    When ``include_ignition`` is set the burn survival also accounts for the
    engine lighting. Cluster composition is applied last.
    """

    settings = settings or ModelSettings()
    if hazard_curve is None:
        hazard_curve = build_hazard_curve(
            config.rated_burn_time, config.tested_burn_time, config.overburn_penalty
        )
    steps = settings.integrator_steps

    start = _odds_for_level(
        time,
        config,
        config.cycle_reliability_start,
        config.ignition_reliability_start,
        hazard_curve,
        cluster_size,
        include_ignition,
        steps,
    )
    end = _odds_for_level(
        time,
        config,
        config.cycle_reliability_end,
        config.ignition_reliability_end,
        hazard_curve,
        cluster_size,
        include_ignition,
        steps,
    )

    current = None
    if current_experience is not None:
        cycle_current = evaluate_reliability_at_data(
            current_experience, config.cycle_reliability_start, config.cycle_reliability_end, settings
        )
        ignition_current = evaluate_reliability_at_data(
            current_experience,
            config.ignition_reliability_start,
            config.ignition_reliability_end,
            settings,
        )
        current = _odds_for_level(
            time,
            config,
            cycle_current,
            ignition_current,
            hazard_curve,
            cluster_size,
            include_ignition,
            steps,
        )

    return BurnOddsSummary(
        time=time,
        cluster_size=cluster_size,
        include_ignition=include_ignition,
        start=start,
        end=end,
        current=current,
    )
