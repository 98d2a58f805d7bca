"""Helpers that turn raw engine configuration data into validated models."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import yaml

from .curves import check_hazard_inputs, check_max_experience
from .errors import InvalidInputError
from .models import EngineConfig, ModelSettings

logger = logging.getLogger(__name__)

DEFAULT_OVERBURN_PENALTY = 2.0
DEFAULT_IGNITION_RELIABILITY = 1.0


class ConversionError(InvalidInputError):
    """Raised when raw data cannot be translated into an engine configuration."""


def engine_config_from_mapping(raw: Mapping[str, object]) -> EngineConfig:
    """Return an :class:`EngineConfig` for one raw configuration entry.

    Parameters
    ----------
    raw:
        Mapping as found in a config file. Recognised keys are
        ``cycleReliabilityStart``, ``cycleReliabilityEnd``, ``ratedBurnTime``,
        ``testedBurnTime``, ``overburnPenalty``, ``ignitionReliabilityStart``
        and ``ignitionReliabilityEnd``; their snake_case spellings are
        accepted too. A missing or non-positive ``testedBurnTime``, or one that
        does not exceed ``ratedBurnTime``, means the engine has no tested burn
        time. Burn times and penalty must satisfy
        :func:`~burn_core.curves.check_hazard_inputs`.
    """

    name = _preferred_label(raw)

    cycle_start = _required_float(raw, ("cycleReliabilityStart", "cycle_reliability_start"), name)
    cycle_end = _required_float(raw, ("cycleReliabilityEnd", "cycle_reliability_end"), name)
    rated = _required_float(raw, ("ratedBurnTime", "rated_burn_time"), name)
    tested = _optional_float(raw, ("testedBurnTime", "tested_burn_time"), name)

    penalty = _optional_float(raw, ("overburnPenalty", "overburn_penalty"), name)
    if penalty is None:
        penalty = DEFAULT_OVERBURN_PENALTY

    ignition_start = _optional_float(raw, ("ignitionReliabilityStart", "ignition_reliability_start"), name)
    ignition_end = _optional_float(raw, ("ignitionReliabilityEnd", "ignition_reliability_end"), name)
    if ignition_start is None or ignition_end is None:
        logger.warning("%s: ignition reliability not given, assuming %s", name, DEFAULT_IGNITION_RELIABILITY)
    if ignition_start is None:
        ignition_start = DEFAULT_IGNITION_RELIABILITY
    if ignition_end is None:
        ignition_end = DEFAULT_IGNITION_RELIABILITY

    if rated <= 0:
        raise ConversionError(f"{name}: rated burn time must be greater than zero.")
    if tested is not None and tested <= 0:
        tested = None
    if tested is not None and tested <= rated:
        logger.warning(
            "%s: tested burn time (%s) does not exceed rated burn time (%s); treating as untested",
            name,
            tested,
            rated,
        )
        tested = None

    try:
        check_hazard_inputs(rated, tested, penalty)
    except InvalidInputError as exc:
        raise ConversionError(f"{name}: {exc}") from exc

    for label, value in (
        ("cycle reliability start", cycle_start),
        ("cycle reliability end", cycle_end),
        ("ignition reliability start", ignition_start),
        ("ignition reliability end", ignition_end),
    ):
        if not 0.0 < value <= 1.0:
            raise ConversionError(f"{name}: {label} must be in (0, 1], got {value}.")

    if cycle_end < cycle_start:
        logger.warning(
            "%s: cycle reliability end (%s) is below start (%s); experience will lower reliability",
            name,
            cycle_end,
            cycle_start,
        )

    return EngineConfig(
        name=name,
        cycle_reliability_start=cycle_start,
        cycle_reliability_end=cycle_end,
        rated_burn_time=rated,
        tested_burn_time=tested,
        overburn_penalty=penalty,
        ignition_reliability_start=ignition_start,
        ignition_reliability_end=ignition_end,
    )


def settings_from_mapping(raw: Optional[Mapping[str, object]]) -> ModelSettings:
    """Return :class:`ModelSettings`, filling unspecified values with defaults."""

    defaults = ModelSettings()
    if not raw:
        return defaults

    steps = _optional_float(raw, ("integrator_steps", "integratorSteps"), "settings")
    points = _optional_float(raw, ("curve_points", "curvePoints"), "settings")
    max_experience = _optional_float(raw, ("max_experience", "maxExperience"), "settings")

    settings = ModelSettings(
        integrator_steps=defaults.integrator_steps if steps is None else int(steps),
        curve_points=defaults.curve_points if points is None else int(points),
        max_experience=defaults.max_experience if max_experience is None else max_experience,
    )
    if settings.integrator_steps < 1:
        raise ConversionError("settings: integrator_steps must be at least 1.")
    if settings.curve_points < 2:
        raise ConversionError("settings: curve_points must be at least 2.")
    try:
        check_max_experience(settings.max_experience)
    except InvalidInputError as exc:
        raise ConversionError(f"settings: {exc}") from exc
    return settings


def load_engine_configs(path: Union[str, Path]) -> Tuple[ModelSettings, List[EngineConfig]]:
    """Read a YAML file holding optional ``settings`` and a list of ``engines``."""

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, Mapping):
        raise ConversionError(f"{path}: expected a mapping at the top level.")

    settings_raw = data.get("settings")
    if settings_raw is not None and not isinstance(settings_raw, Mapping):
        raise ConversionError(f"{path}: 'settings' must be a mapping.")
    settings = settings_from_mapping(settings_raw)

    engines_raw = data.get("engines") or []
    if not isinstance(engines_raw, list):
        raise ConversionError(f"{path}: 'engines' must be a list.")

    configs = []
    for entry in engines_raw:
        if not isinstance(entry, Mapping):
            raise ConversionError(f"{path}: every engine entry must be a mapping.")
        configs.append(engine_config_from_mapping(entry))

    logger.info("Loaded %d engine configuration(s) from %s", len(configs), path)
    return settings, configs


def _preferred_label(raw: Mapping[str, object]) -> str:
    for key in ("name", "configuration", "title"):
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return val
    return "engine"


def _lookup(raw: Mapping[str, object], keys: Sequence[str]) -> Tuple[str, object]:
    for key in keys:
        if key in raw:
            return key, raw[key]
    return keys[0], None


def _optional_float(
    raw: Mapping[str, object],
    keys: Sequence[str],
    context: str,
) -> Optional[float]:
    key, value = _lookup(raw, keys)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ConversionError(f"{context}: invalid numeric value for '{key}'.")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConversionError(f"{context}: invalid numeric value for '{key}'.")


def _required_float(
    raw: Mapping[str, object],
    keys: Sequence[str],
    context: str,
) -> float:
    value = _optional_float(raw, keys, context)
    if value is None:
        raise ConversionError(f"{context}: '{keys[0]}' is required.")
    return value
