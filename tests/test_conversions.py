import logging
from pathlib import Path

import pytest

from burn_core.conversions import (
    ConversionError,
    engine_config_from_mapping,
    load_engine_configs,
    settings_from_mapping,
)
from burn_core.curves import build_hazard_curve
from burn_core.errors import InvalidInputError
from burn_core.models import ModelSettings


def _raw(**overrides):
    raw = {
        "name": "RD-180",
        "cycleReliabilityStart": 0.95,
        "cycleReliabilityEnd": 0.999,
        "ratedBurnTime": 300,
    }
    raw.update(overrides)
    return raw


def test_engine_config_defaults() -> None:
    config = engine_config_from_mapping(_raw())

    assert config.name == "RD-180"
    assert config.rated_burn_time == 300.0
    assert config.tested_burn_time is None
    assert config.overburn_penalty == 2.0
    assert config.ignition_reliability_start == 1.0
    assert config.ignition_reliability_end == 1.0
    assert config.default_max_time == pytest.approx(1050.0)


def test_engine_config_accepts_strings_and_snake_case() -> None:
    config = engine_config_from_mapping(
        {
            "cycle_reliability_start": "0.9",
            "cycle_reliability_end": "0.99",
            "rated_burn_time": "180",
            "tested_burn_time": "400",
            "overburn_penalty": "3.5",
            "ignition_reliability_start": "0.8",
            "ignition_reliability_end": " ",
        }
    )

    assert config.name == "engine"
    assert config.tested_burn_time == 400.0
    assert config.overburn_penalty == 3.5
    assert config.ignition_reliability_start == 0.8
    assert config.ignition_reliability_end == 1.0
    assert config.default_max_time == pytest.approx(1400.0)


@pytest.mark.parametrize("tested", [0, -1, None, ""])
def test_non_positive_tested_time_means_untested(tested) -> None:
    assert engine_config_from_mapping(_raw(testedBurnTime=tested)).tested_burn_time is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"ratedBurnTime": None},
        {"ratedBurnTime": 0},
        {"ratedBurnTime": "fast"},
        {"cycleReliabilityStart": 0.0},
        {"cycleReliabilityEnd": 1.5},
        {"ignitionReliabilityStart": -0.2},
        {"testedBurnTime": 303},
        {"ratedBurnTime": 3},
        {"testedBurnTime": 600, "overburnPenalty": 0.5},
        {"overburnPenalty": True},
    ],
)
def test_engine_config_rejects_bad_values(overrides) -> None:
    with pytest.raises(ConversionError) as excinfo:
        engine_config_from_mapping(_raw(**overrides))
    assert str(excinfo.value).startswith("RD-180:")


def test_conversion_error_is_input_error() -> None:
    assert issubclass(ConversionError, InvalidInputError)


def test_decreasing_reliability_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="burn_core.conversions"):
        engine_config_from_mapping(_raw(cycleReliabilityStart=0.99, cycleReliabilityEnd=0.9))
    assert "below start" in caplog.text


def test_settings_from_mapping() -> None:
    assert settings_from_mapping(None) == ModelSettings()
    assert settings_from_mapping({"integrator_steps": 8, "curvePoints": "50"}) == ModelSettings(
        integrator_steps=8, curve_points=50
    )
    with pytest.raises(ConversionError):
        settings_from_mapping({"curve_points": 1})


def test_load_engine_configs(tmp_path: Path) -> None:
    path = tmp_path / "engines.yaml"
    path.write_text(
        "settings:\n"
        "  integrator_steps: 10\n"
        "engines:\n"
        "  - name: Merlin\n"
        "    cycleReliabilityStart: 0.96\n"
        "    cycleReliabilityEnd: 0.998\n"
        "    ratedBurnTime: 180\n"
        "  - name: RS-25\n"
        "    cycleReliabilityStart: 0.97\n"
        "    cycleReliabilityEnd: 0.9995\n"
        "    ratedBurnTime: 520\n"
        "    testedBurnTime: 900\n"
        "    overburnPenalty: 2.5\n",
        encoding="utf-8",
    )

    settings, configs = load_engine_configs(path)

    assert settings.integrator_steps == 10
    assert settings.curve_points == 100
    assert [c.name for c in configs] == ["Merlin", "RS-25"]
    assert configs[1].tested_burn_time == 900.0
    assert configs[1].overburn_penalty == 2.5


def test_load_engine_configs_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    settings, configs = load_engine_configs(path)

    assert settings == ModelSettings()
    assert configs == []


def test_load_engine_configs_rejects_bad_layout(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("engines:\n  name: Merlin\n", encoding="utf-8")

    with pytest.raises(ConversionError):
        load_engine_configs(path)


@pytest.mark.parametrize("tested", [200, 300])
def test_tested_time_not_above_rated_means_untested(
    caplog: pytest.LogCaptureFixture, tested: float
) -> None:
    with caplog.at_level(logging.WARNING, logger="burn_core.conversions"):
        config = engine_config_from_mapping(_raw(testedBurnTime=tested))

    assert config.tested_burn_time is None
    assert "treating as untested" in caplog.text


def test_converted_configs_build_hazard_curves() -> None:
    for overrides in ({}, {"testedBurnTime": 306}, {"ratedBurnTime": 4, "testedBurnTime": 2}):
        config = engine_config_from_mapping(_raw(**overrides))
        build_hazard_curve(config.rated_burn_time, config.tested_burn_time, config.overburn_penalty)


def test_missing_ignition_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="burn_core.conversions"):
        engine_config_from_mapping(_raw())
    assert "ignition reliability not given" in caplog.text


@pytest.mark.parametrize("max_experience", [0, 3000, 20000])
def test_settings_reject_overshooting_max_experience(max_experience: float) -> None:
    with pytest.raises(ConversionError):
        settings_from_mapping({"max_experience": max_experience})
