import pytest

from burn_core.curves import build_hazard_curve
from burn_core.models import EngineConfig, ModelSettings
from burn_core.spline import HermiteSpline


@pytest.fixture
def default_settings() -> ModelSettings:
    """Reference integration and sampling constants."""
    return ModelSettings()


@pytest.fixture
def untested_hazard() -> HermiteSpline:
    return build_hazard_curve(300.0)


@pytest.fixture
def tested_hazard() -> HermiteSpline:
    return build_hazard_curve(300.0, 600.0, 2.0)


@pytest.fixture
def sample_engine() -> EngineConfig:
    return EngineConfig(
        name="LR-87",
        cycle_reliability_start=0.95,
        cycle_reliability_end=0.999,
        rated_burn_time=300.0,
        tested_burn_time=600.0,
        overburn_penalty=2.0,
        ignition_reliability_start=0.9,
        ignition_reliability_end=0.99,
    )
