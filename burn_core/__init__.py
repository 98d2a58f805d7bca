"""Core math package for engine burn survival calculations."""

from .models import (
    BurnOdds,
    BurnOddsSummary,
    EngineConfig,
    ModelSettings,
    SplineKey,
    SurvivalCurveData,
    SurvivalSampleSet,
)
from .errors import InvalidCurveError, InvalidInputError
from .spline import HermiteSpline
from .curves import (
    ReliabilityCurve,
    build_hazard_curve,
    build_reliability_curve,
    check_hazard_inputs,
    check_max_experience,
    data_gain_rate,
    evaluate_reliability_at_data,
)
from .engine import (
    base_failure_rate,
    burn_odds_at_time,
    calculate_survival_curve,
    calculate_survival_curves,
    cluster_probability,
    integrate_curve,
    round_to_nice_number,
    sample_curve,
    survival_at_time,
    survival_curves_for_config,
)
from .formatting import (
    describe_failure_odds,
    failure_odds,
    format_mtbf,
    format_one_in_n,
    format_percent,
    format_time,
)
from .conversions import (
    ConversionError,
    engine_config_from_mapping,
    load_engine_configs,
    settings_from_mapping,
)

__all__ = [
    "BurnOdds",
    "BurnOddsSummary",
    "EngineConfig",
    "ModelSettings",
    "SplineKey",
    "SurvivalCurveData",
    "SurvivalSampleSet",
    "InvalidCurveError",
    "InvalidInputError",
    "ConversionError",
    "HermiteSpline",
    "ReliabilityCurve",
    "build_hazard_curve",
    "build_reliability_curve",
    "check_hazard_inputs",
    "check_max_experience",
    "data_gain_rate",
    "evaluate_reliability_at_data",
    "base_failure_rate",
    "burn_odds_at_time",
    "calculate_survival_curve",
    "calculate_survival_curves",
    "cluster_probability",
    "integrate_curve",
    "round_to_nice_number",
    "sample_curve",
    "survival_at_time",
    "survival_curves_for_config",
    "describe_failure_odds",
    "failure_odds",
    "format_mtbf",
    "format_one_in_n",
    "format_percent",
    "format_time",
    "engine_config_from_mapping",
    "load_engine_configs",
    "settings_from_mapping",
]
