"""Domain models for burn survival computations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class SplineKey:
    """Single Hermite key; tangents are slopes in value per unit time."""

    time: float
    value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0


@dataclass(frozen=True)
class ModelSettings:
    """Tuning constants for integration and sampling."""

    integrator_steps: int = 20
    curve_points: int = 100
    max_experience: float = 10000.0


@dataclass(frozen=True)
class EngineConfig:
    """Validated reliability inputs for one engine configuration."""

    name: str
    cycle_reliability_start: float
    cycle_reliability_end: float
    rated_burn_time: float  # seconds
    tested_burn_time: Optional[float] = None  # seconds, None when untested
    overburn_penalty: float = 2.0
    ignition_reliability_start: float = 1.0
    ignition_reliability_end: float = 1.0

    @property
    def default_max_time(self) -> float:
        """Chart horizon used when the caller does not pick one."""
        reference = self.tested_burn_time if self.tested_burn_time is not None else self.rated_burn_time
        return reference * 3.5


@dataclass(frozen=True)
class SurvivalSampleSet:
    """Survival probabilities sampled on an even grid in ``[0, max_time]``."""

    times: np.ndarray
    survival_probs: np.ndarray
    min_survival_prob: float


@dataclass(frozen=True)
class SurvivalCurveData:
    """Start/end sample pair sharing one time grid and one axis floor."""

    times: np.ndarray
    survival_probs_start: np.ndarray
    survival_probs_end: np.ndarray
    min_survival_prob: float  # rounded down to a nice axis value


@dataclass(frozen=True)
class BurnOdds:
    """Point-in-time burn and ignition odds for one reliability level."""

    survival_prob: float
    ignition_prob: float


@dataclass(frozen=True)
class BurnOddsSummary:
    time: float
    cluster_size: int
    include_ignition: bool
    start: BurnOdds
    end: BurnOdds
    current: Optional[BurnOdds] = None

    def levels(self) -> Tuple[Tuple[str, BurnOdds], ...]:
        rows = [("start", self.start)]
        if self.current is not None:
            rows.append(("current", self.current))
        rows.append(("end", self.end))
        return tuple(rows)
