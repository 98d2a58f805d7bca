"""Piecewise cubic Hermite curves with explicit per-key tangents."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Tuple

import numpy as np

from .errors import InvalidCurveError
from .models import SplineKey


@dataclass(frozen=True)
class HermiteSpline:
    """Immutable Hermite curve over keys sorted by strictly increasing time.

    Tangents are slopes (value per unit time) and are scaled by the segment
    duration during evaluation. Outside the key range the curve holds the
    first/last key value.
    """

    keys: Tuple[SplineKey, ...]
    _times: Tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        keys = tuple(self.keys)
        if len(keys) < 2:
            raise InvalidCurveError(f"A spline needs at least 2 keys, got {len(keys)}.")
        for prev, key in zip(keys, keys[1:]):
            if not key.time > prev.time:
                raise InvalidCurveError(
                    f"Spline key times must be strictly increasing ({prev.time} -> {key.time})."
                )
        object.__setattr__(self, "keys", keys)
        object.__setattr__(self, "_times", tuple(key.time for key in keys))

    @classmethod
    def build(cls, keys: Iterable[SplineKey]) -> "HermiteSpline":
        return cls(tuple(keys))

    @property
    def start_time(self) -> float:
        return self._times[0]

    @property
    def end_time(self) -> float:
        return self._times[-1]

    def evaluate(self, t: float) -> float:
        keys = self.keys
        if t <= keys[0].time:
            return keys[0].value
        if t >= keys[-1].time:
            return keys[-1].value

        idx = bisect_right(self._times, t)
        k0 = keys[idx - 1]
        k1 = keys[idx]
        d = k1.time - k0.time
        s = (t - k0.time) / d
        s2 = s * s
        s3 = s2 * s

        h00 = 2.0 * s3 - 3.0 * s2 + 1.0
        h10 = s3 - 2.0 * s2 + s
        h01 = -2.0 * s3 + 3.0 * s2
        h11 = s3 - s2
        return h00 * k0.value + h10 * d * k0.out_tangent + h01 * k1.value + h11 * d * k1.in_tangent

    def evaluate_many(self, times: Iterable[float]) -> np.ndarray:
        """Vectorised :meth:`evaluate` over an array of times."""

        t = np.asarray(times, dtype=float)
        knot_t = np.array(self._times)
        values = np.array([k.value for k in self.keys])
        out_tan = np.array([k.out_tangent for k in self.keys])
        in_tan = np.array([k.in_tangent for k in self.keys])

        idx = np.clip(np.searchsorted(knot_t, t, side="right"), 1, len(knot_t) - 1)
        t0 = knot_t[idx - 1]
        d = knot_t[idx] - t0
        s = (t - t0) / d
        s2 = s * s
        s3 = s2 * s

        result = (
            (2.0 * s3 - 3.0 * s2 + 1.0) * values[idx - 1]
            + (s3 - 2.0 * s2 + s) * d * out_tan[idx - 1]
            + (-2.0 * s3 + 3.0 * s2) * values[idx]
            + (s3 - s2) * d * in_tan[idx]
        )
        result = np.where(t <= knot_t[0], values[0], result)
        return np.where(t >= knot_t[-1], values[-1], result)
