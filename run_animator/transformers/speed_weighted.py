"""Speed-weighted direction fade with percentile speed clipping."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from ..config import SPEED_OUTLIER_PERCENTILE, SPEED_WEIGHT_THRESHOLD_MS
from ..models import Run
from .base import RunTransformer


@dataclass(frozen=True, slots=True)
class SpeedWeightedConfig:
    # Speed (m/s) at or above which direction amplitude is fully preserved.
    threshold: float = SPEED_WEIGHT_THRESHOLD_MS
    percentile: float = SPEED_OUTLIER_PERCENTILE


class SpeedWeightedRun(RunTransformer):
    """Fades direction toward zero when the runner is slow or stopped.

    Speeds above the configured percentile are clipped first so that GPS
    spikes do not distort the signal. Direction is then scaled by
    ``min(speed / threshold, 1)``.
    """

    def __init__(self, config: SpeedWeightedConfig | None = None):
        self.config = config or SpeedWeightedConfig()

    def transform(self, run: Run) -> Run:
        segments = run.segments
        if not segments:
            return run

        speed_cap = percentile_cap([s.speed for s in segments], self.config.percentile)
        threshold = self.config.threshold
        processed = []
        for segment in segments:
            clipped = min(segment.speed, speed_cap)
            weight = min(clipped / threshold, 1.0) if threshold > 0 else 1.0
            processed.append(
                replace(
                    segment,
                    direction=segment.direction.scaled(weight),
                    speed=clipped,
                )
            )
        return run.with_segments(processed)


def percentile_cap(values, percentile: float) -> float:
    """Return the ascending-sorted value at ``floor(n * percentile)``.

    The index is clamped to the last element, so small inputs resolve to
    their maximum.
    """

    ordered = np.sort(np.asarray(values, dtype=float))
    if ordered.size == 0:
        raise ValueError("Cannot take a percentile of no values")
    index = min(int(ordered.size * percentile), ordered.size - 1)
    return float(ordered[index])
