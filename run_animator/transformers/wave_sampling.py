"""Reduce a run to a fixed number of synthetic peak/valley segments."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import WAVE_SAMPLING_RANK, WAVE_SAMPLING_TARGET_COUNT
from ..models import Run, Segment, TimeSpan, Vector
from .base import RunTransformer

# Mean direction vectors shorter than this collapse to the zero vector.
_MIN_DIRECTION_MAGNITUDE = 1e-9


class WaveSamplingTransformer(RunTransformer):
    """Downsample a run to ``target_count`` synthetic segments.

    The segments are split into ``target_count`` contiguous windows of
    ``n // target_count`` segments; the last window also takes the remainder.
    Even windows pick the ``rank``-th highest value of every metric, odd
    windows the ``rank``-th lowest, which gives the sparse output a wave-like
    shape where interpolation differences are easy to see.

    Every metric is selected on its own, so a synthetic segment can combine
    values that never occurred at the same instant. Its direction is the
    normalised mean of the window's directions and its time span uses the
    mean start and mean duration of the window.
    """

    def __init__(
        self,
        target_count: int = WAVE_SAMPLING_TARGET_COUNT,
        rank: int = WAVE_SAMPLING_RANK,
    ):
        if rank < 1:
            raise ValueError("rank must be >= 1")
        self.target_count = target_count
        self.rank = rank

    def transform(self, run: Run) -> Run:
        segments = run.segments
        count = len(segments)
        if self.target_count <= 0 or count <= self.target_count:
            return run

        window_size = count // self.target_count
        synthetic = []
        for i in range(self.target_count):
            start = i * window_size
            end = count if i == self.target_count - 1 else start + window_size
            synthetic.append(
                self._synthetic_segment(segments[start:end], pick_highest=i % 2 == 0)
            )
        return run.with_segments(synthetic)

    def _synthetic_segment(
        self, window: Sequence[Segment], pick_highest: bool
    ) -> Segment:
        mean_start = float(np.mean([s.time.start for s in window]))
        mean_duration = float(np.mean([s.duration for s in window]))

        def pick(values: Sequence[float]) -> float:
            return _nth_extreme(values, self.rank, highest=pick_highest)

        return Segment(
            direction=_mean_direction(window),
            cadence=pick([s.cadence for s in window]),
            elevation=pick([s.elevation for s in window]),
            elevation_rate=pick([s.elevation_rate for s in window]),
            heart_rate=pick([s.heart_rate for s in window]),
            speed=pick([s.speed for s in window]),
            time=TimeSpan(mean_start, mean_start + mean_duration),
        )


def _nth_extreme(values: Sequence[float], rank: int, *, highest: bool) -> float:
    ordered = np.sort(np.asarray(values, dtype=float))
    if highest:
        ordered = ordered[::-1]
    return float(ordered[min(rank - 1, ordered.size - 1)])


def _mean_direction(window: Sequence[Segment]) -> Vector:
    mean_x = float(np.mean([s.direction.x for s in window]))
    mean_y = float(np.mean([s.direction.y for s in window]))
    magnitude = float(np.hypot(mean_x, mean_y))
    if magnitude < _MIN_DIRECTION_MAGNITUDE:
        return Vector.zero()
    return Vector(mean_x / magnitude, mean_y / magnitude)
