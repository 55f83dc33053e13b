"""Time-based Gaussian smoothing of run metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from ..config import (
    GAUSSIAN_CUTOFF_SIGMAS,
    GAUSSIAN_SIGMA_CADENCE_S,
    GAUSSIAN_SIGMA_DIRECTION_S,
    GAUSSIAN_SIGMA_ELEVATION_RATE_S,
    GAUSSIAN_SIGMA_ELEVATION_S,
    GAUSSIAN_SIGMA_HEART_RATE_S,
    GAUSSIAN_SIGMA_SPEED_S,
)
from ..models import Run, Segment, Vector
from .base import RunTransformer

MetricArray = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class GaussianConfig:
    """Kernel widths (sigma, in seconds) for each smoothed metric."""

    speed: float = GAUSSIAN_SIGMA_SPEED_S
    elevation: float = GAUSSIAN_SIGMA_ELEVATION_S
    elevation_rate: float = GAUSSIAN_SIGMA_ELEVATION_RATE_S
    heart_rate: float = GAUSSIAN_SIGMA_HEART_RATE_S
    cadence: float = GAUSSIAN_SIGMA_CADENCE_S
    direction_x: float = GAUSSIAN_SIGMA_DIRECTION_S
    direction_y: float = GAUSSIAN_SIGMA_DIRECTION_S


class GaussianRun(RunTransformer):
    """Smooths run metrics to remove jitter from GPS anomalies and brief stops.

    Sigma is measured in seconds of elapsed time, not in samples: each
    neighbour is weighted by how far its start is from the target in time.
    A long rest segment therefore counts for its real duration rather than
    as a single sample. Direction is smoothed per axis and is not
    renormalised afterwards.
    """

    def __init__(self, config: GaussianConfig | None = None):
        self.config = config or GaussianConfig()

    def transform(self, run: Run) -> Run:
        segments = run.segments
        if not segments:
            return run
        origin = segments[0].time.start
        times = np.array([s.time.start - origin for s in segments], dtype=float)

        def smooth(values: Sequence[float], sigma: float) -> MetricArray:
            return gaussian_smooth(np.asarray(values, dtype=float), times, sigma)

        cfg = self.config
        speed = smooth([s.speed for s in segments], cfg.speed)
        elevation = smooth([s.elevation for s in segments], cfg.elevation)
        elevation_rate = smooth(
            [s.elevation_rate for s in segments], cfg.elevation_rate
        )
        heart_rate = smooth([s.heart_rate for s in segments], cfg.heart_rate)
        cadence = smooth([s.cadence for s in segments], cfg.cadence)
        dir_x = smooth([s.direction.x for s in segments], cfg.direction_x)
        dir_y = smooth([s.direction.y for s in segments], cfg.direction_y)

        smoothed = [
            Segment(
                direction=Vector(float(dir_x[i]), float(dir_y[i])),
                cadence=float(cadence[i]),
                elevation=float(elevation[i]),
                elevation_rate=float(elevation_rate[i]),
                heart_rate=float(heart_rate[i]),
                speed=float(speed[i]),
                time=segment.time,
            )
            for i, segment in enumerate(segments)
        ]
        return run.with_segments(smoothed)


def gaussian_smooth(
    values: MetricArray,
    times: MetricArray,
    sigma: float,
    cutoff_sigmas: float = GAUSSIAN_CUTOFF_SIGMAS,
) -> MetricArray:
    """Return ``values`` smoothed with a Gaussian kernel over ``times``.

    Args:
        values: Samples to smooth.
        times: Ascending sample offsets in seconds, aligned with ``values``.
        sigma: Kernel width in seconds. Non-positive values disable smoothing.
        cutoff_sigmas: Neighbours further than this many sigmas are ignored.

    Returns:
        A new array. Samples whose kernel weights sum to zero keep their
        original value.
    """

    if values.shape[0] != times.shape[0]:
        raise ValueError("values and times must align")
    if values.shape[0] < 2 or sigma <= 0:
        return values.copy()

    two_sigma_sq = 2.0 * sigma * sigma
    cutoff = sigma * cutoff_sigmas
    lows = np.searchsorted(times, times - cutoff, side="left")
    highs = np.searchsorted(times, times + cutoff, side="right")
    result = np.empty_like(values)
    for i in range(values.shape[0]):
        lo, hi = lows[i], highs[i]
        dt = times[lo:hi] - times[i]
        weights = np.exp(-(dt * dt) / two_sigma_sq)
        weight_sum = weights.sum()
        if weight_sum > 0:
            result[i] = float(np.dot(weights, values[lo:hi]) / weight_sum)
        else:
            result[i] = values[i]
    return result
