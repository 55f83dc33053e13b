"""Rescale run metrics into animation-friendly ranges."""

from __future__ import annotations

from dataclasses import replace

from ..models import MetricRange, Run, Spectrum
from .base import RunTransformer


def _normalise(value: float, bounds: MetricRange) -> float:
    lower, upper = bounds
    span = upper - lower
    if span <= 0:
        return 0.5
    return (value - lower) / span


class NormalisedRun(RunTransformer):
    """Maps metrics onto ``[0, 1]`` using the input run's spectrum.

    Speed, heart rate, cadence and elevation are min/max scaled. Elevation
    rate is divided by its peak magnitude instead, so flat stays exactly
    ``0`` and descents stay negative. Direction is already unit length (or
    faded) and passes through.
    """

    def transform(self, run: Run) -> Run:
        if not run.segments:
            return run

        spectrum = run.spectrum
        rate_low, rate_high = spectrum.elevation_rate
        rate_scale = max(abs(rate_low), abs(rate_high))

        segments = [
            replace(
                s,
                cadence=_normalise(s.cadence, spectrum.cadence),
                elevation=_normalise(s.elevation, spectrum.elevation),
                elevation_rate=s.elevation_rate / rate_scale if rate_scale > 0 else 0.0,
                heart_rate=_normalise(s.heart_rate, spectrum.heart_rate),
                speed=_normalise(s.speed, spectrum.speed),
            )
            for s in run.segments
        ]

        if rate_scale > 0:
            rate_range = (rate_low / rate_scale, rate_high / rate_scale)
        else:
            rate_range = (0.0, 0.0)
        normalised_spectrum = Spectrum(
            elevation=(0.0, 1.0),
            elevation_rate=rate_range,
            heart_rate=(0.0, 1.0),
            cadence=(0.0, 1.0),
            speed=(0.0, 1.0),
            time=spectrum.time,
            distance=spectrum.distance,
        )
        return Run(segments=tuple(segments), spectrum=normalised_spectrum)
