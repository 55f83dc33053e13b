"""Catmull-Rom spline resampling."""

from __future__ import annotations

from typing import Sequence

from ..models import Segment, Vector
from .base import RunInterpolator


def catmull_rom(u: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Evaluate the uniform Catmull-Rom spline between ``p1`` and ``p2``."""

    u2 = u * u
    u3 = u2 * u
    return 0.5 * (
        2.0 * p1
        + (-p0 + p2) * u
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * u2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * u3
    )


class CatmullRomRunInterpolator(RunInterpolator):
    """Fits a C¹-continuous spline through every original sample.

    The outer control points are the neighbours of the bracketing pair,
    duplicated at the ends of the run (clamped boundary). The curve may
    overshoot the input range around sharp changes, so the spectrum is
    recomputed from the resampled frames; normalisation re-clamps the
    animation variant to ``[0, 1]`` downstream.
    """

    recompute_spectrum = True

    def blend(self, segments: Sequence[Segment], lo: int, hi: int, u: float) -> Segment:
        last = len(segments) - 1
        p0 = segments[max(lo - 1, 0)]
        p1 = segments[lo]
        p2 = segments[hi]
        p3 = segments[min(hi + 1, last)]

        def curve(field: str) -> float:
            return catmull_rom(
                u,
                getattr(p0, field),
                getattr(p1, field),
                getattr(p2, field),
                getattr(p3, field),
            )

        return Segment(
            direction=Vector(
                catmull_rom(u, p0.direction.x, p1.direction.x, p2.direction.x, p3.direction.x),
                catmull_rom(u, p0.direction.y, p1.direction.y, p2.direction.y, p3.direction.y),
            ),
            cadence=curve("cadence"),
            elevation=curve("elevation"),
            elevation_rate=curve("elevation_rate"),
            heart_rate=curve("heart_rate"),
            speed=curve("speed"),
            time=p1.time,
        )
