"""Shared uniform resampling used by every interpolation strategy."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, replace
import math
from typing import List, Sequence

from ..models import Run, Segment, TimeSpan, Vector


@dataclass(frozen=True, slots=True)
class Timing:
    """Target playback duration (seconds) and frame rate for a run."""

    duration: float
    fps: float

    @property
    def frame_count(self) -> int:
        if self.duration <= 0 or self.fps <= 0:
            return 0
        return int(math.ceil(self.fps * self.duration))


def lerp(a: float, b: float, u: float) -> float:
    return a + (b - a) * u


def blend_segments(a: Segment, b: Segment, u: float) -> Segment:
    """Linearly blend every metric of ``a`` towards ``b``; keeps ``a.time``."""

    return Segment(
        direction=Vector(
            lerp(a.direction.x, b.direction.x, u),
            lerp(a.direction.y, b.direction.y, u),
        ),
        cadence=lerp(a.cadence, b.cadence, u),
        elevation=lerp(a.elevation, b.elevation, u),
        elevation_rate=lerp(a.elevation_rate, b.elevation_rate, u),
        heart_rate=lerp(a.heart_rate, b.heart_rate, u),
        speed=lerp(a.speed, b.speed, u),
        time=a.time,
    )


class RunInterpolator:
    """Resamples a run into ``ceil(fps * duration)`` equally spaced frames.

    Frame ``i`` covers ``[origin + i * step, origin + (i + 1) * step)`` with
    ``step = run.duration / frame_count``, independent of how irregular the
    original samples are. Subclasses decide how values are blended between
    the two samples bracketing each frame.

    Degenerate input (no segments, non-positive timing, zero run duration) is
    returned unchanged.
    """

    #: Whether the strategy can leave the input range and needs a fresh spectrum.
    recompute_spectrum = False

    def interpolate(self, run: Run, timing: Timing) -> Run:
        segments = run.segments
        frames = timing.frame_count
        run_duration = run.duration
        if not segments or frames <= 0 or run_duration <= 0:
            return run

        step = run_duration / frames
        origin = segments[0].time.start
        offsets = [s.time.start - origin for s in segments]
        resampled: List[Segment] = []
        for i in range(frames):
            t = i * step
            sample = self.segment_at(segments, offsets, t)
            resampled.append(
                replace(sample, time=TimeSpan(origin + t, origin + t + step))
            )

        if self.recompute_spectrum:
            return run.with_segments(resampled)
        return Run(segments=tuple(resampled), spectrum=run.spectrum)

    def segment_at(
        self,
        segments: Sequence[Segment],
        offsets: Sequence[float],
        t: float,
    ) -> Segment:
        """Return the blended segment ``t`` seconds after the first start.

        Offsets before the first sample or after the last sample's start are
        clamped to the first and last segment respectively.
        """

        if len(segments) < 2 or t <= offsets[0]:
            return segments[0]
        if t >= offsets[-1]:
            return segments[-1]

        hi = bisect_right(offsets, t)
        lo = hi - 1
        span = offsets[hi] - offsets[lo]
        u = (t - offsets[lo]) / span if span > 0 else 0.0
        return self.blend(segments, lo, hi, u)

    def blend(
        self, segments: Sequence[Segment], lo: int, hi: int, u: float
    ) -> Segment:  # pragma: no cover - interface
        raise NotImplementedError
