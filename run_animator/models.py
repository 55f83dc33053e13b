"""Immutable value types describing a run and its derived variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Iterable, Optional, Sequence, Tuple

MetricRange = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class Vector:
    """Direction of travel. X: east+, west-. Y: north+, south-."""

    x: float = 0.0
    y: float = 0.0

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def scaled(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class TimeSpan:
    """Half-open ``[start, end)`` interval in seconds."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Segment:
    """One sampled or synthesised instant of a run.

    Zero ``cadence`` or ``heart_rate`` marks a missing sensor reading.
    """

    direction: Vector
    cadence: float
    elevation: float
    elevation_rate: float
    heart_rate: float
    speed: float
    time: TimeSpan

    @property
    def duration(self) -> float:
        return self.time.duration

    @property
    def distance(self) -> float:
        """Distance covered in this segment, in metres."""

        return self.speed * self.duration

    @classmethod
    def zero(cls) -> "Segment":
        return cls(
            direction=Vector.zero(),
            cadence=0.0,
            elevation=0.0,
            elevation_rate=0.0,
            heart_rate=0.0,
            speed=0.0,
            time=TimeSpan(0.0, 0.0),
        )


def _bounds(values: Iterable[float]) -> MetricRange:
    collected = list(values)
    if not collected:
        return (0.0, 0.0)
    return (float(min(collected)), float(max(collected)))


@dataclass(frozen=True, slots=True)
class Spectrum:
    """Closed ``(min, max)`` ranges of every metric across a run."""

    elevation: MetricRange
    elevation_rate: MetricRange
    heart_rate: MetricRange
    cadence: MetricRange
    speed: MetricRange
    time: MetricRange
    distance: MetricRange

    @classmethod
    def from_segments(
        cls,
        segments: Sequence[Segment],
        time: Optional[MetricRange] = None,
    ) -> "Spectrum":
        """Build a spectrum by taking the min/max of each metric.

        Heart rate and cadence zeroes are excluded as they indicate missing
        sensor data. When ``time`` is omitted the range spans from the first
        segment's start to the last segment's end.
        """

        if time is None:
            if segments:
                time = (0.0, float(segments[-1].time.end - segments[0].time.start))
            else:
                time = (0.0, 0.0)
        total_distance = float(sum(s.distance for s in segments))
        return cls(
            elevation=_bounds(s.elevation for s in segments),
            elevation_rate=_bounds(s.elevation_rate for s in segments),
            heart_rate=_bounds(s.heart_rate for s in segments if s.heart_rate > 0),
            cadence=_bounds(s.cadence for s in segments if s.cadence > 0),
            speed=_bounds(s.speed for s in segments),
            time=time,
            distance=(0.0, total_distance),
        )

    @classmethod
    def zero(cls) -> "Spectrum":
        return cls.from_segments(())


@dataclass(frozen=True, slots=True)
class Run:
    """Time-ordered segments plus their spectrum.

    Segments are sorted by start time, do not overlap and together cover
    the run. A run without segments represents "no data".
    """

    segments: Tuple[Segment, ...]
    spectrum: Spectrum

    def __post_init__(self) -> None:
        if not isinstance(self.segments, tuple):
            object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def duration(self) -> float:
        """Total run duration in seconds."""

        lower, upper = self.spectrum.time
        return upper - lower

    @property
    def distance(self) -> float:
        """Total run distance in metres."""

        return self.spectrum.distance[1]

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def with_segments(
        self, segments: Sequence[Segment], *, keep_time: bool = True
    ) -> "Run":
        """Return a new run built from ``segments`` with a fresh spectrum."""

        time = self.spectrum.time if keep_time else None
        return Run(
            segments=tuple(segments),
            spectrum=Spectrum.from_segments(segments, time=time),
        )

    @classmethod
    def from_segments(
        cls,
        segments: Iterable[Segment],
        time: Optional[MetricRange] = None,
    ) -> "Run":
        ordered = tuple(sorted(segments, key=lambda s: s.time.start))
        return cls(segments=ordered, spectrum=Spectrum.from_segments(ordered, time))

    @classmethod
    def empty(cls) -> "Run":
        return cls(segments=(), spectrum=Spectrum.zero())


class ReadingPurpose(Enum):
    """How a consumer intends to use the data it reads from the player."""

    # Precise values from the original run.
    METRICS = "metrics"
    # Transformed values, for inspecting how the data will be used.
    DIAGNOSTICS = "diagnostics"
    # Normalised values that drive animations.
    ANIMATION = "animation"


@dataclass(frozen=True, slots=True)
class Runs:
    """The three variants of one source run held by the player."""

    original: Run
    diagnostic: Run
    animation: Run

    def run_for(self, purpose: ReadingPurpose) -> Run:
        if purpose is ReadingPurpose.METRICS:
            return self.original
        if purpose is ReadingPurpose.DIAGNOSTICS:
            return self.diagnostic
        return self.animation


__all__ = [
    "MetricRange",
    "ReadingPurpose",
    "Run",
    "Runs",
    "Segment",
    "Spectrum",
    "TimeSpan",
    "Vector",
]
