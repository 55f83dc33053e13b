"""Tabular views and aggregate statistics for a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pandas as pd

from .config import SUMMARY_MOVING_SPEED_MS
from .models import Run
from .utils import (
    format_cadence,
    format_distance,
    format_duration,
    format_elevation,
    format_heart_rate,
    format_pace,
)

SEGMENT_COLUMNS = [
    "elapsed_s",
    "elapsed_min",
    "duration_s",
    "speed",
    "distance",
    "elevation",
    "elevation_rate",
    "heart_rate",
    "cadence",
    "direction_x",
    "direction_y",
]


def segments_frame(run: Run) -> pd.DataFrame:
    """Return one row per segment with elapsed time relative to the run start."""

    if not run.segments:
        return pd.DataFrame(columns=SEGMENT_COLUMNS)
    origin = run.segments[0].time.start
    rows = [
        {
            "elapsed_s": s.time.start - origin,
            "elapsed_min": (s.time.start - origin) / 60.0,
            "duration_s": s.duration,
            "speed": s.speed,
            "distance": s.distance,
            "elevation": s.elevation,
            "elevation_rate": s.elevation_rate,
            "heart_rate": s.heart_rate,
            "cadence": s.cadence,
            "direction_x": s.direction.x,
            "direction_y": s.direction.y,
        }
        for s in run.segments
    ]
    return pd.DataFrame(rows, columns=SEGMENT_COLUMNS)


@dataclass(slots=True)
class RunSummary:
    distance_m: float
    duration_s: float
    moving_speed_ms: float
    max_speed_ms: float
    elevation_gain_m: float
    avg_heart_rate: float
    avg_cadence: float

    def as_labels(self) -> Dict[str, str]:
        return {
            "Distance": format_distance(self.distance_m),
            "Duration": format_duration(self.duration_s),
            "Pace": format_pace(self.moving_speed_ms),
            "Elevation Gain": format_elevation(self.elevation_gain_m),
            "Heart Rate": format_heart_rate(self.avg_heart_rate),
            "Cadence": format_cadence(self.avg_cadence),
        }


def _mean_non_zero(series: pd.Series) -> float:
    # Zeroes are missing sensor readings.
    present = series[series > 0]
    return float(present.mean()) if not present.empty else 0.0


def summarise_run(
    run: Run, moving_speed_ms: float = SUMMARY_MOVING_SPEED_MS
) -> RunSummary:
    """Aggregate a run into headline statistics.

    Moving speed is total distance over total duration of segments faster
    than ``moving_speed_ms``; heart rate and cadence averages are weighted by
    segment duration and ignore missing readings.
    """

    frame = segments_frame(run)
    if frame.empty:
        return RunSummary(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    moving = frame[frame["speed"] > moving_speed_ms]
    moving_time = float(moving["duration_s"].sum())
    moving_speed = float(moving["distance"].sum()) / moving_time if moving_time > 0 else 0.0
    climbs = frame["elevation"].diff().clip(lower=0).fillna(0.0)

    heart = frame[frame["heart_rate"] > 0]
    cadence = frame[frame["cadence"] > 0]
    avg_heart = _weighted_mean(heart["heart_rate"], heart["duration_s"])
    avg_cadence = _weighted_mean(cadence["cadence"], cadence["duration_s"])

    return RunSummary(
        distance_m=run.distance,
        duration_s=run.duration,
        moving_speed_ms=moving_speed,
        max_speed_ms=float(frame["speed"].max()),
        elevation_gain_m=float(climbs.sum()),
        avg_heart_rate=avg_heart if avg_heart > 0 else _mean_non_zero(frame["heart_rate"]),
        avg_cadence=avg_cadence if avg_cadence > 0 else _mean_non_zero(frame["cadence"]),
    )


def _weighted_mean(values: pd.Series, weights: pd.Series) -> float:
    total = float(weights.sum())
    if values.empty or total <= 0:
        return 0.0
    return float((values * weights).sum() / total)
