"""Convert a flat list of track points into a :class:`Run`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import List, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import DIRECTION_EPSILON, EARTH_RADIUS_M
from .models import Run, Segment, Spectrum, TimeSpan, Vector

LOGGER = logging.getLogger(__name__)

MetricArray = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class TrackPoint:
    """A single recorded GPS sample.

    ``time`` is either a ``datetime`` (naive values are treated as UTC) or
    POSIX seconds. Missing heart rate or cadence readings are ``0``.
    """

    latitude: float
    longitude: float
    elevation: float
    time: datetime | float
    heart_rate: float = 0.0
    cadence: float = 0.0

    @property
    def timestamp_s(self) -> float:
        if isinstance(self.time, datetime):
            moment = self.time
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
            return moment.timestamp()
        return float(self.time)


class RunParser:
    """Turns track points into run segments.

    Consecutive points without a coordinate change are dropped so that a stop
    at a red light becomes a single long segment instead of many zero-speed
    duplicates. Each remaining pair of points becomes one segment carrying the
    speed, direction and elevation change between them.
    """

    def __init__(self, earth_radius_m: float = EARTH_RADIUS_M):
        self.earth_radius_m = earth_radius_m

    def parse(self, points: Sequence[TrackPoint]) -> Run:
        if len(points) < 2:
            return Run.empty()

        start_time = points[0].timestamp_s
        kept = _drop_stationary(points)
        if len(kept) < 2:
            LOGGER.debug("Track has no movement across %d points", len(points))
            return Run.empty()

        lat = np.array([p.latitude for p in kept], dtype=float)
        lon = np.array([p.longitude for p in kept], dtype=float)
        ele = np.array([p.elevation for p in kept], dtype=float)
        times = np.array([p.timestamp_s for p in kept], dtype=float)

        dt = np.diff(times)
        dx, dy = _local_offsets(lat, lon)
        distances = self.earth_radius_m * np.hypot(dx, dy)
        moving = dt > 0
        safe_dt = np.where(moving, dt, 1.0)
        speeds = np.where(moving, distances / safe_dt, 0.0)
        elevation_rates = np.where(moving, np.diff(ele) / safe_dt, 0.0)

        lengths = np.hypot(dx, dy)
        has_heading = lengths > DIRECTION_EPSILON
        safe_lengths = np.where(has_heading, lengths, 1.0)
        dir_x = np.where(has_heading, dx / safe_lengths, 0.0)
        dir_y = np.where(has_heading, dy / safe_lengths, 0.0)

        segments: List[Segment] = []
        for i in range(len(kept) - 1):
            current = kept[i + 1]
            segments.append(
                Segment(
                    direction=Vector(float(dir_x[i]), float(dir_y[i])),
                    cadence=float(current.cadence),
                    elevation=float(current.elevation),
                    elevation_rate=float(elevation_rates[i]),
                    heart_rate=float(current.heart_rate),
                    speed=float(speeds[i]),
                    time=TimeSpan(float(times[i]), float(times[i + 1])),
                )
            )

        total_duration = float(times[-1] - start_time)
        LOGGER.debug(
            "Parsed %d points into %d segments (%.1fs)",
            len(points),
            len(segments),
            total_duration,
        )
        return Run(
            segments=tuple(segments),
            spectrum=Spectrum.from_segments(segments, time=(0.0, total_duration)),
        )


def _drop_stationary(points: Sequence[TrackPoint]) -> List[TrackPoint]:
    kept = [points[0]]
    for point in points[1:]:
        previous = kept[-1]
        if (
            point.latitude != previous.latitude
            or point.longitude != previous.longitude
        ):
            kept.append(point)
    return kept


def _local_offsets(lat: MetricArray, lon: MetricArray) -> tuple[MetricArray, MetricArray]:
    """Return equirectangular east/north offsets (radians) between neighbours."""

    lat_rad = np.radians(lat)
    mid_lat = (lat_rad[:-1] + lat_rad[1:]) / 2.0
    dx = np.radians(np.diff(lon)) * np.cos(mid_lat)
    dy = np.diff(lat_rad)
    return dx, dy


__all__ = ["RunParser", "TrackPoint"]
