"""Tests for converting track points into runs."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import math

import pytest

from run_animator.parser import RunParser, TrackPoint

START = datetime(2025, 5, 1, 7, 30, tzinfo=timezone.utc)
METRES_PER_MILLIDEGREE = 6_371_000.0 * math.radians(0.001)


def _point(lat, lon, seconds, elevation=50.0, heart_rate=0.0, cadence=0.0):
    return TrackPoint(
        latitude=lat,
        longitude=lon,
        elevation=elevation,
        time=START + timedelta(seconds=seconds),
        heart_rate=heart_rate,
        cadence=cadence,
    )


def test_fewer_than_two_points_returns_empty_run():
    parser = RunParser()

    assert parser.parse([]).is_empty
    assert parser.parse([_point(0.0, 0.0, 0)]).is_empty


def test_track_without_movement_returns_empty_run():
    points = [_point(1.0, 1.0, i) for i in range(5)]

    assert RunParser().parse(points).is_empty


def test_stationary_points_collapse_into_one_long_segment():
    points = [
        _point(0.0, 0.0, 0),
        _point(0.0, 0.0, 10),
        _point(0.0, 0.0, 15),
        _point(0.001, 0.0, 20, elevation=60.0, heart_rate=150, cadence=172),
    ]

    run = RunParser().parse(points)

    assert len(run.segments) == 1
    segment = run.segments[0]
    assert segment.duration == pytest.approx(20.0)
    assert segment.speed == pytest.approx(METRES_PER_MILLIDEGREE / 20.0)
    assert segment.elevation_rate == pytest.approx(0.5)
    assert segment.elevation == 60.0
    assert segment.heart_rate == 150
    assert segment.cadence == 172
    assert segment.direction.x == pytest.approx(0.0)
    assert segment.direction.y == pytest.approx(1.0)


def test_direction_and_spectrum_for_eastward_then_southward_run():
    points = [
        _point(0.0, 0.0, 0, heart_rate=0),
        _point(0.0, 0.001, 10, heart_rate=140),
        _point(-0.001, 0.001, 20, elevation=45.0, heart_rate=160),
    ]

    run = RunParser().parse(points)

    east, south = run.segments
    assert east.direction.x == pytest.approx(1.0)
    assert east.direction.y == pytest.approx(0.0)
    assert south.direction.x == pytest.approx(0.0)
    assert south.direction.y == pytest.approx(-1.0)
    assert run.spectrum.time == (0.0, 20.0)
    assert run.spectrum.heart_rate == (140.0, 160.0)
    assert run.spectrum.elevation_rate == (pytest.approx(-0.5), 0.0)
    assert run.distance == pytest.approx(2 * METRES_PER_MILLIDEGREE, rel=1e-6)


def test_posix_and_naive_timestamps_are_accepted():
    naive = TrackPoint(0.0, 0.0, 0.0, datetime(2025, 5, 1, 7, 30))
    posix = TrackPoint(0.0, 0.0, 0.0, START.timestamp())

    assert naive.timestamp_s == pytest.approx(START.timestamp())
    assert posix.timestamp_s == pytest.approx(START.timestamp())


def test_zero_time_delta_yields_zero_speed():
    points = [_point(0.0, 0.0, 0), _point(0.001, 0.0, 0)]

    run = RunParser().parse(points)

    assert run.segments[0].speed == 0.0
    assert run.segments[0].elevation_rate == 0.0
