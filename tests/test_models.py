"""Tests for the run value types."""

from __future__ import annotations

import pytest

from conftest import T0, make_run, make_segment
from run_animator.models import ReadingPurpose, Run, Runs, Segment, Spectrum, Vector


def test_segment_distance_is_speed_times_duration():
    segment = make_segment(0.0, 4.0, speed=2.5)

    assert segment.duration == pytest.approx(4.0)
    assert segment.distance == pytest.approx(10.0)


def test_spectrum_excludes_missing_heart_rate_and_cadence():
    run = make_run(
        [1.0, 2.0, 3.0],
        heart_rate=[0.0, 140.0, 160.0],
        cadence=[170.0, 0.0, 180.0],
        elevation_rate=[-0.5, 0.0, 0.25],
    )

    assert run.spectrum.heart_rate == (140.0, 160.0)
    assert run.spectrum.cadence == (170.0, 180.0)
    assert run.spectrum.elevation_rate == (-0.5, 0.25)
    assert run.spectrum.speed == (1.0, 3.0)


def test_spectrum_time_and_distance_cover_the_run():
    run = make_run([2.0, 4.0], duration=5.0)

    assert run.spectrum.time == (0.0, 10.0)
    assert run.duration == pytest.approx(10.0)
    assert run.distance == pytest.approx(30.0)


def test_from_segments_sorts_by_start_time():
    late = make_segment(5.0, speed=9.0)
    early = make_segment(0.0, 5.0, speed=1.0)

    run = Run.from_segments([late, early])

    assert [s.speed for s in run.segments] == [1.0, 9.0]
    assert run.segments[0].time.start == T0


def test_empty_run_is_valid_degenerate_value():
    run = Run.empty()

    assert run.is_empty
    assert run.duration == 0.0
    assert run.distance == 0.0
    assert run.spectrum == Spectrum.from_segments([])


def test_zero_segment_and_vector():
    zero = Segment.zero()

    assert zero.direction == Vector.zero()
    assert zero.speed == 0.0
    assert zero.distance == 0.0
    assert Vector(3.0, 4.0).magnitude == pytest.approx(5.0)
    assert Vector(3.0, 4.0).scaled(0.5) == Vector(1.5, 2.0)


def test_runs_maps_reading_purposes():
    original = make_run([1.0])
    diagnostic = make_run([2.0])
    animation = make_run([3.0])
    runs = Runs(original=original, diagnostic=diagnostic, animation=animation)

    assert runs.run_for(ReadingPurpose.METRICS) is original
    assert runs.run_for(ReadingPurpose.DIAGNOSTICS) is diagnostic
    assert runs.run_for(ReadingPurpose.ANIMATION) is animation


def test_run_is_immutable():
    run = make_run([1.0, 2.0])

    with pytest.raises(AttributeError):
        run.segments = ()  # type: ignore[misc]
    assert isinstance(run.segments, tuple)
