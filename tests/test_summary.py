from __future__ import annotations

import pytest

from conftest import make_run
from run_animator.models import Run
from run_animator.summary import SEGMENT_COLUMNS, segments_frame, summarise_run
from run_animator.utils import (
    format_cadence,
    format_distance,
    format_duration,
    format_elevation,
    format_heart_rate,
    format_pace,
)


def _sample_run() -> Run:
    return make_run(
        [0.5, 2.0, 4.0],
        duration=100.0,
        elevation=[100.0, 110.0, 105.0],
        heart_rate=[0.0, 140.0, 160.0],
    )


def test_segments_frame_has_one_row_per_segment():
    frame = segments_frame(_sample_run())

    assert list(frame.columns) == SEGMENT_COLUMNS
    assert len(frame) == 3
    assert frame["elapsed_s"].tolist() == [0.0, 100.0, 200.0]
    assert frame["distance"].tolist() == pytest.approx([50.0, 200.0, 400.0])


def test_segments_frame_for_empty_run():
    frame = segments_frame(Run.empty())

    assert frame.empty
    assert list(frame.columns) == SEGMENT_COLUMNS


def test_summary_statistics():
    summary = summarise_run(_sample_run())

    assert summary.distance_m == pytest.approx(650.0)
    assert summary.duration_s == pytest.approx(300.0)
    # Only the two segments above walking speed count as moving.
    assert summary.moving_speed_ms == pytest.approx(3.0)
    assert summary.max_speed_ms == 4.0
    assert summary.elevation_gain_m == pytest.approx(10.0)
    assert summary.avg_heart_rate == pytest.approx(150.0)
    assert summary.avg_cadence == pytest.approx(170.0)


def test_summary_labels():
    labels = summarise_run(_sample_run()).as_labels()

    assert labels == {
        "Distance": "0.65 km",
        "Duration": "5:00",
        "Pace": "5:33 /km",
        "Elevation Gain": "10 m",
        "Heart Rate": "150 bpm",
        "Cadence": "170 spm",
    }


def test_summary_of_empty_run_is_all_zero():
    summary = summarise_run(Run.empty())

    assert summary.distance_m == 0.0
    assert summary.as_labels()["Pace"] == "--:--"
    assert summary.as_labels()["Heart Rate"] == "-- bpm"


def test_summary_without_moving_segments_has_no_pace():
    summary = summarise_run(make_run([0.2, 0.4], duration=10.0))

    assert summary.moving_speed_ms == 0.0
    assert summary.max_speed_ms == pytest.approx(0.4)


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "0:00"), (59.6, "1:00"), (754, "12:34"), (3725, "1:02:05"), (-5, "0:00")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_metric_formatters():
    assert format_distance(10_520.0) == "10.52 km"
    assert format_pace(4.0) == "4:10 /km"
    assert format_pace(0.0) == "--:--"
    assert format_elevation(12.4) == "12 m"
    assert format_heart_rate(151.6) == "152 bpm"
    assert format_cadence(0.0) == "-- spm"
    assert format_cadence(172.0) == "172 spm"
