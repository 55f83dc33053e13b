"""Tests for uniform run resampling."""

from __future__ import annotations

import pytest

from conftest import T0, make_run, make_varied_run
from run_animator.interpolators import (
    CatmullRomRunInterpolator,
    InterpolatorOption,
    LinearRunInterpolator,
    SmoothStepRunInterpolator,
    Timing,
    catmull_rom,
    smoothstep,
)
from run_animator.models import Run

ALL_INTERPOLATORS = [
    LinearRunInterpolator(),
    SmoothStepRunInterpolator(),
    CatmullRomRunInterpolator(),
]


@pytest.mark.parametrize(
    "duration,fps,expected",
    [(2.5, 60, 150), (0.01, 60, 1), (1.0, 24, 24), (0.0, 60, 0), (5.0, 0, 0)],
)
def test_frame_count_rounds_up(duration, fps, expected):
    assert Timing(duration, fps).frame_count == expected


@pytest.mark.parametrize("interpolator", ALL_INTERPOLATORS, ids=lambda i: type(i).__name__)
def test_frames_are_equally_spaced_over_the_run(interpolator):
    run = make_run([1.0, 2.0, 3.0, 4.0, 5.0], duration=2.0)

    resampled = interpolator.interpolate(run, Timing(duration=2.0, fps=10))

    assert len(resampled.segments) == 20
    for i, segment in enumerate(resampled.segments):
        assert segment.time.start == pytest.approx(T0 + i * 0.5)
        assert segment.duration == pytest.approx(0.5)


def test_linear_blends_between_samples_and_clamps_after_last():
    run = make_run([1.0, 2.0, 3.0, 4.0, 5.0], duration=2.0)

    resampled = LinearRunInterpolator().interpolate(run, Timing(duration=2.0, fps=10))

    speeds = [s.speed for s in resampled.segments]
    assert speeds[0] == 1.0
    assert speeds[3] == pytest.approx(1.75)
    assert speeds[16] == pytest.approx(5.0)
    assert speeds[19] == 5.0
    assert resampled.spectrum is run.spectrum


def test_smooth_step_eases_the_blend_factor():
    run = make_run([1.0, 2.0], duration=2.0)

    resampled = SmoothStepRunInterpolator().interpolate(run, Timing(duration=4.0, fps=2))

    # Frame 1 sits a quarter of the way between the two samples.
    assert resampled.segments[1].speed == pytest.approx(1.0 + smoothstep(0.25))
    assert smoothstep(0.0) == 0.0
    assert smoothstep(1.0) == 1.0
    assert resampled.spectrum is run.spectrum


@pytest.mark.parametrize(
    "interpolator",
    [LinearRunInterpolator(), SmoothStepRunInterpolator()],
    ids=lambda i: type(i).__name__,
)
def test_bounded_strategies_stay_within_input_range(interpolator):
    run = make_varied_run(count=12, duration=3.0)

    resampled = interpolator.interpolate(run, Timing(duration=5.0, fps=30))

    low, high = run.spectrum.speed
    assert all(low - 1e-9 <= s.speed <= high + 1e-9 for s in resampled.segments)
    low, high = run.spectrum.elevation_rate
    assert all(low - 1e-9 <= s.elevation_rate <= high + 1e-9 for s in resampled.segments)


def test_catmull_rom_passes_through_samples():
    run = make_run([1.0, 5.0, 2.0, 8.0, 3.0], duration=2.0)

    resampled = CatmullRomRunInterpolator().interpolate(run, Timing(duration=10.0, fps=1))

    # One frame per second; samples start every two seconds.
    speeds = [s.speed for s in resampled.segments]
    assert speeds[0:9:2] == pytest.approx([1.0, 5.0, 2.0, 8.0, 3.0])


def test_catmull_rom_may_overshoot_so_spectrum_is_recomputed():
    run = make_run([0.0, 10.0, 0.0, 0.0], duration=2.0)

    resampled = CatmullRomRunInterpolator().interpolate(run, Timing(duration=8.0, fps=1))

    speeds = [s.speed for s in resampled.segments]
    assert speeds[5] == pytest.approx(-0.625)
    assert resampled.spectrum.speed == (min(speeds), max(speeds))
    assert resampled.spectrum.speed[0] < run.spectrum.speed[0]
    assert resampled.spectrum.time == run.spectrum.time


def test_catmull_rom_helper_hits_endpoints():
    assert catmull_rom(0.0, 9.0, 1.0, 2.0, 7.0) == pytest.approx(1.0)
    assert catmull_rom(1.0, 9.0, 1.0, 2.0, 7.0) == pytest.approx(2.0)


@pytest.mark.parametrize("interpolator", ALL_INTERPOLATORS, ids=lambda i: type(i).__name__)
def test_single_segment_is_held_for_every_frame(interpolator):
    run = make_run([4.0], duration=4.0, heart_rate=[155.0])

    resampled = interpolator.interpolate(run, Timing(duration=4.0, fps=2))

    assert len(resampled.segments) == 8
    assert {s.speed for s in resampled.segments} == {4.0}
    assert {s.heart_rate for s in resampled.segments} == {155.0}


@pytest.mark.parametrize("interpolator", ALL_INTERPOLATORS, ids=lambda i: type(i).__name__)
def test_degenerate_input_is_returned_unchanged(interpolator):
    empty = Run.empty()
    instant = make_run([1.0], duration=0.0)
    run = make_run([1.0, 2.0])

    assert interpolator.interpolate(empty, Timing(10.0, 60)) is empty
    assert interpolator.interpolate(instant, Timing(10.0, 60)) is instant
    assert interpolator.interpolate(run, Timing(0.0, 60)) is run


class TestInterpolatorOption:
    def test_all_in_display_order(self):
        labels = [o.label for o in InterpolatorOption.all()]

        assert labels == ["Linear", "Smooth Step", "Catmull-Rom"]

    @pytest.mark.parametrize(
        "label,expected",
        [
            ("linear", "Linear"),
            ("smooth_step", "Smooth Step"),
            ("Smooth Step", "Smooth Step"),
            ("catmull-rom", "Catmull-Rom"),
            ("CATMULL_ROM", "Catmull-Rom"),
        ],
    )
    def test_by_label_is_forgiving(self, label, expected):
        assert InterpolatorOption.by_label(label).label == expected

    def test_by_label_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown interpolator"):
            InterpolatorOption.by_label("cubic")

    def test_equality_uses_label_only(self):
        impostor = InterpolatorOption("Linear", CatmullRomRunInterpolator())

        assert impostor == InterpolatorOption.LINEAR
        assert hash(impostor) == hash(InterpolatorOption.LINEAR)
