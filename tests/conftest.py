"""Global pytest fixtures & helpers.

Adds project root to path and provides run factories shared by the
transformer, interpolator and player tests.
"""
from __future__ import annotations

import os
import sys
from typing import Iterator, List, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from run_animator.models import Run, Segment, TimeSpan, Vector
from run_animator.player import RunPlayer

T0 = 1_700_000_000.0


# --- Factory helpers -------------------------------------------------
def make_segment(
    start: float,
    duration: float = 1.0,
    *,
    speed: float = 3.0,
    elevation: float = 100.0,
    elevation_rate: float = 0.0,
    heart_rate: float = 150.0,
    cadence: float = 170.0,
    direction: Vector = Vector(1.0, 0.0),
) -> Segment:
    return Segment(
        direction=direction,
        cadence=cadence,
        elevation=elevation,
        elevation_rate=elevation_rate,
        heart_rate=heart_rate,
        speed=speed,
        time=TimeSpan(T0 + start, T0 + start + duration),
    )


def make_run(speeds: Sequence[float], duration: float = 1.0, **fields) -> Run:
    """Back-to-back segments of equal ``duration`` with the given speeds.

    Extra keyword arguments are sequences aligned with ``speeds``.
    """

    segments: List[Segment] = []
    for i, speed in enumerate(speeds):
        extras = {name: values[i] for name, values in fields.items()}
        segments.append(make_segment(i * duration, duration, speed=speed, **extras))
    return Run.from_segments(segments)


def make_varied_run(count: int = 40, duration: float = 2.0) -> Run:
    """A run where every metric changes from segment to segment."""

    segments = [
        make_segment(
            i * duration,
            duration,
            speed=2.0 + (i % 7) * 0.5,
            elevation=100.0 + (i % 5) * 3.0,
            elevation_rate=((i % 9) - 4) * 0.1,
            heart_rate=140.0 + (i % 11),
            cadence=160.0 + (i % 6) * 2.0,
            direction=Vector(1.0 if i % 2 else 0.0, 0.0 if i % 2 else 1.0),
        )
        for i in range(count)
    ]
    return Run.from_segments(segments)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def varied_run() -> Run:
    return make_varied_run()


@pytest.fixture
def manual_player() -> Iterator[RunPlayer]:
    """A player driven by explicit ``advance`` calls instead of a tick thread."""

    player = RunPlayer(self_clocked=False)
    yield player
    player.close()
