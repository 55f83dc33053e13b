"""Run animator package."""

from .errors import (
    PlayerClosedError,
    RecomputeCancelledError,
    RunAnimatorError,
    TrackFormatError,
)
from .interpolators import InterpolatorOption, Timing
from .models import ReadingPurpose, Run, Runs, Segment, Spectrum, TimeSpan, Vector
from .parser import RunParser, TrackPoint
from .player import PlayerDuration, PlayerState, RunPlayer
from .transformers import TransformerChain, TransformerOption

__all__ = [
    "InterpolatorOption",
    "PlayerClosedError",
    "PlayerDuration",
    "PlayerState",
    "ReadingPurpose",
    "RecomputeCancelledError",
    "Run",
    "RunAnimatorError",
    "RunParser",
    "RunPlayer",
    "Runs",
    "Segment",
    "Spectrum",
    "TimeSpan",
    "Timing",
    "TrackFormatError",
    "TrackPoint",
    "TransformerChain",
    "TransformerOption",
    "Vector",
]
