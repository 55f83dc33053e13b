"""Playback engine package."""

from ..models import ReadingPurpose
from .duration import PlayerDuration
from .engine import PlayerState, RunPlayer, process_run

__all__ = [
    "PlayerDuration",
    "PlayerState",
    "ReadingPurpose",
    "RunPlayer",
    "process_run",
]
