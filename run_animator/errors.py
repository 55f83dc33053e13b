"""Central error types used across the application."""

from __future__ import annotations


class RunAnimatorError(RuntimeError):
    """Base error for run animator failures."""


class RecomputeCancelledError(RunAnimatorError):
    """Raised when a recompute request is superseded by a newer one."""


class PlayerClosedError(RunAnimatorError):
    """Raised when work is submitted to a player that has been closed."""


class TrackFormatError(RunAnimatorError):
    """Raised when a track file is missing required columns or values."""


__all__ = [
    "RunAnimatorError",
    "RecomputeCancelledError",
    "PlayerClosedError",
    "TrackFormatError",
]
