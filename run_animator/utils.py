"""Human-readable formatting helpers for run metrics."""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format seconds as ``M:SS``, or ``H:MM:SS`` from one hour upwards."""

    total = max(0, int(round(seconds)))
    hours, remainder = divmod(total, 3600)
    mins, sec = divmod(remainder, 60)
    if hours:
        return f"{hours}:{mins:02d}:{sec:02d}"
    return f"{mins}:{sec:02d}"


def format_distance(metres: float) -> str:
    """Format metres as kilometres, e.g. ``10.52 km``."""

    return f"{metres / 1000.0:.2f} km"


def format_pace(speed_ms: float) -> str:
    """Convert a speed in m/s into a ``M:SS /km`` pace label."""

    if speed_ms <= 0:
        return "--:--"
    seconds_per_km = int(1000.0 / speed_ms)
    mins, sec = divmod(seconds_per_km, 60)
    return f"{mins}:{sec:02d} /km"


def format_elevation(metres: float) -> str:
    return f"{metres:.0f} m"


def format_heart_rate(bpm: float) -> str:
    # Zero marks a missing sensor reading.
    if bpm <= 0:
        return "-- bpm"
    return f"{bpm:.0f} bpm"


def format_cadence(spm: float) -> str:
    if spm <= 0:
        return "-- spm"
    return f"{spm:.0f} spm"
