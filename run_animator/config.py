"""Central configuration for the run animator.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Most values can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Pick up overrides from a .env in the current directory or any parent.
load_dotenv()


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
# Frame density baked into the diagnostic/animation runs.
PLAYER_FPS = _env_float("RUN_ANIMATOR_FPS", 60.0)

# Cadence (seconds) of the playback tick loop.
PLAYER_TICK_INTERVAL_S = _env_float("RUN_ANIMATOR_TICK_INTERVAL_S", 0.016)

# Largest clock step applied per tick. Longer scheduling hiccups are absorbed
# instead of skipping ahead.
PLAYER_MAX_TICK_S = _env_float("RUN_ANIMATOR_MAX_TICK_S", 0.030)

# Restart from the beginning when playback reaches the end.
PLAYER_LOOP_DEFAULT = _env_bool("RUN_ANIMATOR_LOOP", False)

# Threads available for background recomputation. Only the latest request is
# ever applied, so more than one worker just lets a superseded job finish
# without delaying the next one.
PLAYER_MAX_WORKERS = _env_int("RUN_ANIMATOR_MAX_WORKERS", 2)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
# Mean Earth radius (metres) used by the equirectangular approximation.
EARTH_RADIUS_M = 6_371_000.0

# Direction vectors shorter than this are treated as "no movement".
DIRECTION_EPSILON = 1e-12


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------
# Gaussian kernel sigmas in seconds of elapsed time.
GAUSSIAN_SIGMA_SPEED_S = _env_float("GAUSSIAN_SIGMA_SPEED_S", 20.0)
GAUSSIAN_SIGMA_ELEVATION_S = _env_float("GAUSSIAN_SIGMA_ELEVATION_S", 10.0)
GAUSSIAN_SIGMA_ELEVATION_RATE_S = _env_float("GAUSSIAN_SIGMA_ELEVATION_RATE_S", 10.0)
GAUSSIAN_SIGMA_HEART_RATE_S = _env_float("GAUSSIAN_SIGMA_HEART_RATE_S", 10.0)
GAUSSIAN_SIGMA_CADENCE_S = _env_float("GAUSSIAN_SIGMA_CADENCE_S", 10.0)
GAUSSIAN_SIGMA_DIRECTION_S = _env_float("GAUSSIAN_SIGMA_DIRECTION_S", 25.0)

# Samples further than this many sigmas away carry no weight.
GAUSSIAN_CUTOFF_SIGMAS = 3.0

# Speed (m/s) at or above which direction amplitude is fully preserved.
SPEED_WEIGHT_THRESHOLD_MS = _env_float("SPEED_WEIGHT_THRESHOLD_MS", 1.0)

# Percentile used to clip GPS speed spikes.
SPEED_OUTLIER_PERCENTILE = 0.98

# Wave sampling defaults.
WAVE_SAMPLING_TARGET_COUNT = _env_int("WAVE_SAMPLING_TARGET_COUNT", 15)
WAVE_SAMPLING_RANK = _env_int("WAVE_SAMPLING_RANK", 5)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
# Segments slower than this (m/s) are excluded from moving averages.
SUMMARY_MOVING_SPEED_MS = _env_float("SUMMARY_MOVING_SPEED_MS", 1.0)

# Number of animation samples logged by the CLI.
CLI_DEFAULT_SAMPLES = _env_int("RUN_ANIMATOR_CLI_SAMPLES", 5)
