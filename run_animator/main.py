"""Command line entry point: process a recorded track and report on it."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from .config import CLI_DEFAULT_SAMPLES
from .errors import TrackFormatError
from .interpolators import InterpolatorOption
from .models import ReadingPurpose
from .parser import TrackPoint
from .player import PlayerDuration, RunPlayer
from .summary import summarise_run
from .transformers import TransformerOption

REQUIRED_COLUMNS = ("latitude", "longitude", "elevation", "time")
OPTIONAL_COLUMNS = ("heart_rate", "cadence")

_TRANSFORMER_FACTORIES = {
    "gaussian": TransformerOption.gaussian,
    "speed-weighted": TransformerOption.speed_weighted,
    "wave-sampling": TransformerOption.wave_sampling,
}


def _setup_logging(verbose: bool = False) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def load_track_csv(path: str | Path) -> List[TrackPoint]:
    """Read track points from a CSV file.

    Raises:
        TrackFormatError: If required columns are missing or values cannot be
            parsed.
    """

    frame = pd.read_csv(path)
    frame.columns = [str(col).strip().lower() for col in frame.columns]
    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise TrackFormatError(f"Track file {path} is missing columns: {missing}")
    for col in OPTIONAL_COLUMNS:
        if col not in frame.columns:
            frame[col] = 0.0
    try:
        times = pd.to_datetime(frame["time"], utc=True)
        numeric = frame[["latitude", "longitude", "elevation", *OPTIONAL_COLUMNS]]
        numeric = numeric.apply(pd.to_numeric)
    except (ValueError, TypeError) as exc:
        raise TrackFormatError(f"Track file {path} has invalid values: {exc}") from exc
    numeric = numeric.fillna({"heart_rate": 0.0, "cadence": 0.0})
    return [
        TrackPoint(
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            elevation=float(row.elevation),
            time=moment.to_pydatetime(),
            heart_rate=float(row.heart_rate),
            cadence=float(row.cadence),
        )
        for row, moment in zip(numeric.itertuples(index=False), times)
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Process a recorded run into animation-ready variants."
    )
    parser.add_argument("track", help="CSV file with latitude, longitude, elevation, time")
    parser.add_argument(
        "--transformer",
        action="append",
        choices=sorted(_TRANSFORMER_FACTORIES),
        default=[],
        help="Transformer to apply; repeat to chain several (applied in order)",
    )
    parser.add_argument(
        "--interpolator",
        default="linear",
        choices=["linear", "smooth-step", "catmull-rom"],
    )
    parser.add_argument(
        "--duration",
        default=PlayerDuration.THIRTY_SECONDS.label,
        help="Playback duration preset: 15s, 30s, 1 min or real-time",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=CLI_DEFAULT_SAMPLES,
        help="Number of animation samples to log",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        points = load_track_csv(args.track)
        duration = PlayerDuration.by_label(args.duration)
    except (OSError, TrackFormatError, ValueError) as exc:
        logging.error("%s", exc)
        return 1

    transformers = [_TRANSFORMER_FACTORIES[name]() for name in args.transformer]
    with RunPlayer(
        transformers=transformers,
        interpolator=InterpolatorOption.by_label(args.interpolator),
        duration=duration,
        self_clocked=False,
    ) as player:
        runs = player.set_track(points).result()
        if runs.original.is_empty:
            logging.warning("Track %s contains no movement", args.track)
            return 1

        for label, value in summarise_run(runs.original).as_labels().items():
            logging.info("%s: %s", label, value)
        logging.info(
            "Playback %.1fs, %d diagnostic frames (%s, %s)",
            player.playback_duration(),
            len(runs.diagnostic.segments),
            player.interpolator.label,
            ", ".join(t.label for t in transformers) or "no transformers",
        )

        samples = max(0, args.samples)
        for i in range(samples):
            progress = i / (samples - 1) if samples > 1 else 0.0
            player.seek(progress)
            segment = player.segment(ReadingPurpose.ANIMATION)
            logging.info(
                "progress=%.2f speed=%.3f elevation=%.3f elevation_rate=%+.3f "
                "heart_rate=%.3f direction=(%.3f, %.3f)",
                progress,
                segment.speed,
                segment.elevation,
                segment.elevation_rate,
                segment.heart_rate,
                segment.direction.x,
                segment.direction.y,
            )
    return 0
