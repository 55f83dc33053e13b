"""Playback engine: background recomputation plus a real-time progress clock.

``RunPlayer`` owns the three variants of the loaded run (original,
diagnostic and animation), the playback progress and the play/pause state.
Heavy work (parsing, transforming, interpolating and normalising) runs on a
worker pool and never touches player state; only the completion callback of
the most recent request writes the new variants back. Every new request
supersedes the previous one, whose caller receives
:class:`~run_animator.errors.RecomputeCancelledError` instead of a result.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
import logging
import math
import threading
import time
from typing import Callable, Optional, Sequence, Tuple

from ..config import (
    PLAYER_FPS,
    PLAYER_LOOP_DEFAULT,
    PLAYER_MAX_TICK_S,
    PLAYER_MAX_WORKERS,
    PLAYER_TICK_INTERVAL_S,
)
from ..errors import PlayerClosedError, RecomputeCancelledError
from ..interpolators import InterpolatorOption, Timing
from ..models import ReadingPurpose, Run, Runs, Segment
from ..parser import RunParser, TrackPoint
from ..transformers import (
    NormalisedRun,
    RunTransformer,
    TransformerChain,
    TransformerOption,
)
from .duration import PlayerDuration

RunFactory = Callable[[], Run]

# Progress within this distance of the end counts as finished.
_END_TOLERANCE = 1e-9


class PlayerState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    PAUSED = "paused"
    PLAYING = "playing"


def process_run(
    run: Run,
    transformers: Sequence[TransformerOption],
    interpolator: InterpolatorOption,
    duration: PlayerDuration,
    fps: float = PLAYER_FPS,
) -> Runs:
    """Derive the diagnostic and animation variants of ``run``.

    Pure and deterministic: the transformer chain is applied first, the
    result is resampled to ``fps`` frames per playback second, and the
    animation variant is the normalised form of that resampled run.
    """

    chain = TransformerChain(option.transformer for option in transformers)
    timing = Timing(duration=duration(run.duration), fps=fps)
    diagnostic = interpolator.interpolator.interpolate(chain.transform(run), timing)
    return Runs(
        original=run,
        diagnostic=diagnostic,
        animation=NormalisedRun().transform(diagnostic),
    )


@dataclass(slots=True)
class _RecomputeRequest:
    generation: int
    cancelled: threading.Event = field(default_factory=threading.Event)
    future: "Future[Runs]" = field(default_factory=Future)


class RunPlayer:
    """Loads, processes and plays back a run.

    All player state is guarded by one lock. Recompute results are applied
    last-writer-wins: a result is dropped unless it belongs to the most
    recent request.

    Args:
        transformers: Initial transformer chain.
        interpolator: Initial interpolation strategy.
        duration: Initial playback duration mapping.
        loop: Wrap around instead of pausing at the end.
        parser: Parser used by :meth:`set_track`.
        fps: Frame density of the derived variants.
        self_clocked: Run an internal tick thread while playing. When
            ``False`` the caller drives playback through :meth:`advance`.
        tick_interval_s: Tick thread cadence.
        max_tick_s: Largest clock step applied by one tick.
        max_workers: Worker threads for recomputation.
    """

    def __init__(
        self,
        transformers: Sequence[TransformerOption] = (),
        interpolator: InterpolatorOption = InterpolatorOption.LINEAR,
        duration: PlayerDuration = PlayerDuration.THIRTY_SECONDS,
        *,
        loop: bool = PLAYER_LOOP_DEFAULT,
        parser: RunParser | None = None,
        fps: float = PLAYER_FPS,
        self_clocked: bool = True,
        tick_interval_s: float = PLAYER_TICK_INTERVAL_S,
        max_tick_s: float = PLAYER_MAX_TICK_S,
        max_workers: int | None = None,
    ):
        self.max_workers = max_workers or PLAYER_MAX_WORKERS
        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._log = logging.getLogger(self.__class__.__name__)
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="run-player"
        )
        self._parser = parser or RunParser()
        self._fps = fps
        self._self_clocked = self_clocked
        self._tick_interval_s = tick_interval_s
        self._max_tick_s = max_tick_s

        self._transformers: Tuple[TransformerOption, ...] = tuple(transformers)
        self._interpolator = interpolator
        self._duration = duration
        self._loop = loop

        self._runs: Optional[Runs] = None
        self._progress = 0.0
        self._is_playing = False
        self._is_processing = False
        self._closed = False

        self._generation = 0
        self._pending: Optional[_RecomputeRequest] = None
        self._pending_source: Optional[RunFactory] = None
        self._ticker: Optional[threading.Thread] = None
        self._ticker_stop: Optional[threading.Event] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._is_playing

    @property
    def is_processing(self) -> bool:
        """True while a recompute is in flight; playback controls may wait."""

        with self._lock:
            return self._is_processing

    @property
    def runs(self) -> Optional[Runs]:
        with self._lock:
            return self._runs

    def current_runs(self) -> Optional[Runs]:
        return self.runs

    @property
    def state(self) -> PlayerState:
        with self._lock:
            if self._is_processing:
                return PlayerState.PROCESSING
            if self._runs is None:
                return PlayerState.IDLE
            return PlayerState.PLAYING if self._is_playing else PlayerState.PAUSED

    @property
    def loop(self) -> bool:
        with self._lock:
            return self._loop

    @loop.setter
    def loop(self, value: bool) -> None:
        with self._lock:
            self._loop = bool(value)

    @property
    def transformers(self) -> Tuple[TransformerOption, ...]:
        with self._lock:
            return self._transformers

    @property
    def interpolator(self) -> InterpolatorOption:
        with self._lock:
            return self._interpolator

    @property
    def duration(self) -> PlayerDuration:
        with self._lock:
            return self._duration

    def playback_duration(self) -> float:
        """Seconds the loaded run takes to play, or ``0`` when nothing is loaded."""

        with self._lock:
            if self._runs is None:
                return 0.0
            return self._duration(self._runs.original.duration)

    # ------------------------------------------------------------------
    # Playback controls
    # ------------------------------------------------------------------
    def play(self) -> None:
        """Start or resume playback. Ignored when no run is loaded or loading."""

        with self._lock:
            if self._runs is None and self._pending is None:
                self._log.debug("Ignoring play with no run loaded")
                return
            if self._progress >= 1:
                self._progress = 0.0
            self._is_playing = True
            stale = self._stop_ticker_locked()
            if self._self_clocked and not self._closed:
                self._start_ticker_locked()
        self._join_ticker(stale)

    def pause(self) -> None:
        with self._lock:
            stale = self._pause_locked()
        self._join_ticker(stale)

    def stop(self) -> None:
        with self._lock:
            stale = self._pause_locked()
            self._progress = 0.0
        self._join_ticker(stale)

    def seek(self, progress: float) -> None:
        """Jump to ``progress`` (clamped to ``[0, 1]``) without changing play state."""

        with self._lock:
            self._progress = min(1.0, max(0.0, float(progress)))

    def advance(self, dt: float) -> None:
        """Move playback forward by ``dt`` seconds of wall time.

        Called by the internal tick thread, or by the caller when the player
        is not self-clocked. Has no effect while paused.
        """

        self._advance(dt, None)

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------
    def segment(self, purpose: ReadingPurpose) -> Segment:
        """Return the segment at the current progress for ``purpose``.

        Direct index lookup into the precomputed variant; nothing is
        interpolated at read time.
        """

        with self._lock:
            if self._runs is None:
                return Segment.zero()
            segments = self._runs.run_for(purpose).segments
            if not segments:
                return Segment.zero()
            index = min(int(self._progress * len(segments)), len(segments) - 1)
            return segments[index]

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_run(self, run: Run) -> "Future[Runs]":
        """Load ``run``, stopping playback and resetting progress.

        Returns a future resolving to the new variants once they are
        installed, or failing with ``RecomputeCancelledError`` when a later
        request supersedes this one.
        """

        self._log.info("Loading run with %d segments", len(run.segments))
        return self._load(lambda: run)

    def set_track(self, points: Sequence[TrackPoint]) -> "Future[Runs]":
        """Like :meth:`set_run`, but parses ``points`` on the worker pool."""

        snapshot = tuple(points)
        parser = self._parser
        self._log.info("Loading track with %d points", len(snapshot))
        return self._load(lambda: parser.parse(snapshot))

    def set_transformers(
        self, transformers: Sequence[TransformerOption]
    ) -> "Future[Runs] | None":
        """Replace the transformer chain and reprocess without stopping playback."""

        with self._lock:
            self._transformers = tuple(transformers)
            return self._reprocess_locked()

    def set_transformer(self, transformer: RunTransformer) -> "Future[Runs] | None":
        """Replace the whole chain with a single unlabelled transformer."""

        return self.set_transformers([TransformerOption.custom(transformer)])

    def set_interpolator(self, interpolator: InterpolatorOption) -> "Future[Runs] | None":
        with self._lock:
            self._interpolator = interpolator
            return self._reprocess_locked()

    def set_duration(self, duration: PlayerDuration) -> "Future[Runs] | None":
        with self._lock:
            self._duration = duration
            return self._reprocess_locked()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Stop playback, drop pending work and shut down the worker pool."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            stale = self._pause_locked()
            if self._pending is not None:
                self._pending.cancelled.set()
            self._is_processing = False
        self._join_ticker(stale)
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "RunPlayer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load(self, source: RunFactory) -> "Future[Runs]":
        with self._lock:
            stale = self._pause_locked()
            self._progress = 0.0
            future = self._submit_locked(source)
        self._join_ticker(stale)
        return future

    def _reprocess_locked(self) -> "Future[Runs] | None":
        if self._pending is not None:
            source = self._pending_source
        elif self._runs is not None:
            original = self._runs.original
            source = lambda: original  # noqa: E731
        else:
            return None
        return self._submit_locked(source)

    def _submit_locked(self, source: RunFactory) -> "Future[Runs]":
        if self._closed:
            raise PlayerClosedError("RunPlayer has been closed")
        if self._pending is not None:
            self._pending.cancelled.set()
        self._generation += 1
        request = _RecomputeRequest(generation=self._generation)
        self._pending = request
        self._pending_source = source
        self._is_processing = True
        worker = self._executor.submit(
            self._compute,
            request,
            source,
            self._transformers,
            self._interpolator,
            self._duration,
        )
        worker.add_done_callback(lambda done: self._apply(request, done))
        return request.future

    def _compute(
        self,
        request: _RecomputeRequest,
        source: RunFactory,
        transformers: Sequence[TransformerOption],
        interpolator: InterpolatorOption,
        duration: PlayerDuration,
    ) -> Optional[Runs]:
        if request.cancelled.is_set():
            return None
        started = time.perf_counter()
        run = source()
        if request.cancelled.is_set():
            return None
        runs = process_run(run, transformers, interpolator, duration, self._fps)
        self._log.debug(
            "Recompute #%d finished in %.3fs (%d diagnostic frames)",
            request.generation,
            time.perf_counter() - started,
            len(runs.diagnostic.segments),
        )
        return runs

    def _apply(self, request: _RecomputeRequest, worker: "Future[Optional[Runs]]") -> None:
        outcome: Runs | BaseException
        with self._lock:
            superseded = (
                request.generation != self._generation or request.cancelled.is_set()
            )
            if superseded:
                outcome = RecomputeCancelledError(
                    f"Recompute #{request.generation} was superseded"
                )
                self._log.debug("Discarding superseded recompute #%d", request.generation)
            else:
                self._pending = None
                self._pending_source = None
                self._is_processing = False
                if worker.cancelled():
                    outcome = RecomputeCancelledError(
                        f"Recompute #{request.generation} was cancelled"
                    )
                elif worker.exception() is not None:
                    outcome = worker.exception()  # type: ignore[assignment]
                    self._log.error(
                        "Recompute #%d failed: %s", request.generation, outcome
                    )
                else:
                    outcome = worker.result()  # type: ignore[assignment]
                    self._runs = outcome
        if isinstance(outcome, BaseException):
            request.future.set_exception(outcome)
        else:
            request.future.set_result(outcome)

    def _advance(self, dt: float, ticker_stop: Optional[threading.Event]) -> None:
        stale = None
        with self._lock:
            if ticker_stop is not None and ticker_stop.is_set():
                return
            if not self._is_playing or self._runs is None:
                return
            playback = self._duration(self._runs.original.duration)
            if playback <= 0:
                return
            progress = self._progress + dt / playback
            if progress >= 1.0 - _END_TOLERANCE:
                if self._loop:
                    wrapped = math.fmod(progress, 1.0)
                    self._progress = 0.0 if wrapped >= 1.0 - _END_TOLERANCE else wrapped
                else:
                    self._progress = 1.0
                    stale = self._pause_locked()
            else:
                self._progress = progress
        self._join_ticker(stale)

    def _pause_locked(self) -> Optional[threading.Thread]:
        self._is_playing = False
        return self._stop_ticker_locked()

    def _start_ticker_locked(self) -> None:
        stop = threading.Event()
        thread = threading.Thread(
            target=self._tick_loop,
            args=(stop,),
            name="run-player-tick",
            daemon=True,
        )
        self._ticker_stop = stop
        self._ticker = thread
        thread.start()

    def _stop_ticker_locked(self) -> Optional[threading.Thread]:
        thread = self._ticker
        if self._ticker_stop is not None:
            self._ticker_stop.set()
        self._ticker = None
        self._ticker_stop = None
        return thread

    def _join_ticker(self, thread: Optional[threading.Thread]) -> None:
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=1.0)

    def _tick_loop(self, stop: threading.Event) -> None:
        last = time.monotonic()
        while not stop.wait(self._tick_interval_s):
            now = time.monotonic()
            dt = min(now - last, self._max_tick_s)
            last = now
            self._advance(dt, stop)
