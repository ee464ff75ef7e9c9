# mindspan/engine/focus_monitor.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from mindspan.core.logger import SessionLogger
from mindspan.engine.scheduler import Scheduler, TimerGroup
from mindspan.engine.scoring import mean_percent, percent
from mindspan.gaze.handle import GazeHandle

logger = logging.getLogger(__name__)

Viewport = Callable[[], Tuple[float, float]]
TickCallback = Callable[[int, int, int], None]


@dataclass(frozen=True)
class BucketMetric:
    hits: int
    total: int
    focus_ratio: int


def focus_ratio(hits: int, total: int) -> int:
    return percent(hits, total)


@dataclass(frozen=True)
class FocusRegion:
    """Centred rectangle covering half the viewport on both axes (edges included)."""
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        cx, cy = self.width / 2.0, self.height / 2.0
        mx, my = self.width * 0.25, self.height * 0.25
        return abs(x - cx) <= mx and abs(y - cy) <= my


class FocusMonitor:
    """
    Turns a live gaze stream into one attention score.

    - every `interval_ms` the current bucket (hits/total) becomes a focus
      ratio, is appended to the history and folded into a running average
    - a separate 1 s clock counts elapsed seconds for display only
    - stop() returns the mean of all bucket ratios (0 if no bucket closed)
    """

    def __init__(
        self,
        gaze: GazeHandle,
        scheduler: Scheduler,
        viewport: Viewport,
        interval_ms: int = 1000,
        on_tick: Optional[TickCallback] = None,
        on_stop: Optional[Callable[[int], None]] = None,
        session_logger: Optional[SessionLogger] = None,
    ):
        self.gaze = gaze
        self.viewport = viewport
        self.interval_ms = int(interval_ms)
        self.on_tick = on_tick
        self.on_stop = on_stop
        self.session_logger = session_logger

        self._timers = TimerGroup(scheduler, "focus")
        self._running = False

        self._hits = 0
        self._total = 0
        self._history: List[BucketMetric] = []
        self._focus_level = 0
        self._average = 0
        self._elapsed = 0

    # -----------------------
    # State
    # -----------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def focus_level(self) -> int:
        return self._focus_level

    @property
    def average_focus_level(self) -> int:
        return self._average

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    @property
    def history(self) -> Tuple[BucketMetric, ...]:
        return tuple(self._history)

    # -----------------------
    # Lifecycle
    # -----------------------

    def start(self) -> None:
        if self._running:
            return
        # a previous stop() released the device; acquire() is a no-op when already held
        if not self.gaze.acquire():
            logger.info("Focus monitor not started: gaze stream unavailable")
            return
        if not self.gaze.subscribe(self._on_sample):
            return

        self._timers.cancel_all()
        self._clear()
        self._running = True

        self._timers.every(self.interval_ms, self._close_bucket)
        self._timers.every(1000, self._clock_tick)
        logger.debug("Focus monitor started (interval=%sms)", self.interval_ms)

    def stop(self) -> int:
        if not self._running:
            return self._average

        self._running = False
        self._timers.cancel_all()
        self.gaze.release()

        self._average = mean_percent(b.focus_ratio for b in self._history)
        logger.debug("Focus monitor stopped after %d buckets, average=%d", len(self._history), self._average)

        if self.on_stop is not None:
            self.on_stop(self._average)
        return self._average

    def reset(self) -> None:
        """Stop if running and forget every bucket, so stop() reports 0 until a new run closes one."""
        if self._running:
            self._running = False
            self._timers.cancel_all()
            self.gaze.release()
        self._clear()

    def close(self) -> None:
        self._running = False
        self._timers.cancel_all()
        self.gaze.release()
        if self.session_logger is not None:
            self.session_logger.close()

    def __enter__(self) -> "FocusMonitor":
        """Holds the gaze device for the block. Monitoring itself still begins with start()."""
        self.gaze.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -----------------------
    # Sampling
    # -----------------------

    def _clear(self) -> None:
        self._hits = 0
        self._total = 0
        self._history = []
        self._focus_level = 0
        self._average = 0
        self._elapsed = 0

    def _on_sample(self, x: float, y: float) -> None:
        if not self._running:
            return
        w, h = self.viewport()
        self._total += 1
        if FocusRegion(w, h).contains(x, y):
            self._hits += 1

    def _close_bucket(self) -> None:
        hits, total = self._hits, self._total
        self._hits = 0
        self._total = 0

        ratio = focus_ratio(hits, total)
        self._history.append(BucketMetric(hits=hits, total=total, focus_ratio=ratio))
        self._focus_level = ratio
        self._average = mean_percent(b.focus_ratio for b in self._history)

        if self.session_logger is not None:
            self.session_logger.log(ratio, self._average, hits, total)
        if self.on_tick is not None:
            self.on_tick(ratio, self._average, self._elapsed)

    def _clock_tick(self) -> None:
        self._elapsed += 1
