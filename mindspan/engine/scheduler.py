# mindspan/engine/scheduler.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError


class Scheduler(ABC):
    """
    Where every timed callback of the engine comes from.
    Engine components never touch QTimer directly, so tests can swap in
    a virtual clock.
    """

    @abstractmethod
    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    @abstractmethod
    def call_every(self, interval_ms: int, fn: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class _QtTimerHandle(TimerHandle):
    def __init__(self, timer: QTimer):
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        try:
            self._timer.stop()
            self._timer.deleteLater()
        finally:
            self._timer = None

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()


class QtScheduler(Scheduler):
    """QTimer backend; needs a running Qt event loop."""

    def __init__(self, parent: Optional[QObject] = None):
        self.parent = parent

    def _make(self, ms: int, fn: Callable[[], None], single_shot: bool) -> TimerHandle:
        timer = QTimer(self.parent)
        timer.setSingleShot(single_shot)
        timer.setInterval(max(0, int(ms)))
        timer.timeout.connect(fn)
        timer.start()
        return _QtTimerHandle(timer)

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> TimerHandle:
        return self._make(delay_ms, fn, single_shot=True)

    def call_every(self, interval_ms: int, fn: Callable[[], None]) -> TimerHandle:
        return self._make(interval_ms, fn, single_shot=False)


class TimerGroup:
    """
    All timers owned by one component state, cancelled as a unit.

    cancel_all() also bumps an epoch: a callback scheduled before the
    cancel that still gets delivered (already queued in the event loop)
    is dropped instead of touching the new state.
    """

    def __init__(self, scheduler: Scheduler, name: str = ""):
        self.scheduler = scheduler
        self.name = name
        self._handles: List[TimerHandle] = []
        self._epoch = 0

    @property
    def epoch(self) -> int:
        return self._epoch

    def _guard(self, fn: Callable[[], None]) -> Callable[[], None]:
        epoch = self._epoch

        def run():
            if epoch != self._epoch:
                logger.debug("Dropped stale timer callback (%s)", self.name)
                return
            fn()

        return run

    def later(self, delay_ms: int, fn: Callable[[], None]) -> TimerHandle:
        h = self.scheduler.call_later(delay_ms, self._guard(fn))
        self._handles.append(h)
        return h

    def every(self, interval_ms: int, fn: Callable[[], None]) -> TimerHandle:
        h = self.scheduler.call_every(interval_ms, self._guard(fn))
        self._handles.append(h)
        return h

    def cancel_all(self) -> None:
        self._epoch += 1
        handles, self._handles = self._handles, []
        for h in handles:
            h.cancel()

    def __len__(self) -> int:
        self._handles = [h for h in self._handles if h.active]
        return len(self._handles)
