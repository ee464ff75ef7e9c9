import heapq
import itertools
import random

import pytest

from mindspan.engine.scheduler import Scheduler, TimerHandle
from mindspan.gaze.gaze_api import GazeAPI, GazeNotReady


class _ManualHandle(TimerHandle):
    def __init__(self, interval_ms, fn, repeat):
        self.interval_ms = interval_ms
        self.fn = fn
        self.repeat = repeat
        self.cancelled = False
        self.fired = 0

    def cancel(self):
        self.cancelled = True

    @property
    def active(self):
        return not self.cancelled and (self.repeat or self.fired == 0)


class ManualScheduler(Scheduler):
    """Virtual clock: nothing fires until advance() moves time forward."""

    def __init__(self):
        self.now = 0
        self._queue = []
        self._seq = itertools.count()

    def _push(self, due, handle):
        heapq.heappush(self._queue, (due, next(self._seq), handle))

    def call_later(self, delay_ms, fn):
        h = _ManualHandle(delay_ms, fn, repeat=False)
        self._push(self.now + delay_ms, h)
        return h

    def call_every(self, interval_ms, fn):
        h = _ManualHandle(interval_ms, fn, repeat=True)
        self._push(self.now + interval_ms, h)
        return h

    def advance(self, ms):
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, h = heapq.heappop(self._queue)
            if h.cancelled:
                continue
            self.now = due
            h.fired += 1
            if h.repeat:
                self._push(due + max(1, h.interval_ms), h)
            h.fn()
        self.now = target

    def pending(self):
        return sum(1 for _, _, h in self._queue if not h.cancelled)


class FakeGazeStream(GazeAPI):
    def __init__(self, fail=False):
        self.fail = fail
        self.listener = None
        self.begun = 0
        self.ended = 0

    def begin(self):
        if self.fail:
            raise GazeNotReady("no camera")
        self.begun += 1

    def end(self):
        self.ended += 1

    def set_gaze_listener(self, listener):
        self.listener = listener

    def clear_gaze_listener(self):
        self.listener = None

    def status(self):
        return {"level": "ready", "message": "fake", "ready": self.listener is not None}

    def emit(self, x, y, times=1):
        for _ in range(times):
            if self.listener is not None:
                self.listener(x, y)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def gaze_stream():
    return FakeGazeStream()


@pytest.fixture
def rng():
    return random.Random(1234)
