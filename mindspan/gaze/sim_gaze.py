# mindspan/gaze/sim_gaze.py
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from mindspan.engine.scheduler import Scheduler, TimerHandle
from mindspan.gaze.gaze_api import GazeAPI, GazeListener


class SimGazeStream(GazeAPI):
    """
    Simulated gaze for running without a camera.
    Samples cluster around the screen centre; a slowly drifting
    attention level decides how many land off-target.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        viewport: Callable[[], Tuple[int, int]],
        rate_hz: float = 30.0,
        on_target: float = 0.8,
        seed: Optional[int] = None,
    ):
        self.scheduler = scheduler
        self.viewport = viewport
        self.rate_hz = float(rate_hz)
        self.on_target = float(on_target)
        self._rng = np.random.default_rng(seed)

        self._listener: Optional[GazeListener] = None
        self._timer: Optional[TimerHandle] = None
        self._attention = self.on_target

    def begin(self) -> None:
        if self._timer is not None:
            return
        self._attention = self.on_target
        period_ms = int(round(1000.0 / max(1.0, self.rate_hz)))
        self._timer = self.scheduler.call_every(period_ms, self._emit)

    def end(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._listener = None

    def set_gaze_listener(self, listener: GazeListener) -> None:
        self._listener = listener

    def clear_gaze_listener(self) -> None:
        self._listener = None

    def status(self) -> Dict[str, Any]:
        if self._timer is None:
            return {"level": "stopped", "message": "Simulated gaze stopped", "ready": False}
        return {"level": "ready", "message": "Simulated gaze", "ready": True}

    def sample(self) -> Tuple[float, float]:
        w, h = self.viewport()

        # simulate slow drift of attention
        self._attention = float(np.clip(self._attention + self._rng.uniform(-0.03, 0.03), 0.2, 0.98))

        if self._rng.random() < self._attention:
            x = self._rng.normal(w / 2.0, w * 0.08)
            y = self._rng.normal(h / 2.0, h * 0.08)
        else:
            x = self._rng.uniform(0.0, w)
            y = self._rng.uniform(0.0, h)
        return float(np.clip(x, 0.0, w)), float(np.clip(y, 0.0, h))

    def _emit(self) -> None:
        if self._listener is None:
            return
        x, y = self.sample()
        self._listener(x, y)
