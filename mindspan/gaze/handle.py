# mindspan/gaze/handle.py
from __future__ import annotations

import logging
from typing import Optional

from mindspan.gaze.gaze_api import GazeAPI, GazeListener

logger = logging.getLogger(__name__)


class GazeHandle:
    """
    The one shared gaze device, passed explicitly to whoever needs it.

    - acquire() never raises: a failing device is logged and the handle
      stays unavailable (consumers then see no samples at all)
    - only one listener may be subscribed at a time
    - release() is safe to call on every exit path, any number of times
    """

    def __init__(self, stream: GazeAPI):
        self.stream = stream
        self._acquired = False
        self._listener: Optional[GazeListener] = None
        self.last_error: Optional[Exception] = None

    @property
    def available(self) -> bool:
        return self._acquired

    @property
    def subscribed(self) -> bool:
        return self._listener is not None

    def acquire(self) -> bool:
        if self._acquired:
            return True
        try:
            self.stream.begin()
        except Exception as e:
            self.last_error = e
            logger.warning("Gaze stream failed to initialize: %r", e)
            return False
        self.last_error = None
        self._acquired = True
        return True

    def describe(self) -> str:
        """One line for the UI: why the device is missing, or what the stream reports."""
        if self.last_error is not None:
            return f"Gaze device unavailable: {self.last_error}"
        if not self._acquired:
            return "Gaze device idle"
        status = self.stream.status()
        return str(status.get("message") or status.get("level", ""))

    def subscribe(self, listener: GazeListener) -> bool:
        if not self._acquired:
            return False
        if self._listener is not None:
            logger.warning("Gaze stream already has a subscriber; refusing a second one")
            return False
        self._listener = listener
        self.stream.set_gaze_listener(listener)
        return True

    def unsubscribe(self) -> None:
        if self._listener is None:
            return
        self._listener = None
        try:
            self.stream.clear_gaze_listener()
        except Exception as e:
            logger.warning("Failed to detach gaze listener: %r", e)

    def release(self) -> None:
        self.unsubscribe()
        if not self._acquired:
            return
        self._acquired = False
        try:
            self.stream.end()
        except Exception as e:
            logger.warning("Failed to end gaze stream: %r", e)

    def __enter__(self) -> "GazeHandle":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
