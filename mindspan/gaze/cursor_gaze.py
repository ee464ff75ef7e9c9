# mindspan/gaze/cursor_gaze.py
from __future__ import annotations

from typing import Any, Dict, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCursor, QGuiApplication
from PySide6.QtWidgets import QWidget

from mindspan.gaze.gaze_api import GazeAPI, GazeListener, GazeNotReady


class CursorGazeStream(GazeAPI):
    """
    Mouse pointer as a gaze proxy.
    Coordinates are reported relative to `widget` when given, else global.
    """

    def __init__(self, widget: Optional[QWidget] = None, rate_hz: float = 30.0):
        self.widget = widget
        self.rate_hz = float(rate_hz)
        self._listener: Optional[GazeListener] = None
        self._timer: Optional[QTimer] = None

    def begin(self) -> None:
        if self._timer is not None:
            return
        if QGuiApplication.instance() is None:
            raise GazeNotReady("Cursor gaze needs a running Qt application")

        self._timer = QTimer(self.widget)
        self._timer.setInterval(int(round(1000.0 / max(1.0, self.rate_hz))))
        self._timer.timeout.connect(self._poll)
        self._timer.start()

    def end(self) -> None:
        try:
            if self._timer is not None and self._timer.isActive():
                self._timer.stop()
        finally:
            self._timer = None
            self._listener = None

    def set_gaze_listener(self, listener: GazeListener) -> None:
        self._listener = listener

    def clear_gaze_listener(self) -> None:
        self._listener = None

    def status(self) -> Dict[str, Any]:
        if self._timer is None:
            return {"level": "stopped", "message": "Cursor tracking stopped", "ready": False}
        return {"level": "ready", "message": "Tracking mouse pointer", "ready": True}

    def _poll(self) -> None:
        if self._listener is None:
            return
        p = QCursor.pos()
        if self.widget is not None:
            p = self.widget.mapFromGlobal(p)
        self._listener(float(p.x()), float(p.y()))
