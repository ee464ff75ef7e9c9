from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Dict, Any


GazeListener = Callable[[float, float], None]


class GazeNotReady(Exception):
    pass


class GazeAPI(ABC):
    """Source of screen-space gaze samples."""

    @abstractmethod
    def begin(self) -> None:
        """Acquire the device. Raise GazeNotReady (or anything) on failure."""
        raise NotImplementedError

    @abstractmethod
    def end(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_gaze_listener(self, listener: GazeListener) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_gaze_listener(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def status(self) -> Dict[str, Any]:
        """
        Must return:
          {
            'level': 'stopped'|'starting'|'ready'|'error',
            'message': str,
            'ready': bool
          }
        """
        raise NotImplementedError
