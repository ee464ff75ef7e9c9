# mindspan/engine/task.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List

ResultCallback = Callable[[int], None]


class AssessmentTask(ABC):
    """What the stepper needs from a test: start it, stop it, hear its score."""

    label: str = ""

    def __init__(self):
        self._result_listeners: List[ResultCallback] = []
        self._start_listeners: List[Callable[[], None]] = []

    def connect_result(self, callback: ResultCallback) -> None:
        self._result_listeners.append(callback)

    def connect_started(self, callback: Callable[[], None]) -> None:
        self._start_listeners.append(callback)

    def _emit_result(self, score: int) -> None:
        for cb in list(self._result_listeners):
            cb(int(score))

    def _emit_started(self) -> None:
        for cb in list(self._start_listeners):
            cb()

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError
