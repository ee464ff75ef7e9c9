# mindspan/engine/stepper.py
from __future__ import annotations

from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from mindspan.engine.scoring import round_half_up

T = TypeVar("T")


class Stepper(Generic[T]):
    """Ordered steps with a cursor. Advancing past the last step finishes instead."""

    def __init__(
        self,
        steps: Sequence[T],
        labels: Optional[Sequence[str]] = None,
        on_finish: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[int], None]] = None,
    ):
        if not steps:
            raise ValueError("Stepper needs at least one step")
        self.steps: List[T] = list(steps)
        self.labels: List[str] = list(labels or [])
        self.on_finish = on_finish
        self.on_change = on_change
        self.current = 0

    @property
    def total(self) -> int:
        return len(self.steps)

    @property
    def is_last(self) -> bool:
        return self.current == self.total - 1

    @property
    def current_step(self) -> T:
        return self.steps[self.current]

    @property
    def label(self) -> str:
        if self.current < len(self.labels) and self.labels[self.current]:
            return self.labels[self.current]
        return f"Step {self.current + 1}"

    @property
    def percent(self) -> int:
        return round_half_up((self.current + 1) / self.total * 100)

    def advance(self) -> None:
        if not self.is_last:
            self.current += 1
            if self.on_change is not None:
                self.on_change(self.current)
            return
        if self.on_finish is not None:
            self.on_finish()

    def previous(self) -> None:
        if self.current == 0:
            return
        self.current -= 1
        if self.on_change is not None:
            self.on_change(self.current)

    def reset(self) -> None:
        self.current = 0
        if self.on_change is not None:
            self.on_change(self.current)
