# mindspan/engine/nback.py
from __future__ import annotations

import logging
import random
from typing import Callable, List, Literal, Optional, Sequence

from mindspan.engine.records import ResponseRecord
from mindspan.engine.scheduler import Scheduler, TimerGroup
from mindspan.engine.scoring import percent
from mindspan.engine.sequence import LETTERS, generate
from mindspan.engine.task import AssessmentTask

logger = logging.getLogger(__name__)

Stage = Literal["instructions", "test", "results"]


def expected_matches(sequence: Sequence[str], n: int) -> List[bool]:
    return [i >= n and sequence[i] == sequence[i - n] for i in range(len(sequence))]


class NBackTest(AssessmentTask):
    """
    Letters are shown one at a time; for each one the user says whether it
    matches the letter `n` positions back. Every position has a deadline of
    `interval_ms`; an unanswered position counts as wrong.
    """

    label = "Cognitive Load"

    def __init__(
        self,
        scheduler: Scheduler,
        n: int = 2,
        sequence_length: int = 20,
        interval_ms: int = 1500,
        rng: Optional[random.Random] = None,
        on_complete: Optional[Callable[[int], None]] = None,
        on_stimulus: Optional[Callable[[str, int, int], None]] = None,
        on_state: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self.n = max(1, int(n))
        self.sequence_length = max(1, int(sequence_length))
        self.interval_ms = int(interval_ms)
        self.rng = rng

        self.on_complete = on_complete
        self.on_stimulus = on_stimulus
        self.on_state = on_state

        self._timers = TimerGroup(scheduler, "nback")

        self.stage: Stage = "instructions"
        self.sequence: List[str] = []
        self.expected: List[bool] = []
        self.records: List[ResponseRecord] = []
        self.index = 0
        self.accuracy: Optional[int] = None

    @property
    def current_letter(self) -> Optional[str]:
        if self.stage != "test" or self.index >= len(self.sequence):
            return None
        return self.sequence[self.index]

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.records if r.correct)

    # -----------------------
    # Flow
    # -----------------------

    def start(self) -> None:
        self._timers.cancel_all()

        self.sequence = generate(self.sequence_length, LETTERS, self.rng)
        self.expected = expected_matches(self.sequence, self.n)
        self.records = []
        self.index = 0
        self.accuracy = None

        self._emit_started()
        self._set_stage("test")
        self._present()

    def cancel(self) -> None:
        self._timers.cancel_all()
        self._set_stage("instructions")

    def _set_stage(self, stage: Stage) -> None:
        self.stage = stage
        logger.debug("N-back -> %s (position %d/%d)", stage, self.index, self.sequence_length)
        if self.on_state is not None:
            self.on_state(stage)

    def _present(self) -> None:
        if self.index >= self.sequence_length:
            self._finish()
            return

        if self.on_stimulus is not None:
            self.on_stimulus(self.sequence[self.index], self.index, self.sequence_length)

        position = self.index
        self._timers.later(self.interval_ms, lambda: self._deadline(position))

    # -----------------------
    # Responses
    # -----------------------

    def respond(self, match: bool) -> bool:
        """First answer for the current position wins; later ones are ignored."""
        if self.stage != "test" or len(self.records) != self.index:
            return False

        self._timers.cancel_all()
        expected = self.expected[self.index]
        self.records.append(ResponseRecord(expected=expected, observed=bool(match), correct=bool(match) == expected))
        self._advance()
        return True

    def _deadline(self, position: int) -> None:
        if self.stage != "test" or position != self.index or len(self.records) != self.index:
            return

        self._timers.cancel_all()
        self.records.append(ResponseRecord(expected=self.expected[position], observed=None, correct=False))
        self._advance()

    def _advance(self) -> None:
        self.index += 1
        self._present()

    def _finish(self) -> None:
        self._timers.cancel_all()
        self.accuracy = percent(self.correct_count, self.sequence_length)
        self._set_stage("results")

        if self.on_complete is not None:
            self.on_complete(self.accuracy)
        self._emit_result(self.accuracy)
