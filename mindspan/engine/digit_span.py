# mindspan/engine/digit_span.py
from __future__ import annotations

import logging
import random
import re
from typing import Callable, Dict, List, Literal, Optional

from mindspan.engine.records import ResponseRecord
from mindspan.engine.scheduler import Scheduler, TimerGroup
from mindspan.engine.scoring import percent
from mindspan.engine.sequence import DIGITS, generate
from mindspan.engine.task import AssessmentTask

logger = logging.getLogger(__name__)

Stage = Literal["instructions", "show", "input", "done"]

PHASES = ("forward", "backward")
INITIAL_LENGTH = 3

_DIGITS_ONLY = re.compile(r"[0-9]*")


def expected_answer(sequence: List[str], phase: str) -> List[str]:
    if phase == "backward":
        return list(reversed(sequence))
    return list(sequence)


def is_correct(answer: str, expected: List[str]) -> bool:
    return list(answer) == list(expected)


class DigitSpanTest(AssessmentTask):
    """
    Forward then backward digit span.

    Each phase starts at `start_length`. Digits are shown one per
    `symbol_interval_ms`, then one typed answer is taken. A correct answer
    lengthens the next sequence of the same phase (up to `max_length`);
    after `attempts_per_phase` answers the test moves to the next phase.
    The score is the share of correct answers over both phases.
    """

    label = "Memory Span"

    def __init__(
        self,
        scheduler: Scheduler,
        start_length: int = INITIAL_LENGTH,
        max_length: int = 9,
        attempts_per_phase: int = 1,
        symbol_interval_ms: int = 1000,
        rng: Optional[random.Random] = None,
        on_start: Optional[Callable[[], None]] = None,
        on_score: Optional[Callable[[int], None]] = None,
        on_stop: Optional[Callable[[], None]] = None,
        on_symbol: Optional[Callable[[str, int], None]] = None,
        on_state: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self.start_length = max(1, int(start_length))
        self.max_length = max(self.start_length, int(max_length))
        self.attempts_per_phase = max(1, int(attempts_per_phase))
        self.symbol_interval_ms = int(symbol_interval_ms)
        self.rng = rng

        self.on_start = on_start
        self.on_score = on_score
        self.on_stop = on_stop
        self.on_symbol = on_symbol
        self.on_state = on_state

        self._timers = TimerGroup(scheduler, "digit_span")

        self.stage: Stage = "instructions"
        self.phase_index = 0
        self.length = self.start_length
        self.sequence: List[str] = []
        self.current_symbol: Optional[str] = None
        self.input_text = ""
        self.attempts = 0
        self.correct_count = 0
        self.records: List[ResponseRecord] = []
        self.spans: Dict[str, int] = {p: 0 for p in PHASES}
        self.score: Optional[int] = None

        self._phase_attempts = 0
        self._show_index = 0

    @property
    def phase(self) -> str:
        return PHASES[self.phase_index]

    # -----------------------
    # Flow
    # -----------------------

    def start(self) -> None:
        self._timers.cancel_all()

        self.phase_index = 0
        self.length = self.start_length
        self.input_text = ""
        self.attempts = 0
        self.correct_count = 0
        self.records = []
        self.spans = {p: 0 for p in PHASES}
        self.score = None
        self._phase_attempts = 0

        if self.on_start is not None:
            self.on_start()
        self._emit_started()

        self._begin_show()

    def cancel(self) -> None:
        self._timers.cancel_all()
        self.current_symbol = None
        self._set_stage("instructions")

    def _set_stage(self, stage: Stage) -> None:
        self.stage = stage
        logger.debug("Digit span -> %s (%s, length=%d)", stage, self.phase, self.length)
        if self.on_state is not None:
            self.on_state(stage)

    def _begin_show(self) -> None:
        self._timers.cancel_all()
        self.sequence = generate(self.length, DIGITS, self.rng)
        self._show_index = 0
        self.current_symbol = None
        self.input_text = ""
        self._set_stage("show")
        self._timers.every(self.symbol_interval_ms, self._show_tick)

    def _show_tick(self) -> None:
        if self._show_index < len(self.sequence):
            self.current_symbol = self.sequence[self._show_index]
            if self.on_symbol is not None:
                self.on_symbol(self.current_symbol, self._show_index)
            self._show_index += 1
            return

        self._timers.cancel_all()
        self.current_symbol = None
        self._set_stage("input")

    # -----------------------
    # Input
    # -----------------------

    def set_input(self, text: str) -> bool:
        """Keystroke filter: only digit strings replace the buffer."""
        if self.stage != "input":
            return False
        if not _DIGITS_ONLY.fullmatch(text or ""):
            return False
        self.input_text = text or ""
        return True

    def submit(self, text: Optional[str] = None) -> bool:
        if self.stage != "input":
            return False

        answer = self.input_text if text is None else str(text)
        expected = expected_answer(self.sequence, self.phase)
        correct = is_correct(answer, expected)

        self.records.append(ResponseRecord(expected=tuple(expected), observed=answer, correct=correct))
        self.attempts += 1
        self._phase_attempts += 1

        if correct:
            self.correct_count += 1
            self.spans[self.phase] = max(self.spans[self.phase], self.length)
        else:
            self.spans[self.phase] = max(self.spans[self.phase], self.length - 1)

        if self._phase_attempts < self.attempts_per_phase:
            if correct:
                self.length = min(self.length + 1, self.max_length)
            self._begin_show()
            return True

        if self.phase_index + 1 < len(PHASES):
            self.phase_index += 1
            self._phase_attempts = 0
            self.length = self.start_length
            self._begin_show()
            return True

        self._finish()
        return True

    def _finish(self) -> None:
        self._timers.cancel_all()
        self.score = percent(self.correct_count, self.attempts)
        self._set_stage("done")

        if self.on_score is not None:
            self.on_score(self.score)
        self._emit_result(self.score)
        if self.on_stop is not None:
            self.on_stop()
