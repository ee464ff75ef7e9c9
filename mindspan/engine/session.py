# mindspan/engine/session.py
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional, Sequence

from mindspan.core.settings_store import AssessmentSettings
from mindspan.core.storage import ResultStore
from mindspan.engine.digit_span import DigitSpanTest
from mindspan.engine.focus_monitor import FocusMonitor, Viewport
from mindspan.engine.nback import NBackTest
from mindspan.engine.records import SessionResult
from mindspan.engine.scheduler import Scheduler
from mindspan.engine.stepper import Stepper
from mindspan.engine.task import AssessmentTask
from mindspan.gaze.handle import GazeHandle

logger = logging.getLogger(__name__)

DEFAULT_SCORE_FIELDS = ("digit_span_score", "cognitive_load_score")


class AssessmentSession:
    """
    Runs the tests in order while the focus monitor watches.

    Only sequencing and aggregation live here: each task reports one
    integer score, the focus monitor reports its average on stop, and the
    three are bundled into a SessionResult when the last step finishes.
    """

    def __init__(
        self,
        focus_monitor: FocusMonitor,
        tasks: Sequence[AssessmentTask],
        labels: Optional[Sequence[str]] = None,
        score_fields: Sequence[str] = DEFAULT_SCORE_FIELDS,
        on_finish: Optional[Callable[[SessionResult], None]] = None,
        on_change: Optional[Callable[[int], None]] = None,
        store: Optional[ResultStore] = None,
    ):
        if len(score_fields) != len(tasks):
            raise ValueError("one score field per task is required")

        self.focus_monitor = focus_monitor
        self.tasks = list(tasks)
        self.score_fields = list(score_fields)
        self.on_finish = on_finish
        self.store = store

        self.stepper: Stepper[AssessmentTask] = Stepper(
            self.tasks,
            labels=labels or [t.label for t in self.tasks],
            on_finish=self._finalize,
            on_change=on_change,
        )

        self.scores: Dict[int, int] = {}
        self.result: Optional[SessionResult] = None
        self._finished = False

        for i, task in enumerate(self.tasks):
            task.connect_result(lambda score, i=i: self._record(i, score))
            task.connect_started(self._on_task_started)

    # -----------------------
    # Navigation
    # -----------------------

    def start_current(self) -> None:
        self.stepper.current_step.start()

    def advance(self) -> None:
        self.stepper.current_step.cancel()
        self.stepper.advance()

    def previous(self) -> None:
        if self.stepper.current == 0:
            return
        self.stepper.current_step.cancel()
        self.stepper.previous()

    def reset(self) -> None:
        """Start over; the last finished result stays readable until replaced."""
        for t in self.tasks:
            t.cancel()
        self.focus_monitor.reset()
        self.scores = {}
        self._finished = False
        self.stepper.reset()

    def close(self) -> None:
        for t in self.tasks:
            t.cancel()
        self.focus_monitor.close()

    # -----------------------
    # Aggregation
    # -----------------------

    def _on_task_started(self) -> None:
        if self._finished:
            return
        self.focus_monitor.start()

    def _record(self, index: int, score: int) -> None:
        self.scores[index] = int(score)
        logger.debug("Step %d reported score %d", index, score)

    def _finalize(self) -> None:
        if self._finished:
            return
        self._finished = True

        average = self.focus_monitor.stop()
        fields = {f: self.scores.get(i, 0) for i, f in enumerate(self.score_fields)}
        self.result = SessionResult(average_focus_level=average, **fields)
        logger.info("Session finished: %s", self.result.to_dict())

        if self.store is not None:
            try:
                self.store.append(self.result)
            except OSError as e:
                logger.warning("Could not persist session result: %r", e)

        if self.on_finish is not None:
            self.on_finish(self.result)


def build_default_session(
    scheduler: Scheduler,
    gaze: GazeHandle,
    viewport: Viewport,
    settings: Optional[AssessmentSettings] = None,
    on_finish: Optional[Callable[[SessionResult], None]] = None,
    on_tick: Optional[Callable[[int, int, int], None]] = None,
    store: Optional[ResultStore] = None,
    session_logger=None,
    rng: Optional[random.Random] = None,
) -> AssessmentSession:
    s = settings or AssessmentSettings()

    monitor = FocusMonitor(
        gaze,
        scheduler,
        viewport,
        interval_ms=s.focus_interval_ms,
        on_tick=on_tick,
        session_logger=session_logger,
    )
    digit_span = DigitSpanTest(
        scheduler,
        start_length=s.digit_start_length,
        max_length=s.digit_max_length,
        attempts_per_phase=s.digit_attempts_per_phase,
        symbol_interval_ms=s.digit_interval_ms,
        rng=rng,
    )
    nback = NBackTest(
        scheduler,
        n=s.nback_n,
        sequence_length=s.nback_length,
        interval_ms=s.nback_interval_ms,
        rng=rng,
    )
    return AssessmentSession(
        monitor,
        [digit_span, nback],
        labels=[digit_span.label, nback.label],
        on_finish=on_finish,
        store=store,
    )
