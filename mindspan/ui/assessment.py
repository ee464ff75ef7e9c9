from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QProgressBar, QStackedWidget
)
from PySide6.QtCore import Qt

from mindspan.core.logger import SessionLogger
from mindspan.core.settings_store import AssessmentSettings
from mindspan.core.storage import ResultStore
from mindspan.engine.scheduler import QtScheduler
from mindspan.engine.session import build_default_session
from mindspan.gaze.cursor_gaze import CursorGazeStream
from mindspan.gaze.handle import GazeHandle
from mindspan.gaze.sim_gaze import SimGazeStream
from mindspan.ui.digit_span_view import DigitSpanView
from mindspan.ui.focus_panel import FocusPanel
from mindspan.ui.nback_view import NBackView
from mindspan.ui.style import card_qss


class AssessmentScreen(QWidget):
    """
    Stepper over the two tests with the focus monitor as a sidebar.
    One instance per session: it owns the gaze handle and releases it in
    teardown(), whatever way the screen is left.
    """
    def __init__(self, settings: AssessmentSettings, on_finish, store: ResultStore = None):
        super().__init__()
        self.settings = settings
        self.on_finish = on_finish

        self.scheduler = QtScheduler(self)
        self.gaze = GazeHandle(self._make_stream(settings.gaze_source))
        self.gaze.acquire()

        self.focus_panel = FocusPanel()
        self.session_logger = SessionLogger()

        self.session = build_default_session(
            self.scheduler,
            self.gaze,
            self._viewport,
            settings=settings,
            on_finish=self._finished,
            on_tick=self.focus_panel.update_tick,
            store=store,
            session_logger=self.session_logger,
        )
        self.session.stepper.on_change = self._on_step_changed
        for task in self.session.tasks:
            task.connect_started(self._on_task_started)

        # --- Header (step label + progress)
        self.step_label = QLabel("")
        self.step_label.setStyleSheet("font-weight: 750;")
        self.step_percent = QLabel("")
        head = QHBoxLayout()
        head.addWidget(self.step_label, 1)
        head.addWidget(self.step_percent, 0, Qt.AlignRight)

        self.progress = QProgressBar()
        self.progress.setRange(0, 100)
        self.progress.setTextVisible(False)

        # --- Step content
        self.views = QStackedWidget()
        digit_span, nback = self.session.tasks
        self.views.addWidget(DigitSpanView(digit_span))
        self.views.addWidget(NBackView(nback))

        content = QFrame()
        content.setStyleSheet(card_qss())
        cl = QVBoxLayout(content)
        cl.setContentsMargins(22, 18, 22, 18)
        cl.addWidget(self.views)

        # --- Navigation
        self.prev_btn = QPushButton("Previous")
        self.next_btn = QPushButton("Next")
        for b in (self.prev_btn, self.next_btn):
            b.setCursor(Qt.PointingHandCursor)
        self.prev_btn.clicked.connect(self.session.previous)
        self.next_btn.clicked.connect(self.session.advance)
        nav = QHBoxLayout()
        nav.addWidget(self.prev_btn)
        nav.addStretch(1)
        nav.addWidget(self.next_btn)

        main = QVBoxLayout()
        main.setSpacing(14)
        main.addLayout(head)
        main.addWidget(self.progress)
        main.addWidget(content, 1)
        main.addLayout(nav)

        root = QHBoxLayout(self)
        root.setContentsMargins(22, 20, 22, 20)
        root.setSpacing(18)
        root.addLayout(main, 2)
        root.addWidget(self.focus_panel, 1)

        self.focus_panel.set_running(False, available=self.gaze.available, detail=self.gaze.describe())
        self._on_step_changed(self.session.stepper.current)

    def _make_stream(self, source: str):
        if source == "sim":
            return SimGazeStream(self.scheduler, self._viewport)
        return CursorGazeStream(self)

    def _viewport(self):
        return float(self.width()), float(self.height())

    def _on_task_started(self):
        self.focus_panel.set_running(
            self.session.focus_monitor.running,
            available=self.gaze.available,
            detail=self.gaze.describe(),
        )

    def _on_step_changed(self, index: int):
        stepper = self.session.stepper
        self.views.setCurrentIndex(index)
        self.step_label.setText(stepper.label)
        self.step_percent.setText(f"{stepper.percent}%")
        self.progress.setValue(stepper.percent)
        self.prev_btn.setEnabled(index > 0)
        self.prev_btn.setText("Start Over" if stepper.is_last else "Previous")
        self.next_btn.setText("Finish" if stepper.is_last else "Next")

    def _finished(self, result):
        self.focus_panel.set_running(False)
        self.on_finish(result)

    def teardown(self):
        self.session.close()
        self.session_logger.close()

    def closeEvent(self, event):
        try:
            self.teardown()
        finally:
            super().closeEvent(event)
