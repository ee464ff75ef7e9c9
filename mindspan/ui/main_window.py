# mindspan/ui/main_window.py
import logging
import sys

from PySide6.QtWidgets import QApplication, QMainWindow, QStackedWidget, QWidget, QVBoxLayout
from PySide6.QtGui import QGuiApplication

from mindspan.core.storage import ResultStore
from mindspan.ui.assessment import AssessmentScreen
from mindspan.ui.prefs import get_saved_geometry, save_geometry
from mindspan.ui.settings import SettingsScreen
from mindspan.ui.splash import SplashDisclaimer
from mindspan.ui.style import APP_QSS
from mindspan.ui.summary import SummaryScreen
from mindspan.ui.tutorial import TutorialScreen

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()

        self.setWindowTitle("Mindspan")
        self.resize(1080, 720)

        self.store = ResultStore()

        outer = QWidget()
        layout = QVBoxLayout(outer)
        layout.setContentsMargins(12, 12, 12, 12)

        self.stack = QStackedWidget()
        layout.addWidget(self.stack)
        self.setCentralWidget(outer)

        # Screens
        self.splash = SplashDisclaimer(on_continue=self.go_assessment, on_settings=self.go_settings)
        self.settings = SettingsScreen(on_back=self.go_splash)
        self.summary = SummaryScreen(on_done=self.go_splash, on_personalize=self.go_tutorial, store=self.store)
        self.tutorial = TutorialScreen(on_back=self.go_back_to_summary, get_settings=self.settings.get_settings)
        self.assessment = None

        for w in (self.splash, self.settings, self.summary, self.tutorial):
            self.stack.addWidget(w)
        self.stack.setCurrentWidget(self.splash)

        self._place_safely()

    # Navigation
    def go_splash(self, *_):
        self._drop_assessment()
        self.stack.setCurrentWidget(self.splash)

    def go_settings(self):
        self.stack.setCurrentWidget(self.settings)

    def go_assessment(self):
        self._drop_assessment()

        self.assessment = AssessmentScreen(
            settings=self.settings.get_settings(),
            on_finish=self.go_summary,
            store=self.store,
        )
        self.stack.addWidget(self.assessment)
        self.stack.setCurrentWidget(self.assessment)
        logger.info("Assessment started (gaze source: %s)", self.settings.get_settings().gaze_source)

    def go_summary(self, result):
        logger.info("Assessment finished: %s", result.to_dict())
        self.summary.set_result(result)
        self.stack.setCurrentWidget(self.summary)

    def go_tutorial(self, result):
        self.tutorial.set_result(result)
        self.stack.setCurrentWidget(self.tutorial)

    def go_back_to_summary(self):
        self.stack.setCurrentWidget(self.summary)

    def _drop_assessment(self):
        if self.assessment is None:
            return
        self.assessment.teardown()
        self.stack.removeWidget(self.assessment)
        self.assessment.deleteLater()
        self.assessment = None

    # Window placement & shutdown
    def _place_safely(self):
        saved = get_saved_geometry()
        if saved is not None and self.restoreGeometry(saved):
            return
        screen = QGuiApplication.primaryScreen()
        if screen:
            g = screen.availableGeometry()
            self.move(g.x() + 80, g.y() + 80)

    def closeEvent(self, event):
        try:
            self._drop_assessment()
            self.tutorial.stop()
            save_geometry(self.saveGeometry())
        finally:
            super().closeEvent(event)


def launch_app():
    logging.basicConfig(
        level=logging.INFO,
        format="[Mindspan] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setStyleSheet(APP_QSS)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
