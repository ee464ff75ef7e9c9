# mindspan/ui/settings.py

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QFrame, QHBoxLayout, QPushButton,
    QFormLayout, QSpinBox, QComboBox, QLineEdit
)
from PySide6.QtCore import Qt

from mindspan.core.settings_store import SettingsStore, AssessmentSettings, DEFAULT_PERSONALIZE_URL
from mindspan.ui.style import card_qss

GAZE_SOURCES = [("cursor", "Mouse pointer"), ("sim", "Simulated gaze")]


def _spin(lo: int, hi: int, step: int = 1) -> QSpinBox:
    s = QSpinBox()
    s.setRange(lo, hi)
    s.setSingleStep(step)
    return s


class SettingsScreen(QWidget):
    def __init__(self, on_back, store: SettingsStore = None):
        super().__init__()
        self.on_back = on_back
        self.store = store or SettingsStore()
        self.settings = self.store.load()

        root = QVBoxLayout(self)
        root.setContentsMargins(22, 20, 22, 20)
        root.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("Settings")
        title.setStyleSheet("font-size: 24px; font-weight: 800;")
        header.addWidget(title, 1)

        back = QPushButton("Back")
        back.setCursor(Qt.PointingHandCursor)
        back.clicked.connect(self.on_back)
        header.addWidget(back, 0, Qt.AlignRight)
        root.addLayout(header)

        subtitle = QLabel("Applied from the next assessment. A running session keeps its settings.")
        subtitle.setObjectName("muted")
        root.addWidget(subtitle)

        c = QFrame()
        c.setStyleSheet(card_qss())
        root.addWidget(c)

        wrap = QVBoxLayout(c)
        wrap.setContentsMargins(16, 14, 16, 14)

        form = QFormLayout()
        form.setHorizontalSpacing(18)
        form.setVerticalSpacing(12)
        wrap.addLayout(form)

        self.gaze_source = QComboBox()
        for key, text in GAZE_SOURCES:
            self.gaze_source.addItem(text, key)
        self.focus_interval_ms = _spin(250, 5000, 250)
        self.digit_start_length = _spin(2, 9)
        self.digit_max_length = _spin(2, 12)
        self.digit_attempts_per_phase = _spin(1, 5)
        self.digit_interval_ms = _spin(300, 3000, 100)
        self.nback_n = _spin(1, 4)
        self.nback_length = _spin(5, 60, 5)
        self.nback_interval_ms = _spin(500, 5000, 100)
        self.personalize_url = QLineEdit()
        self.personalize_url.setPlaceholderText(DEFAULT_PERSONALIZE_URL)

        form.addRow("Gaze source", self.gaze_source)
        form.addRow("Focus interval (ms)", self.focus_interval_ms)
        form.addRow("Digit span start length", self.digit_start_length)
        form.addRow("Digit span max length", self.digit_max_length)
        form.addRow("Attempts per phase", self.digit_attempts_per_phase)
        form.addRow("Digit display (ms)", self.digit_interval_ms)
        form.addRow("N-back level", self.nback_n)
        form.addRow("N-back letters", self.nback_length)
        form.addRow("N-back deadline (ms)", self.nback_interval_ms)
        form.addRow("Personalization URL", self.personalize_url)

        btns = QHBoxLayout()
        btns.addStretch(1)

        reset = QPushButton("Reset defaults")
        reset.setCursor(Qt.PointingHandCursor)
        reset.clicked.connect(self._reset)

        save = QPushButton("Save")
        save.setCursor(Qt.PointingHandCursor)
        save.clicked.connect(self._save)

        btns.addWidget(reset)
        btns.addWidget(save)
        wrap.addSpacing(10)
        wrap.addLayout(btns)

        self._load_into_ui(self.settings)

    def _load_into_ui(self, s: AssessmentSettings):
        idx = self.gaze_source.findData(s.gaze_source)
        self.gaze_source.setCurrentIndex(max(0, idx))
        self.focus_interval_ms.setValue(int(s.focus_interval_ms))
        self.digit_start_length.setValue(int(s.digit_start_length))
        self.digit_max_length.setValue(int(s.digit_max_length))
        self.digit_attempts_per_phase.setValue(int(s.digit_attempts_per_phase))
        self.digit_interval_ms.setValue(int(s.digit_interval_ms))
        self.nback_n.setValue(int(s.nback_n))
        self.nback_length.setValue(int(s.nback_length))
        self.nback_interval_ms.setValue(int(s.nback_interval_ms))
        self.personalize_url.setText(s.personalize_url)

    def _read_from_ui(self) -> AssessmentSettings:
        return AssessmentSettings(
            gaze_source=str(self.gaze_source.currentData()),
            focus_interval_ms=int(self.focus_interval_ms.value()),
            digit_start_length=int(self.digit_start_length.value()),
            digit_max_length=int(self.digit_max_length.value()),
            digit_attempts_per_phase=int(self.digit_attempts_per_phase.value()),
            digit_interval_ms=int(self.digit_interval_ms.value()),
            nback_n=int(self.nback_n.value()),
            nback_length=int(self.nback_length.value()),
            nback_interval_ms=int(self.nback_interval_ms.value()),
            personalize_url=self.personalize_url.text().strip() or DEFAULT_PERSONALIZE_URL,
        )

    def get_settings(self) -> AssessmentSettings:
        return self.settings

    def _save(self):
        self.settings = self._read_from_ui()
        self.store.save(self.settings)
        self.on_back()

    def _reset(self):
        self.settings = AssessmentSettings()
        self._load_into_ui(self.settings)
        self.store.save(self.settings)
