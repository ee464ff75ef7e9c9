from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
from PySide6.QtCore import Qt


class SplashDisclaimer(QWidget):
    def __init__(self, on_continue, on_settings):
        super().__init__()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setSpacing(20)
        layout.setAlignment(Qt.AlignCenter)

        title = QLabel("Mindspan")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 32px; font-weight: 700;")

        text = QLabel(
            "Two short tests (memory span and a 2-back task) while your focus on the "
            "centre of the window is tracked. Mindspan is not a diagnostic tool."
        )
        text.setAlignment(Qt.AlignCenter)
        text.setWordWrap(True)
        text.setObjectName("muted")

        self.continue_btn = QPushButton("Begin assessment")
        self.continue_btn.setFixedWidth(220)
        self.continue_btn.setCursor(Qt.PointingHandCursor)
        self.continue_btn.clicked.connect(on_continue)

        self.settings_btn = QPushButton("Settings")
        self.settings_btn.setFixedWidth(220)
        self.settings_btn.setCursor(Qt.PointingHandCursor)
        self.settings_btn.clicked.connect(on_settings)

        btns = QHBoxLayout()
        btns.addStretch(1)
        btns.addWidget(self.continue_btn)
        btns.addWidget(self.settings_btn)
        btns.addStretch(1)

        layout.addWidget(title)
        layout.addWidget(text)
        layout.addSpacing(10)
        layout.addLayout(btns)
