from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QStackedWidget
)
from PySide6.QtCore import Qt

from mindspan.engine.nback import NBackTest


def _answer_button(text: str, rgb: str) -> QPushButton:
    b = QPushButton(text)
    b.setCursor(Qt.PointingHandCursor)
    b.setMinimumWidth(140)
    b.setStyleSheet(f"""
        QPushButton {{
            background: rgba({rgb},0.16);
            border: 1px solid rgba({rgb},0.30);
            border-radius: 14px;
            padding: 12px 16px;
            font-weight: 800;
        }}
        QPushButton:hover {{ background: rgba({rgb},0.24); }}
    """)
    return b


class NBackView(QWidget):
    def __init__(self, test: NBackTest):
        super().__init__()
        self.test = test
        self.test.on_state = self._on_state
        self.test.on_stimulus = self._on_stimulus

        self.pages = QStackedWidget()
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self.pages)

        # --- Instructions
        self.intro = QWidget()
        il = QVBoxLayout(self.intro)
        il.setAlignment(Qt.AlignCenter)
        title = QLabel("N-Back Cognitive Load Test")
        title.setStyleSheet("font-size: 22px; font-weight: 800;")
        text = QLabel(
            f"You will see a sequence of letters. Press \"Match\" if the letter "
            f"matches the one {self.test.n} steps back."
        )
        text.setObjectName("muted")
        text.setWordWrap(True)
        start = QPushButton(f"Start {self.test.n}-Back Test")
        start.setCursor(Qt.PointingHandCursor)
        start.clicked.connect(self.test.start)
        il.addWidget(title)
        il.addWidget(text)
        il.addWidget(start, alignment=Qt.AlignLeft)

        # --- Test
        self.test_page = QWidget()
        tl = QVBoxLayout(self.test_page)
        tl.setAlignment(Qt.AlignCenter)
        self.letter = QLabel("")
        self.letter.setObjectName("stimulus")
        self.letter.setAlignment(Qt.AlignCenter)

        btns = QHBoxLayout()
        match = _answer_button("Match", "34,197,94")
        no_match = _answer_button("No Match", "239,68,68")
        match.clicked.connect(lambda: self.test.respond(True))
        no_match.clicked.connect(lambda: self.test.respond(False))
        btns.addStretch(1)
        btns.addWidget(match)
        btns.addWidget(no_match)
        btns.addStretch(1)

        self.position = QLabel("")
        self.position.setObjectName("muted")
        self.position.setAlignment(Qt.AlignCenter)

        tl.addWidget(self.letter)
        tl.addLayout(btns)
        tl.addWidget(self.position)

        # --- Results
        self.results = QWidget()
        rl = QVBoxLayout(self.results)
        rl.setAlignment(Qt.AlignCenter)
        r_title = QLabel("Test Complete")
        r_title.setStyleSheet("font-size: 22px; font-weight: 800;")
        self.matches_lbl = QLabel("")
        self.accuracy_lbl = QLabel("")
        self.accuracy_lbl.setStyleSheet("font-size: 18px; font-weight: 750;")
        restart = QPushButton("Restart Test")
        restart.setCursor(Qt.PointingHandCursor)
        restart.clicked.connect(self.test.start)
        for w in (r_title, self.matches_lbl, self.accuracy_lbl):
            rl.addWidget(w)
        rl.addWidget(restart, alignment=Qt.AlignLeft)

        for p in (self.intro, self.test_page, self.results):
            self.pages.addWidget(p)

        self._on_state(self.test.stage)

    def _on_state(self, stage: str):
        if stage == "test":
            self.pages.setCurrentWidget(self.test_page)
        elif stage == "results":
            self.matches_lbl.setText(f"Matches: {self.test.correct_count} / {self.test.sequence_length}")
            self.accuracy_lbl.setText(f"Accuracy: {self.test.accuracy}%")
            self.pages.setCurrentWidget(self.results)
        else:
            self.pages.setCurrentWidget(self.intro)

    def _on_stimulus(self, letter: str, index: int, total: int):
        self.letter.setText(letter)
        self.position.setText(f"{index + 1} of {total}")
