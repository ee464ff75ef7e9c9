from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QLineEdit, QStackedWidget
)
from PySide6.QtCore import Qt

from mindspan.engine.digit_span import DigitSpanTest


class DigitSpanView(QWidget):
    """Renders a DigitSpanTest: instructions, digit display, answer form, results."""

    def __init__(self, test: DigitSpanTest):
        super().__init__()
        self.test = test
        self.test.on_state = self._on_state
        self.test.on_symbol = self._on_symbol

        self.pages = QStackedWidget()
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(self.pages)

        # --- Instructions
        self.intro = QWidget()
        il = QVBoxLayout(self.intro)
        il.setAlignment(Qt.AlignCenter)
        title = QLabel("Digit Span Task")
        title.setStyleSheet("font-size: 22px; font-weight: 800;")
        text = QLabel("Recall sequences of digits forward then backward. Press Start to begin.")
        text.setObjectName("muted")
        text.setWordWrap(True)
        start = QPushButton("Start Task")
        start.setCursor(Qt.PointingHandCursor)
        start.clicked.connect(self.test.start)
        il.addWidget(title)
        il.addWidget(text)
        il.addWidget(start, alignment=Qt.AlignLeft)

        # --- Show
        self.show_page = QWidget()
        sl = QVBoxLayout(self.show_page)
        sl.setAlignment(Qt.AlignCenter)
        self.show_caption = QLabel("")
        self.show_caption.setAlignment(Qt.AlignCenter)
        self.digit = QLabel("")
        self.digit.setObjectName("stimulus")
        self.digit.setAlignment(Qt.AlignCenter)
        sl.addWidget(self.show_caption)
        sl.addWidget(self.digit)

        # --- Input
        self.input_page = QWidget()
        fl = QVBoxLayout(self.input_page)
        fl.setAlignment(Qt.AlignCenter)
        self.input_caption = QLabel("")
        self.answer = QLineEdit()
        self.answer.textEdited.connect(self._on_edit)
        self.answer.returnPressed.connect(self._submit)
        submit = QPushButton("Submit")
        submit.setCursor(Qt.PointingHandCursor)
        submit.clicked.connect(self._submit)
        fl.addWidget(self.input_caption)
        fl.addWidget(self.answer)
        fl.addWidget(submit, alignment=Qt.AlignLeft)

        # --- Done
        self.done_page = QWidget()
        dl = QVBoxLayout(self.done_page)
        dl.setAlignment(Qt.AlignCenter)
        done_title = QLabel("Task Complete")
        done_title.setStyleSheet("font-size: 22px; font-weight: 800;")
        self.forward_lbl = QLabel("")
        self.backward_lbl = QLabel("")
        self.score_lbl = QLabel("")
        self.score_lbl.setStyleSheet("font-size: 18px; font-weight: 750;")
        restart = QPushButton("Restart Task")
        restart.setCursor(Qt.PointingHandCursor)
        restart.clicked.connect(self.test.start)
        for w in (done_title, self.forward_lbl, self.backward_lbl, self.score_lbl):
            dl.addWidget(w)
        dl.addWidget(restart, alignment=Qt.AlignLeft)

        for p in (self.intro, self.show_page, self.input_page, self.done_page):
            self.pages.addWidget(p)

        self._on_state(self.test.stage)

    def _on_state(self, stage: str):
        phase = "Forward" if self.test.phase == "forward" else "Backward"

        if stage == "show":
            self.show_caption.setText(f"{phase}: Memorize this digit")
            self.digit.setText("")
            self.pages.setCurrentWidget(self.show_page)
        elif stage == "input":
            suffix = " (backward)" if self.test.phase == "backward" else ""
            self.input_caption.setText(f"Enter the sequence{suffix}:")
            self.answer.clear()
            self.pages.setCurrentWidget(self.input_page)
            self.answer.setFocus()
        elif stage == "done":
            self.forward_lbl.setText(f"Forward span: {self.test.spans['forward']} digits")
            self.backward_lbl.setText(f"Backward span: {self.test.spans['backward']} digits")
            self.score_lbl.setText(f"Your score: {self.test.score}%")
            self.pages.setCurrentWidget(self.done_page)
        else:
            self.pages.setCurrentWidget(self.intro)

    def _on_symbol(self, symbol: str, index: int):
        self.digit.setText(symbol)

    def _on_edit(self, text: str):
        # rejected keystrokes snap back to the last accepted buffer
        if not self.test.set_input(text):
            self.answer.setText(self.test.input_text)

    def _submit(self):
        self.test.submit()
