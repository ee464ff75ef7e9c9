from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame
from PySide6.QtCore import Qt

from mindspan.core.storage import ResultStore
from mindspan.engine.records import SessionResult
from mindspan.ui.style import card_qss


def _parse_iso(ts: str) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(ts)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _relative_day_label(dt_utc: datetime) -> str:
    now = datetime.now(timezone.utc).date()
    d = dt_utc.date()
    if d == now:
        return "Today"
    if (now.toordinal() - d.toordinal()) == 1:
        return "Yesterday"
    return dt_utc.strftime("%b %d, %Y")


class SummaryScreen(QWidget):
    def __init__(self, on_done, on_personalize=None, store: Optional[ResultStore] = None):
        super().__init__()
        self.on_done = on_done
        self.on_personalize = on_personalize
        self.result: Optional[SessionResult] = None
        self.store = store or ResultStore()

        root = QVBoxLayout(self)
        root.setContentsMargins(40, 40, 40, 40)
        root.setSpacing(18)
        root.setAlignment(Qt.AlignCenter)

        title = QLabel("Test results")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 28px; font-weight: 800;")

        # ---- Current session card
        self.current_card = QFrame()
        self.current_card.setStyleSheet(card_qss(18))
        cur_layout = QVBoxLayout(self.current_card)
        cur_layout.setContentsMargins(22, 18, 22, 18)
        cur_layout.setSpacing(10)

        self.span_lbl = QLabel("Memory span: —")
        self.load_lbl = QLabel("Cognitive load accuracy: —")
        self.focus_lbl = QLabel("Average focus: —")
        for lbl in (self.span_lbl, self.load_lbl, self.focus_lbl):
            lbl.setStyleSheet("font-size: 16px; font-weight: 650;")
            cur_layout.addWidget(lbl)

        # ---- Previous session card (optional)
        self.prev_card = QFrame()
        self.prev_card.setStyleSheet(card_qss(18))
        prev_layout = QVBoxLayout(self.prev_card)
        prev_layout.setContentsMargins(22, 16, 22, 16)
        prev_layout.setSpacing(6)

        self.prev_title = QLabel("Previous session")
        self.prev_title.setObjectName("muted")
        self.prev_value = QLabel("—")
        self.prev_value.setStyleSheet("font-size: 16px; font-weight: 750;")
        self.prev_meta = QLabel("")
        self.prev_meta.setObjectName("muted")

        prev_layout.addWidget(self.prev_title)
        prev_layout.addWidget(self.prev_value)
        prev_layout.addWidget(self.prev_meta)
        self.prev_card.hide()

        self.done_btn = QPushButton("Done")
        self.done_btn.setFixedWidth(200)
        self.done_btn.setCursor(Qt.PointingHandCursor)
        self.done_btn.clicked.connect(self.on_done)

        self.personalize_btn = QPushButton("Personalize lesson")
        self.personalize_btn.setFixedWidth(200)
        self.personalize_btn.setCursor(Qt.PointingHandCursor)
        self.personalize_btn.clicked.connect(self._personalize)
        self.personalize_btn.setVisible(on_personalize is not None)

        btns = QHBoxLayout()
        btns.addStretch(1)
        btns.addWidget(self.personalize_btn)
        btns.addWidget(self.done_btn)
        btns.addStretch(1)

        root.addWidget(title)
        root.addWidget(self.current_card)
        root.addWidget(self.prev_card)
        root.addSpacing(8)
        root.addLayout(btns)

    def set_result(self, result: SessionResult):
        self.result = result
        self.span_lbl.setText(f"Memory span: {result.digit_span_score}%")
        self.load_lbl.setText(f"Cognitive load accuracy: {result.cognitive_load_score}%")
        self.focus_lbl.setText(f"Average focus: {result.average_focus_level}%")

        # ---- Previous session (from disk; the last entry is this one)
        items: List[Dict[str, Any]] = self.store.load()
        if len(items) < 2:
            self.prev_card.hide()
            return

        prev = items[-2]
        p = SessionResult.from_dict(prev)
        dt_utc = _parse_iso(str(prev.get("timestamp_utc", "")))
        when = _relative_day_label(dt_utc) if dt_utc else "Recent"

        self.prev_value.setText(
            f"Span {p.digit_span_score}%  •  Load {p.cognitive_load_score}%  •  Focus {p.average_focus_level}%"
        )
        self.prev_meta.setText(when)
        self.prev_card.show()

    def _personalize(self):
        if self.result is not None and self.on_personalize is not None:
            self.on_personalize(self.result)
