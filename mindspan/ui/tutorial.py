# mindspan/ui/tutorial.py

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTextBrowser
from PySide6.QtCore import Qt, QThread, Signal

from mindspan.core.personalize import PersonalizeClient, PersonalizeError
from mindspan.core.settings_store import AssessmentSettings
from mindspan.engine.records import SessionResult

LESSON_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<title>Working memory basics</title>
<style>
  body{font:15px/1.6 system-ui,Segoe UI,Roboto,Arial;color:#0e1320;margin:0}
  .wrap{max-width:900px;margin:0 auto;padding:16px}
  h1{font-size:20px;margin:0 0 4px}
  .sub{color:#5b667a;font-size:13px;margin:0 0 16px}
  ol.outline li.active{font-weight:700}
  .tag{border:1px solid #e8f3ec;background:#effaf6;color:#0d6b53;border-radius:6px;padding:2px 8px;font-size:12px}
</style>
</head>
<body>
<div class="wrap">
  <h1>Working memory basics</h1>
  <p class="sub">Lesson page, text first</p>
  <h2>Outline</h2>
  <ol class="outline">
    <li class="active">What working memory holds (3m 10s)</li>
    <li>Chunking long sequences (6m 02s)</li>
    <li>Attention and distraction (7m 45s)</li>
    <li>Practice: recalling in reverse (5m 20s)</li>
  </ol>
  <h2>Lesson: What working memory holds</h2>
  <p>Working memory keeps a handful of items available while you use them. Most people hold
  about seven digits at once, fewer under load or when attention drifts.</p>
  <ul>
    <li>Group digits into chunks of three or four</li>
    <li>Say the sequence silently while it is shown</li>
    <li>Look away from distractions while recalling</li>
  </ul>
  <h2>Key terms</h2>
  <p><span class="tag">Span</span> <span class="tag">Chunking</span> <span class="tag">N-back</span></p>
</div>
</body>
</html>
"""


class _PersonalizeWorker(QThread):
    done = Signal(bool, str)  # ok, html or error message

    def __init__(self, client: PersonalizeClient, raw_html: str, result: SessionResult):
        super().__init__()
        self.client = client
        self.raw_html = raw_html
        self.result = result

    def run(self):
        try:
            content = self.client.personalize(self.raw_html, self.result)
        except PersonalizeError as e:
            self.done.emit(False, str(e))
            return
        self.done.emit(True, content.html)


class TutorialScreen(QWidget):
    """Lesson page that can be re-rendered by the personalization service for the last scores."""

    def __init__(self, on_back, get_settings):
        super().__init__()
        self.on_back = on_back
        self.get_settings = get_settings
        self.result = None
        self.personalized_html = ""
        self.showing_personalized = False
        self._worker = None

        root = QVBoxLayout(self)
        root.setContentsMargins(22, 20, 22, 20)
        root.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("Lesson")
        title.setStyleSheet("font-size: 24px; font-weight: 800;")
        header.addWidget(title, 1)

        self.personalize_btn = QPushButton("Personalize for my scores")
        self.toggle_btn = QPushButton("Show original")
        back = QPushButton("Back")
        for b in (self.personalize_btn, self.toggle_btn, back):
            b.setCursor(Qt.PointingHandCursor)
            header.addWidget(b, 0, Qt.AlignRight)
        self.personalize_btn.clicked.connect(self._personalize)
        self.toggle_btn.clicked.connect(self._toggle)
        back.clicked.connect(self._back)
        self.toggle_btn.hide()
        root.addLayout(header)

        self.status = QLabel("")
        self.status.setObjectName("muted")
        root.addWidget(self.status)

        self.view = QTextBrowser()
        self.view.setOpenExternalLinks(False)
        root.addWidget(self.view, 1)

    def set_result(self, result: SessionResult):
        self.result = result
        self.personalized_html = ""
        self.showing_personalized = False
        self.toggle_btn.hide()
        self.personalize_btn.setEnabled(True)
        self.status.setText(
            f"Scores: span {result.digit_span_score}%, load {result.cognitive_load_score}%, "
            f"focus {result.average_focus_level}%"
        )
        self.view.setHtml(LESSON_HTML)

    def _personalize(self):
        if self.result is None or self._worker is not None:
            return
        settings: AssessmentSettings = self.get_settings()
        client = PersonalizeClient.from_settings(settings)

        self.personalize_btn.setEnabled(False)
        self.status.setText("Personalizing…")
        self._worker = _PersonalizeWorker(client, LESSON_HTML, self.result)
        self._worker.done.connect(self._on_done)
        self._worker.start()

    def _on_done(self, ok: bool, payload: str):
        if self._worker is not None:
            self._worker.wait()
            self._worker = None
        self.personalize_btn.setEnabled(True)

        if not ok:
            self.status.setText(payload)
            return
        if not payload:
            self.status.setText("The service returned an empty page.")
            return

        self.personalized_html = payload
        self.showing_personalized = True
        self.view.setHtml(payload)
        self.toggle_btn.setText("Show original")
        self.toggle_btn.show()
        self.status.setText("Personalized for your scores")

    def _toggle(self):
        self.showing_personalized = not self.showing_personalized
        self.view.setHtml(self.personalized_html if self.showing_personalized else LESSON_HTML)
        self.toggle_btn.setText("Show original" if self.showing_personalized else "Show personalized")

    def _back(self):
        self.stop()
        self.on_back()

    def stop(self):
        if self._worker is not None and self._worker.isRunning():
            self._worker.quit()
            self._worker.wait(500)
