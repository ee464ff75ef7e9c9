from collections import deque

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget
from PySide6.QtCore import Qt

import pyqtgraph as pg

from mindspan.ui.style import card_qss


def focus_color(value: int) -> str:
    if value >= 65:
        return "#22c55e"   # green
    if value >= 40:
        return "#facc15"   # yellow
    return "#ef4444"       # red


class FocusPanel(QWidget):
    """
    Sidebar fed by FocusMonitor.on_tick:
    current bucket focus, running average, elapsed time, trend plot.
    """
    def __init__(self, max_points: int = 60):
        super().__init__()
        self.max_points = int(max_points)
        self.focus_hist = deque(maxlen=self.max_points)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(12)

        self.status = QLabel("Focus monitor idle")
        self.status.setObjectName("muted")

        self.elapsed = QLabel("Elapsed: 0s")
        self.elapsed.setObjectName("muted")

        # --- Metric cards
        row = QHBoxLayout()
        row.setSpacing(10)
        self.current_value = QLabel("0%")
        self.average_value = QLabel("0%")
        row.addWidget(self._metric_card("Current Focus", self.current_value))
        row.addWidget(self._metric_card("Average Focus", self.average_value))

        # --- Trend
        pg.setConfigOptions(antialias=True)
        self.plot = pg.PlotWidget()
        self.plot.setMinimumHeight(160)
        self.plot.setBackground(None)
        self.plot.showGrid(x=True, y=True, alpha=0.2)
        self.plot.setTitle("Focus per interval")
        self.plot.setYRange(0, 100)
        self.curve = self.plot.plot([], [])

        root.addWidget(self.status)
        root.addWidget(self.elapsed)
        root.addLayout(row)
        root.addWidget(self.plot, 1)

    def _metric_card(self, title: str, value: QLabel) -> QFrame:
        f = QFrame()
        f.setStyleSheet(card_qss(12))
        lay = QVBoxLayout(f)
        lay.setContentsMargins(12, 10, 12, 10)
        lay.setSpacing(4)

        t = QLabel(title)
        t.setObjectName("muted")
        t.setAlignment(Qt.AlignCenter)
        value.setAlignment(Qt.AlignCenter)
        value.setStyleSheet("font-size: 22px; font-weight: 800;")

        lay.addWidget(t)
        lay.addWidget(value)
        return f

    def reset(self):
        self.focus_hist.clear()
        self.curve.setData([], [])
        self.current_value.setText("0%")
        self.average_value.setText("0%")
        self.elapsed.setText("Elapsed: 0s")

    def set_running(self, running: bool, available: bool = True, detail: str = ""):
        if not available:
            self.status.setText(f"{detail or 'No gaze device'}. Focus will be reported as 0%.")
        elif running and detail:
            self.status.setText(f"Monitoring ({detail})")
        elif running:
            self.status.setText("Monitoring…")
        else:
            self.status.setText("Focus monitor idle")

    def update_tick(self, focus_ratio: int, running_average: int, elapsed_seconds: int):
        self.current_value.setText(f"{focus_ratio}%")
        self.current_value.setStyleSheet(
            f"font-size: 22px; font-weight: 800; color: {focus_color(focus_ratio)};"
        )
        self.average_value.setText(f"{running_average}%")
        self.elapsed.setText(f"Elapsed: {elapsed_seconds}s")

        self.focus_hist.append(focus_ratio)
        self.curve.setData(list(range(len(self.focus_hist))), list(self.focus_hist))
