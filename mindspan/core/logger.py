import csv
import logging
from datetime import datetime
from pathlib import Path

log = logging.getLogger(__name__)


class SessionLogger:
    """One CSV row per focus bucket."""

    def __init__(self, out_dir: str = "logs"):
        Path(out_dir).mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.path = Path(out_dir) / f"focus_{ts}.csv"

        self._file = self.path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        self._writer.writerow(["timestamp", "focus_ratio", "running_average", "hits", "total"])

    def log(self, focus_ratio: int, running_average: int, hits: int, total: int):
        if self._file.closed:
            return
        ts = datetime.now().isoformat(timespec="milliseconds")
        self._writer.writerow([ts, int(focus_ratio), int(running_average), int(hits), int(total)])
        self._file.flush()

    def close(self):
        try:
            self._file.close()
        except OSError as e:
            log.warning("Could not close session log %s: %r", self.path, e)
