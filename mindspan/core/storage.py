import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QStandardPaths

from mindspan.engine.records import SessionResult

log = logging.getLogger(__name__)


def _app_data_dir() -> Path:
    base = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    p = Path(base)
    p.mkdir(parents=True, exist_ok=True)
    return p


def results_path() -> Path:
    return _app_data_dir() / "results.json"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ResultRecord:
    timestamp_utc: str
    digitSpanScore: int
    cognitiveLoadScore: int
    averageFocusLevel: int
    version: int = 1


class ResultStore:
    """Completed session results, oldest first, in one JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or results_path()

    def load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, list) else []
        except (OSError, ValueError) as e:
            log.warning("Could not read results from %s: %r", self.path, e)
            return []

    def append(self, result: SessionResult) -> ResultRecord:
        rec = ResultRecord(timestamp_utc=_now_iso(), **result.to_dict())

        items = self.load()
        items.append(asdict(rec))

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(items, f, ensure_ascii=False, indent=2)
        tmp.replace(self.path)
        return rec
