import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QStandardPaths

log = logging.getLogger(__name__)

DEFAULT_PERSONALIZE_URL = "https://savindiweerakoon-adaptive-ui-api.hf.space/personalize"


@dataclass
class AssessmentSettings:
    # focus monitor
    focus_interval_ms: int = 1000
    gaze_source: str = "cursor"   # "cursor" | "sim"

    # digit span
    digit_start_length: int = 3
    digit_max_length: int = 9
    digit_attempts_per_phase: int = 1
    digit_interval_ms: int = 1000

    # n-back
    nback_n: int = 2
    nback_length: int = 20
    nback_interval_ms: int = 1500

    personalize_url: str = DEFAULT_PERSONALIZE_URL


def _app_data_dir() -> Path:
    return Path(QStandardPaths.writableLocation(QStandardPaths.AppDataLocation))


class SettingsStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = path or (_app_data_dir() / "settings.json")

    def load(self) -> AssessmentSettings:
        if not self.path.exists():
            return AssessmentSettings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable settings file %s: %r", self.path, e)
            return AssessmentSettings()
        if not isinstance(data, dict):
            return AssessmentSettings()

        s = AssessmentSettings()
        for k, v in data.items():
            if hasattr(s, k):
                setattr(s, k, v)
        return s

    def save(self, settings: AssessmentSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
