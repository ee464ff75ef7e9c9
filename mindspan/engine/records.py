# mindspan/engine/records.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from mindspan.engine.scoring import clamp_score


@dataclass(frozen=True)
class ResponseRecord:
    expected: Any                 # bool (n-back) or the exact symbol sequence (digit span)
    observed: Optional[Any]       # None when the deadline elapsed unanswered
    correct: bool


@dataclass(frozen=True)
class SessionResult:
    digit_span_score: int
    cognitive_load_score: int
    average_focus_level: int

    def __post_init__(self):
        object.__setattr__(self, "digit_span_score", clamp_score(self.digit_span_score))
        object.__setattr__(self, "cognitive_load_score", clamp_score(self.cognitive_load_score))
        object.__setattr__(self, "average_focus_level", clamp_score(self.average_focus_level))

    def to_dict(self) -> Dict[str, int]:
        return {
            "digitSpanScore": self.digit_span_score,
            "cognitiveLoadScore": self.cognitive_load_score,
            "averageFocusLevel": self.average_focus_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionResult":
        return cls(
            digit_span_score=int(data.get("digitSpanScore", 0)),
            cognitive_load_score=int(data.get("cognitiveLoadScore", 0)),
            average_focus_level=int(data.get("averageFocusLevel", 0)),
        )
