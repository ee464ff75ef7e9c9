# mindspan/core/personalize.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from mindspan.core.settings_store import DEFAULT_PERSONALIZE_URL, AssessmentSettings
from mindspan.engine.records import SessionResult

log = logging.getLogger(__name__)


class PersonalizeError(Exception):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass
class PersonalizedContent:
    html: str
    spec: Optional[Dict[str, Any]]


class PersonalizeClient:
    """Sends the three session scores plus a page to the adaptive UI service."""

    def __init__(self, api_url: str = DEFAULT_PERSONALIZE_URL, timeout_s: float = 30.0, session=None):
        self.api_url = api_url
        self.timeout_s = float(timeout_s)
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: AssessmentSettings, session=None) -> "PersonalizeClient":
        return cls(api_url=settings.personalize_url or DEFAULT_PERSONALIZE_URL, session=session)

    def build_payload(self, raw_html: str, result: SessionResult) -> Dict[str, Any]:
        scores = result.to_dict()
        return {
            "raw_html": raw_html,
            "digitSpanScore": scores["digitSpanScore"],
            "averageFocusLevel": scores["averageFocusLevel"],
            "cognitiveLoadScore": scores["cognitiveLoadScore"],
        }

    def personalize(self, raw_html: str, result: SessionResult) -> PersonalizedContent:
        try:
            resp = self.session.post(
                self.api_url,
                json=self.build_payload(raw_html, result),
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            log.error("Personalization request failed: %r", e)
            raise PersonalizeError(f"Failed to personalize content: {e}") from e

        if not resp.ok:
            raise PersonalizeError(f"API error: {resp.status_code} {resp.reason}", status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise PersonalizeError("API returned invalid JSON", status=resp.status_code) from e

        return PersonalizedContent(
            html=str(data.get("personalized_html") or ""),
            spec=data.get("spec") or None,
        )
