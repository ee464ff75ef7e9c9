import csv
import json

import pytest
import requests

from mindspan.core.logger import SessionLogger
from mindspan.core.personalize import PersonalizeClient, PersonalizeError
from mindspan.core.settings_store import AssessmentSettings, SettingsStore
from mindspan.core.storage import ResultStore
from mindspan.engine.records import SessionResult

RESULT = SessionResult(digit_span_score=100, cognitive_load_score=75, average_focus_level=80)


# -----------------------
# Result store
# -----------------------

def test_result_store_appends_records(tmp_path):
    store = ResultStore(tmp_path / "results.json")
    assert store.load() == []

    store.append(SessionResult(50, 40, 30))
    store.append(RESULT)

    items = store.load()
    assert len(items) == 2
    assert items[1]["cognitiveLoadScore"] == 75
    assert "timestamp_utc" in items[1]
    assert SessionResult.from_dict(items[1]) == RESULT


def test_result_store_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "results.json"
    path.write_text("{not json", encoding="utf-8")
    store = ResultStore(path)
    assert store.load() == []
    store.append(RESULT)
    assert [SessionResult.from_dict(i) for i in store.load()] == [RESULT]


def test_session_result_is_clamped_and_serializable():
    r = SessionResult(digit_span_score=140, cognitive_load_score=-3, average_focus_level=55)
    assert r.to_dict() == {"digitSpanScore": 100, "cognitiveLoadScore": 0, "averageFocusLevel": 55}
    assert json.loads(json.dumps(r.to_dict())) == r.to_dict()
    assert SessionResult.from_dict(r.to_dict()) == r


# -----------------------
# Settings
# -----------------------

def test_settings_roundtrip_and_unknown_keys(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    assert store.load() == AssessmentSettings()

    store.save(AssessmentSettings(nback_n=3, gaze_source="sim"))
    assert store.load().nback_n == 3

    data = json.loads(store.path.read_text(encoding="utf-8"))
    data["legacy_option"] = True
    store.path.write_text(json.dumps(data), encoding="utf-8")
    loaded = store.load()
    assert loaded.gaze_source == "sim"
    assert not hasattr(loaded, "legacy_option")


def test_corrupt_settings_fall_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2", encoding="utf-8")
    assert SettingsStore(path).load() == AssessmentSettings()


# -----------------------
# Session logger
# -----------------------

def test_session_logger_writes_one_row_per_bucket(tmp_path):
    log = SessionLogger(out_dir=str(tmp_path))
    log.log(80, 80, 8, 10)
    log.log(60, 70, 6, 10)
    log.close()
    log.log(100, 80, 1, 1)

    with log.path.open(encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["timestamp", "focus_ratio", "running_average", "hits", "total"]
    assert [r[1:] for r in rows[1:]] == [["80", "80", "8", "10"], ["60", "70", "6", "10"]]


# -----------------------
# Personalization client
# -----------------------

class _Resp:
    def __init__(self, status=200, payload=None, reason="OK"):
        self.status_code = status
        self.ok = 200 <= status < 300
        self.reason = reason
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _Session:
    def __init__(self, resp=None, exc=None):
        self.resp = resp
        self.exc = exc
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if self.exc is not None:
            raise self.exc
        return self.resp


def test_personalize_posts_scores_and_parses_response():
    http = _Session(_Resp(payload={"personalized_html": "<p>hi</p>", "spec": {"font": "large"}}))
    client = PersonalizeClient("http://api.test/personalize", timeout_s=5, session=http)

    out = client.personalize("<p>raw</p>", RESULT)

    assert out.html == "<p>hi</p>"
    assert out.spec == {"font": "large"}
    url, body, timeout = http.calls[0]
    assert url == "http://api.test/personalize"
    assert timeout == 5.0
    assert body == {
        "raw_html": "<p>raw</p>",
        "digitSpanScore": 100,
        "averageFocusLevel": 80,
        "cognitiveLoadScore": 75,
    }


def test_personalize_http_error():
    client = PersonalizeClient(session=_Session(_Resp(status=503, reason="Service Unavailable")))
    with pytest.raises(PersonalizeError) as exc:
        client.personalize("", RESULT)
    assert exc.value.status == 503
    assert "503" in str(exc.value)


def test_personalize_network_error():
    client = PersonalizeClient(session=_Session(exc=requests.ConnectionError("down")))
    with pytest.raises(PersonalizeError):
        client.personalize("", RESULT)


def test_personalize_missing_fields_default_to_empty():
    client = PersonalizeClient(session=_Session(_Resp(payload={})))
    out = client.personalize("", RESULT)
    assert out.html == ""
    assert out.spec is None


def test_personalize_client_uses_configured_url():
    http = _Session(_Resp(payload={"personalized_html": "<p>ok</p>"}))
    settings = AssessmentSettings(personalize_url="http://api.test/custom")
    client = PersonalizeClient.from_settings(settings, session=http)

    assert client.personalize("<p>raw</p>", RESULT).html == "<p>ok</p>"
    assert http.calls[0][0] == "http://api.test/custom"


def test_personalize_client_falls_back_to_default_url():
    client = PersonalizeClient.from_settings(AssessmentSettings(personalize_url=""), session=_Session())
    assert client.api_url == AssessmentSettings().personalize_url
