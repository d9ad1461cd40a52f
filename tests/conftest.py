import pytest
import requests

from tonelens.settings import Settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.text = str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = {
            "TONE_ANALYZER_URL": None,
            "TONE_ANALYZER_APIKEY": None,
            "DEEPAI_APIKEY": None,
            "OPENAI_API_KEY": None,
            "OPENAI_BASE_URL": None,
            "MAX_RETRIES": 2,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr("tonelens.models.time.sleep", lambda s: None)
