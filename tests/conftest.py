"""Test fixtures for the sbom-uploader test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import requests

SAMPLE_BOM = {
    "bomFormat": "CycloneDX",
    "specVersion": "1.5",
    "version": 1,
    "components": [
        {"type": "library", "name": "requests", "version": "2.31.0"},
        {"type": "library", "name": "flask", "version": "3.0.0"},
    ],
}


class FakeResponse:
    def __init__(
        self, status_code: int = 200, json_data: Any = None, text: str | None = None
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        if text is None:
            text = "" if json_data is None else json.dumps(json_data)
        self.text = text

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON")
        return self._json_data


class RecordingSession:
    """Stand-in for `requests.Session.request` that records every call."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse(json_data={"token": "abc123"})
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def __call__(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def session(monkeypatch: pytest.MonkeyPatch) -> RecordingSession:
    """Route every `requests.Session` in the process through a recorder."""
    recorder = RecordingSession()
    monkeypatch.setattr(requests.Session, "request", lambda self, *a, **kw: recorder(*a, **kw))
    return recorder


@pytest.fixture
def bom_file(tmp_path: Path) -> Path:
    path = tmp_path / "sbom.json"
    path.write_text(json.dumps(SAMPLE_BOM, indent=2))
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in (
        "DT_BASE_URL",
        "DT_API_KEY",
        "DT_PROJECT_NAME",
        "DT_PROJECT_VERSION",
        "DT_BOM_PATH",
        "DT_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
