from __future__ import annotations

import base64
from pathlib import Path

import pytest
import requests

from sbom_uploader.client import DependencyTrackClient
from sbom_uploader.config import UploaderConfig
from sbom_uploader.errors import (
    ConfigurationError,
    NotFoundError,
    ResponseError,
    TransportError,
)
from sbom_uploader.models import UploadResult
from sbom_uploader.uploader import raise_for_outcome, report, upload

from .conftest import FakeResponse, RecordingSession


def _config(bom_path: Path, **overrides) -> UploaderConfig:
    values = {
        "base_url": "http://dt.example:8081",
        "api_key": "odt_key",
        "project_name": "shop",
        "project_version": "1.0.0",
        "bom_path": str(bom_path),
    }
    values.update(overrides)
    return UploaderConfig(**values)


@pytest.mark.parametrize("api_key", [None, "", "YOUR_API_KEY"])
def test_missing_key_fails_before_network(bom_file, session, api_key):
    with pytest.raises(ConfigurationError):
        upload(_config(bom_file, api_key=api_key))

    assert session.calls == []


def test_missing_file_fails_before_network(tmp_path, session):
    with pytest.raises(NotFoundError):
        upload(_config(tmp_path / "nope.json"))

    assert session.calls == []


def test_successful_upload_returns_token(bom_file, session):
    session.response = FakeResponse(json_data={"token": "abc123"})

    result = upload(_config(bom_file))

    assert result.status_code == 200
    assert result.token == "abc123"
    assert len(session.calls) == 1
    sent = session.calls[0]
    assert sent["url"] == "http://dt.example:8081/api/v1/bom"
    assert sent["timeout"] == 30.0
    assert base64.b64decode(sent["json"]["bom"]) == bom_file.read_bytes()


def test_bad_request_with_text_body_is_returned(bom_file, session):
    session.response = FakeResponse(status_code=400, text="bad request")

    result = upload(_config(bom_file))

    assert result.status_code == 400
    assert result.text == "bad request"
    assert result.token is None


def test_connection_refused_raises_transport_error(bom_file, session):
    refused = requests.ConnectionError("[Errno 111] Connection refused")
    session.error = refused

    with pytest.raises(TransportError) as excinfo:
        upload(_config(bom_file))

    assert excinfo.value.cause is refused
    assert len(session.calls) == 1


def test_uses_given_client(bom_file, monkeypatch):
    recorder = RecordingSession(FakeResponse(status_code=201, json_data={"token": "t-1"}))
    client = DependencyTrackClient("http://other.example", api_key="odt_other")
    monkeypatch.setattr(client.session, "request", recorder)

    result = upload(_config(bom_file), client=client)

    assert result.token == "t-1"
    assert recorder.calls[0]["url"] == "http://other.example/api/v1/bom"


def test_api_key_never_logged(bom_file, session, caplog):
    with caplog.at_level("DEBUG", logger="SbomUploader"):
        upload(_config(bom_file))

    assert caplog.records
    assert "odt_key" not in caplog.text


def test_report_highlights_token():
    lines: list[str] = []

    report(UploadResult(status_code=200, body={"token": "abc123"}), echo=lines.append)

    assert lines[0] == "Status: 200"
    assert lines[1] == "Token: abc123"
    assert '"token": "abc123"' in lines[2]


def test_report_prints_raw_text():
    lines: list[str] = []

    report(UploadResult(status_code=400, text="bad request"), echo=lines.append)

    assert lines == ["Status: 400", "bad request"]


def test_raise_for_outcome():
    raise_for_outcome(UploadResult(status_code=200, body={"token": "x"}))

    failed = UploadResult(status_code=401, text="Unauthorized")
    with pytest.raises(ResponseError) as excinfo:
        raise_for_outcome(failed)

    assert excinfo.value.result is failed
    assert excinfo.value.exit_code == 1


def test_key_with_trailing_newline_fails_before_network(bom_file, session, caplog):
    with caplog.at_level("DEBUG", logger="SbomUploader"):
        with pytest.raises(ConfigurationError) as excinfo:
            upload(_config(bom_file, api_key="odt_SUPERSECRET\n"))

    assert session.calls == []
    assert "SUPERSECRET" not in str(excinfo.value)
    assert "SUPERSECRET" not in caplog.text


@pytest.mark.parametrize(
    "overrides", [{"base_url": "localhost:8081"}, {"timeout_s": float("nan")}]
)
def test_invalid_settings_fail_before_network(bom_file, session, overrides):
    with pytest.raises(ConfigurationError):
        upload(_config(bom_file, **overrides))

    assert session.calls == []
