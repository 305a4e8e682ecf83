"""Shared fixtures for Leanpub client tests"""

import json

import pytest
import requests


def _make_response(status_code: int = 200, body="", reason: str = "", headers=None) -> requests.Response:
    """Build a real requests.Response without touching the network"""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    response.headers.update(headers or {"Content-Type": "application/json"})
    return response


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep real env files, config files and credentials out of tests"""
    monkeypatch.chdir(tmp_path)
    for name in ("LEANPUB_API_KEY", "LEANPUB_BASE_URL", "LEANPUB_TIMEOUT", "LEANPUB_CONFIG", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def make_response():
    return _make_response
