"""Shared fixtures: sample payloads, a README on disk, and a fake HTTP session."""

import json
import shutil
from pathlib import Path

import pytest
import requests

from codestats_readme.config import Config

FIXTURES = Path(__file__).parent / "fixtures"


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """Records requested URLs and answers with a canned response or raises."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def payload_text():
    return (FIXTURES / "codestats_user.json").read_text(encoding="utf-8")


@pytest.fixture
def payload(payload_text):
    return json.loads(payload_text)


@pytest.fixture
def readme(tmp_path):
    path = tmp_path / "README.md"
    shutil.copy(FIXTURES / "README.md", path)
    return path


@pytest.fixture
def config(readme):
    return Config(username="testuser", readme_file=str(readme))


@pytest.fixture
def ok_session(payload_text):
    return FakeSession(FakeResponse(200, payload_text))


@pytest.fixture
def down_session():
    return FakeSession(exc=requests.ConnectionError("Network request failed"))


@pytest.fixture
def session_for():
    def make(status=200, text=""):
        return FakeSession(FakeResponse(status, text, reason="OK" if status < 400 else "Error"))
    return make
