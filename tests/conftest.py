"""Shared test fixtures for the Impact Monitor test suite."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from impactmon.config import Config


@pytest.fixture
def fresh_config(tmp_path, monkeypatch):
    """Create a Config instance with reset singleton state pointed at a temp directory."""
    Config._instance = None
    monkeypatch.setenv("IMPACTMON_BASE_DIR", str(tmp_path))
    cfg = Config()
    yield cfg
    Config._instance = None


@pytest.fixture
def rules(fresh_config):
    """Default rule set (Bloom Energy, stock thresholds)."""
    return fresh_config.rules()


@pytest.fixture
def last_check():
    return datetime(2026, 10, 15, 14, 30, tzinfo=timezone.utc)


def _make_response(json_data=None, text="", content=b"", status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = content or text.encode("utf-8")
    response.json.return_value = json_data
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    return _make_response


@pytest.fixture
def session():
    """A requests.Session stand-in; set .get.return_value or .get.side_effect per test."""
    return MagicMock()
