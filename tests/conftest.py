"""
Pytest configuration and shared fixtures for fcrepo tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from fcrepo.config.loader import ClientConfig
from fcrepo.exceptions import FcrepoOperationFailedError
from fcrepo.logging import get_global_logger, set_global_logger

REPO_URI = "http://localhost:8080/rest/container"


class RecordingClient:
    """Stand-in for FcrepoClient that records requests instead of sending them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, bool]] = []

    def execute_request(self, uri, request, *, allow_redirects=True):
        self.calls.append((uri, request, allow_redirects))
        return "response"

    @property
    def last_request(self):
        return self.calls[-1][1]


class ReadingClient(RecordingClient):
    """RecordingClient that reads each request body as it is sent."""

    def execute_request(self, uri, request, *, allow_redirects=True):
        self.sent_body = request.data.read()
        return super().execute_request(uri, request, allow_redirects=allow_redirects)


class FailingClient(RecordingClient):
    """RecordingClient whose sends fail like a refused connection."""

    def execute_request(self, uri, request, *, allow_redirects=True):
        super().execute_request(uri, request, allow_redirects=allow_redirects)
        raise FcrepoOperationFailedError(uri, -1, "connection refused")


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def repo_uri() -> str:
    """Provide a repository container URI."""
    return REPO_URI


@pytest.fixture
def recording_client() -> RecordingClient:
    """Provide a client double that captures executed requests."""
    return RecordingClient()


@pytest.fixture
def reading_client() -> ReadingClient:
    """Provide a client double that reads request bodies when sending."""
    return ReadingClient()


@pytest.fixture
def failing_client() -> FailingClient:
    """Provide a client double whose transport always fails."""
    return FailingClient()


@pytest.fixture(autouse=True)
def restore_global_logger():
    """Restore the global logger after tests that replace it."""
    previous = get_global_logger()
    yield
    set_global_logger(previous)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FCREPO_* variables so tests see only what they set."""
    for field in ClientConfig.__dataclass_fields__:
        name = f"FCREPO_{field.upper()}"
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("fcrepo.yaml", {"client": {"timeout": 5}})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
