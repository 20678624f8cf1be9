"""Fixtures for the ctx CLI tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

REMOTE_URL = "https://github.com/octocat/hello-world.git"


@pytest.fixture
def patched_gist(fake_gist, monkeypatch: pytest.MonkeyPatch):
    """Make every command talk to the in-memory gist service."""
    factory = MagicMock(return_value=fake_gist)
    monkeypatch.setattr("contextsync.cli.session.GistClient", factory)
    return fake_gist


@pytest.fixture
def in_repo(monkeypatch: pytest.MonkeyPatch) -> str:
    """Pretend every directory is a checkout with an origin remote."""
    monkeypatch.setattr("contextsync.sync.get_remote_url", lambda _path: REMOTE_URL)
    return REMOTE_URL


@pytest.fixture
def not_in_repo(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend no directory is inside a git repository."""
    monkeypatch.setattr("contextsync.sync.get_remote_url", lambda _path: None)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "config"
