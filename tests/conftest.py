"""Shared pytest fixtures for ContextSync tests."""

from collections.abc import Mapping
from pathlib import Path

import pytest

from contextsync.config import ConfigStore
from contextsync.gist import Gist, GistNotFoundError, gist_url


class FakeGistClient:
    """In-memory stand-in for GistClient recording every call."""

    def __init__(self) -> None:
        self.gists: dict[str, dict[str, str]] = {}
        self.descriptions: dict[str, str] = {}
        self.calls: list[tuple[str, str | None]] = []
        self._next_id = 1

    def create(self, files: Mapping[str, str], *, description: str, public: bool = False) -> Gist:
        gist_id = f"gist{self._next_id:04d}"
        self._next_id += 1
        self.calls.append(("create", gist_id))
        self.gists[gist_id] = dict(files)
        self.descriptions[gist_id] = description
        return self._gist(gist_id)

    def get(self, gist_id: str) -> Gist:
        self.calls.append(("get", gist_id))
        if gist_id not in self.gists:
            raise GistNotFoundError(f"GET /gists/{gist_id}: not found", status_code=404)
        return self._gist(gist_id)

    def update(self, gist_id: str, files: Mapping[str, str | None]) -> Gist:
        self.calls.append(("update", gist_id))
        if gist_id not in self.gists:
            raise GistNotFoundError(f"PATCH /gists/{gist_id}: not found", status_code=404)
        for name, content in files.items():
            if content is None:
                self.gists[gist_id].pop(name, None)
            else:
                self.gists[gist_id][name] = content
        return self._gist(gist_id)

    def replace_files(self, gist_id: str, files: Mapping[str, str]) -> Gist:
        existing = self.get(gist_id)
        changes: dict[str, str | None] = {n: None for n in existing.files if n not in files}
        changes.update(files)
        return self.update(gist_id, changes)

    def delete(self, gist_id: str) -> None:
        """Simulate a gist deleted from the GitHub web UI."""
        del self.gists[gist_id]

    def _gist(self, gist_id: str) -> Gist:
        return Gist(id=gist_id, html_url=gist_url(gist_id), files=dict(self.gists[gist_id]))


@pytest.fixture
def fake_gist() -> FakeGistClient:
    """Return an empty in-memory gist service."""
    return FakeGistClient()


@pytest.fixture
def config_store(tmp_path: Path) -> ConfigStore:
    """Return a ConfigStore rooted in a temporary directory."""
    return ConfigStore(tmp_path / "config")


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Return an empty working directory for a fake repository."""
    path = tmp_path / "repo"
    path.mkdir()
    return path
