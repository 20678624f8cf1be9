"""
Synchronize the local context folder with a per-project gist.

The context folder is `.ai-context/` inside the repository working
directory. Only `.md` and `.txt` files are synchronized.

Pushing replaces the whole remote file set; pulling replaces the whole
local folder. Neither operation merges.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Final

from .gist import GistClient, ManifestStore, gist_url
from .git import get_remote_url
from .identity import derive_project_key
from .pathcodec import decode_path, encode_path

CONTEXT_FOLDER: Final[str] = ".ai-context"
CONTEXT_FILE_SUFFIXES: Final[tuple[str, ...]] = (".md", ".txt")
PROJECT_DESCRIPTION: Final[str] = "ContextSync Project Context"

log = logging.getLogger("sync")


class ContextSyncError(Exception):
    """Base class for expected, user-facing failures."""


class NotARepositoryError(ContextSyncError):
    """The directory is not inside a git repository with an origin remote."""


class NoLocalContentError(ContextSyncError):
    """The context folder is missing or holds no synchronizable files."""


class UnsafePathError(ContextSyncError):
    """Remote file names cannot be materialized safely below the context folder."""


class UnreadableFileError(ContextSyncError):
    """A local context file is not valid UTF-8 text."""


def context_dir_for(repo_dir: str | Path) -> Path:
    """Return the context folder path for the given working directory."""
    return Path(repo_dir) / CONTEXT_FOLDER


def collect_context_files(context_dir: Path) -> dict[str, str]:
    """
    Read all synchronizable files below context_dir.

    Returns a mapping from encoded file name to file content, sorted
    by name.

    Raises:
        NoLocalContentError: if the folder does not exist or contains
            no `.md` or `.txt` file.
        UnreadableFileError: if a file is not valid UTF-8.
    """
    if not context_dir.is_dir():
        raise NoLocalContentError(f"No {CONTEXT_FOLDER}/ folder found")
    files: dict[str, str] = {}
    for path in sorted(context_dir.rglob("*")):
        if not path.is_file() or not path.name.endswith(CONTEXT_FILE_SUFFIXES):
            continue
        # Use .as_posix() so encoded names are the same on every OS
        rel = path.relative_to(context_dir).as_posix()
        try:
            files[encode_path(rel)] = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableFileError(
                f"{CONTEXT_FOLDER}/{rel} is not UTF-8 text: {exc.reason}"
            ) from exc
    if not files:
        raise NoLocalContentError(f"No .md or .txt files found in {CONTEXT_FOLDER}/")
    return files


def _safe_relative_path(encoded: str) -> PurePosixPath:
    rel = PurePosixPath(decode_path(encoded))
    if rel.is_absolute() or ".." in rel.parts or not rel.parts:
        raise UnsafePathError(f"refusing to write {encoded!r} outside {CONTEXT_FOLDER}/")
    return rel


def _check_conflicts(targets: Mapping[str, PurePosixPath]) -> None:
    """Reject names decoding to the same path, or to a file that is also a directory."""
    seen: dict[PurePosixPath, str] = {}
    for encoded, rel in targets.items():
        if rel in seen:
            raise UnsafePathError(f"{seen[rel]!r} and {encoded!r} both decode to {str(rel)!r}")
        seen[rel] = encoded
    for encoded, rel in targets.items():
        for parent in rel.parents:
            if parent in seen:
                raise UnsafePathError(
                    f"{seen[parent]!r} is a file but {encoded!r} needs it as a directory"
                )


def write_context_files(context_dir: Path, files: Mapping[str, str]) -> list[str]:
    """
    Replace context_dir with exactly the given encoded files.

    Any existing folder is deleted first, including files that are not
    part of files. All names are validated before touching the disk.

    Returns the decoded relative paths that were written.
    """
    targets = {encoded: _safe_relative_path(encoded) for encoded in files}
    _check_conflicts(targets)
    if context_dir.exists():
        log.warning("replacing existing %s", context_dir)
        shutil.rmtree(context_dir)
    context_dir.mkdir(parents=True)
    written: list[str] = []
    for encoded, rel in sorted(targets.items(), key=lambda item: str(item[1])):
        dest = context_dir.joinpath(*rel.parts)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(files[encoded], encoding="utf-8")
        written.append(rel.as_posix())
    return written


@dataclass(frozen=True, kw_only=True)
class PushResult:
    """Outcome of a push."""

    gist_id: str
    file_count: int
    created: bool


@dataclass(frozen=True, kw_only=True)
class PullResult:
    """Outcome of a pull. gist_id is None when nothing was mapped."""

    gist_id: str | None
    files: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.gist_id is not None


@dataclass(frozen=True, kw_only=True)
class SyncStatus:
    """Read-only view of the sync state of a repository."""

    remote_url: str
    project_key: str
    gist_id: str | None

    @property
    def synced(self) -> bool:
        return self.gist_id is not None

    @property
    def gist_url(self) -> str | None:
        return gist_url(self.gist_id) if self.gist_id is not None else None


class ProjectSynchronizer:
    """
    Push, pull and inspect the context files of one repository.

    Attributes:
        client: the Gists API client
        manifests: the manifest store sharing the same client
        repo_dir: the repository working directory
    """

    def __init__(
        self,
        *,
        client: GistClient,
        manifests: ManifestStore,
        repo_dir: str | Path,
    ) -> None:
        self.client = client
        self.manifests = manifests
        self.repo_dir = Path(repo_dir)
        self._project: tuple[str, str] | None = None

    @property
    def context_dir(self) -> Path:
        return context_dir_for(self.repo_dir)

    def project(self) -> tuple[str, str]:
        """
        Return the (remote_url, project_key) pair of the repository.

        git is only consulted on the first call.

        Raises:
            NotARepositoryError: if there is no repository or no origin.
        """
        if self._project is None:
            remote_url = get_remote_url(self.repo_dir)
            if remote_url is None:
                raise NotARepositoryError("Not a git repository or no origin remote")
            self._project = (remote_url, derive_project_key(remote_url))
        return self._project

    def push(self, files: Mapping[str, str]) -> PushResult:
        """Make the project gist hold exactly the given encoded files."""
        _, project_key = self.project()
        manifest = self.manifests.get_or_create()

        gist_id = manifest.project_mappings.get(project_key)
        if gist_id is not None:
            self.client.replace_files(gist_id, files)
            log.info("updated gist %s for project %s", gist_id, project_key)
            return PushResult(gist_id=gist_id, file_count=len(files), created=False)

        gist = self.client.create(files, description=PROJECT_DESCRIPTION)
        manifest.project_mappings[project_key] = gist.id
        self.manifests.save(manifest)
        log.info("mapped project %s to new gist %s", project_key, gist.id)
        return PushResult(gist_id=gist.id, file_count=len(files), created=True)

    def pull(self) -> PullResult:
        """Replace the local context folder with the project gist files."""
        _, project_key = self.project()
        manifest = self.manifests.get_or_create()

        gist_id = manifest.project_mappings.get(project_key)
        if gist_id is None:
            return PullResult(gist_id=None)

        gist = self.client.get(gist_id)
        written = write_context_files(self.context_dir, gist.files)
        return PullResult(gist_id=gist_id, files=written)

    def status(self) -> SyncStatus:
        """Report the mapping for this repository without writing anything."""
        remote_url, project_key = self.project()
        manifest = self.manifests.get()
        return SyncStatus(
            remote_url=remote_url,
            project_key=project_key,
            gist_id=manifest.project_mappings.get(project_key),
        )
