"""Minimal client for the GitHub Gists REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

import requests

GITHUB_API_URL: Final[str] = "https://api.github.com"
GIST_WEB_URL: Final[str] = "https://gist.github.com"
GITHUB_API_VERSION: Final[str] = "2022-11-28"
USER_AGENT: Final[str] = "ContextSync"
DEFAULT_TIMEOUT: Final[float] = 30.0

log = logging.getLogger("gist/client")


class GistError(RuntimeError):
    """Error emitted when the Gists API rejects a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GistNotFoundError(GistError):
    """The requested gist does not exist or is no longer visible to us."""


@dataclass(frozen=True, kw_only=True)
class Gist:
    """A gist and the full content of its files."""

    id: str
    html_url: str
    files: dict[str, str] = field(default_factory=dict)


def gist_url(gist_id: str) -> str:
    """Return the web URL for the given gist id."""
    return f"{GIST_WEB_URL}/{gist_id}"


class GistClient:
    """
    Gists API client bound to a single access token.

    All requests run sequentially on one requests.Session. Errors
    reported by the API are raised as GistError (GistNotFoundError for
    404); transport failures propagate as requests.RequestException.
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = GITHUB_API_URL,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "User-Agent": USER_AGENT,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
        )

    def create(
        self,
        files: Mapping[str, str],
        *,
        description: str,
        public: bool = False,
    ) -> Gist:
        """Create a new gist holding the given files."""
        payload = {
            "description": description,
            "public": public,
            "files": {name: {"content": content} for name, content in files.items()},
        }
        gist = self._parse_gist(self._request("POST", "/gists", json=payload))
        log.info("created gist %s with %d file(s)", gist.id, len(gist.files))
        return gist

    def get(self, gist_id: str) -> Gist:
        """Fetch a gist including the complete content of every file."""
        return self._parse_gist(self._request("GET", f"/gists/{gist_id}"))

    def update(self, gist_id: str, files: Mapping[str, str | None]) -> Gist:
        """
        Edit the files of an existing gist.

        A file mapped to None is deleted; any other file is created or
        overwritten. Files not mentioned are left untouched.
        """
        payload = {
            "files": {
                name: None if content is None else {"content": content}
                for name, content in files.items()
            }
        }
        return self._parse_gist(self._request("PATCH", f"/gists/{gist_id}", json=payload))

    def replace_files(self, gist_id: str, files: Mapping[str, str]) -> Gist:
        """Make the gist hold exactly the given files, deleting all others."""
        existing = self.get(gist_id)
        changes: dict[str, str | None] = {
            name: None for name in existing.files if name not in files
        }
        changes.update(files)
        if len(changes) > len(files):
            log.info("deleting %d stale file(s) from gist %s", len(changes) - len(files), gist_id)
        return self.update(gist_id, changes)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.api_url}{path}"
        log.debug("%s %s... start", method, url)
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        log.debug("%s %s... %d", method, url, resp.status_code)
        if resp.status_code == 404:
            raise GistNotFoundError(f"{method} {path}: not found", status_code=404)
        if not resp.ok:
            raise GistError(
                f"{method} {path}: HTTP {resp.status_code}: {_error_message(resp)}",
                status_code=resp.status_code,
            )
        return resp.json()

    def _parse_gist(self, data: dict[str, Any]) -> Gist:
        files: dict[str, str] = {}
        for name, entry in (data.get("files") or {}).items():
            if entry is None:
                continue
            content = entry.get("content")
            if entry.get("truncated") or content is None:
                # The API inlines at most ~1 MB per file.
                content = self._fetch_raw(entry["raw_url"])
            files[name] = content
        gist_id = data["id"]
        return Gist(id=gist_id, html_url=data.get("html_url") or gist_url(gist_id), files=files)

    def _fetch_raw(self, raw_url: str) -> str:
        log.debug("fetching truncated file %s", raw_url)
        resp = self.session.get(raw_url, timeout=self.timeout)
        if resp.status_code == 404:
            raise GistNotFoundError(f"GET {raw_url}: not found", status_code=404)
        if not resp.ok:
            raise GistError(f"GET {raw_url}: HTTP {resp.status_code}", status_code=resp.status_code)
        resp.encoding = "utf-8"
        return resp.text


def _error_message(resp: requests.Response) -> str:
    """Extract the API error message, falling back to the reason phrase."""
    try:
        data = resp.json()
    except ValueError:
        return resp.reason or "unknown error"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason or "unknown error"
