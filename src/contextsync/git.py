"""Read repository metadata using the `git` command line tool."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

log = logging.getLogger("git")


def get_remote_url(path: str | Path, remote: str = "origin") -> str | None:
    """
    Return the URL of the given remote for the repository containing path.

    Returns None when git is not installed, path is not inside a
    repository, or the repository has no such remote.
    """
    try:
        result = subprocess.run(
            ["git", "-C", str(path), "remote", "get-url", remote],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        log.debug("cannot run git: %s", exc)
        return None
    if result.returncode != 0:
        log.debug("git remote get-url %s failed: %s", remote, result.stderr.strip())
        return None
    url = result.stdout.strip()
    return url or None
