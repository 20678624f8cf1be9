"""Module deriving the project key from a repository remote URL."""

from __future__ import annotations

import hashlib
from typing import Final

PROJECT_KEY_BYTES: Final[int] = 8
"""Number of digest bytes kept in a project key (16 hex characters)."""


def derive_project_key(remote_url: str) -> str:
    """
    Return the project key for the given remote URL.

    The key is the lowercase hex rendering of the first eight bytes of
    the SHA-256 digest of the UTF-8 encoded URL. Manifests created by
    earlier releases are keyed this way, so the algorithm must not change.
    """
    digest = hashlib.sha256(remote_url.encode("utf-8")).digest()
    return digest[:PROJECT_KEY_BYTES].hex()
