"""
GitHub Gist storage for context files.

Two kinds of secret gists are used:

1. A single manifest gist holding `contextsync-manifest.json`:

{
  "ProjectMappings": {
    "1d7ed7bd7bc9f544": "aa5a315d61ae9438b18d"
  }
}

2. One gist per project holding the project context files, with
directory separators encoded (see `contextsync.pathcodec`).
"""

from .client import (
    Gist,
    GistClient,
    GistError,
    GistNotFoundError,
    gist_url,
)
from .manifest import MANIFEST_FILENAME, Manifest, ManifestStore

__all__ = [
    "Gist",
    "GistClient",
    "GistError",
    "GistNotFoundError",
    "MANIFEST_FILENAME",
    "Manifest",
    "ManifestStore",
    "gist_url",
]
