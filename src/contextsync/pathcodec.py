"""
Flat encoding of relative paths into gist file names.

Gists cannot contain directories, so `notes/api/auth.md` is stored as
`notes__api__auth.md` and decoded back on pull.

Known limitation: a path segment that already contains `__` does not
survive the round trip (`my__notes.md` decodes to `my/notes.md`).
"""

from __future__ import annotations

from typing import Final

PATH_SEPARATOR: Final[str] = "/"
PATH_SEPARATOR_ENCODING: Final[str] = "__"


def encode_path(path: str) -> str:
    """Encode a POSIX relative path into a flat gist file name."""
    return path.replace(PATH_SEPARATOR, PATH_SEPARATOR_ENCODING)


def decode_path(encoded: str) -> str:
    """Decode a flat gist file name back into a POSIX relative path."""
    return encoded.replace(PATH_SEPARATOR_ENCODING, PATH_SEPARATOR)
