"""
Per-user configuration storage.

The configuration lives at:

    $configdir/config.json

Where $configdir defaults to `~/.contextsync` and may be overridden
using the `CONTEXTSYNC_CONFIG_DIR` environment variable.

File format:

{
  "GitHubToken": "ghp_...",
  "ManifestGistId": "aa5a315d61ae9438b18d"
}
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any, Final

from dacite import Config as DaciteConfig
from dacite import DaciteError, from_dict

CONFIG_DIR_ENV: Final[str] = "CONTEXTSYNC_CONFIG_DIR"
CONFIG_DIRNAME: Final[str] = ".contextsync"
CONFIG_FILENAME: Final[str] = "config.json"

log = logging.getLogger("config")


def config_dir_or_default(config_dir: str | Path | None) -> Path:
    """
    Return the config directory to use.

    Parameters:
        config_dir: explicit directory, or None to consult the
            CONTEXTSYNC_CONFIG_DIR environment variable and then
            fall back to ~/.contextsync.
    """
    if config_dir is not None:
        return Path(config_dir)
    from_env = os.getenv(CONFIG_DIR_ENV)
    if from_env:
        return Path(from_env)
    return Path.home() / CONFIG_DIRNAME


@dataclass(kw_only=True)
class Config:
    """Locally persisted credentials and manifest location."""

    github_token: str | None = None
    manifest_gist_id: str | None = None

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Config:
        """
        Build a Config from its on-disk JSON document.

        Raises:
            DaciteError: if a value has the wrong type.
        """
        return from_dict(
            cls,
            {
                "github_token": data.get("GitHubToken"),
                "manifest_gist_id": data.get("ManifestGistId"),
            },
            config=DaciteConfig(strict=True),
        )

    def to_document(self) -> dict[str, Any]:
        """Return the on-disk JSON document for this Config."""
        return {
            "GitHubToken": self.github_token,
            "ManifestGistId": self.manifest_gist_id,
        }


class ConfigStore:
    """
    Load and save the Config from a fixed per-user location.

    Nothing is cached in memory: every load reads the file again,
    so components sharing a store always observe the latest save.
    """

    def __init__(self, config_dir: str | Path | None = None) -> None:
        self.config_dir = config_dir_or_default(config_dir)

    @property
    def path(self) -> Path:
        """Path of the config file."""
        return self.config_dir / CONFIG_FILENAME

    def load(self) -> Config:
        """Return the stored Config, or an empty one if missing or unreadable."""
        if not self.path.exists():
            return Config()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return Config.from_document(data)
        except (OSError, ValueError, DaciteError) as exc:
            log.warning("ignoring unreadable config %s: %s", self.path, exc)
            return Config()

    def save(self, config: Config) -> None:
        """Overwrite the config file with the given Config."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        # Write into a sibling temporary directory so `os.replace()` is atomic.
        with TemporaryDirectory(dir=self.config_dir) as tmp_dir:
            tmp_file = Path(tmp_dir) / CONFIG_FILENAME
            tmp_file.write_text(json.dumps(config.to_document(), indent=2), encoding="utf-8")
            tmp_file.chmod(0o600)
            os.replace(tmp_file, self.path)
        log.debug("saved config to %s", self.path)

    def is_initialized(self) -> bool:
        """Return whether a non-empty GitHub token is stored."""
        return bool(self.load().github_token)
