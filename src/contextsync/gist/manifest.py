"""Remote manifest mapping project keys to project gists."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Final

from dacite import Config as DaciteConfig
from dacite import DaciteError, from_dict

from ..config import ConfigStore
from .client import GistClient, GistNotFoundError

MANIFEST_FILENAME: Final[str] = "contextsync-manifest.json"
MANIFEST_DESCRIPTION: Final[str] = "ContextSync Manifest"

log = logging.getLogger("gist/manifest")


@dataclass(kw_only=True)
class Manifest:
    """Mapping from project key to the id of the gist holding its files."""

    project_mappings: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> Manifest:
        """
        Parse a manifest document.

        Raises:
            ValueError: if text is not a JSON object.
            DaciteError: if the mappings have the wrong types.
        """
        data = json.loads(text)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return from_dict(
            cls,
            {"project_mappings": data.get("ProjectMappings") or {}},
            config=DaciteConfig(strict=True),
        )

    def to_json(self) -> str:
        """Serialize the manifest as indented JSON."""
        return json.dumps({"ProjectMappings": self.project_mappings}, indent=2, sort_keys=True)


class ManifestStore:
    """
    Resolve, create and update the manifest gist.

    The manifest gist id is recorded in the local config. A recorded
    gist that is gone or holds garbage is replaced by a new empty one.
    Other API and network failures propagate to the caller.
    """

    def __init__(self, client: GistClient, config_store: ConfigStore) -> None:
        self.client = client
        self.config_store = config_store

    def get_or_create(self) -> Manifest:
        """Return the recorded manifest, creating a new one if it is unusable."""
        config = self.config_store.load()
        if config.manifest_gist_id:
            manifest = self._fetch(config.manifest_gist_id)
            if manifest is not None:
                return manifest
        return self._recreate()

    def get(self) -> Manifest:
        """Return the recorded manifest, or an empty one, without writing anything."""
        config = self.config_store.load()
        if not config.manifest_gist_id:
            return Manifest()
        return self._fetch(config.manifest_gist_id) or Manifest()

    def save(self, manifest: Manifest) -> None:
        """Overwrite the recorded manifest gist with the given manifest."""
        config = self.config_store.load()
        if not config.manifest_gist_id:
            log.debug("no manifest gist recorded; not saving")
            return
        self.client.update(config.manifest_gist_id, {MANIFEST_FILENAME: manifest.to_json()})
        log.info("saved manifest gist %s", config.manifest_gist_id)

    def _fetch(self, gist_id: str) -> Manifest | None:
        """Fetch and parse the manifest, returning None when it is gone."""
        try:
            gist = self.client.get(gist_id)
        except GistNotFoundError:
            log.warning("manifest gist %s not found", gist_id)
            return None
        content = gist.files.get(MANIFEST_FILENAME)
        if content is None:
            log.warning("manifest gist %s has no %s file", gist_id, MANIFEST_FILENAME)
            return None
        try:
            return Manifest.from_json(content)
        except (ValueError, DaciteError) as exc:
            log.warning("manifest gist %s is malformed: %s", gist_id, exc)
            return None

    def _recreate(self) -> Manifest:
        """Create an empty manifest gist and record its id."""
        manifest = Manifest()
        gist = self.client.create(
            {MANIFEST_FILENAME: manifest.to_json()},
            description=MANIFEST_DESCRIPTION,
        )
        config = self.config_store.load()
        config.manifest_gist_id = gist.id
        self.config_store.save(config)
        log.info("created manifest gist %s", gist.id)
        return manifest
