"""Init command."""

import click
import requests

from ..config import ConfigStore
from ..gist import GistError
from . import cli
from .session import fail, open_manifests


@cli.command("init")
@click.argument("token")
@click.pass_obj
def init(store: ConfigStore, token: str) -> None:
    """Store a GitHub TOKEN (with gist scope) and provision the manifest gist."""
    config = store.load()
    config.github_token = token
    store.save(config)

    try:
        open_manifests(store, token).get_or_create()
    except (GistError, requests.RequestException) as exc:
        fail(f"cannot provision manifest gist: {exc}")

    click.echo(f"Initialized. Config saved to {store.path}")
