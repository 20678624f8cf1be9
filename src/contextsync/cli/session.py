"""Helpers shared by the ctx subcommands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click

from ..config import ConfigStore
from ..gist import GistClient, ManifestStore
from ..sync import ProjectSynchronizer

NOT_INITIALIZED_MESSAGE = "Run 'ctx init <token>' first"


def fail(message: str) -> NoReturn:
    """Print an error message to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def open_manifests(store: ConfigStore, token: str) -> ManifestStore:
    """Construct a client for the given token and its manifest store."""
    return ManifestStore(GistClient(token), store)


def open_synchronizer(store: ConfigStore, repo_dir: str | Path) -> ProjectSynchronizer:
    """
    Return a synchronizer using the stored token.

    Exits with an error message when no token is stored.
    """
    token = store.load().github_token
    if not token:
        fail(NOT_INITIALIZED_MESSAGE)
    manifests = open_manifests(store, token)
    return ProjectSynchronizer(client=manifests.client, manifests=manifests, repo_dir=repo_dir)


repo_dir_option = click.option(
    "-d",
    "--dir",
    "repo_dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Repository working directory",
)
