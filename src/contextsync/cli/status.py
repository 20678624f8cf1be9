"""Status command."""

import click
import requests
from rich.console import Console

from ..config import ConfigStore
from ..gist import GistError
from ..sync import ContextSyncError
from . import cli
from .session import fail, open_synchronizer, repo_dir_option


@cli.command()
@repo_dir_option
@click.pass_obj
def status(store: ConfigStore, repo_dir: str) -> None:
    """Show the repository, its project key and the linked gist."""
    sync = open_synchronizer(store, repo_dir)
    try:
        state = sync.status()
    except ContextSyncError as exc:
        fail(str(exc))
    except (GistError, requests.RequestException) as exc:
        fail(f"status failed: {exc}")

    console = Console(highlight=False)
    console.print(f"Repository: {state.remote_url}", markup=False)
    console.print(f"Project Key: {state.project_key}")
    if state.synced:
        console.print(f"Linked Gist: [green]{state.gist_url}[/]")
    else:
        console.print("Status: [yellow]Not synced[/]")
