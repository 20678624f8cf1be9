"""Push command."""

import click
import requests

from ..config import ConfigStore
from ..gist import GistError
from ..sync import ContextSyncError, collect_context_files
from . import cli
from .session import fail, open_synchronizer, repo_dir_option


@cli.command()
@repo_dir_option
@click.pass_obj
def push(store: ConfigStore, repo_dir: str) -> None:
    """Upload .ai-context/ to the gist linked to this repository.

    The gist ends up holding exactly the local `.md` and `.txt` files:
    remote files that no longer exist locally are deleted.
    """
    sync = open_synchronizer(store, repo_dir)
    try:
        sync.project()
        files = collect_context_files(sync.context_dir)
        result = sync.push(files)
    except ContextSyncError as exc:
        fail(str(exc))
    except (GistError, requests.RequestException) as exc:
        fail(f"push failed: {exc}")

    verb = "Created" if result.created else "Updated"
    click.echo(f"{verb} gist {result.gist_id} with {result.file_count} file(s)")
