"""Pull command."""

import click
import requests

from ..config import ConfigStore
from ..gist import GistError
from ..sync import CONTEXT_FOLDER, ContextSyncError
from . import cli
from .session import fail, open_synchronizer, repo_dir_option


@cli.command()
@repo_dir_option
@click.pass_obj
def pull(store: ConfigStore, repo_dir: str) -> None:
    """Replace .ai-context/ with the files in the linked gist.

    \b
    WARNING: this is not a merge. The local folder is deleted first,
    so local files missing from the gist are lost.
    """
    sync = open_synchronizer(store, repo_dir)
    try:
        result = sync.pull()
    except ContextSyncError as exc:
        fail(str(exc))
    except (GistError, requests.RequestException) as exc:
        fail(f"pull failed: {exc}")

    if not result.found:
        click.echo("No context found for this repository. Run 'ctx push' first.")
        return
    click.echo(f"Pulled {len(result.files)} file(s) to {CONTEXT_FOLDER}/")
