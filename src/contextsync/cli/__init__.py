"""ContextSync command-line interface."""

from importlib.metadata import version

import click

from ..config import ConfigStore
from .logger import configure_logging

_PACKAGE_NAME = "contextsync"


def _get_version() -> str:
    """Return the installed package version string."""
    return version(_PACKAGE_NAME)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s", package_name=_PACKAGE_NAME)
@click.option(
    "--config-dir",
    envvar="CONTEXTSYNC_CONFIG_DIR",
    default=None,
    type=click.Path(file_okay=False),
    help="Config directory (default: ~/.contextsync)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_dir: str | None, verbose: bool) -> None:
    """ContextSync: sync .ai-context/ documents across machines via GitHub Gists."""
    configure_logging(verbose)
    ctx.obj = ConfigStore(config_dir)


@cli.command(hidden=True)
def help() -> None:
    """Show usage information."""
    click.echo('Use "ctx --help" for usage information.')
    click.echo('Use "ctx <command> --help" for help on a specific command.')


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(_get_version())


# Register subcommands (must be after cli is defined)
from . import init_cmd as _init_cmd  # noqa: E402, F401
from . import pull as _pull  # noqa: E402, F401
from . import push as _push  # noqa: E402, F401
from . import status as _status  # noqa: E402, F401
