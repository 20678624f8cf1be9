"""Logging setup for the ctx CLI."""

from __future__ import annotations

import logging
import os
import sys

import colorlog

LOG_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# colorlog colors the level prefix only, the message stays plain
COLOR_LOG_FORMAT = "%(log_color)s[%(asctime)s] <%(name)s> %(levelname)s:%(reset)s %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "bold_yellow",
    "ERROR": "bold_red",
    "CRITICAL": "bold_red,bg_white",
}


def _use_color() -> bool:
    """Color stderr only for an interactive terminal and when NO_COLOR is unset."""
    return os.getenv("NO_COLOR") is None and sys.stderr.isatty()


def _make_formatter() -> logging.Formatter:
    if _use_color():
        return colorlog.ColoredFormatter(
            fmt=COLOR_LOG_FORMAT,
            log_colors=LOG_COLORS,
            datefmt=LOG_DATEFMT,
        )
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)


def configure_logging(verbose: bool) -> None:
    """
    Route log records to stderr for a CLI run.

    Command results go through click.echo, so by default only warnings
    (e.g. a recreated manifest or a replaced .ai-context/) are shown;
    `verbose` enables debug messages including every API request.
    Any previously installed root handler is replaced.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(_make_formatter())
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[handler],
        force=True,
    )
