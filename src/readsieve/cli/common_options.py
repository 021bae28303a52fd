"""Shared Click options for the readsieve CLI.

Filter options default to None so that values from a --config file are only
overridden when the flag is actually given.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

from readsieve.constants import (
    DEFAULT_HEADCROP,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    DEFAULT_MIN_QUALITY,
    DEFAULT_TAILCROP,
    DEFAULT_THREADS,
    PHRED_OFFSET,
)

F = TypeVar("F", bound=Callable[..., None])


def quality_option(func: F) -> F:
    """Minimum average quality option."""
    return click.option(
        "-q",
        "--quality",
        "minqual",
        type=float,
        default=None,
        help=f"Sets a minimum Phred average quality score [default: {DEFAULT_MIN_QUALITY:g}]",
    )(func)


def minlength_option(func: F) -> F:
    return click.option(
        "-l",
        "--minlength",
        type=click.IntRange(min=1),
        default=None,
        help=f"Sets a minimum read length [default: {DEFAULT_MIN_LENGTH}]",
    )(func)


def maxlength_option(func: F) -> F:
    return click.option(
        "--maxlength",
        type=click.IntRange(min=1),
        default=None,
        help=f"Sets a maximum read length [default: {DEFAULT_MAX_LENGTH}]",
    )(func)


def crop_options(func: F) -> F:
    """Head and tail crop options."""
    func = click.option(
        "--tailcrop",
        type=click.IntRange(min=0),
        default=None,
        help=f"Trim N nucleotides from the end of a read [default: {DEFAULT_TAILCROP}]",
    )(func)
    return click.option(
        "--headcrop",
        type=click.IntRange(min=0),
        default=None,
        help=f"Trim N nucleotides from the start of a read [default: {DEFAULT_HEADCROP}]",
    )(func)


def threads_option(func: F) -> F:
    """Threads option."""
    return click.option(
        "-t",
        "--threads",
        type=click.IntRange(min=1),
        default=None,
        help=f"Use N parallel threads [default: {DEFAULT_THREADS}]",
    )(func)


def contam_option(func: F) -> F:
    """Contamination reference option."""
    return click.option(
        "-c",
        "--contam",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Filter contaminants against a fasta",
    )(func)


def phred_offset_option(func: F) -> F:
    return click.option(
        "--phred-offset",
        type=click.IntRange(min=0),
        default=None,
        help=f"ASCII offset of quality characters [default: {PHRED_OFFSET}]",
    )(func)


def config_option(func: F) -> F:
    """Configuration file option."""
    return click.option(
        "--config",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Configuration file (YAML)",
    )(func)


def verbose_option(func: F) -> F:
    """Verbosity option (unified: use -v/--verbose everywhere)."""
    return click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )(func)


def log_file_option(func: F) -> F:
    return click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Path for log file output",
    )(func)
