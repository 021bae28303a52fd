"""Click application entrypoint for readsieve."""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from types import FrameType
from typing import Optional

import click

from readsieve import __version__
from readsieve.cli.exit_codes import (
    EXIT_SUCCESS,
    EXIT_ERROR,
    EXIT_SIGINT,
    EXIT_SIGTERM,
)
from readsieve.config import Config, FilterConfig, load_config
from readsieve.core.fastq import FastqSink, read_fastq
from readsieve.core.pipeline import PipelineDriver
from readsieve.exceptions import ReadSieveError
from readsieve.utils.logging import get_logger, level_from_verbosity, setup_logging

from .commands.config import init_config
from .common_options import (
    config_option,
    contam_option,
    crop_options,
    log_file_option,
    maxlength_option,
    minlength_option,
    phred_offset_option,
    quality_option,
    threads_option,
    verbose_option,
)


def _handle_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Handle interrupt signals for graceful shutdown."""
    sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
    click.echo(f"\n{sig_name} received, stopping...", err=True)
    raise KeyboardInterrupt(sig_name)


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"readsieve {__version__}")
        ctx.exit()


_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_filter_config(cfg: Config, **overrides) -> FilterConfig:
    """Apply CLI flags on top of the file/default configuration and validate."""
    filter_cfg = cfg.filter.with_overrides(**overrides)
    filter_cfg.validate()
    return filter_cfg


@click.group(
    context_settings=dict(help_option_names=["-h", "--help"]),
    invoke_without_command=True,
)
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
@quality_option
@minlength_option
@maxlength_option
@crop_options
@threads_option
@contam_option
@phred_offset_option
@config_option
@verbose_option
@log_file_option
@click.pass_context
def cli(
    ctx: click.Context,
    minqual: Optional[float],
    minlength: Optional[int],
    maxlength: Optional[int],
    headcrop: Optional[int],
    tailcrop: Optional[int],
    threads: Optional[int],
    contam: Optional[Path],
    phred_offset: Optional[int],
    config: Optional[Path],
    verbose: int,
    log_file: Optional[Path],
) -> None:
    """Filtering and trimming of fastq files. Reads on stdin and writes to stdout."""
    # If a subcommand was invoked, do not filter here
    if ctx.invoked_subcommand:
        return

    setup_logging(level=level_from_verbosity(verbose), log_file=log_file)
    logger = get_logger("cli")

    try:
        cfg = load_config(config) if config else Config()

        # CLI logging flags take precedence over the config file
        if verbose == 0 and log_file is None:
            level = _LEVELS.get(cfg.runtime.log_level.upper(), logging.WARNING)
            if level != logging.WARNING or cfg.runtime.log_file:
                setup_logging(level=level, log_file=cfg.runtime.log_file)

        filter_cfg = resolve_filter_config(
            cfg,
            minqual=minqual,
            minlength=minlength,
            maxlength=maxlength,
            headcrop=headcrop,
            tailcrop=tailcrop,
            threads=threads,
            contam=contam,
            phred_offset=phred_offset,
        )
        logger.debug(f"Filter configuration: {filter_cfg}")

        driver = PipelineDriver(filter_cfg)
        driver.run(read_fastq(sys.stdin), FastqSink(sys.stdout))

    except KeyboardInterrupt as exc:
        logger.info("Filtering interrupted by user")
        sys.exit(EXIT_SIGTERM if str(exc) == "SIGTERM" else EXIT_SIGINT)
    except ReadSieveError as exc:
        logger.error(f"{exc}")
        sys.exit(EXIT_ERROR)
    except BrokenPipeError:
        # Downstream consumer closed the pipe (e.g. `| head`)
        sys.exit(EXIT_SUCCESS)
    except Exception as exc:
        logger.exception(f"Unexpected error: {exc}")
        sys.exit(EXIT_ERROR)


cli.add_command(init_config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point with signal handling."""
    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        cli(argv)
        return EXIT_SUCCESS
    except KeyboardInterrupt as exc:
        return EXIT_SIGTERM if str(exc) == "SIGTERM" else EXIT_SIGINT
    except SystemExit as exc:
        # Preserve explicit exit codes from cli(), including EXIT_USAGE from click
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
