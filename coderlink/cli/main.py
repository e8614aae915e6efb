# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os

import click

from .. import __version__
from ..constant import LOG_LEVEL_DEFAULT, LOG_LEVEL_ENV, REGISTRY_FILE
from ..providers import CoderLinkError, ProviderRegistry
from .providers_cmd import providers_group
from .tool_cmd import tool_group

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@click.group()
@click.version_option(__version__, prog_name="coderlink")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or {LOG_LEVEL_DEFAULT}).",
)
@click.option(
    "--registry",
    "registry_file",
    type=click.Path(dir_okay=False),
    default=REGISTRY_FILE or None,
    help="JSON table overlaid onto the built-in provider registry.",
)
@click.pass_context
def cli(ctx: click.Context, log_level, registry_file) -> None:
    """Point AI coding tools at your provider account."""
    setup_logging(
        log_level or os.environ.get(LOG_LEVEL_ENV, LOG_LEVEL_DEFAULT),
    )
    ctx.ensure_object(dict)
    if "registry" in ctx.obj:
        return
    try:
        ctx.obj["registry"] = (
            ProviderRegistry.from_file(registry_file)
            if registry_file
            else ProviderRegistry()
        )
    except CoderLinkError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1) from e


cli.add_command(providers_group)
cli.add_command(tool_group)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
