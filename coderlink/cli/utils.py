# -*- coding: utf-8 -*-
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click

from ..config import get_config_path
from ..providers import CoderLinkError, ProviderRegistry


def get_registry(ctx: click.Context) -> ProviderRegistry:
    obj = ctx.find_root().obj or {}
    return obj.get("registry") or ProviderRegistry()


def get_app_config_path(ctx: click.Context) -> Path:
    obj = ctx.find_root().obj or {}
    path: Optional[Path] = obj.get("config_path")
    return Path(path) if path else get_config_path()


def fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn core errors into a red message and exit status 1."""
    try:
        yield
    except CoderLinkError as e:
        fail(str(e))
