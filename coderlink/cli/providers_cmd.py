# -*- coding: utf-8 -*-
"""CLI commands for inspecting providers and saving plan settings."""
from __future__ import annotations

from typing import Optional

import click

from ..config import PlanSettings, load_config, save_config
from .utils import fail, get_app_config_path, get_registry, reported_errors


@click.group("providers")
def providers_group() -> None:
    """Inspect the provider registry and saved plan settings."""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@providers_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all providers and any saved settings."""
    registry = get_registry(ctx)
    with reported_errors():
        config = load_config(get_app_config_path(ctx))

    click.echo("\n=== Providers ===")
    for defn in registry.list_providers():
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {defn.display_name} ({defn.id})")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'openai_url':16s}: {defn.urls.openai}")
        click.echo(
            f"  {'anthropic_url':16s}: "
            f"{defn.urls.anthropic or '(not supported)'}",
        )
        click.echo(f"  {'default_model':16s}: {defn.default_model}")
        if defn.common_models:
            click.echo(
                f"  {'common_models':16s}: "
                f"{', '.join(defn.common_models)}",
            )
        click.echo(f"  {'max_context':16s}: {defn.max_context_size}")
        saved = config.providers.get(defn.id)
        if saved is not None:
            for field in PlanSettings.model_fields:
                value = getattr(saved, field)
                if value:
                    click.echo(f"  {'saved ' + field:16s}: {value}")
    click.echo()


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


@providers_group.command("set")
@click.argument("plan")
@click.option("--base-url", default=None, help="Override the base URL.")
@click.option("--model", default=None, help="Override the model id.")
@click.option("--source", default=None, help="Hosting source variant.")
@click.option(
    "--max-context-size",
    type=click.IntRange(min=1),
    default=None,
)
@click.pass_context
def set_cmd(
    ctx: click.Context,
    plan: str,
    base_url: Optional[str],
    model: Optional[str],
    source: Optional[str],
    max_context_size: Optional[int],
) -> None:
    """Save overrides used when PLAN is loaded into a tool."""
    if get_registry(ctx).get_provider(plan) is None:
        fail(f"Unknown provider: {plan}")

    path = get_app_config_path(ctx)
    with reported_errors():
        config = load_config(path)
        settings = config.providers.get(plan, PlanSettings())
        updates = {
            "base_url": base_url,
            "model": model,
            "source": source,
            "max_context_size": max_context_size,
        }
        settings = settings.model_copy(
            update={k: v for k, v in updates.items() if v is not None},
        )
        config.providers[plan] = settings
        save_config(config, path)
    click.echo(f"✓ Saved settings for {plan}")
