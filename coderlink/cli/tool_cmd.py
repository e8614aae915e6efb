# -*- coding: utf-8 -*-
"""CLI commands for pointing a coding tool at a provider."""
from __future__ import annotations

from typing import Optional

import click

from ..config import load_config, provider_options_for, save_config
from ..providers import mask_api_key
from ..tools import ToolManager, get_supported_tools, get_tool_manager
from .utils import fail, get_app_config_path, get_registry, reported_errors


def _manager(ctx: click.Context, tool: str) -> ToolManager:
    if tool not in get_supported_tools():
        fail(f"Unsupported tool: {tool}")
    obj = ctx.find_root().obj or {}
    kwargs = {"registry": get_registry(ctx)}
    tool_paths = obj.get("tool_paths") or {}
    if tool in tool_paths:
        kwargs["config_path"] = tool_paths[tool]
    return get_tool_manager(tool, **kwargs)


def _describe(manager: ToolManager) -> str:
    detected = manager.detect_current_config()
    if not detected.configured:
        return "(not configured)"
    text = f"{detected.plan} / {mask_api_key(detected.api_key)}"
    if detected.model:
        text += f" / {detected.model}"
    return text


@click.group("tool")
def tool_group() -> None:
    """Load or unload provider config in coding tools."""


# ---------------------------------------------------------------------------
# list / status
# ---------------------------------------------------------------------------


@tool_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show supported tools and what they are configured with."""
    for tool in get_supported_tools():
        click.echo(f"  {tool:16s}: {_describe(_manager(ctx, tool))}")


@tool_group.command("status")
@click.argument("tool")
@click.pass_context
def status_cmd(ctx: click.Context, tool: str) -> None:
    """Show the provider TOOL is configured with."""
    click.echo(f"  {tool:16s}: {_describe(_manager(ctx, tool))}")


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


@tool_group.command("load")
@click.argument("tool")
@click.argument("plan")
@click.option(
    "--api-key",
    prompt="API key",
    hide_input=True,
    help="Provider API key (prompted when omitted).",
)
@click.option("--base-url", default=None, help="Override the base URL.")
@click.option("--model", default=None, help="Override the model id.")
@click.option("--source", default=None, help="Hosting source variant.")
@click.pass_context
def load_cmd(
    ctx: click.Context,
    tool: str,
    plan: str,
    api_key: str,
    base_url: Optional[str],
    model: Optional[str],
    source: Optional[str],
) -> None:
    """Configure TOOL to use PLAN with the given API key.

    Saved plan settings apply unless overridden on the command line.
    """
    manager = _manager(ctx, tool)
    if get_registry(ctx).get_provider(plan) is None:
        fail(f"Unknown provider: {plan}")

    path = get_app_config_path(ctx)
    with reported_errors():
        config = load_config(path)
        identity, options = provider_options_for(
            config,
            plan,
            get_registry(ctx),
        )
        updates = {"base_url": base_url, "model": model, "source": source}
        options = options.model_copy(
            update={k: v for k, v in updates.items() if v is not None},
        )
        manager.load_config(identity, api_key, options)
        config.last_plan = plan
        save_config(config, path)

    click.echo(
        f"✓ {manager.display_name} — {plan}, "
        f"API Key: {mask_api_key(api_key.strip())}",
    )


# ---------------------------------------------------------------------------
# unload
# ---------------------------------------------------------------------------


@tool_group.command("unload")
@click.argument("tool")
@click.pass_context
def unload_cmd(ctx: click.Context, tool: str) -> None:
    """Remove the API key from TOOL, keeping its other settings."""
    manager = _manager(ctx, tool)
    with reported_errors():
        manager.unload_config()
    click.echo(f"✓ {manager.display_name} — API key removed")
