# -*- coding: utf-8 -*-
"""Load/save config.json and turn saved plan settings into options."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from ..constant import CONFIG_FILE, KIMI_LIKE_PLANS, WORKING_DIR
from ..providers import (
    ConfigParseError,
    ConfigStore,
    ProviderOptions,
    ProviderRegistry,
)
from .config import Config

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    return WORKING_DIR / CONFIG_FILE


def load_config(path: Optional[Path] = None) -> Config:
    """Load config.json; a missing or empty file yields defaults."""
    if path is None:
        path = get_config_path()
    raw = ConfigStore(path).read()
    try:
        return Config.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid config %s: %s", path, exc)
        raise ConfigParseError(f"Invalid config at {path}", path) from exc


def save_config(config: Config, path: Optional[Path] = None) -> None:
    if path is None:
        path = get_config_path()
    ConfigStore(path).write(config.model_dump(mode="json"))


def provider_options_for(
    config: Config,
    plan: str,
    registry: Optional[ProviderRegistry] = None,
) -> Tuple[str, ProviderOptions]:
    """Map a plan to the identity and options a tool manager expects.

    Kimi-like plans are all written as ``kimi``; the hosting channel is
    carried in ``source``. Cross-hosted plans without saved settings get
    the host's own model id and context ceiling.
    """
    settings = config.providers.get(plan)
    options = ProviderOptions()
    if settings is not None:
        options = ProviderOptions(
            base_url=settings.base_url or None,
            model=settings.model or None,
            source=settings.source or None,
            max_context_size=settings.max_context_size,
        )
    if plan not in KIMI_LIKE_PLANS:
        return plan, options
    if plan == "kimi":
        return "kimi", options

    registry = registry or ProviderRegistry()
    defaults = {
        "source": plan,
        "model": registry.get_default_model(plan),
        "max_context_size": registry.get_max_context_size(plan),
    }
    options = options.model_copy(
        update={
            k: v for k, v in defaults.items() if not getattr(options, k)
        },
    )
    return "kimi", options
