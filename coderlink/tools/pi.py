# -*- coding: utf-8 -*-
"""Pi coding agent: custom providers live in ~/.pi/agent/models.json."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..constant import PI_CONFIG_PATH
from ..providers import (
    ConfigStore,
    DetectResult,
    ProviderRegistry,
    apply_provider_entry,
    merge_provider_entry,
)
from ..providers.merger import OptionsLike, validate_api_key
from .base import ToolManager

logger = logging.getLogger(__name__)

PI_PROVIDER_ID = "moonshot"


class PiManager(ToolManager):
    """Manages the ``moonshot`` provider entry of Pi's models.json."""

    tool_id = "pi"
    display_name = "Pi"

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        registry: Optional[ProviderRegistry] = None,
    ) -> None:
        self.store = ConfigStore(config_path or PI_CONFIG_PATH)
        self.registry = registry or ProviderRegistry()

    @property
    def config_path(self) -> Path:
        return self.store.path

    def detect_current_config(self) -> DetectResult:
        """Best-effort probe; never raises."""
        try:
            if not self.store.exists():
                return DetectResult()
            providers = self.store.read().get("providers")
            provider = None
            if isinstance(providers, dict):
                provider = providers.get(PI_PROVIDER_ID)
            if not isinstance(provider, dict):
                return DetectResult()

            api_key = provider.get("apiKey")
            if not isinstance(api_key, str) or not api_key.strip():
                return DetectResult()

            model = None
            models = provider.get("models")
            if isinstance(models, list) and models:
                first = models[0]
                if isinstance(first, dict) and first.get("id"):
                    model = first["id"]

            plan = self.registry.classify_source(provider.get("baseUrl"))
            return DetectResult(
                plan=plan,
                api_key=api_key.strip(),
                model=model,
            )
        except Exception as e:
            logger.warning(
                "Failed to detect Pi config at %s: %s",
                self.config_path,
                e,
            )
            return DetectResult()

    def load_config(
        self,
        plan: str,
        api_key: str,
        options: OptionsLike = None,
    ) -> None:
        """Write *plan* with *api_key* into the provider entry."""
        validate_api_key(api_key)
        doc = self.store.read()
        entry = merge_provider_entry(
            doc,
            plan,
            api_key,
            options,
            registry=self.registry,
            provider_key=PI_PROVIDER_ID,
        )
        self.store.write(apply_provider_entry(doc, PI_PROVIDER_ID, entry))
        logger.info(
            "Configured Pi provider %s (%s)",
            PI_PROVIDER_ID,
            entry["baseUrl"],
        )

    def unload_config(self) -> None:
        """Blank the API key but keep URL and model customization."""
        if not self.store.exists():
            return
        doc = self.store.read()
        providers = doc.get("providers")
        if not isinstance(providers, dict):
            return
        provider = providers.get(PI_PROVIDER_ID)
        if not isinstance(provider, dict):
            return
        provider["apiKey"] = ""
        self.store.write(doc)
        logger.info("Cleared Pi API key in %s", self.config_path)
