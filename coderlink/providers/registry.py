# -*- coding: utf-8 -*-
"""Built-in provider definitions and registry."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from .errors import ConfigParseError
from .models import (
    Protocol,
    ProtocolMode,
    ProviderDefinition,
    ProviderUrls,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

_GLM_MODELS = ["glm-5", "glm-4.7", "glm-4.7-flash", "glm-4.7-flashx"]

PROVIDER_GLM_GLOBAL = ProviderDefinition(
    id="glm_coding_plan_global",
    display_name="GLM Coding Plan (Global)",
    urls=ProviderUrls(
        openai="https://api.z.ai/api/coding/paas/v4",
        anthropic="https://api.z.ai/api/anthropic",
    ),
    default_model="glm-5",
    default_model_name="GLM (Global)",
    common_models=_GLM_MODELS,
    detection_patterns=["api.z.ai"],
    supports_thinking=True,
    max_context_size=128000,
    url_style="glm",
)

PROVIDER_GLM_CHINA = ProviderDefinition(
    id="glm_coding_plan_china",
    display_name="GLM Coding Plan (China)",
    urls=ProviderUrls(
        openai="https://open.bigmodel.cn/api/coding/paas/v4",
        anthropic="https://open.bigmodel.cn/api/anthropic",
    ),
    default_model="glm-5",
    default_model_name="GLM (China)",
    common_models=_GLM_MODELS,
    detection_patterns=["open.bigmodel.cn"],
    supports_thinking=True,
    max_context_size=128000,
    url_style="glm",
)

# Kimi does not support the Anthropic protocol.
PROVIDER_KIMI = ProviderDefinition(
    id="kimi",
    display_name="Kimi (Moonshot)",
    urls=ProviderUrls(openai="https://api.moonshot.ai/v1"),
    default_model="moonshot-ai/kimi-k2.5",
    default_model_name="Kimi K2.5",
    common_models=["moonshot-ai/kimi-k2.5", "moonshot-ai/kimi-k2-thinking"],
    detection_patterns=["api.moonshot.ai", "moonshot"],
    supports_thinking=True,
    native_source="moonshot",
    config_key="moonshot",
    max_context_size=262144,
)

PROVIDER_OPENROUTER = ProviderDefinition(
    id="openrouter",
    display_name="OpenRouter",
    urls=ProviderUrls(
        openai="https://openrouter.ai/api/v1",
        anthropic="https://openrouter.ai/api",
    ),
    default_model="moonshotai/kimi-k2.5",
    default_model_name="Kimi K2.5 (OpenRouter)",
    common_models=[
        "openrouter/pony-alpha",
        "anthropic/claude-opus-4.6",
        "qwen/qwen3-coder-next",
    ],
    detection_patterns=["openrouter.ai"],
    max_context_size=16384,
    url_style="openrouter",
)

# NVIDIA does not support the Anthropic protocol.
PROVIDER_NVIDIA = ProviderDefinition(
    id="nvidia",
    display_name="NVIDIA NIM",
    urls=ProviderUrls(openai="https://integrate.api.nvidia.com/v1"),
    default_model="moonshotai/kimi-k2.5",
    default_model_name="Kimi K2.5 (NVIDIA)",
    common_models=[
        "moonshotai/kimi-k2.5",
        "deepseek-ai/deepseek-v3.2",
        "meta/llama-3.3-70b-instruct",
        "meta/llama-4-maverick-17b-128e-instruct",
        "qwen/qwen3-coder-480b-a35b-instruct",
        "z-ai/glm4.7",
        "nvidia/llama-3.3-nemotron-super-49b-v1.5",
    ],
    detection_patterns=["integrate.api.nvidia.com", "nvidia.com"],
    max_context_size=4096,
)

PROVIDER_LMSTUDIO = ProviderDefinition(
    id="lmstudio",
    display_name="LM Studio (Local)",
    urls=ProviderUrls(
        openai="http://localhost:1234/v1",
        anthropic="http://localhost:1234",
    ),
    default_model="lmstudio-community",
    common_models=[
        "lmstudio-community",
        "deepseek-coder-v3",
        "codellama/13b",
        "mistral-7b-instruct",
        "qwen2.5-coder-7b",
    ],
    detection_patterns=[
        "localhost:1234",
        "localhost:1235",
        "127.0.0.1:1234",
        "127.0.0.1:1235",
    ],
    max_context_size=262144,
    url_style="lmstudio",
)

PROVIDER_ALIBABA = ProviderDefinition(
    id="alibaba",
    display_name="Alibaba Coding Plan",
    urls=ProviderUrls(
        openai="https://coding-intl.dashscope.aliyuncs.com/v1",
        anthropic="https://coding-intl.dashscope.aliyuncs.com/apps/anthropic",
    ),
    default_model="qwen3-coder-plus",
    common_models=[
        "qwen3-coder-plus",
        "qwen3-max",
        "qwen3-max-preview",
        "qwen-plus",
        "qwen-flash",
        "qwen-turbo",
        "qwen3-coder-flash",
    ],
    detection_patterns=["coding-intl.dashscope.aliyuncs.com"],
    max_context_size=262144,
    url_style="alibaba",
)

PROVIDER_ALIBABA_API = ProviderDefinition(
    id="alibaba_api",
    display_name="Alibaba Model Studio API (Singapore)",
    urls=ProviderUrls(
        openai="https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
        anthropic="https://dashscope-intl.aliyuncs.com/apps/anthropic",
    ),
    default_model="qwen3-max-2026-01-23",
    common_models=[
        "qwen3-max-2026-01-23",
        "qwen3-max",
        "qwen-plus",
        "qwen-turbo",
        "qwen3-coder-plus",
    ],
    detection_patterns=[
        "dashscope-intl.aliyuncs.com",
        "dashscope.aliyuncs.com/compatible-mode",
    ],
    max_context_size=262144,
    # qwen3-max has a lower output limit
    max_output_tokens=65536,
    url_style="alibaba",
)

PROVIDER_ZENMUX = ProviderDefinition(
    id="zenmux",
    display_name="ZenMux",
    urls=ProviderUrls(
        openai="https://zenmux.ai/api/v1",
        anthropic="https://zenmux.ai/api/anthropic",
    ),
    default_model="volcengine/doubao-seed-2.0-code",
    common_models=["volcengine/doubao-seed-2.0-code"],
    detection_patterns=["zenmux.ai"],
    supports_thinking=True,
    max_context_size=256000,
    max_output_tokens=32000,
    url_style="zenmux",
)

# Registry: plan id -> ProviderDefinition
PROVIDERS: Dict[str, ProviderDefinition] = {
    p.id: p
    for p in (
        PROVIDER_GLM_GLOBAL,
        PROVIDER_GLM_CHINA,
        PROVIDER_KIMI,
        PROVIDER_OPENROUTER,
        PROVIDER_NVIDIA,
        PROVIDER_LMSTUDIO,
        PROVIDER_ALIBABA,
        PROVIDER_ALIBABA_API,
        PROVIDER_ZENMUX,
    )
}

PROVIDER_ALIASES: Dict[str, str] = {"moonshot": "kimi"}

DEFAULT_IDENTITY = "kimi"

# ---------------------------------------------------------------------------
# Source variants (hosting channels of the same provider identity)
# ---------------------------------------------------------------------------

# source -> plan whose endpoint hosts it
SOURCE_PLANS: Dict[str, str] = {
    "moonshot": "kimi",
    "nvidia": "nvidia",
    "openrouter": "openrouter",
    "glm-global": "glm_coding_plan_global",
    "glm-china": "glm_coding_plan_china",
}

SOURCE_MODEL_NAMES: Dict[str, str] = {
    "nvidia": "Kimi K2.5 (NVIDIA)",
    "openrouter": "Kimi K2.5 (OpenRouter)",
    "glm-global": "GLM (Global)",
    "glm-china": "GLM (China)",
    "custom": "Custom Model",
}

# Host fragment -> plan, checked in order; first match wins.
SOURCE_HOST_FRAGMENTS = (
    ("openrouter.ai", "openrouter"),
    ("nvidia.com", "nvidia"),
)


def normalize_source(source: Optional[str]) -> str:
    return (source or "").strip().lower()


def _strip_trailing_slashes(url: str) -> str:
    return re.sub(r"/+$", "", url)


# ---------------------------------------------------------------------------
# URL normalization rules (keyed by ProviderDefinition.url_style)
# ---------------------------------------------------------------------------


def _normalize_glm_url(url: str, protocol: Protocol, defn) -> str:
    if protocol != Protocol.ANTHROPIC:
        return url
    lower = url.lower()
    if lower.endswith("/api/anthropic"):
        return url
    if lower.endswith("/api/coding/paas/v4"):
        return re.sub(
            r"/api/coding/paas/v4$",
            "/api/anthropic",
            url,
            flags=re.I,
        )
    return defn.urls.anthropic or url


def _normalize_openrouter_url(url: str, protocol: Protocol, defn) -> str:
    if protocol != Protocol.ANTHROPIC:
        return url
    lower = url.lower()
    if lower.endswith("/api/v1"):
        return re.sub(r"/api/v1$", "/api", url, flags=re.I)
    if lower.endswith("/v1"):
        return re.sub(r"/v1$", "", url, flags=re.I)
    if lower.endswith("/api"):
        return url
    return f"{url}/api" if "openrouter.ai" in lower else url


def _normalize_alibaba_url(url: str, protocol: Protocol, defn) -> str:
    if protocol != Protocol.ANTHROPIC:
        return url
    lower = url.lower()
    if "/apps/anthropic" in lower:
        return url
    if "/compatible-mode/v1" in lower:
        return re.sub(
            r"/compatible-mode/v1$",
            "/apps/anthropic",
            url,
            flags=re.I,
        )
    if lower.endswith("/v1"):
        return re.sub(r"/v1$", "/apps/anthropic", url, flags=re.I)
    return defn.urls.anthropic or url


def _normalize_zenmux_url(url: str, protocol: Protocol, defn) -> str:
    if protocol != Protocol.ANTHROPIC:
        return url
    lower = url.lower()
    if lower.endswith("/api/anthropic"):
        return url
    if lower.endswith("/api/v1"):
        return re.sub(r"/api/v1$", "/api/anthropic", url, flags=re.I)
    if lower.endswith("/v1"):
        return re.sub(r"/v1$", "/api/anthropic", url, flags=re.I)
    return defn.urls.anthropic or url


def normalize_lmstudio_url(url: str, protocol: Protocol) -> str:
    """LM Studio serves Anthropic at the root and OpenAI under ``/v1``."""
    normalized = _strip_trailing_slashes(url)
    has_v1 = normalized.lower().endswith("/v1")
    if protocol == Protocol.ANTHROPIC:
        return normalized[: -len("/v1")] if has_v1 else normalized
    return normalized if has_v1 else f"{normalized}/v1"


_URL_NORMALIZERS = {
    "glm": _normalize_glm_url,
    "openrouter": _normalize_openrouter_url,
    "alibaba": _normalize_alibaba_url,
    "zenmux": _normalize_zenmux_url,
    "lmstudio": lambda url, protocol, defn: normalize_lmstudio_url(
        url,
        protocol,
    ),
}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ProviderRegistry:
    """Lookup over a table of provider definitions. No I/O after init."""

    def __init__(
        self,
        providers: Optional[Iterable[ProviderDefinition]] = None,
        aliases: Optional[Dict[str, str]] = None,
    ) -> None:
        if providers is None:
            providers = PROVIDERS.values()
        self._providers: Dict[str, ProviderDefinition] = {
            p.id: p for p in providers
        }
        self._aliases = dict(PROVIDER_ALIASES if aliases is None else aliases)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ProviderRegistry":
        """Overlay a JSON table of definitions onto the built-ins.

        The table is either a list of definitions or a mapping of
        plan id to definition.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
            if isinstance(raw, dict):
                rows = [{"id": k, **v} for k, v in raw.items()]
            elif isinstance(raw, list):
                rows = raw
            else:
                raise ValueError("registry table must be a list or object")
            overlay = [ProviderDefinition.model_validate(r) for r in rows]
        except (OSError, ValueError, ValidationError, TypeError) as exc:
            logger.error("Failed to load provider registry %s: %s", path, exc)
            raise ConfigParseError(
                f"Invalid provider registry at {path}",
                path,
            ) from exc

        merged = dict(PROVIDERS)
        merged.update({p.id: p for p in overlay})
        logger.debug(
            "Loaded %d provider definitions from %s",
            len(overlay),
            path,
        )
        return cls(merged.values())

    # -- lookup -----------------------------------------------------------

    def _plan_id(self, identity: str) -> str:
        identity = (identity or "").strip().lower()
        return self._aliases.get(identity, identity)

    def get_provider(self, identity: str) -> Optional[ProviderDefinition]:
        """Return a provider definition by id or alias, or None."""
        return self._providers.get(self._plan_id(identity))

    def _require(self, identity: str) -> ProviderDefinition:
        defn = self.get_provider(identity)
        if defn is None:
            defn = self._providers[DEFAULT_IDENTITY]
        return defn

    def list_providers(self) -> List[ProviderDefinition]:
        return list(self._providers.values())

    def canonical_key(self, identity: str) -> str:
        """Key under ``providers`` in a tool document."""
        defn = self.get_provider(identity)
        if defn is None:
            return self._plan_id(identity)
        return defn.config_key or defn.id

    def get_default_model(self, identity: str) -> str:
        return self._require(identity).default_model

    def get_max_context_size(self, identity: str) -> int:
        return self._require(identity).max_context_size

    def get_max_output_tokens(
        self,
        identity: str,
        model: Optional[str] = None,
    ) -> int:
        if model and "qwen3-max" in model:
            return 65536
        return self._require(identity).max_output_tokens

    def supports_protocol(self, identity: str, protocol: Protocol) -> bool:
        if Protocol(protocol) == Protocol.ANTHROPIC:
            return self._require(identity).urls.anthropic is not None
        return True

    def get_base_url(self, identity: str, protocol: Protocol) -> str:
        urls = self._require(identity).urls
        if Protocol(protocol) == Protocol.ANTHROPIC:
            return urls.anthropic or urls.openai
        return urls.openai

    # -- resolution -------------------------------------------------------

    def resolve_base_url(
        self,
        identity: str,
        source: Optional[str] = None,
    ) -> str:
        """OpenAI-compatible endpoint of *identity* as hosted by *source*."""
        plan = SOURCE_PLANS.get(normalize_source(source))
        if plan and plan in self._providers:
            return self._providers[plan].urls.openai
        return self._require(identity).urls.openai

    def resolve_protocol(self, identity: str) -> ProtocolMode:
        return self._require(identity).api_mode

    def supports_reasoning(
        self,
        source: Optional[str] = None,
        identity: str = DEFAULT_IDENTITY,
    ) -> bool:
        """Extended thinking is only available on the native API."""
        defn = self._require(identity)
        if not defn.supports_thinking:
            return False
        return normalize_source(source) in ("", defn.native_source)

    def display_name(
        self,
        source: Optional[str] = None,
        identity: str = DEFAULT_IDENTITY,
    ) -> str:
        name = SOURCE_MODEL_NAMES.get(normalize_source(source))
        if name:
            return name
        defn = self._require(identity)
        return defn.default_model_name or defn.display_name

    def resolve_provider_base_url(
        self,
        identity: str,
        protocol: Protocol,
        base_url: Optional[str] = None,
        anthropic_base_url: Optional[str] = None,
    ) -> Optional[str]:
        """Resolve a base URL for *protocol*, normalizing user overrides.

        Priority: protocol-specific override, generic override, default.
        Returns None when the provider does not speak *protocol*.
        """
        protocol = Protocol(protocol)
        defn = self._require(identity)
        if not self.supports_protocol(defn.id, protocol):
            return None

        override = (base_url or "").strip()
        if protocol == Protocol.ANTHROPIC:
            override = (anthropic_base_url or "").strip() or override
        if not override:
            return self.get_base_url(defn.id, protocol)

        normalizer = _URL_NORMALIZERS.get(defn.url_style)
        url = _strip_trailing_slashes(override)
        if normalizer is None:
            return url
        return normalizer(url, protocol, defn)

    # -- detection --------------------------------------------------------

    def detect_plan_from_url(self, base_url: Optional[str]) -> Optional[str]:
        """Return the first plan whose detection pattern is in the URL."""
        normalized = _strip_trailing_slashes((base_url or "").lower())
        if not normalized:
            return None
        for plan_id, defn in self._providers.items():
            for pattern in defn.detection_patterns:
                if pattern.lower() in normalized:
                    return plan_id
        return None

    def classify_source(
        self,
        base_url: Optional[str],
        default: str = DEFAULT_IDENTITY,
    ) -> str:
        """Classify the hosting plan of a stored base URL.

        Substring heuristic: a custom URL that happens to contain a
        known host fragment is classified as that host.
        """
        if isinstance(base_url, str):
            lower = base_url.lower()
            for fragment, plan in SOURCE_HOST_FRAGMENTS:
                if fragment in lower:
                    return plan
        return default
