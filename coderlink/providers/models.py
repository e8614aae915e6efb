# -*- coding: utf-8 -*-
"""Pydantic data models for providers, models and tool config entries."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ProtocolMode(str, Enum):
    """Wire API shape written to a tool's provider entry (``api``)."""

    # Despite the name, this is OpenAI *Chat Completions*.
    OPENAI_COMPLETIONS = "openai-completions"
    OPENAI_RESPONSES = "openai-responses"
    ANTHROPIC_MESSAGES = "anthropic-messages"
    GOOGLE_GENERATIVE_AI = "google-generative-ai"


class Protocol(str, Enum):
    """Endpoint family used when deriving base URLs."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ---------------------------------------------------------------------------
# Registry data
# ---------------------------------------------------------------------------


class ProviderUrls(BaseModel):
    """Base URLs per protocol family."""

    openai: str = Field(..., description="OpenAI-compatible base URL")
    anthropic: Optional[str] = Field(
        default=None,
        description="Anthropic-compatible base URL, None if unsupported",
    )


class ProviderDefinition(BaseModel):
    """Static definition of a provider plan."""

    id: str = Field(..., description="Plan identifier")
    display_name: str = Field(..., description="Human-readable name")
    urls: ProviderUrls
    default_model: str = Field(..., description="Default model ID")
    default_model_name: str = Field(
        default="",
        description="Display name of the default model",
    )
    common_models: List[str] = Field(default_factory=list)
    detection_patterns: List[str] = Field(
        default_factory=list,
        description="Substrings identifying this provider in a base URL",
    )
    supports_thinking: bool = False
    native_source: str = Field(
        default="",
        description="Source name meaning the provider's own hosting",
    )
    config_key: str = Field(
        default="",
        description="Provider key inside a tool's config document",
    )
    api_mode: ProtocolMode = ProtocolMode.OPENAI_COMPLETIONS
    max_context_size: int = Field(default=128000, gt=0)
    max_output_tokens: int = Field(default=131072, gt=0)
    url_style: str = Field(
        default="",
        description="URL normalization rule family",
    )


# ---------------------------------------------------------------------------
# Tool config entries (on-disk, camelCase)
# ---------------------------------------------------------------------------


class ModelCost(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    input: Union[int, float] = Field(default=0, ge=0)
    output: Union[int, float] = Field(default=0, ge=0)
    cache_read: Union[int, float] = Field(
        default=0,
        ge=0,
        alias="cacheRead",
    )
    cache_write: Union[int, float] = Field(
        default=0,
        ge=0,
        alias="cacheWrite",
    )


class ModelDescriptor(BaseModel):
    """One model of a provider entry.

    The first descriptor of an entry's ``models`` list is the configured
    model; detection and reconfiguration rely on that position.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., min_length=1)
    name: str = ""
    reasoning: bool = False
    input: List[str] = Field(default_factory=lambda: ["text"])
    context_window: int = Field(..., gt=0, alias="contextWindow")
    max_tokens: int = Field(..., gt=0, alias="maxTokens")
    cost: ModelCost = Field(default_factory=ModelCost)


class ProviderEntry(BaseModel):
    """Fields of ``providers[<id>]`` owned by coderlink."""

    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(..., alias="baseUrl")
    api: ProtocolMode
    api_key: str = Field(..., alias="apiKey")
    auth_header: bool = Field(default=True, alias="authHeader")
    models: List[Any] = Field(..., min_length=1)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Call surface
# ---------------------------------------------------------------------------


class ProviderOptions(BaseModel):
    """Optional overrides for a load. Unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    model: Optional[str] = None
    source: Optional[str] = None
    max_context_size: Optional[int] = Field(
        default=None,
        alias="maxContextSize",
    )


class DetectResult(BaseModel):
    """What a tool is currently configured with."""

    plan: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.plan and self.api_key)
