# -*- coding: utf-8 -*-
"""Provider management — models, registry, merge + JSON store."""

from .errors import (
    CoderLinkError,
    ConfigParseError,
    ConfigValidationError,
    ConfigWriteError,
    UnsupportedOperationError,
)
from .merger import (
    apply_provider_entry,
    merge_provider_entry,
)
from .models import (
    DetectResult,
    ModelCost,
    ModelDescriptor,
    Protocol,
    ProtocolMode,
    ProviderDefinition,
    ProviderEntry,
    ProviderOptions,
    ProviderUrls,
)
from .registry import (
    PROVIDERS,
    ProviderRegistry,
)
from .store import (
    ConfigStore,
    mask_api_key,
)

__all__ = [
    # errors
    "CoderLinkError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigWriteError",
    "UnsupportedOperationError",
    # merger
    "apply_provider_entry",
    "merge_provider_entry",
    # models
    "DetectResult",
    "ModelCost",
    "ModelDescriptor",
    "Protocol",
    "ProtocolMode",
    "ProviderDefinition",
    "ProviderEntry",
    "ProviderOptions",
    "ProviderUrls",
    # registry
    "PROVIDERS",
    "ProviderRegistry",
    # store
    "ConfigStore",
    "mask_api_key",
]
