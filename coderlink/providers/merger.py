# -*- coding: utf-8 -*-
"""Merge a resolved provider into an existing tool config document."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import ConfigValidationError
from .models import ModelCost, ModelDescriptor, ProviderEntry, ProviderOptions
from .registry import ProviderRegistry, normalize_source

logger = logging.getLogger(__name__)

OptionsLike = Union[ProviderOptions, Mapping[str, Any], None]


def validate_api_key(api_key: Optional[str]) -> str:
    """Return the trimmed key, rejecting blank ones."""
    if not api_key or not api_key.strip():
        raise ConfigValidationError("API key cannot be empty")
    return api_key.strip()


def coerce_options(options: OptionsLike) -> ProviderOptions:
    if options is None:
        return ProviderOptions()
    if isinstance(options, ProviderOptions):
        return options
    return ProviderOptions.model_validate(dict(options))


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _reconcile_models(
    existing_models: List[Any],
    model_id: str,
    model_name: str,
    reasoning: bool,
    context_size: int,
) -> List[Any]:
    """Apply the configured model to a provider's model list.

    The first element is the configured slot. Extra metadata on existing
    descriptors and every element past the slot are kept.
    """
    if not existing_models:
        descriptor = ModelDescriptor(
            id=model_id,
            name=model_name,
            reasoning=reasoning,
            input=["text"],
            context_window=context_size,
            max_tokens=context_size,
            cost=ModelCost(),
        )
        return [descriptor.model_dump(mode="json", by_alias=True)]

    if any(_as_dict(m).get("id") == model_id for m in existing_models):
        return [
            {**m, "reasoning": reasoning}
            if _as_dict(m).get("id") == model_id
            else m
            for m in existing_models
        ]

    first, rest = _as_dict(existing_models[0]), existing_models[1:]
    name = first.get("name")
    if not (isinstance(name, str) and name.strip()):
        name = model_name
    rewritten = {
        **first,
        "id": model_id,
        "name": name,
        "reasoning": reasoning,
    }
    return [rewritten, *rest]


def merge_provider_entry(
    existing_doc: Mapping[str, Any],
    identity: str,
    api_key: str,
    options: OptionsLike = None,
    registry: Optional[ProviderRegistry] = None,
    provider_key: Optional[str] = None,
) -> Dict[str, Any]:
    """Compute ``providers[<key>]`` for *identity* configured with *api_key*.

    Fields of the existing entry that coderlink does not own are carried
    over verbatim. *existing_doc* is not modified.
    """
    api_key = validate_api_key(api_key)
    registry = registry or ProviderRegistry()
    opts = coerce_options(options)
    source = normalize_source(opts.source)
    key = provider_key or registry.canonical_key(identity)

    base_url = (opts.base_url or "").strip() or registry.resolve_base_url(
        identity,
        source,
    )
    model_id = (opts.model or "").strip() or registry.get_default_model(
        identity,
    )
    reasoning = registry.supports_reasoning(source, identity)
    model_name = registry.display_name(source, identity)

    existing = _as_dict(_as_dict(existing_doc.get("providers")).get(key))
    existing_models = existing.get("models")
    models = _reconcile_models(
        existing_models if isinstance(existing_models, list) else [],
        model_id,
        model_name,
        reasoning,
        opts.max_context_size or registry.get_max_context_size(identity),
    )

    owned = ProviderEntry(
        base_url=base_url,
        api=registry.resolve_protocol(identity),
        api_key=api_key,
        auth_header=True,
        models=models,
    )
    logger.debug(
        "Merged provider %s: base_url=%s model=%s reasoning=%s",
        key,
        base_url,
        model_id,
        reasoning,
    )
    return {**existing, **owned.to_json()}


def apply_provider_entry(
    doc: Mapping[str, Any],
    provider_key: str,
    entry: Dict[str, Any],
) -> Dict[str, Any]:
    """Return a copy of *doc* with ``providers[provider_key]`` replaced."""
    new_doc = dict(doc)
    providers = dict(_as_dict(new_doc.get("providers")))
    providers[provider_key] = entry
    new_doc["providers"] = providers
    return new_doc
