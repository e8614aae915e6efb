# tests/providers/test_registry.py
import json

import pytest

from coderlink.providers import (
    ConfigParseError,
    Protocol,
    ProtocolMode,
    ProviderRegistry,
)


@pytest.fixture
def registry():
    return ProviderRegistry()


def test_moonshot_is_alias_for_kimi(registry):
    assert registry.get_provider("moonshot").id == "kimi"
    assert registry.canonical_key("kimi") == "moonshot"
    assert registry.canonical_key("openrouter") == "openrouter"


def test_unknown_identity_returns_none(registry):
    assert registry.get_provider("nope") is None
    # Resolution falls back to the default identity.
    assert registry.get_default_model("nope") == "moonshot-ai/kimi-k2.5"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", "https://api.moonshot.ai/v1"),
        (None, "https://api.moonshot.ai/v1"),
        ("moonshot", "https://api.moonshot.ai/v1"),
        ("nvidia", "https://integrate.api.nvidia.com/v1"),
        (" OpenRouter ", "https://openrouter.ai/api/v1"),
        ("glm-global", "https://api.z.ai/api/coding/paas/v4"),
        ("glm-china", "https://open.bigmodel.cn/api/coding/paas/v4"),
        ("custom", "https://api.moonshot.ai/v1"),
    ],
)
def test_resolve_base_url(registry, source, expected):
    assert registry.resolve_base_url("kimi", source) == expected


def test_resolve_protocol_is_fixed_per_identity(registry):
    assert registry.resolve_protocol("kimi") == ProtocolMode.OPENAI_COMPLETIONS
    assert registry.resolve_protocol("kimi").value == "openai-completions"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", True),
        (None, True),
        ("moonshot", True),
        ("MOONSHOT", True),
        ("nvidia", False),
        ("openrouter", False),
        ("glm-global", False),
        ("glm-china", False),
        ("custom", False),
    ],
)
def test_supports_reasoning_only_on_native_source(registry, source, expected):
    assert registry.supports_reasoning(source) is expected


def test_supports_reasoning_false_for_provider_without_thinking(registry):
    assert registry.supports_reasoning("", "openrouter") is False


@pytest.mark.parametrize(
    "source,expected",
    [
        ("nvidia", "Kimi K2.5 (NVIDIA)"),
        ("openrouter", "Kimi K2.5 (OpenRouter)"),
        ("glm-global", "GLM (Global)"),
        ("glm-china", "GLM (China)"),
        ("custom", "Custom Model"),
        ("", "Kimi K2.5"),
        ("something-else", "Kimi K2.5"),
    ],
)
def test_display_name(registry, source, expected):
    assert registry.display_name(source) == expected


def test_resolve_provider_base_url_defaults(registry):
    assert (
        registry.resolve_provider_base_url("zenmux", Protocol.ANTHROPIC)
        == "https://zenmux.ai/api/anthropic"
    )
    assert (
        registry.resolve_provider_base_url("zenmux", "openai")
        == "https://zenmux.ai/api/v1"
    )


def test_resolve_provider_base_url_unsupported_protocol(registry):
    assert registry.resolve_provider_base_url("kimi", "anthropic") is None
    assert registry.resolve_provider_base_url(
        "nvidia",
        "anthropic",
        base_url="https://integrate.api.nvidia.com/v1",
    ) is None


@pytest.mark.parametrize(
    "plan,base_url,expected",
    [
        (
            "glm_coding_plan_global",
            "https://api.z.ai/api/coding/paas/v4/",
            "https://api.z.ai/api/anthropic",
        ),
        (
            "openrouter",
            "https://openrouter.ai/api/v1",
            "https://openrouter.ai/api",
        ),
        (
            "openrouter",
            "https://proxy.example.com/v1",
            "https://proxy.example.com",
        ),
        (
            "alibaba_api",
            "https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
            "https://dashscope-intl.aliyuncs.com/apps/anthropic",
        ),
        (
            "zenmux",
            "https://zenmux.ai/api/v1",
            "https://zenmux.ai/api/anthropic",
        ),
        ("lmstudio", "http://localhost:1235/v1", "http://localhost:1235"),
    ],
)
def test_resolve_provider_base_url_derives_anthropic(
    registry,
    plan,
    base_url,
    expected,
):
    assert (
        registry.resolve_provider_base_url(plan, "anthropic", base_url)
        == expected
    )


def test_anthropic_specific_override_wins(registry):
    url = registry.resolve_provider_base_url(
        "zenmux",
        "anthropic",
        base_url="https://zenmux.ai/api/v1",
        anthropic_base_url="https://other.example.com/api/anthropic/",
    )
    assert url == "https://other.example.com/api/anthropic"


def test_lmstudio_openai_url_gets_v1(registry):
    assert (
        registry.resolve_provider_base_url(
            "lmstudio",
            "openai",
            "http://localhost:8766",
        )
        == "http://localhost:8766/v1"
    )


def test_max_output_tokens_qwen3_max(registry):
    assert registry.get_max_output_tokens("alibaba", "qwen3-max") == 65536
    assert registry.get_max_output_tokens("alibaba") == 131072


def test_detect_plan_from_url(registry):
    assert registry.detect_plan_from_url("https://api.z.ai/api/anthropic") == (
        "glm_coding_plan_global"
    )
    assert registry.detect_plan_from_url("HTTPS://OpenRouter.ai/api/v1/") == (
        "openrouter"
    )
    assert registry.detect_plan_from_url("https://example.com") is None
    assert registry.detect_plan_from_url("") is None


@pytest.mark.parametrize(
    "base_url,expected",
    [
        ("https://openrouter.ai/api/v1", "openrouter"),
        ("https://integrate.api.nvidia.com/v1", "nvidia"),
        ("https://api.moonshot.ai/v1", "kimi"),
        ("https://my-proxy.example.com/v1", "kimi"),
        (None, "kimi"),
        # Ordered substring match: openrouter wins over nvidia.
        ("https://openrouter.ai/nvidia.com", "openrouter"),
    ],
)
def test_classify_source(registry, base_url, expected):
    assert registry.classify_source(base_url) == expected


def test_from_file_overlays_builtins(tmp_path):
    table = tmp_path / "registry.json"
    table.write_text(
        json.dumps(
            {
                "kimi": {
                    "display_name": "Kimi (Moonshot)",
                    "urls": {"openai": "https://kimi.example.com/v1"},
                    "default_model": "kimi-next",
                    "default_model_name": "Kimi Next",
                    "supports_thinking": True,
                    "native_source": "moonshot",
                    "config_key": "moonshot",
                    "max_context_size": 1000,
                },
            },
        ),
    )
    registry = ProviderRegistry.from_file(table)
    assert registry.resolve_base_url("kimi") == "https://kimi.example.com/v1"
    assert registry.get_default_model("kimi") == "kimi-next"
    assert registry.get_max_context_size("kimi") == 1000
    # Untouched built-ins are still there.
    assert registry.get_provider("zenmux") is not None


def test_from_file_rejects_malformed_table(tmp_path):
    table = tmp_path / "registry.json"
    table.write_text("[{not json")
    with pytest.raises(ConfigParseError) as exc_info:
        ProviderRegistry.from_file(table)
    assert exc_info.value.path == table
