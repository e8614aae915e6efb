# tests/test_cli.py
import json

import pytest
from click.testing import CliRunner

from coderlink.cli.main import cli
from coderlink.tools import PI_PROVIDER_ID


@pytest.fixture
def paths(tmp_path):
    return {
        "config_path": tmp_path / "coderlink" / "config.json",
        "tool_paths": {"pi": tmp_path / "pi" / "models.json"},
    }


def _invoke(paths, args, **kwargs):
    return CliRunner().invoke(cli, args, obj=dict(paths), **kwargs)


def test_providers_list(paths):
    result = _invoke(paths, ["providers", "list"])
    assert result.exit_code == 0
    assert "Kimi (Moonshot) (kimi)" in result.output
    assert "(not supported)" in result.output
    assert "moonshot-ai/kimi-k2-thinking" in result.output
    assert "common_models" in result.output


def test_load_status_unload(paths):
    pi_path = paths["tool_paths"]["pi"]

    result = _invoke(
        paths,
        ["tool", "load", "pi", "openrouter", "--api-key", "sk-or-abcdefgh"],
    )
    assert result.exit_code == 0, result.output
    entry = json.loads(pi_path.read_text())["providers"][PI_PROVIDER_ID]
    assert entry["baseUrl"] == "https://openrouter.ai/api/v1"
    assert entry["models"][0]["reasoning"] is False

    result = _invoke(paths, ["tool", "status", "pi"])
    assert result.exit_code == 0
    assert "openrouter" in result.output
    assert "sk-or-abcdefgh" not in result.output

    result = _invoke(paths, ["tool", "unload", "pi"])
    assert result.exit_code == 0
    result = _invoke(paths, ["tool", "list"])
    assert "(not configured)" in result.output


@pytest.mark.parametrize(
    "plan, base_url, context_window",
    [
        ("nvidia", "https://integrate.api.nvidia.com/v1", 4096),
        ("openrouter", "https://openrouter.ai/api/v1", 16384),
    ],
)
def test_load_cross_hosted_plan_uses_host_model(
    paths,
    plan,
    base_url,
    context_window,
):
    result = _invoke(
        paths,
        ["tool", "load", "pi", plan, "--api-key", "nvapi-abcdefgh"],
    )
    assert result.exit_code == 0, result.output
    pi_doc = json.loads(paths["tool_paths"]["pi"].read_text())
    entry = pi_doc["providers"][PI_PROVIDER_ID]
    assert entry["baseUrl"] == base_url
    model = entry["models"][0]
    assert model["id"] == "moonshotai/kimi-k2.5"
    assert model["contextWindow"] == context_window
    assert model["reasoning"] is False


def test_saved_settings_used_by_load(paths):
    result = _invoke(
        paths,
        [
            "providers",
            "set",
            "kimi",
            "--model",
            "moonshot-ai/kimi-k2-thinking",
        ],
    )
    assert result.exit_code == 0, result.output

    result = _invoke(paths, ["tool", "load", "pi", "kimi"], input="sk-1\n")
    assert result.exit_code == 0, result.output
    pi_doc = json.loads(paths["tool_paths"]["pi"].read_text())
    model = pi_doc["providers"][PI_PROVIDER_ID]["models"][0]
    assert model["id"] == "moonshot-ai/kimi-k2-thinking"
    assert model["reasoning"] is True

    saved = json.loads(paths["config_path"].read_text())
    assert saved["last_plan"] == "kimi"


def test_load_blank_key_fails(paths):
    result = _invoke(paths, ["tool", "load", "pi", "kimi", "--api-key", " "])
    assert result.exit_code == 1
    assert "API key cannot be empty" in result.output
    assert not paths["tool_paths"]["pi"].exists()


def test_load_malformed_tool_config_fails(paths):
    pi_path = paths["tool_paths"]["pi"]
    pi_path.parent.mkdir(parents=True)
    pi_path.write_text("{not json")

    result = _invoke(paths, ["tool", "load", "pi", "kimi", "--api-key", "k"])
    assert result.exit_code == 1
    assert "Invalid JSON config" in result.output
    assert pi_path.read_text() == "{not json"


def test_unknown_tool_and_plan(paths):
    result = _invoke(paths, ["tool", "status", "notepad"])
    assert result.exit_code == 1
    assert "Unsupported tool" in result.output

    result = _invoke(paths, ["tool", "load", "pi", "nope", "--api-key", "k"])
    assert result.exit_code == 1
    assert "Unknown provider" in result.output
