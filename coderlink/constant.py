# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("CODERLINK_WORKING_DIR", "~/.coderlink"))
    .expanduser()
    .resolve()
)

CONFIG_FILE = os.environ.get("CODERLINK_CONFIG_FILE", "config.json")

# Env key for app log level (read by the CLI when --log-level is absent).
LOG_LEVEL_ENV = "CODERLINK_LOG_LEVEL"
LOG_LEVEL_DEFAULT = "WARNING"

# Optional JSON table overlaid onto the built-in provider registry.
REGISTRY_FILE = os.environ.get("CODERLINK_REGISTRY_FILE", "")

# Pi reads custom providers/models from ~/.pi/agent/models.json
PI_CONFIG_PATH = (
    Path(
        os.environ.get(
            "CODERLINK_PI_CONFIG_PATH",
            "~/.pi/agent/models.json",
        ),
    )
    .expanduser()
)

# Plans that are all written as the Kimi provider, differing by source.
KIMI_LIKE_PLANS = ("kimi", "openrouter", "nvidia")
