# -*- coding: utf-8 -*-
from .config import Config, PlanSettings
from .utils import (
    get_config_path,
    load_config,
    provider_options_for,
    save_config,
)

__all__ = [
    "Config",
    "PlanSettings",
    "get_config_path",
    "load_config",
    "provider_options_for",
    "save_config",
]
