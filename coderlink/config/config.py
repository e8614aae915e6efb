# -*- coding: utf-8 -*-
from typing import Dict, Optional

from pydantic import BaseModel, Field


class PlanSettings(BaseModel):
    """Saved overrides for one plan (read from config.json, no env)."""

    base_url: str = ""
    model: str = ""
    source: str = ""
    max_context_size: Optional[int] = Field(default=None, gt=0)


class Config(BaseModel):
    """Root config (config.json)."""

    providers: Dict[str, PlanSettings] = Field(default_factory=dict)
    # Last plan loaded into a tool, shown as the default by the CLI.
    last_plan: str = ""
