# -*- coding: utf-8 -*-
"""Tool managers — write provider config in each tool's own format."""

from typing import Dict, List, Type

from ..providers import UnsupportedOperationError
from .base import MCPService, ToolManager
from .pi import PI_PROVIDER_ID, PiManager

# Registry: tool id -> manager class
TOOL_MANAGERS: Dict[str, Type[ToolManager]] = {
    PiManager.tool_id: PiManager,
}


def get_supported_tools() -> List[str]:
    return list(TOOL_MANAGERS)


def get_tool_manager(tool: str, **kwargs) -> ToolManager:
    """Build the manager for *tool*; kwargs go to its constructor."""
    cls = TOOL_MANAGERS.get(tool)
    if cls is None:
        raise UnsupportedOperationError(f"Unsupported tool: {tool}")
    return cls(**kwargs)


__all__ = [
    "MCPService",
    "PI_PROVIDER_ID",
    "PiManager",
    "TOOL_MANAGERS",
    "ToolManager",
    "get_supported_tools",
    "get_tool_manager",
]
