# -*- coding: utf-8 -*-
"""Base class for tool managers (one per third-party coding tool)."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..providers import (
    DetectResult,
    ProviderOptions,
    UnsupportedOperationError,
)


class MCPService(BaseModel):
    """An MCP (tool-extension) service a tool can be pointed at."""

    id: str
    name: str
    description: str = ""
    protocol: Literal["stdio", "sse", "streamable-http"] = "stdio"

    # stdio
    command: Optional[str] = None
    args: List[str] = Field(default_factory=list)
    env: Dict[str, str] = Field(default_factory=dict)

    # sse / http
    url: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    requires_auth: bool = False


class ToolManager:
    """Adapts the provider core to one tool's on-disk config format.

    Subclasses implement detect/load/unload. MCP management is optional:
    tools without it report nothing installed and refuse changes with
    :class:`UnsupportedOperationError`.
    """

    tool_id: str = ""
    display_name: str = ""

    def detect_current_config(self) -> DetectResult:
        raise NotImplementedError

    def load_config(
        self,
        plan: str,
        api_key: str,
        options: Optional[ProviderOptions] = None,
    ) -> None:
        raise NotImplementedError

    def unload_config(self) -> None:
        raise NotImplementedError

    def is_configured(self) -> bool:
        return self.detect_current_config().configured

    # -- MCP --------------------------------------------------------------

    def _mcp_unsupported(self) -> UnsupportedOperationError:
        name = self.display_name or self.tool_id
        return UnsupportedOperationError(
            f"{name} does not support MCP configuration via coderlink",
        )

    def is_mcp_installed(self, mcp_id: str) -> bool:
        return False

    def install_mcp(self, mcp: MCPService, api_key: str, plan: str) -> None:
        raise self._mcp_unsupported()

    def uninstall_mcp(self, mcp_id: str) -> None:
        raise self._mcp_unsupported()

    def get_installed_mcps(self) -> List[str]:
        return []

    def get_mcp_status(self, services: List[MCPService]) -> Dict[str, bool]:
        return {}

    def get_other_mcps(self, builtin_ids: List[str]) -> List[Dict[str, Any]]:
        return []

    def get_all_mcp_servers(self) -> Dict[str, Any]:
        return {}
