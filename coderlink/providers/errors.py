# -*- coding: utf-8 -*-
"""Errors raised while resolving and persisting provider configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class CoderLinkError(Exception):
    """Base class for all coderlink errors."""


class ConfigValidationError(CoderLinkError, ValueError):
    """Caller input violates a precondition (e.g. an empty API key)."""


class _PathError(CoderLinkError):
    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigParseError(_PathError):
    """A config file exists but does not hold a JSON object."""


class ConfigWriteError(_PathError):
    """A config file or its directory could not be written."""


class UnsupportedOperationError(CoderLinkError):
    """The operation has no meaning for this tool integration."""
