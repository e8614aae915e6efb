# -*- coding: utf-8 -*-
"""Reading and writing a tool's JSON configuration document."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from .errors import ConfigParseError, ConfigWriteError

logger = logging.getLogger(__name__)

JsonDocument = Dict[str, Any]


class ConfigStore:
    """Read/modify/write of one JSON object at a fixed path.

    Nothing is cached: every :meth:`read` goes back to disk so edits made
    by the user between calls are respected.
    """

    def __init__(self, path: Union[str, Path], indent: int = 2) -> None:
        self.path = Path(path).expanduser()
        self.indent = indent

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> JsonDocument:
        """Return the document, ``{}`` if the file is missing or blank."""
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read config %s: %s", self.path, exc)
            raise ConfigParseError(
                f"Failed to read config at {self.path}",
                self.path,
            ) from exc

        if not text.strip():
            return {}
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON in %s: %s", self.path, exc)
            raise ConfigParseError(
                f"Invalid JSON config at {self.path}",
                self.path,
            ) from exc
        if not isinstance(raw, dict):
            logger.error("Config root in %s is not an object", self.path)
            raise ConfigParseError(
                f"Config root at {self.path} must be a JSON object",
                self.path,
            )
        return raw

    def write(self, doc: JsonDocument) -> None:
        """Write *doc* through a temp file and an atomic rename.

        Symlinks are followed so the link target is updated, and an
        existing file keeps its permission bits. New files are 0600.
        Key order of *doc* is kept as-is.
        """
        target = self.path.resolve()
        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.",
                suffix=".tmp",
                dir=target.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(doc, fh, indent=self.indent, ensure_ascii=False)
                fh.write("\n")
            if target.is_file():
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            logger.error("Failed to write config %s: %s", self.path, exc)
            raise ConfigWriteError(
                f"Failed to write config: {self.path}",
                self.path,
            ) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("Wrote config %s", self.path)


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-****hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"
