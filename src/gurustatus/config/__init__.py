"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ConfigManager:
    """YAML-backed configuration reader."""

    @staticmethod
    def read(path: str | Path) -> dict[str, Any]:
        """Load a YAML document that must be a mapping (empty files yield ``{}``)."""
        with Path(path).open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must be a YAML mapping")
        return loaded


__all__ = ["ConfigManager"]
