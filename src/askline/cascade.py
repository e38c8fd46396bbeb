"""Cascading configuration layers for askline.

Configuration priority (highest first):
1. Environment variables (ASKLINE_*)
2. <workspace>/.askline.toml (project-specific)
3. ~/.askline/config.toml (user defaults)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

logger = logging.getLogger(__name__)

ENV_PREFIX = "ASKLINE_"
BOOL_KEYS = ("trim", "retry", "show_reason")
STR_KEYS = ("log_level", "log_dir")


def parse_bool(value: Any) -> bool | None:
    """Parse a truthy/falsy config value; None if unrecognised."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return None


@dataclass
class ConfigLayer:
    """A single layer in the configuration cascade."""

    name: str
    path: Path | None
    data: dict[str, Any] = field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_file(cls, path: Path) -> ConfigLayer:
        """Load a config layer from a TOML file."""
        if not path.exists():
            return cls(name=path.name, path=path, data={}, source="file")

        try:
            data = tomllib.loads(path.read_bytes().decode())
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            logger.warning("Failed to load %s: %s", path, e)
            return cls(name=path.name, path=path, data={}, source="file")

        # Accept both top-level keys and an [askline] table
        if isinstance(data.get("askline"), dict):
            data = data["askline"]
        return cls(name=path.name, path=path, data=data, source="file")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ConfigLayer:
        """Load config from ASKLINE_* environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}

        for key in BOOL_KEYS:
            raw = env.get(ENV_PREFIX + key.upper())
            if raw is None or raw == "":
                continue
            parsed = parse_bool(raw)
            if parsed is None:
                logger.warning("Ignoring %s%s=%r: not a boolean", ENV_PREFIX, key.upper(), raw)
                continue
            data[key] = parsed

        for key in STR_KEYS:
            if value := env.get(ENV_PREFIX + key.upper()):
                data[key] = value

        return cls(name="environment", path=None, data=data, source="env")

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class CascadingConfig:
    """Manages multiple configuration layers with proper override behavior."""

    def __init__(
        self,
        workspace: Path | None = None,
        *,
        home: Path | None = None,
        environ: dict[str, str] | None = None,
    ):
        self.workspace = workspace
        self.home = home
        self.environ = environ
        self.layers: list[ConfigLayer] = []
        self._merged: dict[str, Any] = {}
        self._load_layers()

    def _load_layers(self):
        """Load all config layers in priority order (lowest first)."""
        self.layers = []

        # 1. User defaults (~/.askline/config.toml)
        home = self.home or Path.home()
        self.layers.append(ConfigLayer.from_file(home / ".askline" / "config.toml"))

        # 2. Project config (.askline.toml)
        if self.workspace:
            self.layers.append(ConfigLayer.from_file(self.workspace / ".askline.toml"))

        # 3. Environment variables (highest priority)
        self.layers.append(ConfigLayer.from_env(self.environ))

        merged: dict[str, Any] = {}
        for layer in self.layers:
            merged.update(layer.data)
        self._merged = merged

    def get(self, key: str, default: Any = None) -> Any:
        return self._merged.get(key, default)

    def get_sources(self, key: str) -> list[str]:
        """Find which config layers contributed to a key."""
        sources = []
        for layer in reversed(self.layers):  # Check highest priority first
            if layer.get(key) is not None:
                sources.append(f"{layer.name} ({layer.source})")
        return sources

    def reload(self):
        """Reload all configuration layers."""
        self._load_layers()
