"""Configuration management for Drillbook."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import DrillbookConfig
from .resolver import ENV_PREFIX, parse_env, resolve_with_precedence, set_dotted

DEFAULT_CONFIG_PATH = Path("~/.drillbook/config.yaml")

_HEADER_LINES = (
    "# Drillbook configuration file",
    "# Change values with `drillbook config set KEY --value VALUE` or `drillbook config edit`.",
    f"# Environment variables named {ENV_PREFIX}SECTION__KEY override this file.",
)


class ConfigManager:
    """Own the YAML settings file and resolve the effective configuration."""

    def __init__(
        self,
        path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._path = (path or DEFAULT_CONFIG_PATH).expanduser()
        self._environ = os.environ if environ is None else environ

    @property
    def path(self) -> Path:
        return self._path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> DrillbookConfig:
        """Return the effective configuration, creating the file on first use.

        Args:
            cli_overrides: Dotted keys taken from command-line flags.
            include_env: Whether ``DRILLBOOK__`` variables are applied.

        Raises:
            ConfigError: If the file is malformed or a value is invalid.
        """
        self.ensure_exists()
        return resolve_with_precedence(
            self.read_overrides(),
            env_overrides=parse_env(self._environ) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def ensure_exists(self) -> Path:
        """Write a file holding the defaults unless one is already present."""
        if not self._path.exists():
            self.write(DrillbookConfig().model_dump(mode="python"))
        return self._path

    def read_text(self) -> str:
        return self._path.read_text(encoding="utf-8") if self._path.exists() else ""

    def read_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the file; empty when there is no file.

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        try:
            data = yaml.safe_load(self.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{self._path} must contain a mapping at the top level.")
        return data

    def write(self, data: Mapping[str, Any]) -> None:
        """Replace the file contents with ``data`` below the standard header."""
        stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        body = yaml.safe_dump(dict(data), sort_keys=False)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            "\n".join((*_HEADER_LINES, f"# Last updated: {stamp}", body)), encoding="utf-8"
        )


__all__ = [
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "DrillbookConfig",
    "parse_env",
    "resolve_with_precedence",
    "set_dotted",
]
