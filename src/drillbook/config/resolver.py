"""Layered configuration resolution.

Settings come from three places, applied in increasing precedence: the YAML
file, ``DRILLBOOK__SECTION__KEY`` environment variables, and dotted overrides
built from command-line flags (``{"query.sort_column": "title"}``). Anything
left unset falls back to the model defaults.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import DrillbookConfig

ENV_PREFIX = "DRILLBOOK__"


def parse_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect dotted overrides from ``DRILLBOOK__`` environment variables.

    Values are read as YAML scalars, so ``"25"`` becomes ``25`` and ``"true"``
    becomes ``True``; text that is not valid YAML is kept verbatim.

    Args:
        environ: Environment mapping, usually ``os.environ``.

    Returns:
        dict[str, Any]: Overrides keyed by lower-cased dotted paths.
    """
    overrides: dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        key = ".".join(part.lower() for part in name[len(ENV_PREFIX) :].split("__") if part)
        if not key:
            continue
        try:
            overrides[key] = yaml.safe_load(raw)
        except yaml.YAMLError:
            overrides[key] = raw
    return overrides


def set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    """Assign ``value`` at dotted ``key`` inside ``data``, creating sections.

    Raises:
        ConfigError: If ``key`` is empty or walks through a non-mapping value.
    """
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise ConfigError(f"Invalid configuration key {key!r}; use a dotted path.")

    node = data
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(f"Cannot assign into '{segment}' because it is not a mapping.")
        node = child
    node[segments[-1]] = value


def resolve_with_precedence(
    file_data: Mapping[str, Any] | None = None,
    *,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> DrillbookConfig:
    """Build the effective configuration: file < environment < CLI.

    Raises:
        ConfigError: If the combined values fail validation.
    """
    merged: dict[str, Any] = deepcopy(dict(file_data or {}))
    for overrides in (env_overrides, cli_overrides):
        for key, value in (overrides or {}).items():
            set_dotted(merged, key, value)

    try:
        return DrillbookConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


__all__ = ["ENV_PREFIX", "parse_env", "resolve_with_precedence", "set_dotted"]
