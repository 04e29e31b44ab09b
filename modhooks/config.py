"""Configuration models and loading for modhooks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

CONFIG_FILENAME = ".modhooks.yaml"


class DiscoveryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    packages: list[str] = Field(default_factory=list)


class CacheConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_ttl: float = Field(default=60.0, gt=0)


class DispatchConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_priority: int = 50


class HooksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML at {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    project_path: str | Path,
    system_defaults: dict[str, Any] | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HooksConfig:
    """Load config with precedence runtime > project .modhooks.yaml > system."""
    project_config = _load_yaml(Path(project_path) / CONFIG_FILENAME)

    merged: dict[str, Any] = {}
    if system_defaults:
        merged = _deep_merge(merged, system_defaults)
    if project_config:
        merged = _deep_merge(merged, project_config)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)

    return HooksConfig.model_validate(merged)
