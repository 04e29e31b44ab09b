"""Shared helpers for CLI command modules."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import yaml

from modhooks.config import HooksConfig, load_effective_config
from modhooks.discovery import bootstrap
from modhooks.dispatcher import HookManager

logger = logging.getLogger(__name__)

ALIAS_TO_CANONICAL = {
    "ls": "list",
    "dispatch": "fire",
    "make": "make-hook",
    "serve-ui": "serve",
}


@dataclass(frozen=True)
class CommandRuntime:
    bootstrap: Callable[..., HookManager] = bootstrap


def normalize_command(name: str) -> str:
    return ALIAS_TO_CANONICAL.get(name, name)


def load_yaml_dict(path: str | None) -> dict | None:
    if not path:
        return None
    try:
        data = yaml.safe_load(Path(path).read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML at {path}: {exc}") from exc
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_config(args: argparse.Namespace) -> HooksConfig:
    return load_effective_config(
        project_path=args.project_path,
        system_defaults=load_yaml_dict(args.system_config),
        runtime_override=load_yaml_dict(args.runtime_override),
    )


def _ensure_importable(project_path: str | Path) -> None:
    root = str(Path(project_path).resolve())
    if root not in sys.path:
        sys.path.insert(0, root)


def build_manager(args: argparse.Namespace, runtime: CommandRuntime) -> HookManager:
    config = load_config(args)
    _ensure_importable(args.project_path)
    packages: Iterable[str] = args.package or []
    manager = runtime.bootstrap(config, packages=packages)
    logger.debug("Loaded %s handler(s) across %s hook name(s)", len(manager.registry), len(manager.registry.names()))
    return manager


def add_common_config_flags(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--project-path", default=".", help="Project root holding .modhooks.yaml")
    cmd.add_argument("--system-config", help="Optional system defaults YAML")
    cmd.add_argument("--runtime-override", help="Optional runtime override YAML")
    cmd.add_argument(
        "--package",
        action="append",
        default=[],
        help="Extra package to scan for @hook declarations (repeatable)",
    )
