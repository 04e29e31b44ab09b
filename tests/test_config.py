from pathlib import Path

import pytest
from pydantic import ValidationError

from modhooks.config import HooksConfig, load_effective_config


def test_config_precedence(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()

    (project / ".modhooks.yaml").write_text(
        """
discovery:
  packages: [app.modules]
cache:
  default_ttl: 15
"""
    )

    system = {
        "cache": {"default_ttl": 120},
        "dispatch": {"default_priority": 40},
        "discovery": {"packages": ["system.hooks"]},
    }
    runtime = {"dispatch": {"default_priority": 5}}

    cfg = load_effective_config(project, system_defaults=system, runtime_override=runtime)

    assert cfg.cache.default_ttl == 15
    assert cfg.dispatch.default_priority == 5
    assert cfg.discovery.packages == ["app.modules"]
    assert cfg.discovery.enabled is True


def test_defaults_without_project_file(tmp_path: Path) -> None:
    cfg = load_effective_config(tmp_path)

    assert cfg == HooksConfig()
    assert cfg.dispatch.default_priority == 50
    assert cfg.cache.default_ttl == 60


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        load_effective_config(tmp_path, runtime_override={"discovery": {"namespaces": ["App"]}})


def test_project_file_must_be_a_mapping(tmp_path: Path) -> None:
    (tmp_path / ".modhooks.yaml").write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="must decode to a mapping"):
        load_effective_config(tmp_path)


def test_malformed_project_file_raises_value_error(tmp_path: Path) -> None:
    (tmp_path / ".modhooks.yaml").write_text("cache: {default_ttl: [")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_effective_config(tmp_path)
