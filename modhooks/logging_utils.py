"""Logging configuration helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
    # handler failures are reported at ERROR by the dispatcher; keep them visible
    # even when the root level is raised above it
    logging.getLogger("modhooks.dispatcher").setLevel(min(resolve_level(level), logging.ERROR))
