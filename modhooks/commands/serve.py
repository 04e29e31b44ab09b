"""Serve the registry inspector."""

from __future__ import annotations

import argparse
import logging

from modhooks.commands.common import CommandRuntime, build_manager

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - dependency/runtime
        raise RuntimeError("Missing optional UI dependencies. Install with: pip install 'modhooks[ui]'") from exc

    from modhooks.webapp import create_app

    manager = build_manager(args, runtime)
    logger.info("Starting inspector on http://%s:%s (%s handlers)", args.host, args.port, len(manager.registry))
    uvicorn.run(create_app(manager), host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0
