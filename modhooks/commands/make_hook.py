"""Scaffold a handler module."""

from __future__ import annotations

import argparse
import logging

from modhooks.commands.common import CommandRuntime
from modhooks.scaffold import make_hook

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    _ = runtime
    try:
        result = make_hook(args.hook, args.module, base_dir=args.base_dir, widget=args.widget)
    except FileExistsError as exc:
        logger.error("%s", exc)
        return 1

    print(f"Created {result.handler_path}")
    if result.view_path is not None:
        print(f"Widget view at {result.view_path}")
        print(f"Render it from a template with: {{{{ hook('{args.hook}') }}}}")
    return 0
