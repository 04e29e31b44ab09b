"""Dispatch a hook from the command line."""

from __future__ import annotations

import argparse
import json
import logging

from modhooks.commands.common import CommandRuntime, build_manager
from modhooks.context import HookContext

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    payload = json.loads(args.payload)
    manager = build_manager(args, runtime)
    ctx = HookContext(module=args.module)

    if args.mode == "filter":
        result = manager.filter(args.hook, payload, ctx)
    elif args.mode == "until":
        result = manager.until(args.hook, payload, ctx)
    else:
        result = manager.action(args.hook, payload, ctx)

    logger.info("Dispatched '%s' (mode=%s, stopped=%s)", args.hook, args.mode, ctx.stopped)
    print(json.dumps({"hook": args.hook, "mode": args.mode, "result": result, "metadata": ctx.metadata}, default=str, indent=2))
    return 0
