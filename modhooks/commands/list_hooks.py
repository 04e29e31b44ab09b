"""List registered handlers."""

from __future__ import annotations

import argparse
import json

from modhooks.commands.common import CommandRuntime, build_manager


def run(args: argparse.Namespace, *, runtime: CommandRuntime) -> int:
    manager = build_manager(args, runtime)
    registrations = manager.registrations(args.hook)

    if args.json:
        print(json.dumps([item.model_dump() for item in registrations], indent=2))
        return 0

    if not registrations:
        print("No handlers registered.")
        return 0
    for item in registrations:
        flags = " once" if item.once else ""
        print(f"{item.hook:<32} {item.priority:>5}  {item.handler}{flags}  [{item.id}]")
    return 0
