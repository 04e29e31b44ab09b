"""CLI entrypoint for inspecting, dispatching and scaffolding hooks."""

from __future__ import annotations

import logging

from modhooks.commands import fire, list_hooks, make_hook, serve
from modhooks.commands.common import CommandRuntime, normalize_command
from modhooks.commands.parser import build_parser
from modhooks.logging_utils import configure_logging

logger = logging.getLogger(__name__)

COMMANDS = {
    "list": list_hooks.run,
    "fire": fire.run,
    "make-hook": make_hook.run,
    "serve": serve.run,
}


def main(argv: list[str] | None = None, runtime: CommandRuntime | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handler = COMMANDS.get(normalize_command(args.command))
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, runtime=runtime or CommandRuntime())
    except ValueError as exc:
        # bad JSON payloads, malformed YAML and config validation errors
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
