"""CLI parser construction."""

from __future__ import annotations

import argparse

from modhooks.commands.common import add_common_config_flags


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="modhooks hook registry tools")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", aliases=["ls"], help="Discover handlers and list registrations")
    list_cmd.add_argument("--hook", help="Only show handlers a dispatch of this hook name would run")
    list_cmd.add_argument("--json", action="store_true", help="Emit JSON instead of a text table")
    add_common_config_flags(list_cmd)

    fire = sub.add_parser("fire", aliases=["dispatch"], help="Discover handlers and dispatch a hook")
    fire.add_argument("hook", help="Concrete hook name to dispatch")
    fire.add_argument(
        "--mode",
        choices=["action", "filter", "until"],
        default="action",
        help="Execution semantics to use",
    )
    fire.add_argument("--payload", default="null", help="JSON payload (or initial value for filter)")
    fire.add_argument("--module", help="Module name recorded on the hook context")
    add_common_config_flags(fire)

    make = sub.add_parser("make-hook", aliases=["make"], help="Scaffold a handler module for a hook")
    make.add_argument("hook", help="Hook name, e.g. dashboard.widgets")
    make.add_argument("module", help="Module (package) that will own the handler")
    make.add_argument("--base-dir", default=".", help="Directory holding module packages")
    make.add_argument("--widget", action="store_true", help="Also generate a Jinja2 widget template")

    serve = sub.add_parser("serve", aliases=["serve-ui"], help="Serve the read-only registry inspector")
    serve.add_argument("--host", default="127.0.0.1", help="Bind host")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    add_common_config_flags(serve)

    return parser
