"""Error taxonomy for hook registration and dispatch."""

from __future__ import annotations


class HookError(Exception):
    """Base class for modhooks errors."""


class ReentrancyError(HookError, RuntimeError):
    def __init__(self, hook: str) -> None:
        super().__init__(f"Re-entrancy detected for hook [{hook}].")
        self.hook = hook


class ResolutionError(HookError, LookupError):
    def __init__(self, type_name: str, reason: str) -> None:
        super().__init__(f"Cannot resolve handler type '{type_name}': {reason}")
        self.type_name = type_name
        self.reason = reason


class HandlerError(HookError):
    """A handler (or its resolution) failed during one dispatch.

    Never raised to dispatch callers; delivered to error listeners instead.
    """

    def __init__(self, hook: str, handler_id: str, cause: BaseException) -> None:
        super().__init__(f"Hook [{hook}] handler {handler_id} failed: {cause}")
        self.hook = hook
        self.handler_id = handler_id
        self.cause = cause
