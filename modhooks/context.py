"""Per-dispatch execution context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class HookContext:
    """Mutable context shared by every handler of a single dispatch.

    Attributes:
        stopped: Once True, no further handlers run after the current one.
        metadata: Free-form values handlers pass forward to later handlers.
        user_id: Acting user, set by the caller before dispatch.
        module: Module that triggered or owns the dispatch.
        cache_key: Key used by callers that cache rendered hook output.
    """

    stopped: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    user_id: int | str | None = None
    module: str | None = None
    cache_key: str | None = None

    def stop(self) -> None:
        self.stopped = True
