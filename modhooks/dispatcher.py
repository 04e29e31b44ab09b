"""Hook dispatch: filter, action and until execution over the registry.

Three execution patterns share one per-handler procedure:

- ``filter``: thread a value through every handler like a pipeline.
- ``action``: give every handler the same payload and collect the results.
- ``until``: stop at the first truthy result.

Handler failures are reported (log + error listeners) and never reach the
caller. The only error a dispatch raises is ``ReentrancyError``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from modhooks.context import HookContext
from modhooks.errors import HandlerError, ReentrancyError, ResolutionError
from modhooks.models import DEFAULT_PRIORITY, DirectHandler, HandlerEntry, HandlerLike, HookRegistration
from modhooks.registry import HookRegistry
from modhooks.resolver import HandlerResolver, ImportResolver

if TYPE_CHECKING:
    from modhooks.config import HooksConfig

logger = logging.getLogger(__name__)

ErrorListener = Callable[[HandlerError], None]


class HookManager:
    """Registry owner and dispatcher. One long-lived instance per host process."""

    def __init__(
        self,
        registry: HookRegistry | None = None,
        resolver: HandlerResolver | None = None,
        default_priority: int = DEFAULT_PRIORITY,
    ) -> None:
        # an empty registry is falsy (it defines __len__)
        self.registry = registry if registry is not None else HookRegistry()
        self.resolver = resolver if resolver is not None else ImportResolver()
        self.default_priority = default_priority
        self._running: set[str] = set()
        self._running_lock = threading.Lock()
        self._error_listeners: list[ErrorListener] = []

    @classmethod
    def from_config(cls, config: HooksConfig, resolver: HandlerResolver | None = None) -> HookManager:
        return cls(resolver=resolver, default_priority=config.dispatch.default_priority)

    # --- Registration ---

    def add(
        self,
        hook: str,
        handler: HandlerLike,
        priority: int | None = None,
        once: bool = False,
        id: str | None = None,
    ) -> HandlerEntry | None:
        if priority is None:
            priority = self.default_priority
        return self.registry.add(hook, handler, priority=priority, once=once, id=id)

    def remove(self, hook: str, id: str | None = None) -> None:
        self.registry.remove(hook, id)

    def has(self, hook: str) -> bool:
        return self.registry.has(hook)

    def registrations(self, hook: str | None = None) -> list[HookRegistration]:
        """Views of registered entries; with ``hook``, the entries a dispatch would run."""
        entries = self.registry.collect(hook) if hook is not None else self.registry.entries()
        return [HookRegistration.from_entry(entry) for entry in entries]

    def on_error(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    def is_running(self, hook: str) -> bool:
        with self._running_lock:
            return hook in self._running

    # --- Execution ---

    def filter(self, hook: str, value: Any, ctx: HookContext | None = None) -> Any:
        ctx = ctx if ctx is not None else HookContext()
        for entry in self._entries(hook):
            ok, result = self._invoke(hook, entry, value, ctx)
            if ok:
                value = result
            if ctx.stopped:
                break
        return value

    def action(self, hook: str, payload: Any = None, ctx: HookContext | None = None) -> list[Any]:
        ctx = ctx if ctx is not None else HookContext()
        results: list[Any] = []
        for entry in self._entries(hook):
            ok, result = self._invoke(hook, entry, payload, ctx)
            if ok:
                results.append(result)
            if ctx.stopped:
                break
        return results

    def until(self, hook: str, payload: Any = None, ctx: HookContext | None = None) -> Any:
        ctx = ctx if ctx is not None else HookContext()
        for entry in self._entries(hook):
            _, result = self._invoke(hook, entry, payload, ctx)
            if ctx.stopped or result:
                return result
        return None

    # --- Internal helpers ---

    def _entries(self, hook: str) -> Iterator[HandlerEntry]:
        for entry in self.registry.collect(hook):
            # once-entries consumed by another dispatch since the snapshot are skipped
            if entry.once and not self.registry.contains(entry.id):
                continue
            yield entry

    def _invoke(self, hook: str, entry: HandlerEntry, arg: Any, ctx: HookContext) -> tuple[bool, Any]:
        try:
            func = self._resolve(entry)
        except ResolutionError as exc:
            self._report(hook, entry, exc)
            self._consume(entry)
            return False, None

        with self._guard(hook):
            try:
                return True, func(arg, ctx)
            except Exception as exc:
                self._report(hook, entry, exc)
                return False, None
            finally:
                self._consume(entry)

    def _resolve(self, entry: HandlerEntry) -> Callable[..., Any]:
        handler = entry.handler
        if isinstance(handler, DirectHandler):
            return handler.func
        try:
            instance = self.resolver.resolve(handler.type_name)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ResolutionError(handler.type_name, f"construction failed ({exc})") from exc

        if handler.method_name is None:
            if not callable(instance):
                raise ResolutionError(handler.type_name, "instance is not invokable")
            return instance
        method = getattr(instance, handler.method_name, None)
        if not callable(method):
            raise ResolutionError(handler.type_name, f"no callable method '{handler.method_name}'")
        return method

    def _consume(self, entry: HandlerEntry) -> None:
        if entry.once:
            self.registry.remove(entry.hook, entry.id)

    @contextmanager
    def _guard(self, hook: str) -> Iterator[None]:
        with self._running_lock:
            if hook in self._running:
                raise ReentrancyError(hook)
            self._running.add(hook)
        try:
            yield
        finally:
            with self._running_lock:
                self._running.discard(hook)

    def _report(self, hook: str, entry: HandlerEntry, exc: Exception) -> None:
        error = HandlerError(hook, entry.id, exc)
        logger.error("Hook [%s] handler %s failed: %s", hook, entry.handler.label(), exc, exc_info=exc)
        for listener in list(self._error_listeners):
            try:
                listener(error)
            except Exception:
                logger.exception("Error listener failed while reporting hook [%s]", hook)
