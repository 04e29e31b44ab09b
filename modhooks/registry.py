"""Hook registry: hook name -> priority bucket -> ordered handler entries."""

from __future__ import annotations

import logging
import threading

from modhooks.models import DEFAULT_PRIORITY, HandlerEntry, HandlerLike, make_handler_id, parse_handler
from modhooks.patterns import matches

logger = logging.getLogger(__name__)


class HookRegistry:
    """Thread-safe store of handler entries.

    Invariants: ids are unique across the whole registry, and a hook name with
    no entries is absent (emptied priority buckets are pruned as well).
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._hooks: dict[str, dict[int, list[HandlerEntry]]] = {}
        self._ids: dict[str, tuple[str, int]] = {}

    def add(
        self,
        hook: str,
        handler: HandlerLike,
        priority: int = DEFAULT_PRIORITY,
        once: bool = False,
        id: str | None = None,
    ) -> HandlerEntry | None:
        """Register a handler; returns None when an entry with the same id exists."""
        parsed = parse_handler(handler)
        priority = int(priority)
        entry_id = id or make_handler_id(hook, parsed, priority)
        with self._lock:
            if entry_id in self._ids:
                logger.debug("Skipping duplicate registration %s for hook '%s'", entry_id, hook)
                return None
            entry = HandlerEntry(hook=hook, handler=parsed, priority=priority, once=once, id=entry_id)
            self._hooks.setdefault(hook, {}).setdefault(priority, []).append(entry)
            self._ids[entry_id] = (hook, priority)
        logger.debug("Registered %s on hook '%s' (priority=%s, once=%s)", parsed.label(), hook, priority, once)
        return entry

    def remove(self, hook: str, id: str | None = None) -> None:
        with self._lock:
            buckets = self._hooks.get(hook)
            if buckets is None:
                return
            if id is None:
                for entries in buckets.values():
                    for entry in entries:
                        self._ids.pop(entry.id, None)
                del self._hooks[hook]
                logger.debug("Removed hook '%s'", hook)
                return

            location = self._ids.get(id)
            if location is None or location[0] != hook:
                return
            priority = location[1]
            bucket = buckets[priority]
            bucket[:] = [entry for entry in bucket if entry.id != id]
            del self._ids[id]
            if not bucket:
                del buckets[priority]
            if not buckets:
                del self._hooks[hook]
            logger.debug("Removed handler %s from hook '%s'", id, hook)

    def has(self, hook: str) -> bool:
        with self._lock:
            if hook in self._hooks:
                return True
            return any(matches(name, hook) for name in self._hooks)

    def contains(self, id: str) -> bool:
        with self._lock:
            return id in self._ids

    def names(self) -> list[str]:
        with self._lock:
            return list(self._hooks)

    def entries(self, hook: str | None = None) -> list[HandlerEntry]:
        """Registered entries in storage order (no wildcard expansion)."""
        with self._lock:
            names = [hook] if hook is not None else list(self._hooks)
            result: list[HandlerEntry] = []
            for name in names:
                for priority in sorted(self._hooks.get(name, {})):
                    result.extend(self._hooks[name][priority])
            return result

    def collect(self, hook: str) -> list[HandlerEntry]:
        """Snapshot of the entries a dispatch of ``hook`` runs, in execution order.

        Exact-name entries precede wildcard entries at equal priority; wildcard
        patterns contribute in the order their names were first registered.
        """
        with self._lock:
            merged: dict[int, list[HandlerEntry]] = {}
            for priority, entries in self._hooks.get(hook, {}).items():
                merged[priority] = list(entries)
            for name, buckets in self._hooks.items():
                if name == hook or not matches(name, hook):
                    continue
                for priority, entries in buckets.items():
                    merged.setdefault(priority, []).extend(entries)
        return [entry for priority in sorted(merged) for entry in merged[priority]]

    def clear(self) -> None:
        with self._lock:
            self._hooks.clear()
            self._ids.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
