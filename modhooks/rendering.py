"""Template-facing hook helpers with optional response caching."""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from modhooks.config import HooksConfig
from modhooks.context import HookContext
from modhooks.dispatcher import HookManager

logger = logging.getLogger(__name__)


def cache_key_for(hook: str, cache_key: Any) -> str:
    digest = hashlib.md5(repr(cache_key).encode("utf-8")).hexdigest()
    return f"hook:{hook}:{digest}"


class _ResponseCache:
    def __init__(self, clock: Callable[[], float]) -> None:
        self._clock = clock
        self._items: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            expires_at, value = item
            if expires_at <= self._clock():
                del self._items[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: float) -> None:
        with self._lock:
            now = self._clock()
            expired = [name for name, (expires_at, _) in self._items.items() if expires_at <= now]
            for name in expired:
                del self._items[name]
            self._items[key] = (now + ttl, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def pop(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class HookRenderer:
    """Renders hook output as text for templates.

    ``render`` concatenates the results of an ``action`` dispatch; with a
    ``cache_key`` the text is kept for ``ttl`` (or ``default_ttl``) seconds.
    """

    def __init__(
        self,
        manager: HookManager,
        default_ttl: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.manager = manager
        self.default_ttl = default_ttl
        self._cache = _ResponseCache(clock)

    @classmethod
    def from_config(
        cls,
        manager: HookManager,
        config: HooksConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> HookRenderer:
        return cls(manager, default_ttl=config.cache.default_ttl, clock=clock)

    def render(
        self,
        hook: str,
        payload: Any = None,
        cache_key: Any = None,
        ttl: float | None = None,
        context: HookContext | None = None,
    ) -> str:
        if cache_key is None:
            return self._render_action(hook, payload, context)

        key = cache_key_for(hook, cache_key)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Serving cached output for hook '%s'", hook)
            return cached
        output = self._render_action(hook, payload, context)
        self._cache.put(key, output, ttl if ttl is not None else self.default_ttl)
        return output

    def render_filter(self, hook: str, value: Any, context: HookContext | None = None) -> str:
        result = self.manager.filter(hook, value, context)
        return "" if result is None else str(result)

    def forget(self, hook: str, cache_key: Any) -> None:
        self._cache.pop(cache_key_for(hook, cache_key))

    def clear(self) -> None:
        self._cache.clear()

    def install(self, env: Environment) -> Environment:
        """Expose ``hook(...)`` and ``filter_hook(...)`` to templates rendered by ``env``."""
        env.globals["hook"] = lambda *args, **kwargs: Markup(self.render(*args, **kwargs))
        env.globals["filter_hook"] = lambda *args, **kwargs: Markup(self.render_filter(*args, **kwargs))
        return env

    def _render_action(self, hook: str, payload: Any, context: HookContext | None) -> str:
        results = self.manager.action(hook, payload, context)
        return "".join(str(item) for item in results if item is not None)
