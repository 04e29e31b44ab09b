"""Handler resolution: turning class-name descriptors into instances."""

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol

from modhooks.errors import ResolutionError

logger = logging.getLogger(__name__)


class HandlerResolver(Protocol):
    def resolve(self, type_name: str) -> Any: ...


def import_object(path: str) -> Any:
    """Import ``pkg.module:Attr`` or dotted ``pkg.module.Attr``."""
    module_name, sep, attr_path = path.partition(":")
    if not sep:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ResolutionError(path, "expected 'module:Class' or 'module.Class'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ResolutionError(path, f"cannot import module '{module_name}' ({exc})") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ResolutionError(path, f"'{module_name}' has no attribute '{attr_path}'") from exc
    return obj


class ImportResolver:
    """Imports the named class and constructs it without arguments.

    Instances are cached per type name unless ``cache_instances`` is False.
    """

    def __init__(self, cache_instances: bool = True) -> None:
        self.cache_instances = cache_instances
        self._instances: dict[str, Any] = {}
        self._lock = threading.Lock()

    def resolve(self, type_name: str) -> Any:
        with self._lock:
            if type_name in self._instances:
                return self._instances[type_name]
        cls = import_object(type_name)
        if not callable(cls):
            raise ResolutionError(type_name, "target is not constructible")
        instance = cls()
        logger.debug("Constructed handler instance for %s", type_name)
        if self.cache_instances:
            with self._lock:
                instance = self._instances.setdefault(type_name, instance)
        return instance


class ContainerResolver:
    """Resolves names through factories bound by the host application."""

    def __init__(self) -> None:
        self._factories: dict[str, tuple[Callable[[], Any], bool]] = {}
        self._shared: dict[str, Any] = {}
        self._lock = threading.Lock()

    def bind(self, name: str, factory: Callable[[], Any], shared: bool = True) -> None:
        with self._lock:
            self._factories[name] = (factory, shared)
            self._shared.pop(name, None)

    def instance(self, name: str, obj: Any) -> None:
        self.bind(name, lambda: obj, shared=True)

    def resolve(self, type_name: str) -> Any:
        with self._lock:
            if type_name in self._shared:
                return self._shared[type_name]
            binding = self._factories.get(type_name)
        if binding is None:
            raise ResolutionError(type_name, "no binding registered")
        factory, shared = binding
        obj = factory()
        if shared:
            with self._lock:
                obj = self._shared.setdefault(type_name, obj)
        return obj
