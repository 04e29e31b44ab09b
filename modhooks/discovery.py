"""Decorator-based hook declaration and package discovery.

Handlers are declared where they live::

    @hook("dashboard.widgets", priority=10)
    def recent_orders(payload, ctx):
        ...

    @hook("dashboard.*")
    class DashboardAudit:
        def __call__(self, payload, ctx):
            ...

    class Billing:
        @hook("invoice.total")
        def add_tax(self, total, ctx):
            ...

and registered at startup by walking the configured packages with
``discover_hooks``. Classes are registered by name and constructed through the
manager's resolver when first dispatched.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from types import ModuleType
from typing import Any, TypeVar

from modhooks.config import HooksConfig
from modhooks.dispatcher import HookManager
from modhooks.models import DEFAULT_PRIORITY, DirectHandler, Handler, IndirectHandler
from modhooks.resolver import HandlerResolver

logger = logging.getLogger(__name__)

HOOK_MARKER = "__modhooks__"

T = TypeVar("T")


@dataclass(frozen=True)
class HookSpec:
    name: str
    priority: int = DEFAULT_PRIORITY
    once: bool = False


def hook(name: str, priority: int = DEFAULT_PRIORITY, once: bool = False) -> Callable[[T], T]:
    """Mark a function, class or method as a handler for ``name``. Repeatable."""

    def decorator(target: T) -> T:
        existing = vars(target).get(HOOK_MARKER, ())
        # decorators apply bottom-up; keep specs in source order
        setattr(target, HOOK_MARKER, (HookSpec(name, int(priority), once), *existing))
        return target

    return decorator


def hook_specs(target: Any) -> tuple[HookSpec, ...]:
    if isinstance(target, (staticmethod, classmethod)):
        target = target.__func__
    try:
        return tuple(vars(target).get(HOOK_MARKER, ()))
    except TypeError:
        return ()


def _walk_modules(package_name: str) -> Iterator[ModuleType]:
    package = importlib.import_module(package_name)
    yield package
    path = getattr(package, "__path__", None)
    if path is None:
        return

    def _on_error(name: str) -> None:
        logger.warning("Skipping package %s during hook discovery", name, exc_info=True)

    for info in pkgutil.walk_packages(path, package.__name__ + ".", onerror=_on_error):
        try:
            yield importlib.import_module(info.name)
        except Exception:
            logger.warning("Skipping module %s during hook discovery", info.name, exc_info=True)


def iter_declared_hooks(module: ModuleType) -> Iterator[tuple[str, Handler, HookSpec]]:
    """Yield ``(source_location, handler, spec)`` for objects defined in ``module``."""
    # module dicts keep definition order, which sets the equal-priority tie-break
    for obj in list(vars(module).values()):
        if getattr(obj, "__module__", None) != module.__name__:
            continue
        if inspect.isclass(obj):
            type_name = f"{module.__name__}:{obj.__qualname__}"
            for spec in hook_specs(obj):
                yield type_name, IndirectHandler(type_name), spec
            for attr_name, member in vars(obj).items():
                for spec in hook_specs(member):
                    yield f"{type_name}.{attr_name}", IndirectHandler(type_name, attr_name), spec
        elif inspect.isfunction(obj):
            for spec in hook_specs(obj):
                yield f"{module.__name__}:{obj.__qualname__}", DirectHandler(obj), spec


def discover_hooks(manager: HookManager, packages: Iterable[str]) -> int:
    """Register every declared handler found under ``packages``.

    Ids derive from source location, so running discovery again is a no-op.
    Returns the number of newly registered entries.
    """
    added = 0
    for package_name in packages:
        for module in _walk_modules(package_name):
            for location, handler, spec in iter_declared_hooks(module):
                entry_id = f"{location}|{spec.name}|{spec.priority}"
                if manager.add(spec.name, handler, priority=spec.priority, once=spec.once, id=entry_id):
                    added += 1
    logger.info("Hook discovery registered %s handler(s)", added)
    return added


def bootstrap(
    config: HooksConfig,
    resolver: HandlerResolver | None = None,
    packages: Iterable[str] = (),
) -> HookManager:
    """Build a manager from config and register configured plus explicit packages."""
    manager = HookManager.from_config(config, resolver=resolver)
    targets = [*(config.discovery.packages if config.discovery.enabled else []), *packages]
    if targets:
        discover_hooks(manager, targets)
    return manager
