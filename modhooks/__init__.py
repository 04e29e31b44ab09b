"""Priority-ordered hook registry and dispatcher."""

from modhooks.context import HookContext
from modhooks.discovery import bootstrap, discover_hooks, hook
from modhooks.dispatcher import HookManager
from modhooks.errors import HandlerError, HookError, ReentrancyError, ResolutionError
from modhooks.models import DirectHandler, HandlerEntry, HookPriority, HookRegistration, IndirectHandler
from modhooks.registry import HookRegistry
from modhooks.resolver import ContainerResolver, HandlerResolver, ImportResolver

__all__ = [
    "ContainerResolver",
    "DirectHandler",
    "HandlerEntry",
    "HandlerError",
    "HandlerResolver",
    "HookContext",
    "HookError",
    "HookManager",
    "HookPriority",
    "HookRegistration",
    "HookRegistry",
    "ImportResolver",
    "IndirectHandler",
    "ReentrancyError",
    "ResolutionError",
    "bootstrap",
    "discover_hooks",
    "hook",
]
