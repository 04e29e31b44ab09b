"""Handler descriptors and registry entry models."""

from __future__ import annotations

import hashlib
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from modhooks.patterns import is_wildcard

METHOD_SEPARATOR = "#"
DEFAULT_PRIORITY = 50


class HookPriority(IntEnum):
    """Named priorities. Lower values run earlier; any int is accepted."""

    FIRST = 0
    HIGH = 10
    NORMAL = DEFAULT_PRIORITY
    LOW = 100
    LAST = 1000


@dataclass(frozen=True)
class DirectHandler:
    func: Callable[..., Any]

    def signature(self) -> str:
        bound_self = getattr(self.func, "__self__", None)
        target = getattr(self.func, "__func__", self.func)
        owner = target if bound_self is None or inspect.ismodule(bound_self) else bound_self
        return f"{self.label()}@{id(owner)}"

    def label(self) -> str:
        target = getattr(self.func, "__func__", self.func)
        module = getattr(target, "__module__", None) or type(target).__module__
        qualname = getattr(target, "__qualname__", None) or type(target).__qualname__
        return f"{module}.{qualname}"


@dataclass(frozen=True)
class IndirectHandler:
    """A handler named by class, resolved through the host's resolver at call time.

    ``method_name=None`` means the resolved instance itself is invoked. Malformed
    descriptors are stored as given and fail at resolution time.
    """

    type_name: str
    method_name: str | None = None

    @classmethod
    def parse(cls, descriptor: str) -> IndirectHandler:
        type_name, sep, method = descriptor.partition(METHOD_SEPARATOR)
        return cls(type_name=type_name, method_name=method if sep else None)

    def signature(self) -> str:
        return self.label()

    def label(self) -> str:
        if self.method_name is not None:
            return f"{self.type_name}{METHOD_SEPARATOR}{self.method_name}"
        return self.type_name


Handler = Union[DirectHandler, IndirectHandler]
HandlerLike = Union[Handler, str, Callable[..., Any]]


def parse_handler(handler: HandlerLike) -> Handler:
    if isinstance(handler, (DirectHandler, IndirectHandler)):
        return handler
    if isinstance(handler, str):
        return IndirectHandler.parse(handler)
    if callable(handler):
        return DirectHandler(handler)
    raise TypeError(f"Handler must be callable or a descriptor string, got {type(handler).__name__}")


def make_handler_id(hook: str, handler: Handler, priority: int) -> str:
    raw = f"{hook}|{handler.signature()}|{priority}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class HandlerEntry:
    hook: str
    handler: Handler
    priority: int
    once: bool
    id: str


class HookRegistration(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hook: str
    id: str
    priority: int
    once: bool
    handler: str
    wildcard: bool

    @classmethod
    def from_entry(cls, entry: HandlerEntry) -> HookRegistration:
        return cls(
            hook=entry.hook,
            id=entry.id,
            priority=entry.priority,
            once=entry.once,
            handler=entry.handler.label(),
            wildcard=is_wildcard(entry.hook),
        )
