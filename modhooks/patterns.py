"""Wildcard matching for registered hook names."""

from __future__ import annotations

import re
from functools import lru_cache

WILDCARD = "*"
SEPARATOR = "."


def is_wildcard(name: str) -> bool:
    return WILDCARD in name


@lru_cache(maxsize=1024)
def compile_pattern(name: str) -> re.Pattern[str]:
    """Compile a registered hook name into an anchored regex.

    Each ``*`` stands for one or more characters other than ``.``; every other
    character is literal.
    """
    escaped = re.escape(name).replace(re.escape(WILDCARD), f"[^{re.escape(SEPARATOR)}]+")
    return re.compile(f"^{escaped}\\Z")


def matches(pattern: str, name: str) -> bool:
    if not is_wildcard(pattern):
        return pattern == name
    return compile_pattern(pattern).fullmatch(name) is not None
