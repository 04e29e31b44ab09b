"""Generate handler modules (and optional widget templates) for a hook."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment

logger = logging.getLogger(__name__)

_env = Environment(keep_trailing_newline=True, autoescape=False)

HANDLER_STUB = _env.from_string(
    '''"""Handler for the '{{ hook }}' hook."""

from __future__ import annotations

from typing import Any

from modhooks import HookContext, hook


@hook("{{ hook }}")
class {{ class_name }}:
    def __call__(self, payload: Any, ctx: HookContext) -> Any:
        return payload
'''
)

WIDGET_STUB = _env.from_string(
    '''"""Widget handler for the '{{ hook }}' hook."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader

from modhooks import HookContext, hook

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@hook("{{ hook }}")
class {{ class_name }}:
    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)

    def __call__(self, payload: Any, ctx: HookContext) -> str:
        return self.env.get_template("{{ view_name }}").render(payload=payload, ctx=ctx)
'''
)

VIEW_STUB = _env.from_string(
    """<div class="hook-{{ kebab }}">
    {% raw %}{{ payload }}{% endraw %}
</div>
"""
)


@dataclass(frozen=True)
class ScaffoldResult:
    class_name: str
    handler_path: Path
    view_path: Path | None = None


def _words(name: str) -> list[str]:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    return [word.lower() for word in re.split(r"[^A-Za-z0-9]+", spaced) if word]


def studly(name: str) -> str:
    return "".join(word.capitalize() for word in _words(name))


def snake(name: str) -> str:
    return "_".join(_words(name))


def kebab(name: str) -> str:
    return "-".join(_words(name))


def _ensure_package(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)
    init = path / "__init__.py"
    if not init.exists():
        init.write_text("")


def make_hook(hook: str, module: str, base_dir: str | Path = ".", widget: bool = False) -> ScaffoldResult:
    """Write ``<base>/<module>/hooks/<hook>_hook.py`` declaring a handler class.

    Raises ``FileExistsError`` rather than overwriting an existing handler.
    """
    if not _words(hook):
        raise ValueError(f"Hook name must contain letters or digits: {hook!r}")
    if not module.isidentifier():
        raise ValueError(f"Module name must be a valid Python identifier: {module!r}")

    class_name = f"{studly(hook)}Hook"
    module_dir = Path(base_dir) / module
    hooks_dir = module_dir / "hooks"
    handler_path = hooks_dir / f"{snake(hook)}_hook.py"
    if handler_path.exists():
        raise FileExistsError(f"Hook {class_name} already exists in module {module}: {handler_path}")

    _ensure_package(module_dir)
    _ensure_package(hooks_dir)

    view_path: Path | None = None
    if widget:
        view_name = f"hooks/{kebab(hook)}.html.j2"
        view_path = module_dir / "templates" / view_name
        handler_path.write_text(WIDGET_STUB.render(hook=hook, class_name=class_name, view_name=view_name))
        if view_path.exists():
            logger.info("Keeping existing widget view %s", view_path)
        else:
            view_path.parent.mkdir(parents=True, exist_ok=True)
            view_path.write_text(VIEW_STUB.render(kebab=kebab(hook)))
    else:
        handler_path.write_text(HANDLER_STUB.render(hook=hook, class_name=class_name))

    logger.info("Hook %s created in module %s", class_name, module)
    return ScaffoldResult(class_name=class_name, handler_path=handler_path, view_path=view_path)
