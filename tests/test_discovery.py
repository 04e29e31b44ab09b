import sys
import textwrap
import uuid
from pathlib import Path

import pytest

from modhooks.config import DiscoveryConfig, HooksConfig
from modhooks.discovery import HookSpec, bootstrap, discover_hooks, hook, hook_specs
from modhooks.dispatcher import HookManager
from modhooks.models import DirectHandler, IndirectHandler


def _write_package(root: Path, files: dict[str, str]) -> str:
    name = f"hookpkg_{uuid.uuid4().hex[:8]}"
    package = root / name
    package.mkdir()
    (package / "__init__.py").write_text("")
    for relative, source in files.items():
        path = package / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.parent != package and not (path.parent / "__init__.py").exists():
            (path.parent / "__init__.py").write_text("")
        path.write_text(textwrap.dedent(source))
    return name


@pytest.fixture()
def package_root(tmp_path: Path, monkeypatch):
    monkeypatch.syspath_prepend(str(tmp_path))
    before = set(sys.modules)
    yield tmp_path
    for name in set(sys.modules) - before:
        if name.startswith("hookpkg_"):
            del sys.modules[name]


HANDLERS = """
from modhooks import hook


@hook("dashboard.widgets", priority=10)
@hook("dashboard.sidebar")
def recent_orders(payload, ctx):
    return "orders"


@hook("dashboard.*", priority=90, once=True)
class Audit:
    def __call__(self, payload, ctx):
        return "audit"


class Billing:
    @hook("invoice.total")
    def add_tax(self, total, ctx):
        return total + 1

    def untouched(self, total, ctx):
        return total


def plain(payload, ctx):
    return "plain"
"""


def test_hook_decorator_records_specs_in_source_order() -> None:
    @hook("a", priority=1)
    @hook("b", once=True)
    def handler(payload, ctx):
        return payload

    assert hook_specs(handler) == (HookSpec("a", 1, False), HookSpec("b", 50, True))


def test_hook_specs_are_not_inherited() -> None:
    @hook("base")
    class Base:
        pass

    class Child(Base):
        pass

    assert hook_specs(Base) == (HookSpec("base"),)
    assert hook_specs(Child) == ()


def test_discover_registers_functions_classes_and_methods(package_root: Path) -> None:
    name = _write_package(package_root, {"handlers.py": HANDLERS})
    manager = HookManager()

    added = discover_hooks(manager, [name])

    assert added == 4
    module = f"{name}.handlers"
    handlers = {(entry.hook, entry.priority): entry for entry in manager.registry.entries()}
    assert isinstance(handlers[("dashboard.widgets", 10)].handler, DirectHandler)
    assert handlers[("dashboard.*", 90)].handler == IndirectHandler(f"{module}:Audit")
    assert handlers[("dashboard.*", 90)].once is True
    assert handlers[("invoice.total", 50)].handler == IndirectHandler(f"{module}:Billing", "add_tax")
    assert handlers[("dashboard.widgets", 10)].id == f"{module}:recent_orders|dashboard.widgets|10"

    assert manager.action("dashboard.widgets") == ["orders", "audit"]
    assert manager.action("dashboard.widgets") == ["orders"]
    assert manager.filter("invoice.total", 10) == 11


def test_discovery_is_idempotent(package_root: Path) -> None:
    name = _write_package(package_root, {"handlers.py": HANDLERS})
    manager = HookManager()

    assert discover_hooks(manager, [name]) == 4
    assert discover_hooks(manager, [name]) == 0
    assert len(manager.registry) == 4


def test_discovery_walks_subpackages_and_skips_broken_modules(package_root: Path, caplog) -> None:
    name = _write_package(
        package_root,
        {
            "billing/hooks.py": """
            from modhooks import hook

            @hook("invoice.paid")
            def notify(payload, ctx):
                return "notified"
            """,
            "broken.py": "raise RuntimeError('cannot import me')\n",
        },
    )
    manager = HookManager()

    with caplog.at_level("WARNING", logger="modhooks.discovery"):
        assert discover_hooks(manager, [name]) == 1

    assert manager.action("invoice.paid") == ["notified"]
    assert f"{name}.broken" in caplog.text


def test_imported_objects_are_registered_by_their_defining_module(package_root: Path) -> None:
    name = _write_package(
        package_root,
        {
            "source.py": """
            from modhooks import hook

            @hook("x")
            def handler(payload, ctx):
                return "x"
            """,
            "reexport.py": "from .source import handler\n",
        },
    )
    manager = HookManager()

    assert discover_hooks(manager, [name]) == 1


def test_bootstrap_uses_config_packages(package_root: Path) -> None:
    configured = _write_package(package_root, {"handlers.py": HANDLERS})
    extra = _write_package(
        package_root,
        {"more.py": "from modhooks import hook\n\n@hook('extra')\ndef f(p, c):\n    return 'extra'\n"},
    )
    config = HooksConfig(discovery=DiscoveryConfig(packages=[configured]))

    manager = bootstrap(config, packages=[extra])

    assert manager.has("invoice.total")
    assert manager.action("extra") == ["extra"]


def test_bootstrap_skips_configured_packages_when_disabled(package_root: Path) -> None:
    configured = _write_package(package_root, {"handlers.py": HANDLERS})
    config = HooksConfig(discovery=DiscoveryConfig(enabled=False, packages=[configured]))

    manager = bootstrap(config)

    assert len(manager.registry) == 0


def test_discovered_handlers_keep_definition_order(package_root: Path) -> None:
    name = _write_package(
        package_root,
        {
            "ordered.py": """
            from modhooks import hook


            @hook("x")
            def zeta(payload, ctx):
                return "zeta"


            @hook("x")
            def alpha(payload, ctx):
                return "alpha"
            """
        },
    )
    manager = HookManager()
    discover_hooks(manager, [name])

    assert manager.action("x") == ["zeta", "alpha"]
