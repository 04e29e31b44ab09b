from pathlib import Path

import pytest

from modhooks.scaffold import kebab, make_hook, snake, studly


def test_name_conversions() -> None:
    assert studly("dashboard.widgets") == "DashboardWidgets"
    assert studly("userProfile-saved") == "UserProfileSaved"
    assert snake("dashboard.widgets") == "dashboard_widgets"
    assert kebab("Dashboard Widgets") == "dashboard-widgets"


def test_make_hook_writes_handler_module(tmp_path: Path) -> None:
    result = make_hook("dashboard.widgets", "billing", base_dir=tmp_path)

    assert result.class_name == "DashboardWidgetsHook"
    assert result.handler_path == tmp_path / "billing" / "hooks" / "dashboard_widgets_hook.py"
    assert result.view_path is None
    assert (tmp_path / "billing" / "__init__.py").exists()
    assert (tmp_path / "billing" / "hooks" / "__init__.py").exists()

    source = result.handler_path.read_text()
    assert '@hook("dashboard.widgets")' in source
    assert "class DashboardWidgetsHook:" in source
    compile(source, str(result.handler_path), "exec")


def test_make_hook_refuses_to_overwrite(tmp_path: Path) -> None:
    make_hook("dashboard.widgets", "billing", base_dir=tmp_path)

    with pytest.raises(FileExistsError):
        make_hook("dashboard.widgets", "billing", base_dir=tmp_path)


def test_make_hook_widget_writes_view_template(tmp_path: Path) -> None:
    result = make_hook("dashboard.widgets", "billing", base_dir=tmp_path, widget=True)

    assert result.view_path == tmp_path / "billing" / "templates" / "hooks" / "dashboard-widgets.html.j2"
    view = result.view_path.read_text()
    assert 'class="hook-dashboard-widgets"' in view
    assert "{{ payload }}" in view

    source = result.handler_path.read_text()
    assert '"hooks/dashboard-widgets.html.j2"' in source
    compile(source, str(result.handler_path), "exec")


def test_make_hook_widget_keeps_existing_view(tmp_path: Path) -> None:
    view = tmp_path / "billing" / "templates" / "hooks" / "dashboard-widgets.html.j2"
    view.parent.mkdir(parents=True)
    view.write_text("custom")

    make_hook("dashboard.widgets", "billing", base_dir=tmp_path, widget=True)

    assert view.read_text() == "custom"


def test_make_hook_validates_names(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        make_hook("...", "billing", base_dir=tmp_path)
    with pytest.raises(ValueError):
        make_hook("x", "not-a-package", base_dir=tmp_path)
