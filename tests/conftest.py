"""Shared pytest fixtures and test helpers for iconctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from iconctl.infrastructure.engine import IconEngine
from iconctl.infrastructure.registry import LayerRegistry

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0h24v24H0z"/></svg>'


def write_svg(path: Path, content: str = SVG) -> Path:
    """Write an icon file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the root handler swap done by ``configure_logging`` in CLI runs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    icon_level = logging.getLogger("iconctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("iconctl").setLevel(icon_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_svg() -> Callable[..., Path]:
    """Expose :func:`write_svg` to tests that build their own trees."""
    return write_svg


@pytest.fixture
def app_icons(tmp_path: Path) -> Path:
    """Application icon root: ``app/assets/icons`` under a temp project.

    Contains ``feather/home``, ``feather/star`` and the nested
    ``heroicons/outline/bell`` + ``heroicons/solid/bell`` libraries.
    """
    root = tmp_path / "app" / "assets" / "icons"
    write_svg(root / "feather" / "home.svg")
    write_svg(root / "feather" / "star.svg")
    write_svg(root / "heroicons" / "outline" / "bell.svg")
    write_svg(root / "heroicons" / "solid" / "bell.svg")
    return root


@pytest.fixture
def ui_icons(tmp_path: Path) -> Path:
    """Plugin icon root for the ``ui`` namespace with ``feather/settings``."""
    root = tmp_path / "plugins" / "ui" / "icons"
    write_svg(root / "feather" / "settings.svg")
    return root


@pytest.fixture
def registry(app_icons: Path, ui_icons: Path) -> LayerRegistry:
    """Registry with the app layer first and the ``ui`` layer second."""
    reg = LayerRegistry(app_icons)
    reg.register("ui", ui_icons)
    return reg


@pytest.fixture
def engine(registry: LayerRegistry) -> IconEngine:
    """Engine over the app + ``ui`` layers."""
    return IconEngine(registry)


@pytest.fixture
def project_root(tmp_path: Path, app_icons: Path, ui_icons: Path) -> Path:
    """Temp project with an ``iconctl.toml`` declaring the ``ui`` layer."""
    (tmp_path / "iconctl.toml").write_text(
        '[plugins]\nenabled = false\n\n[[layers]]\nnamespace = "ui"\npath = "plugins/ui/icons"\n',
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI discovers its config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.delenv("ICONCTL_CONFIG", raising=False)
    monkeypatch.chdir(project_root)
