"""Tests for IconSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from iconctl.config.settings import IconSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ICONCTL_CONFIG", "ICONCTL_QUIET", "ICONCTL_PROJECT_ROOT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = IconSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.icons.path == "app/assets/icons"
        assert settings.layers == []

    def test_frozen(self, tmp_path: Path) -> None:
        settings = IconSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "iconctl.toml").write_text(
            '[icons]\npath = "assets/icons"\n\n[[layers]]\nnamespace = "ui"\npath = "ui/icons"\n'
        )
        settings = IconSettings.from_cli(project_root=tmp_path)
        assert settings.icons.path == "assets/icons"
        assert settings.icons.preload is True
        assert [(layer.namespace, layer.path) for layer in settings.layers] == [("ui", "ui/icons")]

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "icons.toml"
        custom.parent.mkdir()
        custom.write_text("[render]\nclass_prefix = \"glyph\"\n")
        settings = IconSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.render.class_prefix == "glyph"
        assert settings.config_path == custom

    def test_project_root_from_config_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "iconctl.toml").write_text("")
        nested = tmp_path / "app" / "views"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = IconSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "iconctl.toml").write_text("[icons\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            IconSettings.from_cli(project_root=tmp_path)


class TestOverrides:
    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = IconSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ICONCTL_QUIET", "true")
        assert IconSettings.from_cli(project_root=tmp_path).quiet is True

    def test_nested_env_var_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "iconctl.toml").write_text("[watch]\ninterval = 3.0\n")
        monkeypatch.setenv("ICONCTL_WATCH__INTERVAL", "0.5")
        assert IconSettings.from_cli(project_root=tmp_path).watch.interval == 0.5
