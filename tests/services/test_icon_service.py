"""Tests for IconService."""

from __future__ import annotations

from pathlib import Path

import pytest

import iconctl.infrastructure.discovery as discovery_module
from iconctl.config.models import RenderConfig
from iconctl.infrastructure.engine import IconEngine
from iconctl.services.icons import IconService


@pytest.fixture
def service(engine: IconEngine) -> IconService:
    return IconService(engine)


class TestFind:
    def test_success(self, service: IconService, app_icons: Path) -> None:
        result = service.find(" feather/home ")
        assert result.ok is True
        assert result.op == "find"
        assert result.data == {
            "reference": "feather/home",
            "icon_name": "home",
            "library_key": "feather",
            "path": str(app_icons / "feather" / "home.svg"),
        }

    def test_not_found_carries_attempted(self, service: IconService, app_icons: Path) -> None:
        result = service.find("feather/nonexistent")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "ICON_NOT_FOUND"
        assert result.error.detail["attempted"] == [str(app_icons / "feather" / "nonexistent.svg")]

    def test_unknown_engine(self, service: IconService) -> None:
        result = service.find("bogus:feather/home")
        assert result.error is not None
        assert result.error.code == "ENGINE_NOT_FOUND"
        assert result.error.detail["available"] == ["ui"]

    @pytest.mark.parametrize(
        ("reference", "code"),
        [("", "INVALID_REFERENCE"), ("home", "MISSING_LIBRARY"), ("ui:home", "MISSING_LIBRARY")],
    )
    def test_malformed(self, service: IconService, reference: str, code: str) -> None:
        result = service.find(reference)
        assert result.error is not None
        assert result.error.code == code


class TestRender:
    def test_svg_attributes(self, service: IconService) -> None:
        result = service.render("ui:feather/settings", css_class="w-4 h-4")
        assert result.ok is True
        svg = result.data["svg"]
        assert 'class="icon[ui:feather] fill-current w-4 h-4"' in svg
        assert 'role="img"' in svg
        assert 'aria-label="Settings"' in svg
        assert "w-4 h-4" in svg
        assert result.data["library_key"] == "ui:feather"

    def test_render_config_applied(self, engine: IconEngine) -> None:
        service = IconService(engine, render=RenderConfig(base_classes=[], class_prefix="glyph"))
        svg = service.render("feather/home").data["svg"]
        assert "fill-current" not in svg
        assert "glyph" in svg

    def test_unreadable_file(self, service: IconService, app_icons: Path) -> None:
        (app_icons / "feather" / "home.svg").write_bytes(b"\xff\xfe\x00bad")
        result = service.render("feather/home")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "READ_FAILED"

    def test_not_found(self, service: IconService) -> None:
        result = service.render("feather/missing")
        assert result.op == "render"
        assert result.error is not None
        assert result.error.code == "ICON_NOT_FOUND"


class TestListing:
    def test_layers(self, service: IconService, app_icons: Path, ui_icons: Path) -> None:
        result = service.layers()
        assert result.data["count"] == 2
        assert result.data["items"] == [
            {"namespace": None, "root": str(app_icons), "app": True},
            {"namespace": "ui", "root": str(ui_icons), "app": False},
        ]
        assert result.warnings == []

    def test_layers_warn_on_shadowed_namespace(
        self, engine: IconEngine, tmp_path: Path, ui_icons: Path
    ) -> None:
        shadow = tmp_path / "shadow"
        shadow.mkdir()
        engine.registry.register("ui", shadow, origin="config")
        result = IconService(engine).layers()
        assert [item["root"] for item in result.data["items"]] == [
            str(engine.layers()[0].root),
            str(ui_icons),
        ]
        assert result.warnings == [
            f"Duplicate icon namespace 'ui' from config ignored: {shadow}"
        ]

    def test_libraries(self, service: IconService) -> None:
        result = service.libraries()
        assert result.op == "libraries"
        assert [item["library"] for item in result.data["items"]] == [
            "feather",
            "heroicons/outline",
            "heroicons/solid",
            "ui:feather",
        ]
        assert result.data["icon_count"] == 5
        assert "icons" not in result.data["items"][0]

    def test_libraries_query(self, service: IconService) -> None:
        result = service.libraries(query="BELL")
        assert result.data["items"] == [
            {"library": "heroicons/outline", "count": 1, "icons": ["bell"]},
            {"library": "heroicons/solid", "count": 1, "icons": ["bell"]},
        ]
        assert result.data["icon_count"] == 2

    def test_single_library(self, service: IconService) -> None:
        result = service.libraries("feather")
        assert result.op == "library"
        assert result.data == {"library": "feather", "icons": ["home", "star"], "count": 2}

    def test_single_library_query(self, service: IconService) -> None:
        assert service.libraries("feather", query="st").data["icons"] == ["star"]

    def test_unknown_library(self, service: IconService) -> None:
        result = service.libraries("lucide")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "LIBRARY_NOT_FOUND"
        assert "ui:feather" in result.error.detail["available"]

    def test_discovery_failure_reports_partial(
        self, service: IconService, ui_icons: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        real_scan = discovery_module.scan_layer

        def flaky_scan(root: Path, **kwargs: object) -> dict[str, tuple[str, ...]]:
            if root == ui_icons:
                raise OSError("unreadable")
            return real_scan(root, **kwargs)  # type: ignore[arg-type]

        monkeypatch.setattr(discovery_module, "scan_layer", flaky_scan)
        result = service.libraries()
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "DISCOVERY_FAILED"
        assert result.error.detail["failures"][0]["namespace"] == "ui"
        assert result.meta is not None
        assert result.meta["partial"]["feather"] == ["home", "star"]
        assert "previous" not in result.meta

    def test_discovery_failure_includes_previous_index(
        self, service: IconService, engine: IconEngine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        assert service.preload().ok is True

        def always_fail(root: Path, **kwargs: object) -> dict[str, tuple[str, ...]]:
            raise OSError("disk gone")

        monkeypatch.setattr(discovery_module, "scan_layer", always_fail)
        engine.invalidate()
        result = service.libraries()
        assert result.ok is False
        assert result.meta is not None
        assert result.meta["partial"] == {}
        assert result.meta["previous"]["ui:feather"] == ["settings"]


class TestLifecycle:
    def test_preload(self, service: IconService) -> None:
        result = service.preload()
        assert result.data == {"libraries": 4, "icons": 5}

    def test_invalidate(self, service: IconService, engine: IconEngine, app_icons: Path) -> None:
        service.preload()
        (app_icons / "feather" / "home.svg").unlink()
        assert service.find("feather/home").ok is False
        assert service.invalidate().data == {"invalidated": True}
        assert service.libraries("feather").data["icons"] == ["star"]

