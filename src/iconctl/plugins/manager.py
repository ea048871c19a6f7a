"""Plugin loading and icon-root collection.

Plugins come from the ``iconctl.plugins`` entry-point group and from
single-file modules in a local directory (``.iconctl/plugins/`` by
default). A plugin contributes namespaced icon roots through
``register_icon_roots`` and may observe cache rebuilds.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from iconctl.domain.namespaces import normalize_namespace
from iconctl.infrastructure.registry import LayerDeclaration
from iconctl.plugins.hookspecs import PROJECT_NAME, IconctlHookSpec

ENTRY_POINT_GROUP = "iconctl.plugins"
LOCAL_MODULE_PREFIX = "iconctl_local_plugin_"

logger = logging.getLogger(__name__)


def _has_hook_impls(cls: type) -> bool:
    """True if any public method of *cls* carries an ``@hookimpl`` marker."""
    marker = f"{PROJECT_NAME}_impl"
    return any(
        callable(member) and getattr(member, marker, None)
        for name, member in inspect.getmembers(cls)
        if not name.startswith("_")
    )


def _import_file(py_file: Path, module_name: str) -> ModuleType | None:
    """Import *py_file* as *module_name*; None (with a warning) on failure."""
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        return None
    return module


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` for iconctl hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(IconctlHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then local ones. Returns plugin names."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local(py_file)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Icon roots
    # ------------------------------------------------------------------

    def collect_icon_roots(self) -> list[LayerDeclaration]:
        """Ask every plugin for its icon roots, in registration order.

        Each implementation is called separately: a plugin that raises or
        returns garbage is logged and skipped, the rest still contribute.
        """
        declarations: list[LayerDeclaration] = []
        for impl in self._pm.hook.register_icon_roots.get_hookimpls():
            try:
                roots = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect icon roots from plugin %s", impl.plugin_name, exc_info=True
                )
                continue
            declarations.extend(self._declarations(impl.plugin_name, roots))
        return declarations

    @staticmethod
    def _declarations(plugin_name: str, roots: object) -> list[LayerDeclaration]:
        if roots is None:
            return []
        if not isinstance(roots, dict):
            logger.warning("Plugin %s returned non-dict icon roots", plugin_name)
            return []

        declared: list[LayerDeclaration] = []
        for identifier, root in roots.items():
            try:
                namespace = normalize_namespace(str(identifier))
            except ValueError:
                logger.warning("Skipping icon root %r from plugin %s", identifier, plugin_name)
                continue
            declared.append(LayerDeclaration(namespace, Path(root), origin=f"plugin:{plugin_name}"))
        return declared

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load_local(self, py_file: Path) -> None:
        module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
        module = _import_file(py_file, module_name)
        if module is None:
            return
        for _name, cls in inspect.getmembers(module, inspect.isclass):
            if cls.__module__ != module_name or not _has_hook_impls(cls):
                continue
            instance = self._construct(cls, f"{module_name}.{cls.__name__}")
            if instance is not None:
                self.register_plugin(instance, name=f"{module_name}.{cls.__name__}")
                logger.debug("Loaded local plugin %s from %s", cls.__name__, py_file)

    def _instantiate_entry_point_classes(self) -> None:
        """Entry points may register a class; hooks need a bound instance."""
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not _has_hook_impls(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            instance = self._construct(plugin, name)
            if instance is not None:
                self._pm.register(instance, name=name)

    @staticmethod
    def _construct(cls: type, name: str) -> object | None:
        try:
            return cls()
        except Exception:
            logger.warning("Failed to instantiate plugin %s", name, exc_info=True)
            return None
