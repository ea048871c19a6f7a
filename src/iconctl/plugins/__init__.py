"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file local plugins.
INVARIANT: Plugin failures are warnings, never errors.
"""

from iconctl.plugins.hookspecs import hookimpl
from iconctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
