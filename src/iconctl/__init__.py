"""iconctl: layered SVG icon resolution and library discovery."""

__version__ = "0.1.0"
