"""Locating and reading ``iconctl.toml``.

Lookup order: the ``ICONCTL_CONFIG`` env var, then a walk from the start
directory up to the filesystem root (the way git finds ``.git/``). The
``--config`` CLI flag bypasses both in :mod:`iconctl.config.settings`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from iconctl.config.models import IconConfig

CONFIG_FILENAME = "iconctl.toml"
CONFIG_ENV_VAR = "ICONCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: CWD), or None.

    An ``ICONCTL_CONFIG`` pointing at a missing file disables discovery
    rather than falling back to the walk.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for folder in (directory, *directory.parents):
        candidate = folder / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> IconConfig:
    """Validate the config at *path*, discovering it from *cwd* when omitted.

    With no config file anywhere, the code defaults apply.
    """
    source = path if path is not None else find_config(cwd)
    if source is None:
        return IconConfig()
    with source.open("rb") as fh:
        return IconConfig.model_validate(tomllib.load(fh))
