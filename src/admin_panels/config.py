"""Panel configuration file I/O.

Reads a JSON file at $ADMIN_PANELS_CONFIG, defaulting to
XDG_CONFIG_HOME/admin-panels/panels.json. The file is either
``{"panels": {...}, "icon_url": "..."}`` or a bare panels mapping.

Import as: import admin_panels.config
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from admin_panels.errors import ConfigError

ENV_CONFIG_PATH = "ADMIN_PANELS_CONFIG"
ENV_ICON_URL = "ADMIN_PANELS_ICON_URL"


@dataclass(frozen=True)
class PanelConfig:
    """Raw panels mapping plus the asset base URL for panel icons."""

    panels: dict[str, dict] = field(default_factory=dict)
    icon_url: str = ""


def get_config_path() -> Path:
    """Return path to the panel configuration file.

    Uses $ADMIN_PANELS_CONFIG when set, else
    XDG_CONFIG_HOME (default ~/.config) / admin-panels / panels.json.
    """
    explicit = os.environ.get(ENV_CONFIG_PATH)
    if explicit:
        return Path(explicit).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "admin-panels" / "panels.json"


def parse_panel_config(data: object, environ: dict[str, str] | None = None) -> PanelConfig:
    """Split decoded JSON into panels + icon_url, applying env overrides."""
    environ = os.environ if environ is None else environ
    if not isinstance(data, dict):
        raise ConfigError(f"panel config must be a JSON object, got {type(data).__name__}")

    if "panels" in data:
        panels = data["panels"]
        icon_url = str(data.get("icon_url", "") or "")
    else:
        panels = data
        icon_url = ""
    if not isinstance(panels, dict):
        raise ConfigError(f"'panels' must be a JSON object, got {type(panels).__name__}")

    # [LAW:one-source-of-truth] Environment wins over the file for deployment-specific URLs.
    icon_url = environ.get(ENV_ICON_URL, icon_url)
    return PanelConfig(panels=panels, icon_url=icon_url)


def load_panel_config(path: str | Path | None = None) -> PanelConfig:
    """Load panel config from JSON. Missing or corrupt files raise ConfigError."""
    path = Path(path) if path is not None else get_config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"panel config not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigError(f"panel config {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigError(f"panel config {path} could not be read: {e}") from e
    return parse_panel_config(data)
