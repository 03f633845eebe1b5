"""Configuration normalization: raw keyed mapping -> PanelEntry mapping.

// [LAW:one-source-of-truth] A panel's id is its configuration key, assigned here only.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping

from admin_panels.errors import ConfigError
from admin_panels.panel_types import PanelEntry, PanelType

logger = logging.getLogger(__name__)


def normalize(raw_config: Mapping[str, object]) -> dict[str, PanelEntry]:
    """Build one PanelEntry per configuration key, preserving insertion order.

    Field presence is not validated here; missing fields surface at
    registration. Values may already be PanelEntry instances, in which case
    they are reused when their id matches the key and copied under the new
    key otherwise, so normalizing twice yields the same mapping and the input
    entries keep their ids.
    """
    if not isinstance(raw_config, Mapping):
        raise ConfigError(f"panel configuration must be a mapping, got {type(raw_config).__name__}")

    panels: dict[str, PanelEntry] = {}
    for key, raw in raw_config.items():
        panel_id = str(key)
        if isinstance(raw, PanelEntry):
            if raw.id == panel_id:
                entry = raw
            else:
                # A copy under a new key is a new panel: it has not been registered yet.
                entry = dataclasses.replace(raw, id=panel_id, hook=None, extra=dict(raw.extra))
        elif isinstance(raw, Mapping):
            entry = PanelEntry.from_config(panel_id, dict(raw))
        else:
            raise ConfigError(
                f"panel '{panel_id}' must be a mapping, got {type(raw).__name__}",
                panel_id=panel_id,
            )
        if not isinstance(entry.type, PanelType):
            logger.warning(
                "panel '%s' has unknown type %r; it will not be registered",
                panel_id,
                entry.type,
                extra={"panel_id": panel_id},
            )
        panels[panel_id] = entry
    return panels
