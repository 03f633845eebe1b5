"""Panel classification and parent resolution. Pure functions, no mutation.

// [LAW:dataflow-not-control-flow] Children and parent slugs are derived from
//   registry data on every call; nothing is cached between phases.
"""

from __future__ import annotations

from collections.abc import Mapping

from admin_panels.errors import (
    CyclicParentError,
    DanglingParentError,
    InvalidParentError,
    MissingFieldError,
)
from admin_panels.panel_types import PanelEntry, PanelType


def panels_by_type(panels: Mapping[str, PanelEntry], panel_type: PanelType | str) -> list[PanelEntry]:
    return [entry for entry in panels.values() if entry.type == panel_type]


def sub_panels_of(panels: Mapping[str, PanelEntry], parent_id: str) -> list[PanelEntry]:
    """Return ``sub-panel`` entries whose parent is ``parent_id``, in registry order."""
    return [
        entry
        for entry in panels.values()
        if entry.type == PanelType.SUB_PANEL and entry.parent == parent_id
    ]


def resolve_parent_slug(panels: Mapping[str, PanelEntry], entry: PanelEntry) -> str:
    """Return the host menu slug ``entry`` should be attached under.

    A ``sub-panel`` parent is a registry id and resolves to that entry's slug.
    A ``wp-sub-panel`` parent is already a host slug and is returned as-is.
    """
    if entry.type == PanelType.WP_SUB_PANEL:
        if not entry.parent:
            raise MissingFieldError(entry.id, "parent")
        return entry.parent

    if entry.type != PanelType.SUB_PANEL:
        raise InvalidParentError(entry.id, str(getattr(entry.type, "value", entry.type)))

    if not entry.parent:
        raise MissingFieldError(entry.id, "parent")
    parent = panels.get(entry.parent)
    if parent is None:
        raise DanglingParentError(entry.id, entry.parent)
    if not parent.slug:
        raise MissingFieldError(parent.id, "slug")
    return parent.slug


def parent_chain(panels: Mapping[str, PanelEntry], entry: PanelEntry) -> list[str]:
    """Walk parent links from ``entry`` to its root and return the visited ids.

    The walk stops at the first entry that is not a ``sub-panel`` (a panel or a
    wp-sub-panel, whose parent is outside the registry).
    """
    chain = [entry.id]
    current = entry
    while current.type == PanelType.SUB_PANEL:
        if not current.parent:
            raise MissingFieldError(current.id, "parent")
        parent = panels.get(current.parent)
        if parent is None:
            raise DanglingParentError(current.id, current.parent)
        if parent.id in chain:
            raise CyclicParentError(entry.id, chain + [parent.id])
        chain.append(parent.id)
        current = parent
    return chain