"""Panel entry model and the typed host registration commands built from it.

// [LAW:one-type-per-behavior] PanelEntry mirrors configuration; TopLevelMenu and
//   SubMenu are the only shapes ever sent to the host.
// [LAW:single-enforcer] Required-field validation happens only in the command builders.

This module is pure data with no dependencies on other project modules besides errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from admin_panels.errors import (
    HookAlreadyAssignedError,
    HostRegistrationError,
    MissingFieldError,
)


class PanelType(str, Enum):
    """Discriminator for configured panel entries."""

    PANEL = "panel"
    SUB_PANEL = "sub-panel"
    WP_SUB_PANEL = "wp-sub-panel"

    @classmethod
    def parse(cls, raw: object) -> PanelType | str:
        """Return the enum member for raw, or raw itself when unrecognized."""
        try:
            return cls(raw)
        except ValueError:
            return str(raw or "")


# Fields every entry needs before it can be sent to the host.
REQUIRED_FIELDS = ("page", "menu", "capabilities", "slug")

_KNOWN_KEYS = frozenset(
    {"id", "type", "page", "menu", "slug", "capabilities", "icon", "position", "parent", "hook"}
)


@dataclass
class PanelEntry:
    """One configured admin page.

    Created once at normalization; ``hook`` is the only field mutated afterwards.
    """

    id: str
    type: PanelType | str
    page: str | None = None
    menu: str | None = None
    slug: str | None = None
    capabilities: object = None
    icon: str | None = None
    position: int | float | None = None
    parent: str | None = None
    hook: object = None
    extra: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_config(cls, key: str, raw: dict[str, object]) -> PanelEntry:
        extra = {k: v for k, v in raw.items() if k not in _KNOWN_KEYS}
        return cls(
            id=key,
            type=PanelType.parse(raw.get("type")),
            page=raw.get("page"),
            menu=raw.get("menu"),
            slug=raw.get("slug"),
            capabilities=raw.get("capabilities"),
            icon=raw.get("icon"),
            position=raw.get("position"),
            parent=raw.get("parent"),
            extra=extra,
        )

    @property
    def is_registered(self) -> bool:
        return self.hook is not None

    def assign_hook(self, hook: object) -> None:
        """Record the host handle for this entry. Allowed exactly once."""
        if self.hook is not None:
            raise HookAlreadyAssignedError(self.id)
        if not hook:
            raise HostRegistrationError(self.id, "host returned an empty hook")
        self.hook = hook


def _require(entry: PanelEntry, name: str) -> object:
    value = getattr(entry, name)
    if value is None or value == "":
        raise MissingFieldError(entry.id, name)
    return value


@dataclass(frozen=True)
class TopLevelMenu:
    """Arguments for the host's top-level menu primitive."""

    panel_id: str
    page: str
    menu: str
    capabilities: object
    slug: str
    icon_url: str | None
    position: int | float | None

    @classmethod
    def build(cls, entry: PanelEntry, icon_url: str | None) -> TopLevelMenu:
        page, menu, capabilities, slug = (_require(entry, name) for name in REQUIRED_FIELDS)
        return cls(
            panel_id=entry.id,
            page=page,
            menu=menu,
            capabilities=capabilities,
            slug=slug,
            icon_url=icon_url,
            position=entry.position,
        )


@dataclass(frozen=True)
class SubMenu:
    """Arguments for the host's sub-menu primitive."""

    panel_id: str
    parent_slug: str
    page: str
    menu: str
    capabilities: object
    slug: str

    @classmethod
    def build(cls, entry: PanelEntry, parent_slug: str) -> SubMenu:
        page, menu, capabilities, slug = (_require(entry, name) for name in REQUIRED_FIELDS)
        return cls(
            panel_id=entry.id,
            parent_slug=parent_slug,
            page=page,
            menu=menu,
            capabilities=capabilities,
            slug=slug,
        )


MenuRegistration = TopLevelMenu | SubMenu
