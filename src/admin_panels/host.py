"""Host collaborator contracts and an in-process recording host.

// [LAW:locality-or-seam] Registration code talks only to MenuHost and
//   ComponentController, never to a concrete host.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from admin_panels.errors import HostRegistrationError
from admin_panels.lifecycle import Phase, PhaseDispatcher
from admin_panels.panel_types import PanelEntry


class MenuHost(Protocol):
    def register_top_level_menu(
        self,
        page: str,
        menu: str,
        capabilities: object,
        slug: str,
        executable: Callable[..., object],
        icon_url: str | None,
        position: int | float | None,
    ) -> object:
        ...

    def register_sub_menu(
        self,
        parent_slug: str,
        page: str,
        menu: str,
        capabilities: object,
        slug: str,
        executable: Callable[..., object],
    ) -> object:
        ...

    def on_phase(self, phase: Phase | str, callback: Callable[[], object]) -> None:
        ...


class ComponentController(Protocol):
    def register_components(self, kind: str, collection: Mapping[str, PanelEntry]) -> None:
        ...


@dataclass(frozen=True)
class MenuCall:
    """One registration call received by RecordingMenuHost."""

    kind: str  # "menu" | "submenu"
    slug: str
    page: str
    menu: str
    capabilities: object
    hook: str
    parent_slug: str | None = None
    icon_url: str | None = None
    position: int | float | None = None


def _hook_prefix(parent_slug: str) -> str:
    base = parent_slug.rsplit("/", 1)[-1]
    return base.removesuffix(".php") or "admin"


class RecordingMenuHost:
    """MenuHost that records calls and schedules phases on a PhaseDispatcher.

    Hooks follow the host's naming: ``toplevel_page_<slug>`` for top-level
    menus and ``<parent>_page_<slug>`` for sub-menus.
    """

    def __init__(
        self,
        dispatcher: PhaseDispatcher | None = None,
        rejected_capabilities: tuple[object, ...] = (),
    ):
        self.dispatcher = dispatcher if dispatcher is not None else PhaseDispatcher()
        self.rejected_capabilities = tuple(rejected_capabilities)
        self.calls: list[MenuCall] = []
        # Top-level slugs are keyed under None; a sub-menu may reuse its parent's slug.
        self._menus: set[tuple[str | None, str]] = set()

    def _check(self, parent_slug: str | None, slug: str, capabilities: object) -> None:
        if capabilities in self.rejected_capabilities:
            raise HostRegistrationError(slug, f"capability {capabilities!r} is not recognized")
        if (parent_slug, slug) in self._menus:
            where = f" under '{parent_slug}'" if parent_slug else ""
            raise HostRegistrationError(slug, f"menu slug '{slug}'{where} is already registered")

    def register_top_level_menu(self, page, menu, capabilities, slug, executable, icon_url, position):
        self._check(None, slug, capabilities)
        hook = f"toplevel_page_{slug}"
        self._menus.add((None, slug))
        self.calls.append(
            MenuCall("menu", slug, page, menu, capabilities, hook, icon_url=icon_url, position=position)
        )
        return hook

    def register_sub_menu(self, parent_slug, page, menu, capabilities, slug, executable):
        self._check(parent_slug, slug, capabilities)
        hook = f"{_hook_prefix(parent_slug)}_page_{slug}"
        self._menus.add((parent_slug, slug))
        self.calls.append(
            MenuCall("submenu", slug, page, menu, capabilities, hook, parent_slug=parent_slug)
        )
        return hook

    def on_phase(self, phase, callback):
        self.dispatcher.on_phase(phase, callback)

    def calls_for(self, slug: str) -> list[MenuCall]:
        return [call for call in self.calls if call.slug == slug]


class RecordingController:
    """ComponentController that keeps every hand-off it receives."""

    def __init__(self):
        self.components: dict[str, Mapping[str, PanelEntry]] = {}
        self.calls: list[tuple[str, Mapping[str, PanelEntry]]] = []

    def register_components(self, kind: str, collection: Mapping[str, PanelEntry]) -> None:
        self.calls.append((kind, collection))
        self.components[kind] = collection
