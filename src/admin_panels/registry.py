"""PanelRegistry — resolves panel configuration into host menu registrations.

// [LAW:one-source-of-truth] The registry owns the id -> PanelEntry mapping for
//   the lifetime of its controller; tasks and the controller read this mapping.
// [LAW:dataflow-not-control-flow] Construction only normalizes and schedules;
//   the host decides when registration and hand-off run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType

from admin_panels.classifier import panels_by_type, sub_panels_of
from admin_panels.config import load_panel_config
from admin_panels.errors import PanelError, UnknownPanelError
from admin_panels.host import ComponentController, MenuHost
from admin_panels.icons import DEFAULT_NATIVE_ICON_PREFIXES
from admin_panels.lifecycle import ComponentHandoffTask, MenuBuildTask, Phase
from admin_panels.normalizer import normalize
from admin_panels.panel_types import PanelEntry, PanelType
from admin_panels.registrar import Registrar

logger = logging.getLogger(__name__)

MenuNode = tuple[PanelEntry, list["MenuNode"]]


class PanelRegistry:
    """Loads and registers every panel defined in configuration.

    ``executable`` is handed to the host as the page renderer and is never
    called here. Both lifecycle tasks are deferred onto ``host``.
    """

    def __init__(
        self,
        controller: ComponentController,
        panels: Mapping[str, object],
        executable: Callable[..., object],
        icon_url: str,
        host: MenuHost,
        *,
        native_icon_prefixes: tuple[str, ...] = DEFAULT_NATIVE_ICON_PREFIXES,
    ):
        self.controller = controller
        self.executable = executable
        self.icon_url = icon_url
        self.host = host
        self._panels = normalize(panels)
        self.registrar = Registrar(host, executable, icon_url, native_icon_prefixes)

        self.menu_task: MenuBuildTask | None = None
        if panels_by_type(self._panels, PanelType.PANEL):
            self.menu_task = MenuBuildTask(self.registrar, self._panels)
            host.on_phase(Phase.MENU_BUILD, self.menu_task)
        else:
            logger.debug("no top-level panels configured; menu registration skipped")

        # Hand-off is scheduled after the menu task so hooks are in place when it runs.
        self.handoff_task = ComponentHandoffTask(controller, self.get_panels())
        host.on_phase(Phase.INIT_COMPLETE, self.handoff_task)

    @classmethod
    def from_config_file(
        cls,
        controller: ComponentController,
        path: str | Path | None,
        executable: Callable[..., object],
        host: MenuHost,
        icon_url: str | None = None,
    ) -> PanelRegistry:
        config = load_panel_config(path)
        return cls(
            controller,
            config.panels,
            executable,
            icon_url if icon_url is not None else config.icon_url,
            host,
        )

    @property
    def panels(self) -> Mapping[str, PanelEntry]:
        return MappingProxyType(self._panels)

    def get_panels(self) -> Mapping[str, PanelEntry]:
        return self.panels

    def get_panel(self, panel_id: str) -> PanelEntry:
        try:
            return self._panels[panel_id]
        except KeyError:
            raise UnknownPanelError(panel_id) from None

    def panels_by_type(self, panel_type: PanelType | str) -> list[PanelEntry]:
        return panels_by_type(self._panels, panel_type)

    def get_sub_panels(self, parent_key: str) -> list[PanelEntry]:
        return sub_panels_of(self._panels, parent_key)

    @property
    def failures(self) -> Mapping[str, PanelError]:
        return MappingProxyType(self.registrar.failures)

    def menu_tree(self) -> list[MenuNode]:
        """Panels and wp-sub-panels with their sub-panel subtrees, in registry order."""

        def subtree(entry: PanelEntry) -> MenuNode:
            return (entry, [subtree(child) for child in self.get_sub_panels(entry.id)])

        roots = self.panels_by_type(PanelType.PANEL) + self.panels_by_type(PanelType.WP_SUB_PANEL)
        return [subtree(root) for root in roots]
