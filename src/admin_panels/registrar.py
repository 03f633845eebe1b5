"""Registrar: sends every resolved panel to the host menu API exactly once.

// [LAW:single-enforcer] This is the only module that calls host registration primitives.
// [LAW:one-source-of-truth] Registration order is registry order: panels first,
//   each followed depth-first by its sub-panels, then wp-sub-panels the same way.

Failure policy: configuration problems on one entry (missing field, dangling or
cyclic parent) are logged, recorded in the report and the entry is skipped
together with its descendants; siblings keep registering. A host rejection
(HostRegistrationError) propagates and aborts the rest of the batch. Hooks
already assigned are never touched again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from admin_panels.classifier import (
    panels_by_type,
    parent_chain,
    resolve_parent_slug,
    sub_panels_of,
)
from admin_panels.errors import (
    CyclicParentError,
    DanglingParentError,
    HostRegistrationError,
    PanelError,
    UnknownPanelError,
)
from admin_panels.icons import DEFAULT_NATIVE_ICON_PREFIXES, resolve_icon
from admin_panels.panel_types import MenuRegistration, PanelEntry, PanelType, SubMenu, TopLevelMenu

if TYPE_CHECKING:
    from admin_panels.host import MenuHost

logger = logging.getLogger(__name__)


@dataclass
class RegistrationReport:
    """Outcome of one registration pass."""

    registered: list[str] = field(default_factory=list)
    failures: dict[str, PanelError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class Registrar:
    def __init__(
        self,
        host: MenuHost,
        executable: Callable[..., object],
        icon_url: str,
        native_icon_prefixes: tuple[str, ...] = DEFAULT_NATIVE_ICON_PREFIXES,
    ):
        self.host = host
        self.executable = executable
        self.icon_url = icon_url
        self.native_icon_prefixes = native_icon_prefixes
        self.failures: dict[str, PanelError] = {}

    def register_all(self, panels: Mapping[str, PanelEntry]) -> RegistrationReport:
        """Register every panel and wp-sub-panel tree, in registry order."""
        report = RegistrationReport()
        for root in panels_by_type(panels, PanelType.PANEL):
            self._register_tree(panels, root, report)
        for root in panels_by_type(panels, PanelType.WP_SUB_PANEL):
            self._register_tree(panels, root, report)
        self._report_unreachable(panels, report)
        logger.info(
            "registered %d panel(s), skipped %d",
            len(report.registered),
            len(report.failures),
        )
        return report

    def register_panel(self, panels: Mapping[str, PanelEntry], panel_id: str) -> RegistrationReport:
        """Register one top-level panel and its sub-panels."""
        entry = panels.get(panel_id)
        if entry is None:
            raise UnknownPanelError(panel_id)
        report = RegistrationReport()
        self._register_tree(panels, entry, report)
        return report

    def build_command(self, panels: Mapping[str, PanelEntry], entry: PanelEntry) -> MenuRegistration:
        if entry.type == PanelType.PANEL:
            icon_url = resolve_icon(entry.icon, self.icon_url, self.native_icon_prefixes)
            return TopLevelMenu.build(entry, icon_url)
        return SubMenu.build(entry, resolve_parent_slug(panels, entry))

    def _register_tree(
        self,
        panels: Mapping[str, PanelEntry],
        entry: PanelEntry,
        report: RegistrationReport,
    ) -> None:
        if entry.is_registered:
            logger.debug(
                "panel '%s' already registered as %r",
                entry.id,
                entry.hook,
                extra={"panel_id": entry.id},
            )
        else:
            try:
                command = self.build_command(panels, entry)
            except PanelError as exc:
                self._record_failure(report, entry, exc)
                self._skip_descendants(panels, entry, report)
                return
            entry.assign_hook(self._send(command))
            report.registered.append(entry.id)

        for child in sub_panels_of(panels, entry.id):
            self._register_tree(panels, child, report)

    def _send(self, command: MenuRegistration) -> object:
        try:
            if isinstance(command, TopLevelMenu):
                logger.debug(
                    "add top-level menu '%s' for panel '%s'",
                    command.slug,
                    command.panel_id,
                    extra={"panel_id": command.panel_id},
                )
                hook = self.host.register_top_level_menu(
                    command.page,
                    command.menu,
                    command.capabilities,
                    command.slug,
                    self.executable,
                    command.icon_url,
                    command.position,
                )
            else:
                logger.debug(
                    "add sub-menu '%s' under '%s' for panel '%s'",
                    command.slug,
                    command.parent_slug,
                    command.panel_id,
                    extra={"panel_id": command.panel_id},
                )
                hook = self.host.register_sub_menu(
                    command.parent_slug,
                    command.page,
                    command.menu,
                    command.capabilities,
                    command.slug,
                    self.executable,
                )
        except HostRegistrationError as exc:
            raise HostRegistrationError(command.panel_id, exc.reason) from exc
        except Exception as exc:
            raise HostRegistrationError(command.panel_id, f"{type(exc).__name__}: {exc}") from exc
        if not hook:
            raise HostRegistrationError(command.panel_id, "host returned an empty hook")
        return hook

    def _record_failure(self, report: RegistrationReport, entry: PanelEntry, exc: PanelError) -> None:
        logger.warning("skipping panel '%s': %s", entry.id, exc, extra={"panel_id": entry.id})
        report.failures[entry.id] = exc
        self.failures[entry.id] = exc

    def _skip_descendants(
        self,
        panels: Mapping[str, PanelEntry],
        entry: PanelEntry,
        report: RegistrationReport,
    ) -> None:
        for child in sub_panels_of(panels, entry.id):
            if child.is_registered or child.id in report.failures:
                continue
            self._record_failure(report, child, DanglingParentError(child.id, entry.id))
            self._skip_descendants(panels, child, report)

    def _report_unreachable(self, panels: Mapping[str, PanelEntry], report: RegistrationReport) -> None:
        # Sub-panels no root reached: missing parent, a loop, or a parent of unknown type.
        for entry in panels_by_type(panels, PanelType.SUB_PANEL):
            if entry.is_registered or entry.id in report.failures:
                continue
            try:
                parent_chain(panels, entry)
            except CyclicParentError as exc:
                self._record_failure(report, entry, exc)
            except PanelError as exc:
                if exc.panel_id == entry.id:
                    self._record_failure(report, entry, exc)
                else:
                    # A link further up is broken; this entry's own parent never registered.
                    self._record_failure(report, entry, DanglingParentError(entry.id, entry.parent))
            else:
                self._record_failure(report, entry, DanglingParentError(entry.id, entry.parent))
