"""Deferred execution: lifecycle phases and the task objects scheduled on them.

// [LAW:single-enforcer] Each task guards its own at-most-once execution.
// [LAW:locality-or-seam] Tasks hold only the collaborators they need, so the
//   menu-build -> init-complete ordering can be exercised without a host.

The host owns scheduling. PhaseDispatcher is the in-process stand-in used by
tests and the plan CLI; a real host adapter maps Phase values onto its own
hook names.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from admin_panels.panel_types import PanelEntry

if TYPE_CHECKING:
    from admin_panels.host import ComponentController
    from admin_panels.registrar import RegistrationReport, Registrar

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Named host lifecycle points."""

    MENU_BUILD = "menu-build"
    INIT_COMPLETE = "init-complete"


# Every observed host lifecycle fires menu-build before init-complete.
PHASE_ORDER: tuple[Phase, ...] = (Phase.MENU_BUILD, Phase.INIT_COMPLETE)

COMPONENT_KIND = "panel"


@dataclass
class MenuBuildTask:
    """Registers every panel with the host when the menu-build phase fires."""

    registrar: Registrar
    panels: Mapping[str, PanelEntry]
    report: RegistrationReport | None = field(default=None, init=False)

    def __call__(self) -> RegistrationReport:
        if self.report is not None:
            logger.warning("menu-build task invoked again; panels are already registered")
            return self.report
        self.report = self.registrar.register_all(self.panels)
        return self.report

    @property
    def has_run(self) -> bool:
        return self.report is not None


@dataclass
class ComponentHandoffTask:
    """Hands the hook-populated panels to the component controller."""

    controller: ComponentController
    panels: Mapping[str, PanelEntry]
    kind: str = COMPONENT_KIND
    has_run: bool = field(default=False, init=False)

    def __call__(self) -> None:
        if self.has_run:
            logger.warning("component hand-off for '%s' invoked again; ignoring", self.kind)
            return
        self.has_run = True
        unregistered = [panel_id for panel_id, entry in self.panels.items() if not entry.is_registered]
        if unregistered:
            logger.debug("handing off %d panel(s) without hooks: %s", len(unregistered), unregistered)
        self.controller.register_components(self.kind, self.panels)


class PhaseDispatcher:
    """Fires callbacks registered per phase, each phase at most once."""

    def __init__(self):
        self._pending: dict[Phase, deque[Callable[[], object]]] = {}
        self._fired: set[Phase] = set()
        self._firing: Phase | None = None

    def on_phase(self, phase: Phase | str, callback: Callable[[], object]) -> None:
        phase = Phase(phase)
        if phase in self._fired and phase != self._firing:
            logger.warning("phase '%s' already fired; dropping late callback %r", phase.value, callback)
            return
        self._pending.setdefault(phase, deque()).append(callback)

    def fire(self, phase: Phase | str) -> int:
        """Run every callback queued for ``phase``. Returns how many ran.

        Callbacks queued while the phase is firing run in the same pass.
        Exceptions propagate; remaining callbacks stay queued but never run.
        """
        phase = Phase(phase)
        if phase in self._fired:
            logger.debug("phase '%s' already fired", phase.value)
            return 0
        self._fired.add(phase)
        self._firing = phase
        queue = self._pending.setdefault(phase, deque())
        ran = 0
        try:
            while queue:
                callback = queue.popleft()
                callback()
                ran += 1
        finally:
            self._firing = None
        logger.debug("phase '%s' ran %d callback(s)", phase.value, ran)
        return ran

    def run(self) -> None:
        for phase in PHASE_ORDER:
            self.fire(phase)

    def has_fired(self, phase: Phase | str) -> bool:
        return Phase(phase) in self._fired

    def pending(self, phase: Phase | str) -> int:
        return len(self._pending.get(Phase(phase), ()))
