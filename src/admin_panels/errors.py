"""Error taxonomy for panel registration.

// [LAW:one-source-of-truth] Every failure a panel can hit is a PanelError subclass.
// Each error names the offending panel id so the registrar can record it per entry.
"""

from __future__ import annotations


class PanelError(Exception):
    """Base class for all panel configuration and registration failures."""

    def __init__(self, panel_id: str | None, message: str):
        self.panel_id = panel_id
        super().__init__(message)


class ConfigError(PanelError):
    """Panel configuration could not be read or is structurally invalid."""

    def __init__(self, message: str, panel_id: str | None = None):
        super().__init__(panel_id, message)


class MissingFieldError(PanelError):
    def __init__(self, panel_id: str, field: str):
        self.field = field
        super().__init__(panel_id, f"panel '{panel_id}' is missing required field '{field}'")


class DanglingParentError(PanelError):
    def __init__(self, panel_id: str, parent: str | None):
        self.parent = parent
        super().__init__(
            panel_id,
            f"panel '{panel_id}' references parent '{parent}' which is not registered",
        )


class CyclicParentError(PanelError):
    def __init__(self, panel_id: str, chain: list[str]):
        self.chain = tuple(chain)
        super().__init__(
            panel_id,
            f"panel '{panel_id}' has a cyclic parent chain: {' -> '.join(chain)}",
        )


class InvalidParentError(PanelError):
    """A parent slug was requested for an entry that cannot have a parent."""

    def __init__(self, panel_id: str, panel_type: str):
        self.panel_type = panel_type
        super().__init__(panel_id, f"panel '{panel_id}' of type '{panel_type}' has no parent")


class HostRegistrationError(PanelError):
    """The host menu API rejected a registration call."""

    def __init__(self, panel_id: str, reason: str):
        self.reason = reason
        super().__init__(panel_id, f"host rejected panel '{panel_id}': {reason}")


class HookAlreadyAssignedError(PanelError):
    def __init__(self, panel_id: str):
        super().__init__(panel_id, f"panel '{panel_id}' already has a host hook")


class UnknownPanelError(PanelError, KeyError):
    def __init__(self, panel_id: str):
        super().__init__(panel_id, f"no panel registered under '{panel_id}'")

    def __str__(self) -> str:
        return str(self.args[0])
