"""Resolve declarative admin panel configuration into host menu registrations."""

from admin_panels.errors import (
    ConfigError,
    CyclicParentError,
    DanglingParentError,
    HookAlreadyAssignedError,
    HostRegistrationError,
    InvalidParentError,
    MissingFieldError,
    PanelError,
    UnknownPanelError,
)
from admin_panels.lifecycle import Phase
from admin_panels.panel_types import PanelEntry, PanelType
from admin_panels.registry import PanelRegistry

__all__ = [
    "ConfigError",
    "CyclicParentError",
    "DanglingParentError",
    "HookAlreadyAssignedError",
    "HostRegistrationError",
    "InvalidParentError",
    "MissingFieldError",
    "PanelEntry",
    "PanelError",
    "PanelRegistry",
    "PanelType",
    "Phase",
    "UnknownPanelError",
]
