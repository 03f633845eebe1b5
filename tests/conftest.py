"""Pytest configuration and shared fixtures for admin-panels tests."""

import pytest

import admin_panels.io.logging_setup
from admin_panels.host import RecordingController, RecordingMenuHost
from admin_panels.lifecycle import PhaseDispatcher

from tests.builders import panel, sub_panel, wp_sub_panel


# ---------------------------------------------------------------------------
# Host fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def dispatcher():
    return PhaseDispatcher()


@pytest.fixture
def host(dispatcher):
    return RecordingMenuHost(dispatcher)


@pytest.fixture
def controller():
    return RecordingController()


@pytest.fixture
def sample_config():
    """Two panels with nested sub-panels and one host-native sub-page."""
    return {
        "main": panel("main-slug", icon="dashicons-admin-generic", position=3),
        "main-settings": sub_panel("main-settings-slug", "main"),
        "reports": panel("reports-slug", icon="chart.png"),
        "main-about": sub_panel("main-about-slug", "main"),
        "tools-export": wp_sub_panel("tools-export-slug", "tools.php"),
        "reports-daily": sub_panel("reports-daily-slug", "reports"),
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging_setup.configure() so caplog keeps working across tests."""
    yield
    admin_panels.io.logging_setup.reset()
