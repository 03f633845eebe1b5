"""Tests for icon resolution."""

import pytest

from admin_panels.icons import resolve_icon


def test_filename_joined_to_base_url():
    assert resolve_icon("smiley.png", "http://x/assets") == "http://x/assets/smiley.png"


def test_trailing_slash_on_base_url():
    assert resolve_icon("smiley.png", "http://x/assets/") == "http://x/assets/smiley.png"


def test_dashicon_passes_through():
    assert resolve_icon("dashicons-admin-generic", "http://x/assets") == "dashicons-admin-generic"


@pytest.mark.parametrize("icon", [None, ""])
def test_no_icon(icon):
    assert resolve_icon(icon, "http://x/assets") is None


@pytest.mark.parametrize(
    "icon",
    [
        "none",
        "data:image/svg+xml;base64,PHN2Zz48L3N2Zz4=",
        "https://cdn.example.com/icon.svg",
    ],
)
def test_host_native_values_pass_through(icon):
    assert resolve_icon(icon, "http://x/assets") == icon


def test_none_is_matched_exactly():
    assert resolve_icon("nonexistent.png", "http://x/assets") == "http://x/assets/nonexistent.png"


def test_custom_prefixes():
    assert resolve_icon("fa-cog", "http://x/assets", native_prefixes=("fa-",)) == "fa-cog"
    assert resolve_icon("dashicons-admin-generic", "http://x", native_prefixes=("fa-",)) == (
        "http://x/dashicons-admin-generic"
    )
