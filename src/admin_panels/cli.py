"""CLI entry point for admin-panels: preview the menu a panel config produces."""

import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

import admin_panels.io.logging_setup
from admin_panels.errors import ConfigError, HostRegistrationError
from admin_panels.host import RecordingController, RecordingMenuHost
from admin_panels.lifecycle import PhaseDispatcher
from admin_panels.panel_types import PanelEntry, PanelType
from admin_panels.registry import MenuNode, PanelRegistry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SKIPPED = 1
EXIT_ERROR = 2


def _preview_executable(*_args, **_kwargs):
    """Stand-in page renderer; the preview host never calls it."""
    return None


def _label(entry: PanelEntry) -> str:
    kind = entry.type.value if isinstance(entry.type, PanelType) else str(entry.type)
    hook = entry.hook if entry.hook is not None else "[red]not registered[/red]"
    label = f"[bold]{entry.menu or entry.id}[/bold] [dim]({kind})[/dim] slug={entry.slug} hook={hook}"
    if entry.type == PanelType.WP_SUB_PANEL:
        label += f" under={entry.parent}"
    return label


def _add_nodes(tree: Tree, nodes: list[MenuNode]) -> None:
    for entry, children in nodes:
        branch = tree.add(_label(entry))
        _add_nodes(branch, children)


def render_plan(registry: PanelRegistry, host: RecordingMenuHost, console: Console) -> None:
    tree = Tree("[bold]admin menu[/bold]")
    _add_nodes(tree, registry.menu_tree())
    console.print(tree)

    icons = {call.slug: call.icon_url for call in host.calls if call.kind == "menu"}
    if any(icons.values()):
        icon_table = Table(title="icons")
        icon_table.add_column("slug")
        icon_table.add_column("icon")
        for slug, icon in icons.items():
            icon_table.add_row(slug, icon or "-")
        console.print(icon_table)

    if registry.failures:
        table = Table(title="skipped panels")
        table.add_column("panel")
        table.add_column("error")
        table.add_column("reason")
        for panel_id, error in registry.failures.items():
            table.add_row(panel_id, type(error).__name__, str(error))
        console.print(table)


def main(argv=None, console: Console | None = None) -> int:
    parser = argparse.ArgumentParser(prog="admin-panels", description="Admin panel registry tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Resolve a panel config and print the resulting menu")
    plan.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Path to panels JSON (default: $ADMIN_PANELS_CONFIG or XDG config dir)",
    )
    plan.add_argument("--icon-url", default=None, help="Base URL for panel icon files")
    plan.add_argument("--log-level", default=None, help="Log level (default: $ADMIN_PANELS_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)
    console = console or Console()

    runtime = admin_panels.io.logging_setup.configure("plan", level=args.log_level)
    logger.debug("logging to %s", runtime.file_path or "stderr")

    dispatcher = PhaseDispatcher()
    host = RecordingMenuHost(dispatcher)
    controller = RecordingController()
    try:
        registry = PanelRegistry.from_config_file(
            controller,
            args.config,
            _preview_executable,
            host,
            icon_url=args.icon_url,
        )
        dispatcher.run()
    except ConfigError as e:
        console.print(f"[red]config error:[/red] {e}")
        return EXIT_ERROR
    except HostRegistrationError as e:
        console.print(f"[red]host rejected registration:[/red] {e}")
        return EXIT_ERROR

    render_plan(registry, host, console)
    return EXIT_SKIPPED if registry.failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
