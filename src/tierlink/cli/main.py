"""Tierlink CLI — inspect and switch tiers outside the host agent."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from tierlink import __version__

app = typer.Typer(
    name="tierlink",
    help="Tiered model delegation — inspect the protocol, switch presets and modes.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _get_plugin():
    """Build the plugin from environment settings."""
    from tierlink.config.settings import get_settings
    from tierlink.plugin import ModelRouterPlugin

    return ModelRouterPlugin.from_settings(get_settings())


def _print_plain(text: str) -> None:
    # Reports contain [brackets] that are not rich markup
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _setup_logging(verbose: bool) -> None:
    from tierlink.config.settings import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
):
    if version:
        console.print(f"tierlink [dim]v{__version__}[/dim]")
        raise typer.Exit()
    _setup_logging(verbose)


@app.command()
def protocol():
    """Print the delegation protocol injected into every agent turn."""
    _print_plain(_get_plugin().compile_protocol())


@app.command()
def tiers():
    """Show the active preset's tiers and the delegation rules."""
    _print_plain(_get_plugin().handle_command("tiers", ""))


@app.command()
def preset(name: str = typer.Argument("", help="Preset to switch to")):
    """List presets, or switch the active preset."""
    _print_plain(_get_plugin().handle_command("preset", name))


@app.command()
def budget(mode: str = typer.Argument("", help="Routing mode to switch to")):
    """List routing modes, or switch the active mode."""
    _print_plain(_get_plugin().handle_command("budget", mode))


@app.command()
def agents():
    """Print the subagent definitions registered with the host, as JSON."""
    _print_plain(json.dumps(_get_plugin().register_agents(), indent=2))


@app.command()
def validate(
    path: Path = typer.Argument(None, help="Tier document (default: configured path)"),
):
    """Check a tier document's structure."""
    from tierlink.errors import ConfigError
    from tierlink.routing.cache import read_document
    from tierlink.routing.validator import validate_config

    if path is None:
        from tierlink.config.settings import get_settings

        path = get_settings().tiers_path

    try:
        cfg = validate_config(read_document(path))
    except ConfigError as exc:
        console.print(f"[red]Invalid:[/red] {exc.path}: {exc.message}", highlight=False)
        raise typer.Exit(1)

    tier_count = sum(len(t) for t in cfg.presets.values())
    console.print(
        f"[green]OK[/green] {path}: {len(cfg.presets)} presets, "
        f"{tier_count} tiers, {len(cfg.modes)} modes",
        highlight=False,
    )
