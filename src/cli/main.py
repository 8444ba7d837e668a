"""CLI principal (Typer).

Por qué Typer + Rich:
- Typer da subcomandos/flags tipados sin boilerplate de argparse.
- Rich presenta las propiedades inspeccionadas en tablas legibles.

La CLI solo orquesta: parsea input, llama al Core y renderiza.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_json
from cli import config_commands
from cli.ui_components import (
    build_components_table,
    build_configuration_table,
    build_tour_table,
    build_url_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.components import URLComponents
from core.domain.session import SessionConfiguration, URLCache
from core.domain.url import WebURL
from core.logging_config import setup_logging
from core.services.playground import SECTIONS, run_tour

app = typer.Typer(no_args_is_help=True, help="Explore URLs, URL components and HTTP session configuration.")
url_app = typer.Typer(no_args_is_help=True, help="Parse and build URLs.")
session_app = typer.Typer(no_args_is_help=True, help="Inspect session configurations.")

app.add_typer(url_app, name="url")
app.add_typer(session_app, name="session")
app.add_typer(config_commands.app, name="config")

_console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    setup_logging(logging.DEBUG if verbose else settings.log_level)


def _parse_query_option(raw: str) -> tuple[str, Optional[str]]:
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as exc:
        # Bytes de argv que no son UTF-8 llegan como surrogates.
        raise typer.BadParameter("query item is not valid UTF-8", param_hint="--query") from exc

    name, sep, value = raw.partition("=")
    if not name:
        raise typer.BadParameter(f"expected name=value, got {raw!r}", param_hint="--query")
    return name, value if sep else None


@url_app.command("inspect")
def inspect_url(
    value: str = typer.Argument(..., help="URL string (absolute, or relative to --base)."),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base URL to resolve against."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Also write the snapshot as JSON."),
) -> None:
    """Parse a URL and show its properties."""

    base_url: Optional[WebURL] = None
    if base is not None:
        base_url = WebURL.parse(base)
        if base_url is None:
            raise typer.BadParameter(f"not a valid URL: {base!r}", param_hint="--base")

    url = WebURL.parse(value, relative_to=base_url)
    if url is None:
        raise typer.BadParameter(f"not a valid URL: {value!r}", param_hint="VALUE")

    snapshot = url.snapshot()
    _console.print(build_url_table(snapshot))
    if json_out is not None:
        path = export_json(payload=snapshot, output_path=json_out)
        _console.print(f"[green]JSON:[/green] {path}")


@url_app.command("build")
def build_url(
    value: str = typer.Argument(..., help="Starting URL."),
    query: Optional[List[str]] = typer.Option(None, "--query", "-q", help="Query item to append (name=value)."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Also write the resulting URL snapshot as JSON."),
) -> None:
    """Append query items to a URL and show the percent-encoded result."""

    components = URLComponents.from_string(value)
    if components is None:
        raise typer.BadParameter(f"not a valid URL: {value!r}", param_hint="VALUE")

    for raw in query or []:
        name, item_value = _parse_query_option(raw)
        components.append_query_item(name, item_value)

    _console.print(build_components_table(components))

    url = components.url
    if url is None:
        raise typer.BadParameter("components do not form a valid URL", param_hint="VALUE")
    if json_out is not None:
        path = export_json(payload=url.snapshot(), output_path=json_out)
        _console.print(f"[green]JSON:[/green] {path}")


@session_app.command("show")
def show_session(
    ephemeral: bool = typer.Option(False, "--ephemeral", help="Start from the ephemeral configuration."),
    no_cellular: bool = typer.Option(False, "--no-cellular", help="Disallow cellular access."),
    memory_capacity: Optional[int] = typer.Option(None, "--memory-capacity", help="Custom cache memory capacity (bytes)."),
    disk_capacity: Optional[int] = typer.Option(None, "--disk-capacity", help="Custom cache disk capacity (bytes)."),
) -> None:
    """Show a session configuration, optionally customised."""

    settings = AppSettings()
    configuration = SessionConfiguration.ephemeral(settings) if ephemeral else SessionConfiguration.default(settings)
    if no_cellular:
        configuration.allows_cellular_access = False

    if memory_capacity is not None or disk_capacity is not None:
        current = configuration.url_cache
        memory = memory_capacity if memory_capacity is not None else (current.memory_capacity if current else 0)
        disk = disk_capacity if disk_capacity is not None else (current.disk_capacity if current else 0)
        if memory < 0 or disk < 0:
            raise typer.BadParameter("capacities must be >= 0")
        if current is not None:
            configuration.url_cache = current.model_copy(update={"memory_capacity": memory, "disk_capacity": disk})
        else:
            configuration.url_cache = URLCache(memory_capacity=memory, disk_capacity=disk)

    title = "ephemeral configuration" if ephemeral else "default configuration"
    _console.print(build_configuration_table(configuration, title=title))


@app.command()
def tour(
    section: Optional[List[str]] = typer.Option(
        None,
        "--section",
        "-s",
        help=f"Section(s) to run: {', '.join(SECTIONS)}. Defaults to all.",
    ),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Also write the steps as JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Walk through the URL / URLComponents / session exercise."""

    try:
        result = run_tour(section or None)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--section") from exc

    if not no_banner:
        print_banner(_console)
    for name in SECTIONS:
        steps = result.by_section(name)
        if steps:
            _console.print(build_tour_table(name, steps))

    if json_out is not None:
        path = export_json(payload=result.steps, output_path=json_out)
        _console.print(f"[green]JSON:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
