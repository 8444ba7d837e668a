"""Config commands: inspect settings and persist cache defaults."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Inspect and update user configuration.")

_console = Console()


@app.command()
def show() -> None:
    """Show the effective settings and where they are loaded from."""

    settings = AppSettings()

    table = Table(title="urlsession-lab settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in settings.model_dump(mode="json").items():
        table.add_row(name, "nil" if value is None else str(value))
    table.add_row("cache_dir (resolved)", str(settings.resolved_cache_dir()))
    table.add_row("user env file", str(get_user_env_file()))

    _console.print(table)


@app.command(name="set-cache")
def set_cache(
    memory: int = typer.Option(..., "--memory", help="Memory capacity in bytes."),
    disk: int = typer.Option(..., "--disk", help="Disk capacity in bytes."),
) -> None:
    """Store default cache capacities in the user config .env."""

    if memory < 0 or disk < 0:
        raise typer.BadParameter("capacities must be >= 0")

    env_path = write_user_env_vars(
        {
            "URLLAB_CACHE_MEMORY_CAPACITY": str(memory),
            "URLLAB_CACHE_DISK_CAPACITY": str(disk),
        }
    )
    _console.print(f"[green]Saved cache config to:[/green] {env_path}")
