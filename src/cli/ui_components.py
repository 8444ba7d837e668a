"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.components import URLComponents
from core.domain.models import TourStep, URLSnapshot
from core.domain.session import SessionConfiguration


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se puede desactivar en modos no interactivos (`--no-banner`).
    """

    title = Text("urlsession-lab", style="bold cyan")
    subtitle = Text("URL • URLComponents • Session configuration", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_value(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, (str, list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def build_url_table(snapshot: URLSnapshot) -> Table:
    table = Table(title=snapshot.relative_string)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in snapshot.model_dump().items():
        table.add_row(name, format_value(value))
    return table


def build_components_table(components: URLComponents) -> Table:
    table = Table(title="URLComponents")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("string", format_value(components.string))
    table.add_row("percent_encoded_query", format_value(components.percent_encoded_query))
    for item in components.query_items or []:
        table.add_row("query_item", format_value(item.model_dump()))
    return table


def build_configuration_table(configuration: SessionConfiguration, *, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in configuration.model_dump(mode="json", exclude={"url_cache"}).items():
        table.add_row(name, format_value(value))

    cache = configuration.url_cache
    if cache is None:
        table.add_row("url_cache", "nil")
    else:
        table.add_row("url_cache.memory_capacity", str(cache.memory_capacity))
        table.add_row("url_cache.disk_capacity", str(cache.disk_capacity))
        table.add_row("url_cache.disk_path", format_value(str(cache.disk_path) if cache.disk_path else None))
    return table


def build_tour_table(section: str, steps: Iterable[TourStep]) -> Table:
    table = Table(title=section)
    table.add_column("Expression", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_column("Note", style="dim")
    for step in steps:
        table.add_row(step.expression, format_value(step.value), step.note or "")
    return table
