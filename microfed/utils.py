"""Shared utility functions for microfed.

Provides the Rich console used for all user-facing output, message helpers,
summary tables, the "next steps" panel printed after generation and a
dev-server port check.
"""

from __future__ import annotations

import asyncio
import socket
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def is_directory_empty(path: str | Path) -> bool:
    """Return ``True`` if *path* does not exist or is an empty directory."""
    dir_path = Path(path)
    if not dir_path.exists():
        return True
    if not dir_path.is_dir():
        return False
    return next(dir_path.iterdir(), None) is None


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str, color: str = "bright_cyan") -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_next_steps(steps: list[str]) -> None:
    body = "\n".join(f"  {step}" for step in steps)
    console.print(Panel(body, title="Next steps", style="cyan", expand=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich spinner for the write step.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


# ---------------------------------------------------------------------------
# Port helpers
# ---------------------------------------------------------------------------


async def check_port_available(port: int) -> bool:
    """Check whether something already listens on localhost:*port*.

    The generated dev server binds this port; a busy port is only reported,
    never rejected.

    Returns:
        ``True`` if no service is listening on the port.
    """

    def _is_free() -> bool:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        try:
            # connect_ex returns 0 when something accepted the connection
            return sock.connect_ex(("127.0.0.1", port)) != 0
        finally:
            sock.close()

    return await asyncio.to_thread(_is_free)
