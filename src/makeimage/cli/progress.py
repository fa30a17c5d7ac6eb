"""
Rich output for the CLI.

Everything here writes to stderr; stdout carries only the saved file paths.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console(stderr=True)


@contextmanager
def round_spinner(prompt_left: str, prompt_right: str) -> Iterator[None]:
    """Spinner with elapsed time while both requests of a round are in flight."""
    columns = (SpinnerColumn(), TextColumn("{task.description}"), TimeElapsedColumn())
    with Progress(*columns, console=console, transient=True) as progress:
        progress.add_task(
            f"[green]Generating[/green] {prompt_left} [dim]+[/dim] {prompt_right}", total=None
        )
        yield


def print_round_summary(
    saved: list[tuple[str, str, Path | None]],
    elapsed: float,
    error_message: str = "",
) -> None:
    """
    Print one row per side (prompt and file written) inside a panel.

    Args:
        saved: (side, prompt, written path or None) for left and right
        elapsed: Wall time of the round in seconds
        error_message: Last error the round reported, if any
    """
    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("Side", style="cyan")
    table.add_column("Prompt")
    table.add_column("File")
    for side, prompt, path in saved:
        table.add_row(side, prompt, f"[green]{path}[/green]" if path else "[red]none[/red]")

    complete = all(path is not None for _, _, path in saved)
    subtitle = f"{elapsed:.1f}s"
    if error_message:
        subtitle += f" [red]{error_message}[/red]"
    console.print(
        Panel(
            table,
            title="[bold green]Both images saved[/bold green]"
            if complete
            else "[bold yellow]Incomplete pair[/bold yellow]",
            subtitle=subtitle,
            border_style="green" if complete else "yellow",
        )
    )


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")
