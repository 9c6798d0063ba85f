"""Rich console UI for the pasty CLI."""

from __future__ import annotations

import json
import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from pasty_client.models import ApplicationInformation, Paste, PasteCreationResult


class PastyConsole:
    """Rich console for the pasty CLI.

    Status messages go to stderr so paste content on stdout stays pipeable.
    """

    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self.verbose = verbose
        if verbose:
            self.enable_debug_logging()

    def enable_debug_logging(self):
        """Route library logging through rich at DEBUG level."""
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=self.console, show_path=False)],
            force=True,
        )
        # httpx/httpcore are chatty at DEBUG
        logging.getLogger("httpcore").setLevel(logging.INFO)

    def print_error(self, error: str, recoverable: bool = True):
        """Print an error message."""
        style = "yellow" if recoverable else "red"
        icon = "⚠" if recoverable else "✗"
        self.console.print(f"[{style}]{icon} {error}[/{style}]")

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✓ {message}[/green]")

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(f"[blue]ℹ {message}[/blue]")

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def print_created(self, result: PasteCreationResult, base_url: str, stored: bool):
        """Show a newly created paste and its modification token."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="dim")
        table.add_column("Value")
        table.add_row("ID", f"[bold]{result.id}[/bold]")
        table.add_row("URL", f"{base_url.rstrip('/')}/{result.id}")
        table.add_row("Token", f"[yellow]{result.modification_token}[/yellow]")
        if stored:
            table.add_row("", "[dim]token saved, update/delete will use it[/dim]")
        self.console.print(Panel(table, title="Paste created", border_style="green"))

    def print_application_information(self, info: ApplicationInformation, base_url: str):
        """Show instance information as a table."""
        self.console.print(f"\n[bold cyan]pasty[/bold cyan] [dim]{base_url}[/dim]\n")

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="dim")
        table.add_column("Value")

        lifetime = "unlimited" if info.paste_lifetime < 0 else f"{info.paste_lifetime}s"
        table.add_row("Version", info.version)
        table.add_row("Paste lifetime", lifetime)
        table.add_row("Modification tokens", _flag(info.modification_tokens))
        table.add_row("Reports", _flag(info.reports))

        self.console.print(table)
        self.console.print()

    def print_paste(self, paste: Paste, as_json: bool = False):
        """Write a paste to stdout, raw content or full JSON."""
        if as_json:
            click.echo(json.dumps(paste.model_dump(mode="json"), indent=2))
        else:
            click.echo(paste.content, nl=False)


def _flag(value: bool) -> str:
    return "[green]✓ enabled[/]" if value else "[dim]disabled[/]"
