"""pasty CLI UI - Rich terminal output."""

from pasty_client.ui.console import PastyConsole

__all__ = ["PastyConsole"]
