"""
pasty CLI - create, read, update and delete pastes on a pasty instance.

Usage:
    pasty create notes.txt            # Create a paste, remember its token
    echo hi | pasty create            # Content from stdin
    pasty get <id>                    # Print a paste
    pasty update <id> notes.txt       # Replace content (stored token)
    pasty delete <id> --token <tok>   # Delete with an explicit token
    pasty config --url https://...    # Point at another instance
"""
from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, Dict, Optional, Tuple, TypeVar

import click

from pasty_client import __version__
from pasty_client.client import UnauthenticatedClient
from pasty_client.core import tokens
from pasty_client.core.config import get_base_url, get_config_path, load_config, save_config
from pasty_client.errors import ConfigError, PastyError
from pasty_client.ui import PastyConsole

T = TypeVar("T")


def build_client(base_url: str) -> UnauthenticatedClient:
    """Create the client used by every command."""
    return UnauthenticatedClient(base_url)


def _run(ui: PastyConsole, action: str, coro: Awaitable[T]) -> T:
    """Run a client coroutine, turning library errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except PastyError as e:
        ui.print_error(f"{action} failed: {e}", recoverable=False)
        sys.exit(1)


def _client(ctx: click.Context) -> Tuple[PastyConsole, str, UnauthenticatedClient]:
    ui: PastyConsole = ctx.obj["ui"]
    base_url = get_base_url(ctx.obj.get("url"))
    try:
        return ui, base_url, build_client(base_url)
    except ConfigError as e:
        ui.print_error(str(e), recoverable=False)
        sys.exit(1)


def _read_content(ui: PastyConsole, file) -> str:
    """Read paste content, exiting with an error on undecodable or empty input."""
    try:
        content = file.read()
    except UnicodeDecodeError as e:
        ui.print_error(f"Not valid UTF-8 text: {file.name} ({e.reason})", recoverable=False)
        sys.exit(1)
    if not content:
        ui.print_error("Refusing to send an empty paste.", recoverable=False)
        sys.exit(1)
    return content


def _parse_meta(pairs: Tuple[str, ...]) -> Optional[Dict[str, Any]]:
    if not pairs:
        return None
    metadata: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--meta")
        metadata[key] = value
    return metadata


def _resolve_token(
    ui: PastyConsole,
    base_url: str,
    paste_id: str,
    token: Optional[str],
) -> str:
    token = token or tokens.get_token(base_url, paste_id)
    if not token:
        ui.print_error(
            f"No modification token stored for paste {paste_id}. Pass --token.",
            recoverable=False,
        )
        sys.exit(1)
    return token


meta_option = click.option(
    "--meta", "-m", multiple=True, metavar="KEY=VALUE", help="Metadata entry (repeatable)"
)
token_option = click.option(
    "--token", "-t", help="Modification token (defaults to the stored one)"
)


@click.group()
@click.version_option(version=__version__, prog_name="pasty")
@click.option("--url", "-u", help="pasty instance URL (overrides config and PASTY_URL)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, url: Optional[str], verbose: bool):
    """
    pasty - command line client for the pasty paste server.

    Quick start:
        pasty create notes.txt
        pasty get <id>
    """
    ctx.ensure_object(dict)
    ctx.obj["url"] = url
    ctx.obj["ui"] = PastyConsole(verbose=verbose)


@cli.command()
@click.pass_context
def info(ctx):
    """Show information about the pasty instance."""
    ui, base_url, client = _client(ctx)
    information = _run(ui, "Info", client.application_information())
    ui.print_application_information(information, base_url)


@cli.command()
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@meta_option
@click.option("--no-save", is_flag=True, help="Do not store the modification token locally")
@click.pass_context
def create(ctx, file, meta: Tuple[str, ...], no_save: bool):
    """
    Create a paste from FILE (or stdin).

    The modification token is printed once and, unless --no-save is given,
    stored in ~/.pasty/tokens.json for later update/delete.
    """
    metadata = _parse_meta(meta)
    ui, base_url, client = _client(ctx)
    content = _read_content(ui, file)
    result = _run(ui, "Create", client.create_paste(content, metadata))
    if not no_save:
        tokens.save_token(base_url, result.id, result.modification_token)
    ui.print_created(result, base_url, stored=not no_save)
    click.echo(result.id)


@cli.command()
@click.argument("paste_id")
@click.option("--json", "as_json", is_flag=True, help="Print the full paste as JSON")
@click.pass_context
def get(ctx, paste_id: str, as_json: bool):
    """Print the content of paste PASTE_ID."""
    ui, _, client = _client(ctx)
    paste = _run(ui, "Get", client.paste(paste_id))
    ui.print_paste(paste, as_json=as_json)


@cli.command()
@click.argument("paste_id")
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@meta_option
@token_option
@click.pass_context
def update(ctx, paste_id: str, file, meta: Tuple[str, ...], token: Optional[str]):
    """Replace the content of paste PASTE_ID with FILE (or stdin)."""
    metadata = _parse_meta(meta)
    ui, base_url, client = _client(ctx)
    content = _read_content(ui, file)
    owner = client.authenticate(_resolve_token(ui, base_url, paste_id, token))
    _run(ui, "Update", owner.update_paste(paste_id, content, metadata))
    ui.print_success(f"Updated paste {paste_id}")


@cli.command()
@click.argument("paste_id")
@token_option
@click.pass_context
def delete(ctx, paste_id: str, token: Optional[str]):
    """Delete paste PASTE_ID."""
    ui, base_url, client = _client(ctx)
    owner = client.authenticate(_resolve_token(ui, base_url, paste_id, token))
    _run(ui, "Delete", owner.delete_paste(paste_id))
    tokens.forget_token(base_url, paste_id)
    ui.print_success(f"Deleted paste {paste_id}")


@cli.command()
@click.option("--url", "new_url", help="Set the default pasty instance URL")
@click.option("--show", is_flag=True, help="Show current configuration")
@click.pass_context
def config(ctx, new_url: Optional[str], show: bool):
    """
    Configure the pasty CLI.

    Set the instance:
        pasty config --url https://pasty.example.com
    """
    ui: PastyConsole = ctx.obj["ui"]

    if new_url:
        try:
            UnauthenticatedClient(new_url)
        except ConfigError as e:
            ui.print_error(str(e), recoverable=False)
            sys.exit(1)
        current = load_config()
        current["url"] = new_url
        save_config(current)
        ui.print_success(f"Instance URL set to: {new_url}")

    if show:
        ui.console.print(f"\n[bold]pasty configuration[/] ({get_config_path()})")
        ui.console.print("─" * 50)
        ui.console.print(f"Instance URL:  {get_base_url(ctx.obj.get('url'))}")
        ui.console.print(f"Stored tokens: {len(tokens.load_tokens())}")
        ui.console.print()
        return

    if not new_url:
        ui.print_info("No configuration changes made. Use --help to see options.")


def main():
    """Entry point for the ``pasty`` console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
