"""Token commands: new, cancel, status, cleanup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from ..config import load_config
from ..errors import InvalidDescriptorError, InvalidIdentityError
from ..token import CancellationToken
from .state import _markup, app, console, settings
from .theme import THEME

TokenArg = Annotated[
    str,
    typer.Argument(help="Token identity, or a JSON descriptor as printed by 'fscancel new'"),
]


@app.callback()
def main(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a YAML config file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Create, signal and clean up file-based cancellation tokens."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    try:
        settings.config = load_config(config_path)
    except (OSError, ValueError) as e:
        console.print(_markup(f"Failed to load config: {e}", THEME.error))
        raise typer.Exit(1) from e


def _resolve_token(ref: str) -> CancellationToken:
    """Build a token from an identity or a JSON descriptor."""
    try:
        if ref.lstrip().startswith("{"):
            return CancellationToken.from_json(ref, config=settings.config)
        return CancellationToken(ref, config=settings.config)
    except (InvalidDescriptorError, InvalidIdentityError) as e:
        console.print(_markup(str(e), THEME.error))
        raise typer.Exit(1) from e


@app.command()
def new(
    identity: Annotated[
        str | None,
        typer.Argument(help="Identity for the token (random when omitted)"),
    ] = None,
) -> None:
    """Print the descriptor of a fresh token. Nothing is written to disk."""
    try:
        token = CancellationToken(identity, config=settings.config)
    except InvalidIdentityError as e:
        console.print(_markup(str(e), THEME.error))
        raise typer.Exit(1) from e
    typer.echo(token.to_json())


@app.command()
def cancel(token_ref: TokenArg) -> None:
    """Request cancellation by writing the token's signal file."""
    token = _resolve_token(token_ref)
    try:
        token.request_cancellation()
    except OSError as e:
        console.print(_markup(f"Failed to request cancellation: {e}", THEME.error))
        raise typer.Exit(1) from e
    console.print(_markup(f"Cancelled: {token.file_path}", THEME.warning), soft_wrap=True)


@app.command()
def status(
    token_ref: TokenArg,
    exit_code: Annotated[
        bool,
        typer.Option("--exit-code", help="Exit with status 1 when not cancelled"),
    ] = False,
) -> None:
    """Show whether cancellation has been requested for a token."""
    token = _resolve_token(token_ref)
    cancelled = token.is_cancellation_requested()
    color = THEME.warning if cancelled else THEME.success
    console.print(
        f"{_markup(token.state.value, color)}  {_markup(token.file_path, THEME.muted)}",
        soft_wrap=True,
    )
    if exit_code and not cancelled:
        raise typer.Exit(1)


@app.command()
def cleanup(token_ref: TokenArg) -> None:
    """Remove a token's signal file (safe to repeat)."""
    token = _resolve_token(token_ref)
    try:
        token.cleanup_cancellation()
    except OSError as e:
        console.print(_markup(f"Failed to clean up: {e}", THEME.error))
        raise typer.Exit(1) from e
    console.print(_markup(f"Cleaned: {token.file_path}", THEME.success), soft_wrap=True)
