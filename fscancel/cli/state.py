"""Shared CLI state: console, app, settings."""

from __future__ import annotations

from dataclasses import dataclass

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..config import CancellationConfig

# Load .env before anything else so FSCANCEL_* vars are available for defaults
load_dotenv()

# Rich console for all output
console = Console()


@dataclass
class Settings:
    """Mutable CLI settings adjusted by the app callback."""

    # Loaded in the app callback so config errors get a themed message
    config: CancellationConfig | None = None


settings = Settings()

# Typer app
app = typer.Typer(
    name="fscancel",
    help="Create, signal and clean up file-based cancellation tokens.",
    epilog=(
        "Examples:\n"
        "  fscancel new build-42\n"
        "  fscancel cancel build-42\n"
        "  fscancel status '{\"filePath\": \"/tmp/tsc-build-42\", \"isCancelled\": false}'\n"
        "  fscancel cleanup build-42"
    ),
    add_completion=False,
)


def _markup(text: str, color: str) -> str:
    """Wrap text in Rich markup with the given color, escaping special chars."""
    return f"[{color}]{escape(text)}[/{color}]"
