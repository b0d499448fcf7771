"""CLI package for fscancel."""

from .state import app, console, settings

# Import command modules so their @app.command() decorators register
from . import commands as _commands  # noqa: F401


def cli() -> None:
    """CLI entrypoint."""
    app(prog_name="fscancel")


__all__ = ["app", "cli", "console", "settings"]


if __name__ == "__main__":
    cli()
