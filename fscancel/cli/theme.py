"""Centralized CLI theme tokens."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CliTheme:
    """Semantic Rich color tokens for CLI output."""

    muted: str = "#7F848E"
    success: str = "#98C379"
    warning: str = "#E5C07B"
    error: str = "#E06C75"


THEME = CliTheme()
