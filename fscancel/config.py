"""Configuration for cancellation tokens."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Minimum time between two real filesystem checks on one token. Lower values
# notice cancellation sooner at the cost of more stat() calls in hot loops.
DEFAULT_THROTTLE_INTERVAL_MS = 10.0

# Signal files are named <prefix><identity> inside the temp directory
DEFAULT_FILE_PREFIX = "tsc-"

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "fscancel"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"


def _env_throttle_ms() -> float:
    value = os.getenv("FSCANCEL_THROTTLE_MS")
    if value is None:
        return DEFAULT_THROTTLE_INTERVAL_MS
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"FSCANCEL_THROTTLE_MS must be a number, got {value!r}") from None


@dataclass
class CancellationConfig:
    """Policy shared by the tokens created with it.

    Usage::

        config = load_config()                      # YAML + env + defaults
        config = CancellationConfig(throttle_interval_ms=50)
        token = CancellationToken(config=config)
    """

    throttle_interval_ms: float = field(default_factory=_env_throttle_ms)
    file_prefix: str = field(
        default_factory=lambda: os.getenv("FSCANCEL_FILE_PREFIX", DEFAULT_FILE_PREFIX)
    )

    def __post_init__(self) -> None:
        if self.throttle_interval_ms < 0:
            raise ValueError(
                f"throttle_interval_ms must be >= 0, got {self.throttle_interval_ms}"
            )
        if not self.file_prefix or _has_separator(self.file_prefix):
            raise ValueError(f"Invalid file_prefix {self.file_prefix!r}")

    @property
    def temp_dir(self) -> str:
        """Root directory for every generated signal file."""
        return tempfile.gettempdir()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CancellationConfig:
        """Create config from a dictionary (e.g., parsed YAML)."""
        section = data.get("cancellation", data)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ValueError(
                f"'cancellation' section must be a mapping, got {type(section).__name__}"
            )
        kwargs: dict[str, Any] = {}
        if "throttle_interval_ms" in section:
            try:
                kwargs["throttle_interval_ms"] = float(section["throttle_interval_ms"])
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"throttle_interval_ms must be a number, got {section['throttle_interval_ms']!r}"
                ) from e
        if "file_prefix" in section:
            kwargs["file_prefix"] = str(section["file_prefix"])
        return cls(**kwargs)


def _has_separator(value: str) -> bool:
    return os.sep in value or bool(os.altsep and os.altsep in value)


def load_config(path: str | Path | None = None) -> CancellationConfig:
    """Load configuration from YAML, falling back to env vars and defaults.

    Resolution order for the file: explicit ``path``, ``FSCANCEL_CONFIG``,
    then ``~/.config/fscancel/config.yaml``. Only an explicitly named file has
    to exist. Values in the file take precedence over environment variables.
    """
    explicit = path or os.getenv("FSCANCEL_CONFIG")
    config_path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_FILE

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return CancellationConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return CancellationConfig.from_dict(data)
