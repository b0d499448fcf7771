"""File-based cancellation token shared between a controller and a worker.

Protocol:
- Controller creates a token -> path ``<tmpdir>/<prefix><identity>``, nothing on disk yet
- Controller hands ``token.to_json()`` to the worker process
- Worker rebuilds it with ``CancellationToken.from_json(...)``
- Controller calls ``request_cancellation()`` -> writes the empty signal file
- Worker calls ``is_cancellation_requested()`` -> stat() at most once per throttle interval
- Either side calls ``cleanup_cancellation()`` -> deletes the signal file
"""

from __future__ import annotations

import json
import logging
import os
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .config import CancellationConfig
from .errors import InvalidDescriptorError, InvalidIdentityError, OperationCancelledError
from .fs import LocalFileSystem, SignalFileSystem

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class CancellationState(StrEnum):
    """Last known state of a token."""

    NOT_CANCELLED = "not cancelled"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class TokenDescriptor:
    """Serializable form of a token, passed to the worker process."""

    file_path: str
    is_cancelled: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.file_path, str) or not self.file_path:
            raise InvalidDescriptorError("filePath must be a non-empty string")
        if not os.path.isabs(self.file_path):
            raise InvalidDescriptorError(f"filePath must be absolute, got {self.file_path!r}")
        if not isinstance(self.is_cancelled, bool):
            raise InvalidDescriptorError("isCancelled must be a boolean")

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "isCancelled": self.is_cancelled}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenDescriptor:
        if not isinstance(data, Mapping):
            raise InvalidDescriptorError(f"expected an object, got {type(data).__name__}")
        try:
            file_path = data["filePath"]
            is_cancelled = data["isCancelled"]
        except KeyError as e:
            raise InvalidDescriptorError(f"missing field {e.args[0]!r}") from None
        return cls(file_path=file_path, is_cancelled=is_cancelled)

    @classmethod
    def from_json(cls, data: str) -> TokenDescriptor:
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidDescriptorError(f"not valid JSON ({e.msg})") from e
        return cls.from_dict(parsed)


class CancellationToken:
    """Cancellation signal backed by the existence of one file.

    Cancellation is sticky: once observed (or requested locally) the token
    reports cancelled without touching the filesystem until
    ``cleanup_cancellation()`` is called. While not cancelled, real checks are
    spaced at least ``config.throttle_interval_ms`` apart so the check can sit
    in a tight loop.

    Usage::

        # controller
        token = CancellationToken()
        spawn_worker(payload=token.to_json())
        ...
        token.request_cancellation()

        # worker
        token = CancellationToken.from_json(payload)
        for item in items:
            token.raise_if_cancellation_requested()
            process(item)
    """

    def __init__(
        self,
        identity: str | None = None,
        cancelled: bool = False,
        *,
        fs: SignalFileSystem | None = None,
        config: CancellationConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._setup(cancelled, fs, config, clock)
        self._file_path = self._derive_path(uuid.uuid4().hex if identity is None else identity)

    def _setup(
        self,
        cancelled: bool,
        fs: SignalFileSystem | None,
        config: CancellationConfig | None,
        clock: Callable[[], float] | None,
    ) -> None:
        self._config = config or CancellationConfig()
        self._fs: SignalFileSystem = fs or LocalFileSystem()
        self._clock = clock or _monotonic_ms
        self._cancelled = cancelled
        self._last_check_ms: float | None = None

    def _derive_path(self, identity: str) -> str:
        seps = {os.sep, os.altsep} - {None}
        if identity in ("", ".", "..") or any(sep in identity for sep in seps):
            raise InvalidIdentityError(identity)
        return os.path.join(self._config.temp_dir, self._config.file_prefix + identity)

    @classmethod
    def from_descriptor(
        cls,
        descriptor: TokenDescriptor | Mapping[str, Any],
        *,
        fs: SignalFileSystem | None = None,
        config: CancellationConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> CancellationToken:
        """Rebuild a token bound to the same file as the one that was serialized."""
        if not isinstance(descriptor, TokenDescriptor):
            descriptor = TokenDescriptor.from_dict(descriptor)
        token = cls.__new__(cls)
        token._setup(descriptor.is_cancelled, fs, config, clock)
        token._file_path = descriptor.file_path
        return token

    @classmethod
    def from_json(
        cls,
        data: str,
        *,
        fs: SignalFileSystem | None = None,
        config: CancellationConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> CancellationToken:
        return cls.from_descriptor(
            TokenDescriptor.from_json(data), fs=fs, config=config, clock=clock
        )

    @property
    def file_path(self) -> str:
        """Absolute path of the signal file."""
        return self._file_path

    @property
    def state(self) -> CancellationState:
        """Last known state; never touches the filesystem."""
        return CancellationState.CANCELLED if self._cancelled else CancellationState.NOT_CANCELLED

    @property
    def last_checked_at(self) -> float | None:
        """Clock reading (ms) of the last real filesystem check, if any."""
        return self._last_check_ms

    def to_descriptor(self) -> TokenDescriptor:
        return TokenDescriptor(file_path=self._file_path, is_cancelled=self._cancelled)

    def to_json(self) -> str:
        return self.to_descriptor().to_json()

    def is_cancellation_requested(self) -> bool:
        """Return True if cancellation was requested here or by another process."""
        if self._cancelled:
            return True

        now = self._clock()
        if (
            self._last_check_ms is not None
            and now - self._last_check_ms < self._config.throttle_interval_ms
        ):
            return False

        self._last_check_ms = now
        self._cancelled = self._fs.exists(self._file_path)
        if self._cancelled:
            logger.debug("Cancellation observed via %s", self._file_path)
        return self._cancelled

    def raise_if_cancellation_requested(self) -> None:
        """Raise ``OperationCancelledError`` if cancellation was requested."""
        if self.is_cancellation_requested():
            raise OperationCancelledError(self._file_path)

    def request_cancellation(self) -> None:
        """Write the signal file and mark this token cancelled (idempotent)."""
        self._fs.create(self._file_path)
        self._cancelled = True
        logger.info("Cancellation requested: %s", self._file_path)

    def cleanup_cancellation(self) -> None:
        """Remove the signal file and reset to not cancelled (idempotent)."""
        try:
            self._fs.delete(self._file_path)
        except FileNotFoundError:
            pass
        else:
            logger.debug("Removed cancellation file %s", self._file_path)
        self._cancelled = False

    def __repr__(self) -> str:
        return f"CancellationToken(file_path={self._file_path!r}, state={self.state.value!r})"
