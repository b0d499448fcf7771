"""Checkpoint helpers for cancellation-aware units of work."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import OperationCancelledError
from .token import CancellationToken

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class WorkOutcome(Generic[T]):
    """Result of ``run_cancellable``: either a value or a cancellation."""

    result: T | None = None
    cancelled: bool = False


def checkpoints(items: Iterable[T], token: CancellationToken) -> Iterator[T]:
    """Yield ``items``, checking ``token`` before each one.

    Raises ``OperationCancelledError`` at the first item reached after
    cancellation is observed.
    """
    for item in items:
        token.raise_if_cancellation_requested()
        yield item


def run_cancellable(
    work: Callable[..., T],
    token: CancellationToken,
    *args: Any,
    **kwargs: Any,
) -> WorkOutcome[T]:
    """Run ``work`` and turn a cancellation into a non-fatal outcome.

    The token is checked once before ``work`` starts; any other exception
    raised by ``work`` propagates unchanged.
    """
    try:
        token.raise_if_cancellation_requested()
        result = work(*args, **kwargs)
    except OperationCancelledError:
        logger.info("Work aborted by cancellation: %s", token.file_path)
        return WorkOutcome(cancelled=True)
    return WorkOutcome(result=result)
