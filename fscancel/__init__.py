"""fscancel: cross-process cancellation tokens signalled through the filesystem."""

__version__ = "0.1.0"

from .config import (
    DEFAULT_FILE_PREFIX,
    DEFAULT_THROTTLE_INTERVAL_MS,
    CancellationConfig,
    load_config,
)
from .errors import InvalidDescriptorError, InvalidIdentityError, OperationCancelledError
from .fs import LocalFileSystem, MemoryFileSystem, SignalFileSystem
from .token import CancellationState, CancellationToken, TokenDescriptor
from .work import WorkOutcome, checkpoints, run_cancellable

__all__ = [
    "__version__",
    "DEFAULT_FILE_PREFIX",
    "DEFAULT_THROTTLE_INTERVAL_MS",
    "CancellationConfig",
    "CancellationState",
    "CancellationToken",
    "InvalidDescriptorError",
    "InvalidIdentityError",
    "LocalFileSystem",
    "MemoryFileSystem",
    "OperationCancelledError",
    "SignalFileSystem",
    "TokenDescriptor",
    "WorkOutcome",
    "checkpoints",
    "load_config",
    "run_cancellable",
]
