from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..core.enums import SyncStatus

logger = logging.getLogger(__name__)

# Returned by SyncGateway.fetch when the caller passes it as ``default`` and the read fails.
READ_FAILED = object()


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one push to the persistence backend."""

    operation: str
    ok: bool
    value: Any = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {"operation": self.operation, "ok": self.ok, "error": self.error}


class SyncGateway:
    """Runs persistence calls best-effort.

    Failures are logged and reported as a failed result; nothing is retried and
    the in-memory state is left as it is.
    """

    def __init__(self):
        self._last: Optional[SyncResult] = None

    @property
    def last_result(self) -> Optional[SyncResult]:
        return self._last

    @property
    def status(self) -> SyncStatus:
        if self._last is None:
            return SyncStatus.IDLE
        return SyncStatus.SYNCED if self._last.ok else SyncStatus.FAILED

    def push(self, operation: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> SyncResult:
        try:
            value = fn(*args, **kwargs)
        except Exception as e:
            logger.warning("Persistence call %s failed: %s", operation, e)
            result = SyncResult(operation=operation, ok=False, error=str(e))
        else:
            logger.debug("Persistence call %s done", operation)
            result = SyncResult(operation=operation, ok=True, value=value)
        self._last = result
        return result

    def fetch(self, operation: str, fn: Callable[..., Any], *args: Any, default: Any = None, **kwargs: Any) -> Any:
        """Read from the backend; on failure log and fall back to ``default``."""
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.warning("Persistence read %s failed: %s", operation, e)
            self._last = SyncResult(operation=operation, ok=False, error=str(e))
            return default
