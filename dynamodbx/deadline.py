from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .errors import DdbCancelled, DdbDeadlineExceeded


@dataclass(slots=True)
class Deadline:
    """Cooperative cancellation signal threaded through backend calls.

    ``expires_at`` is a ``time.monotonic()`` timestamp; ``None`` means the
    caller opted into waiting forever. ``cancel()`` may be called from any
    thread and wakes a pending ``sleep()`` immediately.
    """

    expires_at: float | None = None
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        return cls(expires_at=time.monotonic() + float(seconds))

    @classmethod
    def never(cls) -> Deadline:
        return cls(expires_at=None)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - time.monotonic())

    def expired(self) -> bool:
        return self.expires_at is not None and time.monotonic() >= self.expires_at

    def check(self, *, operation: str, table_name: str | None = None) -> None:
        if self.cancelled:
            raise DdbCancelled(
                message="operation cancelled",
                operation=operation,
                table_name=table_name,
            )
        if self.expired():
            raise DdbDeadlineExceeded(
                message="deadline exceeded",
                operation=operation,
                table_name=table_name,
            )

    def sleep(self, seconds: float, *, operation: str, table_name: str | None = None) -> None:
        self.check(operation=operation, table_name=table_name)
        wait_s = max(0.0, float(seconds))
        remaining = self.remaining()
        if remaining is not None:
            wait_s = min(wait_s, remaining)
        if wait_s > 0:
            self._cancelled.wait(wait_s)
        self.check(operation=operation, table_name=table_name)
