"""Data models for procsignal."""

import errno
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ProcessHandle:
    """
    One process observed in a directory listing snapshot.

    The name is resolved lazily by ProcessSource and memoized here.
    """
    pid: int
    cached_name: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def is_resolved(self) -> bool:
        return self.cached_name is not None


class SignalDeliveryError(OSError):
    """Raised when the host refuses or fails to deliver a signal."""

    def __init__(self, pid: int, signal_number: int, reason: str, err: int = errno.EIO):
        super().__init__(err, f"Cannot send signal {signal_number} to PID {pid}: {reason}")
        self.pid = pid
        self.signal_number = signal_number
