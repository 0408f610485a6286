"""Signal delivery to processes matched by name."""

import errno
from typing import Optional

import psutil

from .models import ProcessHandle, SignalDeliveryError
from .process_source import ProcessSource
from ..utils.logging_config import get_logger, PerfTimer

logger = get_logger('signal_dispatcher')

# Resolution errors that mean the process exited after enumeration
VANISHED_ERRORS = (FileNotFoundError, ProcessLookupError)


class SignalDispatcher:
    """Sends a signal to every process whose resolved name matches."""

    def __init__(self, source: Optional[ProcessSource] = None):
        self.source = source or ProcessSource()

    def send_signal(self, pid: int, signal_number: int):
        """
        Deliver one signal through psutil.

        Raises:
            SignalDeliveryError: If the process is gone or access is denied.
        """
        try:
            psutil.Process(pid).send_signal(signal_number)
        except psutil.NoSuchProcess as e:
            raise SignalDeliveryError(pid, signal_number, "process no longer exists", errno.ESRCH) from e
        except psutil.AccessDenied as e:
            raise SignalDeliveryError(pid, signal_number, "access denied", errno.EPERM) from e
        except psutil.Error as e:
            raise SignalDeliveryError(pid, signal_number, str(e)) from e

    def _matches(self, handle: ProcessHandle, target_name: str, ignore_vanished: bool) -> bool:
        try:
            name = self.source.resolve_name(handle)
        except VANISHED_ERRORS:
            if not ignore_vanished:
                raise
            logger.debug(f"PID {handle.pid} exited before its name could be read, skipping")
            return False
        return name == target_name

    def signal_by_name(self, target_name: str, signal_number: int,
                       ignore_vanished: bool = False) -> list[int]:
        """
        Send ``signal_number`` to every process named ``target_name``.

        Matching is exact and case-sensitive. The first failure aborts the
        pass; processes signaled before it stay signaled.

        Args:
            target_name: Resolved process name to match.
            signal_number: Signal to deliver.
            ignore_vanished: Treat a process that exits before its name is
                read as a non-match instead of an error.

        Returns:
            PIDs that were signaled, in enumeration order.
        """
        logger.debug(f"signal_by_name called (name={target_name!r}, signal={signal_number})")
        signaled: list[int] = []

        with PerfTimer(f"signal_by_name({target_name!r})", logger):
            for handle in self.source.enumerate():
                if not self._matches(handle, target_name, ignore_vanished):
                    continue
                self.send_signal(handle.pid, signal_number)
                logger.info(f"Sent signal {signal_number} to {target_name} (PID: {handle.pid})")
                signaled.append(handle.pid)

        if not signaled:
            logger.info(f"No process named {target_name!r} found")
        return signaled


def signal_procs(name: str, signal_number: int, root: Optional[str] = None,
                 ignore_vanished: bool = False) -> list[int]:
    """Send ``signal_number`` to all processes called ``name``."""
    dispatcher = SignalDispatcher(ProcessSource(root))
    return dispatcher.signal_by_name(name, signal_number, ignore_vanished=ignore_vanished)
