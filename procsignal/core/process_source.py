"""Process discovery by reading a process-information filesystem."""

import os
import posixpath
from typing import Optional

from .models import ProcessHandle
from ..config import TRUNCATED_NAME_LENGTH, host_proc
from ..utils.logging_config import get_logger, timed

logger = get_logger('process_source')

# Largest pid the kernel can hand out (signed 32-bit)
MAX_PID = 2**31 - 1


def parse_pid(entry: str) -> Optional[int]:
    """Return the pid named by a directory entry, or None if it is not one."""
    if not entry.isascii() or not entry.isdigit():
        return None
    pid = int(entry, 10)
    if pid > MAX_PID:
        return None
    return pid


def parse_status(content: bytes) -> dict[str, str]:
    """
    Parse a status record into a key/value mapping.

    Each line is ``Key:<TAB>value``. Lines without a tab are ignored.
    """
    fields: dict[str, str] = {}
    for line in os.fsdecode(content).split('\n'):
        key, sep, value = line.partition('\t')
        if not sep:
            continue
        key = key.rstrip(':')
        if key == 'Name':
            value = value.strip(' \t')
        fields[key] = value
    return fields


def parse_cmdline(content: bytes) -> list[str]:
    """Split a NUL-separated command-line record into arguments."""
    if not content:
        return []
    if content.endswith(b'\x00'):
        content = content[:-1]
    return [os.fsdecode(arg) for arg in content.split(b'\x00')]


def base_name(path: str) -> str:
    """Final path component, ignoring trailing slashes."""
    stripped = path.rstrip('/')
    if not stripped:
        return '/' if path else '.'
    return posixpath.basename(stripped)


def recover_truncated_name(name: str, argv: list[str]) -> str:
    """
    Pick the display name for a process whose status name may be truncated.

    If the base name of ``argv[0]`` extends ``name`` it is used; otherwise
    the raw ``argv[0]`` wins. Without arguments ``name`` is kept.
    """
    if not argv:
        return name
    extended = base_name(argv[0])
    if extended.startswith(name):
        return extended
    return argv[0]


class ProcessSource:
    """Enumerates processes under a proc root and resolves their names."""

    def __init__(self, root: Optional[str] = None):
        self.root = root if root is not None else host_proc()
        logger.debug(f"ProcessSource initialized (root={self.root})")

    def path(self, *parts: str) -> str:
        """Join ``parts`` onto the proc root."""
        return os.path.join(self.root, *parts)

    @timed
    def enumerate(self) -> list[ProcessHandle]:
        """
        List every process visible under the root directory.

        Non-numeric entries are skipped. Failure to list the root raises
        OSError.

        Returns:
            Handles in directory listing order.
        """
        entries = os.listdir(self.root)
        handles = []
        for entry in entries:
            pid = parse_pid(entry)
            if pid is None:
                continue
            handles.append(ProcessHandle(pid=pid))
        logger.debug(f"Enumerated {len(handles)} processes from {len(entries)} entries in {self.root}")
        return handles

    def read_status(self, pid: int) -> dict[str, str]:
        """Read and parse ``<root>/<pid>/status``."""
        with open(self.path(str(pid), 'status'), 'rb') as f:
            return parse_status(f.read())

    def read_cmdline(self, pid: int) -> list[str]:
        """Read and split ``<root>/<pid>/cmdline``."""
        with open(self.path(str(pid), 'cmdline'), 'rb') as f:
            return parse_cmdline(f.read())

    def resolve_name(self, handle: ProcessHandle) -> str:
        """
        Resolve and memoize the display name of a process.

        Names at or above the truncation length are recovered from the
        command line. OSError propagates when either record is unreadable,
        typically because the process has exited.
        """
        if handle.is_resolved:
            return handle.cached_name

        name = self.read_status(handle.pid).get('Name', '')
        if len(os.fsencode(name)) >= TRUNCATED_NAME_LENGTH:
            argv = self.read_cmdline(handle.pid)
            recovered = recover_truncated_name(name, argv)
            if recovered != name:
                logger.debug(f"PID {handle.pid}: recovered name {recovered!r} from truncated {name!r}")
            name = recovered

        handle.cached_name = name
        return name
