"""Lock manager for single-instance update runs.

Provides PID-based file locking so only one update run is active on the
host. The lock file contains the owner's decimal PID. A lock whose PID is
no longer running is stale and is cleared before a new lock is written.

Acquisition is check-then-act: read the record, test liveness, write our
PID. Two instances racing through that sequence can both succeed.
"""

import contextlib
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from ..errors import AlreadyRunningError
from ..models import LockState, LockStatus
from ..services.system import is_pid_running

logger = logging.getLogger(__name__)


def read_lock_pid(lock_path: Path) -> int | None:
    """Read the PID recorded in the lock file.

    Returns:
        The PID, or None if the file is missing, unreadable or not a number
    """
    try:
        content = lock_path.read_text().strip()
    except OSError:
        return None
    try:
        return int(content)
    except ValueError:
        return None


def get_lock_status(lock_path: Path) -> LockStatus:
    """Report whether the lock is free, held by a live process, or stale."""
    if not lock_path.exists():
        return LockStatus(path=lock_path, state=LockState.FREE)

    pid = read_lock_pid(lock_path)
    if pid is not None and is_pid_running(pid):
        return LockStatus(path=lock_path, state=LockState.HELD, pid=pid)
    return LockStatus(path=lock_path, state=LockState.STALE, pid=pid)


def acquire_lock(lock_path: Path) -> int:
    """Acquire the run lock for the current process.

    Args:
        lock_path: Lock file location

    Returns:
        PID written to the lock file

    Raises:
        AlreadyRunningError: If a live process holds the lock (file untouched)
    """
    status = get_lock_status(lock_path)

    if status.state is LockState.HELD:
        assert status.pid is not None
        raise AlreadyRunningError(status.pid)

    if status.state is LockState.STALE:
        logger.warning("Removing stale lock file")
        with contextlib.suppress(FileNotFoundError):
            lock_path.unlink()

    pid = os.getpid()
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock_path.write_text(f"{pid}\n")
    logger.debug(f"Acquired lock {lock_path} (PID: {pid})")
    return pid


def release_lock(lock_path: Path) -> None:
    """Delete the lock file."""
    lock_path.unlink(missing_ok=True)
    logger.debug(f"Released lock {lock_path}")


@contextlib.contextmanager
def hold_lock(lock_path: Path) -> Iterator[int]:
    """Hold the run lock for the duration of a block.

    The lock is released on every exit path once acquired. If acquisition
    fails nothing is released, so another owner's lock file is left alone.

    Yields:
        The PID recorded in the lock file
    """
    pid = acquire_lock(lock_path)
    try:
        yield pid
    finally:
        logger.info("Cleaning up...")
        release_lock(lock_path)
