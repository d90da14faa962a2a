"""Tests for lock manager."""

import logging
import os
from pathlib import Path
from unittest import mock

import pytest

from sysupdate.core.lock_manager import (
    acquire_lock,
    get_lock_status,
    hold_lock,
    read_lock_pid,
    release_lock,
)
from sysupdate.errors import AlreadyRunningError
from sysupdate.models import LockState


@pytest.fixture
def lock_path(tmp_path: Path) -> Path:
    """Lock file location inside a temporary run directory."""
    return tmp_path / "run" / "system_update.lock"


class TestReadLockPid:
    """Tests for read_lock_pid function."""

    def test_missing_file_returns_none(self, lock_path: Path) -> None:
        assert read_lock_pid(lock_path) is None

    def test_reads_decimal_pid(self, lock_path: Path) -> None:
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("4242\n")
        assert read_lock_pid(lock_path) == 4242

    def test_garbage_returns_none(self, lock_path: Path) -> None:
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("not-a-pid")
        assert read_lock_pid(lock_path) is None


class TestGetLockStatus:
    """Tests for get_lock_status function."""

    def test_no_file_is_free(self, lock_path: Path) -> None:
        status = get_lock_status(lock_path)
        assert status.state is LockState.FREE
        assert status.pid is None

    def test_live_pid_is_held(self, lock_path: Path) -> None:
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text(str(os.getppid()))
        status = get_lock_status(lock_path)
        assert status.state is LockState.HELD
        assert status.pid == os.getppid()

    def test_dead_pid_is_stale(self, lock_path: Path) -> None:
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("99999")
        with mock.patch("sysupdate.core.lock_manager.is_pid_running", return_value=False):
            status = get_lock_status(lock_path)
        assert status.state is LockState.STALE
        assert status.pid == 99999

    def test_unreadable_record_is_stale(self, lock_path: Path) -> None:
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("")
        assert get_lock_status(lock_path).state is LockState.STALE


class TestAcquireLock:
    """Tests for acquire_lock function."""

    def test_acquire_writes_own_pid(self, lock_path: Path) -> None:
        """Acquiring lock creates the directory and writes our PID."""
        pid = acquire_lock(lock_path)
        assert pid == os.getpid()
        assert lock_path.read_text().strip() == str(os.getpid())

    def test_acquire_clears_stale_lock(
        self, lock_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Stale lock from a dead process is replaced and a warning logged."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("99999")

        with (
            caplog.at_level(logging.WARNING),
            mock.patch("sysupdate.core.lock_manager.is_pid_running", return_value=False),
        ):
            acquire_lock(lock_path)

        assert read_lock_pid(lock_path) == os.getpid()
        assert "Removing stale lock file" in caplog.text

    def test_acquire_fails_if_locked_by_live_process(self, lock_path: Path) -> None:
        """A live owner blocks acquisition and its lock file is untouched."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("12345\n")

        with (
            mock.patch("sysupdate.core.lock_manager.is_pid_running", return_value=True),
            pytest.raises(AlreadyRunningError, match=r"already running \(PID: 12345\)") as exc,
        ):
            acquire_lock(lock_path)

        assert exc.value.pid == 12345
        assert lock_path.read_text() == "12345\n"


class TestReleaseLock:
    """Tests for release_lock function."""

    def test_release_removes_lock_file(self, lock_path: Path) -> None:
        acquire_lock(lock_path)
        release_lock(lock_path)
        assert not lock_path.exists()

    def test_release_missing_file_is_noop(self, lock_path: Path) -> None:
        release_lock(lock_path)
        assert not lock_path.exists()


class TestHoldLock:
    """Tests for the hold_lock guard."""

    def test_lock_held_inside_block(self, lock_path: Path) -> None:
        with hold_lock(lock_path) as pid:
            assert read_lock_pid(lock_path) == pid
        assert not lock_path.exists()

    def test_released_when_block_raises(self, lock_path: Path) -> None:
        with pytest.raises(RuntimeError), hold_lock(lock_path):
            raise RuntimeError("boom")
        assert not lock_path.exists()

    def test_release_logs_cleanup(
        self, lock_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO), hold_lock(lock_path):
            pass
        assert "Cleaning up..." in caplog.text

    def test_failed_acquire_leaves_other_lock(self, lock_path: Path) -> None:
        """Nothing is released when another process holds the lock."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("12345")

        with (
            mock.patch("sysupdate.core.lock_manager.is_pid_running", return_value=True),
            pytest.raises(AlreadyRunningError),
            hold_lock(lock_path),
        ):
            pass

        assert lock_path.read_text() == "12345"
