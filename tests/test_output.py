"""Tests for output formatting."""

import io
import json
from pathlib import Path

from rich.console import Console

from sysupdate.models import LockState, LockStatus, RunSummary
from sysupdate.output import OutputContext


def _text_context() -> tuple[OutputContext, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=120)
    return OutputContext(console=console, json_mode=False), output


def _summary(**kwargs: object) -> RunSummary:
    return RunSummary(
        log_file=Path("/var/log/system_update.log"),
        firmware_log=Path("/var/log/firmware_update.log"),
        **kwargs,
    )


class TestOutputContextPrint:
    """Tests for OutputContext.print method."""

    def test_print_in_normal_mode(self) -> None:
        ctx, output = _text_context()
        ctx.print("Hello world")
        assert "Hello world" in output.getvalue()

    def test_print_suppressed_in_json_mode(self) -> None:
        output = io.StringIO()
        ctx = OutputContext(console=Console(file=output), json_mode=True)
        ctx.print("Hello world")
        assert output.getvalue() == ""


class TestOutputContextError:
    """Tests for OutputContext.error method."""

    def test_error_prints_json_in_json_mode(self, capsys) -> None:
        ctx = OutputContext(console=Console(), json_mode=True)
        ctx.error("Something failed", {"code": 1})
        data = json.loads(capsys.readouterr().out)
        assert data == {"error": "Something failed", "code": 1}

    def test_error_prints_message_in_normal_mode(self) -> None:
        ctx, output = _text_context()
        ctx.error("Something failed")
        assert "Error: Something failed" in output.getvalue()


class TestRunSummary:
    """Tests for OutputContext.run_summary method."""

    def test_json_summary(self, capsys) -> None:
        ctx = OutputContext(console=Console(), json_mode=True)
        ctx.run_summary(_summary(completed_stages=["apt update"], firmware_updates=1))
        data = json.loads(capsys.readouterr().out)
        assert data["exit_code"] == 0
        assert data["completed_stages"] == ["apt update"]
        assert data["firmware_updates"] == 1
        assert data["log_file"] == "/var/log/system_update.log"

    def test_text_summary_success(self) -> None:
        ctx, output = _text_context()
        ctx.run_summary(_summary(completed_stages=["apt update", "apt upgrade"]))
        text = output.getvalue()
        assert "success" in text
        assert "apt update, apt upgrade" in text
        assert "/var/log/firmware_update.log" in text

    def test_text_summary_failure_shows_error(self) -> None:
        ctx, output = _text_context()
        ctx.run_summary(_summary(exit_code=1, error="apt update failed"))
        text = output.getvalue()
        assert "failed" in text
        assert "apt update failed" in text


class TestLockStatus:
    """Tests for OutputContext.lock_status method."""

    def test_free(self) -> None:
        ctx, output = _text_context()
        ctx.lock_status(LockStatus(path=Path("/run/x.lock"), state=LockState.FREE))
        assert "No update running" in output.getvalue()

    def test_held(self) -> None:
        ctx, output = _text_context()
        ctx.lock_status(LockStatus(path=Path("/run/x.lock"), state=LockState.HELD, pid=42))
        assert "PID: 42" in output.getvalue()

    def test_stale_unreadable(self) -> None:
        ctx, output = _text_context()
        ctx.lock_status(LockStatus(path=Path("/run/x.lock"), state=LockState.STALE))
        assert "Stale lock" in output.getvalue()
        assert "unreadable" in output.getvalue()

    def test_json(self, capsys) -> None:
        ctx = OutputContext(console=Console(), json_mode=True)
        ctx.lock_status(LockStatus(path=Path("/run/x.lock"), state=LockState.HELD, pid=42))
        data = json.loads(capsys.readouterr().out)
        assert data == {"path": "/run/x.lock", "state": "held", "pid": 42}
