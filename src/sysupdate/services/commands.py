"""External command execution for sysupdate.

Commands run to completion with no timeout. Combined stdout/stderr is
captured and appended to a log file, mirroring ``cmd >> log 2>&1``.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from ..constants import EXIT_COMMAND_NOT_FOUND
from ..models import CommandResult

logger = logging.getLogger(__name__)


class CommandNotFoundError(Exception):
    """Executable could not be found."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"Command not found: {executable}")


def command_available(executable: str) -> bool:
    """Return True if the executable resolves on PATH (or is an executable path)."""
    return shutil.which(executable) is not None


def append_output(log_path: Path, output: str) -> None:
    """Append command output to a log file, creating its directory if needed."""
    if not output:
        return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(output)
        if not output.endswith("\n"):
            f.write("\n")


def run_command(
    args: list[str],
    log_path: Path | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a command and return its exit status and combined output.

    Args:
        args: Command line; args[0] is the executable
        log_path: If given, combined output is appended to this file
        env: Extra environment variables layered over the current environment

    Returns:
        CommandResult with exit code and combined output

    Raises:
        CommandNotFoundError: If the executable does not exist
    """
    process_env = None
    if env:
        process_env = os.environ.copy()
        process_env.update(env)

    logger.debug(f"Running command: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            env=process_env,
        )
    except FileNotFoundError:
        raise CommandNotFoundError(args[0]) from None

    if log_path is not None:
        append_output(log_path, result.stdout)

    logger.debug(f"Command exited with {result.returncode}: {' '.join(args)}")
    return CommandResult(args=list(args), exit_code=result.returncode, output=result.stdout)


def run_logged(
    args: list[str],
    log_path: Path | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a command, reporting a missing executable as exit status 127.

    This matches how a shell reports an unknown command, so callers can
    apply the same exit-code policy to both cases.
    """
    try:
        return run_command(args, log_path=log_path, env=env)
    except CommandNotFoundError as e:
        if log_path is not None:
            append_output(log_path, str(e))
        return CommandResult(args=list(args), exit_code=EXIT_COMMAND_NOT_FOUND, output=str(e))


def capture_stdout(args: list[str]) -> CommandResult:
    """Run a command capturing stdout only (stderr discarded).

    A missing executable yields exit status 127 and empty output.
    """
    logger.debug(f"Running command: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            text=True,
        )
    except FileNotFoundError:
        return CommandResult(args=list(args), exit_code=EXIT_COMMAND_NOT_FOUND, output="")
    return CommandResult(args=list(args), exit_code=result.returncode, output=result.stdout)
