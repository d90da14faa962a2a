"""Logging configuration for sysupdate.

Console output goes through Rich on the root logger. During a run, two
more sinks are attached to the ``sysupdate`` logger: the local append-only
log file and the system log.
"""

import logging
import logging.handlers
from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import UpdateConfig

PACKAGE_LOGGER = "sysupdate"
LOCAL_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOCAL_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    debug: bool = False,
) -> Console:
    """Configure console logging based on CLI options.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug, 2+ adds time and path)
        quiet: Suppress non-error output (takes precedence over debug/verbosity)
        no_color: Disable colored output
        debug: Enable debug logging (ignored if quiet is set)

    Returns:
        Configured Rich console for output

    Note:
        The console handler carries the level itself, so records from the
        package logger (which run sinks lower to INFO) still respect --quiet.
    """
    if quiet:
        level = LogLevel.QUIET
    elif debug or verbosity >= 1:
        level = LogLevel.VERBOSE
    else:
        level = LogLevel.NORMAL

    console = Console(
        stderr=True,
        force_terminal=not no_color,
        no_color=no_color,
    )

    handler = RichHandler(
        console=console,
        show_time=debug or verbosity >= 2,
        show_path=debug or verbosity >= 2,
    )
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    return console


class LocalLogFormatter(logging.Formatter):
    """Formats entries as ``[timestamp] [level] message`` with lowercase levels."""

    def __init__(self) -> None:
        super().__init__(fmt=LOCAL_LOG_FORMAT, datefmt=LOCAL_LOG_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = record.levelname.lower()
        return super().format(record)


class LocalLogHandler(logging.FileHandler):
    """Append-only local log file handler.

    The file is opened on first emit and its directory is created if needed.
    If the file cannot be opened the handler drops entries for the rest of
    the run instead of failing the caller.
    """

    def __init__(self, filename: Path) -> None:
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)
        self.unavailable = False
        self.setLevel(logging.DEBUG)
        self.setFormatter(LocalLogFormatter())

    def _open(self):  # type: ignore[no-untyped-def]
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()

    def emit(self, record: logging.LogRecord) -> None:
        if self.unavailable:
            return
        if self.stream is None:
            try:
                self.stream = self._open()
            except OSError:
                # Unwritable location: console and syslog still carry the entry
                self.unavailable = True
                return
        super().emit(record)


def create_file_handler(config: UpdateConfig) -> LocalLogHandler:
    """Create the local log file handler."""
    return LocalLogHandler(config.paths.log_file)


def create_syslog_handler(config: UpdateConfig) -> logging.Handler | None:
    """Create the syslog handler, or None if disabled or the socket cannot be opened."""
    if not config.syslog.enabled:
        return None

    facility = logging.handlers.SysLogHandler.facility_names.get(config.syslog.facility)
    if facility is None:
        logger.debug(f"Unknown syslog facility '{config.syslog.facility}', using 'user'")
        facility = logging.handlers.SysLogHandler.LOG_USER

    # Newer Pythons swallow unix socket connect errors at construction
    if not Path(config.syslog.address).exists():
        logger.debug(f"Syslog socket {config.syslog.address} not found")
        return None

    try:
        handler = logging.handlers.SysLogHandler(address=config.syslog.address, facility=facility)
    except OSError as e:
        logger.debug(f"Syslog unavailable at {config.syslog.address}: {e}")
        return None

    handler.ident = f"{config.syslog.tag}: "
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


@contextmanager
def attach_handlers(*handlers: logging.Handler | None) -> Iterator[logging.Logger]:
    """Attach run sinks to the package logger for the duration of a block.

    None entries are skipped. Handlers are detached and closed on exit.
    The package logger is lowered to INFO while attached so sinks record
    info entries even when the console is quiet.

    Yields:
        The package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    attached = [h for h in handlers if h is not None]

    previous_level = package_logger.level
    if package_logger.getEffectiveLevel() > logging.INFO:
        package_logger.setLevel(logging.INFO)
    for handler in attached:
        package_logger.addHandler(handler)

    try:
        yield package_logger
    finally:
        for handler in attached:
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(previous_level)
