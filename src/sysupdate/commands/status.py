"""Status command for the run lock."""

import typer

from ..core import get_lock_status
from ..models import LockState
from ..output import get_output_context
from .run import load_config_or_exit


def status() -> None:
    """Show whether an update run currently holds the lock.

    Exits 0 when no run is active, 1 when a live run holds the lock.
    """
    ctx = get_output_context()
    config = load_config_or_exit(ctx)

    lock_status = get_lock_status(config.paths.lock_file)
    ctx.lock_status(lock_status)

    if lock_status.state is LockState.HELD:
        raise typer.Exit(1)
