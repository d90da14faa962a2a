"""Run command: the full update pass."""

import shlex

import typer
from pydantic import ValidationError

from ..config import UpdateConfig, get_config_path, load_config
from ..constants import EXIT_FAILURE
from ..core import UpdateController
from ..output import OutputContext, get_output_context


def load_config_or_exit(ctx: OutputContext) -> UpdateConfig:
    """Load the configured TOML file, exiting 1 with an error if it is invalid."""
    config_path = get_config_path()
    try:
        return load_config(config_path)
    except (ValidationError, ValueError, OSError) as e:
        ctx.error(f"Invalid configuration {config_path}: {e}")
        raise typer.Exit(EXIT_FAILURE) from None


def _show_plan(ctx: OutputContext, config: UpdateConfig) -> None:
    """Print the commands a run would execute."""
    apt = config.apt
    firmware = config.firmware
    ctx.console.print("[cyan][DRY RUN][/cyan] Would run system update:")
    ctx.console.print(f"  Lock file: {config.paths.lock_file}")
    ctx.console.print(f"  Log file: {config.paths.log_file}")
    ctx.console.print(f"  Firmware log: {config.paths.firmware_log}")
    for args in (apt.update_args, apt.upgrade_args, apt.autoremove_args):
        ctx.console.print(f"  {shlex.join([apt.exec, *args])}")
    if firmware.enabled:
        ctx.console.print(f"  {shlex.join([firmware.exec, *firmware.refresh_args])}")
        ctx.console.print(f"  {shlex.join([firmware.exec, *firmware.list_args])}")
        ctx.console.print(
            f"  {shlex.join([firmware.exec, *firmware.install_args])} (if updates are available)"
        )


def run_update() -> None:
    """Run apt and firmware updates (the default command)."""
    ctx = get_output_context()
    config = load_config_or_exit(ctx)

    if ctx.dry_run:
        _show_plan(ctx, config)
        return

    controller = UpdateController(config)
    exit_code = controller.run()
    ctx.run_summary(controller.summary)
    raise typer.Exit(exit_code)
