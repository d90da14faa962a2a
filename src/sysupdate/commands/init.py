"""Init command: write a config template and check the toolchain."""

from pathlib import Path

import typer

from ..config import UpdateConfig, get_config_path, write_config_template
from ..output import get_output_context
from ..services import command_available


def init(
    path: Path | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Where to write the config (defaults to --config location)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write a default config.toml and report which update tools are installed."""
    ctx = get_output_context()
    config_path = path or get_config_path()

    if ctx.dry_run:
        ctx.console.print("[cyan][DRY RUN][/cyan] Would initialize sysupdate:")
        if config_path.exists() and not force:
            ctx.console.print(f"  Config already exists: {config_path}")
        else:
            ctx.console.print(f"  Create config: {config_path}")
        return

    if config_path.exists() and not force:
        ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")
    else:
        try:
            write_config_template(config_path)
        except OSError as e:
            ctx.error(f"Cannot write config {config_path}: {e}")
            raise typer.Exit(1) from None
        ctx.print(f"[green]Created config template:[/green] {config_path}")

    defaults = UpdateConfig()
    tools = {"apt": defaults.apt.exec, "fwupdmgr": defaults.firmware.exec}
    missing = []
    for name, executable in tools.items():
        if command_available(executable):
            ctx.print(f"[green]✓[/green] {name}")
        else:
            ctx.print(f"[red]✗[/red] {name}: not found in PATH")
            missing.append(name)

    if "apt" in missing:
        ctx.error("apt is required for package updates", {"missing": missing})
        raise typer.Exit(2)

    ctx.success("sysupdate initialized successfully!", {"config": str(config_path)})
