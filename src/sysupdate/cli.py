"""sysupdate CLI: staged apt and firmware updates."""

from pathlib import Path

import typer

from sysupdate import __version__

from .commands import init, run_update, status
from .config import set_config_path
from .constants import DEFAULT_CONFIG_PATH
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sysupdate {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="sysupdate",
    help="Run apt and firmware updates with syslog logging and a single-instance lock",
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be done without executing anything",
    ),
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        envvar="SYSUPDATE_CONFIG",
        help="Path to config.toml (defaults apply if the file is missing)",
    ),
) -> None:
    """Run system updates. With no command, performs the full update run."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output, dry_run=dry_run))
    set_config_path(config)

    if ctx.invoked_subcommand is None:
        run_update()


app.command("run")(run_update)
app.command()(status)
app.command()(init)


if __name__ == "__main__":
    app()
