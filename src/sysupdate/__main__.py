"""Allow ``python -m sysupdate``."""

from .cli import app

app(prog_name="sysupdate")
