"""CLI command implementations for sysupdate.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .init import init
from .run import run_update
from .status import status

__all__ = [
    "init",
    "run_update",
    "status",
]
