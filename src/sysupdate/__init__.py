"""sysupdate: staged apt and firmware updates with a single-instance lock."""

__version__ = "0.1.0"
