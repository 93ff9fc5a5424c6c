"""CLI package for nmsweep.

This package contains the Typer application, the interactive project
picker and the live status reporter.
"""

from nmsweep.cli.main import app

__all__ = ["app"]
