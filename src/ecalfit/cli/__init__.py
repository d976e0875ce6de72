"""Command-line interface for ecalfit."""

from ecalfit.cli.app import app

__all__ = ["app"]
