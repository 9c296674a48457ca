"""pyangler command-line interface."""

from pyangler.cli.app import app, main

__all__ = ["app", "main"]
