"""contentshape command-line interface."""

from contentshape.cli.app import app

__all__ = ["app"]
