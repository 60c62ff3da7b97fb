"""CLI package for mirror-query."""

from mirror_query.cli.main import app

__all__ = ["app"]
