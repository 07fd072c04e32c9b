"""Prune GitHub Actions workflow runs by conclusion, actor or age."""

__version__ = "1.0.0"
