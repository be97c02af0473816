"""Canonical Markdown re-rendering built on mistune."""

__version__ = "0.1.0"
