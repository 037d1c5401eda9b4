"""
Top-level package for changelog_craft.

The commit classification pipeline lives in
:mod:`changelog_craft.commits`; the CLI entry point is exposed via the
``changelog_craft.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
