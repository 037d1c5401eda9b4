#!/usr/bin/env python
"""
Thin wrapper script to invoke the changelog_craft CLI.

Running ``python changelogcraft.py`` is equivalent to running the
``changelog-craft`` console script installed via ``pyproject.toml``.
"""

from changelog_craft.cli import main


if __name__ == "__main__":
    main(prog_name="changelog-craft")
