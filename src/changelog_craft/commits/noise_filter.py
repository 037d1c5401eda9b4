"""
Detection of noise commits that do not belong in a changelog.

Merges and trivial housekeeping (typo fixes, version bumps, dependency
updates) are dropped before classification so that they never reach the
draft.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from changelog_craft.commits.models import CommitRecord


DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = (
    "merge",
    "merge branch",
    "merge pull request",
    "wip",
    "work in progress",
    "bump version",
    "update dependencies",
    "update package",
    "fix typo",
    "typo",
    "update .gitignore",
    "initial commit",
)


def should_exclude(message: str, extra_patterns: Iterable[str] = ()) -> bool:
    """Return True if the commit message matches any exclusion pattern.

    Matching is case-insensitive substring containment against the
    built-in patterns plus ``extra_patterns``.
    """
    lower_message = message.lower()
    patterns = list(DEFAULT_EXCLUDE_PATTERNS) + [p.lower() for p in extra_patterns]
    return any(pattern in lower_message for pattern in patterns)


def is_merge_commit(commit: CommitRecord) -> bool:
    """Return True for commits with several parents or a ``Merge`` header."""
    return len(commit.parent_shas) > 1 or commit.message.lower().startswith("merge")
