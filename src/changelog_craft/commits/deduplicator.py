"""
Removal of near-duplicate commits.

Two commits are near-duplicates when the normalised edit-distance
similarity of their summaries (first line, lower-cased) exceeds
:data:`SIMILARITY_THRESHOLD`. The first commit of such a cluster is kept
and later ones are dropped, so the pass is stable and idempotent.

The pass compares every candidate with every kept summary. That is
quadratic in the number of commits, which is fine for the hundred or so
commits of a single changelog.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from changelog_craft.commits.message_parser import get_commit_summary
from changelog_craft.commits.models import CommitRecord


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


SIMILARITY_THRESHOLD = 0.8


def levenshtein(first: str, second: str) -> int:
    """Return the single-character edit distance between two strings."""
    if len(first) < len(second):
        first, second = second, first
    if not second:
        return len(first)

    previous = list(range(len(second) + 1))
    for i, first_char in enumerate(first, start=1):
        current = [i]
        for j, second_char in enumerate(second, start=1):
            if first_char == second_char:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(
                        previous[j - 1] + 1,  # substitution
                        current[j - 1] + 1,  # insertion
                        previous[j] + 1,  # deletion
                    )
                )
        previous = current
    return previous[-1]


def similarity(first: str, second: str) -> float:
    """Return the normalised similarity of two strings in ``[0, 1]``.

    ``1.0`` means identical (two empty strings included), ``0.0`` means
    nothing in common.
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(first, second)) / longest


def _is_near_duplicate(candidate: str, seen: str) -> bool:
    longest = max(len(candidate), len(seen))
    if longest == 0:
        return True
    # The edit distance is at least the length difference, so this is an
    # upper bound of the similarity.
    upper_bound = (longest - abs(len(candidate) - len(seen))) / longest
    if upper_bound <= SIMILARITY_THRESHOLD:
        return False
    return similarity(candidate, seen) > SIMILARITY_THRESHOLD


def deduplicate(commits: Iterable[CommitRecord]) -> List[CommitRecord]:
    """Drop commits whose summary nearly repeats an earlier kept commit.

    Parameters
    ----------
    commits : Iterable[CommitRecord]
        Commits in the order they should be considered.

    Returns
    -------
    List[CommitRecord]
        The kept commits, in input order.
    """
    seen: List[str] = []
    unique: List[CommitRecord] = []
    for commit in commits:
        summary = get_commit_summary(commit.message).lower()
        if any(_is_near_duplicate(summary, kept) for kept in seen):
            logger.debug("Dropping near-duplicate commit %s: %s", commit.short_sha, summary)
            continue
        seen.append(summary)
        unique.append(commit)
    return unique
