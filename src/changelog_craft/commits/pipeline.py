"""
Commit pipeline: filter, deduplicate, classify and group.

The functions here chain the pure stages of this package. None of them
perform I/O; the commits are fetched beforehand by a commit source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from changelog_craft.commits.category_classifier import classify
from changelog_craft.commits.deduplicator import deduplicate
from changelog_craft.commits.message_parser import clean_commit_message, parse_message
from changelog_craft.commits.models import (
    Category,
    ChangelogEntry,
    ClassifiedCommit,
    CommitRecord,
)
from changelog_craft.commits.noise_filter import is_merge_commit, should_exclude


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass
class PipelineResult:
    """Outcome of :func:`run_pipeline`.

    Attributes
    ----------
    classified : List[ClassifiedCommit]
        Surviving commits in input order.
    total : int
        Number of commits fed into the pipeline.
    excluded : int
        Commits dropped by the noise filter.
    duplicates : int
        Commits dropped as near-duplicates.
    merges : int
        Merge commits seen in the input, whether excluded or not.
    """

    classified: List[ClassifiedCommit] = field(default_factory=list)
    total: int = 0
    excluded: int = 0
    duplicates: int = 0
    merges: int = 0

    @property
    def grouped(self) -> Dict[Category, List[ClassifiedCommit]]:
        return group_by_category(self.classified)


def classify_commit(commit: CommitRecord) -> ClassifiedCommit:
    parsed = parse_message(commit.message)
    return ClassifiedCommit(
        commit=commit,
        category=classify(parsed, commit.message),
        parsed=parsed,
    )


def filter_commits(
    commits: Iterable[CommitRecord], exclude_patterns: Sequence[str] = ()
) -> List[CommitRecord]:
    """Return the commits that are not noise, in input order."""
    return [c for c in commits if not should_exclude(c.message, exclude_patterns)]


def classify_commits(
    commits: Iterable[CommitRecord], exclude_patterns: Sequence[str] = ()
) -> List[ClassifiedCommit]:
    """Filter out noise commits and classify the rest."""
    return [classify_commit(c) for c in filter_commits(commits, exclude_patterns)]


def group_by_category(
    classified: Iterable[ClassifiedCommit],
) -> Dict[Category, List[ClassifiedCommit]]:
    """Group classified commits by category.

    All six categories are present as keys, empty ones included.
    """
    grouped: Dict[Category, List[ClassifiedCommit]] = {category: [] for category in Category}
    for item in classified:
        grouped[item.category].append(item)
    return grouped


def group_commits_by_category(
    commits: Iterable[CommitRecord], exclude_patterns: Sequence[str] = ()
) -> Dict[Category, List[ClassifiedCommit]]:
    return group_by_category(classify_commits(commits, exclude_patterns))


def run_pipeline(
    commits: Sequence[CommitRecord],
    exclude_patterns: Sequence[str] = (),
    dedup: bool = True,
) -> PipelineResult:
    """Run the whole pipeline and report what each stage dropped.

    Parameters
    ----------
    commits : Sequence[CommitRecord]
        Commits as returned by a commit source.
    exclude_patterns : Sequence[str], optional
        Extra noise patterns on top of the built-in ones.
    dedup : bool, optional
        Whether to drop near-duplicate commits. Defaults to True.

    Returns
    -------
    PipelineResult
        The classified commits plus per-stage counts.
    """
    kept = filter_commits(commits, exclude_patterns)
    excluded = len(commits) - len(kept)

    duplicates = 0
    if dedup:
        unique = deduplicate(kept)
        duplicates = len(kept) - len(unique)
        kept = unique

    result = PipelineResult(
        classified=[classify_commit(c) for c in kept],
        total=len(commits),
        excluded=excluded,
        duplicates=duplicates,
        merges=sum(1 for c in commits if is_merge_commit(c)),
    )
    logger.debug(
        "Pipeline: %d commits in, %d excluded (%d merges seen), %d duplicates, %d classified",
        result.total,
        result.excluded,
        result.merges,
        result.duplicates,
        len(result.classified),
    )
    return result


def format_commit_for_changelog(item: ClassifiedCommit) -> ChangelogEntry:
    commit = item.commit
    return ChangelogEntry(
        category=item.category,
        description=clean_commit_message(commit.message),
        sha=commit.short_sha,
        author_name=commit.author_name,
        author_date=commit.author_date,
    )
