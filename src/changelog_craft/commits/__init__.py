"""
Commit classification and deduplication.

This package parses commit messages, sorts commits into changelog
categories, drops noise commits and collapses near-duplicates. See
:mod:`changelog_craft.commits.pipeline` for the chained entry points.
"""

from .category_classifier import classify, infer_category  # noqa: F401
from .deduplicator import deduplicate, similarity  # noqa: F401
from .message_parser import parse_message  # noqa: F401
from .models import (  # noqa: F401
    Category,
    ChangelogEntry,
    ClassifiedCommit,
    CommitRecord,
    ParsedMessage,
)
from .noise_filter import is_merge_commit, should_exclude  # noqa: F401
from .pipeline import PipelineResult, group_by_category, run_pipeline  # noqa: F401
