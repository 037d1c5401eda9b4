"""
Data models for commit classification.

A :class:`CommitRecord` is what the commit sources produce. The parser
derives a :class:`ParsedMessage` from its message, the classifier pairs
both with a :class:`Category` in a :class:`ClassifiedCommit`, and the
renderer turns a classified commit into a :class:`ChangelogEntry`.
All models are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Category(str, Enum):
    """The six changelog categories. Every surviving commit maps to one."""

    FEATURES = "features"
    BUG_FIXES = "bug_fixes"
    BREAKING_CHANGES = "breaking_changes"
    DOCUMENTATION = "documentation"
    STYLE_REFACTOR = "style_refactor"
    CHORES = "chores"


@dataclass(frozen=True)
class CategoryMetadata:
    label: str
    emoji: str
    description: str


CATEGORY_METADATA: Dict[Category, CategoryMetadata] = {
    Category.FEATURES: CategoryMetadata(
        "Features", "✨", "New functionality and enhancements"
    ),
    Category.BUG_FIXES: CategoryMetadata(
        "Bug Fixes", "🐛", "Fixes, patches, and corrections"
    ),
    Category.BREAKING_CHANGES: CategoryMetadata(
        "Breaking Changes", "⚠️", "API changes and major refactors"
    ),
    Category.DOCUMENTATION: CategoryMetadata(
        "Documentation", "📝", "Documentation updates"
    ),
    Category.STYLE_REFACTOR: CategoryMetadata(
        "Style & Refactor", "🎨", "Code cleanup and formatting"
    ),
    Category.CHORES: CategoryMetadata(
        "Chores", "🔧", "Dependency updates and config changes"
    ),
}

# Order in which categories appear in drafts and prompts (most important first)
DISPLAY_ORDER: Tuple[Category, ...] = (
    Category.BREAKING_CHANGES,
    Category.FEATURES,
    Category.BUG_FIXES,
    Category.DOCUMENTATION,
    Category.STYLE_REFACTOR,
    Category.CHORES,
)


@dataclass(frozen=True)
class CommitRecord:
    """A single commit as returned by a commit source.

    Attributes
    ----------
    sha : str
        Full commit identifier.
    message : str
        Full commit message, possibly multi-line.
    author_name : str
        Name of the commit author.
    author_date : str
        Author date as ISO-8601 text, exactly as the source reported it.
    parent_shas : Tuple[str, ...]
        Parent commit identifiers. More than one parent marks a merge.
    """

    sha: str
    message: str
    author_name: str = ""
    author_date: str = ""
    parent_shas: Tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        return self.message.split("\n")[0].strip()

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


@dataclass(frozen=True)
class ParsedMessage:
    """Structured view of a commit message.

    ``type`` and ``scope`` are ``None`` when the header does not follow the
    ``type(scope)!: description`` convention; ``description`` then holds
    the whole header.
    """

    type: Optional[str]
    scope: Optional[str]
    description: str
    body: Optional[str]
    breaking: bool
    raw: str


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit paired with its parsed message and category."""

    commit: CommitRecord
    category: Category
    parsed: ParsedMessage


@dataclass(frozen=True)
class ChangelogEntry:
    """Display-ready line of a changelog draft."""

    category: Category
    description: str
    sha: str
    author_name: str
    author_date: str
