"""
Heuristics for classifying commits into changelog categories.

The classifier first trusts the Conventional Commit type of a message
and only falls back to keyword detection when there is no usable type.
It is intentionally simple and deterministic so that it can be unit
tested without requiring a language model.

Keyword detection is plain substring containment on the lower-cased
message, not word matching. A message mentioning a "fixture" therefore
counts as a bug fix. This is a known quirk kept for compatibility with
existing changelogs.
"""

from __future__ import annotations

from typing import Dict, Tuple

from changelog_craft.commits.message_parser import parse_message
from changelog_craft.commits.models import Category, ParsedMessage


TYPE_CATEGORIES: Dict[str, Category] = {
    "feat": Category.FEATURES,
    "feature": Category.FEATURES,
    "perf": Category.FEATURES,
    "fix": Category.BUG_FIXES,
    "bugfix": Category.BUG_FIXES,
    "docs": Category.DOCUMENTATION,
    "doc": Category.DOCUMENTATION,
    "style": Category.STYLE_REFACTOR,
    "refactor": Category.STYLE_REFACTOR,
    "test": Category.CHORES,
    "build": Category.CHORES,
    "ci": Category.CHORES,
    "chore": Category.CHORES,
    "revert": Category.CHORES,
}

# Evaluated in order, first hit wins. A message may contain words from
# several buckets, so the order is part of the behaviour.
KEYWORD_CATEGORIES: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (Category.BREAKING_CHANGES, ("breaking", "breaking change", "deprecated")),
    (Category.FEATURES, ("add", "implement", "create", "new feature", "enhance")),
    (Category.BUG_FIXES, ("fix", "bug", "resolve", "patch", "correct")),
    (Category.DOCUMENTATION, ("doc", "readme", "comment", "documentation")),
    (Category.STYLE_REFACTOR, ("refactor", "cleanup", "reorganize", "style", "format")),
)

DEFAULT_CATEGORY = Category.CHORES


def classify(parsed: ParsedMessage, raw_message: str) -> Category:
    """Classify a commit into one of the six changelog categories.

    Parameters
    ----------
    parsed : ParsedMessage
        The parsed form of the commit message.
    raw_message : str
        The full commit message, used for the keyword fallback.

    Returns
    -------
    Category
        Breaking changes always win. Otherwise the Conventional Commit
        type decides, then keywords, then ``chores`` as the default.
    """
    if parsed.breaking:
        return Category.BREAKING_CHANGES

    if parsed.type:
        category = TYPE_CATEGORIES.get(parsed.type.lower())
        if category is not None:
            return category

    lower_message = raw_message.lower()
    for category, keywords in KEYWORD_CATEGORIES:
        if any(keyword in lower_message for keyword in keywords):
            return category

    return DEFAULT_CATEGORY


def infer_category(message: str) -> Category:
    """Parse and classify a raw commit message in one step."""
    return classify(parse_message(message), message)
