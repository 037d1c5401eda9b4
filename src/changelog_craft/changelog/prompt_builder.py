"""
Prompts for drafting a changelog with a language model.

This module only builds the text handed to a model: a fixed system
prompt describing the expected changelog, and a user prompt listing the
categorized commits. Calling a model is left to the caller.
"""

from __future__ import annotations

import math
from datetime import datetime
from textwrap import dedent
from typing import Dict, List, Mapping, Sequence

from changelog_craft.commits.models import (
    CATEGORY_METADATA,
    DISPLAY_ORDER,
    Category,
    ClassifiedCommit,
)


TEMPLATE_TYPES = ("minimal", "detailed", "emoji")

TEMPLATE_INSTRUCTIONS: Dict[str, str] = {
    "minimal": (
        "Instructions: Create a minimal changelog with short, concise entries. "
        "No emojis in entries, only in headers. Keep descriptions very brief "
        "(under 50 characters per entry)."
    ),
    "detailed": (
        "Instructions: Create a detailed changelog with comprehensive descriptions. "
        "Include context and impact for each change. Aim for 60-80 characters per entry."
    ),
    "emoji": (
        "Instructions: Create an emoji-rich changelog with expressive descriptions. "
        "Use relevant emojis in entries to make the changelog more engaging and visual. "
        "Be descriptive but fun."
    ),
}

CHANGELOG_SYSTEM_PROMPT = dedent(
    """
    You are an expert technical writer specialized in creating user-friendly changelogs.
    Your task is to turn categorized git commits into a well-organized changelog.

    The commits have already been sorted into these categories:
    - Breaking Changes (API changes, major refactors)
    - Features (new functionality, enhancements)
    - Bug Fixes (fixes, patches, corrections)
    - Documentation (docs, README updates)
    - Style & Refactor (code cleanup, formatting)
    - Chores (dependency updates, config changes)

    REWRITING RULES:
    - Convert technical jargon to user-friendly language
    - Be concise but descriptive and use active voice
    - Focus on user impact, not implementation details
    - Remove redundant words like "fix", "add", "update" at the start
    - Each entry should be one clear sentence
    - Combine entries that describe the same change

    OUTPUT FORMAT (markdown):
    - Use ## for category headers, with an emoji in each header
    - Use - for list items, under 80 characters per line
    - Order categories: Breaking Changes, Features, Bug Fixes, Documentation,
      Style & Refactor, Chores
    - Only include categories that have entries
    - Start with a brief summary line if there are significant changes

    Output ONLY the changelog. Do not add explanations before or after it.
    """
).strip()


def get_template_instructions(template_type: str) -> str:
    """Return the style instructions for a template, or ``""`` if unknown."""
    return TEMPLATE_INSTRUCTIONS.get(template_type, "")


def _format_commit_line(item: ClassifiedCommit) -> str:
    commit = item.commit
    date = commit.author_date[:10] if commit.author_date else "unknown date"
    author = commit.author_name or "unknown"
    return f"[{commit.short_sha}] {commit.summary} - {author} ({date})"


def build_changelog_user_prompt(
    repo_name: str,
    grouped: Mapping[Category, Sequence[ClassifiedCommit]],
    date_from: datetime,
    date_to: datetime,
    template_type: str = "detailed",
) -> str:
    """Build the user prompt listing the commits of a changelog.

    Parameters
    ----------
    repo_name : str
        Repository name shown to the model.
    grouped : Mapping[Category, Sequence[ClassifiedCommit]]
        Commits grouped by category, as produced by
        :func:`~changelog_craft.commits.pipeline.group_by_category`.
    date_from, date_to : datetime
        The window the commits were taken from.
    template_type : str, optional
        One of :data:`TEMPLATE_TYPES`. Defaults to ``"detailed"``.

    Returns
    -------
    str
        The prompt text. Categories without commits are left out.
    """
    total = sum(len(items) for items in grouped.values())
    sections: List[str] = []
    for category in DISPLAY_ORDER:
        items = grouped.get(category) or []
        if not items:
            continue
        label = CATEGORY_METADATA[category].label
        lines = "\n".join(_format_commit_line(item) for item in items)
        sections.append(f"{label}:\n{lines}")

    return "\n".join(
        [
            f"Repository: {repo_name}",
            f"Date Range: {date_from:%Y-%m-%d} to {date_to:%Y-%m-%d}",
            f"Total Commits: {total}",
            "",
            f"Template Style: {template_type}",
            get_template_instructions(template_type),
            "",
            "Commits:",
            "\n\n".join(sections) if sections else "(none)",
            "",
            "Generate a changelog following the guidelines and template style specified above.",
        ]
    )


def build_summary_prompt(markdown: str) -> str:
    """Build a prompt asking for a one or two sentence summary of a changelog."""
    return (
        "Analyze this changelog and create a brief, engaging summary (1-2 sentences) "
        "that highlights the most important changes.\n\n"
        f"Changelog:\n{markdown}\n\n"
        "Provide only the summary text, no additional formatting."
    )


def estimate_token_count(text: str) -> int:
    # roughly four characters per token
    return math.ceil(len(text) / 4)
