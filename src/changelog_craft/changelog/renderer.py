"""
Deterministic changelog drafts.

The renderer lists categorized commits as Markdown or JSON without any
rewriting beyond :func:`~changelog_craft.commits.message_parser.clean_commit_message`.
It is what the CLI prints when no model is involved, and the structured
form the JSON output exposes to other tools.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from changelog_craft.commits.models import (
    CATEGORY_METADATA,
    DISPLAY_ORDER,
    Category,
    ClassifiedCommit,
)
from changelog_craft.commits.pipeline import format_commit_for_changelog


def render_markdown(
    grouped: Mapping[Category, Sequence[ClassifiedCommit]],
    title: Optional[str] = None,
    show_emoji: bool = True,
) -> str:
    """Render grouped commits as a Markdown changelog.

    One ``##`` section per non-empty category, most important first, with
    one bullet per commit.
    """
    lines: List[str] = []
    if title:
        lines.extend([f"# {title}", ""])
    for category in DISPLAY_ORDER:
        items = grouped.get(category) or []
        if not items:
            continue
        meta = CATEGORY_METADATA[category]
        header = f"{meta.emoji} {meta.label}" if show_emoji else meta.label
        lines.append(f"## {header}")
        for item in items:
            entry = format_commit_for_changelog(item)
            lines.append(f"- {entry.description} ({entry.sha})")
        lines.append("")
    if not any(grouped.get(category) for category in DISPLAY_ORDER):
        lines.extend(["_No notable changes._", ""])
    return "\n".join(lines).rstrip("\n") + "\n"


def _entry_dict(item: ClassifiedCommit) -> Dict[str, Any]:
    entry = format_commit_for_changelog(item)
    return {
        "description": entry.description,
        "sha": entry.sha,
        "author_name": entry.author_name,
        "author_date": entry.author_date,
        "type": item.parsed.type,
        "scope": item.parsed.scope,
        "breaking": item.parsed.breaking,
    }


def render_json(grouped: Mapping[Category, Sequence[ClassifiedCommit]]) -> str:
    """Render grouped commits as a JSON object keyed by category name."""
    payload = {
        category.value: [_entry_dict(item) for item in grouped.get(category) or []]
        for category in Category
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
