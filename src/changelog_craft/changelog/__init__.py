"""
Changelog drafts and model prompts.

:mod:`changelog_craft.changelog.prompt_builder` builds the input of a
text-generation model from categorized commits, and
:mod:`changelog_craft.changelog.renderer` renders the same commits as a
plain Markdown or JSON draft.
"""

from .prompt_builder import (  # noqa: F401
    CHANGELOG_SYSTEM_PROMPT,
    TEMPLATE_TYPES,
    build_changelog_user_prompt,
)
from .renderer import render_json, render_markdown  # noqa: F401
