"""
Parsing of commit messages into structured fields.

Messages following the Conventional Commits header form
``type(scope)!: description`` are split into their parts. Anything else
is still accepted: the whole first line becomes the description and the
type and scope are left empty. Parsing never fails.
"""

from __future__ import annotations

import re
from typing import List, Optional

from changelog_craft.commits.models import ParsedMessage


BREAKING_CHANGE_MARKER = "BREAKING CHANGE"

# type, optional (scope), optional !, then description after the colon.
# The type is ASCII word characters only; \s still matches any whitespace.
CONVENTIONAL_HEADER_RE = re.compile(r"^([A-Za-z0-9_]+)(?:\(([^)]+)\))?(!)?:\s*(.+)$")

_DISPLAY_PREFIX_RE = re.compile(
    r"^(add|update|fix|remove|delete|create|implement):\s*", re.IGNORECASE
)
_ISSUE_REFERENCE_RE = re.compile(r"#(\d+)")


def parse_message(message: str) -> ParsedMessage:
    """Parse a commit message.

    Parameters
    ----------
    message : str
        The full commit message. May be empty or span several lines.

    Returns
    -------
    ParsedMessage
        The structured record. ``breaking`` is set when the message
        contains ``BREAKING CHANGE`` or the header carries ``!:``.
    """
    lines = message.split("\n")
    header = lines[0].rstrip("\r")
    body = "\n".join(lines[1:]).strip() or None

    breaking = BREAKING_CHANGE_MARKER in message or "!:" in header

    match = CONVENTIONAL_HEADER_RE.match(header)
    if match:
        return ParsedMessage(
            type=match.group(1),
            scope=match.group(2) or None,
            description=match.group(4),
            body=body,
            breaking=breaking or bool(match.group(3)),
            raw=message,
        )

    return ParsedMessage(
        type=None,
        scope=None,
        description=header,
        body=body,
        breaking=breaking,
        raw=message,
    )


def get_commit_summary(message: str) -> str:
    """Return the first line of a commit message, stripped."""
    return message.split("\n")[0].strip()


def get_commit_body(message: str) -> Optional[str]:
    """Return everything after the first line, or ``None`` if blank."""
    lines = message.split("\n")
    if len(lines) <= 1:
        return None
    return "\n".join(lines[1:]).strip() or None


def clean_commit_message(message: str) -> str:
    """Turn a commit message into a single display sentence.

    The conventional prefix and a leading verb label such as ``fix:`` are
    removed, the first letter is capitalised and a full stop is added
    unless the text already ends in punctuation.
    """
    cleaned = parse_message(message).description
    cleaned = _DISPLAY_PREFIX_RE.sub("", cleaned, count=1)
    cleaned = cleaned[:1].upper() + cleaned[1:]
    if not cleaned.endswith((".", "!", "?")):
        cleaned += "."
    return cleaned


def extract_issue_references(message: str) -> List[int]:
    """Return the numbers of all ``#123`` style references, in order."""
    return [int(number) for number in _ISSUE_REFERENCE_RE.findall(message)]
