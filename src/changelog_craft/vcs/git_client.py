"""
Git client implementation for changelog_craft.

This module reads the commit history of a local Git repository. It is
intentionally minimal and only implements what the CLI needs. All
subprocess calls go through :meth:`GitClient._run` so that unit tests can
mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from changelog_craft.commits.models import CommitRecord


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings when the CLI has
# not configured logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Unit and record separators keep multi-line messages intact.
FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"
LOG_FORMAT = FIELD_SEPARATOR.join(["%H", "%P", "%an", "%aI", "%B"]) + RECORD_SEPARATOR


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for reading commits from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command cannot be started, or exits with a non-zero
            status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Failed to run git: %s", e)
            raise GitError(f"Failed to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_repo_name(self) -> str:
        return self.repo_root.name

    def get_commits(
        self,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        max_count: int = 100,
    ) -> List[CommitRecord]:
        """Get commits of the current branch, newest first.

        Parameters
        ----------
        since, until : datetime, optional
            Only include commits whose committer date falls inside this
            window, as filtered by ``git log --since/--until``.
        max_count : int, optional
            Maximum number of commits to return. Defaults to 100.

        Returns
        -------
        List[CommitRecord]
            The commits in ``git log`` order.

        Raises
        ------
        GitError
            If the git log command fails.
        """
        args = ["log", f"--format={LOG_FORMAT}", f"--max-count={max_count}"]
        if since is not None:
            args.append(f"--since={since.isoformat()}")
        if until is not None:
            args.append(f"--until={until.isoformat()}")
        result = self._run(args, check=True)
        return parse_log_output(result.stdout)


def parse_log_output(output: str) -> List[CommitRecord]:
    """Parse ``git log`` output produced with :data:`LOG_FORMAT`."""
    commits = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.lstrip("\n")
        if not record.strip():
            continue
        fields = record.split(FIELD_SEPARATOR, 4)
        if len(fields) != 5:
            logger.debug("Skipping malformed git log record: %r", record)
            continue
        sha, parents, author_name, author_date, message = fields
        commits.append(
            CommitRecord(
                sha=sha,
                message=message.rstrip("\n"),
                author_name=author_name,
                author_date=author_date,
                parent_shas=tuple(parents.split()),
            )
        )
    return commits
