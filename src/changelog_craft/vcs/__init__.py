"""
Commit sources.

This package contains clients that produce the commit history a
changelog is drafted from: a local Git repository read through the
``git`` executable, and a hosted repository read through the GitHub
REST API. Both return lists of
:class:`~changelog_craft.commits.models.CommitRecord`, newest first.
"""

from .date_range import DATE_RANGE_PRESETS, get_date_range_preset  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
from .github_client import GitHubClient, GitHubError, parse_full_name  # noqa: F401
