"""
Client for reading commit history from the GitHub REST API.

This client wraps HTTP requests to the ``/repos/{owner}/{repo}/commits``
endpoint and converts the results into :class:`CommitRecord` values. On
error conditions (HTTP errors, timeouts, malformed bodies) a
:class:`GitHubError` with a user-facing message is raised. Requests are
not retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import requests

from changelog_craft.commits.models import CommitRecord


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "ChangelogCraft/1.0"
PER_PAGE = 100


class GitHubError(Exception):
    """Raised when communication with the GitHub API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def parse_full_name(full_name: str) -> Tuple[str, str]:
    """Split ``"owner/repo"`` into its two parts.

    Raises
    ------
    ValueError
        If either part is missing.
    """
    parts = full_name.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid repository full name: {full_name}")
    return parts[0], parts[1]


def commit_from_api(data: Dict[str, Any]) -> CommitRecord:
    """Convert one item of the commits endpoint into a :class:`CommitRecord`."""
    details = data.get("commit") or {}
    author = details.get("author") or {}
    return CommitRecord(
        sha=data.get("sha", ""),
        message=details.get("message", ""),
        author_name=author.get("name") or "",
        author_date=author.get("date") or "",
        parent_shas=tuple(p.get("sha", "") for p in data.get("parents") or []),
    )


@dataclass
class GitHubClient:
    """Client for the GitHub commits API.

    Parameters
    ----------
    token : str, optional
        Personal access token. Public repositories work without one, at
        a much lower rate limit.
    api_url : str, optional
        Base URL of the API. Defaults to ``https://api.github.com``.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. Defaults to 30 seconds.
    """

    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _error_for_response(self, response: Any, context: str) -> GitHubError:
        status = response.status_code
        if status == 401:
            message = "GitHub authentication failed. Check your access token."
        elif status == 403:
            headers = response.headers or {}
            if headers.get("X-RateLimit-Remaining") == "0":
                reset = headers.get("X-RateLimit-Reset")
                try:
                    reset_at = datetime.fromtimestamp(int(reset), tz=timezone.utc)
                    message = (
                        "GitHub API rate limit exceeded. Resets at "
                        f"{reset_at.strftime('%H:%M:%S')} UTC"
                    )
                except (TypeError, ValueError):
                    message = "GitHub API rate limit exceeded."
            else:
                message = "Access forbidden. Check repository permissions."
        elif status == 404:
            message = "Repository not found or you do not have access."
        elif status == 422:
            message = "Invalid request. Please check your input."
        elif status >= 500:
            message = "GitHub service is temporarily unavailable. Please try again later."
        else:
            message = f"{context}: GitHub returned status {status}"
        logger.error("%s: status %s: %s", context, status, response.text)
        return GitHubError(message, status_code=status)

    def get_commits(
        self,
        owner: str,
        repo: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        per_page: int = PER_PAGE,
        page: int = 1,
    ) -> List[CommitRecord]:
        """Fetch one page of commits, newest first.

        Raises
        ------
        GitHubError
            If the request fails or the server returns an error.
        """
        context = f"Failed to fetch commits for {owner}/{repo}"
        params: Dict[str, Any] = {"per_page": per_page, "page": page}
        if since is not None:
            params["since"] = since.isoformat()
        if until is not None:
            params["until"] = until.isoformat()
        url = f"{self.api_url.rstrip('/')}/repos/{owner}/{repo}/commits"
        logger.debug("Requesting %s with params: %s", url, params)
        try:
            response = requests.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to connect to GitHub: %s", exc)
            raise GitHubError(f"{context}: {exc}") from exc
        if response.status_code != 200:
            raise self._error_for_response(response, context)
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Failed to parse GitHub response: %s", exc)
            raise GitHubError("Failed to parse GitHub response") from exc
        if not isinstance(data, list):
            raise GitHubError("Unexpected response structure from GitHub")
        return [commit_from_api(item) for item in data]

    def get_all_commits(
        self,
        owner: str,
        repo: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        max_commits: int = 100,
    ) -> List[CommitRecord]:
        """Fetch commits across pages until ``max_commits`` are collected."""
        all_commits: List[CommitRecord] = []
        page = 1
        while len(all_commits) < max_commits:
            commits = self.get_commits(owner, repo, since, until, per_page=PER_PAGE, page=page)
            if not commits:
                break
            all_commits.extend(commits)
            if len(commits) < PER_PAGE:
                break
            page += 1
        logger.debug("Fetched %d commits for %s/%s", len(all_commits), owner, repo)
        return all_commits[:max_commits]
