"""
Command line interface for the changelog_craft tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changelog-craft`` command. It orchestrates
configuration loading, commit fetching (local Git repository or GitHub),
the classification pipeline and the output of the draft. Status
messages go to stderr so that the document on stdout can be piped.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

import click

from changelog_craft import __version__
from changelog_craft.changelog.prompt_builder import (
    CHANGELOG_SYSTEM_PROMPT,
    TEMPLATE_TYPES,
    build_changelog_user_prompt,
    estimate_token_count,
)
from changelog_craft.changelog.renderer import render_json, render_markdown
from changelog_craft.commits.models import CATEGORY_METADATA, DISPLAY_ORDER, CommitRecord
from changelog_craft.commits.pipeline import PipelineResult, run_pipeline
from changelog_craft.config.loader import ConfigError, load_config
from changelog_craft.vcs.date_range import DATE_RANGE_PRESETS, get_date_range_preset
from changelog_craft.vcs.git_client import GitClient, GitError
from changelog_craft.vcs.github_client import GitHubClient, GitHubError, parse_full_name

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_NO_COMMITS = 4
EXIT_CONFIG_ERROR = 5
EXIT_SOURCE_FAILURE = 6

OUTPUT_FORMATS = ("markdown", "json", "prompt")


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...", err=True)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)", err=True)
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}", err=True)
    click.echo(f"Step {step_num}/{total_steps}: {message}", err=True)
    click.echo(f"{'='*60}", err=True)


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def print_warning(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=True)


def print_error(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def fetch_commits(
    config: dict,
    repo: Optional[Path],
    github: Optional[str],
    since,
    until,
    limit: int,
) -> Tuple[str, List[CommitRecord]]:
    """Fetch commits from GitHub or the local repository.

    Returns
    -------
    Tuple[str, List[CommitRecord]]
        The repository name and its commits, newest first.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_NO_REPO if no local repository is found, or
        EXIT_SOURCE_FAILURE if fetching fails.
    """
    if github:
        try:
            owner, name = parse_full_name(github)
        except ValueError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_INVALID_USAGE)
        client = GitHubClient(
            token=config.get("github_token"),
            api_url=config["github_api_url"],
            request_timeout=float(config["request_timeout"]),
        )
        try:
            with ProgressIndicator(f"Fetching commits of {owner}/{name} from GitHub"):
                commits = client.get_all_commits(owner, name, since, until, max_commits=limit)
        except GitHubError as exc:
            print_error(f"GitHub error: {exc}")
            raise click.exceptions.Exit(EXIT_SOURCE_FAILURE)
        return name, commits

    start = repo if repo is not None else Path.cwd()
    repo_root = GitClient.find_repo_root(start)
    if repo_root is None:
        print_error(f"No Git repository found at {start} or its parent directories.")
        raise click.exceptions.Exit(EXIT_NO_REPO)
    print_success(f"Found Git repository at: {repo_root}")

    client = GitClient(repo_root)
    try:
        with ProgressIndicator("Reading commit history"):
            commits = client.get_commits(since=since, until=until, max_count=limit)
    except GitError as exc:
        print_error(f"Git error: {exc}")
        raise click.exceptions.Exit(EXIT_SOURCE_FAILURE)
    return client.get_repo_name(), commits


def print_report(result: PipelineResult) -> None:
    """Print what the pipeline kept and dropped."""
    print_info(f"Commits fetched: {result.total}", indent=1)
    print_info(f"Excluded as noise: {result.excluded} ({_plural(result.merges, 'merge')})", indent=1)
    print_info(f"Near-duplicates dropped: {result.duplicates}", indent=1)
    grouped = result.grouped
    for category in DISPLAY_ORDER:
        if grouped[category]:
            print_info(f"{CATEGORY_METADATA[category].label}: {len(grouped[category])}", indent=1)


def render_output(
    output_format: str,
    result: PipelineResult,
    repo_name: str,
    since,
    until,
    template_type: str,
) -> str:
    if output_format == "json":
        return render_json(result.grouped) + "\n"
    if output_format == "prompt":
        user_prompt = build_changelog_user_prompt(
            repo_name, result.grouped, since, until, template_type
        )
        tokens = estimate_token_count(CHANGELOG_SYSTEM_PROMPT + user_prompt)
        print_info(f"Estimated prompt size: ~{tokens} tokens", indent=1)
        return (
            "### System prompt\n\n"
            f"{CHANGELOG_SYSTEM_PROMPT}\n\n"
            "### User prompt\n\n"
            f"{user_prompt}\n"
        )
    return render_markdown(result.grouped, title=f"Changelog - {repo_name}")


@click.command()
@click.option(
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Local repository to read (defaults to the current directory).",
)
@click.option("--github", metavar="OWNER/REPO", help="Read commits from a GitHub repository instead.")
@click.option("--range", "date_range", type=click.Choice(DATE_RANGE_PRESETS), help="Date window of the changelog.")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of commits to fetch.")
@click.option("--exclude", "exclude", multiple=True, metavar="PATTERN", help="Extra noise pattern (repeatable).")
@click.option("--no-dedup", "no_dedup", is_flag=True, help="Keep near-duplicate commits.")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default="markdown", show_default=True, help="Output kind.")
@click.option("--template", "template_type", type=click.Choice(TEMPLATE_TYPES), help="Changelog style used in the prompt.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Write the output to a file instead of stdout.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog-craft")
def main(
    repo: Optional[Path],
    github: Optional[str],
    date_range: Optional[str],
    limit: Optional[int],
    exclude: Tuple[str, ...],
    no_dedup: bool,
    output_format: str,
    template_type: Optional[str],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """📜 Draft a categorized changelog from a repository's commit history.

    Commits are parsed, noise such as merges and typo fixes is dropped,
    near-duplicates are collapsed, and the rest is grouped into
    changelog categories.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)
    total_steps = 4
    current_step = 0

    try:
        # Step 1: Load configuration
        current_step += 1
        print_step(current_step, total_steps, "Loading Configuration")
        try:
            config = load_config()
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        date_range = date_range or config["date_range"]
        limit = limit or config["commit_limit"]
        template_type = template_type or config["template_type"]
        exclude_patterns = list(config["exclude_patterns"]) + list(exclude)
        dedup = config["dedup"] and not no_dedup
        since, until = get_date_range_preset(date_range)
        print_success("Configuration loaded")
        print_info(f"Date range: {date_range} ({since:%Y-%m-%d} to {until:%Y-%m-%d})", indent=1)
        logger.debug("Effective settings: limit=%s dedup=%s exclude=%s", limit, dedup, exclude_patterns)

        # Step 2: Fetch commits
        current_step += 1
        print_step(current_step, total_steps, "Fetching Commits")
        repo_name, commits = fetch_commits(config, repo, github, since, until, limit)
        if not commits:
            print_warning("No commits found in the specified date range.")
            raise click.exceptions.Exit(EXIT_NO_COMMITS)
        print_success(f"Fetched {_plural(len(commits), 'commit')}")

        # Step 3: Classify
        current_step += 1
        print_step(current_step, total_steps, "Classifying Commits")
        result = run_pipeline(commits, exclude_patterns=exclude_patterns, dedup=dedup)
        print_report(result)
        if not result.classified:
            print_warning("Every commit was filtered out as noise; nothing to report.")
            raise click.exceptions.Exit(EXIT_NO_COMMITS)

        # Step 4: Output
        current_step += 1
        print_step(current_step, total_steps, "Writing Output")
        document = render_output(output_format, result, repo_name, since, until, template_type)
        if output is not None:
            output.write_text(document, encoding="utf-8")
            print_success(f"Wrote {output_format} output to {output}")
        else:
            click.echo(document, nl=False)

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
