import subprocess
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from changelog_craft.commits.models import CommitRecord
from changelog_craft.vcs.git_client import GitClient, GitError, parse_log_output


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


LOG_OUTPUT = (
    "aaa\x1fp1 p2\x1fAda\x1f2024-01-02T03:04:05+00:00\x1fMerge branch 'dev'\n\n\x1e\n"
    "bbb\x1fp0\x1fBob\x1f2024-01-01T00:00:00+00:00\x1ffeat: add x\n\nbody line\n\x1e\n"
    "ccc\x1f\x1fCy\x1f2023-12-31T00:00:00+00:00\x1fInitial commit\n\x1e\n"
)


class TestGitClient(unittest.TestCase):
    def test_get_commits_parses_log(self) -> None:
        """Test reading commits from ``git log`` output."""
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(returncode=0, stdout=LOG_OUTPUT, stderr="")

        with patch.object(GitClient, "_run", autospec=True) as mock_run:
            mock_run.side_effect = fake_run
            client = GitClient(Path("/repo"))
            since = datetime(2024, 1, 1, tzinfo=timezone.utc)
            commits = client.get_commits(since=since, max_count=5)

        self.assertEqual(len(commits), 3)
        self.assertEqual(
            commits[0],
            CommitRecord(
                sha="aaa",
                message="Merge branch 'dev'",
                author_name="Ada",
                author_date="2024-01-02T03:04:05+00:00",
                parent_shas=("p1", "p2"),
            ),
        )
        self.assertEqual(commits[1].message, "feat: add x\n\nbody line")
        self.assertEqual(commits[2].parent_shas, ())
        args = calls[0]
        self.assertEqual(args[0], "log")
        self.assertIn("--max-count=5", args)
        self.assertIn("--since=2024-01-01T00:00:00+00:00", args)
        self.assertFalse(any(a.startswith("--until=") for a in args))

    def test_parse_log_output_skips_malformed_records(self) -> None:
        """Test that malformed records are skipped."""
        self.assertEqual(parse_log_output(""), [])
        self.assertEqual(parse_log_output("garbage\x1e\n"), [])

    def test_run_raises_on_failure(self) -> None:
        """Test that a failing git command raises GitError."""
        failed = DummyProc(returncode=128, stdout="", stderr="fatal: bad revision\n")
        with patch("changelog_craft.vcs.git_client.subprocess.run", return_value=failed):
            client = GitClient(Path("/repo"))
            with self.assertRaises(GitError) as ctx:
                client.get_commits()
        self.assertEqual(str(ctx.exception), "fatal: bad revision")

    def test_run_raises_when_git_missing(self) -> None:
        """Test that a missing git binary raises GitError."""
        with patch(
            "changelog_craft.vcs.git_client.subprocess.run",
            side_effect=FileNotFoundError("git"),
        ):
            client = GitClient(Path("/repo"))
            with self.assertRaises(GitError):
                client.get_commits()

    def test_run_passes_repo_root(self) -> None:
        """Test that commands run in the repository root."""
        ok = DummyProc(returncode=0, stdout="", stderr="")
        with patch("changelog_craft.vcs.git_client.subprocess.run", return_value=ok) as mock_run:
            GitClient(Path("/repo")).get_commits()
        self.assertEqual(mock_run.call_args.kwargs["cwd"], Path("/repo"))
        self.assertEqual(mock_run.call_args.args[0][0], "git")
        self.assertEqual(mock_run.call_args.kwargs["stdout"], subprocess.PIPE)

    def test_find_repo_root_walks_up(self) -> None:
        """Test that the root is found from a subdirectory."""
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".git").mkdir()
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            self.assertEqual(GitClient.find_repo_root(nested), root.resolve())

    def test_repo_name(self) -> None:
        """Test that the repository name is the root directory name."""
        self.assertEqual(GitClient(Path("/work/demo")).get_repo_name(), "demo")


if __name__ == "__main__":
    unittest.main()
