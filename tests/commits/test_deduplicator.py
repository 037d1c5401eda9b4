"""Tests for near-duplicate removal."""

import unittest

from changelog_craft.commits.deduplicator import (
    SIMILARITY_THRESHOLD,
    _is_near_duplicate,
    deduplicate,
    levenshtein,
    similarity,
)
from changelog_craft.commits.models import CommitRecord


def _commits(*messages):
    return [CommitRecord(sha=f"{i:040x}", message=m) for i, m in enumerate(messages)]


def _messages(commits):
    return [c.message for c in commits]


class TestEditDistance(unittest.TestCase):
    """Tests for the edit distance and similarity measures."""

    def test_levenshtein(self) -> None:
        """Test known distances in both argument orders."""
        cases = [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("abc", "abc", 0),
            ("flaw", "lawn", 2),
        ]
        for first, second, expected in cases:
            with self.subTest(first=first, second=second):
                self.assertEqual(levenshtein(first, second), expected)
                self.assertEqual(levenshtein(second, first), expected)

    def test_similarity_bounds(self) -> None:
        """Test that similarity stays within ``[0, 1]``."""
        self.assertEqual(similarity("", ""), 1.0)
        self.assertEqual(similarity("abc", "abc"), 1.0)
        self.assertEqual(similarity("abc", "xyz"), 0.0)
        self.assertEqual(similarity("", "abc"), 0.0)
        for first, second in [("fix login", "fix logout"), ("a", "bcdef"), ("same", "Same")]:
            with self.subTest(first=first, second=second):
                value = similarity(first, second)
                self.assertGreaterEqual(value, 0.0)
                self.assertLessEqual(value, 1.0)


class TestLengthShortcut(unittest.TestCase):
    """Tests for the length-based shortcut in front of the edit distance."""

    def test_length_bound_at_threshold_is_distinct(self) -> None:
        """Test a pair whose length bound is exactly the threshold."""
        # 8 vs 10 characters: at most (10 - 2) / 10 similar
        first, second = "abcdefgh", "abcdefghij"
        self.assertEqual(similarity(first, second), SIMILARITY_THRESHOLD)
        self.assertFalse(_is_near_duplicate(first, second))
        self.assertEqual(len(deduplicate(_commits(first, second))), 2)

    def test_length_bound_above_threshold_runs_full_comparison(self) -> None:
        """Test that pairs passing the length bound are still compared fully."""
        self.assertTrue(_is_near_duplicate("abcdefghi", "abcdefghij"))
        # Same lengths, but every character differs
        self.assertFalse(_is_near_duplicate("abcdefghij", "klmnopqrst"))

    def test_shortcut_agrees_with_similarity(self) -> None:
        """Test that the shortcut never changes a decision."""
        words = [
            "",
            "a",
            "fix bug",
            "fix bugs",
            "fix login bug",
            "fix login bug!!",
            "add login page",
            "add logout page",
            "update docs",
            "update the docs",
            "abcdefgh",
            "abcdefghij",
        ]
        for first in words:
            for second in words:
                with self.subTest(first=first, second=second):
                    self.assertEqual(
                        _is_near_duplicate(first, second),
                        similarity(first, second) > SIMILARITY_THRESHOLD,
                    )


class TestDeduplicate(unittest.TestCase):
    """Tests for collapsing near-duplicate commits."""

    def test_keeps_first_of_cluster(self) -> None:
        """Test that the earliest commit of a cluster survives."""
        commits = _commits("Fix login bug", "Fix login bug!!", "Add feature")
        self.assertGreater(similarity("fix login bug", "fix login bug!!"), 0.8)
        self.assertEqual(_messages(deduplicate(commits)), ["Fix login bug", "Add feature"])

    def test_threshold_is_exclusive(self) -> None:
        """Test that a similarity of exactly 0.8 is not a duplicate."""
        # 3 edits over 15 characters: similarity is exactly 0.8
        self.assertEqual(similarity("add login page", "add logout page"), 0.8)
        commits = _commits("Add login page", "Add logout page")
        self.assertEqual(len(deduplicate(commits)), 2)

    def test_compares_lower_cased_summaries_only(self) -> None:
        """Test that case and bodies are ignored."""
        commits = _commits("ADD FEATURE\n\nfirst body", "add feature\n\nsecond body")
        result = deduplicate(commits)
        self.assertEqual(len(result), 1)
        self.assertIs(result[0], commits[0])

    def test_empty_messages_are_duplicates_of_each_other(self) -> None:
        """Test that two empty summaries collapse."""
        self.assertEqual(len(deduplicate(_commits("", ""))), 1)

    def test_idempotent(self) -> None:
        """Test that a second pass removes nothing."""
        commits = _commits(
            "Fix login bug",
            "Fix login bug!!",
            "Add feature",
            "Add features",
            "Update docs",
            "fix login bug",
        )
        once = deduplicate(commits)
        self.assertEqual(deduplicate(once), once)

    def test_order_preserved(self) -> None:
        """Test that surviving commits keep their input order."""
        commits = _commits("Zeta change", "Alpha rewrite", "Middle update")
        self.assertEqual(deduplicate(commits), commits)

    def test_empty_input(self) -> None:
        """Test the empty list."""
        self.assertEqual(deduplicate([]), [])


if __name__ == "__main__":
    unittest.main()
