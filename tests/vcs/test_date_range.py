import unittest
from datetime import datetime, timedelta, timezone

from changelog_craft.vcs.date_range import DATE_RANGE_PRESETS, get_date_range_preset


class TestDateRange(unittest.TestCase):
    def test_presets(self) -> None:
        """Test the length of each preset window."""
        now = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)
        for preset, days in (("7days", 7), ("30days", 30), ("90days", 90)):
            with self.subTest(preset=preset):
                since, until = get_date_range_preset(preset, now=now)
                self.assertEqual(until, now)
                self.assertEqual(until - since, timedelta(days=days))

    def test_default_now_is_utc(self) -> None:
        """Test that the window ends now in UTC."""
        since, until = get_date_range_preset("7days")
        self.assertEqual(until.tzinfo, timezone.utc)
        self.assertLess(since, until)

    def test_unknown_preset(self) -> None:
        """Test that unknown presets are rejected."""
        with self.assertRaises(ValueError):
            get_date_range_preset("1year")
        self.assertEqual(DATE_RANGE_PRESETS, ("7days", "30days", "90days"))


if __name__ == "__main__":
    unittest.main()
