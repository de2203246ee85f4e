from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from activity_digest.config import TimeWindow
from activity_digest.errors import ReadmeUpdateError
from activity_digest.formatting import format_long_time
from activity_digest.readme import END_MARKER, START_MARKER, render_activity_block, splice_readme, update_readme

NOW = datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)
WINDOW = TimeWindow(timedelta(hours=24), "Asia/Shanghai")
README = f"# Hi there\n\nIntro text.\n\n{START_MARKER}\nold content\n{END_MARKER}\n\nFooter.\n"


class RenderBlockTests(unittest.TestCase):
    def test_windowed_block(self) -> None:
        block = render_activity_block("A summary.", "BADGES", NOW, WINDOW)
        self.assertEqual(
            block,
            "\n\n## Recent Activity Stats\n\nBADGES\n\nA summary.\n\n"
            "*Last updated: October 19, 2026, 08:30 PM (Shanghai time) *\n\n",
        )

    def test_all_time_block_uses_local_time(self) -> None:
        block = render_activity_block("A summary.", "BADGES", NOW)
        local = format_long_time(NOW.astimezone())
        self.assertIn(f"\n*Last updated: {local} *\n", block)
        self.assertTrue(block.startswith("\n\n## Recent Activity Stats\n\nBADGES\n\nA summary.\n\n"))
        self.assertNotIn("time)", block)


class SpliceReadmeTests(unittest.TestCase):
    def test_replaces_only_marker_region(self) -> None:
        updated = splice_readme(README, "\nNEW\n")
        self.assertEqual(
            updated,
            f"# Hi there\n\nIntro text.\n\n{START_MARKER}\nNEW\n{END_MARKER}\n\nFooter.\n",
        )

    def test_is_idempotent(self) -> None:
        block = render_activity_block("Sum.", "B", NOW, WINDOW)
        once = splice_readme(README, block)
        twice = splice_readme(once, block)
        self.assertEqual(once, twice)
        self.assertTrue(twice.startswith(f"# Hi there\n\nIntro text.\n\n{START_MARKER}"))
        self.assertTrue(twice.endswith(f"{END_MARKER}\n\nFooter.\n"))

    def test_missing_markers(self) -> None:
        for content in ("no markers", START_MARKER, END_MARKER):
            with self.subTest(content=content):
                with self.assertRaises(ReadmeUpdateError):
                    splice_readme(content, "x")

    def test_reversed_markers(self) -> None:
        with self.assertRaises(ReadmeUpdateError):
            splice_readme(f"{END_MARKER}\n{START_MARKER}", "x")

    def test_duplicated_markers(self) -> None:
        for content in (
            f"{START_MARKER}\n{END_MARKER}\n{START_MARKER}\n{END_MARKER}\n",
            f"{START_MARKER}\n{END_MARKER}\n{END_MARKER}\n",
            f"{START_MARKER}\n{START_MARKER}\n{END_MARKER}\n",
        ):
            with self.subTest(content=content):
                with self.assertRaises(ReadmeUpdateError):
                    splice_readme(content, "x")

    def test_project_readme_has_single_marker_pair(self) -> None:
        content = (Path(__file__).resolve().parents[1] / "README.md").read_text(encoding="utf-8")
        self.assertEqual(content.count(START_MARKER), 1)
        self.assertEqual(content.count(END_MARKER), 1)
        updated = splice_readme(content, "\nSUMMARY\n")
        self.assertIn("## Recent activity", updated.split("SUMMARY")[0])


class UpdateReadmeTests(unittest.TestCase):
    def test_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "README.md"
            path.write_text(README, encoding="utf-8")

            result = update_readme(path, "Sum.", "B", window=WINDOW, now=NOW)

            self.assertEqual(path.read_text(encoding="utf-8"), result)
        self.assertIn("\nB\n\nSum.\n", result)
        self.assertNotIn("old content", result)

    def test_missing_markers_leave_file_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "README.md"
            path.write_text("# No markers here\n", encoding="utf-8")

            with self.assertRaises(ReadmeUpdateError):
                update_readme(path, "Sum.", "B", window=WINDOW, now=NOW)

            self.assertEqual(path.read_text(encoding="utf-8"), "# No markers here\n")

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ReadmeUpdateError):
                update_readme(Path(tmp) / "README.md", "Sum.", "B")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
