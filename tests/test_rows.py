"""Tests for display row building and elision markers."""

import unittest

from gitgud.core.parser import parse_patch
from gitgud.core.rows import build_rows, KIND_ELISION, KIND_ADD, KIND_DEL, KIND_CONTEXT


def kinds(rows):
    return [r["kind"] for r in rows]


class TestBuildRows(unittest.TestCase):
    """Tests for build_rows."""

    def test_empty_patch_has_no_rows(self):
        """Test that an empty ParsedPatch renders nothing."""
        self.assertEqual(build_rows(parse_patch(""), line_count=10), [])

    def test_hunk_covering_whole_file_has_no_markers(self):
        """Test that a hunk from line 1 to the last line has no elision."""
        rows = build_rows(parse_patch("@@ -1,2 +1,2 @@\n a\n-b\n+B\n"), line_count=2)

        self.assertEqual(kinds(rows), [KIND_CONTEXT, KIND_DEL, KIND_ADD])
        self.assertEqual([(r["old_no"], r["new_no"]) for r in rows], [("1", "1"), ("2", ""), ("", "2")])
        self.assertEqual([r["marker"] for r in rows], [" ", "-", "+"])

    def test_leading_and_trailing_markers(self):
        """Test markers before a hunk past line 1 and after a hunk short of the end."""
        rows = build_rows(parse_patch("@@ -10,3 +10,3 @@\n a\n b\n c\n"), line_count=40)

        self.assertEqual(kinds(rows), [KIND_ELISION] + [KIND_CONTEXT] * 3 + [KIND_ELISION])
        self.assertEqual(rows[0]["old_no"], "...")
        self.assertEqual(rows[-1]["new_no"], "...")

    def test_marker_between_hunks(self):
        """Test that a later hunk starting past line 1 gets its own marker."""
        patch = "@@ -1,1 +1,1 @@\n a\n@@ -20,1 +20,1 @@\n t\n"
        rows = build_rows(parse_patch(patch), line_count=20)

        self.assertEqual(kinds(rows), [KIND_CONTEXT, KIND_ELISION, KIND_CONTEXT])
        self.assertEqual(rows[1]["hunk_index"], 1)

    def test_no_trailing_marker_when_last_line_reaches_line_count(self):
        """Test that the trailing marker compares against line_count."""
        rows = build_rows(parse_patch("@@ -1,1 +1,2 @@\n a\n+b\n"), line_count=2)
        self.assertNotIn(KIND_ELISION, kinds(rows))

    def test_trailing_removed_line_uses_new_side_position(self):
        """Test that a final removal keeps the previous new-side position."""
        rows = build_rows(parse_patch("@@ -1,2 +1,1 @@\n a\n-b\n"), line_count=1)
        self.assertNotIn(KIND_ELISION, kinds(rows))

    def test_leading_marker_when_first_line_is_removed(self):
        """Test that a hunk opening with a removal at line 2 still hides line 1."""
        rows = build_rows(parse_patch("@@ -2,1 +2,1 @@\n-b\n+B\n"), line_count=2)

        self.assertEqual(kinds(rows), [KIND_ELISION, KIND_DEL, KIND_ADD])
        self.assertEqual([(r["old_no"], r["new_no"]) for r in rows[1:]], [("2", ""), ("", "2")])

    def test_removed_first_line_at_file_start(self):
        """Test that a removal at line 1 does not produce a leading marker."""
        rows = build_rows(parse_patch("@@ -1,1 +0,0 @@\n-gone\n"), line_count=0)
        self.assertEqual(kinds(rows), [KIND_DEL])

    def test_empty_hunks_are_skipped(self):
        """Test that a zero-line hunk renders nothing and no trailing marker."""
        rows = build_rows(parse_patch("@@ -1,1 +1,1 @@\n a\n@@ -9,0 +9,0 @@\n"), line_count=50)
        self.assertEqual(kinds(rows), [KIND_CONTEXT])

    def test_markers_can_be_disabled(self):
        """Test that show_elision=False suppresses markers."""
        rows = build_rows(parse_patch("@@ -10,1 +10,1 @@\n a\n"), line_count=40, show_elision=False)
        self.assertEqual(kinds(rows), [KIND_CONTEXT])


class TestNewSideSpan(unittest.TestCase):
    """Tests for Hunk.new_side_span."""

    def test_span_of_mixed_hunk(self):
        """Test that first skips a leading removal and uses the first new-side number."""
        hunk = parse_patch("@@ -5,2 +7,2 @@\n-x\n+y\n z\n")[0]
        self.assertEqual(hunk.new_side_span(), (7, 8))

    def test_span_of_removed_only_hunk(self):
        """Test that a hunk of removals falls back to new_start."""
        hunk = parse_patch("@@ -5,2 +4,0 @@\n-x\n-y\n")[0]
        self.assertEqual(hunk.new_side_span(), (4, 3))

    def test_span_of_empty_hunk(self):
        """Test that an empty hunk has no span."""
        self.assertEqual(parse_patch("@@ -1,0 +1,0 @@\n")[0].new_side_span(), (None, None))


if __name__ == "__main__":
    unittest.main()
