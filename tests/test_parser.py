"""Tests for PatchParser.

Tests cover:
- Empty and header-less input
- Line classification and old/new line numbering
- Multiple and adjacent hunks
- Header matching rules
- Statelessness
"""

import unittest

from gitgud.core.models import LineKind, HunkHeader
from gitgud.core.parser import PatchParser, parse_patch


def numbers(hunk):
    return [(ln.old_line_number, ln.new_line_number) for ln in hunk]


class TestParseEmptyInput(unittest.TestCase):
    """Tests for inputs that contain no hunks."""

    def test_empty_string_yields_no_hunks(self):
        """Test that parsing an empty string returns an empty ParsedPatch."""
        parsed = parse_patch("")
        self.assertEqual(len(parsed), 0)
        self.assertTrue(parsed.is_empty())

    def test_text_without_headers_yields_no_hunks(self):
        """Test that text without hunk headers returns an empty ParsedPatch."""
        self.assertEqual(len(parse_patch("just some text\nno headers here\n")), 0)

    def test_file_headers_only_yields_no_hunks(self):
        """Test that a diff with file headers but no hunks is empty."""
        patch = (
            "diff --git a/empty.txt b/empty.txt\n"
            "new file mode 100644\n"
            "index 0000000..e69de29\n"
        )
        self.assertEqual(len(parse_patch(patch)), 0)


class TestParseSingleHunk(unittest.TestCase):
    """Tests for single hunk line numbering."""

    def test_all_context_hunk(self):
        """Test that context lines record both counters starting at the header."""
        patch = (
            "@@ -10,3 +10,3 @@\n"
            " line a\n"
            " line b\n"
            " line c\n"
        )
        parsed = parse_patch(patch)

        self.assertEqual(len(parsed), 1)
        hunk = parsed[0]
        self.assertEqual([ln.kind for ln in hunk], [LineKind.CONTEXT] * 3)
        self.assertEqual([ln.text for ln in hunk], ["line a", "line b", "line c"])
        self.assertEqual(numbers(hunk), [(10, 10), (11, 11), (12, 12)])

    def test_mixed_add_remove(self):
        """Test that added and removed lines advance only their own side."""
        patch = (
            "@@ -1,2 +1,3 @@\n"
            " unchanged\n"
            "-removed line\n"
            "+added line 1\n"
            "+added line 2\n"
        )
        hunk = parse_patch(patch)[0]

        self.assertEqual(
            [(ln.kind, ln.text) for ln in hunk],
            [
                (LineKind.CONTEXT, "unchanged"),
                (LineKind.REMOVED, "removed line"),
                (LineKind.ADDED, "added line 1"),
                (LineKind.ADDED, "added line 2"),
            ],
        )
        self.assertEqual(numbers(hunk), [(1, 1), (2, None), (None, 2), (None, 3)])

    def test_text_without_trailing_newline_keeps_last_line(self):
        """Test that the last line is kept when the text has no final newline."""
        hunk = parse_patch("@@ -1,2 +1,2 @@\n a\n b")[0]
        self.assertEqual([ln.text for ln in hunk], ["a", "b"])

    def test_empty_line_is_context_with_empty_text(self):
        """Test that a zero-length line defaults to context."""
        hunk = parse_patch("@@ -4,3 +4,3 @@\n a\n\n b\n")[0]

        self.assertEqual(hunk[1].kind, LineKind.CONTEXT)
        self.assertEqual(hunk[1].text, "")
        self.assertEqual(numbers(hunk), [(4, 4), (5, 5), (6, 6)])

    def test_unknown_prefix_is_context(self):
        """Test that a line with an unexpected first character is context."""
        hunk = parse_patch("@@ -1,1 +1,1 @@\n\\ No newline at end of file\n")[0]
        self.assertEqual(hunk[0].kind, LineKind.CONTEXT)
        self.assertEqual(hunk[0].text, " No newline at end of file")

    def test_text_keeps_leading_whitespace_after_prefix(self):
        """Test that only the one-character prefix is stripped."""
        hunk = parse_patch("@@ -1,1 +1,1 @@\n-    indented\n+\tindented\n")[0]
        self.assertEqual([ln.text for ln in hunk], ["    indented", "\tindented"])

    def test_lines_that_look_like_file_headers_inside_hunk(self):
        """Test that --- and +++ inside a hunk are removed/added lines."""
        hunk = parse_patch("@@ -1,1 +1,1 @@\n--- a\n+++ b\n")[0]
        self.assertEqual([ln.kind for ln in hunk], [LineKind.REMOVED, LineKind.ADDED])
        self.assertEqual([ln.text for ln in hunk], ["-- a", "++ b"])

    def test_added_only_hunk_at_file_start(self):
        """Test a new-file hunk starting at old line 0."""
        hunk = parse_patch("@@ -0,0 +1,2 @@\n+alpha\n+beta\n")[0]
        self.assertEqual(numbers(hunk), [(None, 1), (None, 2)])


class TestParseMultipleHunks(unittest.TestCase):
    """Tests for patches with more than one hunk."""

    PATCH = (
        "diff --git a/hello.txt b/hello.txt\n"
        "index 123..456 100644\n"
        "--- a/hello.txt\n"
        "+++ b/hello.txt\n"
        "@@ -3,3 +3,4 @@ def first():\n"
        " c\n"
        "+c2\n"
        " d\n"
        " e\n"
        "@@ -40,3 +41,2 @@ def second():\n"
        " x\n"
        "-y\n"
        " z\n"
    )

    def test_hunks_in_header_order(self):
        """Test that hunks come back in source order."""
        parsed = parse_patch(self.PATCH)

        self.assertEqual(len(parsed), 2)
        self.assertEqual(parsed[0].header.old_start, 3)
        self.assertEqual(parsed[1].header.old_start, 40)

    def test_counters_are_independent_per_hunk(self):
        """Test that the second hunk starts from its own header."""
        parsed = parse_patch(self.PATCH)

        self.assertEqual(numbers(parsed[0]), [(3, 3), (None, 4), (4, 5), (5, 6)])
        self.assertEqual(numbers(parsed[1]), [(40, 41), (41, None), (42, 42)])

    def test_file_header_lines_are_not_hunk_content(self):
        """Test that lines before the first header are skipped."""
        parsed = parse_patch(self.PATCH)
        self.assertEqual(parsed.total_lines(), 7)

    def test_adjacent_headers_give_empty_hunk(self):
        """Test that a header followed directly by a header materializes empty."""
        patch = (
            "@@ -1,0 +1,0 @@\n"
            "@@ -5,1 +5,1 @@\n"
            " x\n"
        )
        parsed = parse_patch(patch)

        self.assertEqual(len(parsed), 2)
        self.assertEqual(len(parsed[0]), 0)
        self.assertEqual(numbers(parsed[1]), [(5, 5)])

    def test_header_at_end_gives_empty_hunk(self):
        """Test that a trailing header with no content is an empty hunk."""
        parsed = parse_patch("@@ -1,1 +1,1 @@\n a\n@@ -9,0 +9,0 @@\n")
        self.assertEqual([len(h) for h in parsed], [1, 0])

    def test_line_numbers_strictly_increase(self):
        """Test the monotonicity of both recorded counters in every hunk."""
        for hunk in parse_patch(self.PATCH):
            olds = [ln.old_line_number for ln in hunk if ln.old_line_number is not None]
            news = [ln.new_line_number for ln in hunk if ln.new_line_number is not None]
            self.assertEqual(olds, sorted(set(olds)))
            self.assertEqual(news, sorted(set(news)))


class TestLocateHunks(unittest.TestCase):
    """Tests for hunk header recognition."""

    def setUp(self):
        self.parser = PatchParser()

    def test_header_fields_and_position(self):
        """Test that the four integers and the line index are captured."""
        lines = ["--- a/f", "+++ b/f", "@@ -12,7 +13,8 @@ class Foo:"]
        self.assertEqual(self.parser.locate_hunks(lines), [HunkHeader(2, 12, 7, 13, 8)])

    def test_header_without_counts_is_not_recognized(self):
        """Test that headers missing a count field are skipped."""
        self.assertEqual(self.parser.locate_hunks(["@@ -1 +1 @@", "@@ -1,2 +1 @@"]), [])

    def test_header_must_start_the_line(self):
        """Test that an indented header is not a header."""
        self.assertEqual(self.parser.locate_hunks([" @@ -1,1 +1,1 @@"]), [])

    def test_split_lines_drops_terminating_newline_only(self):
        """Test that only the empty element after a final newline is dropped."""
        self.assertEqual(PatchParser.split_lines("a\n\n"), ["a", ""])
        self.assertEqual(PatchParser.split_lines("a"), ["a"])
        self.assertEqual(PatchParser.split_lines(""), [])


class TestParserIsStateless(unittest.TestCase):
    """Tests that parsing has no hidden state."""

    def test_same_input_gives_equal_output(self):
        """Test idempotence across calls and parser instances."""
        patch = "@@ -1,2 +1,2 @@\n-a\n+b\n c\n"
        parser = PatchParser()

        first = parser.parse(patch)
        parser.parse("@@ -100,1 +100,1 @@\n x\n")
        second = parser.parse(patch)

        self.assertEqual(first, second)
        self.assertEqual(first, parse_patch(patch))


if __name__ == "__main__":
    unittest.main()
