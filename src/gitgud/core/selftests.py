"""Gitgud core: in-process self tests."""

from __future__ import annotations

from typing import Tuple

from .models import LineKind
from .normalizer import PatchTextNormalizer
from .parser import PatchParser, MalformedPatchError, check_hunk_counts, parse_strict
from .rows import build_rows, KIND_ELISION
from .state import RepoState
from .status import FileStatus, StatusFlag, split_by_stage


class GitgudSelfTests:
    """
    In-process self tests using embedded patch strings.
    """

    @staticmethod
    def run() -> Tuple[bool, str]:
        normalizer = PatchTextNormalizer()
        parser = PatchParser()

        report_lines = []
        ok = True

        def fail(msg: str) -> None:
            nonlocal ok
            ok = False
            report_lines.append("FAIL: " + msg)

        def pass_(msg: str) -> None:
            report_lines.append("OK: " + msg)

        # 1) Empty and header-less input
        if len(parser.parse("")) != 0 or len(parser.parse("just some text\nno headers here\n")) != 0:
            fail("Input without hunk headers produced hunks.")
        else:
            pass_("Input without hunk headers.")

        # 2) Git diff with file headers + mixed hunk
        patch2 = (
            "diff --git a/hello.txt b/hello.txt\n"
            "index 123..456 100644\n"
            "--- a/hello.txt\n"
            "+++ b/hello.txt\n"
            "@@ -1,2 +1,3 @@ def main():\n"
            " unchanged\n"
            "-removed line\n"
            "+added line 1\n"
            "+added line 2\n"
        )
        ps2 = parser.parse(patch2)
        got = [(ln.kind, ln.old_line_number, ln.new_line_number) for ln in ps2[0]] if len(ps2) == 1 else []
        want = [
            (LineKind.CONTEXT, 1, 1),
            (LineKind.REMOVED, 2, None),
            (LineKind.ADDED, None, 2),
            (LineKind.ADDED, None, 3),
        ]
        if got != want:
            fail("Mixed hunk line numbers incorrect.")
        else:
            pass_("Mixed hunk line numbers.")

        # 3) Two hunks with independent counters, elision markers around them
        patch3 = (
            "@@ -3,2 +3,2 @@\n"
            " c\n"
            "-d\n"
            "+D\n"
            "@@ -20,1 +20,2 @@\n"
            " t\n"
            "+u\n"
        )
        ps3 = parser.parse(patch3)
        if len(ps3) != 2 or ps3[1][0].old_line_number != 20 or ps3[1][1].new_line_number != 21:
            fail("Second hunk counters incorrect.")
        else:
            pass_("Independent hunk counters.")
        rows = build_rows(ps3, line_count=30)
        elisions = [i for i, r in enumerate(rows) if r["kind"] == KIND_ELISION]
        if elisions != [0, 4, len(rows) - 1]:
            fail("Elision markers misplaced.")
        else:
            pass_("Elision markers.")

        # 4) Adjacent headers give an empty hunk
        ps4 = parser.parse("@@ -1,0 +1,0 @@\n@@ -5,1 +5,1 @@\n x\n")
        if len(ps4) != 2 or len(ps4[0]) != 0 or len(ps4[1]) != 1:
            fail("Adjacent hunk headers handled incorrectly.")
        else:
            pass_("Adjacent hunk headers.")

        # 5) Count checking
        if not check_hunk_counts(ps2).ok:
            fail("Consistent hunk flagged by count check.")
        else:
            try:
                parse_strict("@@ -1,5 +1,5 @@\n a\n")
                fail("Count drift not reported.")
            except MalformedPatchError:
                pass_("Hunk count checking.")

        # 6) CRLF text loaded from disk
        text = normalizer.normalize("\ufeff@@ -1,1 +1,1 @@\r\n-a\r\n+b\r\n")
        ps6 = parser.parse(text)
        if len(ps6) != 1 or [ln.text for ln in ps6[0]] != ["a", "b"]:
            fail("Normalized CRLF patch parsed incorrectly.")
        else:
            pass_("CRLF normalization.")

        # 7) Staged / unstaged split and title
        files = [
            FileStatus("a.txt", StatusFlag.WT_MODIFIED),
            FileStatus("b.txt", StatusFlag.INDEX_NEW),
            FileStatus("c.txt", StatusFlag.INDEX_MODIFIED | StatusFlag.WT_MODIFIED),
        ]
        unstaged, staged = split_by_stage(files)
        if [f.path for f in unstaged] != ["a.txt", "c.txt"] or [f.path for f in staged] != ["b.txt", "c.txt"]:
            fail("Staged/unstaged split incorrect.")
        else:
            pass_("Staged/unstaged split.")
        if RepoState().update_repo("/src/repo", "").title() != "repo (Branch does not exist yet)":
            fail("Window title incorrect.")
        else:
            pass_("Window title.")

        return ok, "\n".join(report_lines)
