"""Gitgud core: unified diff hunk parsing."""

from __future__ import annotations

import re
from typing import List, Optional

from .models import LineKind, HunkHeader, DiffLine, Hunk, ParsedPatch, CountCheckResult


class MalformedPatchError(ValueError):
    """A hunk's header counts disagree with its content beyond the allowed drift."""

    def __init__(self, hunk_index: int, header: HunkHeader, expected: tuple, actual: tuple):
        self.hunk_index = hunk_index
        self.header = header
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Hunk {hunk_index + 1} ({header.text()}) declares "
            f"-{expected[0]}/+{expected[1]} lines but contains -{actual[0]}/+{actual[1]}"
        )


class PatchParser:
    """
    Turns unified diff text into a ParsedPatch.

    Stateless: every call works on its own line list, so one instance may be
    shared freely. Lines that are neither hunk headers nor inside a hunk
    (diff --git, index, ---, +++) are skipped.
    """

    RE_HUNK = re.compile(r"^@@ -(\d+),(\d+) \+(\d+),(\d+) @@")
    NO_NEWLINE_PREFIX = "\\"

    def parse(self, patch_text: str) -> ParsedPatch:
        lines = self.split_lines(patch_text)
        return ParsedPatch(hunks=self.materialize(self.locate_hunks(lines), lines))

    @staticmethod
    def split_lines(patch_text: str) -> List[str]:
        lines = patch_text.split("\n")
        # A terminating newline closes the last line; it does not open a new one.
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def locate_hunks(self, lines: List[str]) -> List[HunkHeader]:
        headers: List[HunkHeader] = []
        for position, ln in enumerate(lines):
            m = self.RE_HUNK.match(ln)
            if not m:
                continue
            old_start, old_count, new_start, new_count = (int(g) for g in m.groups())
            headers.append(HunkHeader(position, old_start, old_count, new_start, new_count))
        return headers

    def materialize(self, headers: List[HunkHeader], lines: List[str]) -> List[Hunk]:
        hunks: List[Hunk] = []
        for i, header in enumerate(headers):
            end = headers[i + 1].position if i + 1 < len(headers) else len(lines)
            hunks.append(self._materialize_hunk(header, lines[header.position + 1:end]))
        return hunks

    def _materialize_hunk(self, header: HunkHeader, body: List[str]) -> Hunk:
        old_ln = header.old_start - 1
        new_ln = header.new_start - 1
        out: List[DiffLine] = []
        markers = 0
        for ln in body:
            if ln.startswith(self.NO_NEWLINE_PREFIX):
                markers += 1
            kind = LineKind.from_prefix(ln)
            old_no: Optional[int] = None
            new_no: Optional[int] = None
            if kind != LineKind.ADDED:
                old_ln += 1
                old_no = old_ln
            if kind != LineKind.REMOVED:
                new_ln += 1
                new_no = new_ln
            out.append(DiffLine(kind=kind, text=ln[1:], old_line_number=old_no, new_line_number=new_no))
        return Hunk(header=header, lines=out, no_newline_markers=markers)


def parse_patch(patch_text: str) -> ParsedPatch:
    return PatchParser().parse(patch_text)


def check_hunk_counts(parsed: ParsedPatch, tolerance: int = 0) -> CountCheckResult:
    """Compare each hunk's declared old/new counts with the lines it actually holds."""
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    result = CountCheckResult(ok=True, tolerance=tolerance)
    for idx, h in enumerate(parsed.hunks):
        actual_old = h.old_side_length() - h.no_newline_markers
        actual_new = h.new_side_length() - h.no_newline_markers
        old_drift = abs(h.header.old_count - actual_old)
        new_drift = abs(h.header.new_count - actual_new)
        ok = old_drift <= tolerance and new_drift <= tolerance
        result.per_hunk.append({
            "hunk_index": idx,
            "header": h.header.text(),
            "expected_old": h.header.old_count,
            "expected_new": h.header.new_count,
            "actual_old": actual_old,
            "actual_new": actual_new,
            "old_drift": old_drift,
            "new_drift": new_drift,
            "ok": ok,
        })
        if not ok:
            result.ok = False
            result.add_log("WARN", "Hunk line counts do not match header.", hunk=idx + 1,
                           header=h.header.text(), old_drift=old_drift, new_drift=new_drift)

    if result.ok:
        result.add_log("INFO", "Hunk line counts match headers.", hunks=len(parsed.hunks), tolerance=tolerance)
    return result


def parse_strict(patch_text: str, tolerance: int = 0) -> ParsedPatch:
    parsed = parse_patch(patch_text)
    check = check_hunk_counts(parsed, tolerance)
    for row in check.failures():
        idx = row["hunk_index"]
        raise MalformedPatchError(
            idx,
            parsed.hunks[idx].header,
            (row["expected_old"], row["expected_new"]),
            (row["actual_old"], row["actual_new"]),
        )
    return parsed
