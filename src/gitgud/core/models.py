"""Gitgud core: shared data models."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Dict, Any, Iterator, Optional


class LineKind(str, Enum):
    ADDED = "+"
    REMOVED = "-"
    CONTEXT = " "

    @classmethod
    def from_prefix(cls, line: str) -> "LineKind":
        # Anything that is not "+" or "-" (including an empty line) is context.
        if line.startswith("+"):
            return cls.ADDED
        if line.startswith("-"):
            return cls.REMOVED
        return cls.CONTEXT


@dataclass(frozen=True)
class HunkHeader:
    position: int  # index of the header line in the patch lines
    old_start: int
    old_count: int
    new_start: int
    new_count: int

    def text(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"


@dataclass(frozen=True)
class DiffLine:
    kind: LineKind
    text: str
    old_line_number: Optional[int] = None  # None for added lines
    new_line_number: Optional[int] = None  # None for removed lines


@dataclass
class Hunk:
    header: HunkHeader
    lines: List[DiffLine] = field(default_factory=list)
    # "\ No newline at end of file" lines; parsed as context, excluded from counts
    no_newline_markers: int = 0

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[DiffLine]:
        return iter(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    def count(self, kind: LineKind) -> int:
        return sum(1 for ln in self.lines if ln.kind == kind)

    def old_side_length(self) -> int:
        return sum(1 for ln in self.lines if ln.kind != LineKind.ADDED)

    def new_side_length(self) -> int:
        return sum(1 for ln in self.lines if ln.kind != LineKind.REMOVED)

    def new_side_span(self) -> Tuple[Optional[int], Optional[int]]:
        """
        First and last new-file positions the hunk shows.

        first is the first recorded new_line_number; a hunk made only of
        removals falls back to new_start. last is the new-side counter after
        the final line (a trailing removal leaves it where it was, never
        below 0). Empty hunks return (None, None).
        """
        if not self.lines:
            return None, None
        cursor = max(self.header.new_start - 1, 0)
        first: Optional[int] = None
        for ln in self.lines:
            if ln.new_line_number is not None:
                cursor = ln.new_line_number
                if first is None:
                    first = cursor
        if first is None:
            first = self.header.new_start
        return first, cursor


@dataclass
class ParsedPatch:
    hunks: List[Hunk] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hunks)

    def __iter__(self) -> Iterator[Hunk]:
        return iter(self.hunks)

    def __getitem__(self, index):
        return self.hunks[index]

    def is_empty(self) -> bool:
        return not self.hunks

    def total_hunks(self) -> int:
        return len(self.hunks)

    def total_lines(self) -> int:
        return sum(len(h) for h in self.hunks)

    def first_line(self) -> Optional[DiffLine]:
        if not self.hunks or not self.hunks[0].lines:
            return None
        return self.hunks[0].lines[0]

    def last_line(self) -> Optional[DiffLine]:
        if not self.hunks or not self.hunks[-1].lines:
            return None
        return self.hunks[-1].lines[-1]


@dataclass
class CountCheckResult:
    ok: bool
    tolerance: int
    per_hunk: List[Dict[str, Any]] = field(default_factory=list)
    logs: List[Dict[str, Any]] = field(default_factory=list)

    def failures(self) -> List[Dict[str, Any]]:
        return [h for h in self.per_hunk if not h["ok"]]

    def add_log(self, level: str, message: str, **fields: Any) -> None:
        entry = {"ts": time.time(), "level": level, "message": message}
        entry.update(fields)
        self.logs.append(entry)
