"""Gitgud core: display rows for a parsed patch, including elision markers."""

from __future__ import annotations

from typing import List, Dict, Any

from .models import LineKind, ParsedPatch

KIND_CONTEXT = "context"
KIND_ADD = "add"
KIND_DEL = "del"
KIND_ELISION = "elision"

ELISION_MARKER = "..."

_KIND_BY_LINE = {
    LineKind.CONTEXT: KIND_CONTEXT,
    LineKind.ADDED: KIND_ADD,
    LineKind.REMOVED: KIND_DEL,
}


def _elision_row(hunk_index: int) -> Dict[str, Any]:
    return {
        "kind": KIND_ELISION,
        "old_no": ELISION_MARKER,
        "new_no": ELISION_MARKER,
        "marker": "",
        "text": "",
        "hunk_index": hunk_index,
    }


def build_rows(parsed: ParsedPatch, line_count: int, show_elision: bool = True) -> List[Dict[str, Any]]:
    """
    Flatten hunks into table rows.

    An elision row goes before every hunk that does not start at line 1 of
    the new file, and after the last hunk when it stops short of line_count.
    """
    rows: List[Dict[str, Any]] = []
    last_new = None
    last_idx = -1
    for h_idx, h in enumerate(parsed.hunks):
        first, last = h.new_side_span()
        if first is None:
            continue
        if show_elision and first > 1:
            rows.append(_elision_row(h_idx))
        for ln in h.lines:
            rows.append({
                "kind": _KIND_BY_LINE[ln.kind],
                "old_no": "" if ln.old_line_number is None else str(ln.old_line_number),
                "new_no": "" if ln.new_line_number is None else str(ln.new_line_number),
                "marker": ln.kind.value,
                "text": ln.text,
                "hunk_index": h_idx,
            })
        last_new = last
        last_idx = h_idx

    # Trailing marker only looks at the final hunk, as long as it has lines.
    if parsed.hunks and last_idx == len(parsed.hunks) - 1:
        if show_elision and last_new is not None and last_new < line_count:
            rows.append(_elision_row(last_idx))
    return rows
