"""Gitgud core: patch text normalization for loaded or pasted diffs."""

from __future__ import annotations

from typing import Dict, Any


class PatchTextNormalizer:
    """
    Responsibilities:
      - Strip UTF-8 BOM if present.
      - Normalize line endings to \n.
      - Summarize what the text looks like so the UI can warn on a diff
        without hunks before handing it to the parser.
    """

    BIN_PATTERNS = (
        "GIT binary patch",
        "Binary files ",
    )

    def normalize(self, raw_text: str) -> str:
        if raw_text.startswith("\ufeff"):
            raw_text = raw_text.lstrip("\ufeff")
        return raw_text.replace("\r\n", "\n").replace("\r", "\n")

    def describe(self, text: str) -> Dict[str, Any]:
        lines = text.split("\n")
        return {
            "lines": len(lines),
            "has_hunk": any(l.startswith("@@") for l in lines),
            "has_git_header": any(l.startswith("diff --git ") for l in lines),
            "has_file_headers": any(l.startswith("--- ") for l in lines) and any(l.startswith("+++ ") for l in lines),
            "has_binary_indicator": any(pat in text for pat in self.BIN_PATTERNS),
        }
