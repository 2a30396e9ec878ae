"""Gitgud core: application state (repository, file list, selected diff)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .status import FileStatus

APP_NAME = "Gitgud"
NO_BRANCH = "Branch does not exist yet"


@dataclass(frozen=True)
class RepoState:
    name: str = ""
    branch: str = ""
    files: List[FileStatus] = field(default_factory=list)
    diff: str = ""
    line_count: int = 0
    selected_path: Optional[str] = None
    selected_staged: bool = False

    def title(self) -> str:
        if not self.name:
            return APP_NAME
        return f"{self.name} ({self.branch or NO_BRANCH})"

    def update_repo(self, path: str, branch: str) -> "RepoState":
        return replace(self, name=os.path.basename(path.rstrip("/\\")), branch=branch or "")

    def update_status(self, files: List[FileStatus]) -> "RepoState":
        # Drop the selection when the selected file no longer has changes on that side.
        keep = any(
            f.path == self.selected_path and (f.is_staged if self.selected_staged else f.is_unstaged)
            for f in files
        )
        if keep:
            return replace(self, files=list(files))
        return replace(self, files=list(files), selected_path=None, selected_staged=False, diff="", line_count=0)

    def select(self, path: Optional[str], staged: bool) -> "RepoState":
        return replace(self, selected_path=path, selected_staged=staged)

    def update_selected_file(self, diff: str, line_count: int) -> "RepoState":
        return replace(self, diff=diff, line_count=max(0, int(line_count)))
