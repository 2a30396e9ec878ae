"""Gitgud core: working tree / index file status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Tuple, Iterable


class StatusFlag(IntFlag):
    # Bit values follow libgit2's git_status_t.
    CURRENT = 0
    INDEX_NEW = 1 << 0
    INDEX_MODIFIED = 1 << 1
    INDEX_DELETED = 1 << 2
    INDEX_RENAMED = 1 << 3
    INDEX_TYPECHANGE = 1 << 4
    WT_NEW = 1 << 7
    WT_MODIFIED = 1 << 8
    WT_DELETED = 1 << 9
    WT_TYPECHANGE = 1 << 10
    WT_RENAMED = 1 << 11
    IGNORED = 1 << 14
    CONFLICTED = 1 << 15


IS_STAGED = (
    StatusFlag.INDEX_NEW
    | StatusFlag.INDEX_MODIFIED
    | StatusFlag.INDEX_DELETED
    | StatusFlag.INDEX_RENAMED
    | StatusFlag.INDEX_TYPECHANGE
)


@dataclass(frozen=True)
class FileStatus:
    path: str
    status: StatusFlag

    @property
    def is_staged(self) -> bool:
        return bool(self.status & IS_STAGED)

    @property
    def is_unstaged(self) -> bool:
        return bool(int(self.status) & ~int(IS_STAGED))


def split_by_stage(files: Iterable[FileStatus]) -> Tuple[List[FileStatus], List[FileStatus]]:
    """Return (unstaged, staged). A file with changes on both sides shows up in both."""
    unstaged: List[FileStatus] = []
    staged: List[FileStatus] = []
    for f in files:
        if f.is_unstaged:
            unstaged.append(f)
        if f.is_staged:
            staged.append(f)
    return unstaged, staged
