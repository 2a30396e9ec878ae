"""Gitgud core: interfaces the window expects from its repository host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Tuple

from .status import FileStatus


@dataclass(frozen=True)
class DiffPayload:
    text: str
    line_count: int  # total lines in the new side of the file


class RepositoryHost(Protocol):
    def describe(self) -> Tuple[str, str]:
        """(repository path, branch name)"""
        ...

    def status(self) -> List[FileStatus]:
        ...

    def diff(self, path: str, staged: bool) -> DiffPayload:
        ...

    def stage(self, path: str) -> None:
        ...

    def unstage(self, path: str) -> None:
        ...
