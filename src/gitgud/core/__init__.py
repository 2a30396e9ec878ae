from .models import LineKind, HunkHeader, DiffLine, Hunk, ParsedPatch, CountCheckResult
from .parser import PatchParser, MalformedPatchError, parse_patch, check_hunk_counts, parse_strict
from .normalizer import PatchTextNormalizer
from .rows import build_rows
from .status import StatusFlag, FileStatus, IS_STAGED, split_by_stage
from .state import RepoState
from .host import RepositoryHost, DiffPayload
from .selftests import GitgudSelfTests

__all__ = [
    "LineKind","HunkHeader","DiffLine","Hunk","ParsedPatch","CountCheckResult",
    "PatchParser","MalformedPatchError","parse_patch","check_hunk_counts","parse_strict",
    "PatchTextNormalizer","build_rows",
    "StatusFlag","FileStatus","IS_STAGED","split_by_stage",
    "RepoState","RepositoryHost","DiffPayload","GitgudSelfTests",
]
