"""Local task workspaces: archive extraction, token storage, and diffs."""

from automa.workspace.archive import ArchiveExtractor, TarExtractor
from automa.workspace.diff import DiffProvider, GitDiff
from automa.workspace.manager import TOKEN_FILENAME, WorkspaceManager

__all__ = [
    "ArchiveExtractor",
    "TarExtractor",
    "DiffProvider",
    "GitDiff",
    "TOKEN_FILENAME",
    "WorkspaceManager",
]
