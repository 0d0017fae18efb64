"""Task workspaces: one directory of downloaded code per task.

Each task gets ``<root>/<task id>``.  A download replaces the directory
wholesale and leaves the proposal token in ``.git/automa_proposal_token``
so that a later propose can authenticate the submission.

Nothing here locks: two concurrent calls for the same task id race on the
same directory.  Different task ids never share state.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path
from typing import AsyncIterable

from automa.config import DEFAULT_TASKS_DIR
from automa.workspace.archive import ArchiveExtractor, TarExtractor

logger = logging.getLogger(__name__)

TOKEN_FILENAME = "automa_proposal_token"


class WorkspaceManager:
    """Creates, fills, and removes task workspaces under *root*."""

    def __init__(
        self,
        root: Path | str | None = None,
        *,
        extractor: ArchiveExtractor | None = None,
    ) -> None:
        self._root = Path(root) if root is not None else DEFAULT_TASKS_DIR
        self._extractor = extractor or TarExtractor()

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, task_id: int | str) -> Path:
        """Workspace directory for *task_id*.  No filesystem access."""
        return self._root / str(task_id)

    def token_path(self, task_id: int | str) -> Path:
        return self.path_for(task_id) / ".git" / TOKEN_FILENAME

    def exists(self, task_id: int | str) -> bool:
        return self.path_for(task_id).is_dir()

    def cleanup(self, task_id: int | str, *, missing_ok: bool = False) -> None:
        """Remove the workspace directory and everything in it.

        Raises ``FileNotFoundError`` for a missing workspace unless
        *missing_ok* is set.  Other ``OSError``s always propagate.
        """
        folder = self.path_for(task_id)
        try:
            shutil.rmtree(folder)
        except FileNotFoundError:
            if not missing_ok:
                raise
            return
        logger.info("Removed workspace %s", folder)

    def _recreate(self, task_id: int | str) -> None:
        self.cleanup(task_id, missing_ok=True)
        self.path_for(task_id).mkdir(parents=True)

    async def extract(self, task_id: int | str, chunks: AsyncIterable[bytes]) -> Path:
        """Replace the workspace with the contents of a streamed archive.

        Any previous workspace is removed first -- including uncommitted
        changes in it.  Returns the workspace path.
        """
        folder = self.path_for(task_id)
        if folder.exists():
            logger.warning(
                "Replacing existing workspace %s; local changes in it are discarded",
                folder,
            )
        await asyncio.to_thread(self._recreate, task_id)

        await self._extractor.extract(chunks, folder)
        return folder

    def store_token(self, task_id: int | str, token: str) -> None:
        """Persist the proposal token, overwriting any previous one.

        The workspace's ``.git`` directory must already exist.
        """
        self.token_path(task_id).write_text(token, encoding="utf-8")

    def read_token(self, task_id: int | str) -> str | None:
        """Load the stored proposal token, or return None.

        Missing, unreadable, undecodable, and empty token files all count
        as "no token".
        """
        try:
            token = self.token_path(task_id).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("No readable proposal token for task %s", task_id)
            return None
        return token or None
