"""Diff providers: compute the uncommitted changes of a workspace."""

from __future__ import annotations

import abc
import asyncio
import logging
import shutil
from pathlib import Path

from automa.errors import DiffError

logger = logging.getLogger(__name__)


class DiffProvider(abc.ABC):
    """Produces the textual diff of a workspace against its last commit.

    ``Automa`` uses :class:`GitDiff` unless another provider is passed in,
    e.g. one backed by an in-process git library or a test double.
    """

    @abc.abstractmethod
    async def compute(self, path: Path) -> str:
        """Return the diff of uncommitted changes under *path*."""


class GitDiff(DiffProvider):
    """Runs ``git diff`` in the workspace and returns its output."""

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    async def compute(self, path: Path) -> str:
        if shutil.which(self._executable) is None:
            raise DiffError(f"{self._executable!r} executable not found")

        proc = await asyncio.create_subprocess_exec(
            self._executable,
            "diff",
            "--no-color",
            "--no-ext-diff",
            cwd=str(path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            err = stderr.decode("utf-8", errors="replace").strip()
            raise DiffError(
                f"git diff failed in {path} (exit {proc.returncode}): {err}",
                returncode=proc.returncode,
                stderr=err,
            )

        diff = stdout.decode("utf-8", errors="replace")
        logger.debug("git diff in %s: %d bytes", path, len(diff))
        return diff
