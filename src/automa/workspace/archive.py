"""Archive extraction for downloaded task code."""

from __future__ import annotations

import abc
import asyncio
import logging
import tarfile
import tempfile
import zlib
from pathlib import Path
from typing import IO, AsyncIterable

from automa.errors import ExtractionError

logger = logging.getLogger(__name__)

# In-memory spool limit before the download is rolled over to a temp file
_SPOOL_MAX_BYTES = 8 * 1024 * 1024


class ArchiveExtractor(abc.ABC):
    """Unpacks a streamed archive into a directory.

    Implementations must drain *chunks* completely before returning and
    write the whole tree.  Extraction is not atomic: on error the
    destination may be left partially populated.
    """

    @abc.abstractmethod
    async def extract(self, chunks: AsyncIterable[bytes], destination: Path) -> None:
        """Extract the archive read from *chunks* into *destination*."""


class TarExtractor(ArchiveExtractor):
    """Extracts tar archives, gzip-compressed or not.

    The stream is spooled first (memory, then disk past
    ``spool_max_bytes``) so that the blocking ``tarfile`` work can run in
    a worker thread without holding the event loop.

    Members are unpacked with the ``tar`` extraction filter: nothing may
    be written outside the destination (including through a symlink),
    but symlinks themselves may point anywhere, absolute targets
    included, as they can in a checked-out repository.
    """

    def __init__(self, spool_max_bytes: int = _SPOOL_MAX_BYTES) -> None:
        self._spool_max_bytes = spool_max_bytes

    async def extract(self, chunks: AsyncIterable[bytes], destination: Path) -> None:
        received = 0
        with tempfile.SpooledTemporaryFile(max_size=self._spool_max_bytes) as spool:
            async for chunk in chunks:
                spool.write(chunk)
                received += len(chunk)
            spool.seek(0)
            logger.debug("Extracting %d archive bytes into %s", received, destination)
            await asyncio.to_thread(_untar, spool, destination)


def _untar(fileobj: IO[bytes], destination: Path) -> None:
    try:
        with tarfile.open(fileobj=fileobj, mode="r|*") as tar:
            tar.extractall(destination, filter="tar")
    except (tarfile.TarError, zlib.error, EOFError) as exc:
        raise ExtractionError(f"Failed to extract archive into {destination}: {exc}") from exc
