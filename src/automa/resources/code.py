"""Code resource: download task code, propose changes, clean up."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from automa._sync import run_sync
from automa.errors import AutomaError, ProposalTokenError
from automa.resources.base import APIResource
from automa.resources.shared import Proposal, ProposalLike, Task, TaskLike

logger = logging.getLogger(__name__)

PROPOSAL_TOKEN_HEADER = "x-automa-proposal-token"


class Code(APIResource):
    """Operations on the code of a task.

    Usage::

        folder = await automa.code.download({"id": 28, "token": "..."})
        # ... edit files in folder ...
        await automa.code.propose({"id": 28, "token": "..."}, {"message": "Fix typo"})
        await automa.code.cleanup({"id": 28})
    """

    async def cleanup(self, task: TaskLike) -> None:
        """Remove the downloaded code of *task*.

        Raises ``FileNotFoundError`` if nothing was downloaded.
        """
        task = Task.coerce(task)
        await asyncio.to_thread(self._client.workspaces.cleanup, task.id)

    async def download(self, task: TaskLike) -> Path:
        """Download the code of *task* and return the path it was extracted to.

        The existing workspace is only touched once the service has
        answered successfully.  ``APIStatusError`` and network errors
        propagate unchanged.
        """
        task = Task.coerce(task)
        workspaces = self._client.workspaces

        async with self._client.http.stream(
            "POST",
            "/code/download",
            json={"task": task.to_dict()},
            headers={"Accept": "application/gzip"},
        ) as response:
            token = response.headers.get(PROPOSAL_TOKEN_HEADER)
            if not token:
                raise AutomaError(
                    f"Download response for task {task.id} is missing the "
                    f"{PROPOSAL_TOKEN_HEADER} header"
                )
            folder = await workspaces.extract(task.id, response.aiter_bytes())

        # Kept inside the workspace so propose can find it later
        workspaces.store_token(task.id, token)
        logger.info("Downloaded code for task %s into %s", task.id, folder)
        return folder

    async def propose(
        self,
        task: TaskLike,
        proposal: ProposalLike | None = None,
    ) -> httpx.Response:
        """Submit the uncommitted changes of the workspace as a proposal.

        Raises ``ProposalTokenError`` without contacting the service when
        no proposal token was stored by a previous download.
        """
        task = Task.coerce(task)
        proposal = Proposal.coerce(proposal)
        workspaces = self._client.workspaces

        token = workspaces.read_token(task.id)
        if not token:
            raise ProposalTokenError("Failed to read the stored proposal token")

        diff = await self._client.diff_provider.compute(workspaces.path_for(task.id))

        response = await self._client.http.post(
            "/code/propose",
            {
                "task": task.to_dict(),
                "proposal": {
                    **proposal.to_dict(),
                    "token": token,
                    "diff": diff,
                },
            },
        )
        logger.info("Proposed %d bytes of changes for task %s", len(diff), task.id)
        return response

    # -- Sync wrappers -------------------------------------------------------

    def cleanup_sync(self, task: TaskLike) -> None:
        """Synchronous wrapper for cleanup()."""
        return run_sync(self.cleanup(task))

    def download_sync(self, task: TaskLike) -> Path:
        """Synchronous wrapper for download()."""
        return run_sync(self.download(task))

    def propose_sync(
        self,
        task: TaskLike,
        proposal: ProposalLike | None = None,
    ) -> httpx.Response:
        """Synchronous wrapper for propose()."""
        return run_sync(self.propose(task, proposal))
