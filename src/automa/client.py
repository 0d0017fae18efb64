"""Automa client -- the primary SDK interface."""

from __future__ import annotations

from pathlib import Path

import httpx

from automa._sync import run_sync
from automa.config import ClientConfig
from automa.core import APIClient
from automa.resources.code import Code
from automa.workspace import ArchiveExtractor, DiffProvider, GitDiff, WorkspaceManager


class _AutomaHTTP(APIClient):
    """APIClient with the configured default headers and bearer token."""

    def __init__(self, config: ClientConfig, http_client: httpx.AsyncClient | None) -> None:
        super().__init__(config.base_url, timeout=config.timeout, http_client=http_client)
        self._config = config

    def default_headers(self) -> dict[str, str | None]:
        headers = super().default_headers()
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        headers.update(self._config.default_headers)
        return headers


class Automa:
    """API client for the Automa service.

    Usage::

        async with Automa() as automa:
            folder = await automa.code.download({"id": 28, "token": "..."})

    Sync usage::

        automa = Automa()
        folder = automa.code.download_sync({"id": 28, "token": "..."})
        automa.close_sync()

    Constructing the client performs no I/O.  ``base_url`` falls back to
    ``AUTOMA_BASE_URL`` and then ``https://api.automa.app``; ``tasks_dir``
    to ``AUTOMA_TASKS_DIR`` and then ``/tmp/automa/tasks``.  Default
    headers set to ``None`` are removed from requests.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        api_key: str | None = None,
        default_headers: dict[str, str | None] | None = None,
        tasks_dir: Path | str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        diff_provider: DiffProvider | None = None,
        extractor: ArchiveExtractor | None = None,
    ) -> None:
        self._config = ClientConfig(
            base_url=base_url,
            api_key=api_key,
            tasks_dir=tasks_dir,
            timeout=timeout,
            default_headers=dict(default_headers or {}),
        )
        self.http = _AutomaHTTP(self._config, http_client)
        self.workspaces = WorkspaceManager(self._config.tasks_dir, extractor=extractor)
        self.diff_provider = diff_provider or GitDiff()

        self.code = Code(self)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def version(self) -> str:
        """automa-bot package version."""
        from automa import __version__
        return __version__

    async def close(self) -> None:
        """Close the HTTP connection pool."""
        await self.http.aclose()

    def close_sync(self) -> None:
        """Synchronous wrapper for close()."""
        run_sync(self.close())

    async def __aenter__(self) -> Automa:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
