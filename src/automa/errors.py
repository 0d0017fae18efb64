"""Automa exception hierarchy.

All SDK-specific exceptions inherit from :class:`AutomaError`.  Network
failures are left as ``httpx.TransportError`` and filesystem failures as
``OSError`` -- they are not wrapped.
"""

from __future__ import annotations

import httpx


class AutomaError(Exception):
    """Base exception for all Automa SDK errors."""


class APIStatusError(AutomaError):
    """Raised when the Automa API answers with a non-2xx status.

    The message is the one sent by the service, unmodified.
    """

    def __init__(self, message: str, *, response: httpx.Response) -> None:
        super().__init__(message)
        self.message = message
        self.response = response
        self.status_code = response.status_code


class ProposalTokenError(AutomaError):
    """Raised when no proposal token is stored for a task workspace."""


class WorkspaceError(AutomaError):
    """Raised on task workspace failures."""


class ExtractionError(WorkspaceError):
    """Raised when a downloaded archive is corrupt or truncated."""


class DiffError(WorkspaceError):
    """Raised when the diff of a workspace cannot be computed."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
