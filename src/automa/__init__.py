"""Automa -- Python SDK for building Automa bots.

Top-level convenience re-exports::

    from automa import Automa, verify_webhook
    from automa.workspace import WorkspaceManager  # lower-level pieces
"""

__version__ = "0.1.0"

from automa.client import Automa
from automa.errors import (
    APIStatusError,
    AutomaError,
    DiffError,
    ExtractionError,
    ProposalTokenError,
    WorkspaceError,
)
from automa.resources import Proposal, Task
from automa.webhook import generate_webhook_signature, verify_webhook

__all__ = [
    "__version__",
    "Automa",
    "APIStatusError",
    "AutomaError",
    "DiffError",
    "ExtractionError",
    "ProposalTokenError",
    "WorkspaceError",
    "Proposal",
    "Task",
    "generate_webhook_signature",
    "verify_webhook",
]
