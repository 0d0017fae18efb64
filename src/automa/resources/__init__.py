"""Automa API resources."""

from automa.resources.code import PROPOSAL_TOKEN_HEADER, Code
from automa.resources.shared import Proposal, Task

__all__ = ["Code", "PROPOSAL_TOKEN_HEADER", "Proposal", "Task"]
