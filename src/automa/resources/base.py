"""Base class for API resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from automa.client import Automa


class APIResource:
    """A group of API operations bound to an :class:`~automa.client.Automa` client."""

    def __init__(self, client: Automa) -> None:
        self._client = client
