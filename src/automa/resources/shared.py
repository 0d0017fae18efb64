"""Data objects shared by API resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class Task:
    """A unit of work on Automa.

    ``token`` authorizes the code download; it is unrelated to the
    proposal token handed out with the downloaded code.
    """

    id: int
    token: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id}
        if self.token is not None:
            data["token"] = self.token
        return data

    @classmethod
    def coerce(cls, value: TaskLike) -> Task:
        """Accept a ``Task`` or a mapping with ``id`` (and ``token``)."""
        if isinstance(value, Task):
            return value
        if "id" not in value:
            raise ValueError("Task mapping must include an 'id'")
        return cls(id=value["id"], token=value.get("token"))


@dataclass(frozen=True)
class Proposal:
    """Caller-supplied proposal details.  Token and diff are added on submit."""

    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.message is None:
            return {}
        return {"message": self.message}

    @classmethod
    def coerce(cls, value: ProposalLike | None) -> Proposal:
        if value is None:
            return cls()
        if isinstance(value, Proposal):
            return value
        return cls(message=value.get("message"))


TaskLike = Union[Task, Mapping[str, Any]]
ProposalLike = Union[Proposal, Mapping[str, Any]]
