"""Client configuration via dataclass (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.automa.app"
DEFAULT_TASKS_DIR = Path("/tmp/automa/tasks")
DEFAULT_TIMEOUT = 30.0


def _read_env(name: str) -> str | None:
    """Read an environment variable, trimmed.  Blank values count as unset."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ClientConfig:
    """Configuration for an Automa client.

    ``base_url`` and ``tasks_dir`` can be overridden via environment
    variables (``AUTOMA_BASE_URL``, ``AUTOMA_TASKS_DIR``) or constructor
    arguments.

    Priority (highest wins): constructor arg > env var > default.
    """

    base_url: str | None = None
    api_key: str | None = None
    tasks_dir: Path | str | None = None
    timeout: float | None = None
    default_headers: dict[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url:
            self.base_url = _read_env("AUTOMA_BASE_URL") or DEFAULT_BASE_URL

        if self.tasks_dir is None:
            env_dir = _read_env("AUTOMA_TASKS_DIR")
            self.tasks_dir = Path(env_dir) if env_dir else DEFAULT_TASKS_DIR
        else:
            self.tasks_dir = Path(self.tasks_dir)

        if self.timeout is None:
            self.timeout = DEFAULT_TIMEOUT
        if self.timeout <= 0:
            raise ValueError(f"Invalid timeout {self.timeout!r}. Must be positive.")

        logger.debug(
            "Automa client configured for %s (tasks in %s)",
            self.base_url,
            self.tasks_dir,
        )
