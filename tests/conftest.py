"""Shared fixtures: an in-process fake Automa API and a client wired to it."""

from __future__ import annotations

import shutil
from pathlib import Path

import httpx
import pytest

from automa import Automa
from tests.helpers import FIXTURES, FakeAutoma, create_fake_app


@pytest.fixture()
def fake_api() -> FakeAutoma:
    return FakeAutoma()


@pytest.fixture()
def tasks_dir(tmp_path) -> Path:
    return tmp_path / "tasks"


@pytest.fixture()
def download_source(tmp_path) -> Path:
    """Code tree served by the fake download endpoint: ``.git/`` and ``README.md``.

    A ``.git`` folder cannot be committed as a fixture, so it is created
    here on a copy.
    """
    source = tmp_path / "download"
    shutil.copytree(FIXTURES / "download", source)
    (source / ".git").mkdir()
    return source


@pytest.fixture()
async def automa(fake_api, tasks_dir):
    """Automa client talking to the fake API through ASGI transport."""
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=create_fake_app(fake_api)))
    client = Automa(
        base_url="http://localhost:8080",
        tasks_dir=tasks_dir,
        http_client=http_client,
    )
    yield client
    await client.close()
    await http_client.aclose()
