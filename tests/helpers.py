"""Test helpers: a scriptable fake Automa API, tarball builder, git runner."""

from __future__ import annotations

import io
import shutil
import subprocess
import tarfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncIterator

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from automa.resources.code import PROPOSAL_TOKEN_HEADER

FIXTURES = Path(__file__).parent / "fixtures"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


@dataclass
class FakeAutoma:
    """Scriptable stand-in for the Automa API.  Records every request."""

    requests: list[dict[str, Any]] = field(default_factory=list)
    archive: bytes = b""
    proposal_token: str | None = "ghijkl"
    download_status: int = 200
    download_error: str = ""
    propose_status: int = 200
    propose_error: str = ""
    propose_response: dict[str, Any] = field(default_factory=lambda: {"id": 1})

    async def record(self, request: Request) -> None:
        self.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
                "json": await request.json(),
            }
        )


def create_fake_app(fake: FakeAutoma) -> FastAPI:
    app = FastAPI()

    @app.post("/code/download")
    async def download(request: Request):
        await fake.record(request)
        if fake.download_status != 200:
            return JSONResponse({"message": fake.download_error}, status_code=fake.download_status)
        headers = {PROPOSAL_TOKEN_HEADER: fake.proposal_token} if fake.proposal_token else {}
        return Response(fake.archive, media_type="application/gzip", headers=headers)

    @app.post("/code/propose")
    async def propose(request: Request):
        await fake.record(request)
        if fake.propose_status != 200:
            return JSONResponse({"message": fake.propose_error}, status_code=fake.propose_status)
        return JSONResponse(fake.propose_response)

    return app


def make_tarball(source: Path, *, compress: bool = True) -> bytes:
    """Pack the contents of *source* the way ``tar c -C source .`` would."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz" if compress else "w") as tar:
        tar.add(source, arcname=".")
    return buf.getvalue()


async def chunked(data: bytes, size: int = 100) -> AsyncIterator[bytes]:
    """Yield *data* in small pieces, like a streamed response body."""
    for start in range(0, len(data), size):
        yield data[start:start + size]


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Tmp",
            "-c", "user.email=tmp@tmp.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def commit_all(repo: Path) -> None:
    """Turn *repo* into a git repository with everything committed."""
    git(repo, "init", "-q")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "Initial commit")
