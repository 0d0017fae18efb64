"""Tests for ClientConfig defaults and overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from automa import Automa
from automa.config import ClientConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("AUTOMA_BASE_URL", raising=False)
    monkeypatch.delenv("AUTOMA_TASKS_DIR", raising=False)


class TestClientConfig:
    """ClientConfig default values and environment overrides."""

    def test_default_config(self):
        c = ClientConfig()
        assert c.base_url == "https://api.automa.app"
        assert c.tasks_dir == Path("/tmp/automa/tasks")
        assert c.timeout == 30.0
        assert c.api_key is None
        assert c.default_headers == {}

    def test_custom_base_url(self):
        c = ClientConfig(base_url="http://localhost:8080")
        assert c.base_url == "http://localhost:8080"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("AUTOMA_BASE_URL", "  http://env-api:9000 \n")
        c = ClientConfig()
        assert c.base_url == "http://env-api:9000"

    def test_blank_env_var_ignored(self, monkeypatch):
        monkeypatch.setenv("AUTOMA_BASE_URL", "   ")
        c = ClientConfig()
        assert c.base_url == "https://api.automa.app"

    def test_explicit_overrides_env_var(self, monkeypatch):
        monkeypatch.setenv("AUTOMA_BASE_URL", "http://env-api:9000")
        c = ClientConfig(base_url="http://explicit:5000")
        assert c.base_url == "http://explicit:5000"

    def test_tasks_dir_env_var(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTOMA_TASKS_DIR", str(tmp_path / "env-tasks"))
        c = ClientConfig()
        assert c.tasks_dir == tmp_path / "env-tasks"

    def test_custom_tasks_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTOMA_TASKS_DIR", "/somewhere/else")
        c = ClientConfig(tasks_dir=str(tmp_path / "mine"))
        assert c.tasks_dir == tmp_path / "mine"

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ValueError, match="Invalid timeout"):
            ClientConfig(timeout=timeout)

    def test_client_uses_config(self, tmp_path):
        automa = Automa(base_url="http://localhost:8080", tasks_dir=tmp_path)
        assert automa.base_url == "http://localhost:8080"
        assert automa.workspaces.root == tmp_path
        assert automa.code.__class__.__name__ == "Code"
