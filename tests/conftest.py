"""Shared fixtures: a test configuration, an app built from it and an upstream double."""

from __future__ import annotations

from pathlib import Path

import pytest
import respx
from fastapi.testclient import TestClient

from codehelper.api.main import create_app
from codehelper.config import Config

from ._upstreams import GEMINI_BASE, JDOODLE_URL, OLLAMA_HOST


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html>code helper</html>", encoding="utf-8")
    (public / "app.js").write_text("console.log('hi');", encoding="utf-8")
    return public


@pytest.fixture
def config(static_dir: Path) -> Config:
    return Config(
        jdoodle_client_id="client-id",
        jdoodle_client_secret="client-secret",
        jdoodle_url=JDOODLE_URL,
        gemini_api_key="gemini-key",
        gemini_base_url=GEMINI_BASE,
        ollama_host=OLLAMA_HOST,
        static_dir=str(static_dir),
    )


@pytest.fixture
def client(config: Config) -> TestClient:
    return TestClient(create_app(config))


@pytest.fixture
def upstream():
    """Intercept every outbound call; routes not registered by a test are refused."""
    with respx.mock(assert_all_called=False) as router:
        yield router
