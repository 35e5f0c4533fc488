from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_gemini_client
from app.core.config import Settings
from app.main import create_app
from app.tests.utils import SAMPLE_PROJECTS, FakeGemini, write_projects


@pytest.fixture
def projects_file(tmp_path: Path) -> Path:
    return write_projects(tmp_path / "projects.json", SAMPLE_PROJECTS)


@pytest.fixture
def make_settings(projects_file: Path) -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "GEMINI_API_KEY": "test-key",
            "PROJECTS_FILE": str(projects_file),
            "ENVIRONMENT": "development",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)  # type: ignore[call-arg]

    return _make


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def build_client(make_settings, fake_gemini) -> Iterator[Callable[..., TestClient]]:
    """Build a started TestClient whose Gemini calls go to ``fake_gemini``."""
    opened: list[TestClient] = []

    def _build(**overrides: Any) -> TestClient:
        settings = make_settings(**overrides)
        app = create_app(settings)
        app.dependency_overrides[get_gemini_client] = lambda: fake_gemini.client(settings)
        client = TestClient(app)
        client.__enter__()
        opened.append(client)
        return client

    yield _build

    for client in opened:
        client.__exit__(None, None, None)
