import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx

from app.agent.gemini_client import GeminiClient
from app.core.config import Settings

SAMPLE_PROJECTS = [
    {
        "name": "X",
        "description": "A kanban board for small teams.",
        "type": "Web App",
        "technologies": "React, Node.js",
        "url": "https://x.example.com",
        "readme": "README.md",
    },
    {
        "name": "Landing Page",
        "description": "Marketing landing page.",
        "type": "Website",
        "repository": "https://github.com/example/landing",
    },
    {
        "name": "Notes API",
        "description": "REST API for notes.",
        "type": "API",
        "readme": "docs/README.md",
    },
]


def gemini_reply(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def write_projects(path: Path, projects: list[Any]) -> Path:
    path.write_text(json.dumps({"projects": projects}), encoding="utf-8")
    return path


class FakeGemini:
    """Records outbound requests and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=gemini_reply("Project X is a kanban board.")
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self, settings: Settings) -> GeminiClient:
        return GeminiClient(settings, transport=httpx.MockTransport(self))

    def sent_prompt(self, index: int = -1) -> str:
        payload = json.loads(self.requests[index].content)
        return payload["contents"][0]["parts"][0]["text"]
