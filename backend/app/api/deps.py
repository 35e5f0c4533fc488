from typing import Annotated

from fastapi import Depends, Request

from app.agent.gemini_client import GeminiClient
from app.agent.relay import ChatRelay
from app.core.config import Settings
from app.models import ProjectContext


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_project_context(request: Request) -> ProjectContext:
    return request.app.state.project_context


def get_gemini_client(request: Request) -> GeminiClient:
    return request.app.state.gemini_client


SettingsDep = Annotated[Settings, Depends(get_settings)]
ContextDep = Annotated[ProjectContext, Depends(get_project_context)]
GeminiDep = Annotated[GeminiClient, Depends(get_gemini_client)]


def get_chat_relay(context: ContextDep, client: GeminiDep) -> ChatRelay:
    return ChatRelay(context, client)


ChatRelayDep = Annotated[ChatRelay, Depends(get_chat_relay)]
