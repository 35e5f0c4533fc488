from fastapi import APIRouter

from app.api.deps import ChatRelayDep
from app.models import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def chat_with_portfolio(request: ChatRequest, relay: ChatRelayDep) -> ChatResponse:
    """
    Answer a question about the portfolio.
    Errors are raised as ChatRelayError and rendered by the app-level handler.
    """
    return await relay.handle(request)
