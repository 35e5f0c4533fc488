from app.agent.errors import (
    ChatRelayError,
    UpstreamFailure,
    classify_failure,
    describe_failure,
    failure_response,
)
from app.agent.gemini_client import GeminiClient
from app.agent.prompts.chat import CHAT_PROMPT_TEMPLATE
from app.core.logging import get_logger
from app.models import ChatRequest, ChatResponse, ProjectContext

logger = get_logger(__name__)

EMPTY_MESSAGE_ERROR = "Message must not be empty"


def build_prompt(context: ProjectContext, message: str) -> str:
    return CHAT_PROMPT_TEMPLATE.format(context=context.text, message=message)


class ChatRelay:
    """
    Forwards one user message, prefixed with the project context, to the
    generation API and shapes the reply. No retries are attempted.
    """

    def __init__(self, context: ProjectContext, client: GeminiClient):
        self.context = context
        self.client = client

    async def handle(self, request: ChatRequest) -> ChatResponse:
        message = (request.message or "").strip()
        if not message:
            raise ChatRelayError(400, EMPTY_MESSAGE_ERROR)

        prompt = build_prompt(self.context, message)
        try:
            text = await self.client.generate_text(prompt)
        except Exception as e:
            raise self._upstream_error(e) from e

        logger.success("Relayed chat message", message_chars=len(message), response_chars=len(text))
        return ChatResponse(response=text)

    def _upstream_error(self, exc: Exception) -> ChatRelayError:
        failure = classify_failure(exc)
        status_code, error = failure_response(failure)
        details = describe_failure(exc)
        logger.error(
            "Generation request failed",
            category=failure.value,
            status_code=status_code,
            details=details,
            exc_info=failure is UpstreamFailure.UNKNOWN,
        )
        return ChatRelayError(status_code, error, details)
