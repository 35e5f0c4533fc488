from typing import Any

import httpx

from app.agent.prompts.chat import NO_RESPONSE_PLACEHOLDER
from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def extract_candidate_text(data: Any) -> str | None:
    """Return candidates[0].content.parts[0].text, or None when the shape does not match."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiClient:
    """Thin client for the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or default_settings
        self.url = self.settings.GEMINI_GENERATE_URL
        self.timeout = self.settings.GEMINI_TIMEOUT_SECONDS
        self._transport = transport

    def build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": self.settings.GEMINI_MAX_OUTPUT_TOKENS,
                "temperature": self.settings.GEMINI_TEMPERATURE,
                "topP": self.settings.GEMINI_TOP_P,
            },
        }

    async def generate_text(self, prompt: str) -> str:
        """
        Send one generateContent request and return the first candidate's text.
        Transport errors, timeouts and non-2xx statuses propagate as httpx exceptions.
        A well-formed 2xx reply without usable text yields the placeholder string.
        """
        logger.debug("Issuing generateContent request", url=self.url, prompt_chars=len(prompt))
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.url,
                params={"key": self.settings.GEMINI_API_KEY},
                json=self.build_payload(prompt),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()

        try:
            data = response.json()
        except ValueError:
            logger.warn("generateContent returned a non-JSON body", status_code=response.status_code)
            return NO_RESPONSE_PLACEHOLDER

        text = extract_candidate_text(data)
        if text is None:
            logger.warn("generateContent reply had no candidate text", body=data)
            return NO_RESPONSE_PLACEHOLDER
        return text
