"""
OpenAI chat completions adapter.

Sends a single-turn prompt with a travel-advisor system message and
returns the reply text.
"""
import logging
from typing import Any, Dict

from core.application.interfaces import ICompletionClient
from core.domain.exceptions import (
    CollaboratorError,
    InvalidCredentialError,
    MalformedResponseError,
    RateLimitError,
)
from core.infrastructure.adapters.http import request_json
from core.settings.modules.integrations_settings import OpenAISettings


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional travel advisor with extensive knowledge of global "
    "destinations, local cultures, seasonal patterns, and travel logistics. "
    "Provide detailed, practical, and personalized travel advice. "
    "When asked for JSON, reply with JSON only."
)


class OpenAICompletionClient(ICompletionClient):
    """
    OpenAI implementation of ICompletionClient.
    """

    def __init__(self, settings: OpenAISettings):
        self.url = f"{settings.base_url.rstrip('/')}/chat/completions"
        self.model = settings.model
        self.max_tokens = settings.max_tokens
        self.temperature = settings.temperature
        self.timeout_seconds = settings.timeout_seconds

    async def complete(self, prompt: str, api_key: str) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {api_key}"}

        try:
            data = await request_json(
                "POST",
                self.url,
                service="OpenAI",
                timeout_seconds=self.timeout_seconds,
                json=payload,
                headers=headers,
            )
        except CollaboratorError as e:
            logger.error(f"Error calling OpenAI API: {e}")
            if e.status_code == 401:
                raise InvalidCredentialError("Invalid OpenAI API key", status_code=401) from e
            if e.status_code == 429:
                raise RateLimitError("OpenAI API rate limit exceeded", status_code=429) from e
            raise

        return self.extract_content(data)

    @staticmethod
    def extract_content(data: Any) -> str:
        """Return the first choice's message content."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("OpenAI API returned an unexpected payload") from e
        return content or ""
