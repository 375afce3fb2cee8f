"""Claude (Anthropic) API Client"""

import os

from commitgen.llm.base import LLMClient, LLMResponse, LLMError

API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY env var."""

    DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
    TEMPERATURE = 0.3

    def __init__(self, api_key: str | None = None, model: str | None = None, temperature: float | None = None):
        self.api_key = api_key or os.environ.get(API_KEY_ENV_VAR)
        self.model = model or self.DEFAULT_MODEL
        self.temperature = self.TEMPERATURE if temperature is None else temperature

        if not self.api_key:
            raise LLMError(f"{API_KEY_ENV_VAR} is not set")

        try:
            from anthropic import Anthropic
            self._client = Anthropic(api_key=self.api_key)
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude API ({self.model})"

    def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        from anthropic import APIError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens or self.DRAFT_MAX_TOKENS,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}]
            )
        except AuthenticationError:
            raise LLMError(f"Invalid API key. Check your {API_KEY_ENV_VAR}.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = ""
        for block in response.content:
            if block.type == "text":
                content = block.text.strip()
                break

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens
        )
