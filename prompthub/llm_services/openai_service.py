from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from prompthub.config import settings
from prompthub.llm_services.llm_service import LlmService


class OpenAiService(LlmService):
    """OpenAI chat completions constrained to JSON-object responses."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
    ) -> None:
        key = api_key or settings.openai_api_key
        if not key:
            raise RuntimeError("OPENAI_API_KEY is required to use OpenAiService.")
        self._client = AsyncOpenAI(api_key=key)
        self._model = model or settings.openai_model
        self._temperature = temperature if temperature is not None else settings.openai_temperature

    async def generate_json(self, system_prompt: str, messages: list[dict[str, Any]]) -> str:
        params: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
            "response_format": {"type": "json_object"},
        }
        # Some models reject an explicit temperature.
        if self._temperature is not None:
            params["temperature"] = self._temperature

        response = await self._client.chat.completions.create(**params)
        if not response.choices:
            return "{}"
        return response.choices[0].message.content or "{}"
