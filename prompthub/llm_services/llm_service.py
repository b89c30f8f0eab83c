from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LlmService(ABC):
    """A chat model that answers with one JSON object per call."""

    @abstractmethod
    async def generate_json(self, system_prompt: str, messages: list[dict[str, Any]]) -> str:
        """
        Run one completion.

        Args:
            system_prompt: Instructions sent ahead of the conversation
            messages: Prior turns as {"role", "content"} dicts

        Returns:
            Raw model text. Callers must not assume it parses.
        """
        ...
