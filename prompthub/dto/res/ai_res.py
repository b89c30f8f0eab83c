from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AiRes(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeneratedPrompt(AiRes):
    title: str
    description: str
    content: str
    suggested_category: str


class RefinedPrompt(AiRes):
    refined_prompt: str
    improvements: list[str]


class Suggestions(AiRes):
    suggestions: list[str]


class ChatBuilderTurn(AiRes):
    message: str
    suggestions: list[str] | None = None
    is_complete: bool = False
    final_prompt: str | None = None
    title: str | None = None
    category: str | None = None
    description: str | None = None
