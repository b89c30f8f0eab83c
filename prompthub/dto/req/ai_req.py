from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AiReq(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeneratePromptReq(AiReq):
    goal: str = Field(min_length=1, max_length=2000)
    category: str | None = None
    audience: str | None = None
    tone: str | None = None
    additional_context: str | None = Field(default=None, max_length=4000)


class RefinePromptReq(AiReq):
    original_prompt: str = Field(min_length=1, max_length=20000)
    refinement_goal: str = Field(min_length=1, max_length=2000)


class SuggestImprovementsReq(AiReq):
    prompt: str = Field(min_length=1, max_length=20000)


class ChatMessage(AiReq):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=10000)


class ChatPromptBuilderReq(AiReq):
    messages: list[ChatMessage] = Field(default_factory=list, max_length=50)
