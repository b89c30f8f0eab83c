from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    """Plain snapshot handed out by the storage layer; serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Category(Entity):
    id: str
    name: str
    icon: str
    color: str
    description: str | None = None


class Prompt(Entity):
    id: str
    title: str
    description: str
    content: str
    category_id: str
    is_featured: bool = False
    views: int = 0
    likes: int = 0
    created_at: datetime
    updated_at: datetime


class PromptWithCategory(Prompt):
    category: Category


class SavedPrompt(Entity):
    id: str
    prompt_id: str
    user_id: str
    created_at: datetime
