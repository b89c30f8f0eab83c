from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PromptCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    content: str = Field(min_length=1)
    category_id: str = Field(min_length=1)
    is_featured: bool = False


class PromptUpdate(BaseModel):
    """Partial update; only fields explicitly sent are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    category_id: str | None = Field(default=None, min_length=1)
    is_featured: bool | None = None

    def changes(self) -> dict[str, object]:
        # Explicit nulls are dropped: every editable field is required on the record.
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
