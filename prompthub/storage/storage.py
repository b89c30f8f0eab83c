from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from prompthub.dto.entities import Category, Prompt, PromptWithCategory, SavedPrompt
from prompthub.dto.req.category_req import CategoryCreate
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.storage.errors import StorageValidationError


class Storage(ABC):
    """
    Contract for everything that owns categories, prompts and saved prompts.

    Read paths report "not found" as None / empty list, never as an exception.
    Every returned object is a fresh snapshot; mutating it does not touch the store.
    Prompts are only ever handed out joined with their category.
    """

    # Categories

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        ...

    @abstractmethod
    async def get_category(self, category_id: str) -> Category | None:
        ...

    @abstractmethod
    async def create_category(self, data: CategoryCreate) -> Category:
        ...

    @abstractmethod
    async def delete_category(self, category_id: str) -> bool:
        """
        Delete a category.

        Returns:
            False if the category does not exist

        Raises:
            CategoryInUseError while any prompt still references it
        """
        ...

    # Prompts

    @abstractmethod
    async def list_prompts(self) -> list[PromptWithCategory]:
        ...

    @abstractmethod
    async def get_prompt(self, prompt_id: str) -> PromptWithCategory | None:
        ...

    @abstractmethod
    async def list_prompts_by_category(self, category_id: str) -> list[PromptWithCategory]:
        ...

    @abstractmethod
    async def list_featured_prompts(self) -> list[PromptWithCategory]:
        ...

    @abstractmethod
    async def search_prompts(self, query: str) -> list[PromptWithCategory]:
        """Case-insensitive substring match on title, description or content."""
        ...

    @abstractmethod
    async def create_prompt(self, data: PromptCreate) -> Prompt:
        """
        Raises:
            StorageValidationError if data.category_id does not resolve
        """
        ...

    @abstractmethod
    async def update_prompt(self, prompt_id: str, data: PromptUpdate) -> Prompt | None:
        """Merge the sent fields and advance updated_at. id, created_at and counters never change."""
        ...

    @abstractmethod
    async def delete_prompt(self, prompt_id: str) -> bool:
        ...

    @abstractmethod
    async def increment_views(self, prompt_id: str) -> None:
        ...

    @abstractmethod
    async def increment_likes(self, prompt_id: str) -> None:
        ...

    # Saved prompts

    @abstractmethod
    async def list_saved_prompts(self, user_id: str) -> list[PromptWithCategory]:
        ...

    @abstractmethod
    async def save_prompt(self, prompt_id: str, user_id: str) -> SavedPrompt:
        """Idempotent: an existing (prompt_id, user_id) row is returned instead of duplicated."""
        ...

    @abstractmethod
    async def unsave_prompt(self, prompt_id: str, user_id: str) -> None:
        ...

    @abstractmethod
    async def is_prompt_saved(self, prompt_id: str, user_id: str) -> bool:
        ...

    # Bootstrap

    @abstractmethod
    async def load_seed(self, categories: Iterable[Category], prompts: Iterable[Prompt]) -> None:
        """
        Import categories and prompts with their ids, counters and timestamps.

        Raises:
            StorageValidationError if a prompt references a category that is
            neither in the batch nor already stored
        """
        ...


def check_seed_references(
    categories: Iterable[Category],
    prompts: Iterable[Prompt],
    known_category_ids: Iterable[str] = (),
) -> None:
    available = {c.id for c in categories} | set(known_category_ids)
    for p in prompts:
        if p.category_id not in available:
            raise StorageValidationError(f"Seed prompt {p.id} references unknown category {p.category_id}.")


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def next_updated_at(previous: datetime) -> datetime:
    """Current time, nudged past previous so updated_at strictly advances."""
    now = datetime.now(timezone.utc)
    floor = as_utc(previous) + timedelta(microseconds=1)
    return now if now >= floor else floor
