from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from prompthub.dto.entities import Category, Prompt, PromptWithCategory, SavedPrompt
from prompthub.dto.req.category_req import CategoryCreate
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.storage.errors import StorageUnavailableError
from prompthub.storage.memory_storage import MemStorage
from prompthub.storage.storage import Storage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SeedFallbackStorage(Storage):
    """
    Degraded-mode wrapper around a primary store.

    Catalog reads (categories and prompts) that fail with StorageUnavailableError
    are answered from a read-only copy of the bootstrap catalog. Writes and
    saved-prompt operations always go to the primary and propagate its errors.
    """

    def __init__(self, primary: Storage, fallback: Storage | None = None) -> None:
        self._primary = primary
        self._fallback = fallback or MemStorage(seed=True)

    @property
    def primary(self) -> Storage:
        return self._primary

    async def _read(self, name: str, primary: Callable[[], Awaitable[T]], fallback: Callable[[], Awaitable[T]]) -> T:
        try:
            return await primary()
        except StorageUnavailableError as e:
            logger.warning(f"Serving {name} from seed catalog; primary storage unavailable: {e}")
            return await fallback()

    # Catalog reads

    async def list_categories(self) -> list[Category]:
        return await self._read("list_categories", self._primary.list_categories, self._fallback.list_categories)

    async def get_category(self, category_id: str) -> Category | None:
        return await self._read(
            "get_category",
            lambda: self._primary.get_category(category_id),
            lambda: self._fallback.get_category(category_id),
        )

    async def list_prompts(self) -> list[PromptWithCategory]:
        return await self._read("list_prompts", self._primary.list_prompts, self._fallback.list_prompts)

    async def get_prompt(self, prompt_id: str) -> PromptWithCategory | None:
        return await self._read(
            "get_prompt",
            lambda: self._primary.get_prompt(prompt_id),
            lambda: self._fallback.get_prompt(prompt_id),
        )

    async def list_prompts_by_category(self, category_id: str) -> list[PromptWithCategory]:
        return await self._read(
            "list_prompts_by_category",
            lambda: self._primary.list_prompts_by_category(category_id),
            lambda: self._fallback.list_prompts_by_category(category_id),
        )

    async def list_featured_prompts(self) -> list[PromptWithCategory]:
        return await self._read(
            "list_featured_prompts", self._primary.list_featured_prompts, self._fallback.list_featured_prompts
        )

    async def search_prompts(self, query: str) -> list[PromptWithCategory]:
        return await self._read(
            "search_prompts",
            lambda: self._primary.search_prompts(query),
            lambda: self._fallback.search_prompts(query),
        )

    # Everything else goes straight to the primary

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self._primary.create_category(data)

    async def delete_category(self, category_id: str) -> bool:
        return await self._primary.delete_category(category_id)

    async def create_prompt(self, data: PromptCreate) -> Prompt:
        return await self._primary.create_prompt(data)

    async def update_prompt(self, prompt_id: str, data: PromptUpdate) -> Prompt | None:
        return await self._primary.update_prompt(prompt_id, data)

    async def delete_prompt(self, prompt_id: str) -> bool:
        return await self._primary.delete_prompt(prompt_id)

    async def increment_views(self, prompt_id: str) -> None:
        await self._primary.increment_views(prompt_id)

    async def increment_likes(self, prompt_id: str) -> None:
        await self._primary.increment_likes(prompt_id)

    async def list_saved_prompts(self, user_id: str) -> list[PromptWithCategory]:
        return await self._primary.list_saved_prompts(user_id)

    async def save_prompt(self, prompt_id: str, user_id: str) -> SavedPrompt:
        return await self._primary.save_prompt(prompt_id, user_id)

    async def unsave_prompt(self, prompt_id: str, user_id: str) -> None:
        await self._primary.unsave_prompt(prompt_id, user_id)

    async def is_prompt_saved(self, prompt_id: str, user_id: str) -> bool:
        return await self._primary.is_prompt_saved(prompt_id, user_id)

    async def load_seed(self, categories: Iterable[Category], prompts: Iterable[Prompt]) -> None:
        await self._primary.load_seed(categories, prompts)
