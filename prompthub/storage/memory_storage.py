from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone

from prompthub.dto.entities import Category, Prompt, PromptWithCategory, SavedPrompt
from prompthub.dto.req.category_req import CategoryCreate
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.storage.errors import CategoryInUseError, StorageValidationError
from prompthub.storage.seed_data import seed_categories, seed_prompts
from prompthub.storage.storage import Storage, check_seed_references, next_updated_at

logger = logging.getLogger(__name__)


class MemStorage(Storage):
    """
    Dict-backed store for a single event loop.

    Every operation runs without awaiting anything, so each one is atomic with
    respect to other requests on the same loop.
    """

    def __init__(self, *, seed: bool = True) -> None:
        self._categories: dict[str, Category] = {}
        self._prompts: dict[str, Prompt] = {}
        self._saved_prompts: dict[str, SavedPrompt] = {}
        if seed:
            self._import(seed_categories(), seed_prompts())
            logger.info(
                f"In-memory storage seeded with {len(self._categories)} categories "
                f"and {len(self._prompts)} prompts"
            )

    def _import(self, categories: Iterable[Category], prompts: Iterable[Prompt]) -> None:
        categories = list(categories)
        prompts = list(prompts)
        check_seed_references(categories, prompts, self._categories.keys())
        for c in categories:
            self._categories[c.id] = c.model_copy()
        for p in prompts:
            self._prompts[p.id] = p.model_copy()

    def _join(self, prompt: Prompt) -> PromptWithCategory | None:
        category = self._categories.get(prompt.category_id)
        if category is None:
            return None
        return PromptWithCategory(**prompt.model_dump(), category=category.model_dump())

    def _join_all(self, prompts: Iterable[Prompt]) -> list[PromptWithCategory]:
        joined = (self._join(p) for p in prompts)
        return [p for p in joined if p is not None]

    # Categories

    async def list_categories(self) -> list[Category]:
        return [c.model_copy() for c in self._categories.values()]

    async def get_category(self, category_id: str) -> Category | None:
        category = self._categories.get(category_id)
        return category.model_copy() if category else None

    async def create_category(self, data: CategoryCreate) -> Category:
        category = Category(id=str(uuid.uuid4()), **data.model_dump())
        self._categories[category.id] = category
        return category.model_copy()

    async def delete_category(self, category_id: str) -> bool:
        if category_id not in self._categories:
            return False
        in_use = sum(1 for p in self._prompts.values() if p.category_id == category_id)
        if in_use:
            raise CategoryInUseError(category_id, in_use)
        del self._categories[category_id]
        return True

    # Prompts

    async def list_prompts(self) -> list[PromptWithCategory]:
        return self._join_all(self._prompts.values())

    async def get_prompt(self, prompt_id: str) -> PromptWithCategory | None:
        prompt = self._prompts.get(prompt_id)
        if prompt is None:
            return None
        return self._join(prompt)

    async def list_prompts_by_category(self, category_id: str) -> list[PromptWithCategory]:
        return self._join_all(p for p in self._prompts.values() if p.category_id == category_id)

    async def list_featured_prompts(self) -> list[PromptWithCategory]:
        return self._join_all(p for p in self._prompts.values() if p.is_featured)

    async def search_prompts(self, query: str) -> list[PromptWithCategory]:
        q = query.lower()
        return self._join_all(
            p
            for p in self._prompts.values()
            if q in p.title.lower() or q in p.description.lower() or q in p.content.lower()
        )

    async def create_prompt(self, data: PromptCreate) -> Prompt:
        if data.category_id not in self._categories:
            raise StorageValidationError(f"Category {data.category_id} does not exist.")
        now = datetime.now(timezone.utc)
        prompt = Prompt(
            id=str(uuid.uuid4()),
            **data.model_dump(),
            views=0,
            likes=0,
            created_at=now,
            updated_at=now,
        )
        self._prompts[prompt.id] = prompt
        return prompt.model_copy()

    async def update_prompt(self, prompt_id: str, data: PromptUpdate) -> Prompt | None:
        prompt = self._prompts.get(prompt_id)
        if prompt is None:
            return None
        changes = data.changes()
        if "category_id" in changes and changes["category_id"] not in self._categories:
            raise StorageValidationError(f"Category {changes['category_id']} does not exist.")
        updated = prompt.model_copy(update={**changes, "updated_at": next_updated_at(prompt.updated_at)})
        self._prompts[prompt_id] = updated
        return updated.model_copy()

    async def delete_prompt(self, prompt_id: str) -> bool:
        if self._prompts.pop(prompt_id, None) is None:
            return False
        for saved_id in [k for k, s in self._saved_prompts.items() if s.prompt_id == prompt_id]:
            del self._saved_prompts[saved_id]
        return True

    async def increment_views(self, prompt_id: str) -> None:
        prompt = self._prompts.get(prompt_id)
        if prompt is not None:
            prompt.views += 1

    async def increment_likes(self, prompt_id: str) -> None:
        prompt = self._prompts.get(prompt_id)
        if prompt is not None:
            prompt.likes += 1

    # Saved prompts

    def _find_saved(self, prompt_id: str, user_id: str) -> SavedPrompt | None:
        for saved in self._saved_prompts.values():
            if saved.prompt_id == prompt_id and saved.user_id == user_id:
                return saved
        return None

    async def list_saved_prompts(self, user_id: str) -> list[PromptWithCategory]:
        # Rows whose prompt is gone are skipped, not reported.
        targets = (self._prompts.get(s.prompt_id) for s in self._saved_prompts.values() if s.user_id == user_id)
        return self._join_all(p for p in targets if p is not None)

    async def save_prompt(self, prompt_id: str, user_id: str) -> SavedPrompt:
        existing = self._find_saved(prompt_id, user_id)
        if existing is not None:
            return existing.model_copy()
        if prompt_id not in self._prompts:
            raise StorageValidationError(f"Prompt {prompt_id} does not exist.")
        saved = SavedPrompt(
            id=str(uuid.uuid4()),
            prompt_id=prompt_id,
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
        )
        self._saved_prompts[saved.id] = saved
        return saved.model_copy()

    async def unsave_prompt(self, prompt_id: str, user_id: str) -> None:
        saved = self._find_saved(prompt_id, user_id)
        if saved is not None:
            del self._saved_prompts[saved.id]

    async def is_prompt_saved(self, prompt_id: str, user_id: str) -> bool:
        return self._find_saved(prompt_id, user_id) is not None

    # Bootstrap

    async def load_seed(self, categories: Iterable[Category], prompts: Iterable[Prompt]) -> None:
        self._import(categories, prompts)
