from __future__ import annotations

from dataclasses import dataclass

from prompthub.dto.entities import PromptWithCategory
from prompthub.storage.storage import Storage


@dataclass
class PromptFilter:
    category_id: str | None = None
    search: str | None = None
    featured_only: bool = False


async def query_prompts(storage: Storage, filters: PromptFilter) -> list[PromptWithCategory]:
    """
    Apply search, category and featured filters as successive narrowing steps.

    A blank search string means "no search". Order is whatever the underlying
    listing returns.
    """
    search = (filters.search or "").strip()
    if search:
        prompts = await storage.search_prompts(search)
    else:
        prompts = await storage.list_prompts()

    if filters.category_id:
        prompts = [p for p in prompts if p.category_id == filters.category_id]

    if filters.featured_only:
        prompts = [p for p in prompts if p.is_featured]

    return prompts
