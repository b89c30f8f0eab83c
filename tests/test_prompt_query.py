from __future__ import annotations

import pytest

from prompthub.services.prompt_query import PromptFilter, query_prompts
from prompthub.storage.storage import Storage


@pytest.mark.asyncio
async def test_no_filters_returns_everything(any_storage: Storage) -> None:
    result = await query_prompts(any_storage, PromptFilter())
    assert len(result) == 14


@pytest.mark.asyncio
async def test_blank_search_means_no_search(any_storage: Storage) -> None:
    result = await query_prompts(any_storage, PromptFilter(search="   "))
    assert len(result) == 14


@pytest.mark.asyncio
async def test_category_and_featured_combine(any_storage: Storage) -> None:
    result = await query_prompts(any_storage, PromptFilter(category_id="c-coding", featured_only=True))
    assert {p.id for p in result} == {"p-code-explainer", "p-debug-assistant"}


@pytest.mark.asyncio
async def test_search_is_narrowed_by_category(any_storage: Storage) -> None:
    hit = await query_prompts(any_storage, PromptFilter(search="saas", category_id="c-marketing"))
    assert [p.id for p in hit] == ["p-landing-page"]

    miss = await query_prompts(any_storage, PromptFilter(search="saas", category_id="c-coding"))
    assert miss == []


@pytest.mark.asyncio
async def test_search_is_narrowed_by_featured(any_storage: Storage) -> None:
    result = await query_prompts(any_storage, PromptFilter(search="saas", featured_only=True))
    assert [p.id for p in result] == ["p-landing-page"]


@pytest.mark.asyncio
async def test_search_is_trimmed(any_storage: Storage) -> None:
    result = await query_prompts(any_storage, PromptFilter(search="  SaaS  "))
    assert [p.id for p in result] == ["p-landing-page"]


@pytest.mark.asyncio
async def test_unknown_category_yields_empty(any_storage: Storage) -> None:
    assert await query_prompts(any_storage, PromptFilter(category_id="c-missing")) == []
