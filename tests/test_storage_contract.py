from __future__ import annotations

import pytest

from prompthub.dto.req.category_req import CategoryCreate
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.services.prompt_query import PromptFilter, query_prompts
from prompthub.storage.errors import CategoryInUseError, StorageValidationError
from prompthub.storage.seed_data import SEED_CATEGORIES, SEED_PROMPTS
from prompthub.storage.storage import Storage


def _new_prompt(category_id: str = "c-coding", **overrides: object) -> PromptCreate:
    fields: dict[str, object] = {
        "title": "Refactor Helper",
        "description": "Suggests refactorings for a function.",
        "content": "Refactor the following function: [CODE]",
        "category_id": category_id,
    }
    fields.update(overrides)
    return PromptCreate(**fields)


@pytest.mark.asyncio
async def test_seeded_catalog_is_listed(any_storage: Storage) -> None:
    categories = await any_storage.list_categories()
    prompts = await any_storage.list_prompts()
    assert {c.id for c in categories} == {row["id"] for row in SEED_CATEGORIES}
    assert {p.id for p in prompts} == {row["id"] for row in SEED_PROMPTS}


@pytest.mark.asyncio
async def test_prompts_always_carry_their_category(any_storage: Storage) -> None:
    for prompt in await any_storage.list_prompts():
        assert prompt.category.id == prompt.category_id


@pytest.mark.asyncio
async def test_get_missing_returns_none(any_storage: Storage) -> None:
    assert await any_storage.get_category("nope") is None
    assert await any_storage.get_prompt("nope") is None


@pytest.mark.asyncio
async def test_create_category_assigns_id(any_storage: Storage) -> None:
    created = await any_storage.create_category(CategoryCreate(name="Research", icon="fas fa-flask", color="teal-500"))
    assert created.id
    assert created.description is None
    fetched = await any_storage.get_category(created.id)
    assert fetched == created


@pytest.mark.asyncio
async def test_delete_category_in_use_is_refused(any_storage: Storage) -> None:
    with pytest.raises(CategoryInUseError) as exc_info:
        await any_storage.delete_category("c-coding")
    assert exc_info.value.prompt_count == 3
    assert await any_storage.get_category("c-coding") is not None


@pytest.mark.asyncio
async def test_delete_unused_and_missing_category(any_storage: Storage) -> None:
    created = await any_storage.create_category(CategoryCreate(name="Empty", icon="i", color="c"))
    assert await any_storage.delete_category(created.id) is True
    assert await any_storage.get_category(created.id) is None
    assert await any_storage.delete_category(created.id) is False


@pytest.mark.asyncio
async def test_create_prompt_starts_with_zero_counters(any_storage: Storage) -> None:
    prompt = await any_storage.create_prompt(_new_prompt())
    assert prompt.views == 0
    assert prompt.likes == 0
    assert prompt.is_featured is False
    assert prompt.created_at == prompt.updated_at

    fetched = await any_storage.get_prompt(prompt.id)
    assert fetched is not None
    assert fetched.category.name == "Coding"


@pytest.mark.asyncio
async def test_create_prompt_with_unknown_category_is_rejected(any_storage: Storage) -> None:
    with pytest.raises(StorageValidationError):
        await any_storage.create_prompt(_new_prompt(category_id="c-missing"))
    assert len(await any_storage.list_prompts()) == len(SEED_PROMPTS)


@pytest.mark.asyncio
async def test_update_prompt_merges_fields_and_advances_updated_at(any_storage: Storage) -> None:
    before = await any_storage.get_prompt("p-sql-query")
    assert before is not None

    updated = await any_storage.update_prompt("p-sql-query", PromptUpdate(title="SQL Wizard", is_featured=True))
    assert updated is not None
    assert updated.title == "SQL Wizard"
    assert updated.is_featured is True
    assert updated.content == before.content
    assert updated.views == before.views
    assert updated.created_at == before.created_at
    assert updated.updated_at > before.updated_at

    again = await any_storage.update_prompt("p-sql-query", PromptUpdate(description="Writes queries."))
    assert again is not None
    assert again.updated_at > updated.updated_at


@pytest.mark.asyncio
async def test_update_prompt_missing_or_bad_category(any_storage: Storage) -> None:
    assert await any_storage.update_prompt("nope", PromptUpdate(title="x")) is None
    with pytest.raises(StorageValidationError):
        await any_storage.update_prompt("p-sql-query", PromptUpdate(category_id="c-missing"))


@pytest.mark.asyncio
async def test_update_prompt_can_move_category(any_storage: Storage) -> None:
    updated = await any_storage.update_prompt("p-sql-query", PromptUpdate(category_id="c-business"))
    assert updated is not None
    fetched = await any_storage.get_prompt("p-sql-query")
    assert fetched is not None
    assert fetched.category.id == "c-business"


@pytest.mark.asyncio
async def test_delete_prompt_removes_saved_rows(any_storage: Storage) -> None:
    await any_storage.save_prompt("p-poem-generator", "alice")
    assert await any_storage.delete_prompt("p-poem-generator") is True
    assert await any_storage.get_prompt("p-poem-generator") is None
    assert await any_storage.is_prompt_saved("p-poem-generator", "alice") is False
    assert await any_storage.list_saved_prompts("alice") == []
    assert await any_storage.delete_prompt("p-poem-generator") is False


@pytest.mark.asyncio
async def test_counters_increment_by_one(any_storage: Storage) -> None:
    before = await any_storage.get_prompt("p-cold-email")
    assert before is not None

    await any_storage.increment_views("p-cold-email")
    await any_storage.increment_views("p-cold-email")
    await any_storage.increment_likes("p-cold-email")

    after = await any_storage.get_prompt("p-cold-email")
    assert after is not None
    assert after.views == before.views + 2
    assert after.likes == before.likes + 1
    assert after.updated_at == before.updated_at


@pytest.mark.asyncio
async def test_counters_on_missing_prompt_are_noops(any_storage: Storage) -> None:
    await any_storage.increment_views("nope")
    await any_storage.increment_likes("nope")
    assert await any_storage.get_prompt("nope") is None


@pytest.mark.asyncio
async def test_filters_by_category_and_featured(any_storage: Storage) -> None:
    coding = await any_storage.list_prompts_by_category("c-coding")
    assert {p.id for p in coding} == {"p-code-explainer", "p-debug-assistant", "p-sql-query"}
    assert await any_storage.list_prompts_by_category("c-missing") == []

    featured = await any_storage.list_featured_prompts()
    assert len(featured) == 7
    assert all(p.is_featured for p in featured)


@pytest.mark.asyncio
async def test_search_is_case_insensitive_over_text_fields(any_storage: Storage) -> None:
    assert [p.id for p in await any_storage.search_prompts("saas")] == ["p-landing-page"]
    assert [p.id for p in await any_storage.search_prompts("SAAS")] == ["p-landing-page"]
    assert await any_storage.search_prompts("zzz-no-match") == []


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(any_storage: Storage) -> None:
    assert await any_storage.search_prompts("%") == []
    created = await any_storage.create_prompt(_new_prompt(title="100% Coverage"))
    assert [p.id for p in await any_storage.search_prompts("0% c")] == [created.id]


@pytest.mark.asyncio
async def test_search_folds_non_ascii_case(any_storage: Storage) -> None:
    created = await any_storage.create_prompt(_new_prompt(category_id="c-writing", title="Été Recap"))
    assert [p.id for p in await any_storage.search_prompts("été")] == [created.id]
    assert [p.id for p in await any_storage.search_prompts("ÉTÉ recap")] == [created.id]


@pytest.mark.asyncio
async def test_save_prompt_is_idempotent(any_storage: Storage) -> None:
    first = await any_storage.save_prompt("p-blog-writer", "alice")
    second = await any_storage.save_prompt("p-blog-writer", "alice")
    assert first.id == second.id
    assert first.prompt_id == "p-blog-writer"
    assert first.user_id == "alice"

    saved = await any_storage.list_saved_prompts("alice")
    assert [p.id for p in saved] == ["p-blog-writer"]


@pytest.mark.asyncio
async def test_save_unknown_prompt_is_rejected(any_storage: Storage) -> None:
    with pytest.raises(StorageValidationError):
        await any_storage.save_prompt("nope", "alice")


@pytest.mark.asyncio
async def test_saved_prompts_are_per_user(any_storage: Storage) -> None:
    await any_storage.save_prompt("p-blog-writer", "alice")
    await any_storage.save_prompt("p-code-explainer", "bob")

    assert await any_storage.is_prompt_saved("p-blog-writer", "alice") is True
    assert await any_storage.is_prompt_saved("p-blog-writer", "bob") is False
    assert [p.id for p in await any_storage.list_saved_prompts("bob")] == ["p-code-explainer"]
    assert await any_storage.list_saved_prompts("carol") == []


@pytest.mark.asyncio
async def test_unsave_prompt(any_storage: Storage) -> None:
    await any_storage.save_prompt("p-blog-writer", "alice")
    await any_storage.unsave_prompt("p-blog-writer", "alice")
    assert await any_storage.is_prompt_saved("p-blog-writer", "alice") is False
    # Unsaving something that is not saved is fine.
    await any_storage.unsave_prompt("p-blog-writer", "alice")


@pytest.mark.asyncio
async def test_returned_objects_are_snapshots(any_storage: Storage) -> None:
    prompt = await any_storage.get_prompt("p-blog-writer")
    assert prompt is not None
    prompt.title = "Changed locally"
    prompt.views = -1

    fresh = await any_storage.get_prompt("p-blog-writer")
    assert fresh is not None
    assert fresh.title == "Blog Post Writer"
    assert fresh.views >= 0

    category = await any_storage.get_category("c-writing")
    assert category is not None
    category.name = "Changed"
    again = await any_storage.get_category("c-writing")
    assert again is not None
    assert again.name == "Writing"


@pytest.mark.asyncio
async def test_search_matches_content_only_field(any_storage: Storage) -> None:
    prompt = await any_storage.get_prompt("p-landing-page")
    assert prompt is not None
    assert "saas" not in prompt.title.lower()
    assert "saas" not in prompt.description.lower()
    assert [p.id for p in await any_storage.search_prompts("sAaS")] == ["p-landing-page"]


@pytest.mark.asyncio
async def test_n_increments_from_zero_yield_n(any_storage: Storage) -> None:
    prompt = await any_storage.create_prompt(_new_prompt())
    for _ in range(5):
        await any_storage.increment_views(prompt.id)
    for _ in range(3):
        await any_storage.increment_likes(prompt.id)

    fetched = await any_storage.get_prompt(prompt.id)
    assert fetched is not None
    assert (fetched.views, fetched.likes) == (5, 3)


@pytest.mark.asyncio
async def test_category_filter_and_search_intersect(any_storage: Storage) -> None:
    await any_storage.create_prompt(_new_prompt(category_id="c-business", title="Email Debugger"))
    by_category = {p.id for p in await any_storage.list_prompts_by_category("c-coding")}
    by_search = {p.id for p in await any_storage.search_prompts("debug")}

    combined = await query_prompts(any_storage, PromptFilter(category_id="c-coding", search="debug"))
    assert {p.id for p in combined} == by_category & by_search
    assert by_search - by_category
    assert by_category - by_search
