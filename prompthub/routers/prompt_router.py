from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from prompthub.dto.entities import Prompt, PromptWithCategory
from prompthub.dto.req.prompt_req import PromptCreate, PromptUpdate
from prompthub.routers.deps import get_storage
from prompthub.services.prompt_query import PromptFilter, query_prompts
from prompthub.storage.errors import StorageUnavailableError
from prompthub.storage.storage import Storage
from prompthub.utils.audit_logger import log_catalog_action

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/prompts")
async def list_prompts(
    category: str | None = Query(default=None, max_length=64),
    search: str | None = Query(default=None, max_length=200),
    featured: bool = Query(default=False),
    storage: Storage = Depends(get_storage),
) -> list[PromptWithCategory]:
    """List prompts; category, search and featured narrow the result together."""
    return await query_prompts(
        storage,
        PromptFilter(category_id=category, search=search, featured_only=featured),
    )


@router.get("/prompts/{prompt_id}")
async def get_prompt(prompt_id: str, storage: Storage = Depends(get_storage)) -> PromptWithCategory:
    prompt = await storage.get_prompt(prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")

    # The view count is best effort; a prompt served in degraded mode is still returned.
    try:
        await storage.increment_views(prompt_id)
    except StorageUnavailableError as e:
        logger.warning(f"View for prompt {prompt_id} not recorded: {e}")
    return prompt


@router.post("/prompts", status_code=201)
async def create_prompt(
    request: Request,
    body: PromptCreate,
    storage: Storage = Depends(get_storage),
) -> Prompt:
    prompt = await storage.create_prompt(body)
    logger.info(f"Prompt created: {prompt.title}")
    log_catalog_action("prompt_created", request, {"prompt_id": prompt.id, "title": prompt.title})
    return prompt


@router.patch("/prompts/{prompt_id}")
async def update_prompt(
    request: Request,
    prompt_id: str,
    body: PromptUpdate,
    storage: Storage = Depends(get_storage),
) -> Prompt:
    prompt = await storage.update_prompt(prompt_id, body)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    log_catalog_action("prompt_updated", request, {"prompt_id": prompt_id, "fields": sorted(body.changes())})
    return prompt


@router.delete("/prompts/{prompt_id}")
async def delete_prompt(
    request: Request,
    prompt_id: str,
    storage: Storage = Depends(get_storage),
) -> dict[str, str]:
    if not await storage.delete_prompt(prompt_id):
        raise HTTPException(status_code=404, detail="Prompt not found")
    log_catalog_action("prompt_deleted", request, {"prompt_id": prompt_id})
    return {"message": "Prompt deleted successfully"}


@router.post("/prompts/{prompt_id}/views")
async def record_view(prompt_id: str, storage: Storage = Depends(get_storage)) -> dict[str, str]:
    await storage.increment_views(prompt_id)
    return {"message": "ok"}


@router.post("/prompts/{prompt_id}/like")
async def like_prompt(prompt_id: str, storage: Storage = Depends(get_storage)) -> dict[str, str]:
    await storage.increment_likes(prompt_id)
    return {"message": "Prompt liked successfully"}
