from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from prompthub.dto.entities import PromptWithCategory, SavedPrompt
from prompthub.dto.req.saved_prompt_req import SavePromptReq
from prompthub.routers.deps import get_current_user_id, get_storage
from prompthub.storage.storage import Storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/saved-prompts")
async def list_saved_prompts(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> list[PromptWithCategory]:
    return await storage.list_saved_prompts(user_id)


@router.post("/saved-prompts", status_code=201)
async def save_prompt(
    body: SavePromptReq,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> SavedPrompt:
    """Save a prompt for the caller. Saving again returns the existing row with the same status."""
    saved = await storage.save_prompt(body.prompt_id, user_id)
    logger.info(f"Prompt {body.prompt_id} saved for user {user_id}")
    return saved


@router.get("/saved-prompts/{prompt_id}")
async def is_prompt_saved(
    prompt_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> dict[str, bool]:
    return {"saved": await storage.is_prompt_saved(prompt_id, user_id)}


@router.delete("/saved-prompts/{prompt_id}")
async def unsave_prompt(
    prompt_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
) -> dict[str, str]:
    await storage.unsave_prompt(prompt_id, user_id)
    return {"message": "Prompt unsaved successfully"}
