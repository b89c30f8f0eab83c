from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from prompthub.config import settings
from prompthub.routers.deps import get_storage
from prompthub.storage.errors import StorageError
from prompthub.storage.storage import Storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health(storage: Storage = Depends(get_storage)) -> dict[str, Any]:
    counts: dict[str, int] | None
    try:
        counts = {
            "categories": len(await storage.list_categories()),
            "prompts": len(await storage.list_prompts()),
        }
        storage_ok = True
    except StorageError as e:
        logger.warning(f"Health check could not read storage: {e}")
        counts = None
        storage_ok = False

    return {
        "ok": storage_ok,
        "storage": {
            "backend": settings.storage_backend,
            "available": storage_ok,
            "seedFallback": settings.seed_fallback_on_storage_error,
        },
        "ai": {"apiKeyPresent": bool(settings.openai_api_key), "model": settings.openai_model},
        "counts": counts,
    }
