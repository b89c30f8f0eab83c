from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from prompthub.dto.entities import Category
from prompthub.dto.req.category_req import CategoryCreate
from prompthub.routers.deps import get_storage
from prompthub.storage.storage import Storage
from prompthub.utils.audit_logger import log_catalog_action

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/categories")
async def list_categories(storage: Storage = Depends(get_storage)) -> list[Category]:
    return await storage.list_categories()


@router.get("/categories/{category_id}")
async def get_category(category_id: str, storage: Storage = Depends(get_storage)) -> Category:
    category = await storage.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("/categories", status_code=201)
async def create_category(
    request: Request,
    body: CategoryCreate,
    storage: Storage = Depends(get_storage),
) -> Category:
    category = await storage.create_category(body)
    logger.info(f"Category created: {category.name}")
    log_catalog_action("category_created", request, {"category_id": category.id, "name": category.name})
    return category


@router.delete("/categories/{category_id}")
async def delete_category(
    request: Request,
    category_id: str,
    storage: Storage = Depends(get_storage),
) -> dict[str, str]:
    """Delete a category. Refused with 409 while prompts still reference it."""
    deleted = await storage.delete_category(category_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Category not found")
    log_catalog_action("category_deleted", request, {"category_id": category_id})
    return {"message": "Category deleted successfully"}
