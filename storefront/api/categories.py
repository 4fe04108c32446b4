from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List
import logging

from storefront.api.responses import success
from storefront.auth.dependencies import require_admin
from storefront.schemas.category import CategoryChanges, CategoryResponse
from storefront.services.category_service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Categories"])


class CategoryListResponse(BaseModel):
    items: List[CategoryResponse] = Field(..., description="All categories ordered by name")


def get_category_service() -> CategoryService:
    """Dependency to get category service"""
    return CategoryService()


@router.get(
    "/categories-list",
    response_model=CategoryListResponse,
    summary="List all categories",
    description="Get all product categories ordered by name.",
)
async def list_categories(category_service: CategoryService = Depends(get_category_service)):
    """List all categories"""
    return {"items": category_service.list_categories()}


@router.post(
    "/save-categories",
    summary="Apply category changes",
    description="""
    Apply a batch of category changes in order: deletes, renames, additions.

    **Cascades:**
    - Deleting a category deletes every product filed under it
    - Renaming a category moves its products to the new path (`slugify(newName)`)

    Steps are not transactional; a failure part way leaves earlier steps applied.
    """,
    responses={
        200: {"description": "Categories saved; returns the full category list"},
        400: {"description": "Invalid request data"},
        401: {"description": "No token provided"},
        403: {"description": "Invalid or expired token"}
    }
)
async def save_categories(
    changes: CategoryChanges,
    current_user: dict = Depends(require_admin),
    category_service: CategoryService = Depends(get_category_service)
):
    logger.info(
        f"Saving categories: {len(changes.deleted_categories)} deleted, "
        f"{len(changes.modified_categories)} modified, {len(changes.added_categories)} added"
    )
    categories = category_service.save_categories(changes)
    return success({"message": "Categories updated successfully", "items": categories})
