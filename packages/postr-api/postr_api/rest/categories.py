"""
Category endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from postr.errors import NotFoundError
from postr.validation import CreateCategory, UpdateCategory, require_uuid
from postr_api import responses
from postr_api.dependencies import CategoryServiceDep, PostServiceDep

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", summary="List categories")
async def list_categories(
    service: CategoryServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Categories ordered by name, paginated."""
    return responses.paginated(await service.list(page=page, limit=limit))


# Declared before /{category_id}/... so "slug" is never read as an id
@router.get("/slug/{slug}", summary="Get category by slug")
async def get_category_by_slug(slug: str, service: CategoryServiceDep):
    category = await service.get_by_slug(slug)
    if category is None:
        raise NotFoundError("Category")
    return responses.success(category.to_dict())


@router.get("/{category_id}", summary="Get category by ID")
async def get_category(category_id: str, service: CategoryServiceDep):
    category = await service.get(require_uuid(category_id))
    if category is None:
        raise NotFoundError("Category")
    return responses.success(category.to_dict())


@router.get("/{category_id}/posts", summary="List posts in a category")
async def list_category_posts(
    category_id: str,
    post_service: PostServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Posts in the category, newest first, with author embedded."""
    result = await post_service.list_by_category(
        require_uuid(category_id), page=page, limit=limit
    )
    return responses.paginated(result)


@router.post("", status_code=201, summary="Create category")
async def create_category(payload: CreateCategory, service: CategoryServiceDep):
    """Slugs are unique; a duplicate slug is rejected by the database."""
    category = await service.create(name=payload.name, slug=payload.slug)
    return responses.created(category.to_dict())


@router.put("/{category_id}", summary="Update category")
async def update_category(
    category_id: str,
    payload: UpdateCategory,
    service: CategoryServiceDep,
):
    category = await service.update(require_uuid(category_id), **payload.changes())
    if category is None:
        raise NotFoundError("Category")
    return responses.success(category.to_dict())


@router.delete("/{category_id}", summary="Delete category")
async def delete_category(category_id: str, service: CategoryServiceDep):
    if not await service.delete(require_uuid(category_id)):
        raise NotFoundError("Category")
    return responses.success({"message": "Category deleted successfully"})
