"""
User endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from postr.errors import NotFoundError
from postr.validation import CreateUser, UpdateUser, require_uuid
from postr_api import responses
from postr_api.dependencies import PostServiceDep, UserServiceDep

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", summary="List users")
async def list_users(
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Users ordered by creation time, paginated."""
    return responses.paginated(await service.list(page=page, limit=limit))


@router.get("/{user_id}", summary="Get user by ID")
async def get_user(user_id: str, service: UserServiceDep):
    user = await service.get(require_uuid(user_id))
    if user is None:
        raise NotFoundError("User")
    return responses.success(user.to_dict())


@router.get("/{user_id}/posts", summary="List a user's posts")
async def list_user_posts(
    user_id: str,
    service: UserServiceDep,
    post_service: PostServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Posts written by the user, newest first, with category embedded."""
    user = await service.get(require_uuid(user_id))
    if user is None:
        raise NotFoundError("User")
    return responses.paginated(
        await post_service.list(page=page, limit=limit, author_id=user.id)
    )


@router.post("", status_code=201, summary="Create user")
async def create_user(payload: CreateUser, service: UserServiceDep):
    user = await service.create(name=payload.name, avatar_url=payload.avatar_url)
    return responses.created(user.to_dict())


@router.put("/{user_id}", summary="Update user")
async def update_user(user_id: str, payload: UpdateUser, service: UserServiceDep):
    """Only the fields present in the body change."""
    user = await service.update(require_uuid(user_id), **payload.changes())
    if user is None:
        raise NotFoundError("User")
    return responses.success(user.to_dict())


@router.delete("/{user_id}", summary="Delete user")
async def delete_user(user_id: str, service: UserServiceDep):
    """Delete the user together with their posts and comments."""
    if not await service.delete(require_uuid(user_id)):
        raise NotFoundError("User")
    return responses.success({"message": "User deleted successfully"})
