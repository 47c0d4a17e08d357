"""
Comment endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from postr.errors import NotFoundError
from postr.validation import CreateComment, UpdateComment, require_uuid
from postr_api import responses
from postr_api.dependencies import CommentServiceDep

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("", summary="List comments")
async def list_comments(
    service: CommentServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    """Comments, newest first, with author embedded."""
    return responses.paginated(await service.list(page=page, limit=limit))


@router.get("/{comment_id}", summary="Get comment by ID")
async def get_comment(comment_id: str, service: CommentServiceDep):
    comment = await service.get(require_uuid(comment_id))
    if comment is None:
        raise NotFoundError("Comment")
    return responses.success(comment.to_dict())


@router.post("", status_code=201, summary="Create comment")
async def create_comment(payload: CreateComment, service: CommentServiceDep):
    comment = await service.create(
        content=payload.content,
        post_id=payload.post_id,
        author_id=payload.author_id,
    )
    return responses.created(comment.to_dict())


@router.put("/{comment_id}", summary="Update comment")
async def update_comment(
    comment_id: str,
    payload: UpdateComment,
    service: CommentServiceDep,
):
    comment = await service.update(require_uuid(comment_id), **payload.changes())
    if comment is None:
        raise NotFoundError("Comment")
    return responses.success(comment.to_dict())


@router.delete("/{comment_id}", summary="Delete comment")
async def delete_comment(comment_id: str, service: CommentServiceDep):
    if not await service.delete(require_uuid(comment_id)):
        raise NotFoundError("Comment")
    return responses.success({"message": "Comment deleted successfully"})
