"""
Post endpoints.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Query

from postr.errors import NotFoundError
from postr.validation import CreatePost, UpdatePost, require_uuid
from postr_api import responses
from postr_api.dependencies import CommentServiceDep, PostServiceDep

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", summary="List posts")
async def list_posts(
    service: PostServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    published: Optional[bool] = None,
    author_id: Annotated[Optional[str], Query(alias="authorId")] = None,
    category_id: Annotated[Optional[str], Query(alias="categoryId")] = None,
    category_slug: Annotated[Optional[str], Query(alias="categorySlug")] = None,
):
    """Posts, newest first, with author and category embedded."""
    if author_id is not None:
        require_uuid(author_id, "authorId", "Invalid author ID")
    if category_id is not None:
        require_uuid(category_id, "categoryId", "Invalid category ID")

    result = await service.list(
        page=page,
        limit=limit,
        published=published,
        author_id=author_id,
        category_id=category_id,
        category_slug=category_slug,
    )
    return responses.paginated(result)


@router.get("/{post_id}", summary="Get post by ID")
async def get_post(post_id: str, service: PostServiceDep):
    """The post with author, category and comments (each with its author)."""
    post = await service.get(require_uuid(post_id), with_relations=True)
    if post is None:
        raise NotFoundError("Post")
    return responses.success(post.to_dict())


@router.get("/{post_id}/comments", summary="List comments on a post")
async def list_post_comments(
    post_id: str,
    service: PostServiceDep,
    comment_service: CommentServiceDep,
):
    post = await service.get(require_uuid(post_id))
    if post is None:
        raise NotFoundError("Post")
    comments = await comment_service.list_for_post(post.id)
    return responses.success([comment.to_dict() for comment in comments])


@router.post("", status_code=201, summary="Create post")
async def create_post(payload: CreatePost, service: PostServiceDep):
    """Author and category must exist."""
    post = await service.create(
        title=payload.title,
        content=payload.content,
        published=payload.published,
        author_id=payload.author_id,
        category_id=payload.category_id,
    )
    return responses.created(post.to_dict())


@router.put("/{post_id}", summary="Update post")
async def update_post(post_id: str, payload: UpdatePost, service: PostServiceDep):
    post = await service.update(require_uuid(post_id), **payload.changes())
    if post is None:
        raise NotFoundError("Post")
    return responses.success(post.to_dict())


@router.delete("/{post_id}", summary="Delete post")
async def delete_post(post_id: str, service: PostServiceDep):
    if not await service.delete(require_uuid(post_id)):
        raise NotFoundError("Post")
    return responses.success({"message": "Post deleted successfully"})
