"""
GraphQL schema: queries and mutations.

Inputs are checked with the same validation schemas as the REST API.
Lookups with a malformed id behave like lookups of a missing row.
"""

from typing import Any, Optional, Type, TypeVar

import strawberry
from graphql import GraphQLError
from pydantic import BaseModel
from strawberry.extensions import MaskErrors
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from postr import validation
from postr.config import PostrConfig
from postr.errors import NotFoundError, PostrError, ValidationError
from postr.models import Page
from postr_api.graphql.scalars import SCALAR_MAP
from postr_api.graphql.types import (
    CategoriesConnection,
    CategoryType,
    CommentsConnection,
    CommentType,
    CreateCategoryInput,
    CreateCommentInput,
    CreatePostInput,
    CreateUserInput,
    PaginationInfo,
    PostFilters,
    PostsConnection,
    PostType,
    UpdateCategoryInput,
    UpdateCommentInput,
    UpdatePostInput,
    UpdateUserInput,
    UsersConnection,
    UserType,
    input_data,
)

M = TypeVar("M", bound=BaseModel)


def _validate(model_cls: Type[M], data: Any) -> M:
    """Validate input, reporting field errors in the GraphQL error extensions."""
    try:
        return validation.validate(model_cls, data)
    except ValidationError as e:
        raise GraphQLError(
            e.message,
            extensions={"code": "BAD_USER_INPUT", "validation": e.errors},
        ) from None


def _pagination(page: int, limit: int) -> validation.Pagination:
    return _validate(validation.Pagination, {"page": page, "limit": limit})


def _posts_connection(result: Page) -> PostsConnection:
    return PostsConnection(
        posts=[PostType.from_model(post) for post in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@strawberry.type
class Query:
    # Users

    @strawberry.field
    async def users(self, info: Info, page: int = 1, limit: int = 10) -> UsersConnection:
        args = _pagination(page, limit)
        result = await info.context.users.list(page=args.page, limit=args.limit)
        return UsersConnection(
            users=[UserType.from_model(user) for user in result.items],
            pagination=PaginationInfo.from_page(result),
        )

    @strawberry.field
    async def user(self, info: Info, id: strawberry.ID) -> Optional[UserType]:
        if not validation.is_uuid(id):
            return None
        user = await info.context.users.get(id.lower())
        return UserType.from_model(user) if user else None

    # Categories

    @strawberry.field
    async def categories(self, info: Info, page: int = 1, limit: int = 10) -> CategoriesConnection:
        args = _pagination(page, limit)
        result = await info.context.categories.list(page=args.page, limit=args.limit)
        return CategoriesConnection(
            categories=[CategoryType.from_model(category) for category in result.items],
            pagination=PaginationInfo.from_page(result),
        )

    @strawberry.field
    async def category(self, info: Info, id: strawberry.ID) -> Optional[CategoryType]:
        if not validation.is_uuid(id):
            return None
        category = await info.context.categories.get(id.lower())
        return CategoryType.from_model(category) if category else None

    @strawberry.field
    async def category_by_slug(self, info: Info, slug: str) -> Optional[CategoryType]:
        category = await info.context.categories.get_by_slug(slug)
        return CategoryType.from_model(category) if category else None

    # Posts

    @strawberry.field
    async def posts(
        self,
        info: Info,
        page: int = 1,
        limit: int = 10,
        filters: Optional[PostFilters] = None,
    ) -> PostsConnection:
        args = _pagination(page, limit)
        post_filters = _validate(validation.PostFilters, input_data(filters))
        result = await info.context.posts.list(
            page=args.page,
            limit=args.limit,
            **post_filters.model_dump(),
        )
        return _posts_connection(result)

    @strawberry.field
    async def post(self, info: Info, id: strawberry.ID) -> Optional[PostType]:
        if not validation.is_uuid(id):
            return None
        post = await info.context.posts.get(id.lower())
        return PostType.from_model(post) if post else None

    @strawberry.field
    async def posts_by_category(
        self,
        info: Info,
        category_id: strawberry.ID,
        page: int = 1,
        limit: int = 10,
    ) -> PostsConnection:
        args = _pagination(page, limit)
        if not validation.is_uuid(category_id):
            return _posts_connection(Page(page=args.page, limit=args.limit))
        result = await info.context.posts.list_by_category(
            category_id.lower(), page=args.page, limit=args.limit
        )
        return _posts_connection(result)

    # Comments

    @strawberry.field
    async def comments(self, info: Info, page: int = 1, limit: int = 10) -> CommentsConnection:
        args = _pagination(page, limit)
        result = await info.context.comments.list(page=args.page, limit=args.limit)
        return CommentsConnection(
            comments=[CommentType.from_model(comment) for comment in result.items],
            pagination=PaginationInfo.from_page(result),
        )

    @strawberry.field
    async def comment(self, info: Info, id: strawberry.ID) -> Optional[CommentType]:
        if not validation.is_uuid(id):
            return None
        comment = await info.context.comments.get(id.lower())
        return CommentType.from_model(comment) if comment else None


@strawberry.type
class Mutation:
    # Users

    @strawberry.mutation
    async def create_user(self, info: Info, input: CreateUserInput) -> UserType:
        payload = _validate(validation.CreateUser, input_data(input))
        user = await info.context.users.create(name=payload.name, avatar_url=payload.avatar_url)
        return UserType.from_model(user)

    @strawberry.mutation
    async def update_user(self, info: Info, id: strawberry.ID, input: UpdateUserInput) -> UserType:
        payload = _validate(validation.UpdateUser, input_data(input))
        user = None
        if validation.is_uuid(id):
            user = await info.context.users.update(id.lower(), **payload.changes())
        if user is None:
            raise NotFoundError("User")
        return UserType.from_model(user)

    @strawberry.mutation
    async def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        return validation.is_uuid(id) and await info.context.users.delete(id.lower())

    # Categories

    @strawberry.mutation
    async def create_category(self, info: Info, input: CreateCategoryInput) -> CategoryType:
        payload = _validate(validation.CreateCategory, input_data(input))
        category = await info.context.categories.create(name=payload.name, slug=payload.slug)
        return CategoryType.from_model(category)

    @strawberry.mutation
    async def update_category(
        self, info: Info, id: strawberry.ID, input: UpdateCategoryInput
    ) -> CategoryType:
        payload = _validate(validation.UpdateCategory, input_data(input))
        category = None
        if validation.is_uuid(id):
            category = await info.context.categories.update(id.lower(), **payload.changes())
        if category is None:
            raise NotFoundError("Category")
        return CategoryType.from_model(category)

    @strawberry.mutation
    async def delete_category(self, info: Info, id: strawberry.ID) -> bool:
        return validation.is_uuid(id) and await info.context.categories.delete(id.lower())

    # Posts

    @strawberry.mutation
    async def create_post(self, info: Info, input: CreatePostInput) -> PostType:
        payload = _validate(validation.CreatePost, input_data(input))
        post = await info.context.posts.create(
            title=payload.title,
            content=payload.content,
            published=payload.published,
            author_id=payload.author_id,
            category_id=payload.category_id,
        )
        return PostType.from_model(post)

    @strawberry.mutation
    async def update_post(self, info: Info, id: strawberry.ID, input: UpdatePostInput) -> PostType:
        payload = _validate(validation.UpdatePost, input_data(input))
        post = None
        if validation.is_uuid(id):
            post = await info.context.posts.update(id.lower(), **payload.changes())
        if post is None:
            raise NotFoundError("Post")
        return PostType.from_model(post)

    @strawberry.mutation
    async def delete_post(self, info: Info, id: strawberry.ID) -> bool:
        return validation.is_uuid(id) and await info.context.posts.delete(id.lower())

    # Comments

    @strawberry.mutation
    async def create_comment(self, info: Info, input: CreateCommentInput) -> CommentType:
        payload = _validate(validation.CreateComment, input_data(input))
        comment = await info.context.comments.create(
            content=payload.content,
            post_id=payload.post_id,
            author_id=payload.author_id,
        )
        return CommentType.from_model(comment)

    @strawberry.mutation
    async def update_comment(
        self, info: Info, id: strawberry.ID, input: UpdateCommentInput
    ) -> CommentType:
        payload = _validate(validation.UpdateComment, input_data(input))
        comment = None
        if validation.is_uuid(id):
            comment = await info.context.comments.update(id.lower(), **payload.changes())
        if comment is None:
            raise NotFoundError("Comment")
        return CommentType.from_model(comment)

    @strawberry.mutation
    async def delete_comment(self, info: Info, id: strawberry.ID) -> bool:
        return validation.is_uuid(id) and await info.context.comments.delete(id.lower())


def _is_client_error(error: GraphQLError) -> bool:
    original = error.original_error
    if original is None or isinstance(original, GraphQLError):
        return True
    return isinstance(original, PostrError) and original.status_code < 500


def create_schema(config: Optional[PostrConfig] = None) -> strawberry.Schema:
    """
    Build the GraphQL schema.

    Outside development, errors not caused by the request, such as driver
    failures, reach clients only as "Internal server error". Strawberry
    still logs the original error.
    """
    extensions = []
    if config is None or not config.is_development:
        extensions.append(
            MaskErrors(
                should_mask_error=lambda error: not _is_client_error(error),
                error_message="Internal server error",
            )
        )
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        extensions=extensions,
        config=StrawberryConfig(scalar_map=SCALAR_MAP),
    )
