"""
GraphQL object and input types.

Object types are built from the core models. Relations already embedded
by a joined query are returned directly; anything else goes through the
request's DataLoaders.
"""

from typing import List, Optional

import strawberry
from strawberry.types import Info

from postr.models import Category, Comment, Page, Post, User
from postr_api.graphql.scalars import DateTime


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    name: str
    avatar_url: Optional[str]
    created_at: DateTime

    @strawberry.field
    async def posts(self, info: Info) -> List["PostType"]:
        posts = await info.context.loaders.posts_by_author.load(str(self.id))
        return [PostType.from_model(post) for post in posts]

    @strawberry.field
    async def comments(self, info: Info) -> List["CommentType"]:
        comments = await info.context.loaders.comments_by_author.load(str(self.id))
        return [CommentType.from_model(comment) for comment in comments]

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(user.id),
            name=user.name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
        )


@strawberry.type(name="Category")
class CategoryType:
    id: strawberry.ID
    name: str
    slug: str

    @strawberry.field
    async def posts(self, info: Info) -> List["PostType"]:
        posts = await info.context.loaders.posts_by_category.load(str(self.id))
        return [PostType.from_model(post) for post in posts]

    @classmethod
    def from_model(cls, category: Category) -> "CategoryType":
        return cls(id=strawberry.ID(category.id), name=category.name, slug=category.slug)


@strawberry.type(name="Post")
class PostType:
    id: strawberry.ID
    title: str
    content: str
    published: bool
    created_at: DateTime

    author_id: strawberry.Private[str]
    category_id: strawberry.Private[str]
    loaded_author: strawberry.Private[Optional[User]] = None
    loaded_category: strawberry.Private[Optional[Category]] = None
    loaded_comments: strawberry.Private[Optional[List[Comment]]] = None

    @strawberry.field
    async def author(self, info: Info) -> UserType:
        user = self.loaded_author or await info.context.loaders.user.load(self.author_id)
        return UserType.from_model(user)

    @strawberry.field
    async def category(self, info: Info) -> CategoryType:
        category = self.loaded_category or await info.context.loaders.category.load(self.category_id)
        return CategoryType.from_model(category)

    @strawberry.field
    async def comments(self, info: Info) -> List["CommentType"]:
        comments = self.loaded_comments
        if comments is None:
            comments = await info.context.loaders.comments_by_post.load(str(self.id))
        return [CommentType.from_model(comment) for comment in comments]

    @classmethod
    def from_model(cls, post: Post) -> "PostType":
        return cls(
            id=strawberry.ID(post.id),
            title=post.title,
            content=post.content,
            published=post.published,
            created_at=post.created_at,
            author_id=post.author_id,
            category_id=post.category_id,
            loaded_author=post.author,
            loaded_category=post.category,
            loaded_comments=post.comments,
        )


@strawberry.type(name="Comment")
class CommentType:
    id: strawberry.ID
    content: str
    created_at: DateTime

    post_id: strawberry.Private[str]
    author_id: strawberry.Private[str]
    loaded_post: strawberry.Private[Optional[Post]] = None
    loaded_author: strawberry.Private[Optional[User]] = None

    @strawberry.field
    async def post(self, info: Info) -> PostType:
        post = self.loaded_post or await info.context.loaders.post.load(self.post_id)
        return PostType.from_model(post)

    @strawberry.field
    async def author(self, info: Info) -> UserType:
        user = self.loaded_author or await info.context.loaders.user.load(self.author_id)
        return UserType.from_model(user)

    @classmethod
    def from_model(cls, comment: Comment) -> "CommentType":
        return cls(
            id=strawberry.ID(comment.id),
            content=comment.content,
            created_at=comment.created_at,
            post_id=comment.post_id,
            author_id=comment.author_id,
            loaded_post=comment.post,
            loaded_author=comment.author,
        )


# Connections

@strawberry.type
class PaginationInfo:
    page: int
    limit: int
    has_more: bool

    @classmethod
    def from_page(cls, page: Page) -> "PaginationInfo":
        return cls(page=page.page, limit=page.limit, has_more=page.has_more)


@strawberry.type
class UsersConnection:
    users: List[UserType]
    pagination: PaginationInfo


@strawberry.type
class CategoriesConnection:
    categories: List[CategoryType]
    pagination: PaginationInfo


@strawberry.type
class PostsConnection:
    posts: List[PostType]
    pagination: PaginationInfo


@strawberry.type
class CommentsConnection:
    comments: List[CommentType]
    pagination: PaginationInfo


# Inputs; omitted fields stay UNSET so updates only touch what was sent

@strawberry.input
class CreateUserInput:
    name: str
    avatar_url: Optional[str] = None


@strawberry.input
class UpdateUserInput:
    name: Optional[str] = strawberry.UNSET
    avatar_url: Optional[str] = strawberry.UNSET


@strawberry.input
class CreateCategoryInput:
    name: str
    slug: str


@strawberry.input
class UpdateCategoryInput:
    name: Optional[str] = strawberry.UNSET
    slug: Optional[str] = strawberry.UNSET


@strawberry.input
class CreatePostInput:
    title: str
    content: str
    author_id: strawberry.ID
    category_id: strawberry.ID
    published: Optional[bool] = False


@strawberry.input
class UpdatePostInput:
    title: Optional[str] = strawberry.UNSET
    content: Optional[str] = strawberry.UNSET
    published: Optional[bool] = strawberry.UNSET
    category_id: Optional[strawberry.ID] = strawberry.UNSET


@strawberry.input
class CreateCommentInput:
    content: str
    post_id: strawberry.ID
    author_id: strawberry.ID


@strawberry.input
class UpdateCommentInput:
    content: str


@strawberry.input
class PostFilters:
    published: Optional[bool] = strawberry.UNSET
    author_id: Optional[strawberry.ID] = strawberry.UNSET
    category_id: Optional[strawberry.ID] = strawberry.UNSET
    category_slug: Optional[str] = strawberry.UNSET


def input_data(value) -> dict:
    """Fields of an input object that the client actually supplied."""
    if value is None:
        return {}
    return {
        name: field_value
        for name, field_value in vars(value).items()
        if field_value is not strawberry.UNSET
    }

