"""
Tests for postr data models.
"""

from datetime import datetime, timezone


class TestUserModel:
    """Tests for User model."""

    def test_user_creation(self):
        """Test creating a user with defaults."""
        from postr.models import User

        user = User(name="Alice")

        assert user.name == "Alice"
        assert user.avatar_url is None
        assert len(user.id) == 36
        assert user.created_at.tzinfo is not None

    def test_user_to_dict(self):
        from postr.models import User

        user = User(
            id="u-1",
            name="Alice",
            avatar_url="https://example.com/a.png",
            created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )

        assert user.to_dict() == {
            "id": "u-1",
            "name": "Alice",
            "avatarUrl": "https://example.com/a.png",
            "createdAt": "2024-01-02T03:04:05.000Z",
        }

    def test_user_from_sqlite_row(self):
        """SQLite rows carry created_at as epoch seconds."""
        from postr.models import User

        user = User.from_row({"id": "u-1", "name": "Bob", "avatar_url": None, "created_at": 0})

        assert user.name == "Bob"
        assert user.created_at == datetime(1970, 1, 1, tzinfo=timezone.utc)


class TestPostModel:
    """Tests for Post model."""

    def test_from_row_embeds_relations(self):
        from postr.models import Post

        row = {
            "id": "p-1",
            "title": "Hello",
            "content": "Body",
            "published": 1,
            "author_id": "u-1",
            "category_id": "c-1",
            "created_at": 1700000000,
            "author__id": "u-1",
            "author__name": "Alice",
            "author__avatar_url": None,
            "author__created_at": 1600000000,
            "category__id": "c-1",
            "category__name": "Development",
            "category__slug": "development",
        }

        post = Post.from_row(row)

        assert post.published is True
        assert post.author.name == "Alice"
        assert post.category.slug == "development"
        assert post.comments is None

        result = post.to_dict()
        assert result["author"] == {"id": "u-1", "name": "Alice", "avatarUrl": None}
        assert result["category"] == {"id": "c-1", "name": "Development", "slug": "development"}
        assert "comments" not in result

    def test_from_row_without_join(self):
        from postr.models import Post

        post = Post.from_row({
            "id": "p-1", "title": "T", "content": "C", "published": 0,
            "author_id": "u-1", "category_id": "c-1", "created_at": 1700000000,
        })

        assert post.published is False
        assert post.author is None
        assert "author" not in post.to_dict()

    def test_to_dict_with_comments(self):
        from postr.models import Comment, Post

        post = Post(title="T", content="C", author_id="u-1", category_id="c-1")
        post.comments = [Comment(content="Hi", post_id=post.id, author_id="u-2")]

        result = post.to_dict()

        assert result["comments"][0]["content"] == "Hi"
        assert result["comments"][0]["postId"] == post.id


class TestCommentModel:
    def test_from_row_embeds_post(self):
        from postr.models import Comment

        comment = Comment.from_row({
            "id": "cm-1", "content": "Hi", "post_id": "p-1", "author_id": "u-1",
            "created_at": "2024-05-01T10:00:00Z",
            "post__id": "p-1", "post__title": "Hello", "post__content": "Body",
            "post__published": 1, "post__author_id": "u-9", "post__category_id": "c-1",
            "post__created_at": 1700000000,
        })

        assert comment.post.title == "Hello"
        assert comment.to_dict()["post"] == {"id": "p-1", "title": "Hello"}
        assert comment.to_dict()["createdAt"] == "2024-05-01T10:00:00.000Z"


class TestPage:
    def test_has_more_when_page_is_full(self):
        from postr.models import Page

        page = Page(items=[1, 2], page=1, limit=2)

        assert page.has_more is True
        assert page.pagination() == {"page": 1, "limit": 2, "hasMore": True}

    def test_no_more_when_page_is_short(self):
        from postr.models import Page

        page = Page(items=[1], page=3, limit=2)

        assert page.has_more is False
        assert page.offset == 4
        assert list(page) == [1]
        assert len(page) == 1


def test_embedded_ignores_missing_join():
    from postr.models.base import embedded

    assert embedded({"id": "x"}, "author") is None
    assert embedded({"author__id": None, "author__name": None}, "author") is None
    assert embedded({"author__id": "u", "author__name": "A"}, "author") == {"id": "u", "name": "A"}
