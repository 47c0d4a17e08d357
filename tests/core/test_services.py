"""
Tests for the entity services against a real SQLite database.
"""

import sqlite3
import uuid

import pytest


class TestUserService:
    async def test_create_and_get(self, services):
        user = await services.users.create(name="Alice")

        fetched = await services.users.get(user.id)

        assert fetched.name == "Alice"
        assert fetched.avatar_url is None
        assert fetched.created_at == user.created_at

    async def test_get_missing(self, services):
        assert await services.users.get(str(uuid.uuid4())) is None

    async def test_list_pagination_has_more(self, services):
        for name in ("A", "B", "C"):
            await services.users.create(name=name)

        first = await services.users.list(page=1, limit=2)
        second = await services.users.list(page=2, limit=2)
        third = await services.users.list(page=3, limit=2)

        assert len(first) == 2 and first.has_more is True
        assert len(second) == 1 and second.has_more is False
        assert len(third) == 0 and third.has_more is False
        assert {u.id for u in first} | {u.id for u in second} == {
            u.id for u in (await services.users.list(limit=10))
        }

    async def test_exactly_full_last_page_reports_more(self, services):
        """hasMore only checks whether the page came back full."""
        for name in ("A", "B"):
            await services.users.create(name=name)

        page = await services.users.list(page=1, limit=2)

        assert page.has_more is True
        assert len(await services.users.list(page=2, limit=2)) == 0

    async def test_partial_update(self, services):
        user = await services.users.create(name="Alice", avatar_url="https://example.com/a.png")

        renamed = await services.users.update(user.id, name="Alicia")
        cleared = await services.users.update(user.id, avatar_url=None)

        assert renamed.name == "Alicia"
        assert renamed.avatar_url == "https://example.com/a.png"
        assert cleared.name == "Alicia"
        assert cleared.avatar_url is None

    async def test_update_missing(self, services):
        assert await services.users.update(str(uuid.uuid4()), name="Nobody") is None

    async def test_delete_cascades(self, services, blog):
        assert await services.users.delete(blog["user"].id) is True

        assert await services.posts.get(blog["post"].id) is None
        assert await services.comments.get(blog["comment"].id) is None
        assert await services.users.delete(blog["user"].id) is False

    async def test_get_many(self, services):
        a = await services.users.create(name="A")
        b = await services.users.create(name="B")

        users = await services.users.get_many([a.id, b.id, a.id, str(uuid.uuid4())])

        assert sorted(u.name for u in users) == ["A", "B"]
        assert await services.users.get_many([]) == []


class TestCategoryService:
    async def test_get_by_slug(self, services):
        category = await services.categories.create(name="Design", slug="design")

        assert (await services.categories.get_by_slug("design")).id == category.id
        assert await services.categories.get_by_slug("nope") is None

    async def test_slug_is_unique(self, services):
        await services.categories.create(name="Design", slug="design")

        with pytest.raises(sqlite3.IntegrityError):
            await services.categories.create(name="Other", slug="design")

    async def test_list_ordered_by_name(self, services):
        for name, slug in (("Zeta", "z"), ("Alpha", "a"), ("Mid", "m")):
            await services.categories.create(name=name, slug=slug)

        page = await services.categories.list()

        assert [c.name for c in page] == ["Alpha", "Mid", "Zeta"]
        assert page.has_more is False

    async def test_update_and_delete_cascade(self, services, blog):
        updated = await services.categories.update(blog["category"].id, slug="dev")

        assert updated.slug == "dev"
        assert updated.name == "Development"

        assert await services.categories.delete(blog["category"].id) is True
        assert await services.posts.get(blog["post"].id) is None


class TestPostService:
    async def test_create_requires_existing_author(self, services, blog):
        with pytest.raises(sqlite3.IntegrityError):
            await services.posts.create(
                title="Orphan",
                content="No author",
                author_id=str(uuid.uuid4()),
                category_id=blog["category"].id,
            )

    async def test_get_embeds_author_and_category(self, services, blog):
        post = await services.posts.get(blog["post"].id)

        assert post.author.name == "Alice"
        assert post.category.slug == "development"
        assert post.comments is None

    async def test_get_with_relations_loads_comments(self, services, blog):
        post = await services.posts.get(blog["post"].id, with_relations=True)

        assert [c.content for c in post.comments] == ["Nice!"]
        assert post.comments[0].author.name == "Alice"

    async def test_list_filters(self, services, blog):
        other_user = await services.users.create(name="Bob")
        other_category = await services.categories.create(name="Life", slug="life")
        await services.posts.create(
            title="Draft",
            content="Unpublished",
            author_id=other_user.id,
            category_id=other_category.id,
        )

        published = await services.posts.list(published=True)
        drafts = await services.posts.list(published=False)
        by_author = await services.posts.list(author_id=other_user.id)
        by_slug = await services.posts.list(category_slug="development")
        by_category = await services.posts.list_by_category(other_category.id)
        combined = await services.posts.list(published=True, author_id=other_user.id)

        assert [p.title for p in published] == ["Hello"]
        assert [p.title for p in drafts] == ["Draft"]
        assert [p.title for p in by_author] == ["Draft"]
        assert [p.title for p in by_slug] == ["Hello"]
        assert [p.title for p in by_category] == ["Draft"]
        assert len(combined) == 0

    async def test_list_newest_first(self, services, adapter, blog):
        newer = await services.posts.create(
            title="Newer",
            content="Later",
            author_id=blog["user"].id,
            category_id=blog["category"].id,
        )
        await adapter.execute(
            "UPDATE posts SET created_at = created_at + 60 WHERE id = $1", newer.id
        )

        titles = [p.title for p in await services.posts.list()]

        assert titles == ["Newer", "Hello"]

    async def test_update_keeps_unsent_fields(self, services, blog):
        updated = await services.posts.update(blog["post"].id, published=False)

        assert updated.published is False
        assert updated.title == "Hello"
        assert updated.author_id == blog["user"].id

    async def test_batch_lookups(self, services, blog):
        by_author = await services.posts.list_for_authors([blog["user"].id])
        by_category = await services.posts.list_for_categories([blog["category"].id])

        assert [p.id for p in by_author] == [blog["post"].id]
        assert [p.id for p in by_category] == [blog["post"].id]
        assert await services.posts.list_for_authors([]) == []

    async def test_delete_cascades_to_comments(self, services, blog):
        assert await services.posts.delete(blog["post"].id) is True

        assert await services.comments.get(blog["comment"].id) is None
        assert await services.posts.delete(blog["post"].id) is False


class TestCommentService:
    async def test_create_requires_existing_post(self, services, blog):
        with pytest.raises(sqlite3.IntegrityError):
            await services.comments.create(
                content="Hello?",
                post_id=str(uuid.uuid4()),
                author_id=blog["user"].id,
            )

    async def test_get_embeds_author(self, services, blog):
        comment = await services.comments.get(blog["comment"].id)

        assert comment.author.name == "Alice"
        assert comment.to_dict()["postId"] == blog["post"].id

    async def test_list_for_authors_embeds_post(self, services, blog):
        comments = await services.comments.list_for_authors([blog["user"].id])

        assert comments[0].post.title == "Hello"

    async def test_update_content(self, services, blog):
        updated = await services.comments.update(blog["comment"].id, content="Edited")

        assert updated.content == "Edited"
        assert await services.comments.update(str(uuid.uuid4()), content="x") is None

    async def test_list_and_delete(self, services, blog):
        page = await services.comments.list(limit=1)

        assert len(page) == 1
        assert page.has_more is True

        assert await services.comments.delete(blog["comment"].id) is True
        assert len(await services.comments.list()) == 0
