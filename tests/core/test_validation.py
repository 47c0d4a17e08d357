"""
Tests for payload validation.
"""

import uuid

import pytest

from postr import validation
from postr.errors import ValidationError


def errors_for(model_cls, data):
    with pytest.raises(ValidationError) as exc_info:
        validation.validate(model_cls, data)
    return exc_info.value.errors


class TestUserSchemas:
    def test_create_user_accepts_camel_case(self):
        payload = validation.validate(
            validation.CreateUser,
            {"name": "  Alice  ", "avatarUrl": "https://example.com/a.png", "extra": 1},
        )

        assert payload.name == "Alice"
        assert payload.avatar_url == "https://example.com/a.png"

    def test_create_user_messages(self):
        assert errors_for(validation.CreateUser, {"name": ""}) == {"name": ["Name is required"]}
        assert errors_for(validation.CreateUser, {"name": "x" * 101}) == {"name": ["Name too long"]}
        assert errors_for(validation.CreateUser, {}) == {"name": ["Required"]}
        assert errors_for(validation.CreateUser, {"name": "A", "avatarUrl": "nope"}) == {
            "avatarUrl": ["Invalid URL"]
        }

    def test_update_user_tracks_supplied_fields(self):
        payload = validation.validate(validation.UpdateUser, {"avatarUrl": None})

        assert payload.changes() == {"avatar_url": None}
        assert validation.validate(validation.UpdateUser, {}).changes() == {}

    def test_update_user_rejects_null_name(self):
        assert errors_for(validation.UpdateUser, {"name": None}) == {"name": ["Name is required"]}


class TestCategorySchemas:
    @pytest.mark.parametrize("slug", ["Dev", "dev ops", "dev_ops", "dév"])
    def test_bad_slugs(self, slug):
        assert errors_for(validation.CreateCategory, {"name": "Dev", "slug": slug}) == {
            "slug": [validation.SLUG_MESSAGE]
        }

    def test_good_slug(self):
        payload = validation.validate(validation.CreateCategory, {"name": "Dev", "slug": "dev-ops-2"})
        assert payload.slug == "dev-ops-2"

    def test_name_limit(self):
        assert errors_for(validation.CreateCategory, {"name": "x" * 51, "slug": "a"}) == {
            "name": ["Name too long"]
        }


class TestPostSchemas:
    def test_create_post_defaults_and_ids(self):
        author, category = str(uuid.uuid4()), str(uuid.uuid4())
        payload = validation.validate(
            validation.CreatePost,
            {"title": "T", "content": "C", "authorId": author, "categoryId": category},
        )

        assert payload.published is False
        assert payload.author_id == author

    def test_create_post_reports_every_field(self):
        errors = errors_for(
            validation.CreatePost,
            {"title": "", "content": "", "authorId": "1", "categoryId": "2"},
        )

        assert errors == {
            "title": ["Title is required"],
            "content": ["Content is required"],
            "authorId": ["Invalid author ID"],
            "categoryId": ["Invalid category ID"],
        }

    def test_update_post_cannot_change_author(self):
        payload = validation.validate(
            validation.UpdatePost,
            {"published": True, "authorId": str(uuid.uuid4())},
        )

        assert payload.changes() == {"published": True}


class TestCommentSchemas:
    def test_content_limit(self):
        errors = errors_for(
            validation.CreateComment,
            {"content": "x" * 1001, "postId": str(uuid.uuid4()), "authorId": str(uuid.uuid4())},
        )
        assert errors == {"content": ["Content too long"]}


class TestQuerySchemas:
    def test_pagination_bounds(self):
        assert validation.validate(validation.Pagination, {}).offset == 0
        assert validation.validate(validation.Pagination, {"page": 3, "limit": 20}).offset == 40
        assert set(errors_for(validation.Pagination, {"page": 0, "limit": 101})) == {"page", "limit"}

    def test_post_filters(self):
        filters = validation.validate(validation.PostFilters, {"categorySlug": "dev"})
        assert filters.model_dump() == {
            "published": None,
            "author_id": None,
            "category_id": None,
            "category_slug": "dev",
        }
        assert errors_for(validation.PostFilters, {"authorId": "x"}) == {
            "authorId": ["Invalid author ID"]
        }


def test_require_uuid():
    value = str(uuid.uuid4())

    assert validation.require_uuid(value) == value
    assert validation.require_uuid(value.upper()) == value
    with pytest.raises(ValidationError) as exc_info:
        validation.require_uuid("123")
    assert exc_info.value.errors == {"id": ["Invalid ID format"]}
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    "value",
    [
        "{%s}",
        "urn:uuid:%s",
        "%s\n",
    ],
)
def test_require_uuid_rejects_non_canonical_forms(value):
    canonical = str(uuid.uuid4())

    assert not validation.is_uuid(value % canonical)
    assert not validation.is_uuid(canonical.replace("-", ""))
    with pytest.raises(ValidationError):
        validation.require_uuid(value % canonical)


def test_format_errors_strips_location_prefixes():
    raw = [
        {"loc": ("body", "author_id"), "msg": "Value error, Invalid author ID", "type": "value_error"},
        {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 100", "type": "less_than_equal"},
        {"loc": ("body",), "msg": "Field required", "type": "missing"},
    ]

    assert validation.format_errors(raw) == {
        "authorId": ["Invalid author ID"],
        "limit": ["Input should be less than or equal to 100"],
        "_root": ["Required"],
    }
