"""
Validation schemas for create/update payloads and query parameters.

Payloads use camelCase keys on the wire (avatarUrl, authorId); the schemas
accept those aliases as well as the snake_case field names and ignore
unknown keys.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from postr.errors import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
SLUG_MESSAGE = "Slug can only contain lowercase letters, numbers, and hyphens"
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)

_url_adapter = TypeAdapter(AnyUrl)

M = TypeVar("M", bound=BaseModel)


def is_uuid(value: Any) -> bool:
    """Check that a value is a UUID in canonical 8-4-4-4-12 form."""
    return isinstance(value, str) and UUID_PATTERN.fullmatch(value) is not None


def require_uuid(value: Any, field_name: str = "id", message: str = "Invalid ID format") -> str:
    """
    Return value, lower-cased, if it is a canonical UUID string.

    Raises:
        ValidationError: With the message filed under field_name
    """
    if not is_uuid(value):
        raise ValidationError({field_name: [message]})
    return value.lower()


class PayloadModel(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually supplied, keyed by snake_case name."""
        return self.model_dump(exclude_unset=True)


def _check_length(value: str, minimum: int, maximum: Optional[int], required: str, too_long: str) -> str:
    if len(value) < minimum:
        raise ValueError(required)
    if maximum is not None and len(value) > maximum:
        raise ValueError(too_long)
    return value


def _check_slug(value: str) -> str:
    _check_length(value, 1, 50, "Slug is required", "Slug too long")
    if not SLUG_PATTERN.match(value):
        raise ValueError(SLUG_MESSAGE)
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Invalid URL") from None
    return value


def _check_uuid(value: str, message: str) -> str:
    if not is_uuid(value):
        raise ValueError(message)
    return value.lower()


# User schemas

class CreateUser(PayloadModel):
    name: str
    avatar_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _check_length(v, 1, 100, "Name is required", "Name too long")

    @field_validator("avatar_url")
    @classmethod
    def _avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)


class UpdateUser(PayloadModel):
    name: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("Name is required")
        return _check_length(v, 1, 100, "Name is required", "Name too long")

    @field_validator("avatar_url")
    @classmethod
    def _avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)


# Category schemas

class CreateCategory(PayloadModel):
    name: str
    slug: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _check_length(v, 1, 50, "Name is required", "Name too long")

    @field_validator("slug")
    @classmethod
    def _slug(cls, v: str) -> str:
        return _check_slug(v)


class UpdateCategory(PayloadModel):
    name: Optional[str] = None
    slug: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Name is required")
        return _check_length(v, 1, 50, "Name is required", "Name too long")

    @field_validator("slug")
    @classmethod
    def _slug(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Slug is required")
        return _check_slug(v)


# Post schemas

class CreatePost(PayloadModel):
    title: str
    content: str
    published: bool = False
    author_id: str
    category_id: str

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return _check_length(v, 1, 200, "Title is required", "Title too long")

    @field_validator("content")
    @classmethod
    def _content(cls, v: str) -> str:
        return _check_length(v, 1, None, "Content is required", "")

    @field_validator("author_id")
    @classmethod
    def _author_id(cls, v: str) -> str:
        return _check_uuid(v, "Invalid author ID")

    @field_validator("category_id")
    @classmethod
    def _category_id(cls, v: str) -> str:
        return _check_uuid(v, "Invalid category ID")


class UpdatePost(PayloadModel):
    title: Optional[str] = None
    content: Optional[str] = None
    published: Optional[bool] = None
    category_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Title is required")
        return _check_length(v, 1, 200, "Title is required", "Title too long")

    @field_validator("content")
    @classmethod
    def _content(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Content is required")
        return _check_length(v, 1, None, "Content is required", "")

    @field_validator("published")
    @classmethod
    def _published(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("Published must be a boolean")
        return v

    @field_validator("category_id")
    @classmethod
    def _category_id(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Invalid category ID")
        return _check_uuid(v, "Invalid category ID")


# Comment schemas

class CreateComment(PayloadModel):
    content: str
    post_id: str
    author_id: str

    @field_validator("content")
    @classmethod
    def _content(cls, v: str) -> str:
        return _check_length(v, 1, 1000, "Content is required", "Content too long")

    @field_validator("post_id")
    @classmethod
    def _post_id(cls, v: str) -> str:
        return _check_uuid(v, "Invalid post ID")

    @field_validator("author_id")
    @classmethod
    def _author_id(cls, v: str) -> str:
        return _check_uuid(v, "Invalid author ID")


class UpdateComment(PayloadModel):
    content: Optional[str] = None

    @field_validator("content")
    @classmethod
    def _content(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Content is required")
        return _check_length(v, 1, 1000, "Content is required", "Content too long")


# Query parameter schemas

class Pagination(PayloadModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PostFilters(PayloadModel):
    published: Optional[bool] = None
    author_id: Optional[str] = None
    category_id: Optional[str] = None
    category_slug: Optional[str] = None

    @field_validator("author_id")
    @classmethod
    def _author_id(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_uuid(v, "Invalid author ID")

    @field_validator("category_id")
    @classmethod
    def _category_id(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_uuid(v, "Invalid category ID")


def format_errors(raw_errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Flatten pydantic error dicts into {field: [messages]}.

    Accepts the output of ValidationError.errors() from pydantic or
    FastAPI. Field names use the camelCase wire name; messages raised by
    our own validators lose pydantic's "Value error, " prefix.
    """
    errors: Dict[str, List[str]] = {}
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field_name = loc[-1] if loc else "_root"
        if "_" in field_name.strip("_"):
            field_name = to_camel(field_name)
        message = err.get("msg", "Invalid value")
        if err.get("type") == "value_error" and message.startswith("Value error, "):
            message = message[len("Value error, "):]
        elif err.get("type") == "missing":
            message = "Required"
        errors.setdefault(field_name, []).append(message)
    return errors


def validate(model_cls: Type[M], data: Any) -> M:
    """
    Validate data against a schema.

    Raises:
        ValidationError: With field-level messages
    """
    try:
        return model_cls.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise ValidationError(format_errors(e.errors())) from None
