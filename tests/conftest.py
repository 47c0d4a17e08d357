"""
Pytest configuration and fixtures for postr tests.
"""

import pytest
import sys
from pathlib import Path

# Configure pytest-asyncio
pytest_plugins = ["pytest_asyncio"]

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "postr-core"))
sys.path.insert(0, str(packages_dir / "postr-api"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / ".postr"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
async def adapter(tmp_path):
    """Initialized SQLite adapter on a fresh file with the schema applied."""
    from postr.db.sqlite import SQLiteAdapter

    db = SQLiteAdapter(str(tmp_path / "test.db"))
    await db.initialize()
    await db.ensure_schema()

    yield db

    await db.close()


@pytest.fixture
def services(adapter):
    """The four entity services over the test adapter."""
    from postr.services import CategoryService, CommentService, PostService, UserService

    class Services:
        users = UserService(adapter)
        categories = CategoryService(adapter)
        posts = PostService(adapter)
        comments = CommentService(adapter)

    return Services


@pytest.fixture
async def blog(services):
    """One user, category, post and comment."""
    user = await services.users.create(name="Alice", avatar_url="https://example.com/a.png")
    category = await services.categories.create(name="Development", slug="development")
    post = await services.posts.create(
        title="Hello",
        content="First post",
        published=True,
        author_id=user.id,
        category_id=category.id,
    )
    comment = await services.comments.create(content="Nice!", post_id=post.id, author_id=user.id)
    return {"user": user, "category": category, "post": post, "comment": comment}


@pytest.fixture
def app(adapter):
    """API application wired to the test adapter."""
    from postr.config import PostrConfig, ServerConfig
    from postr_api.app import create_app

    config = PostrConfig(server=ServerConfig(environment="test"))
    return create_app(config=config, adapter=adapter)


@pytest.fixture
async def client(app):
    """HTTP client talking to the app in-process."""
    import httpx

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
