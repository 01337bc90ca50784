"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bouncer import Bouncer, Settings

from support import Post, User, create_test_app


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(LOG_LEVEL="DEBUG", LOG_DECISIONS=True)


@pytest.fixture
def bouncer(test_settings) -> Bouncer:
    """Fresh bouncer with the edit-post action defined."""
    return Bouncer(settings=test_settings).define(
        "edit-post", lambda user, post: user.id == post.author_id
    )


@pytest.fixture
def author() -> User:
    return User(id=1)


@pytest.fixture
def stranger() -> User:
    return User(id=2)


@pytest.fixture
def admin() -> User:
    return User(id=99, is_admin=True)


@pytest.fixture
def post() -> Post:
    return Post(id=10, author_id=1)


@pytest.fixture
def published_post() -> Post:
    return Post(id=11, author_id=1, is_published=True)


@pytest.fixture
def app(bouncer) -> FastAPI:
    bouncer.register_policies({"post": "support:PostPolicy"})
    return create_test_app(bouncer)


# Async test client
@pytest_asyncio.fixture(scope="function")
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
