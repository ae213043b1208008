"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for the demo application
- Bare FastAPI apps for extractor tests
- Starlette requests built straight from an ASGI scope
"""

from typing import Annotated

import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI, Request
from httpx import ASGITransport, AsyncClient

from queryst.extractor import QuerySt, QueryStConfig, query_st
from queryst.main import app
from queryst.schemas.examples import Id, User


def make_request(uri: str, app: FastAPI | None = None) -> Request:
    """Build a GET request for ``uri`` without going through a server."""
    path, _, query = uri.partition("?")
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "server": ("test", 80),
            "path": path,
            "raw_path": path.encode(),
            "query_string": query.encode(),
            "headers": [],
            "app": app or FastAPI(),
        }
    )


def build_app(config: QueryStConfig | None = None) -> FastAPI:
    """Create an app with ``/id`` and ``/user`` routes using the default lookup.

    When ``config`` is given it is stored on ``app.state`` as application data.
    """
    test_app = FastAPI()
    if config is not None:
        test_app.state.query_st_config = config

    @test_app.get("/id")
    async def get_id(info: Annotated[QuerySt[Id], Depends(query_st(Id))]):
        return {"id": info.id}

    @test_app.get("/user")
    async def get_user(user: Annotated[QuerySt[User], Depends(query_st(User))]):
        return user.into_inner().model_dump()

    return test_app


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client():
    """Async test client for the demo application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def user_query() -> str:
    """Query string exercising repeated and bracketed keys."""
    return "name=test&sib[]=hasan&sib[]=ahmad&abblities[reads]=books"
