"""Fixtures for API tests."""

from typing import AsyncGenerator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from storefront.infrastructure.database import get_session
from storefront.main import app


@pytest.fixture
def client(catalog_engine: AsyncEngine) -> Iterator[TestClient]:
    """Create test client bound to the reference catalog.

    The lifespan is not entered, so the configured database is never
    touched.
    """
    factory = async_sessionmaker(catalog_engine, expire_on_commit=False)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()
