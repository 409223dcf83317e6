"""Shared fixtures for storefront tests."""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from storefront.catalog.models import Category, Product
from storefront.infrastructure.database import Base, build_engine

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

LONG_DESCRIPTION = ("Once upon a time, a lantern keeper kept watch. " * 6)[:250]

PHOTO_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


# ============================================================================
# Catalog Data
# ============================================================================


def build_catalog() -> list[Category | Product]:
    """Build the reference catalog.

    Products p1, p2, p3 are in category cat-a and p4 in cat-b, inserted
    one minute apart in that order. p1 has slug "story-one", a
    250-character description and a photo.
    """
    fantasy = Category(id="cat-a", name="Fantasy", slug="fantasy")
    mystery = Category(id="cat-b", name="Mystery", slug="mystery")

    def product(pid: str, slug: str, name: str, category: Category, minute: int, **kwargs) -> Product:
        return Product(
            id=pid,
            slug=slug,
            name=name,
            description=kwargs.pop("description", f"{name} description"),
            price=kwargs.pop("price", Decimal("9.99")),
            category=category,
            created_at=EPOCH + timedelta(minutes=minute),
            **kwargs,
        )

    return [
        fantasy,
        mystery,
        product(
            "p1",
            "story-one",
            "Story One",
            fantasy,
            0,
            description=LONG_DESCRIPTION,
            price=Decimal("1234.5"),
            photo_data=PHOTO_BYTES,
            photo_content_type="image/png",
        ),
        product("p2", "story-two", "Story Two", fantasy, 1),
        product("p3", "story-three", "Story Three", fantasy, 2),
        product("p4", "story-four", "Story Four", mystery, 3),
    ]


async def _create_catalog(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(build_catalog())
        await session.commit()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a throwaway SQLite catalog database."""
    return tmp_path / "catalog.db"


@pytest.fixture
def empty_engine(db_path: Path) -> AsyncEngine:
    """Engine over an empty database with tables created.

    NullPool keeps no connections open, so the engine can be used from
    any event loop.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)

    async def create() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create())
    return engine


@pytest.fixture
def catalog_engine(db_path: Path) -> AsyncEngine:
    """Engine over a database loaded with the reference catalog."""
    engine = build_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    asyncio.run(_create_catalog(engine))
    return engine


@pytest_asyncio.fixture
async def session(catalog_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session over the reference catalog."""
    factory = async_sessionmaker(catalog_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def empty_session(empty_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session over an empty catalog."""
    factory = async_sessionmaker(empty_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
