"""Fixtures running the CRUD engine and HTTP surface against in-memory SQLite.

StaticPool keeps a single aiosqlite connection so every session sees the
same in-memory database for the duration of one test.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import crudkit.infrastructure.persistence  # noqa: F401
from crudkit.api.app import create_app
from crudkit.infrastructure.database import Base, enable_case_sensitive_like, get_session


@pytest.fixture
async def engine():
    engine = enable_case_sensitive_like(
        create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        async with session.begin():
            yield session


@pytest.fixture
async def client(session_factory):
    app = create_app()

    async def override_get_session():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
