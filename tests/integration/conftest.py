import pytest_asyncio

from passreset.infrastructure.database.async_db import (
    build_async_engine,
    build_session_factory,
    create_async_db_and_tables,
)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'passreset.db'}", echo=False)
    await create_async_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)
