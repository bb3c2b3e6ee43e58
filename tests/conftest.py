"""Pytest fixtures for opportunity_api tests."""

import asyncio
import json
import os

# settings are read at import time; keep tests off the local sqlite file
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RUN_DDL_ON_START"] = "false"
os.environ["SEED_ON_START"] = "false"
os.environ.pop("WORKSPACE_ID", None)
os.environ.pop("CSV_QUOTE_VALUES", None)
os.environ.pop("LOG_FILE", None)

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from opportunity_api.core.db import build_engine, get_session, init_db
from opportunity_api.domain.models import Opportunity, Workspace
from opportunity_api.main import app
from opportunity_api.seed import seed_workspace


def _url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


async def add_workspace(db: AsyncSession, fields: list[dict], workspace_id: str = "ws-1") -> Workspace:
    ws = Workspace(id=workspace_id, custom_field_definition=json.dumps(fields))
    db.add(ws)
    await db.commit()
    return ws


async def add_opportunities(db: AsyncSession, *items: tuple[str, dict]) -> None:
    for title, data in items:
        db.add(Opportunity(title=title, opportunity_data=json.dumps(data)))
    await db.commit()


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = build_engine(_url(tmp_path), poolclass=NullPool)
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_db(db):
    await seed_workspace(db)
    return db


@pytest.fixture
def make_client(tmp_path):
    """Build a TestClient whose get_session points at a fresh sqlite file.

    ``seed`` is an async callable taking a session, run before the client
    is returned.
    """

    def _make(seed=None) -> TestClient:
        eng = build_engine(_url(tmp_path), poolclass=NullPool)
        maker = async_sessionmaker(eng, class_=AsyncSession, expire_on_commit=False)

        async def _setup():
            await init_db(eng)
            if seed is not None:
                async with maker() as session:
                    await seed(session)

        asyncio.run(_setup())

        async def _session():
            async with maker() as session:
                yield session

        app.dependency_overrides[get_session] = _session
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()
