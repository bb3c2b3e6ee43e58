import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from opportunity_api.core.settings import settings
from opportunity_api.domain.models import Base

logger = logging.getLogger("db")


def build_engine(url: str, **overrides) -> AsyncEngine:
    engine_kwargs = {"echo": False}

    # SQLite benefits from a single shared connection and longer busy timeout to avoid "database is locked".
    if url.startswith("sqlite"):
        engine_kwargs.update(
            {
                "connect_args": {"timeout": 30, "check_same_thread": False},
                "poolclass": StaticPool,
            }
        )
    engine_kwargs.update(overrides)
    return create_async_engine(url, **engine_kwargs)


engine = build_engine(settings.DB_URL)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session():
    async with AsyncSessionLocal() as s:
        yield s


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create the workspace/opportunity tables if they do not exist."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("tables ready on %s", bind.url.render_as_string(hide_password=True))
