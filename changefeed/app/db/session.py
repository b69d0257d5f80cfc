from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from changefeed.app.core.config import settings
from changefeed.app.models.base import Base
from changefeed.app.models import containers  # noqa: F401 - registers tables on Base.metadata


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
)

async_session_factory = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create the tables if they do not exist yet."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a database session bound to the configured engine."""
    async with async_session_factory() as session:
        yield session
