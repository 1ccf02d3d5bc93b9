from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .settings import settings

engine: AsyncEngine = create_async_engine(settings.database_url, echo=settings.sql_echo, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def init_db(db_engine: AsyncEngine = engine) -> None:
    """Create all tables registered on ``Base``. Models must be imported first."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
