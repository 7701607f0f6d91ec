from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ..logging import correlation_id
from .models import Base


class Database:
    """Owns the async engine and connection pool; one session per request."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self._engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
        self._sessions = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)
        event.listen(
            self._engine.sync_engine,
            "before_cursor_execute",
            _tag_with_correlation_id,
            retval=True,
        )

    def session(self) -> AsyncSession:
        return self._sessions()

    async def ping(self) -> None:
        """Round trip used by the readiness probe."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_tables(self) -> None:
        """Create every mapped table. Development only; alembic owns the schema."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()


def _tag_with_correlation_id(conn, cursor, statement, parameters, context, executemany):
    # Lets database logs be matched to the request that issued the statement
    cid = correlation_id.get()
    if cid:
        statement = f"/* correlation_id={cid} */ {statement}"
    return statement, parameters
