from types import TracebackType

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from ...application.ports.outbound import UnitOfWork

logger = structlog.get_logger()


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Transaction boundary over the request's ``AsyncSession``.

    Repositories sharing the session run inside its implicit transaction,
    which ``commit`` ends. Leaving the block on an exception rolls it back.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            return
        await self.rollback()
        logger.debug("Transaction rolled back", error_type=exc_type.__name__)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
