from abc import ABC, abstractmethod
from types import TracebackType


class UnitOfWork(ABC):
    """Groups every write of one certificate operation into a transaction.

    Nothing is persisted unless ``commit`` is awaited inside the block; an
    exception escaping the block discards all of it.
    """

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork": ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...
