import structlog

from ...domain.exceptions import InvalidInput, NotFound
from ..ports.inbound import DeleteUserCertificatesUseCase
from ..ports.outbound import UnitOfWork, UserCertificateRepository

logger = structlog.get_logger()


class DeleteUserCertificatesService(DeleteUserCertificatesUseCase):
    def __init__(self, repository: UserCertificateRepository, unit_of_work: UnitOfWork):
        self._repository = repository
        self._uow = unit_of_work

    async def execute(self, user_certificate_ids: list[str]) -> int:
        ids = [i for i in dict.fromkeys(user_certificate_ids) if i]
        if not ids:
            raise InvalidInput("No certificate ids provided")

        async with self._uow:
            deleted = await self._repository.delete_many(ids)
            if not deleted:
                raise NotFound("Certificate not found")
            await self._uow.commit()

        logger.info("User certificates deleted", requested=len(ids), deleted=deleted)
        return deleted

    async def execute_rejected(self) -> int:
        async with self._uow:
            deleted = await self._repository.delete_rejected()
            if not deleted:
                raise NotFound("No rejected certificates found")
            await self._uow.commit()

        logger.info("Rejected user certificates deleted", deleted=deleted)
        return deleted
