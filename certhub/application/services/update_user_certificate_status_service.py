from datetime import datetime, tzinfo

import structlog

from ...domain.entities import VerificationStatus
from ...domain.exceptions import Conflict, InvalidInput, NotFound
from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.user_certificate_dto import UpdateUserCertificateStatusDTO, UserCertificateResponseDTO
from ..ports.inbound import UpdateUserCertificateStatusUseCase
from ..ports.outbound import UnitOfWork, UserCertificateRepository

logger = structlog.get_logger()


class UpdateUserCertificateStatusService(UpdateUserCertificateStatusUseCase):
    """Admin review of a user certificate.

    Moving a row into Accepted first checks, in the same transaction, that no
    other accepted row shares its stored or original number.
    """

    def __init__(
        self,
        repository: UserCertificateRepository,
        unit_of_work: UnitOfWork,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ):
        self._repository = repository
        self._uow = unit_of_work
        self._tz = tz

    async def execute(self, dto: UpdateUserCertificateStatusDTO) -> UserCertificateResponseDTO:
        if not dto.admin_id:
            raise InvalidInput("Status and admin_id are required")
        try:
            status = VerificationStatus(dto.status)
        except ValueError as e:
            raise InvalidInput(f"Unknown certificate status: {dto.status}") from e

        async with self._uow:
            certificate = await self._repository.get_by_id(dto.user_certificate_id, lock=True)
            if certificate is None:
                raise NotFound("Certificate not found")

            if status == VerificationStatus.ACCEPTED:
                conflicts = await self._repository.count_accepted_conflicts(certificate)
                if conflicts:
                    logger.warning(
                        "Acceptance refused: number already validated",
                        user_certificate_id=certificate.user_certificate_id,
                        certificate_number=certificate.certificate_number,
                        conflicts=conflicts,
                    )
                    raise Conflict()

            certificate.change_status(status, dto.admin_id, dto.notes)
            await self._repository.save(certificate)
            await self._uow.commit()

        logger.info(
            "User certificate status updated",
            user_certificate_id=certificate.user_certificate_id,
            status=status.name,
            admin_id=dto.admin_id,
        )
        return UserCertificateResponseDTO.from_entity(certificate, datetime.now(self._tz).date())
