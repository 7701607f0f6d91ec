from datetime import datetime, tzinfo

import structlog

from ...domain.entities import UserCertificate, validate_cert_files
from ...domain.exceptions import Conflict, InvalidInput
from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.user_certificate_dto import AdminCreateUserCertificateDTO, CreatedUserCertificateDTO
from ..ports.inbound import AdminUploadUserCertificateUseCase
from ..ports.outbound import UnitOfWork, UserCertificateRepository
from .certificate_number_service import CertificateNumberService

logger = structlog.get_logger()


class AdminUploadUserCertificateService(AdminUploadUserCertificateUseCase):
    """Creates a user certificate that is Accepted from the start.

    The row enters Accepted without passing through a status change, so it
    gets the same duplicate-number check as an acceptance.
    """

    def __init__(
        self,
        repository: UserCertificateRepository,
        numbers: CertificateNumberService,
        unit_of_work: UnitOfWork,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ):
        self._repository = repository
        self._numbers = numbers
        self._uow = unit_of_work
        self._tz = tz

    async def execute(self, dto: AdminCreateUserCertificateDTO) -> CreatedUserCertificateDTO:
        if not dto.admin_id:
            raise InvalidInput("Missing required certificate data: admin_id")
        cert_file = validate_cert_files(dto.cert_file)

        async with self._uow:
            number = await self._numbers.normalize(dto.certificate_number)
            certificate = UserCertificate.upload_verified(
                admin_id=dto.admin_id,
                fullname=dto.fullname,
                cert_type=dto.cert_type,
                issuer=dto.issuer,
                issued_date=dto.issued_date,
                number=number,
                cert_file=cert_file,
                user_id=dto.user_id,
                expired_date=dto.expired_date,
                notes=dto.notes,
                now=datetime.now(self._tz),
            )
            if await self._repository.count_accepted_conflicts(certificate):
                logger.warning(
                    "Admin upload refused: number already validated",
                    certificate_number=certificate.certificate_number,
                )
                raise Conflict()
            await self._repository.add(certificate)
            await self._uow.commit()

        logger.info(
            "User certificate uploaded by admin",
            user_certificate_id=certificate.user_certificate_id,
            admin_id=dto.admin_id,
        )
        return CreatedUserCertificateDTO(
            user_certificate_id=certificate.user_certificate_id,
            certificate_number=certificate.certificate_number,
            original_number=certificate.original_number,
        )
