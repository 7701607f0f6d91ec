from datetime import datetime, tzinfo

import structlog

from ...domain.entities import UserCertificate, validate_cert_files
from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.user_certificate_dto import CreatedUserCertificateDTO, CreateUserCertificateDTO
from ..ports.inbound import SubmitUserCertificateUseCase
from ..ports.outbound import UnitOfWork, UserCertificateRepository
from .certificate_number_service import CertificateNumberService

logger = structlog.get_logger()


class SubmitUserCertificateService(SubmitUserCertificateUseCase):
    """Records a self-reported certificate as Pending review."""

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

    async def execute(self, dto: CreateUserCertificateDTO) -> CreatedUserCertificateDTO:
        cert_file = validate_cert_files(dto.cert_file)

        async with self._uow:
            number = await self._numbers.normalize(dto.certificate_number)
            certificate = UserCertificate.submit(
                fullname=dto.fullname,
                cert_type=dto.cert_type,
                issuer=dto.issuer,
                issued_date=dto.issued_date,
                number=number,
                cert_file=cert_file,
                user_id=dto.user_id,
                expired_date=dto.expired_date,
                now=datetime.now(self._tz),
            )
            await self._repository.add(certificate)
            await self._uow.commit()

        logger.info(
            "User certificate submitted",
            user_certificate_id=certificate.user_certificate_id,
            certificate_number=certificate.certificate_number,
        )
        return CreatedUserCertificateDTO(
            user_certificate_id=certificate.user_certificate_id,
            certificate_number=certificate.certificate_number,
            original_number=certificate.original_number,
        )
