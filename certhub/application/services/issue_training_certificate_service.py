from datetime import datetime, tzinfo

import structlog

from ...domain.entities import TrainingCertificate
from ...domain.exceptions import Conflict, NotFound, PreconditionFailed
from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.training_certificate_dto import IssuedCertificateDTO, IssueTrainingCertificateDTO
from ..ports.inbound import IssueTrainingCertificateUseCase
from ..ports.outbound import ParticipantRepository, TrainingCertificateRepository, UnitOfWork
from .certificate_number_service import CertificateNumberService
from .graduation_reconciler import GraduationReconciler

logger = structlog.get_logger()


class IssueTrainingCertificateService(IssueTrainingCertificateUseCase):
    """Issues a certificate and updates graduate bookkeeping in one transaction."""

    def __init__(
        self,
        certificates: TrainingCertificateRepository,
        participants: ParticipantRepository,
        numbers: CertificateNumberService,
        reconciler: GraduationReconciler,
        unit_of_work: UnitOfWork,
        tz: tzinfo = DEFAULT_TIMEZONE,
    ):
        self._certificates = certificates
        self._participants = participants
        self._numbers = numbers
        self._reconciler = reconciler
        self._uow = unit_of_work
        self._tz = tz

    async def execute(self, dto: IssueTrainingCertificateDTO) -> IssuedCertificateDTO:
        participant_id = dto.registration_participant_id

        async with self._uow:
            participant = await self._participants.get(participant_id)
            if participant is None:
                raise NotFound("Participant not found")
            if not participant.has_attended:
                logger.warning(
                    "Certificate refused: participant has not attended",
                    registration_participant_id=participant_id,
                )
                raise PreconditionFailed("Cannot issue certificate: participant has not attended")

            if await self._certificates.get_by_participant(participant_id):
                raise Conflict("Participant already has a certificate")

            number = await self._numbers.claim(dto.certificate_number)
            certificate = TrainingCertificate.issue(
                certificate_number=number.value,
                registration_participant_id=participant_id,
                issued_date=dto.issued_date,
                expired_date=dto.expired_date,
                cert_file=dto.cert_file,
                now=datetime.now(self._tz),
            )
            await self._certificates.add(certificate)
            await self._participants.set_has_certificate(participant_id, certificate.has_file)
            training_id = await self._reconciler.reconcile_participant(participant_id)

            await self._uow.commit()

        logger.info(
            "Training certificate issued",
            certificate_id=certificate.certificate_id,
            certificate_number=certificate.certificate_number,
            training_id=training_id,
        )
        return IssuedCertificateDTO(
            certificate_id=certificate.certificate_id,
            certificate_number=certificate.certificate_number,
        )
