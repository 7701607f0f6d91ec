import structlog

from ...domain.exceptions import NotFound
from ..dtos.training_certificate_dto import UpdateTrainingCertificateDTO
from ..ports.inbound import UpdateTrainingCertificateUseCase
from ..ports.outbound import ParticipantRepository, TrainingCertificateRepository, UnitOfWork
from .graduation_reconciler import GraduationReconciler

logger = structlog.get_logger()


class UpdateTrainingCertificateService(UpdateTrainingCertificateUseCase):
    def __init__(
        self,
        certificates: TrainingCertificateRepository,
        participants: ParticipantRepository,
        reconciler: GraduationReconciler,
        unit_of_work: UnitOfWork,
    ):
        self._certificates = certificates
        self._participants = participants
        self._reconciler = reconciler
        self._uow = unit_of_work

    async def execute(self, dto: UpdateTrainingCertificateDTO) -> str:
        async with self._uow:
            certificate = await self._certificates.get_by_id(dto.certificate_id)
            if (
                certificate is None
                or certificate.registration_participant_id != dto.registration_participant_id
            ):
                raise NotFound("Certificate not found")

            certificate.revise(
                issued_date=dto.issued_date,
                expired_date=dto.expired_date,
                cert_file=dto.cert_file,
            )
            await self._certificates.save(certificate)
            await self._participants.set_has_certificate(
                certificate.registration_participant_id, certificate.has_file
            )
            await self._reconciler.reconcile_participant(certificate.registration_participant_id)

            await self._uow.commit()

        logger.info("Training certificate updated", certificate_id=certificate.certificate_id)
        return certificate.certificate_id
