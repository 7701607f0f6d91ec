import structlog

from ...domain.exceptions import NotFound
from ..ports.inbound import DeleteTrainingCertificateUseCase
from ..ports.outbound import ParticipantRepository, TrainingCertificateRepository, UnitOfWork
from .graduation_reconciler import GraduationReconciler

logger = structlog.get_logger()


class DeleteTrainingCertificateService(DeleteTrainingCertificateUseCase):
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

    async def execute(self, certificate_id: str) -> None:
        async with self._uow:
            certificate = await self._certificates.get_by_id(certificate_id)
            if certificate is None:
                raise NotFound("Certificate not found")
            participant_id = certificate.registration_participant_id

            # The participant is reset through the certificate row, so this
            # must happen before the row is gone.
            await self._participants.set_has_certificate(participant_id, False)
            if not await self._certificates.delete(certificate_id):
                raise NotFound("Certificate not found")

            training_id = await self._participants.get_training_id(participant_id)
            if training_id:
                await self._reconciler.recompute_graduates(training_id)
            else:
                logger.warning(
                    "Graduate recount skipped: training not found",
                    certificate_id=certificate_id,
                    registration_participant_id=participant_id,
                )

            await self._uow.commit()

        logger.info("Training certificate deleted", certificate_id=certificate_id)
