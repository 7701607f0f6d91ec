import structlog

from ...domain.exceptions import NotFound
from ..ports.outbound import ParticipantRepository, TrainingRepository

logger = structlog.get_logger()


class GraduationReconciler:
    """Keeps ``training.graduates`` equal to its certified participant count.

    The counter is always recounted, never incremented, so a missed or
    partially applied update cannot leave it drifting.
    """

    def __init__(
        self,
        participants: ParticipantRepository,
        trainings: TrainingRepository,
    ) -> None:
        self._participants = participants
        self._trainings = trainings

    async def recompute_graduates(self, training_id: str) -> int:
        graduates = await self._trainings.recompute_graduates(training_id)
        logger.info("Graduates recomputed", training_id=training_id, graduates=graduates)
        return graduates

    async def reconcile_participant(self, registration_participant_id: str) -> str:
        """Recount the training owning this participant; return its id.

        Raises:
            NotFound: the participant resolves to no training
        """
        training_id = await self._participants.get_training_id(registration_participant_id)
        if not training_id:
            raise NotFound("Training not found")
        await self.recompute_graduates(training_id)
        return training_id
