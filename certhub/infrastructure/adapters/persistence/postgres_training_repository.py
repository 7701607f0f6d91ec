from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ....application.ports.outbound import TrainingRepository
from ....domain.exceptions import NotFound
from ...persistence.models import RegistrationModel, RegistrationParticipantModel, TrainingModel


class PostgresTrainingRepository(TrainingRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def recompute_graduates(self, training_id: str) -> int:
        certified = (
            select(func.count())
            .select_from(RegistrationParticipantModel)
            .join(
                RegistrationModel,
                RegistrationModel.registration_id == RegistrationParticipantModel.registration_id,
            )
            .where(
                RegistrationParticipantModel.has_certificate.is_(True),
                RegistrationModel.training_id == training_id,
            )
            .scalar_subquery()
        )
        stmt = (
            update(TrainingModel)
            .where(TrainingModel.training_id == training_id)
            .values(graduates=certified)
            .returning(TrainingModel.graduates)
        )
        graduates = (await self._session.execute(stmt)).scalar_one_or_none()
        if graduates is None:
            raise NotFound("Training not found")
        return graduates
