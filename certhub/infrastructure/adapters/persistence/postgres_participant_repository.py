from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ....application.ports.outbound import ParticipantRepository
from ....domain.entities import RegistrationParticipant
from ...persistence.models import RegistrationModel, RegistrationParticipantModel


class PostgresParticipantRepository(ParticipantRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, registration_participant_id: str) -> RegistrationParticipant | None:
        stmt = (
            select(RegistrationParticipantModel, RegistrationModel.training_id)
            .outerjoin(
                RegistrationModel,
                RegistrationModel.registration_id == RegistrationParticipantModel.registration_id,
            )
            .where(
                RegistrationParticipantModel.registration_participant_id
                == registration_participant_id
            )
        )
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        return row.RegistrationParticipantModel.to_entity(row.training_id)

    async def get_training_id(self, registration_participant_id: str) -> str | None:
        stmt = (
            select(RegistrationModel.training_id)
            .join(
                RegistrationParticipantModel,
                RegistrationModel.registration_id == RegistrationParticipantModel.registration_id,
            )
            .where(
                RegistrationParticipantModel.registration_participant_id
                == registration_participant_id
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_has_certificate(self, registration_participant_id: str, value: bool) -> None:
        stmt = (
            update(RegistrationParticipantModel)
            .where(
                RegistrationParticipantModel.registration_participant_id
                == registration_participant_id
            )
            .values(has_certificate=value)
        )
        await self._session.execute(stmt)
