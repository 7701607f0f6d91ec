from abc import ABC, abstractmethod

from ....domain.entities import RegistrationParticipant


class ParticipantRepository(ABC):
    """Registration participants; only ``has_certificate`` is ever written."""

    @abstractmethod
    async def get(self, registration_participant_id: str) -> RegistrationParticipant | None:
        pass

    @abstractmethod
    async def get_training_id(self, registration_participant_id: str) -> str | None:
        """Resolve the owning training through the registration record."""
        pass

    @abstractmethod
    async def set_has_certificate(self, registration_participant_id: str, value: bool) -> None:
        pass
