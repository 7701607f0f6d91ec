from abc import ABC, abstractmethod

from ....domain.entities import TrainingCertificate
from ...dtos.training_certificate_dto import TrainingCertificateSearchDTO
from .views import MonthlyIssuance, TrainingCertificateView


class TrainingCertificateRepository(ABC):
    @abstractmethod
    async def add(self, certificate: TrainingCertificate) -> None:
        """Insert a new certificate; a duplicate number raises Conflict."""
        pass

    @abstractmethod
    async def save(self, certificate: TrainingCertificate) -> None:
        pass

    @abstractmethod
    async def get_by_id(self, certificate_id: str) -> TrainingCertificate | None:
        pass

    @abstractmethod
    async def get_by_participant(self, registration_participant_id: str) -> TrainingCertificate | None:
        pass

    @abstractmethod
    async def delete(self, certificate_id: str) -> bool:
        """Remove the row; False when nothing matched."""
        pass

    @abstractmethod
    async def get_view(self, certificate_id: str) -> TrainingCertificateView | None:
        pass

    @abstractmethod
    async def search(self, criteria: TrainingCertificateSearchDTO) -> list[TrainingCertificateView]:
        pass

    @abstractmethod
    async def count_by_month(self, months_back: int | None = None) -> list[MonthlyIssuance]:
        pass
