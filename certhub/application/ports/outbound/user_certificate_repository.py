from abc import ABC, abstractmethod

from ....domain.entities import UserCertificate
from ...dtos.user_certificate_dto import UserCertificateSearchDTO
from .views import UserCertificateView


class UserCertificateRepository(ABC):
    @abstractmethod
    async def add(self, certificate: UserCertificate) -> None:
        pass

    @abstractmethod
    async def save(self, certificate: UserCertificate) -> None:
        """Persist status fields; an accepted duplicate number raises Conflict."""
        pass

    @abstractmethod
    async def get_by_id(self, user_certificate_id: str, lock: bool = False) -> UserCertificate | None:
        pass

    @abstractmethod
    async def count_accepted_conflicts(self, certificate: UserCertificate) -> int:
        """Count other accepted rows whose number or original number matches
        any of ``certificate.number_keys()``."""
        pass

    @abstractmethod
    async def delete_many(self, user_certificate_ids: list[str]) -> int:
        pass

    @abstractmethod
    async def delete_rejected(self) -> int:
        pass

    @abstractmethod
    async def get_view(self, user_certificate_id: str) -> UserCertificateView | None:
        pass

    @abstractmethod
    async def search(self, criteria: UserCertificateSearchDTO) -> list[UserCertificateView]:
        pass
