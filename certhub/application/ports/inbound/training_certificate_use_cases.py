from abc import ABC, abstractmethod

from ...dtos.training_certificate_dto import (
    IssuedCertificateDTO,
    IssueTrainingCertificateDTO,
    UpdateTrainingCertificateDTO,
)


class IssueTrainingCertificateUseCase(ABC):
    """Inbound port for issuing a certificate to an attended participant."""

    @abstractmethod
    async def execute(self, dto: IssueTrainingCertificateDTO) -> IssuedCertificateDTO:
        pass


class UpdateTrainingCertificateUseCase(ABC):
    """Inbound port for revising an issued certificate."""

    @abstractmethod
    async def execute(self, dto: UpdateTrainingCertificateDTO) -> str:
        pass


class DeleteTrainingCertificateUseCase(ABC):
    """Inbound port for removing a certificate and its graduate status."""

    @abstractmethod
    async def execute(self, certificate_id: str) -> None:
        pass
