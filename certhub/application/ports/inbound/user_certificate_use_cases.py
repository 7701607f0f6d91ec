from abc import ABC, abstractmethod

from ...dtos.user_certificate_dto import (
    AdminCreateUserCertificateDTO,
    CreatedUserCertificateDTO,
    CreateUserCertificateDTO,
    UpdateUserCertificateStatusDTO,
    UserCertificateResponseDTO,
)


class SubmitUserCertificateUseCase(ABC):
    """Inbound port for a user reporting an external certificate."""

    @abstractmethod
    async def execute(self, dto: CreateUserCertificateDTO) -> CreatedUserCertificateDTO:
        pass


class AdminUploadUserCertificateUseCase(ABC):
    """Inbound port for an admin uploading an already verified certificate."""

    @abstractmethod
    async def execute(self, dto: AdminCreateUserCertificateDTO) -> CreatedUserCertificateDTO:
        pass


class UpdateUserCertificateStatusUseCase(ABC):
    """Inbound port for accepting or rejecting a user certificate."""

    @abstractmethod
    async def execute(self, dto: UpdateUserCertificateStatusDTO) -> UserCertificateResponseDTO:
        pass


class DeleteUserCertificatesUseCase(ABC):
    """Inbound port for removing user certificates."""

    @abstractmethod
    async def execute(self, user_certificate_ids: list[str]) -> int:
        pass

    @abstractmethod
    async def execute_rejected(self) -> int:
        pass
