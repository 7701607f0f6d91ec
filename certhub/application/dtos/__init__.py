from .training_certificate_dto import (
    IssuedCertificateDTO,
    IssueTrainingCertificateDTO,
    MonthlyIssuanceDTO,
    TrainingCertificateResponseDTO,
    TrainingCertificateSearchDTO,
    UpdateTrainingCertificateDTO,
)
from .user_certificate_dto import (
    AdminCreateUserCertificateDTO,
    CreatedUserCertificateDTO,
    CreateUserCertificateDTO,
    DeleteUserCertificatesDTO,
    UpdateUserCertificateStatusDTO,
    UserCertificateResponseDTO,
    UserCertificateSearchDTO,
)

__all__ = [
    "AdminCreateUserCertificateDTO",
    "CreateUserCertificateDTO",
    "CreatedUserCertificateDTO",
    "DeleteUserCertificatesDTO",
    "IssueTrainingCertificateDTO",
    "IssuedCertificateDTO",
    "MonthlyIssuanceDTO",
    "TrainingCertificateResponseDTO",
    "TrainingCertificateSearchDTO",
    "UpdateTrainingCertificateDTO",
    "UpdateUserCertificateStatusDTO",
    "UserCertificateResponseDTO",
    "UserCertificateSearchDTO",
]
