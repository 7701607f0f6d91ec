from .training_certificate_use_cases import (
    DeleteTrainingCertificateUseCase,
    IssueTrainingCertificateUseCase,
    UpdateTrainingCertificateUseCase,
)
from .user_certificate_use_cases import (
    AdminUploadUserCertificateUseCase,
    DeleteUserCertificatesUseCase,
    SubmitUserCertificateUseCase,
    UpdateUserCertificateStatusUseCase,
)

__all__ = [
    "AdminUploadUserCertificateUseCase",
    "DeleteTrainingCertificateUseCase",
    "DeleteUserCertificatesUseCase",
    "IssueTrainingCertificateUseCase",
    "SubmitUserCertificateUseCase",
    "UpdateTrainingCertificateUseCase",
    "UpdateUserCertificateStatusUseCase",
]
