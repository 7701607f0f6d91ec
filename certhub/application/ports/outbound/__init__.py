from .certificate_number_registry import CertificateNumberRegistry
from .participant_repository import ParticipantRepository
from .training_certificate_repository import TrainingCertificateRepository
from .training_repository import TrainingRepository
from .unit_of_work import UnitOfWork
from .user_certificate_repository import UserCertificateRepository
from .views import MonthlyIssuance, TrainingCertificateView, UserCertificateView

__all__ = [
    "CertificateNumberRegistry",
    "MonthlyIssuance",
    "ParticipantRepository",
    "TrainingCertificateRepository",
    "TrainingCertificateView",
    "TrainingRepository",
    "UnitOfWork",
    "UserCertificateRepository",
    "UserCertificateView",
]
