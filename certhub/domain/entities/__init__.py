from .participant import RegistrationParticipant
from .training_certificate import TrainingCertificate
from .user_certificate import (
    MAX_CERT_FILES,
    MIN_CERT_FILES,
    UserCertificate,
    VerificationStatus,
    validate_cert_files,
)

__all__ = [
    "MAX_CERT_FILES",
    "MIN_CERT_FILES",
    "RegistrationParticipant",
    "TrainingCertificate",
    "UserCertificate",
    "VerificationStatus",
    "validate_cert_files",
]
