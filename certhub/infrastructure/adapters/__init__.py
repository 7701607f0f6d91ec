from .persistence import (
    PostgresCertificateNumberRegistry,
    PostgresParticipantRepository,
    PostgresTrainingCertificateRepository,
    PostgresTrainingRepository,
    PostgresUserCertificateRepository,
    PostgresUserRoleReader,
)

__all__ = [
    "PostgresCertificateNumberRegistry",
    "PostgresParticipantRepository",
    "PostgresTrainingCertificateRepository",
    "PostgresTrainingRepository",
    "PostgresUserCertificateRepository",
    "PostgresUserRoleReader",
]
