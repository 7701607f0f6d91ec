from .postgres_certificate_number_registry import PostgresCertificateNumberRegistry
from .postgres_participant_repository import PostgresParticipantRepository
from .postgres_training_certificate_repository import PostgresTrainingCertificateRepository
from .postgres_training_repository import PostgresTrainingRepository
from .postgres_user_certificate_repository import PostgresUserCertificateRepository
from .postgres_user_role_reader import PostgresUserRoleReader

__all__ = [
    "PostgresCertificateNumberRegistry",
    "PostgresParticipantRepository",
    "PostgresTrainingCertificateRepository",
    "PostgresTrainingRepository",
    "PostgresUserCertificateRepository",
    "PostgresUserRoleReader",
]
