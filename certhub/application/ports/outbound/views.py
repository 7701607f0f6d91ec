from dataclasses import dataclass
from datetime import date

from ....domain.entities import TrainingCertificate, UserCertificate


@dataclass
class TrainingCertificateView:
    """Training certificate joined with its participant, user and training."""

    certificate: TrainingCertificate
    fullname: str | None = None
    user_photo: str | None = None
    registration_id: str | None = None
    registration_status: str | None = None
    training_date: date | None = None
    completed_date: date | None = None
    training_name: str | None = None


@dataclass
class UserCertificateView:
    certificate: UserCertificate
    fullname: str
    verified_by_name: str | None = None


@dataclass
class MonthlyIssuance:
    month: str
    total_certificates: int
