from datetime import date
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from ...domain.value_objects import ValidityStatus

if TYPE_CHECKING:
    from ..ports.outbound.views import TrainingCertificateView


def _blank_to_none(v: object) -> object:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class IssueTrainingCertificateDTO(BaseModel):
    """DTO for issuing a training certificate.

    ``cert_file`` is required: a certificate with a file is what makes the
    participant a graduate.
    ``certificate_number`` is optional: when missing (or a placeholder such
    as ``"-"``) a unique number is generated.
    """

    registration_participant_id: str = Field(..., min_length=1, max_length=64)
    issued_date: date
    expired_date: date | None = None
    cert_file: str = Field(..., min_length=1, max_length=2048)
    certificate_number: str | None = Field(None, max_length=255)

    @field_validator("expired_date", "cert_file", "certificate_number", mode="before")
    @classmethod
    def empty_is_missing(cls, v: object) -> object:
        return _blank_to_none(v)


class UpdateTrainingCertificateDTO(BaseModel):
    """Fields left out (or sent empty) keep their stored value."""

    certificate_id: str = Field(..., min_length=1, max_length=64)
    registration_participant_id: str = Field(..., min_length=1, max_length=64)
    issued_date: date | None = None
    expired_date: date | None = None
    cert_file: str | None = Field(None, max_length=2048)

    @field_validator("issued_date", "expired_date", "cert_file", mode="before")
    @classmethod
    def empty_is_missing(cls, v: object) -> object:
        return _blank_to_none(v)


class IssuedCertificateDTO(BaseModel):
    certificate_id: str
    certificate_number: str


class TrainingCertificateResponseDTO(BaseModel):
    certificate_id: str
    certificate_number: str
    registration_participant_id: str
    issued_date: date
    expired_date: date | None = None
    cert_file: str | None = None
    fullname: str | None = None
    user_photo: str | None = None
    registration_id: str | None = None
    registration_status: str | None = None
    training_date: date | None = None
    completed_date: date | None = None
    training_name: str | None = None
    status_certificate: ValidityStatus

    @classmethod
    def from_view(cls, view: "TrainingCertificateView", today: date) -> "TrainingCertificateResponseDTO":
        certificate = view.certificate
        return cls(
            certificate_id=certificate.certificate_id,
            certificate_number=certificate.certificate_number,
            registration_participant_id=certificate.registration_participant_id,
            issued_date=certificate.issued_date,
            expired_date=certificate.expired_date,
            cert_file=certificate.cert_file,
            fullname=view.fullname,
            user_photo=view.user_photo,
            registration_id=view.registration_id,
            registration_status=view.registration_status,
            training_date=view.training_date,
            completed_date=view.completed_date,
            training_name=view.training_name,
            status_certificate=certificate.validity(today),
        )


class TrainingCertificateSearchDTO(BaseModel):
    query: str | None = None
    training_name: str | None = None
    certificate_number: str | None = None
    fullname: str | None = None
    issued_date: date | None = None
    expired_date: date | None = None
    issued_date_from: date | None = None
    issued_date_to: date | None = None
    expired_date_from: date | None = None
    expired_date_to: date | None = None
    status: ValidityStatus | None = None


class MonthlyIssuanceDTO(BaseModel):
    month: str
    total_certificates: int
