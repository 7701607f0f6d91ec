"""User certificate DTOs.

Security: free-text fields are HTML-escaped to prevent stored XSS.
"""

import html
from datetime import date, datetime
from typing import Literal, get_args

from pydantic import BaseModel, Field, field_validator

from ...domain.entities import UserCertificate, VerificationStatus
from ...domain.value_objects import ValidityStatus


def display_verifier(verified_by: str | None, verified_by_name: str | None) -> str | None:
    """Render the verifier as ``"<id> (<name>)"`` when the name is known."""
    if not verified_by:
        return None
    if not verified_by_name:
        return verified_by
    return f"{verified_by} ({verified_by_name})"


class CreateUserCertificateDTO(BaseModel):
    user_id: str | None = None
    fullname: str = Field(..., min_length=1, max_length=255)
    cert_type: str = Field(..., min_length=1, max_length=255)
    issuer: str = Field(..., min_length=1, max_length=255)
    issued_date: date
    expired_date: date | None = None
    certificate_number: str = Field(..., min_length=1, max_length=255)
    cert_file: list[str]

    @field_validator("expired_date", "user_id", mode="before")
    @classmethod
    def empty_is_missing(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("fullname", "cert_type", "issuer", mode="after")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        """Security: Escape HTML to prevent XSS."""
        return html.escape(v.strip())


class AdminCreateUserCertificateDTO(CreateUserCertificateDTO):
    notes: str | None = Field(None, max_length=2000)
    admin_id: str | None = None  # Set from the authenticated admin, not user input

    @field_validator("notes", mode="after")
    @classmethod
    def sanitize_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return html.escape(v.strip())


class UpdateUserCertificateStatusDTO(BaseModel):
    user_certificate_id: str = Field(..., min_length=1, max_length=64)
    status: int
    notes: str | None = Field(None, max_length=2000)
    admin_id: str | None = None  # Set from the authenticated admin, not user input

    @field_validator("notes", mode="after")
    @classmethod
    def sanitize_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return html.escape(v.strip())


class CreatedUserCertificateDTO(BaseModel):
    user_certificate_id: str
    certificate_number: str
    original_number: str | None = None


class UserCertificateResponseDTO(BaseModel):
    user_certificate_id: str
    user_id: str | None = None
    fullname: str
    cert_type: str
    issuer: str
    issued_date: date
    expired_date: date | None = None
    certificate_number: str
    original_number: str | None = None
    cert_file: list[str]
    status: VerificationStatus
    created_at: datetime
    verified_by: str | None = None
    verification_date: datetime | None = None
    notes: str | None = None
    validity_status: ValidityStatus

    @classmethod
    def from_entity(
        cls,
        certificate: UserCertificate,
        today: date,
        fullname: str | None = None,
        verified_by_name: str | None = None,
    ) -> "UserCertificateResponseDTO":
        return cls(
            user_certificate_id=certificate.user_certificate_id,
            user_id=certificate.user_id,
            fullname=fullname or certificate.fullname,
            cert_type=certificate.cert_type,
            issuer=certificate.issuer,
            issued_date=certificate.issued_date,
            expired_date=certificate.expired_date,
            certificate_number=certificate.certificate_number,
            original_number=certificate.original_number,
            cert_file=certificate.cert_file,
            status=certificate.status,
            created_at=certificate.created_at,
            verified_by=display_verifier(certificate.verified_by, verified_by_name),
            verification_date=certificate.verification_date,
            notes=certificate.notes,
            validity_status=certificate.validity(today),
        )


SortField = Literal[
    "fullname",
    "cert_type",
    "issuer",
    "issued_date",
    "expired_date",
    "certificate_number",
    "original_number",
    "status",
    "created_at",
]


class UserCertificateSearchDTO(BaseModel):
    user_id: str | None = None
    fullname: str | None = None
    cert_type: str | None = None
    issuer: str | None = None
    issued_date: date | None = None
    expired_date: date | None = None
    certificate_number: str | None = None
    original_number: str | None = None
    status: list[VerificationStatus] = []
    created_at: date | None = None
    query: str | None = None
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"

    @field_validator("status", mode="before")
    @classmethod
    def split_status(cls, v: object) -> object:
        # Accepts repeated ?status=1&status=2 as well as ?status=1,2
        if v is None:
            return []
        values = v if isinstance(v, list) else [v]
        result = []
        for item in values:
            if isinstance(item, str):
                result.extend(int(s) for s in item.split(",") if s.strip().isdigit())
            else:
                result.append(item)
        return result

    @field_validator("sort_by", mode="before")
    @classmethod
    def unknown_sort_falls_back(cls, v: object) -> object:
        if v not in get_args(SortField):
            return "created_at"
        return v

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalize_sort_order(cls, v: object) -> object:
        return "asc" if isinstance(v, str) and v.lower() == "asc" else "desc"


class DeleteUserCertificatesDTO(BaseModel):
    user_certificate_ids: list[str]
