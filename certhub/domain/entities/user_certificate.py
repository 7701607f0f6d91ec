from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import IntEnum

from ..exceptions import InvalidInput
from ..identifiers import USER_CERTIFICATE_PREFIX, generate_id
from ..value_objects import PLACEHOLDER, CertificateNumber, ValidityStatus, validity_of

MIN_CERT_FILES = 1
MAX_CERT_FILES = 3


class VerificationStatus(IntEnum):
    PENDING = 1
    ACCEPTED = 2
    REJECTED = 3


def validate_cert_files(cert_file: object) -> list[str]:
    """A user certificate carries between one and three file references."""
    if not isinstance(cert_file, list):
        raise InvalidInput("cert_file must be an array of file references")
    if not MIN_CERT_FILES <= len(cert_file) <= MAX_CERT_FILES:
        raise InvalidInput(
            f"cert_file must contain between {MIN_CERT_FILES} and {MAX_CERT_FILES} files"
        )
    if not all(isinstance(f, str) and f.strip() for f in cert_file):
        raise InvalidInput("cert_file entries must be non-empty strings")
    return [f.strip() for f in cert_file]


@dataclass
class UserCertificate:
    """Externally issued certificate reported by (or for) a user."""

    user_certificate_id: str
    fullname: str
    cert_type: str
    issuer: str
    issued_date: date
    certificate_number: str
    cert_file: list[str]
    user_id: str | None = None
    expired_date: date | None = None
    original_number: str | None = None
    status: VerificationStatus = VerificationStatus.PENDING
    verified_by: str | None = None
    verification_date: datetime | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def submit(
        cls,
        fullname: str,
        cert_type: str,
        issuer: str,
        issued_date: date,
        number: CertificateNumber,
        cert_file: list[str],
        user_id: str | None = None,
        expired_date: date | None = None,
        now: datetime | None = None,
    ) -> "UserCertificate":
        """Self-uploaded certificate awaiting review."""
        return cls(
            user_certificate_id=generate_id(USER_CERTIFICATE_PREFIX, now),
            user_id=user_id or None,
            fullname=fullname,
            cert_type=cert_type,
            issuer=issuer,
            issued_date=issued_date,
            expired_date=expired_date,
            certificate_number=number.value,
            original_number=number.original,
            cert_file=validate_cert_files(cert_file),
        )

    @classmethod
    def upload_verified(
        cls,
        admin_id: str,
        fullname: str,
        cert_type: str,
        issuer: str,
        issued_date: date,
        number: CertificateNumber,
        cert_file: list[str],
        user_id: str | None = None,
        expired_date: date | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> "UserCertificate":
        """Certificate uploaded by an admin, accepted on creation."""
        certificate = cls.submit(
            fullname=fullname,
            cert_type=cert_type,
            issuer=issuer,
            issued_date=issued_date,
            number=number,
            cert_file=cert_file,
            user_id=user_id,
            expired_date=expired_date,
            now=now,
        )
        certificate.change_status(VerificationStatus.ACCEPTED, admin_id, notes)
        return certificate

    def number_keys(self) -> tuple[str, ...]:
        """Stored number, plus the entered original when there is a real one.

        The ``"-"`` placeholder of a generated number is never a key.
        """
        if self.original_number in (None, PLACEHOLDER, self.certificate_number):
            return (self.certificate_number,)
        return self.certificate_number, self.original_number

    def conflicts_with(self, other: "UserCertificate") -> bool:
        """Another accepted row sharing either number in either column."""
        if other.user_certificate_id == self.user_certificate_id:
            return False
        if other.status != VerificationStatus.ACCEPTED:
            return False
        keys = set(self.number_keys())
        return other.certificate_number in keys or (
            other.original_number is not None and other.original_number in keys
        )

    def change_status(
        self, status: VerificationStatus, admin_id: str, notes: str | None = None
    ) -> None:
        """Record an admin decision; Pending is never a valid target."""
        if status == VerificationStatus.PENDING:
            raise InvalidInput("A reviewed certificate cannot be moved back to Pending")
        self.status = status
        self.verified_by = admin_id
        self.notes = notes or None
        self.verification_date = datetime.now(UTC)

    def validity(self, today: date) -> ValidityStatus:
        return validity_of(self.expired_date, today)
