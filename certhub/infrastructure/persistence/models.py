from datetime import UTC, date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...domain.entities import (
    RegistrationParticipant,
    TrainingCertificate,
    UserCertificate,
    VerificationStatus,
)


class Base(DeclarativeBase):
    pass


# ---------------------------------------------------------------------------
# Tables owned by the certificate core
# ---------------------------------------------------------------------------


class TrainingCertificateModel(Base):
    """SQLAlchemy model for TrainingCertificate entity."""

    __tablename__ = "certificate"
    __table_args__ = (
        UniqueConstraint("certificate_number", name="uq_certificate_number"),
        UniqueConstraint("registration_participant_id", name="uq_certificate_participant"),
    )

    certificate_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    certificate_number: Mapped[str] = mapped_column(String(255), nullable=False)
    registration_participant_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("registration_participant.registration_participant_id"),
        nullable=False,
    )
    issued_date: Mapped[date] = mapped_column(Date, nullable=False)
    expired_date: Mapped[date | None] = mapped_column(Date)
    cert_file: Mapped[str | None] = mapped_column(Text)

    @classmethod
    def from_entity(cls, certificate: TrainingCertificate) -> "TrainingCertificateModel":
        return cls(
            certificate_id=certificate.certificate_id,
            certificate_number=certificate.certificate_number,
            registration_participant_id=certificate.registration_participant_id,
            issued_date=certificate.issued_date,
            expired_date=certificate.expired_date,
            cert_file=certificate.cert_file,
        )

    def to_entity(self) -> TrainingCertificate:
        return TrainingCertificate(
            certificate_id=self.certificate_id,
            certificate_number=self.certificate_number,
            registration_participant_id=self.registration_participant_id,
            issued_date=self.issued_date,
            expired_date=self.expired_date,
            cert_file=self.cert_file,
        )


class UserCertificateModel(Base):
    """SQLAlchemy model for UserCertificate entity.

    The partial unique index keeps accepted numbers unique even when two
    acceptances race past the application-level conflict check.
    """

    __tablename__ = "user_certificates"
    __table_args__ = (
        Index(
            "uq_user_certificates_accepted_number",
            "certificate_number",
            unique=True,
            postgresql_where=text(f"status = {VerificationStatus.ACCEPTED.value}"),
        ),
        Index("ix_user_certificates_status", "status"),
    )

    user_certificate_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str | None] = mapped_column(String(128), index=True)
    fullname: Mapped[str] = mapped_column(String(255), nullable=False)
    cert_type: Mapped[str] = mapped_column(String(255), nullable=False)
    issuer: Mapped[str] = mapped_column(String(255), nullable=False)
    issued_date: Mapped[date] = mapped_column(Date, nullable=False)
    expired_date: Mapped[date | None] = mapped_column(Date)
    certificate_number: Mapped[str] = mapped_column(String(255), nullable=False)
    original_number: Mapped[str | None] = mapped_column(String(255))
    cert_file: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False)
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    verified_by: Mapped[str | None] = mapped_column(String(128))
    verification_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    @classmethod
    def from_entity(cls, certificate: UserCertificate) -> "UserCertificateModel":
        return cls(
            user_certificate_id=certificate.user_certificate_id,
            user_id=certificate.user_id,
            fullname=certificate.fullname,
            cert_type=certificate.cert_type,
            issuer=certificate.issuer,
            issued_date=certificate.issued_date,
            expired_date=certificate.expired_date,
            certificate_number=certificate.certificate_number,
            original_number=certificate.original_number,
            cert_file=list(certificate.cert_file),
            status=certificate.status.value,
            created_at=certificate.created_at,
            verified_by=certificate.verified_by,
            verification_date=certificate.verification_date,
            notes=certificate.notes,
        )

    def to_entity(self) -> UserCertificate:
        return UserCertificate(
            user_certificate_id=self.user_certificate_id,
            user_id=self.user_id,
            fullname=self.fullname,
            cert_type=self.cert_type,
            issuer=self.issuer,
            issued_date=self.issued_date,
            expired_date=self.expired_date,
            certificate_number=self.certificate_number,
            original_number=self.original_number,
            cert_file=list(self.cert_file or []),
            status=VerificationStatus(self.status),
            created_at=_aware_utc(self.created_at),
            verified_by=self.verified_by,
            verification_date=_aware_utc(self.verification_date),
            notes=self.notes,
        )


def _aware_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from the database."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Tables owned elsewhere; the core writes only the derived fields
# ---------------------------------------------------------------------------


class TrainingModel(Base):
    __tablename__ = "training"

    training_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    training_name: Mapped[str] = mapped_column(String(255), nullable=False)
    graduates: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class RegistrationModel(Base):
    __tablename__ = "registration"

    registration_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    training_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("training.training_id"), nullable=False
    )
    status: Mapped[str | None] = mapped_column(String(50))
    training_date: Mapped[date | None] = mapped_column(Date)
    completed_date: Mapped[date | None] = mapped_column(Date)


class RegistrationParticipantModel(Base):
    __tablename__ = "registration_participant"

    registration_participant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    registration_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("registration.registration_id"), nullable=False
    )
    user_id: Mapped[str | None] = mapped_column(String(128), ForeignKey("users.user_id"))
    attendance_status: Mapped[bool | None] = mapped_column(Boolean)
    has_certificate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def to_entity(self, training_id: str | None) -> RegistrationParticipant:
        return RegistrationParticipant(
            registration_participant_id=self.registration_participant_id,
            training_id=training_id,
            attendance_status=self.attendance_status,
            has_certificate=bool(self.has_certificate),
        )


class RoleModel(Base):
    __tablename__ = "roles"

    role_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    role_desc: Mapped[str] = mapped_column(String(50), nullable=False)


class UserModel(Base):
    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    fullname: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    user_photo: Mapped[str | None] = mapped_column(Text)
    role_id: Mapped[str | None] = mapped_column(String(64), ForeignKey("roles.role_id"))
