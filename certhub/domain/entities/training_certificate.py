from dataclasses import dataclass
from datetime import date, datetime

from ..identifiers import TRAINING_CERTIFICATE_PREFIX, generate_id
from ..value_objects import ValidityStatus, validity_of


@dataclass
class TrainingCertificate:
    """Completion certificate issued for one registration participant.

    ``certificate_number`` and ``registration_participant_id`` never change
    after issuance.
    """

    certificate_id: str
    certificate_number: str
    registration_participant_id: str
    issued_date: date
    expired_date: date | None = None
    cert_file: str | None = None

    @classmethod
    def issue(
        cls,
        certificate_number: str,
        registration_participant_id: str,
        issued_date: date,
        expired_date: date | None = None,
        cert_file: str | None = None,
        now: datetime | None = None,
    ) -> "TrainingCertificate":
        """Factory method to create a new certificate with a fresh id."""
        return cls(
            certificate_id=generate_id(TRAINING_CERTIFICATE_PREFIX, now),
            certificate_number=certificate_number,
            registration_participant_id=registration_participant_id,
            issued_date=issued_date,
            expired_date=expired_date,
            cert_file=cert_file or None,
        )

    @property
    def has_file(self) -> bool:
        return bool(self.cert_file)

    def revise(
        self,
        issued_date: date | None = None,
        expired_date: date | None = None,
        cert_file: str | None = None,
    ) -> None:
        """Overwrite only the fields that were supplied with a value."""
        if issued_date:
            self.issued_date = issued_date
        if expired_date:
            self.expired_date = expired_date
        if cert_file:
            self.cert_file = cert_file

    def validity(self, today: date) -> ValidityStatus:
        return validity_of(self.expired_date, today)
