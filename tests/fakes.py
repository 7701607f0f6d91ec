"""In-memory implementations of the outbound ports.

All repositories share one ``InMemoryStore``. ``FakeUnitOfWork`` snapshots
the store on enter and restores it unless the block commits, which mirrors
a database session closed without commit.
"""

import copy
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from types import TracebackType

from certhub.application.dtos import TrainingCertificateSearchDTO, UserCertificateSearchDTO
from certhub.application.ports.outbound import (
    CertificateNumberRegistry,
    MonthlyIssuance,
    ParticipantRepository,
    TrainingCertificateRepository,
    TrainingCertificateView,
    TrainingRepository,
    UnitOfWork,
    UserCertificateRepository,
    UserCertificateView,
)
from certhub.domain.entities import (
    RegistrationParticipant,
    TrainingCertificate,
    UserCertificate,
    VerificationStatus,
)
from certhub.domain.exceptions import Conflict, NotFound


@dataclass
class Training:
    training_id: str
    training_name: str
    graduates: int = 0


@dataclass
class InMemoryStore:
    trainings: dict[str, Training] = field(default_factory=dict)
    participants: dict[str, RegistrationParticipant] = field(default_factory=dict)
    training_certificates: dict[str, TrainingCertificate] = field(default_factory=dict)
    user_certificates: dict[str, UserCertificate] = field(default_factory=dict)
    user_names: dict[str, str] = field(default_factory=dict)

    def add_training(self, training_id: str, name: str = "Basic Safety", graduates: int = 0) -> Training:
        training = Training(training_id, name, graduates)
        self.trainings[training_id] = training
        return training

    def add_participant(
        self,
        participant_id: str,
        training_id: str | None,
        attended: bool | None = True,
        has_certificate: bool = False,
    ) -> RegistrationParticipant:
        participant = RegistrationParticipant(participant_id, training_id, attended, has_certificate)
        self.participants[participant_id] = participant
        return participant

    def snapshot(self) -> dict:
        return copy.deepcopy(vars(self))

    def restore(self, state: dict) -> None:
        for name, value in copy.deepcopy(state).items():
            setattr(self, name, value)


class FakeUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self._state: dict | None = None
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> "FakeUnitOfWork":
        self._state = self._store.snapshot()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._state is not None:
            await self.rollback()

    async def commit(self) -> None:
        self._state = None
        self.commits += 1

    async def rollback(self) -> None:
        if self._state is not None:
            self._store.restore(self._state)
            self._state = None
        self.rollbacks += 1


class FakeTrainingCertificateRepository(TrainingCertificateRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def add(self, certificate: TrainingCertificate) -> None:
        for existing in self._store.training_certificates.values():
            if existing.certificate_number == certificate.certificate_number:
                raise Conflict("Certificate number is already in use")
            if existing.registration_participant_id == certificate.registration_participant_id:
                raise Conflict("Participant already has a certificate")
        self._store.training_certificates[certificate.certificate_id] = copy.deepcopy(certificate)

    async def save(self, certificate: TrainingCertificate) -> None:
        self._store.training_certificates[certificate.certificate_id] = copy.deepcopy(certificate)

    async def get_by_id(self, certificate_id: str) -> TrainingCertificate | None:
        return copy.deepcopy(self._store.training_certificates.get(certificate_id))

    async def get_by_participant(self, registration_participant_id: str) -> TrainingCertificate | None:
        for certificate in self._store.training_certificates.values():
            if certificate.registration_participant_id == registration_participant_id:
                return copy.deepcopy(certificate)
        return None

    async def delete(self, certificate_id: str) -> bool:
        return self._store.training_certificates.pop(certificate_id, None) is not None

    def _view(self, certificate: TrainingCertificate) -> TrainingCertificateView:
        participant = self._store.participants.get(certificate.registration_participant_id)
        training = self._store.trainings.get(participant.training_id) if participant else None
        return TrainingCertificateView(
            certificate=copy.deepcopy(certificate),
            fullname=self._store.user_names.get(certificate.registration_participant_id),
            training_name=training.training_name if training else None,
        )

    async def get_view(self, certificate_id: str) -> TrainingCertificateView | None:
        certificate = self._store.training_certificates.get(certificate_id)
        return self._view(certificate) if certificate else None

    async def search(self, criteria: TrainingCertificateSearchDTO) -> list[TrainingCertificateView]:
        views = [self._view(c) for c in self._store.training_certificates.values()]
        if criteria.certificate_number:
            needle = criteria.certificate_number.lower()
            views = [v for v in views if needle in v.certificate.certificate_number.lower()]
        return sorted(views, key=lambda v: v.certificate.issued_date, reverse=True)

    async def count_by_month(self, months_back: int | None = None) -> list[MonthlyIssuance]:
        counts = Counter(
            c.issued_date.strftime("%Y-%m") for c in self._store.training_certificates.values()
        )
        return [MonthlyIssuance(month, total) for month, total in sorted(counts.items(), reverse=True)]


class FakeUserCertificateRepository(UserCertificateRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.locked: list[str] = []

    def _check_accepted_unique(self, certificate: UserCertificate) -> None:
        if certificate.status != VerificationStatus.ACCEPTED:
            return
        for other in self._store.user_certificates.values():
            if (
                other.user_certificate_id != certificate.user_certificate_id
                and other.status == VerificationStatus.ACCEPTED
                and other.certificate_number == certificate.certificate_number
            ):
                raise Conflict()

    async def add(self, certificate: UserCertificate) -> None:
        self._check_accepted_unique(certificate)
        self._store.user_certificates[certificate.user_certificate_id] = copy.deepcopy(certificate)

    async def save(self, certificate: UserCertificate) -> None:
        self._check_accepted_unique(certificate)
        self._store.user_certificates[certificate.user_certificate_id] = copy.deepcopy(certificate)

    async def get_by_id(self, user_certificate_id: str, lock: bool = False) -> UserCertificate | None:
        if lock:
            self.locked.append(user_certificate_id)
        return copy.deepcopy(self._store.user_certificates.get(user_certificate_id))

    async def count_accepted_conflicts(self, certificate: UserCertificate) -> int:
        return sum(
            1 for other in self._store.user_certificates.values() if certificate.conflicts_with(other)
        )

    async def delete_many(self, user_certificate_ids: list[str]) -> int:
        return sum(
            1 for i in user_certificate_ids if self._store.user_certificates.pop(i, None) is not None
        )

    async def delete_rejected(self) -> int:
        rejected = [
            i
            for i, c in self._store.user_certificates.items()
            if c.status == VerificationStatus.REJECTED
        ]
        return await self.delete_many(rejected)

    def _view(self, certificate: UserCertificate) -> UserCertificateView:
        return UserCertificateView(
            certificate=copy.deepcopy(certificate),
            fullname=self._store.user_names.get(certificate.user_id or "", certificate.fullname),
            verified_by_name=self._store.user_names.get(certificate.verified_by or ""),
        )

    async def get_view(self, user_certificate_id: str) -> UserCertificateView | None:
        certificate = self._store.user_certificates.get(user_certificate_id)
        return self._view(certificate) if certificate else None

    async def search(self, criteria: UserCertificateSearchDTO) -> list[UserCertificateView]:
        rows = list(self._store.user_certificates.values())
        if criteria.status:
            rows = [c for c in rows if c.status in criteria.status]
        return [self._view(c) for c in rows]


class FakeParticipantRepository(ParticipantRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def get(self, registration_participant_id: str) -> RegistrationParticipant | None:
        return copy.deepcopy(self._store.participants.get(registration_participant_id))

    async def get_training_id(self, registration_participant_id: str) -> str | None:
        participant = self._store.participants.get(registration_participant_id)
        return participant.training_id if participant else None

    async def set_has_certificate(self, registration_participant_id: str, value: bool) -> None:
        participant = self._store.participants.get(registration_participant_id)
        if participant:
            participant.has_certificate = value


class FakeTrainingRepository(TrainingRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def recompute_graduates(self, training_id: str) -> int:
        training = self._store.trainings.get(training_id)
        if training is None:
            raise NotFound("Training not found")
        training.graduates = sum(
            1
            for p in self._store.participants.values()
            if p.training_id == training_id and p.has_certificate
        )
        return training.graduates


class FakeCertificateNumberRegistry(CertificateNumberRegistry):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def exists(self, certificate_number: str) -> bool:
        return any(
            c.certificate_number == certificate_number
            for c in self._store.training_certificates.values()
        ) or any(
            c.certificate_number == certificate_number
            for c in self._store.user_certificates.values()
        )


def make_user_certificate(
    certificate_id: str,
    number: str,
    original: str | None = None,
    status: VerificationStatus = VerificationStatus.PENDING,
    expired_date: date | None = None,
) -> UserCertificate:
    return UserCertificate(
        user_certificate_id=certificate_id,
        fullname="Siti Rahma",
        cert_type="First Aid",
        issuer="Red Cross",
        issued_date=date(2024, 1, 10),
        expired_date=expired_date,
        certificate_number=number,
        original_number=original,
        cert_file=["files/first-aid.pdf"],
        status=status,
        created_at=datetime(2024, 1, 11, tzinfo=UTC),
    )
