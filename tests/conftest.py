from datetime import date

import pytest

from certhub.application.services import CertificateNumberService, GraduationReconciler
from certhub.domain.entities import UserCertificate
from certhub.domain.value_objects import CertificateNumber
from tests.fakes import (
    FakeCertificateNumberRegistry,
    FakeParticipantRepository,
    FakeTrainingCertificateRepository,
    FakeTrainingRepository,
    FakeUnitOfWork,
    FakeUserCertificateRepository,
    InMemoryStore,
)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow(store) -> FakeUnitOfWork:
    return FakeUnitOfWork(store)


@pytest.fixture
def training_certificates(store) -> FakeTrainingCertificateRepository:
    return FakeTrainingCertificateRepository(store)


@pytest.fixture
def user_certificates(store) -> FakeUserCertificateRepository:
    return FakeUserCertificateRepository(store)


@pytest.fixture
def participants(store) -> FakeParticipantRepository:
    return FakeParticipantRepository(store)


@pytest.fixture
def trainings(store) -> FakeTrainingRepository:
    return FakeTrainingRepository(store)


@pytest.fixture
def numbers(store) -> CertificateNumberService:
    return CertificateNumberService(FakeCertificateNumberRegistry(store))


@pytest.fixture
def reconciler(participants, trainings) -> GraduationReconciler:
    return GraduationReconciler(participants, trainings)


@pytest.fixture
def sample_user_certificate() -> UserCertificate:
    return UserCertificate.submit(
        fullname="Siti Rahma",
        cert_type="First Aid",
        issuer="Red Cross",
        issued_date=date(2024, 1, 10),
        number=CertificateNumber("ABC-123"),
        cert_file=["files/first-aid.pdf"],
        user_id="user-1",
        expired_date=date(2026, 1, 10),
    )
