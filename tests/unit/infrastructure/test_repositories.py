from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from certhub.domain.entities import TrainingCertificate
from certhub.domain.exceptions import Conflict, NotFound
from certhub.infrastructure.adapters import (
    PostgresCertificateNumberRegistry,
    PostgresTrainingCertificateRepository,
    PostgresTrainingRepository,
    PostgresUserCertificateRepository,
)
from tests.fakes import make_user_certificate


def make_session(**scalars) -> MagicMock:
    result = MagicMock()
    for name, value in scalars.items():
        getattr(result, name).return_value = value
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.flush = AsyncMock()
    return session


def executed_sql(session: MagicMock) -> str:
    stmt = session.execute.await_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))


class TestCountAcceptedConflicts:
    @pytest.mark.asyncio
    async def test_matches_both_numbers_in_both_columns(self):
        session = make_session(scalar_one=1)
        repository = PostgresUserCertificateRepository(session)

        count = await repository.count_accepted_conflicts(
            make_user_certificate("U1", "AB_1", original="AB/1")
        )

        sql = executed_sql(session)
        assert count == 1
        assert "user_certificates.status = 2" in sql
        assert "user_certificates.user_certificate_id != 'U1'" in sql
        assert "user_certificates.certificate_number IN ('AB_1', 'AB/1')" in sql
        assert "user_certificates.original_number IN ('AB_1', 'AB/1')" in sql

    @pytest.mark.asyncio
    async def test_generated_number_placeholder_is_not_matched(self):
        session = make_session(scalar_one=0)
        repository = PostgresUserCertificateRepository(session)

        await repository.count_accepted_conflicts(
            make_user_certificate("U2", "2403AAAAAA", original="-")
        )

        sql = executed_sql(session)
        assert "user_certificates.certificate_number IN ('2403AAAAAA')" in sql
        assert "user_certificates.original_number IN ('2403AAAAAA')" in sql
        assert "'-'" not in sql


class TestRecomputeGraduates:
    @pytest.mark.asyncio
    async def test_counts_certified_participants_of_training(self):
        session = make_session(scalar_one_or_none=3)
        repository = PostgresTrainingRepository(session)

        graduates = await repository.recompute_graduates("TR-1")

        sql = executed_sql(session)
        assert graduates == 3
        assert sql.startswith("UPDATE training SET graduates=(SELECT count(*)")
        assert (
            "JOIN registration ON registration.registration_id = "
            "registration_participant.registration_id"
        ) in sql
        assert "registration_participant.has_certificate IS true" in sql
        assert "registration.training_id = 'TR-1'" in sql
        assert "WHERE training.training_id = 'TR-1'" in sql
        assert sql.endswith("RETURNING training.graduates")

    @pytest.mark.asyncio
    async def test_unknown_training(self):
        repository = PostgresTrainingRepository(make_session(scalar_one_or_none=None))

        with pytest.raises(NotFound, match="Training not found"):
            await repository.recompute_graduates("TR-X")


class TestCertificateNumberRegistry:
    @pytest.mark.asyncio
    async def test_looks_in_both_tables(self):
        session = make_session(scalar=True)
        registry = PostgresCertificateNumberRegistry(session)

        assert await registry.exists("2403AAAAAA") is True

        sql = executed_sql(session)
        assert sql.count("EXISTS") == 2
        assert "certificate.certificate_number = '2403AAAAAA'" in sql
        assert "user_certificates.certificate_number = '2403AAAAAA'" in sql
        assert " OR " in sql

    @pytest.mark.asyncio
    async def test_free_number(self):
        registry = PostgresCertificateNumberRegistry(make_session(scalar=False))

        assert await registry.exists("2403AAAAAA") is False


class TestTrainingCertificateIntegrityErrors:
    @pytest.fixture
    def certificate(self):
        return TrainingCertificate("CERT-1", "2403AAAAAA", "RP-1", date(2024, 3, 1), None, "files/cert.pdf")

    def failing_session(self, message: str) -> MagicMock:
        session = make_session()
        session.flush.side_effect = IntegrityError("INSERT INTO certificate", {}, Exception(message))
        return session

    @pytest.mark.asyncio
    async def test_duplicate_participant(self, certificate):
        session = self.failing_session(
            'duplicate key value violates unique constraint "uq_certificate_participant"'
        )

        with pytest.raises(Conflict, match="Participant already has a certificate"):
            await PostgresTrainingCertificateRepository(session).add(certificate)

    @pytest.mark.asyncio
    async def test_duplicate_number(self, certificate):
        session = self.failing_session(
            'duplicate key value violates unique constraint "uq_certificate_number"'
        )

        with pytest.raises(Conflict, match="Certificate number is already in use"):
            await PostgresTrainingCertificateRepository(session).add(certificate)
