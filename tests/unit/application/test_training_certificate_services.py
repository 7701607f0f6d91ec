from datetime import date

import pytest
from pydantic import ValidationError

from certhub.application.dtos import IssueTrainingCertificateDTO, UpdateTrainingCertificateDTO
from certhub.application.services import (
    DeleteTrainingCertificateService,
    IssueTrainingCertificateService,
    UpdateTrainingCertificateService,
)
from certhub.domain.exceptions import Conflict, NotFound, PreconditionFailed
from certhub.domain.identifiers import NUMBER_LENGTH
from tests.fakes import make_user_certificate


@pytest.fixture
def issue_service(training_certificates, participants, numbers, reconciler, uow):
    return IssueTrainingCertificateService(
        certificates=training_certificates,
        participants=participants,
        numbers=numbers,
        reconciler=reconciler,
        unit_of_work=uow,
    )


@pytest.fixture
def update_service(training_certificates, participants, reconciler, uow):
    return UpdateTrainingCertificateService(
        certificates=training_certificates,
        participants=participants,
        reconciler=reconciler,
        unit_of_work=uow,
    )


@pytest.fixture
def delete_service(training_certificates, participants, reconciler, uow):
    return DeleteTrainingCertificateService(
        certificates=training_certificates,
        participants=participants,
        reconciler=reconciler,
        unit_of_work=uow,
    )


@pytest.fixture
def training(store):
    training = store.add_training("TR-1")
    store.add_participant("RP-1", "TR-1", attended=True)
    store.add_participant("RP-2", "TR-1", attended=True)
    return training


def issue_dto(participant_id: str = "RP-1", **overrides) -> IssueTrainingCertificateDTO:
    values = {
        "registration_participant_id": participant_id,
        "issued_date": date(2024, 3, 1),
        "expired_date": date(2027, 3, 1),
        "cert_file": "files/cert.pdf",
    }
    values.update(overrides)
    return IssueTrainingCertificateDTO(**values)


class TestIssueTrainingCertificate:
    @pytest.mark.asyncio
    async def test_issue_generates_number_and_counts_graduate(self, issue_service, store, training, uow):
        result = await issue_service.execute(issue_dto())

        assert result.certificate_id.startswith("CERT-")
        assert len(result.certificate_number) == NUMBER_LENGTH
        assert result.certificate_id in store.training_certificates
        assert store.participants["RP-1"].has_certificate is True
        assert training.graduates == 1
        assert uow.commits == 1

    @pytest.mark.parametrize("cert_file", [None, "", "  "])
    def test_issue_requires_file(self, cert_file):
        with pytest.raises(ValidationError, match="cert_file"):
            issue_dto(cert_file=cert_file)

    @pytest.mark.asyncio
    async def test_graduates_are_recounted_not_incremented(self, issue_service, store, training):
        training.graduates = 7

        await issue_service.execute(issue_dto())

        assert store.trainings["TR-1"].graduates == 1

    @pytest.mark.asyncio
    async def test_supplied_number_is_sanitized(self, issue_service, store, training):
        result = await issue_service.execute(issue_dto(certificate_number="TRN/2024/01"))

        assert result.certificate_number == "TRN_2024_01"

    @pytest.mark.asyncio
    async def test_supplied_number_used_by_user_certificate(self, issue_service, store, training):
        store.user_certificates["U1"] = make_user_certificate("U1", "TRN-1")

        with pytest.raises(Conflict):
            await issue_service.execute(issue_dto(certificate_number="TRN-1"))

        assert store.training_certificates == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attendance", [False, None])
    async def test_absent_participant_is_refused(self, issue_service, store, training, attendance):
        store.participants["RP-1"].attendance_status = attendance

        with pytest.raises(PreconditionFailed, match="has not attended"):
            await issue_service.execute(issue_dto())

        assert store.training_certificates == {}
        assert store.participants["RP-1"].has_certificate is False

    @pytest.mark.asyncio
    async def test_unknown_participant(self, issue_service, training):
        with pytest.raises(NotFound, match="Participant not found"):
            await issue_service.execute(issue_dto("RP-404"))

    @pytest.mark.asyncio
    async def test_second_certificate_for_participant(self, issue_service, store, training):
        await issue_service.execute(issue_dto())

        with pytest.raises(Conflict):
            await issue_service.execute(issue_dto())

        assert len(store.training_certificates) == 1

    @pytest.mark.asyncio
    async def test_missing_training_rolls_everything_back(self, issue_service, store, uow):
        store.add_participant("RP-9", "TR-GONE", attended=True)

        with pytest.raises(NotFound, match="Training not found"):
            await issue_service.execute(issue_dto("RP-9"))

        assert store.training_certificates == {}
        assert store.participants["RP-9"].has_certificate is False
        assert uow.commits == 0
        assert uow.rollbacks == 1


class TestUpdateTrainingCertificate:
    @pytest.mark.asyncio
    async def test_update_keeps_omitted_fields(self, issue_service, update_service, store, training):
        issued = await issue_service.execute(issue_dto())

        await update_service.execute(
            UpdateTrainingCertificateDTO(
                certificate_id=issued.certificate_id,
                registration_participant_id="RP-1",
                issued_date=date(2024, 4, 1),
                expired_date="",
                cert_file="",
            )
        )

        certificate = store.training_certificates[issued.certificate_id]
        assert certificate.issued_date == date(2024, 4, 1)
        assert certificate.expired_date == date(2027, 3, 1)
        assert certificate.cert_file == "files/cert.pdf"
        assert certificate.certificate_number == issued.certificate_number

    @pytest.mark.asyncio
    async def test_replacing_file_keeps_participant_graduated(
        self, issue_service, update_service, store, training
    ):
        issued = await issue_service.execute(issue_dto())
        assert training.graduates == 1

        result = await update_service.execute(
            UpdateTrainingCertificateDTO(
                certificate_id=issued.certificate_id,
                registration_participant_id="RP-1",
                cert_file="files/late.pdf",
            )
        )

        assert result == issued.certificate_id
        assert store.participants["RP-1"].has_certificate is True
        assert store.trainings["TR-1"].graduates == 1

    @pytest.mark.asyncio
    async def test_participant_must_match(self, issue_service, update_service, training):
        issued = await issue_service.execute(issue_dto())

        with pytest.raises(NotFound):
            await update_service.execute(
                UpdateTrainingCertificateDTO(
                    certificate_id=issued.certificate_id,
                    registration_participant_id="RP-2",
                    cert_file="files/other.pdf",
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_certificate(self, update_service, training):
        with pytest.raises(NotFound):
            await update_service.execute(
                UpdateTrainingCertificateDTO(certificate_id="CERT-X", registration_participant_id="RP-1")
            )


class TestDeleteTrainingCertificate:
    @pytest.mark.asyncio
    async def test_delete_resets_participant_and_recounts(
        self, issue_service, delete_service, store, training
    ):
        first = await issue_service.execute(issue_dto("RP-1"))
        await issue_service.execute(issue_dto("RP-2"))
        assert training.graduates == 2

        await delete_service.execute(first.certificate_id)

        assert first.certificate_id not in store.training_certificates
        assert store.participants["RP-1"].has_certificate is False
        assert store.trainings["TR-1"].graduates == 1

    @pytest.mark.asyncio
    async def test_unknown_certificate(self, delete_service, training):
        with pytest.raises(NotFound, match="Certificate not found"):
            await delete_service.execute("CERT-X")

    @pytest.mark.asyncio
    async def test_delete_without_training_skips_recount(
        self, issue_service, delete_service, store, training, uow
    ):
        issued = await issue_service.execute(issue_dto())
        store.participants["RP-1"].training_id = None

        await delete_service.execute(issued.certificate_id)

        assert store.training_certificates == {}
        assert uow.commits == 2


class TestCertificateLifecycle:
    @pytest.mark.asyncio
    async def test_issue_update_delete(
        self, issue_service, update_service, delete_service, store, training
    ):
        issued = await issue_service.execute(
            IssueTrainingCertificateDTO(
                registration_participant_id="RP-1",
                issued_date="2024-01-01",
                cert_file="files/cert.pdf",
            )
        )
        assert issued.certificate_id
        assert len(issued.certificate_number) == NUMBER_LENGTH
        assert store.participants["RP-1"].has_certificate is True
        assert training.graduates == 1

        await update_service.execute(
            UpdateTrainingCertificateDTO(
                certificate_id=issued.certificate_id,
                registration_participant_id="RP-1",
                cert_file="files/cert-v2.pdf",
            )
        )
        assert store.training_certificates[issued.certificate_id].cert_file == "files/cert-v2.pdf"
        assert store.trainings["TR-1"].graduates == 1

        await delete_service.execute(issued.certificate_id)
        assert store.trainings["TR-1"].graduates == 0
        assert store.participants["RP-1"].has_certificate is False
