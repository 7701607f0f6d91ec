from datetime import date

import pytest
from pydantic import ValidationError

from certhub.application.dtos import (
    CreateUserCertificateDTO,
    IssueTrainingCertificateDTO,
    TrainingCertificateSearchDTO,
    UserCertificateSearchDTO,
)
from certhub.application.dtos.user_certificate_dto import display_verifier
from certhub.domain.entities import VerificationStatus


class TestCreateUserCertificateDTO:
    def test_text_fields_are_escaped(self):
        dto = CreateUserCertificateDTO(
            fullname="<script>alert(1)</script>",
            cert_type="First Aid",
            issuer="Red & Cross",
            issued_date=date(2024, 1, 10),
            certificate_number="ABC",
            cert_file=["a.pdf"],
        )

        assert dto.fullname == "&lt;script&gt;alert(1)&lt;/script&gt;"
        assert dto.issuer == "Red &amp; Cross"

    def test_missing_fields_raise_error(self):
        with pytest.raises(ValidationError):
            CreateUserCertificateDTO(fullname="Siti", cert_file=["a.pdf"])


class TestIssueTrainingCertificateDTO:
    def test_blank_optionals_become_none(self):
        dto = IssueTrainingCertificateDTO(
            registration_participant_id="RP-1",
            issued_date="2024-03-01",
            expired_date="",
            cert_file="files/cert.pdf",
            certificate_number="",
        )

        assert dto.expired_date is None
        assert dto.certificate_number is None

    def test_blank_cert_file_is_rejected(self):
        with pytest.raises(ValidationError, match="cert_file"):
            IssueTrainingCertificateDTO(
                registration_participant_id="RP-1", issued_date="2024-03-01", cert_file=" "
            )


class TestSearchDTOs:
    def test_unknown_sort_falls_back_to_created_at(self):
        dto = UserCertificateSearchDTO(sort_by="password", sort_order="ASC")

        assert dto.sort_by == "created_at"
        assert dto.sort_order == "asc"

    def test_status_accepts_comma_separated_values(self):
        dto = UserCertificateSearchDTO(status=["1,3"])

        assert dto.status == [VerificationStatus.PENDING, VerificationStatus.REJECTED]

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            UserCertificateSearchDTO(status=[7])

    def test_training_validity_filter_must_be_known(self):
        with pytest.raises(ValidationError):
            TrainingCertificateSearchDTO(status="Revoked")


class TestDisplayVerifier:
    def test_with_name(self):
        assert display_verifier("admin-1", "Admin Satu") == "admin-1 (Admin Satu)"

    def test_without_name(self):
        assert display_verifier("admin-1", None) == "admin-1"

    def test_unverified(self):
        assert display_verifier(None, "Admin Satu") is None
