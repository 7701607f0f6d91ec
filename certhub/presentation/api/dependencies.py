from typing import AsyncGenerator

from fastapi import Depends

from ...application.queries import (
    GetTrainingCertificateQuery,
    GetUserCertificateQuery,
    MonthlyIssuanceQuery,
    SearchTrainingCertificatesQuery,
    SearchUserCertificatesQuery,
)
from ...application.services import (
    AdminUploadUserCertificateService,
    CertificateNumberService,
    DeleteTrainingCertificateService,
    DeleteUserCertificatesService,
    GraduationReconciler,
    IssueTrainingCertificateService,
    SubmitUserCertificateService,
    UpdateTrainingCertificateService,
    UpdateUserCertificateStatusService,
)
from ...config import settings
from ...infrastructure.adapters import (
    PostgresCertificateNumberRegistry,
    PostgresParticipantRepository,
    PostgresTrainingCertificateRepository,
    PostgresTrainingRepository,
    PostgresUserCertificateRepository,
    PostgresUserRoleReader,
)
from ...infrastructure.persistence.database import Database
from ...infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

# Singleton database instance
_database: Database | None = None


def get_database() -> Database:
    global _database
    if _database is None:
        _database = Database(settings.database_url)
    return _database


async def get_session() -> AsyncGenerator:
    db = get_database()
    session = db.session()
    try:
        yield session
    finally:
        await session.close()


def get_user_role_reader(session=Depends(get_session)) -> PostgresUserRoleReader:
    return PostgresUserRoleReader(session)


def get_number_service(session=Depends(get_session)) -> CertificateNumberService:
    return CertificateNumberService(
        PostgresCertificateNumberRegistry(session),
        tz=settings.tz,
        max_attempts=settings.number_generation_max_attempts,
    )


def get_graduation_reconciler(session=Depends(get_session)) -> GraduationReconciler:
    return GraduationReconciler(
        PostgresParticipantRepository(session),
        PostgresTrainingRepository(session),
    )


# Training certificates


async def get_issue_training_certificate_service(
    session=Depends(get_session),
    numbers: CertificateNumberService = Depends(get_number_service),
    reconciler: GraduationReconciler = Depends(get_graduation_reconciler),
) -> IssueTrainingCertificateService:
    return IssueTrainingCertificateService(
        certificates=PostgresTrainingCertificateRepository(session),
        participants=PostgresParticipantRepository(session),
        numbers=numbers,
        reconciler=reconciler,
        unit_of_work=SqlAlchemyUnitOfWork(session),
        tz=settings.tz,
    )


async def get_update_training_certificate_service(
    session=Depends(get_session),
    reconciler: GraduationReconciler = Depends(get_graduation_reconciler),
) -> UpdateTrainingCertificateService:
    return UpdateTrainingCertificateService(
        certificates=PostgresTrainingCertificateRepository(session),
        participants=PostgresParticipantRepository(session),
        reconciler=reconciler,
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


async def get_delete_training_certificate_service(
    session=Depends(get_session),
    reconciler: GraduationReconciler = Depends(get_graduation_reconciler),
) -> DeleteTrainingCertificateService:
    return DeleteTrainingCertificateService(
        certificates=PostgresTrainingCertificateRepository(session),
        participants=PostgresParticipantRepository(session),
        reconciler=reconciler,
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


async def get_training_certificate_query(session=Depends(get_session)) -> GetTrainingCertificateQuery:
    return GetTrainingCertificateQuery(PostgresTrainingCertificateRepository(session), tz=settings.tz)


async def get_search_training_certificates_query(
    session=Depends(get_session),
) -> SearchTrainingCertificatesQuery:
    return SearchTrainingCertificatesQuery(PostgresTrainingCertificateRepository(session), tz=settings.tz)


async def get_monthly_issuance_query(session=Depends(get_session)) -> MonthlyIssuanceQuery:
    return MonthlyIssuanceQuery(PostgresTrainingCertificateRepository(session))


# User certificates


async def get_submit_user_certificate_service(
    session=Depends(get_session),
    numbers: CertificateNumberService = Depends(get_number_service),
) -> SubmitUserCertificateService:
    return SubmitUserCertificateService(
        repository=PostgresUserCertificateRepository(session),
        numbers=numbers,
        unit_of_work=SqlAlchemyUnitOfWork(session),
        tz=settings.tz,
    )


async def get_admin_upload_user_certificate_service(
    session=Depends(get_session),
    numbers: CertificateNumberService = Depends(get_number_service),
) -> AdminUploadUserCertificateService:
    return AdminUploadUserCertificateService(
        repository=PostgresUserCertificateRepository(session),
        numbers=numbers,
        unit_of_work=SqlAlchemyUnitOfWork(session),
        tz=settings.tz,
    )


async def get_update_user_certificate_status_service(
    session=Depends(get_session),
) -> UpdateUserCertificateStatusService:
    return UpdateUserCertificateStatusService(
        repository=PostgresUserCertificateRepository(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
        tz=settings.tz,
    )


async def get_delete_user_certificates_service(
    session=Depends(get_session),
) -> DeleteUserCertificatesService:
    return DeleteUserCertificatesService(
        repository=PostgresUserCertificateRepository(session),
        unit_of_work=SqlAlchemyUnitOfWork(session),
    )


async def get_user_certificate_query(session=Depends(get_session)) -> GetUserCertificateQuery:
    return GetUserCertificateQuery(PostgresUserCertificateRepository(session), tz=settings.tz)


async def get_search_user_certificates_query(
    session=Depends(get_session),
) -> SearchUserCertificatesQuery:
    return SearchUserCertificatesQuery(PostgresUserCertificateRepository(session), tz=settings.tz)
