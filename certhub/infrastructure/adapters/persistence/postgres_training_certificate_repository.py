from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ....application.dtos.training_certificate_dto import TrainingCertificateSearchDTO
from ....application.ports.outbound import (
    MonthlyIssuance,
    TrainingCertificateRepository,
    TrainingCertificateView,
)
from ....domain.entities import TrainingCertificate
from ....domain.exceptions import Conflict
from ...persistence.filters import FilterBuilder, Operator
from ...persistence.models import (
    RegistrationModel,
    RegistrationParticipantModel,
    TrainingCertificateModel,
    TrainingModel,
    UserModel,
)


PARTICIPANT_CONSTRAINT = "uq_certificate_participant"


class PostgresTrainingCertificateRepository(TrainingCertificateRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, certificate: TrainingCertificate) -> None:
        self._session.add(TrainingCertificateModel.from_entity(certificate))
        await self._flush()

    async def save(self, certificate: TrainingCertificate) -> None:
        model = await self._session.get(TrainingCertificateModel, certificate.certificate_id)
        if model is None:
            self._session.add(TrainingCertificateModel.from_entity(certificate))
        else:
            model.issued_date = certificate.issued_date
            model.expired_date = certificate.expired_date
            model.cert_file = certificate.cert_file
        await self._flush()

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            if PARTICIPANT_CONSTRAINT in str(e.orig):
                raise Conflict("Participant already has a certificate", detail=str(e.orig)) from e
            raise Conflict("Certificate number is already in use", detail=str(e.orig)) from e

    async def get_by_id(self, certificate_id: str) -> TrainingCertificate | None:
        model = await self._session.get(TrainingCertificateModel, certificate_id)
        return model.to_entity() if model else None

    async def get_by_participant(self, registration_participant_id: str) -> TrainingCertificate | None:
        stmt = select(TrainingCertificateModel).where(
            TrainingCertificateModel.registration_participant_id == registration_participant_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def delete(self, certificate_id: str) -> bool:
        stmt = delete(TrainingCertificateModel).where(
            TrainingCertificateModel.certificate_id == certificate_id
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    def _view_query(self) -> Select:
        return (
            select(
                TrainingCertificateModel,
                UserModel.fullname,
                UserModel.user_photo,
                RegistrationModel.registration_id,
                RegistrationModel.status.label("registration_status"),
                RegistrationModel.training_date,
                RegistrationModel.completed_date,
                TrainingModel.training_name,
            )
            .join(
                RegistrationParticipantModel,
                RegistrationParticipantModel.registration_participant_id
                == TrainingCertificateModel.registration_participant_id,
            )
            .join(
                RegistrationModel,
                RegistrationModel.registration_id == RegistrationParticipantModel.registration_id,
            )
            .join(TrainingModel, TrainingModel.training_id == RegistrationModel.training_id)
            .outerjoin(UserModel, UserModel.user_id == RegistrationParticipantModel.user_id)
        )

    @staticmethod
    def _to_view(row) -> TrainingCertificateView:
        return TrainingCertificateView(
            certificate=row.TrainingCertificateModel.to_entity(),
            fullname=row.fullname,
            user_photo=row.user_photo,
            registration_id=row.registration_id,
            registration_status=row.registration_status,
            training_date=row.training_date,
            completed_date=row.completed_date,
            training_name=row.training_name,
        )

    async def get_view(self, certificate_id: str) -> TrainingCertificateView | None:
        stmt = self._view_query().where(TrainingCertificateModel.certificate_id == certificate_id)
        row = (await self._session.execute(stmt)).first()
        return self._to_view(row) if row else None

    async def search(self, criteria: TrainingCertificateSearchDTO) -> list[TrainingCertificateView]:
        cert = TrainingCertificateModel
        filters = (
            FilterBuilder()
            .any_contains(
                [
                    UserModel.fullname,
                    cert.certificate_number,
                    TrainingModel.training_name,
                    cert.issued_date,
                    cert.expired_date,
                ],
                criteria.query,
            )
            .add(TrainingModel.training_name, Operator.CONTAINS, criteria.training_name)
            .add(cert.certificate_number, Operator.CONTAINS, criteria.certificate_number)
            .add(UserModel.fullname, Operator.CONTAINS, criteria.fullname)
            .add(cert.issued_date, Operator.EQ, criteria.issued_date)
            .add(cert.expired_date, Operator.EQ, criteria.expired_date)
            .add(cert.issued_date, Operator.GTE, criteria.issued_date_from)
            .add(cert.issued_date, Operator.LTE, criteria.issued_date_to)
            .add(cert.expired_date, Operator.GTE, criteria.expired_date_from)
            .add(cert.expired_date, Operator.LTE, criteria.expired_date_to)
        )
        stmt = filters.apply(self._view_query()).order_by(
            cert.issued_date.desc(), UserModel.fullname.asc()
        )
        result = await self._session.execute(stmt)
        return [self._to_view(row) for row in result]

    async def count_by_month(self, months_back: int | None = None) -> list[MonthlyIssuance]:
        month = func.to_char(TrainingCertificateModel.issued_date, "YYYY-MM").label("month")
        stmt = select(month, func.count().label("total_certificates")).group_by(month)
        if months_back:
            stmt = stmt.where(
                TrainingCertificateModel.issued_date >= func.now() - func.make_interval(0, months_back)
            )
        result = await self._session.execute(stmt.order_by(month.desc()))
        return [
            MonthlyIssuance(month=row.month, total_certificates=int(row.total_certificates))
            for row in result
        ]
