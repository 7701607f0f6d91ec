from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from ....application.dtos.user_certificate_dto import UserCertificateSearchDTO
from ....application.ports.outbound import UserCertificateRepository, UserCertificateView
from ....domain.entities import UserCertificate, VerificationStatus
from ....domain.exceptions import Conflict
from ...persistence.filters import FilterBuilder, Operator
from ...persistence.models import UserCertificateModel, UserModel

_owner = aliased(UserModel, name="owner")
_verifier = aliased(UserModel, name="verifier")
_display_name = func.coalesce(_owner.fullname, UserCertificateModel.fullname)


class PostgresUserCertificateRepository(UserCertificateRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, certificate: UserCertificate) -> None:
        self._session.add(UserCertificateModel.from_entity(certificate))
        await self._flush()

    async def save(self, certificate: UserCertificate) -> None:
        model = await self._session.get(UserCertificateModel, certificate.user_certificate_id)
        if model is None:
            self._session.add(UserCertificateModel.from_entity(certificate))
        else:
            model.status = certificate.status.value
            model.verified_by = certificate.verified_by
            model.verification_date = certificate.verification_date
            model.notes = certificate.notes
        await self._flush()

    async def _flush(self) -> None:
        # The only unique index besides the key covers accepted numbers.
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise Conflict(detail=str(e.orig)) from e

    async def get_by_id(self, user_certificate_id: str, lock: bool = False) -> UserCertificate | None:
        stmt = select(UserCertificateModel).where(
            UserCertificateModel.user_certificate_id == user_certificate_id
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def count_accepted_conflicts(self, certificate: UserCertificate) -> int:
        keys = list(certificate.number_keys())
        stmt = (
            select(func.count())
            .select_from(UserCertificateModel)
            .where(
                UserCertificateModel.status == VerificationStatus.ACCEPTED.value,
                UserCertificateModel.user_certificate_id != certificate.user_certificate_id,
                or_(
                    UserCertificateModel.certificate_number.in_(keys),
                    UserCertificateModel.original_number.in_(keys),
                ),
            )
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def delete_many(self, user_certificate_ids: list[str]) -> int:
        stmt = delete(UserCertificateModel).where(
            UserCertificateModel.user_certificate_id.in_(user_certificate_ids)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def delete_rejected(self) -> int:
        stmt = delete(UserCertificateModel).where(
            UserCertificateModel.status == VerificationStatus.REJECTED.value
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    def _view_query(self) -> Select:
        return (
            select(
                UserCertificateModel,
                _display_name.label("display_name"),
                func.coalesce(_verifier.fullname, _verifier.email).label("verified_by_name"),
            )
            .outerjoin(_owner, _owner.user_id == UserCertificateModel.user_id)
            .outerjoin(_verifier, _verifier.user_id == UserCertificateModel.verified_by)
        )

    @staticmethod
    def _to_view(row) -> UserCertificateView:
        return UserCertificateView(
            certificate=row.UserCertificateModel.to_entity(),
            fullname=row.display_name,
            verified_by_name=row.verified_by_name,
        )

    async def get_view(self, user_certificate_id: str) -> UserCertificateView | None:
        stmt = self._view_query().where(
            UserCertificateModel.user_certificate_id == user_certificate_id
        )
        row = (await self._session.execute(stmt)).first()
        return self._to_view(row) if row else None

    async def search(self, criteria: UserCertificateSearchDTO) -> list[UserCertificateView]:
        uc = UserCertificateModel
        filters = (
            FilterBuilder()
            .add(uc.user_id, Operator.CONTAINS, criteria.user_id)
            .add(_display_name, Operator.CONTAINS, criteria.fullname)
            .add(uc.cert_type, Operator.CONTAINS, criteria.cert_type)
            .add(uc.issuer, Operator.CONTAINS, criteria.issuer)
            .add(uc.issued_date, Operator.EQ, criteria.issued_date)
            .add(uc.expired_date, Operator.EQ, criteria.expired_date)
            .add(uc.certificate_number, Operator.CONTAINS, criteria.certificate_number)
            .add(uc.original_number, Operator.CONTAINS, criteria.original_number)
            .add(uc.status, Operator.IN, [s.value for s in criteria.status])
            .add(func.date(uc.created_at), Operator.EQ, criteria.created_at)
            .any_contains(
                [uc.user_id, _display_name, uc.cert_type, uc.certificate_number, uc.original_number],
                criteria.query,
            )
        )
        sort_column = _display_name if criteria.sort_by == "fullname" else getattr(uc, criteria.sort_by)
        order = sort_column.asc() if criteria.sort_order == "asc" else sort_column.desc()
        result = await self._session.execute(filters.apply(self._view_query()).order_by(order))
        return [self._to_view(row) for row in result]
