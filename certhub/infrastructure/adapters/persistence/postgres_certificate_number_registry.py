from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ....application.ports.outbound import CertificateNumberRegistry
from ...persistence.models import TrainingCertificateModel, UserCertificateModel


class PostgresCertificateNumberRegistry(CertificateNumberRegistry):
    """Looks a number up in both certificate tables in one round trip."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def exists(self, certificate_number: str) -> bool:
        stmt = select(
            or_(
                exists().where(TrainingCertificateModel.certificate_number == certificate_number),
                exists().where(UserCertificateModel.certificate_number == certificate_number),
            )
        )
        return bool((await self._session.execute(stmt)).scalar())
