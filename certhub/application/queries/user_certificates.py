from datetime import datetime, tzinfo

from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.user_certificate_dto import UserCertificateResponseDTO, UserCertificateSearchDTO
from ..ports.outbound import UserCertificateRepository


class GetUserCertificateQuery:
    def __init__(self, repository: UserCertificateRepository, tz: tzinfo = DEFAULT_TIMEZONE) -> None:
        self._repository = repository
        self._tz = tz

    async def execute(self, user_certificate_id: str) -> UserCertificateResponseDTO | None:
        view = await self._repository.get_view(user_certificate_id)
        if not view:
            return None
        return UserCertificateResponseDTO.from_entity(
            view.certificate,
            datetime.now(self._tz).date(),
            fullname=view.fullname,
            verified_by_name=view.verified_by_name,
        )


class SearchUserCertificatesQuery:
    """Query for user certificates; an empty search lists everything."""

    def __init__(self, repository: UserCertificateRepository, tz: tzinfo = DEFAULT_TIMEZONE) -> None:
        self._repository = repository
        self._tz = tz

    async def execute(self, criteria: UserCertificateSearchDTO) -> list[UserCertificateResponseDTO]:
        today = datetime.now(self._tz).date()
        views = await self._repository.search(criteria)
        return [
            UserCertificateResponseDTO.from_entity(
                v.certificate, today, fullname=v.fullname, verified_by_name=v.verified_by_name
            )
            for v in views
        ]
