from datetime import datetime, tzinfo

from ...domain.identifiers import DEFAULT_TIMEZONE
from ..dtos.training_certificate_dto import (
    MonthlyIssuanceDTO,
    TrainingCertificateResponseDTO,
    TrainingCertificateSearchDTO,
)
from ..ports.outbound import TrainingCertificateRepository


class GetTrainingCertificateQuery:
    """Query for a single training certificate with its context."""

    def __init__(self, repository: TrainingCertificateRepository, tz: tzinfo = DEFAULT_TIMEZONE) -> None:
        self._repository = repository
        self._tz = tz

    async def execute(self, certificate_id: str) -> TrainingCertificateResponseDTO | None:
        view = await self._repository.get_view(certificate_id)
        if not view:
            return None
        return TrainingCertificateResponseDTO.from_view(view, datetime.now(self._tz).date())


class SearchTrainingCertificatesQuery:
    """Query for training certificates, newest first.

    Validity is derived from today's date, so the ``status`` filter is
    applied after the rows are loaded.
    """

    def __init__(self, repository: TrainingCertificateRepository, tz: tzinfo = DEFAULT_TIMEZONE) -> None:
        self._repository = repository
        self._tz = tz

    async def execute(self, criteria: TrainingCertificateSearchDTO) -> list[TrainingCertificateResponseDTO]:
        today = datetime.now(self._tz).date()
        views = await self._repository.search(criteria)
        results = [TrainingCertificateResponseDTO.from_view(v, today) for v in views]
        if criteria.status:
            results = [r for r in results if r.status_certificate == criteria.status]
        return results


class MonthlyIssuanceQuery:
    def __init__(self, repository: TrainingCertificateRepository) -> None:
        self._repository = repository

    async def execute(self, months_back: int | None = None) -> list[MonthlyIssuanceDTO]:
        rows = await self._repository.count_by_month(months_back)
        return [MonthlyIssuanceDTO(month=r.month, total_certificates=r.total_certificates) for r in rows]
