"""Training certificate endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ....application.dtos import (
    IssuedCertificateDTO,
    IssueTrainingCertificateDTO,
    MonthlyIssuanceDTO,
    TrainingCertificateResponseDTO,
    TrainingCertificateSearchDTO,
    UpdateTrainingCertificateDTO,
)
from ....application.ports.inbound import (
    DeleteTrainingCertificateUseCase,
    IssueTrainingCertificateUseCase,
    UpdateTrainingCertificateUseCase,
)
from ....application.queries import (
    GetTrainingCertificateQuery,
    MonthlyIssuanceQuery,
    SearchTrainingCertificatesQuery,
)
from ....domain.exceptions import NotFound
from ....domain.value_objects import ValidityStatus
from ...middleware.auth import AuthenticatedUser, require_admin
from ..dependencies import (
    get_delete_training_certificate_service,
    get_issue_training_certificate_service,
    get_monthly_issuance_query,
    get_search_training_certificates_query,
    get_training_certificate_query,
    get_update_training_certificate_service,
)
from ..responses import SuccessResponse, success

router = APIRouter(prefix="/certificates", tags=["certificates"])


@router.post(
    "",
    response_model=SuccessResponse[IssuedCertificateDTO],
    status_code=status.HTTP_201_CREATED,
)
async def issue_certificate(
    dto: IssueTrainingCertificateDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: IssueTrainingCertificateUseCase = Depends(get_issue_training_certificate_service),
) -> dict:
    """Issue a certificate to a participant who attended the training."""
    issued = await use_case.execute(dto)
    return success("Certificate created successfully", issued)


@router.put("", response_model=SuccessResponse[dict])
async def update_certificate(
    dto: UpdateTrainingCertificateDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: UpdateTrainingCertificateUseCase = Depends(get_update_training_certificate_service),
) -> dict:
    certificate_id = await use_case.execute(dto)
    return success("Certificate updated successfully", {"certificate_id": certificate_id})


@router.get("", response_model=SuccessResponse[list[TrainingCertificateResponseDTO]])
async def list_certificates(
    status_filter: Annotated[ValidityStatus | None, Query(alias="status")] = None,
    query: SearchTrainingCertificatesQuery = Depends(get_search_training_certificates_query),
) -> dict:
    """List all certificates, optionally only Valid or Expired ones."""
    results = await query.execute(TrainingCertificateSearchDTO(status=status_filter))
    return success("Certificates retrieved successfully", results)


@router.get("/search", response_model=SuccessResponse[list[TrainingCertificateResponseDTO]])
async def search_certificates(
    criteria: Annotated[TrainingCertificateSearchDTO, Query()],
    query: SearchTrainingCertificatesQuery = Depends(get_search_training_certificates_query),
) -> dict:
    results = await query.execute(criteria)
    return success("Certificates retrieved successfully", results)


@router.get("/summary", response_model=SuccessResponse[list[MonthlyIssuanceDTO]])
async def certificate_summary(
    months_back: Annotated[int | None, Query(ge=1, le=120)] = None,
    query: MonthlyIssuanceQuery = Depends(get_monthly_issuance_query),
) -> dict:
    """Certificates issued per month, newest month first."""
    results = await query.execute(months_back)
    return success("Certificate summary retrieved successfully", results)


@router.get("/{certificate_id}", response_model=SuccessResponse[TrainingCertificateResponseDTO])
async def get_certificate(
    certificate_id: str,
    query: GetTrainingCertificateQuery = Depends(get_training_certificate_query),
) -> dict:
    result = await query.execute(certificate_id)
    if not result:
        raise NotFound("Certificate not found")
    return success("Certificate retrieved successfully", result)


@router.delete("/{certificate_id}", response_model=SuccessResponse[None])
async def delete_certificate(
    certificate_id: str,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: DeleteTrainingCertificateUseCase = Depends(get_delete_training_certificate_service),
) -> dict:
    await use_case.execute(certificate_id)
    return success("Certificate deleted successfully")
