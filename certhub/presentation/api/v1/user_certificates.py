"""User-uploaded certificate endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ....application.dtos import (
    AdminCreateUserCertificateDTO,
    CreatedUserCertificateDTO,
    CreateUserCertificateDTO,
    DeleteUserCertificatesDTO,
    UpdateUserCertificateStatusDTO,
    UserCertificateResponseDTO,
    UserCertificateSearchDTO,
)
from ....application.ports.inbound import (
    AdminUploadUserCertificateUseCase,
    DeleteUserCertificatesUseCase,
    SubmitUserCertificateUseCase,
    UpdateUserCertificateStatusUseCase,
)
from ....application.queries import GetUserCertificateQuery, SearchUserCertificatesQuery
from ....config import settings
from ....domain.exceptions import NotFound
from ...middleware.auth import AuthenticatedUser, require_admin, require_auth
from ..dependencies import (
    get_admin_upload_user_certificate_service,
    get_delete_user_certificates_service,
    get_search_user_certificates_query,
    get_submit_user_certificate_service,
    get_update_user_certificate_status_service,
    get_user_certificate_query,
)
from ..responses import SuccessResponse, success

router = APIRouter(prefix="/ucertificates", tags=["user-certificates"])


@router.post(
    "",
    response_model=SuccessResponse[CreatedUserCertificateDTO],
    status_code=status.HTTP_201_CREATED,
)
async def submit_certificate(
    dto: CreateUserCertificateDTO,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: SubmitUserCertificateUseCase = Depends(get_submit_user_certificate_service),
) -> dict:
    """Submit a certificate for admin review.

    Security: With authentication enabled the owner is taken from the token.
    """
    if settings.auth_enabled:
        dto = dto.model_copy(update={"user_id": user.user_id})
    created = await use_case.execute(dto)
    return success("Certificate submitted successfully", created)


@router.post(
    "/create-by-admin",
    response_model=SuccessResponse[CreatedUserCertificateDTO],
    status_code=status.HTTP_201_CREATED,
)
async def create_certificate_by_admin(
    dto: AdminCreateUserCertificateDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: AdminUploadUserCertificateUseCase = Depends(get_admin_upload_user_certificate_service),
) -> dict:
    """Upload a certificate that is accepted immediately."""
    # Security: The verifier is always the authenticated admin
    dto = dto.model_copy(update={"admin_id": admin.user_id})
    created = await use_case.execute(dto)
    return success("Certificate created successfully", created)


@router.put("/update-status", response_model=SuccessResponse[UserCertificateResponseDTO])
async def update_status(
    dto: UpdateUserCertificateStatusDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: UpdateUserCertificateStatusUseCase = Depends(get_update_user_certificate_status_service),
) -> dict:
    dto = dto.model_copy(update={"admin_id": admin.user_id})
    updated = await use_case.execute(dto)
    return success("Certificate status updated successfully", updated)


@router.get("", response_model=SuccessResponse[list[UserCertificateResponseDTO]])
async def list_certificates(
    query: SearchUserCertificatesQuery = Depends(get_search_user_certificates_query),
) -> dict:
    results = await query.execute(UserCertificateSearchDTO())
    return success("Certificates retrieved successfully", results)


@router.get("/search", response_model=SuccessResponse[list[UserCertificateResponseDTO]])
async def search_certificates(
    criteria: Annotated[UserCertificateSearchDTO, Query()],
    query: SearchUserCertificatesQuery = Depends(get_search_user_certificates_query),
) -> dict:
    results = await query.execute(criteria)
    return success("Certificates retrieved successfully", results)


@router.delete("/delete-multiple", response_model=SuccessResponse[dict])
async def delete_multiple(
    dto: DeleteUserCertificatesDTO,
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: DeleteUserCertificatesUseCase = Depends(get_delete_user_certificates_service),
) -> dict:
    deleted = await use_case.execute(dto.user_certificate_ids)
    return success(f"{deleted} certificates deleted successfully", {"deleted": deleted})


@router.delete("/delete-all-rejected", response_model=SuccessResponse[dict])
async def delete_all_rejected(
    admin: Annotated[AuthenticatedUser, Depends(require_admin)],
    use_case: DeleteUserCertificatesUseCase = Depends(get_delete_user_certificates_service),
) -> dict:
    deleted = await use_case.execute_rejected()
    return success(f"{deleted} rejected certificates deleted successfully", {"deleted": deleted})


@router.get("/{user_certificate_id}", response_model=SuccessResponse[UserCertificateResponseDTO])
async def get_certificate(
    user_certificate_id: str,
    query: GetUserCertificateQuery = Depends(get_user_certificate_query),
) -> dict:
    result = await query.execute(user_certificate_id)
    if not result:
        raise NotFound("Certificate not found")
    return success("Certificate retrieved successfully", result)


@router.delete("/{user_certificate_id}", response_model=SuccessResponse[None])
async def delete_certificate(
    user_certificate_id: str,
    user: Annotated[AuthenticatedUser, Depends(require_auth)],
    use_case: DeleteUserCertificatesUseCase = Depends(get_delete_user_certificates_service),
) -> dict:
    await use_case.execute([user_certificate_id])
    return success("Certificate deleted successfully")
