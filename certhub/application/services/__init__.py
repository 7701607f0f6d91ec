from .admin_upload_user_certificate_service import AdminUploadUserCertificateService
from .certificate_number_service import CertificateNumberService
from .delete_training_certificate_service import DeleteTrainingCertificateService
from .delete_user_certificates_service import DeleteUserCertificatesService
from .graduation_reconciler import GraduationReconciler
from .issue_training_certificate_service import IssueTrainingCertificateService
from .submit_user_certificate_service import SubmitUserCertificateService
from .update_training_certificate_service import UpdateTrainingCertificateService
from .update_user_certificate_status_service import UpdateUserCertificateStatusService

__all__ = [
    "AdminUploadUserCertificateService",
    "CertificateNumberService",
    "DeleteTrainingCertificateService",
    "DeleteUserCertificatesService",
    "GraduationReconciler",
    "IssueTrainingCertificateService",
    "SubmitUserCertificateService",
    "UpdateTrainingCertificateService",
    "UpdateUserCertificateStatusService",
]
