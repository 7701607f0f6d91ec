from .training_certificates import (
    GetTrainingCertificateQuery,
    MonthlyIssuanceQuery,
    SearchTrainingCertificatesQuery,
)
from .user_certificates import GetUserCertificateQuery, SearchUserCertificatesQuery

__all__ = [
    "GetTrainingCertificateQuery",
    "GetUserCertificateQuery",
    "MonthlyIssuanceQuery",
    "SearchTrainingCertificatesQuery",
    "SearchUserCertificatesQuery",
]
