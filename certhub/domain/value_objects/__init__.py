from .certificate_number import PLACEHOLDER, CertificateNumber, clean, is_placeholder
from .validity import ValidityStatus, validity_of

__all__ = [
    "PLACEHOLDER",
    "CertificateNumber",
    "ValidityStatus",
    "clean",
    "is_placeholder",
    "validity_of",
]
