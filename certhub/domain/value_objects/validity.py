from datetime import date
from enum import Enum


class ValidityStatus(str, Enum):
    VALID = "Valid"
    EXPIRED = "Expired"


def validity_of(expired_date: date | None, today: date) -> ValidityStatus:
    """A certificate without an expiry date never expires."""
    if expired_date is None or today <= expired_date:
        return ValidityStatus.VALID
    return ValidityStatus.EXPIRED
