"""Human-readable identifiers for certificates.

Record ids combine a prefix, a local-time stamp and a short random suffix and
are not checked for uniqueness. Certificate numbers are short enough to be
typed by hand, so candidates are verified against storage before use.
"""

import secrets
import string
from collections.abc import Awaitable, Callable
from datetime import datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

from .exceptions import GenerationExhausted

DEFAULT_TIMEZONE = ZoneInfo("Asia/Jakarta")

TRAINING_CERTIFICATE_PREFIX = "CERT"
USER_CERTIFICATE_PREFIX = "UCRT"

NUMBER_ALPHABET = string.digits + string.ascii_uppercase
NUMBER_RANDOM_LENGTH = 6
NUMBER_LENGTH = 4 + NUMBER_RANDOM_LENGTH
DEFAULT_MAX_ATTEMPTS = 50


def _local(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(DEFAULT_TIMEZONE)
    return now


def generate_id(prefix: str, now: datetime | None = None) -> str:
    """Build ``{prefix}-{YYYYMMDDHHMM}-{XXXXXX}`` from local time."""
    stamp = _local(now).strftime("%Y%m%d%H%M")
    suffix = uuid4().hex[:6].upper()
    return f"{prefix}-{stamp}-{suffix}"


def generate_number(now: datetime | None = None) -> str:
    """Draw a 10 character candidate: ``YYMM`` plus 6 random base-36 chars."""
    period = _local(now).strftime("%y%m")
    random_part = "".join(secrets.choice(NUMBER_ALPHABET) for _ in range(NUMBER_RANDOM_LENGTH))
    return period + random_part


async def generate_unique_number(
    exists: Callable[[str], Awaitable[bool]],
    now: datetime | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Draw candidates until ``exists`` reports no stored match.

    Raises:
        GenerationExhausted: every one of ``max_attempts`` candidates was taken
    """
    for _ in range(max_attempts):
        candidate = generate_number(now)
        if not await exists(candidate):
            return candidate
    raise GenerationExhausted(detail=f"No free certificate number after {max_attempts} attempts")
