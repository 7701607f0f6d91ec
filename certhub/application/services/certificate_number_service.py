from datetime import datetime, tzinfo

import structlog

from ...domain.exceptions import Conflict, GenerationExhausted
from ...domain.identifiers import DEFAULT_MAX_ATTEMPTS, DEFAULT_TIMEZONE, generate_unique_number
from ...domain.value_objects import CertificateNumber, is_placeholder
from ..ports.outbound import CertificateNumberRegistry

logger = structlog.get_logger()


class CertificateNumberService:
    """Turns caller-supplied certificate numbers into stored ones.

    Placeholders (``"-"`` or two characters or fewer) are replaced by a
    freshly generated number that no certificate of either kind uses yet.
    Anything else is sanitized to a URL-safe form.
    """

    def __init__(
        self,
        registry: CertificateNumberRegistry,
        tz: tzinfo = DEFAULT_TIMEZONE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._registry = registry
        self._tz = tz
        self._max_attempts = max_attempts

    async def generate(self) -> str:
        try:
            return await generate_unique_number(
                self._registry.exists,
                now=datetime.now(self._tz),
                max_attempts=self._max_attempts,
            )
        except GenerationExhausted:
            logger.error("Certificate number generation exhausted", max_attempts=self._max_attempts)
            raise

    async def normalize(self, raw: str) -> CertificateNumber:
        if is_placeholder(raw):
            return CertificateNumber.from_generated(await self.generate())
        return CertificateNumber.sanitize(raw)

    async def claim(self, raw: str | None) -> CertificateNumber:
        """Normalize ``raw`` and require it to be unused in both tables.

        Used where numbers must be globally unique regardless of status.
        """
        if raw is None:
            return CertificateNumber.from_generated(await self.generate())

        number = await self.normalize(raw)
        if not number.generated and await self._registry.exists(number.value):
            logger.warning("Certificate number already in use", certificate_number=number.value)
            raise Conflict("Certificate number is already in use")
        return number
