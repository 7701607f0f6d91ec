from abc import ABC, abstractmethod


class CertificateNumberRegistry(ABC):
    """Lookup over the numbers stored by both certificate kinds."""

    @abstractmethod
    async def exists(self, certificate_number: str) -> bool:
        pass
