class CertificateError(Exception):
    """Base class for failures raised by the certificate core."""

    default_message = "Certificate operation failed"

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class InvalidInput(CertificateError):
    """Missing field or wrongly shaped value; the caller may resubmit."""

    default_message = "Invalid input"


class PreconditionFailed(CertificateError):
    """A business rule gate was not met."""

    default_message = "Precondition failed"


class NotFound(CertificateError):
    default_message = "Resource not found"


class Conflict(CertificateError):
    """Duplicate certificate number."""

    default_message = "Another certificate with this number has already been validated"


class GenerationExhausted(CertificateError):
    """The unique number retry budget ran out."""

    default_message = "Unable to generate a unique certificate number"
