import re
from dataclasses import dataclass

PLACEHOLDER = "-"
MAX_PLACEHOLDER_LENGTH = 2

_QUOTES = ("'", '"')
_UNSAFE_CHARACTERS = re.compile(r"[^A-Za-z0-9\-]")
_STORED_FORM = re.compile(r"[A-Za-z0-9_\-]+")


@dataclass(frozen=True)
class CertificateNumber:
    """Immutable stored number plus the human-entered value it came from.

    ``original`` is only set when it differs from ``value``: either the raw
    text before sanitizing, or ``"-"`` for a generated number.
    """

    value: str
    original: str | None = None

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Certificate number cannot be empty")
        if not _STORED_FORM.fullmatch(self.value):
            raise ValueError("Certificate number must be URL-safe")

    @property
    def generated(self) -> bool:
        return self.original == PLACEHOLDER

    @classmethod
    def from_generated(cls, value: str) -> "CertificateNumber":
        return cls(value=value, original=PLACEHOLDER)

    @classmethod
    def sanitize(cls, raw: str) -> "CertificateNumber":
        """Replace every character outside ``[A-Za-z0-9-]`` with ``_``."""
        cleaned = clean(raw)
        value = _UNSAFE_CHARACTERS.sub("_", cleaned)
        return cls(value=value, original=cleaned if value != cleaned else None)


def clean(raw: str) -> str:
    """Trim whitespace and one layer of matching surrounding quotes."""
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1].strip()
    return value


def is_placeholder(raw: str) -> bool:
    """True for ``"-"`` and anything too short to be a real number."""
    value = clean(raw)
    return value == PLACEHOLDER or len(value) <= MAX_PLACEHOLDER_LENGTH
