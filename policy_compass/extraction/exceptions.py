from typing import ClassVar

from policy_compass.errors import PolicyCompassError


class ExtractionError(PolicyCompassError):
    """Base exception for all document extraction errors."""


class UnsupportedTypeError(ExtractionError):
    """Raised when a document does not resolve to a supported format."""

    code: ClassVar[str] = "unsupported-type"


class TooSmallError(ExtractionError):
    """Raised when a document is below the minimum size."""

    code: ClassVar[str] = "too-small"


class TooLargeError(ExtractionError):
    """Raised when a document exceeds the maximum size."""

    code: ClassVar[str] = "too-large"


class CorruptOrEncryptedError(ExtractionError):
    """Raised when the PDF engine cannot read page text."""

    code: ClassVar[str] = "corrupt-or-encrypted"
