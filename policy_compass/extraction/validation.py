"""Admission checks run before any page is read."""

from pathlib import PurePath

from policy_compass.extraction.exceptions import TooLargeError, TooSmallError, UnsupportedTypeError
from policy_compass.extraction.models import SourceDocument

PDF_MEDIA_TYPE = "application/pdf"
PDF_SIGNATURE = b"%PDF-"

_PDF_MEDIA_TYPES = frozenset({"application/pdf", "application/x-pdf"})
_GENERIC_BINARY_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})


def resolve_media_type(document: SourceDocument) -> str:
    """Resolve the document format via declared type, extension, then signature.

    Raises:
        UnsupportedTypeError: if none of the three checks identifies a PDF.
    """
    declared = document.media_type.split(";", 1)[0].strip().lower()
    if declared in _PDF_MEDIA_TYPES:
        return PDF_MEDIA_TYPE
    if PurePath(document.filename).suffix.lower() == ".pdf":
        return PDF_MEDIA_TYPE
    if declared in _GENERIC_BINARY_TYPES and document.content.lstrip()[:5] == PDF_SIGNATURE:
        return PDF_MEDIA_TYPE
    raise UnsupportedTypeError(
        f"Unsupported document type '{document.media_type or 'unknown'}'"
        f" for file '{document.filename or 'unnamed'}'"
    )


def check_size(document: SourceDocument, *, min_bytes: int, max_bytes: int) -> None:
    """Raise TooSmallError / TooLargeError when outside [min_bytes, max_bytes]."""
    size = document.size_bytes
    if size == 0 or size < min_bytes:
        raise TooSmallError(f"Document is {size} bytes, minimum is {min_bytes}")
    if size > max_bytes:
        raise TooLargeError(f"Document is {size} bytes, maximum is {max_bytes}")
