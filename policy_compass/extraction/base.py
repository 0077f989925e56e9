from abc import ABC, abstractmethod
from collections.abc import Iterator
from types import TracebackType


class BasePdfDocument(ABC):
    """An open PDF handle. Use as a context manager."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def iter_page_texts(self) -> Iterator[str]:
        """Yield the plain text of each page, in page order.

        Raises:
            Exception: whatever the engine raises; the extractor translates it.
        """

    @abstractmethod
    def metadata(self) -> dict[str, str]:
        """Return raw document info with keys title, author, created, modified."""

    @abstractmethod
    def render_preview(self, scale: float) -> bytes | None:
        """Render the first page as PNG bytes at the given scale."""

    @abstractmethod
    def close(self) -> None:
        """Release engine resources."""

    def __enter__(self) -> "BasePdfDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfEngine(ABC):
    """Contract for all PDF engine adapters."""

    @abstractmethod
    def open(self, pdf_bytes: bytes) -> BasePdfDocument:
        """Open PDF bytes for page-by-page reading.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            An open document handle.

        Raises:
            CorruptOrEncryptedError: if the bytes cannot be opened or are
                password protected.
        """
