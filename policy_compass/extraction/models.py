import mimetypes
from dataclasses import dataclass
from pathlib import Path

PAGE_SEPARATOR = "\n\n--- Page Break ---\n\n"


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded file as received from the caller. Never persisted."""

    content: bytes
    media_type: str = ""
    filename: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, media_type: str | None = None) -> "SourceDocument":
        """Read a document from disk, guessing its media type from the suffix.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(content=path.read_bytes(), media_type=media_type, filename=path.name)


@dataclass(frozen=True)
class DocumentMetadata:
    title: str = "Untitled"
    author: str = "Unknown"
    created_at: str | None = None
    modified_at: str | None = None
    page_count: int = 0
    size_bytes: int = 0


@dataclass(frozen=True)
class ExtractedDocument:
    """Text, metadata and optional preview derived from one SourceDocument."""

    page_texts: tuple[str, ...]
    metadata: DocumentMetadata
    preview_png: bytes | None = None

    @property
    def text(self) -> str:
        """Page texts joined by PAGE_SEPARATOR, or "" when no page has text."""
        if self.is_empty:
            return ""
        return PAGE_SEPARATOR.join(self.page_texts)

    @property
    def page_count(self) -> int:
        return len(self.page_texts)

    @property
    def character_count(self) -> int:
        return sum(len(page) for page in self.page_texts)

    @property
    def word_count(self) -> int:
        return sum(len(page.split()) for page in self.page_texts)

    @property
    def is_empty(self) -> bool:
        return not any(page.strip() for page in self.page_texts)


@dataclass(frozen=True)
class ExtractionProgress:
    """One progress snapshot. The last snapshot of a run carries the document."""

    pages_done: int
    total_pages: int
    percent: int
    eta_seconds: float | None = None
    document: ExtractedDocument | None = None

    @property
    def finished(self) -> bool:
        return self.document is not None


@dataclass
class Liveness:
    """Flag a caller flips when it abandons an in-flight extraction."""

    alive: bool = True

    def abandon(self) -> None:
        self.alive = False
