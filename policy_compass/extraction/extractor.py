"""Page-by-page PDF extraction with progress reporting.

Processing flow:
1. Admit the document (media type, then size bounds). No engine work happens
   before both checks pass.
2. Open it with the configured engine and read pages in order, yielding one
   ExtractionProgress per page with a remaining-time estimate.
3. Read metadata and render a preview, each independently optional.
4. Yield a final snapshot carrying the ExtractedDocument.
"""

import re
import time
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone

from policy_compass.extraction.base import BasePdfDocument, BasePdfEngine
from policy_compass.extraction.exceptions import CorruptOrEncryptedError, ExtractionError
from policy_compass.extraction.models import (
    DocumentMetadata,
    ExtractedDocument,
    ExtractionProgress,
    Liveness,
    SourceDocument,
)
from policy_compass.extraction.validation import check_size, resolve_media_type
from policy_compass.logging.logger import Log

ProgressCallback = Callable[[ExtractionProgress], None]

_PDF_DATE_RE = re.compile(
    r"^D:(?P<year>\d{4})(?P<month>\d{2})?(?P<day>\d{2})?"
    r"(?P<hour>\d{2})?(?P<minute>\d{2})?(?P<second>\d{2})?"
    r"(?P<tz>Z|[+\-]\d{2}'?\d{2}'?)?"
)


class DocumentExtractor:
    """Turns a SourceDocument into an ExtractedDocument.

    Holds no per-run state, so one instance serves concurrent extractions.
    """

    DEFAULT_MIN_BYTES = 1024
    DEFAULT_MAX_BYTES = 10 * 1024 * 1024

    def __init__(
        self,
        engine: BasePdfEngine,
        *,
        min_bytes: int = DEFAULT_MIN_BYTES,
        max_bytes: int = DEFAULT_MAX_BYTES,
        preview_scale: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._engine = engine
        self._min_bytes = max(1, min_bytes)
        self._max_bytes = max_bytes
        self._preview_scale = preview_scale
        self._clock = clock

    def extract(
        self,
        document: SourceDocument,
        on_progress: ProgressCallback | None = None,
        liveness: Liveness | None = None,
    ) -> ExtractedDocument:
        """Extract a document, delivering progress to an optional callback.

        Callback failures are logged and ignored. Once ``liveness`` is
        abandoned the callback is no longer invoked.

        Raises:
            ExtractionError: any of UnsupportedType, TooSmall, TooLarge,
                CorruptOrEncrypted.
        """
        for snapshot in self.iter_progress(document):
            if snapshot.document is not None:
                return snapshot.document
            if on_progress is None or (liveness is not None and not liveness.alive):
                continue
            try:
                on_progress(snapshot)
            except Exception as exc:
                Log.warning(f"Progress delivery failed: {exc}")
        raise ExtractionError("Extraction finished without producing a document")

    def iter_progress(self, document: SourceDocument) -> Iterator[ExtractionProgress]:
        """Yield progress snapshots; the last one carries the result."""
        resolve_media_type(document)
        check_size(document, min_bytes=self._min_bytes, max_bytes=self._max_bytes)
        Log.info(
            f"Extracting '{document.filename or 'unnamed'}' ({document.size_bytes} bytes)"
        )

        with self._engine.open(document.content) as pdf:
            page_texts: list[str] = []
            total_pages = 0
            started = self._clock()
            try:
                total_pages = pdf.page_count
                for text in pdf.iter_page_texts():
                    page_texts.append(text)
                    yield self._snapshot(len(page_texts), total_pages, started)
            except ExtractionError:
                raise
            except Exception as exc:
                raise CorruptOrEncryptedError(f"Text extraction failed: {exc}") from exc

            metadata = self._read_metadata(pdf, len(page_texts), document.size_bytes)
            preview = self._render_preview(pdf)

        extracted = ExtractedDocument(
            page_texts=tuple(page_texts),
            metadata=metadata,
            preview_png=preview,
        )
        Log.info(
            f"Extracted {extracted.character_count} chars from {extracted.page_count} pages"
        )
        if extracted.is_empty:
            Log.warning("Extracted document contains no text")
        yield ExtractionProgress(
            pages_done=len(page_texts),
            total_pages=total_pages,
            percent=100,
            eta_seconds=0.0,
            document=extracted,
        )

    def _snapshot(self, pages_done: int, total_pages: int, started: float) -> ExtractionProgress:
        percent = round(pages_done / total_pages * 100) if total_pages else 100
        elapsed = self._clock() - started
        remaining = max(total_pages - pages_done, 0)
        eta = elapsed / pages_done * remaining if pages_done else None
        return ExtractionProgress(
            pages_done=pages_done,
            total_pages=total_pages,
            percent=min(percent, 100),
            eta_seconds=eta,
        )

    def _read_metadata(
        self, pdf: BasePdfDocument, page_count: int, size_bytes: int
    ) -> DocumentMetadata:
        try:
            raw = pdf.metadata()
        except Exception as exc:
            Log.warning(f"Metadata extraction failed, using defaults: {exc}")
            return DocumentMetadata(page_count=page_count, size_bytes=size_bytes)
        return DocumentMetadata(
            title=raw.get("title") or "Untitled",
            author=raw.get("author") or "Unknown",
            created_at=parse_pdf_date(raw.get("created")),
            modified_at=parse_pdf_date(raw.get("modified")),
            page_count=page_count,
            size_bytes=size_bytes,
        )

    def _render_preview(self, pdf: BasePdfDocument) -> bytes | None:
        try:
            return pdf.render_preview(self._preview_scale)
        except Exception as exc:
            Log.warning(f"Preview generation failed: {exc}")
            return None


def parse_pdf_date(value: str | None) -> str | None:
    """Convert a PDF date string (D:YYYYMMDDHHmmSS+HH'mm') to ISO-8601.

    Empty values become None; anything unrecognised is returned unchanged.
    """
    if not value:
        return None
    match = _PDF_DATE_RE.match(value.strip())
    if match is None:
        return value
    parts = match.groupdict()
    try:
        moment = datetime(
            int(parts["year"]),
            int(parts["month"] or 1),
            int(parts["day"] or 1),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
            int(parts["second"] or 0),
            tzinfo=_parse_tz(parts["tz"]),
        )
    except ValueError:
        return value
    return moment.isoformat()


def _parse_tz(raw: str | None) -> timezone | None:
    if raw is None:
        return None
    if raw == "Z":
        return timezone.utc
    digits = raw[1:].replace("'", "")
    offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:4] or 0))
    return timezone(offset if raw[0] == "+" else -offset)
