import io
from collections.abc import Iterator

import pdfplumber

from policy_compass.extraction.base import BasePdfDocument, BasePdfEngine
from policy_compass.extraction.exceptions import CorruptOrEncryptedError

_BASE_RESOLUTION = 72


class PdfPlumberDocument(BasePdfDocument):
    def __init__(self, pdf: pdfplumber.PDF) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def iter_page_texts(self) -> Iterator[str]:
        for page in self._pdf.pages:
            yield page.extract_text() or ""

    def metadata(self) -> dict[str, str]:
        info = self._pdf.metadata or {}
        return {
            "title": _as_text(info.get("Title")),
            "author": _as_text(info.get("Author")),
            "created": _as_text(info.get("CreationDate")),
            "modified": _as_text(info.get("ModDate")),
        }

    def render_preview(self, scale: float) -> bytes | None:
        if not self._pdf.pages:
            return None
        image = self._pdf.pages[0].to_image(resolution=int(_BASE_RESOLUTION * scale))
        buf = io.BytesIO()
        image.original.save(buf, format="PNG")
        return buf.getvalue()

    def close(self) -> None:
        self._pdf.close()


class PdfPlumberAdapter(BasePdfEngine):
    """Reads PDFs using pdfplumber."""

    def open(self, pdf_bytes: bytes) -> BasePdfDocument:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise CorruptOrEncryptedError(f"pdfplumber could not open document: {exc}") from exc
        return PdfPlumberDocument(pdf)


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    return str(value).strip()
