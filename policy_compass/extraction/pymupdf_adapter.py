from collections.abc import Iterator

import pymupdf

from policy_compass.extraction.base import BasePdfDocument, BasePdfEngine
from policy_compass.extraction.exceptions import CorruptOrEncryptedError


class PyMuPdfDocument(BasePdfDocument):
    def __init__(self, doc: pymupdf.Document) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def iter_page_texts(self) -> Iterator[str]:
        for page in self._doc:
            yield page.get_text()

    def metadata(self) -> dict[str, str]:
        info = self._doc.metadata or {}
        return {
            "title": (info.get("title") or "").strip(),
            "author": (info.get("author") or "").strip(),
            "created": (info.get("creationDate") or "").strip(),
            "modified": (info.get("modDate") or "").strip(),
        }

    def render_preview(self, scale: float) -> bytes | None:
        if self._doc.page_count == 0:
            return None
        pixmap = self._doc[0].get_pixmap(matrix=pymupdf.Matrix(scale, scale))
        return pixmap.tobytes("png")

    def close(self) -> None:
        self._doc.close()


class PyMuPdfAdapter(BasePdfEngine):
    """Reads PDFs using PyMuPDF."""

    def open(self, pdf_bytes: bytes) -> BasePdfDocument:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise CorruptOrEncryptedError(f"pymupdf could not open document: {exc}") from exc
        if doc.needs_pass:
            doc.close()
            raise CorruptOrEncryptedError("Document is password protected")
        return PyMuPdfDocument(doc)
