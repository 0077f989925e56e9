from policy_compass.config.settings import Settings
from policy_compass.extraction.base import BasePdfEngine
from policy_compass.extraction.pdfplumber_adapter import PdfPlumberAdapter
from policy_compass.extraction.pymupdf_adapter import PyMuPdfAdapter


class PdfEngineFactory:
    """Creates the correct PDF engine based on settings."""

    ADAPTERS: dict[str, type[BasePdfEngine]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfEngine:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
