"""PDF text extraction strategies.

Two interchangeable extractors are provided. ``DecodingPdfExtractor``
is the default and is only a placeholder: it decodes the raw file
bytes as text and performs no OCR, so scanned PDFs will come out as
noise and usually end up unclassified. ``RasterizingPdfExtractor``
renders pages with pdf2image and runs them through Tesseract; it is
opt-in through ``pdf.mode: rasterize`` because it needs poppler.
"""

import re
from abc import ABC, abstractmethod

from pdf2image import convert_from_bytes

from docsort.exceptions import ExtractionError
from docsort.utils.config import PDFConfig
from docsort.utils.logger import get_logger

from .tesseract_engine import TesseractEngine

logger = get_logger(__name__)

_NON_PRINTABLE = re.compile(r"[^\x20-\x7e\u00a0-\U0010ffff]")


class BasePdfExtractor(ABC):
    """Contract for PDF text extraction strategies."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract lowercase text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text, lowercased.

        Raises:
            ExtractionError: If extraction fails.
        """


class DecodingPdfExtractor(BasePdfExtractor):
    """Best-effort decode of the raw PDF bytes, without OCR.

    Control characters become single spaces; undecodable bytes are kept
    as replacement characters. Only text stored uncompressed in the file
    can ever match a keyword.
    """

    def extract(self, pdf_bytes: bytes) -> str:
        text = pdf_bytes.decode("utf-8", errors="replace")
        text = _NON_PRINTABLE.sub(" ", text).lower()
        logger.debug("Decoded %d bytes of PDF data without OCR", len(pdf_bytes))
        return text


class RasterizingPdfExtractor(BasePdfExtractor):
    """Render each PDF page to an image and OCR it.

    Args:
        engine: Engine providing the recognition session.
        dpi: Resolution for PDF rendering. Higher values produce
            better OCR results but use more memory.
    """

    def __init__(self, engine: TesseractEngine, dpi: int = 300) -> None:
        self.engine = engine
        self.dpi = dpi

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            pages = convert_from_bytes(pdf_bytes, dpi=self.dpi)
            logger.info("Converted PDF to %d images at %d DPI", len(pages), self.dpi)
            try:
                with self.engine.session() as session:
                    texts = [session.recognize(page) for page in pages]
            finally:
                for page in pages:
                    page.close()
        except Exception as exc:
            raise ExtractionError(f"PDF rasterization failed: {exc}") from exc
        return "\n".join(texts).lower()


def build_pdf_extractor(config: PDFConfig, engine: TesseractEngine) -> BasePdfExtractor:
    """Create the PDF extractor selected by ``config.mode``.

    Args:
        config: PDF configuration.
        engine: Engine used when pages are rasterized.

    Returns:
        The configured extractor.
    """
    if config.mode == "rasterize":
        return RasterizingPdfExtractor(engine, dpi=config.dpi)
    return DecodingPdfExtractor()
