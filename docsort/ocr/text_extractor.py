"""Text extraction dispatched on the kind of document."""

from enum import StrEnum

from docsort.exceptions import ExtractionError
from docsort.utils.config import AppConfig
from docsort.utils.logger import get_logger

from .pdf_handler import BasePdfExtractor, DecodingPdfExtractor, build_pdf_extractor
from .tesseract_engine import TesseractEngine

logger = get_logger(__name__)


class DocumentKind(StrEnum):
    """Input kinds the extractor knows how to handle."""

    IMAGE = "image"
    PDF = "pdf"
    OTHER = "other"

    @classmethod
    def from_declared_type(cls, declared_type: str | None) -> "DocumentKind":
        """Map a MIME-style content type to a document kind.

        Case, surrounding whitespace and parameters such as ``; charset=``
        are ignored.

        Args:
            declared_type: Content type reported for the upload.

        Returns:
            IMAGE for ``image/*``, PDF for ``application/pdf``, else OTHER.
        """
        mime = (declared_type or "").split(";", 1)[0].strip().lower()
        if mime == "application/pdf":
            return cls.PDF
        if mime.startswith("image/"):
            return cls.IMAGE
        return cls.OTHER


class TextExtractor:
    """Produces lowercase text from document bytes.

    Args:
        engine: OCR engine used for images.
        pdf_extractor: Strategy used for PDFs. Defaults to the
            placeholder byte decoder.
    """

    def __init__(
        self,
        engine: TesseractEngine,
        pdf_extractor: BasePdfExtractor | None = None,
    ) -> None:
        self.engine = engine
        self.pdf_extractor = pdf_extractor or DecodingPdfExtractor()

    @classmethod
    def from_config(cls, config: AppConfig) -> "TextExtractor":
        engine = TesseractEngine.from_config(config.ocr)
        return cls(engine, build_pdf_extractor(config.pdf, engine))

    def extract(self, content: bytes, kind: DocumentKind) -> str:
        """Extract text from a document of the given kind.

        Args:
            content: Raw document bytes.
            kind: Normalized document kind.

        Returns:
            Lowercase text. Empty for unsupported kinds.

        Raises:
            ExtractionError: If recognition fails.
        """
        if kind is DocumentKind.IMAGE:
            return self.extract_image(content)
        if kind is DocumentKind.PDF:
            return self.pdf_extractor.extract(content)
        logger.warning("Unsupported document kind %s, nothing to extract", kind)
        return ""

    def extract_image(self, content: bytes) -> str:
        """OCR a full image inside a single engine session.

        The session is terminated before any error is raised.

        Args:
            content: Encoded image bytes.

        Returns:
            Recognized text, lowercased.

        Raises:
            ExtractionError: If the session cannot be opened, recognition
                fails or the session fails to terminate.
        """
        try:
            with self.engine.session() as session:
                text = session.recognize(content)
        except Exception as exc:
            raise ExtractionError(f"Image recognition failed: {exc}") from exc
        return text.lower()
