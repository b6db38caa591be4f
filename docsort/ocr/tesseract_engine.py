"""Tesseract OCR engine wrapper with scoped recognition sessions.

A session is opened per document, configured with a fixed language set
and page segmentation mode, and always terminated when the ``with``
block exits, including on errors.
"""

import io
from collections.abc import Iterator
from contextlib import contextmanager

import pytesseract
from PIL import Image

from docsort.utils.config import OCRConfig
from docsort.utils.logger import get_logger

logger = get_logger(__name__)

# Assume a single uniform block of text.
PSM_SINGLE_BLOCK = 6


class OCRSession:
    """A single recognition session bound to one language set and PSM.

    Args:
        lang: Tesseract language string, e.g. ``eng+hin``.
        psm: Tesseract page segmentation mode.
        timeout: Seconds before recognition is aborted, 0 for no limit.
    """

    def __init__(
        self, lang: str, psm: int = PSM_SINGLE_BLOCK, timeout: float = 0
    ) -> None:
        self.lang = lang
        self.psm = psm
        self.timeout = timeout
        self.terminated = False
        self._images: list[Image.Image] = []

    @property
    def config(self) -> str:
        return f"--psm {self.psm}"

    def recognize(self, image: Image.Image | bytes) -> str:
        """Run OCR over a whole image.

        Args:
            image: A PIL image, or encoded image bytes (PNG, JPEG, TIFF...).

        Returns:
            The recognized text, unmodified.

        Raises:
            RuntimeError: If the session was already terminated.
        """
        if self.terminated:
            raise RuntimeError("OCR session already terminated")

        if isinstance(image, bytes | bytearray):
            image = Image.open(io.BytesIO(image))
            self._images.append(image)

        text = pytesseract.image_to_string(
            image,
            lang=self.lang,
            config=self.config,
            timeout=self.timeout,
        )
        logger.debug("Recognized %d characters (lang=%s)", len(text), self.lang)
        return text

    def terminate(self) -> None:
        """Release everything the session opened. Safe to call twice."""
        if self.terminated:
            return
        self.terminated = True
        images, self._images = self._images, []
        for image in images:
            image.close()
        logger.debug("OCR session terminated")


class TesseractEngine:
    """Factory for scoped Tesseract recognition sessions.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        lang: Language set used by every session.
        psm: Page segmentation mode used by every session.
        timeout: Per-recognition timeout in seconds, 0 for none.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        lang: str = "eng+hin",
        psm: int = PSM_SINGLE_BLOCK,
        timeout: float = 0,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.lang = lang
        self.psm = psm
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: OCRConfig) -> "TesseractEngine":
        return cls(
            tesseract_cmd=config.tesseract_cmd,
            lang=config.lang,
            psm=config.psm,
            timeout=config.timeout,
        )

    @staticmethod
    def is_available() -> bool:
        """Check whether the Tesseract executable can be run."""
        try:
            pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError:
            return False
        return True

    @contextmanager
    def session(self) -> Iterator[OCRSession]:
        """Open a recognition session that is terminated on every exit path.

        Yields:
            A ready-to-use OCR session.

        Raises:
            pytesseract.TesseractNotFoundError: If Tesseract is not installed.
        """
        version = pytesseract.get_tesseract_version()
        session = OCRSession(self.lang, psm=self.psm, timeout=self.timeout)
        logger.debug(
            "Opened OCR session (tesseract %s, lang=%s, psm=%d)",
            version,
            self.lang,
            self.psm,
        )
        try:
            yield session
        finally:
            session.terminate()
