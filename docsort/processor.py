"""Document classification pipeline.

Runs text extraction followed by keyword classification and folds
every failure into a single degraded result, so callers always get a
well-formed ``ProcessingResult`` back.
"""

import asyncio
import contextlib
from collections.abc import Iterable

from docsort.categories import CategoryTable
from docsort.classifier import KeywordClassifier
from docsort.models import DocumentBlob, ProcessingResult
from docsort.ocr.text_extractor import DocumentKind, TextExtractor
from docsort.utils.config import AppConfig
from docsort.utils.logger import get_logger, preview

logger = get_logger(__name__)


class DocumentProcessor:
    """Extracts text from a document and assigns it a category.

    Args:
        config: Application configuration object.
        table: Category table. Defaults to the configured categories.
        extractor: Text extractor. Defaults to one built from ``config``.
    """

    def __init__(
        self,
        config: AppConfig,
        table: CategoryTable | None = None,
        extractor: TextExtractor | None = None,
    ) -> None:
        self.config = config
        self.table = table if table is not None else config.category_table()
        self.classifier = KeywordClassifier(self.table)
        self.extractor = (
            extractor if extractor is not None else TextExtractor.from_config(config)
        )

    def process(self, blob: DocumentBlob) -> ProcessingResult:
        """Classify a document, blocking until extraction completes.

        Args:
            blob: Document to classify.

        Returns:
            The classification result. Never raises for document errors.
        """
        logger.info("Processing: %s", blob.name)
        try:
            kind = DocumentKind.from_declared_type(blob.declared_type)
            text = self.extractor.extract(blob.content, kind)
            return self._classify(blob, text)
        except Exception as exc:
            return self._failed(blob, exc)

    async def process_async(self, blob: DocumentBlob) -> ProcessingResult:
        """Classify a document without blocking the event loop.

        Extraction runs in a worker thread; classification runs on the
        loop once the text is available.

        Args:
            blob: Document to classify.

        Returns:
            The classification result. Never raises for document errors.
        """
        logger.info("Processing: %s", blob.name)
        try:
            kind = DocumentKind.from_declared_type(blob.declared_type)
            text = await self._extract_in_thread(blob.content, kind)
            return self._classify(blob, text)
        except Exception as exc:
            return self._failed(blob, exc)

    async def _extract_in_thread(self, content: bytes, kind: DocumentKind) -> str:
        """Run extraction in a worker thread.

        If the caller is cancelled, the worker is allowed to finish and
        release its engine session before the cancellation propagates.
        """
        work = asyncio.ensure_future(
            asyncio.to_thread(self.extractor.extract, content, kind)
        )
        try:
            return await asyncio.shield(work)
        except asyncio.CancelledError:
            logger.info("Extraction cancelled, waiting for the worker to finish")
            with contextlib.suppress(Exception):
                await asyncio.shield(work)
            raise

    async def process_many(
        self, blobs: Iterable[DocumentBlob]
    ) -> list[ProcessingResult]:
        """Classify several documents concurrently.

        Args:
            blobs: Documents to classify.

        Returns:
            Results in the same order as ``blobs``.
        """
        return list(await asyncio.gather(*(self.process_async(b) for b in blobs)))

    def _classify(self, blob: DocumentBlob, text: str) -> ProcessingResult:
        logger.info("OCR preview for %s: %s", blob.name, preview(text))
        category = self.classifier.classify(text)
        if category is None:
            logger.info("Could not classify: %s -> Unclassified", blob.name)
            return ProcessingResult.unmatched(text)

        logger.info("Classified %s as: %s", blob.name, category)
        return ProcessingResult.matched(category, text)

    def _failed(self, blob: DocumentBlob, exc: Exception) -> ProcessingResult:
        logger.error("Error reading %s: %s", blob.name, exc)
        return ProcessingResult.failed()
