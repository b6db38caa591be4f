"""FastAPI application for the document sorter.

Provides REST endpoints for single and batch document classification,
category listing, and health checks.
"""

import time
from typing import Annotated

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from docsort import __version__
from docsort.models import DEFAULT_CONTENT_TYPE, DocumentBlob, ProcessingResult
from docsort.ocr.tesseract_engine import TesseractEngine
from docsort.processor import DocumentProcessor
from docsort.utils.config import load_config
from docsort.utils.logger import get_logger

from .schemas import (
    BatchClassificationResponse,
    BatchItemResponse,
    CategoriesResponse,
    CategoryInfo,
    ClassificationResponse,
    HealthResponse,
)

logger = get_logger(__name__)

app = FastAPI(
    title="Document Sorter API",
    description="Classify identity documents, marksheets and certificates by OCR",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_processor() -> DocumentProcessor:
    """Build a document processor from the current configuration."""
    return DocumentProcessor(load_config())


async def _read_blob(file: UploadFile) -> DocumentBlob:
    return DocumentBlob(
        name=file.filename or "document",
        declared_type=file.content_type or DEFAULT_CONTENT_TYPE,
        content=await file.read(),
    )


def _to_response(
    blob: DocumentBlob, result: ProcessingResult, started: float
) -> ClassificationResponse:
    return ClassificationResponse(
        filename=blob.name,
        category=result.category,
        confidence=result.confidence,
        extracted_text=result.extracted_text,
        processing_time_ms=(time.time() - started) * 1000,
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        tesseract_available=TesseractEngine.is_available(),
    )


@app.get("/categories", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    """List the configured categories in match order."""
    table = load_config().category_table()
    return CategoriesResponse(
        categories=[
            CategoryInfo(name=c.name, keywords=list(c.keywords)) for c in table
        ]
    )


@app.post("/classify", response_model=ClassificationResponse)
async def classify_document(
    file: Annotated[UploadFile, File(...)],
) -> ClassificationResponse:
    """Classify an uploaded document.

    Unsupported file types and OCR failures are not HTTP errors; they
    come back as ``Unclassified`` with confidence 0.

    Args:
        file: Uploaded document (image or PDF).

    Returns:
        Category, confidence and extracted text.
    """
    started = time.time()
    processor = _get_processor()
    blob = await _read_blob(file)
    result = await processor.process_async(blob)
    return _to_response(blob, result, started)


@app.post("/classify/batch", response_model=BatchClassificationResponse)
async def classify_batch(
    files: Annotated[list[UploadFile], File(...)],
) -> BatchClassificationResponse:
    """Classify several uploaded documents concurrently.

    Args:
        files: List of uploaded documents.

    Returns:
        Per-file results with classified, unclassified and failed counts.
    """
    started = time.time()
    processor = _get_processor()
    blobs = [await _read_blob(f) for f in files]
    results = await processor.process_many(blobs)

    items = [
        BatchItemResponse(filename=blob.name, result=_to_response(blob, r, started))
        for blob, r in zip(blobs, results, strict=True)
    ]
    classified = sum(1 for r in results if r.is_classified)
    failed = sum(1 for r in results if r.is_error)

    logger.info("Batch of %d documents: %d classified", len(blobs), classified)
    return BatchClassificationResponse(
        total_documents=len(blobs),
        classified=classified,
        unclassified=len(blobs) - classified - failed,
        failed=failed,
        results=items,
    )
