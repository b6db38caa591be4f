"""Pydantic request/response schemas for the FastAPI endpoints."""

from pydantic import BaseModel, Field


class ClassificationResponse(BaseModel):
    """Response schema for a single classified document."""

    filename: str
    category: str
    confidence: float = Field(ge=0.0, le=1.0)
    extracted_text: str
    processing_time_ms: float


class BatchItemResponse(BaseModel):
    """Response schema for a single item in a batch classification."""

    filename: str
    result: ClassificationResponse


class BatchClassificationResponse(BaseModel):
    """Response schema for batch classification of multiple documents."""

    total_documents: int
    classified: int
    unclassified: int
    failed: int
    results: list[BatchItemResponse]


class CategoryInfo(BaseModel):
    """A configured category and its keywords, in match order."""

    name: str
    keywords: list[str]


class CategoriesResponse(BaseModel):
    """Response schema listing the category table in match order."""

    categories: list[CategoryInfo]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
