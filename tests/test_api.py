"""Tests for the FastAPI REST endpoints."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from docsort.api.app import app
from docsort.categories import DEFAULT_CATEGORIES
from docsort.ocr.text_extractor import TextExtractor
from docsort.processor import DocumentProcessor
from docsort.utils.config import AppConfig


@pytest.fixture
def client() -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def processor(extractor: TextExtractor) -> Iterator[DocumentProcessor]:
    """Patch the API to use a processor backed by the mocked engine."""
    processor = DocumentProcessor(AppConfig(), extractor=extractor)
    with patch("docsort.api.app._get_processor", return_value=processor):
        yield processor


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    @patch("docsort.api.app.TesseractEngine.is_available", return_value=True)
    def test_health_returns_ok(self, _mock: MagicMock, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["tesseract_available"] is True

    @patch("docsort.api.app.TesseractEngine.is_available", return_value=False)
    def test_health_without_tesseract(
        self, _mock: MagicMock, client: TestClient
    ) -> None:
        response = client.get("/health")
        assert response.json()["tesseract_available"] is False


class TestCategoriesEndpoint:
    """Tests for the /categories endpoint."""

    @patch("docsort.api.app.load_config", return_value=AppConfig())
    def test_list_categories_in_order(
        self, _mock: MagicMock, client: TestClient
    ) -> None:
        response = client.get("/categories")
        assert response.status_code == 200
        categories = response.json()["categories"]
        assert [c["name"] for c in categories] == list(DEFAULT_CATEGORIES)
        assert categories[0]["keywords"] == DEFAULT_CATEGORIES["Aadhar"]


class TestClassifyEndpoint:
    """Tests for the /classify endpoint."""

    def test_classify_image(
        self,
        client: TestClient,
        processor: DocumentProcessor,
        mock_engine: MagicMock,
        png_bytes: bytes,
    ) -> None:
        mock_engine.recognize.return_value = "Government of India AADHAR"

        response = client.post(
            "/classify",
            files={"file": ("aadhar.png", png_bytes, "image/png")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["filename"] == "aadhar.png"
        assert data["category"] == "Aadhar"
        assert data["confidence"] == 1.0
        assert data["extracted_text"] == "government of india aadhar"
        assert data["processing_time_ms"] >= 0

    def test_classify_pdf(
        self, client: TestClient, processor: DocumentProcessor
    ) -> None:
        response = client.post(
            "/classify",
            files={"file": ("nptel.pdf", b"%PDF-1.4 NPTEL", "application/pdf")},
        )
        data = response.json()
        assert data["category"] == "NPTEL"
        assert data["confidence"] == 1.0

    def test_classify_unmatched(
        self,
        client: TestClient,
        processor: DocumentProcessor,
        mock_engine: MagicMock,
        png_bytes: bytes,
    ) -> None:
        mock_engine.recognize.return_value = "grocery list"

        response = client.post(
            "/classify",
            files={"file": ("list.png", png_bytes, "image/png")},
        )
        data = response.json()
        assert data["category"] == "Unclassified"
        assert data["confidence"] == 0.0
        assert data["extracted_text"] == "grocery list"

    def test_unsupported_type_is_unclassified(
        self, client: TestClient, processor: DocumentProcessor, mock_engine: MagicMock
    ) -> None:
        response = client.post(
            "/classify",
            files={"file": ("notes.txt", b"aadhar", "text/plain")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Unclassified"
        assert data["extracted_text"] == ""
        mock_engine.session.assert_not_called()

    def test_engine_failure_is_not_http_error(
        self,
        client: TestClient,
        processor: DocumentProcessor,
        mock_engine: MagicMock,
        png_bytes: bytes,
    ) -> None:
        mock_engine.recognize.side_effect = RuntimeError("engine crashed")

        response = client.post(
            "/classify",
            files={"file": ("scan.png", png_bytes, "image/png")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Unclassified"
        assert data["confidence"] == 0.0
        assert data["extracted_text"] == "Error processing document"

    def test_missing_file(self, client: TestClient) -> None:
        response = client.post("/classify")
        assert response.status_code == 422


class TestBatchClassifyEndpoint:
    """Tests for the /classify/batch endpoint."""

    def test_batch_classify(
        self,
        client: TestClient,
        processor: DocumentProcessor,
        mock_engine: MagicMock,
    ) -> None:
        texts = {b"one": "UIDAI", b"two": "CGPA 9.0", b"three": "shopping"}
        mock_engine.recognize.side_effect = lambda content: texts[content]

        response = client.post(
            "/classify/batch",
            files=[
                ("files", ("one.png", b"one", "image/png")),
                ("files", ("two.png", b"two", "image/png")),
                ("files", ("three.png", b"three", "image/png")),
            ],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_documents"] == 3
        assert data["classified"] == 2
        assert data["unclassified"] == 1
        assert data["failed"] == 0
        assert [item["filename"] for item in data["results"]] == [
            "one.png",
            "two.png",
            "three.png",
        ]
        assert [item["result"]["category"] for item in data["results"]] == [
            "Aadhar",
            "Semester Marksheets",
            "Unclassified",
        ]

    def test_batch_with_failure(
        self,
        client: TestClient,
        processor: DocumentProcessor,
        mock_engine: MagicMock,
    ) -> None:
        def recognize(content: bytes) -> str:
            if content == b"broken":
                raise RuntimeError("unreadable")
            return "ssc marksheet"

        mock_engine.recognize.side_effect = recognize

        response = client.post(
            "/classify/batch",
            files=[
                ("files", ("ok.png", b"ok", "image/png")),
                ("files", ("broken.png", b"broken", "image/png")),
            ],
        )
        data = response.json()
        assert data["classified"] == 1
        assert data["failed"] == 1
        assert data["unclassified"] == 0
        assert data["results"][1]["result"]["extracted_text"] == (
            "Error processing document"
        )
