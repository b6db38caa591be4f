"""Shared test fixtures for the document sorter test suite."""

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from docsort.categories import CategoryTable
from docsort.ocr.pdf_handler import DecodingPdfExtractor
from docsort.ocr.text_extractor import TextExtractor


@pytest.fixture
def png_bytes() -> bytes:
    """Encode a small blank PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (300, 200), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def category_table() -> CategoryTable:
    """Return the built-in category table."""
    return CategoryTable.default()


@pytest.fixture
def mock_engine() -> MagicMock:
    """Create an engine whose sessions recognize a fixed text.

    Set ``mock_engine.recognize.return_value`` or ``side_effect`` to
    control what the session returns.
    """
    engine = MagicMock()
    session = engine.session.return_value.__enter__.return_value
    engine.recognize = session.recognize
    engine.recognize.return_value = ""
    return engine


@pytest.fixture
def extractor(mock_engine: MagicMock) -> TextExtractor:
    """Create a text extractor backed by the mocked engine."""
    return TextExtractor(mock_engine, DecodingPdfExtractor())


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
